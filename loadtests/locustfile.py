"""Arduino Day PH merch load testing: Locust entry point.

Discovers all user classes from the scenarios package.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Storefront only:
    locust -f loadtests/locustfile.py StorefrontUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.admin import AdminDeskUser  # noqa: F401
from loadtests.scenarios.storefront import StorefrontUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "Receipt image must be under 5MB."
    instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    logger.info("[LOADTEST] %s against %s", time.strftime("%H:%M:%S"), environment.host)


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    total = environment.stats.total
    logger.info(
        "[LOADTEST] stopped at %s: %d requests, %d failures",
        time.strftime("%H:%M:%S"),
        total.num_requests,
        total.num_failures,
    )
