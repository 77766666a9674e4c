"""Turn storefront and admin error responses into one-line failure messages.

Bodies seen from the merch API:

- FastAPI request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Checkout, cart and admin errors: {"error": "msg"}
- Domain validation mapped by Protean (400): {"error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL = 300


def _validation_detail(errors: list) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", []) if p != "body")
        parts.append(f"{loc}: {err.get('msg', err)}" if loc else str(err.get("msg", err)))
    return " | ".join(parts)


def _field_detail(errors: dict) -> str:
    return " | ".join(
        f"{name}: {', '.join(map(str, messages)) if isinstance(messages, list) else messages}"
        for name, messages in errors.items()
    )


def extract_error_detail(response: Response) -> str:
    """Best-effort summary of why a request failed, for Locust failure lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:MAX_DETAIL] or f"HTTP {response.status_code} with empty body"

    if not isinstance(body, dict):
        return str(body)[:MAX_DETAIL]
    if isinstance(body.get("detail"), list):
        return _validation_detail(body["detail"])

    error = body.get("error")
    if isinstance(error, dict):
        return _field_detail(error)
    if error:
        return str(error)
    return str(body)[:MAX_DETAIL]
