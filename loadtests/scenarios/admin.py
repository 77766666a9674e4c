"""Admin desk load test scenario.

Operators sign in once, then poll the order list, move orders along and
download the CSV export. Credentials come from ``LOADTEST_ADMIN_EMAIL`` and
``LOADTEST_ADMIN_PASSWORD``.
"""

import os
import random

from locust import HttpUser, between, task

from loadtests.data_generators import next_status
from loadtests.helpers.state import AdminState


class AdminDeskUser(HttpUser):
    wait_time = between(1.0, 3.0)
    weight = 1

    def on_start(self):
        self.state = AdminState()
        with self.client.post(
            "/admin/session",
            json={
                "email": os.getenv("LOADTEST_ADMIN_EMAIL", "desk@arduinodayph.org"),
                "password": os.getenv("LOADTEST_ADMIN_PASSWORD", "change-me"),
            },
            catch_response=True,
            name="POST /admin/session",
        ) as resp:
            if resp.status_code == 200:
                self.state.access_token = resp.json()["access_token"]
            else:
                resp.failure(f"Admin sign-in failed: {resp.status_code}")

    def on_stop(self):
        if self.state.access_token:
            self.client.delete("/admin/session", headers=self._headers(), name="DELETE /admin/session")

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.state.access_token}"}

    @task(5)
    def list_orders(self):
        if not self.state.access_token:
            return
        with self.client.get(
            "/api/admin/orders", headers=self._headers(), catch_response=True, name="GET /api/admin/orders"
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids = [order["id"] for order in resp.json()["orders"]]
            else:
                resp.failure(f"List orders failed: {resp.status_code}")

    @task(2)
    def advance_order(self):
        if not self.state.order_ids:
            return
        self.client.patch(
            "/api/admin/orders",
            json={"id": random.choice(self.state.order_ids), "status": next_status()},
            headers=self._headers(),
            name="PATCH /api/admin/orders",
        )

    @task(1)
    def export_csv(self):
        if not self.state.access_token:
            return
        self.client.get(
            "/api/admin/orders.csv",
            params={"status": random.choice(["all", "pending", "paid"])},
            headers=self._headers(),
            name="GET /api/admin/orders.csv",
        )
