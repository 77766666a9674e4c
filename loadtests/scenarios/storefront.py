"""Storefront load test scenario.

A stateful SequentialTaskSet journey: browse the collection, pick items,
move them into the bag, adjust the bag and check out with a receipt. Steps
execute in order; each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_form, receipt_file, session_id
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Browse -> Select -> Add to bag -> Adjust -> Checkout."""

    def on_start(self):
        self.state = ShopperState(session_id=session_id())
        self.sizes = {}

    @task
    def browse_collection(self):
        with self.client.get("/merch", catch_response=True, name="GET /merch") as resp:
            items = resp.json().get("items", []) if resp.status_code == 200 else []
            if not items:
                resp.failure(f"Collection unavailable: {resp.status_code}")
                self.interrupt()
                return
            self.state.item_ids = [item["id"] for item in random.sample(items, k=min(2, len(items)))]
            self.sizes = {item["id"]: item["sizes"] for item in items}

    @task
    def pick_and_add(self):
        for item_id in self.state.item_ids:
            size = random.choice(self.sizes[item_id])
            self.client.put(
                f"/carts/{self.state.session_id}/selections/{item_id}",
                json={"quantity": random.randint(1, 3), "size": size},
                name="PUT /carts/{session}/selections/{item}",
            )
            with self.client.post(
                f"/carts/{self.state.session_id}/selections/{item_id}/add",
                catch_response=True,
                name="POST /carts/{session}/selections/{item}/add",
            ) as resp:
                if resp.status_code == 200:
                    self.state.bag_count = resp.json()["cart"]["count"]
                else:
                    resp.failure(f"Add to bag failed: {resp.status_code}")

    @task
    def adjust_bag(self):
        if random.random() < 0.3:
            self.client.put(
                f"/carts/{self.state.session_id}/lines/0",
                json={"quantity": random.randint(1, 4)},
                name="PUT /carts/{session}/lines/{index}",
            )
        self.client.get(f"/carts/{self.state.session_id}", name="GET /carts/{session}")

    @task
    def checkout(self):
        with self.client.post(
            f"/carts/{self.state.session_id}/checkout",
            data=checkout_form(),
            files=receipt_file(),
            catch_response=True,
            name="POST /carts/{session}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}")
        self.interrupt()


class StorefrontUser(HttpUser):
    """Shoppers browsing the collection and placing orders."""

    wait_time = between(0.5, 2.0)
    tasks = [ShopperJourney]
