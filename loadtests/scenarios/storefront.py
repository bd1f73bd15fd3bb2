"""Storefront load test scenarios.

ShopperUser walks the whole purchase flow against products it seeds itself.
ContendedStockUser hammers a single low-stock product so concurrent
reservations compete for the same inventory.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    WEBHOOK_TEST_SIGNATURE,
    admin_headers,
    checkout_completed_event,
    product_data,
    shipping_address,
    shopper_headers,
    shopper_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class PurchaseJourney(SequentialTaskSet):
    """Seed products -> fill cart -> adjust quantities -> checkout -> pay (webhook)."""

    def on_start(self):
        self.state = ShopperState(user_id=shopper_id())
        self.headers = shopper_headers(self.state.user_id)

    @task
    def seed_products(self):
        for _ in range(2):
            with self.client.post(
                "/products",
                json=product_data(),
                headers=admin_headers(),
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.patch(
                f"/cart/add-product-to-cart/{product_id}",
                json={"quantity": 2},
                headers=self.headers,
                catch_response=True,
                name="PATCH /cart/add-product-to-cart/{id}",
            ) as resp:
                if resp.status_code != 201:
                    resp.failure(f"Add to cart failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def adjust_quantities(self):
        product_id = self.state.product_ids[0]
        self.client.patch(
            f"/cart/increment-product-in-cart/{product_id}",
            json={"increment_by": 1},
            headers=self.headers,
            name="PATCH /cart/increment-product-in-cart/{id}",
        )
        self.client.patch(
            f"/cart/decrement-product-in-cart/{product_id}",
            json={"decrement_by": 1},
            headers=self.headers,
            name="PATCH /cart/decrement-product-in-cart/{id}",
        )
        self.client.get("/cart/get-user-cart", headers=self.headers, name="GET /cart/get-user-cart")

    @task
    def checkout(self):
        with self.client.post(
            "/order/create-order",
            json=shipping_address(),
            headers=self.headers,
            catch_response=True,
            name="POST /order/create-order",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay(self):
        self.client.post(
            f"/payments/create-stripe-payment/{self.state.order_id}",
            headers=self.headers,
            name="POST /payments/create-stripe-payment/{id}",
        )
        with self.client.post(
            "/payments/webhook",
            data=checkout_completed_event(self.state.order_id),
            headers={"Stripe-Signature": WEBHOOK_TEST_SIGNATURE, "Content-Type": "application/json"},
            catch_response=True,
            name="POST /payments/webhook",
        ) as resp:
            if resp.status_code != 200 or resp.json().get("outcome") != "paid":
                resp.failure(f"Webhook not reconciled: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [PurchaseJourney]


class ContendedStockUser(HttpUser):
    """Many shoppers reserving and releasing the same scarce product."""

    wait_time = between(0.1, 0.5)
    product_id: str | None = None
    _seeding = False

    def on_start(self):
        self.user_id = shopper_id()
        # Only the first user to start seeds the product; the others wait for its id
        if not ContendedStockUser._seeding:
            ContendedStockUser._seeding = True
            resp = self.client.post("/products", json=product_data(quantity=20), headers=admin_headers())
            ContendedStockUser.product_id = resp.json()["product_id"]

    @task(3)
    def reserve(self):
        if ContendedStockUser.product_id is None:
            return
        with self.client.patch(
            f"/cart/add-product-to-cart/{ContendedStockUser.product_id}",
            headers=shopper_headers(self.user_id),
            catch_response=True,
            name="PATCH /cart/add-product-to-cart/{id} (contended)",
        ) as resp:
            # Running out of stock is the expected outcome under contention
            if resp.status_code in (201, 400):
                resp.success()

    @task(2)
    def release(self):
        if ContendedStockUser.product_id is None:
            return
        with self.client.patch(
            f"/cart/remove-product-from-cart/{ContendedStockUser.product_id}",
            headers=shopper_headers(self.user_id),
            catch_response=True,
            name="PATCH /cart/remove-product-from-cart/{id} (contended)",
        ) as resp:
            if resp.status_code in (200, 404):
                resp.success()
