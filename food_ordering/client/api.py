"""
Thin HTTP client for the ordering API
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from food_ordering.client.cart import Cart

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str, placed: Optional[List[Dict[str, Any]]] = None):
        self.status_code = status_code
        self.message = message
        # Orders already created when a multi-restaurant submission failed
        self.placed = placed or []
        super().__init__(f"{status_code}: {message}")


class OrderingClient:
    """Wraps a requests-compatible session and the caller's bearer token"""

    def __init__(self, base_url: str = "http://localhost:8000", session=None, token: Optional[str] = None,
                 timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.token = token
        self.user: Optional[Dict[str, Any]] = None

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        kwargs.setdefault("timeout", self.timeout)
        response = self.session.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.text or "Request failed")
        return body

    # Authentication

    def _store_session(self, body: Dict[str, Any]) -> Dict[str, Any]:
        data = body["data"]
        self.token = data["access_token"]
        self.user = data["user"]
        return self.user

    def signup(self, email: str, password: str, name: str, country: str,
               role: Optional[str] = None, payment_method: Optional[str] = None) -> Dict[str, Any]:
        payload = {"email": email, "password": password, "name": name, "country": country}
        if role:
            payload["role"] = role
        if payment_method:
            payload["paymentMethod"] = payment_method
        return self._store_session(self._request("POST", "/auth/signup", json=payload))

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._store_session(body)

    def logout(self) -> None:
        self.token = None
        self.user = None

    def verify_token(self) -> Dict[str, Any]:
        return self._request("POST", "/auth/verify-token")["data"]

    # Catalog

    def restaurants(self, country: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {key: value for key, value in (("country", country), ("search", search)) if value}
        return self._request("GET", "/restaurants", params=params)

    def menu(self, restaurant_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/restaurants/{restaurant_id}/menu")

    # Orders

    def orders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/orders")

    def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/orders", json=payload)

    def checkout(self, order_id: int) -> Dict[str, Any]:
        return self._request("POST", f"/orders/{order_id}/checkout")

    def cancel(self, order_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/orders/{order_id}")

    def place_orders(self, cart: Cart, delivery_address: str, confirm: bool = False) -> List[Dict[str, Any]]:
        """Submit one order per restaurant in the cart.

        The cart is cleared only once every order went through; on the first
        failure the cart is left as it was and the error lists the orders
        that were already created.
        """
        if cart.is_empty():
            raise ValueError("cart is empty")

        placed = []
        for payload in cart.to_order_requests(delivery_address):
            try:
                order = self.create_order(payload)
                if confirm:
                    order = self.checkout(order["id"])
            except ApiError as exc:
                logger.warning(f"Order for restaurant {payload['restaurantId']} failed: {exc.message}")
                raise ApiError(exc.status_code, exc.message, placed=placed)
            placed.append(order)

        cart.clear()
        return placed

    # Payments

    def update_payment_method(self, payment_method: str) -> Dict[str, Any]:
        return self._request("PUT", "/payments/paymentMethod", json={"paymentMethod": payment_method})
