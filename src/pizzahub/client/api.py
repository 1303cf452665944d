import logging
import uuid
from typing import List, Optional

import httpx

from pizzahub.client.checkout import CheckoutForm
from pizzahub.client.state import AppState

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class StorefrontClient:
    """
    HTTP-клиент витрины поверх httpx.Client.
    Токен берётся из AppState, после входа и заказа состояние сохраняется.

    Example:
        >>> state = AppState.restore(JsonFileStore("~/.pizzahub.json"))
        >>> client = StorefrontClient(httpx.Client(base_url="http://localhost:8000"), state)
        >>> client.login("user@example.com", "secret")
    """

    def __init__(self, http: httpx.Client, state: Optional[AppState] = None):
        self.http = http
        self.state = state or AppState()

    def _headers(self, auth: bool) -> dict:
        if auth and self.state.auth_token:
            return {"Authorization": f"Bearer {self.state.auth_token}"}
        return {}

    def _request(self, method: str, url: str, auth: bool = False, **kwargs):
        headers = {**self._headers(auth), **kwargs.pop("headers", {})}
        try:
            response = self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(0, "Server connection error") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase)
        return data

    def _signed_in(self, data: dict) -> dict:
        self.state.sign_in(data["token"], data["user"])
        self.state.save()
        return data["user"]

    def register(self, name: str, email: str, phone: str, password: str) -> dict:
        data = self._request(
            "POST", "/api/register", json={"name": name, "email": email, "phone": phone, "password": password}
        )
        return self._signed_in(data)

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/api/login", json={"email": email, "password": password})
        return self._signed_in(data)

    def logout(self) -> None:
        self.state.sign_out()
        self.state.save()

    def list_pizzas(self, category: str = "all") -> List[dict]:
        params = {"category": category} if category and category != "all" else None
        return self._request("GET", "/api/pizzas", params=params)

    def place_order(self, form: CheckoutForm, idempotency_key: Optional[str] = None) -> dict:
        """
        Отправляет корзину на оформление. При успехе корзина очищается.
        Один ключ идемпотентности на попытку: повторная отправка не создаст второй заказ.
        """
        if self.state.cart.is_empty():
            raise ApiError(400, "Cart is empty")

        payload = form.to_payload(self.state.cart)
        key = idempotency_key or uuid.uuid4().hex
        data = self._request("POST", "/api/orders", auth=True, json=payload, headers={"Idempotency-Key": key})

        self.state.cart.clear()
        self.state.save()
        return data

    def list_orders(self) -> List[dict]:
        return self._request("GET", "/api/orders", auth=True)

    def get_profile(self) -> dict:
        return self._request("GET", "/api/user", auth=True)

    def update_profile(self, **fields) -> dict:
        data = self._request("PUT", "/api/user", auth=True, json=fields)
        self.state.current_user = data["user"]
        self.state.save()
        return data["user"]

    def get_stats(self) -> dict:
        return self._request("GET", "/api/stats", auth=True)
