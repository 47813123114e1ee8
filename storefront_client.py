"""Storefront API client.

A thin ``requests`` wrapper around the storefront HTTP API, for bots,
scripts and operator tooling.  Every method returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure ``data``
is ``None`` and ``error`` is a dict with ``status_code`` and
``message`` (the server's ``error`` text where available).

Customer flow::

    api = StorefrontAPI(base_url="http://localhost:3000")
    services, _ = api.list_services()
    created, _ = api.create_order("@player", services[0]["id"], services[0]["price"])
    api.confirm_payment(created["orderId"], "412345678901")

Back-office calls require :meth:`admin_login` first (or an ``api_key``
obtained from ``create_token.py``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class StorefrontAPI:
    """Client for the storefront API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api",
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server URL, e.g. ``http://localhost:3000``.
            prefix: Route prefix the server mounts its API under.
            api_key: Optional admin token sent as ``Authorization: Bearer``.
            session: Optional requests session.  Created if not supplied.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + prefix.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None, auth: bool = False) -> Result:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if auth and self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Storefront
    # ------------------------------------------------------------------
    def health(self) -> Result:
        return self._request("GET", "/health")

    def register(self, email: str, password: str) -> Result:
        return self._request("POST", "/auth/register", json_body={"email": email, "password": password})

    def login(self, email: str, password: str) -> Result:
        """Return ``{"success": True, "user": {"id", "email"}}`` on success."""
        return self._request("POST", "/auth/login", json_body={"email": email, "password": password})

    def list_services(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/services")
        return data or [], error

    def create_order(
        self, telegram_id: str, service_id: int, amount: int, user_id: Optional[int] = None
    ) -> Result:
        body = {"telegramId": telegram_id, "serviceId": service_id, "amount": amount, "userId": user_id}
        return self._request("POST", "/orders", json_body=body)

    def confirm_payment(self, order_id: str, utr: str) -> Result:
        return self._request("POST", "/orders/confirm", json_body={"orderId": order_id, "utr": utr})

    def get_order(self, order_id: str) -> Result:
        return self._request("GET", f"/orders/{order_id}")

    def list_user_orders(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/user/orders/{user_id}")
        return data or [], error

    def chat(self, message: str, history: Optional[List[Dict[str, Any]]] = None) -> Result:
        return self._request("POST", "/chat", json_body={"message": message, "history": history or []})

    # ------------------------------------------------------------------
    # Back office
    # ------------------------------------------------------------------
    def admin_login(self, admin_id: str, password: str) -> Result:
        """Sign in and keep the returned token for later admin calls."""
        data, error = self._request("POST", "/admin/login", json_body={"adminId": admin_id, "password": password})
        if data and data.get("token"):
            self.api_key = data["token"]
        return data, error

    def admin_list_orders(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/orders", auth=True)
        return data or [], error

    def admin_update_order(self, order_id: str, **fields: Any) -> Result:
        """Partial update; accepts ``telegramId``, ``amount``, ``utr`` and ``status``."""
        return self._request("PUT", f"/admin/orders/{order_id}", json_body=fields, auth=True)

    def admin_set_status(self, order_id: str, status: str) -> Result:
        return self._request("POST", "/orders/confirm", json_body={"orderId": order_id, "status": status}, auth=True)

    def admin_delete_order(self, order_id: str) -> Result:
        return self._request("DELETE", f"/admin/orders/{order_id}", auth=True)

    def admin_create_service(self, name: str, price: int, duration: str) -> Result:
        body = {"name": name, "price": price, "duration": duration}
        return self._request("POST", "/admin/services", json_body=body, auth=True)

    def admin_update_service(self, service_id: int, name: str, price: int, duration: str) -> Result:
        body = {"name": name, "price": price, "duration": duration}
        return self._request("PUT", f"/admin/services/{service_id}", json_body=body, auth=True)

    def admin_delete_service(self, service_id: int) -> Result:
        return self._request("DELETE", f"/admin/services/{service_id}", auth=True)
