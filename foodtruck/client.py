"""
Python client for the Food Truck Manager API.

For scripts and integrations (a chat bot, a POS export job) that talk to a
running server over HTTP.

Environment variables read by `make_client_from_env`:
- FOODTRUCK_API_URL: e.g. "https://truck.local:3000"
- FOODTRUCK_API_USERNAME: username or email of an existing user
- FOODTRUCK_API_PASSWORD
- FOODTRUCK_API_TOKEN (optional): pre-seeded bearer token, otherwise we log in
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import requests


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SingletonCache:
    """Lazily loaded value, dropped by `invalidate()` after a write."""

    def __init__(self, loader: Callable[[], Any]):
        self._loader = loader
        self._value: Any = None
        self._loaded = False

    def get(self) -> Any:
        if not self._loaded:
            self._value = self._loader()
            self._loaded = True
        return self._value

    def invalidate(self) -> None:
        self._value = None
        self._loaded = False


@dataclass
class FoodTruckApiClient:
    base_url: str
    username: str
    password: str
    token: Optional[str] = None
    timeout: int = 30
    business_info: SingletonCache = field(init=False, repr=False)
    settings: SingletonCache = field(init=False, repr=False)

    def __post_init__(self):
        self.business_info = SingletonCache(lambda: self._request("GET", "/api/business-info"))
        self.settings = SingletonCache(lambda: self._request("GET", "/api/settings"))

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def login(self) -> str:
        """POST /api/login with username (or email) and password."""
        resp = requests.request(
            "POST",
            self._url("/api/login"),
            json={"username": self.username, "password": self.password},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        if resp.status_code >= 400:
            raise ApiError(f"Login failed ({resp.status_code}): {resp.text}", resp.status_code)
        token = resp.json().get("access_token")
        if not token:
            raise ApiError("Login response missing access_token")
        self.token = token
        return token

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        return requests.request(method, self._url(path), headers=self._headers(), timeout=self.timeout, **kwargs)

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.token:
            self.login()

        resp = self._send(method, path, json=json, params=params)
        # Token expired: log in again and retry once
        if resp.status_code == 401:
            self.login()
            resp = self._send(method, path, json=json, params=params)

        if resp.status_code >= 400:
            raise ApiError(f"{method} {path} failed ({resp.status_code}): {resp.text}", resp.status_code)
        if resp.status_code == 204:
            return None
        return resp.json()

    def _write(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            return self._request(method, path, json=json)
        finally:
            self.business_info.invalidate()
            self.settings.invalidate()

    # Generic resources

    def list(self, resource: str, **params) -> Any:
        return self._request("GET", f"/api/{resource}", params=params or None)

    def get(self, resource: str, item_id: int) -> Any:
        return self._request("GET", f"/api/{resource}/{item_id}")

    def create(self, resource: str, data: Dict[str, Any]) -> Any:
        return self._write("POST", f"/api/{resource}", json=data)

    def update(self, resource: str, item_id: int, data: Dict[str, Any]) -> Any:
        return self._write("PATCH", f"/api/{resource}/{item_id}", json=data)

    def delete(self, resource: str, item_id: int) -> Any:
        return self._write("DELETE", f"/api/{resource}/{item_id}")

    # Business info & settings

    def save_business_info(self, data: Dict[str, Any]) -> Any:
        return self._write("POST", "/api/business-info", json=data)

    def save_setting(self, key: str, value: Any) -> Any:
        return self._write("POST", "/api/settings", json={"key": key, "value": value})

    def save_settings(self, values: Dict[str, Any]) -> Any:
        return self._write("POST", "/api/settings/bulk", json=values)

    # Inventory ledger

    def adjust_stock(
        self,
        inventory_id: int,
        delta: float,
        *,
        change_type: str = "adjustment",
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Any:
        """Calls: POST /api/inventory/{id}/adjust. `used`/`waste` need a negative delta."""
        payload = {"delta": delta, "change_type": change_type, "reason": reason, "notes": notes}
        return self._write("POST", f"/api/inventory/{inventory_id}/adjust", json=payload)

    def record_waste(self, inventory_id: int, amount: float, *, reason: str = "Spoiled", notes: Optional[str] = None) -> Any:
        payload = {"inventory_id": inventory_id, "amount": amount, "reason": reason, "notes": notes}
        return self._write("POST", "/api/waste-log", json=payload)

    # Events & catering

    def archive_event(self, event_id: int) -> Any:
        return self._write("POST", f"/api/events/{event_id}/archive")

    def restore_event(self, archived_id: int) -> Any:
        return self._write("POST", f"/api/archived-events/{archived_id}/restore")


def make_client_from_env() -> FoodTruckApiClient:
    base_url = os.getenv("FOODTRUCK_API_URL", "").strip()
    username = os.getenv("FOODTRUCK_API_USERNAME", "").strip()
    password = os.getenv("FOODTRUCK_API_PASSWORD", "").strip()
    token = os.getenv("FOODTRUCK_API_TOKEN", "").strip() or None

    if not base_url:
        raise RuntimeError("Missing FOODTRUCK_API_URL")
    if not username:
        raise RuntimeError("Missing FOODTRUCK_API_USERNAME")
    if not password:
        raise RuntimeError("Missing FOODTRUCK_API_PASSWORD")

    return FoodTruckApiClient(base_url=base_url, username=username, password=password, token=token)


if __name__ == "__main__":
    client = make_client_from_env()
    info = client.business_info.get()
    print(f"Connected to {info.get('name') or 'food truck'} at {client.base_url}")
