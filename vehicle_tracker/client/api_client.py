# vehicle_tracker/client/api_client.py
"""HTTP client for the Vehicle Tracker API."""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, List, Optional

import requests

from vehicle_tracker.client.session_store import ClientSessionStore
from vehicle_tracker.config.logging_config import get_logger

logger = get_logger(__name__)

REFRESH_PATH = "/api/auth/refresh"
# a 401 from these means bad credentials, not a stale access token
_NO_REFRESH_PATHS = ("/api/auth/login", "/api/auth/register", REFRESH_PATH)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiError":
        body = _json_body(response)
        message = body.get("message") or response.reason or "Request failed"
        return cls(response.status_code, message, body.get("error"))


def _json_body(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class VehicleTrackerClient:
    """
    Wraps every API endpoint. The access token comes from the session store;
    the refresh token lives only in the HTTP session's cookie jar, exactly as
    the server set it.

    A 401 on any call other than login/register/refresh triggers one refresh
    and one replay of the original request. If the refresh fails the store is
    logged out and the refresh error is raised.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        store: Optional[ClientSessionStore] = None,
        session: Optional[requests.Session] = None,
        connection_timeout: int = 10,
        read_timeout: int = 30,
    ) -> None:
        self.base_url = (base_url or os.getenv("VEHICLE_TRACKER_API_URL", "http://localhost:5000")).rstrip("/")
        self.store = store or ClientSessionStore()
        self.session = session or requests.Session()
        self.timeout = (connection_timeout, read_timeout)
        self._refresh_lock = threading.Lock()

    # -------------------------
    # Request pipeline
    # -------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, *, token: Optional[str], **kwargs: Any) -> requests.Response:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self.session.request(method, self._url(path), headers=headers, timeout=self.timeout, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded response envelope."""
        token = self.store.access_token
        response = self._send(method, path, token=token, json=json, params=params)

        if response.status_code == 401 and not path.startswith(_NO_REFRESH_PATHS):
            new_token = self._refresh_access_token(stale_token=token)
            # replayed once; a second 401 is returned to the caller as is
            response = self._send(method, path, token=new_token, json=json, params=params)

        if not response.ok:
            raise ApiError.from_response(response)
        return _json_body(response)

    def _refresh_access_token(self, *, stale_token: Optional[str]) -> str:
        with self._refresh_lock:
            current = self.store.access_token
            if current and current != stale_token:
                # another thread refreshed while this one waited on the lock
                return current

            try:
                response = self.session.post(self._url(REFRESH_PATH), json={}, timeout=self.timeout)
            except requests.RequestException:
                logger.warning("token_refresh_failed", reason="network")
                self.store.logout()
                raise

            body = _json_body(response)
            new_token = (body.get("data") or {}).get("accessToken")
            if response.ok and body.get("success") and new_token:
                self.store.set_access_token(new_token)
                logger.info("token_refreshed")
                return new_token

            logger.info("token_refresh_failed", status=response.status_code)
            self.store.logout()
            if not response.ok:
                raise ApiError.from_response(response)
            raise ApiError(response.status_code, "Refresh response did not contain an access token")

    # -------------------------
    # Auth
    # -------------------------

    def register(
        self,
        email: str,
        password: str,
        *,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"email": email, "password": password}
        if name is not None:
            payload["name"] = name
        if role is not None:
            payload["role"] = role

        data = self.request("POST", "/api/auth/register", json=payload)["data"]
        self.store.set_auth(data["user"], data["accessToken"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self.request("POST", "/api/auth/login", json={"email": email, "password": password})["data"]
        self.store.set_auth(data["user"], data["accessToken"])
        return data

    def logout(self) -> None:
        try:
            self.request("POST", "/api/auth/logout")
        finally:
            self.store.logout()

    def me(self) -> Dict[str, Any]:
        user = self.request("GET", "/api/auth/me")["data"]
        self.store.set_user(user)
        return user

    def update_profile(self, *, name: Optional[str] = None, password: Optional[str] = None) -> Dict[str, Any]:
        payload = {k: v for k, v in {"name": name, "password": password}.items() if v is not None}
        user = self.request("PATCH", "/api/auth/me", json=payload)["data"]
        self.store.set_user(user)
        return user

    # -------------------------
    # Users (ADMIN)
    # -------------------------

    def list_users(self, **filters: Any) -> List[Dict[str, Any]]:
        return self.request("GET", "/api/users", params=filters or None)["data"]

    def get_user(self, user_id: int) -> Dict[str, Any]:
        return self.request("GET", f"/api/users/{user_id}")["data"]

    def create_user(self, **fields: Any) -> Dict[str, Any]:
        return self.request("POST", "/api/users", json=fields)["data"]

    def update_user(self, user_id: int, **fields: Any) -> Dict[str, Any]:
        return self.request("PUT", f"/api/users/{user_id}", json=fields)["data"]

    def delete_user(self, user_id: int) -> None:
        self.request("DELETE", f"/api/users/{user_id}")

    # -------------------------
    # Vehicles
    # -------------------------

    def list_vehicles(self, *, status: Optional[str] = None, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {k: v for k, v in {"status": status, "q": q}.items() if v}
        return self.request("GET", "/api/vehicles", params=params or None)["data"]

    def get_vehicle(self, vehicle_id: int) -> Dict[str, Any]:
        return self.request("GET", f"/api/vehicles/{vehicle_id}")["data"]

    def create_vehicle(self, **fields: Any) -> Dict[str, Any]:
        return self.request("POST", "/api/vehicles", json=fields)["data"]

    def update_vehicle(self, vehicle_id: int, **fields: Any) -> Dict[str, Any]:
        return self.request("PUT", f"/api/vehicles/{vehicle_id}", json=fields)["data"]

    def delete_vehicle(self, vehicle_id: int) -> None:
        self.request("DELETE", f"/api/vehicles/{vehicle_id}")
