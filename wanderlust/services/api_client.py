"""REST client for the booking backend.

Every page talks to the backend through one ``ApiClient``: it attaches the
session's bearer token to outgoing requests and turns a 401 (anywhere but
the login endpoint) into ``SessionExpired`` so the app can drop the session
and send the visitor to the login page.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
UPLOAD_PATH = "/upload"


class ApiError(Exception):
    """Backend call failed. status_code is 0 when the backend could not be reached."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class SessionExpired(Exception):
    """Token rejected by the backend; the stored session is no longer usable.

    Not an ApiError: pages that recover from failed calls must
    still let this one reach the app-level handler.
    """

    status_code = 401

    def __init__(self, message: str = "Session expired"):
        super().__init__(message)
        self.message = message


def error_message(response: httpx.Response) -> str:
    """Prefer the backend's own `message`/`detail`, fall back to the HTTP reason."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return response.reason_phrase or f"HTTP {response.status_code}"


def unwrap_list(data: Any, key: str) -> list:
    """Accept both a bare array and `{"<key>": [...]}`; anything else is an empty list."""
    if isinstance(data, dict):
        data = data.get(key, data)
    return data if isinstance(data, list) else []


def unwrap_item(data: Any, key: str) -> dict | None:
    """Accept both the record and `{"<key>": {...}}`."""
    if isinstance(data, dict):
        inner = data.get(key)
        return inner if isinstance(inner, dict) else data
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token], "response": [self._check_session]},
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _attach_token(self, request: httpx.Request) -> None:
        if self.token:
            request.headers["Authorization"] = f"Bearer {self.token}"

    def _check_session(self, response: httpx.Response) -> None:
        # The login form reports bad credentials itself
        if response.status_code == 401 and not response.request.url.path.endswith(LOGIN_PATH):
            response.read()
            raise SessionExpired(error_message(response))

    def request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("API %s %s unreachable: %s", method, path, e)
            raise ApiError(0, f"Could not reach the booking service ({e.__class__.__name__})") from e
        if response.is_error:
            message = error_message(response)
            logger.warning("API %s %s -> %s %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, data: dict | None = None, files: dict | None = None) -> Any:
        if files is not None or data is not None:
            return self.request("POST", path, data=data, files=files)
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """Send one image to the upload endpoint; returns the stored image URL."""
        files = {"image": (filename, content, content_type or "application/octet-stream")}
        data = self.post(UPLOAD_PATH, files=files)
        url = ""
        if isinstance(data, dict):
            url = data.get("imageUrl") or data.get("url") or ""
        if not url:
            raise ApiError(502, "Upload succeeded but no image URL was returned")
        return url
