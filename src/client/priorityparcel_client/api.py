# priorityparcel_client/api.py
from __future__ import annotations
import os, typing as t, requests

from priorityparcel_client.session import TokenStore

BASE_URL = os.getenv("API_BASE_URL") or "http://localhost:8000"
TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))


class ApiError(Exception):
    """Non-2xx response; ``body`` is the decoded JSON (or raw text) the server sent."""

    def __init__(self, status: int, body: t.Any, path: str):
        self.status = status
        self.body = body
        self.path = path
        super().__init__(f"{status} on {path}: {self.message}")

    @property
    def message(self) -> str:
        if isinstance(self.body, dict) and self.body.get("message"):
            return str(self.body["message"])
        return str(self.body or "Request failed")

    @property
    def field_errors(self) -> list[dict]:
        if isinstance(self.body, dict):
            return list(self.body.get("errors") or [])
        return []

    @property
    def category(self) -> str:
        # drives which message the UI shows
        if self.status == 400:
            return "validation"
        if self.status in (401, 403):
            return "auth"
        if self.status == 404:
            return "not_found"
        if self.status == 409:
            return "conflict"
        if self.status >= 500:
            return "server"
        return "http"


def _decode(r) -> t.Any:
    if not r.content:
        return None
    if "application/json" in r.headers.get("content-type", ""):
        return r.json()
    return r.text


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        session=None,
        token_store: TokenStore | None = None,
        timeout: int | None = None,
    ):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        # anything with a requests-style .request() works (requests.Session, Starlette TestClient)
        self.session = session or requests.Session()
        self.token_store = token_store or TokenStore()
        self.timeout = timeout or TIMEOUT

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        h = {"Accept": "application/json"}
        token = self.token_store.get()
        if token:
            h["Authorization"] = f"Bearer {token}"
        if extra:
            h.update(extra)
        return h

    def _request(self, method: str, path: str, *, params: dict | None = None, payload: t.Any = None):
        extra = {"Content-Type": "application/json"} if payload is not None else None
        r = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(extra),
            params=params,
            json=payload,
            timeout=self.timeout,
        )
        body = _decode(r)
        if r.status_code >= 400:
            raise ApiError(r.status_code, body, path)
        return body

    def get(self, path: str, params: dict | None = None):
        return self._request("GET", path, params=params)

    def post_json(self, path: str, payload: dict | None = None):
        return self._request("POST", path, payload=payload)

