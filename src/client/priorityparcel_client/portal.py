# priorityparcel_client/portal.py
from __future__ import annotations
import typing as t
from urllib.parse import urlencode

from priorityparcel_client.api import ApiClient, ApiError
from priorityparcel_client.cache import QueryCache

AUTH_USER_KEY = "/api/auth/user"
AUTH_USER_STALE_SECONDS = 5 * 60


def _key(path: str, params: dict[str, t.Any] | None = None) -> str:
    params = {k: v for k, v in (params or {}).items() if v is not None}
    return f"{path}?{urlencode(sorted(params.items()))}" if params else path


class PortalClient:
    """What the portal pages call: auth state plus the shipment/form endpoints."""

    def __init__(self, api: ApiClient | None = None, cache: QueryCache | None = None):
        self.api = api or ApiClient()
        self.cache = cache or QueryCache()

    # ---------------- auth ----------------
    @property
    def is_authenticated(self) -> bool:
        return self.api.token_store.get() is not None

    def login(self, email: str, password: str, remember_me: bool = False) -> dict:
        data = self.api.post_json("/api/login", {"email": email, "password": password, "rememberMe": remember_me})
        self.api.token_store.set(data["token"], remember=remember_me)
        self.cache.clear()
        self.cache.set(AUTH_USER_KEY, data["user"])
        return data

    def logout(self) -> None:
        try:
            self.api.post_json("/api/logout")
        finally:
            # signed out locally even when the server call fails
            self.api.token_store.clear()
            self.cache.clear()

    def current_user(self) -> dict | None:
        if not self.is_authenticated:
            return None
        try:
            return self.cache.fetch(
                AUTH_USER_KEY, lambda: self.api.get(AUTH_USER_KEY), stale_time=AUTH_USER_STALE_SECONDS
            )
        except ApiError as e:
            if e.status != 401:
                raise
            # expired or rejected token: back to signed-out
            self.api.token_store.clear()
            self.cache.invalidate(AUTH_USER_KEY)
            return None

    # ---------------- forms ----------------
    def submit_contact(self, payload: dict) -> dict:
        data = self.api.post_json("/api/contact", payload)
        self.cache.invalidate("/api/contact")
        return data

    def request_quote(self, payload: dict) -> dict:
        data = self.api.post_json("/api/prijsofferte", payload)
        self.cache.invalidate("/api/prijsofferte")
        return data

    # ---------------- shipments ----------------
    def zendingen(self, *, user_id: int | None = None, status: str | None = None, q: str | None = None) -> list[dict]:
        params = {"userId": user_id, "status": status, "q": q}
        key = _key("/api/zendingen", params)
        return self.cache.fetch(key, lambda: self.api.get("/api/zendingen", {k: v for k, v in params.items() if v is not None}))

    def zending(self, zending_id: int) -> dict:
        path = f"/api/zendingen/{zending_id}"
        return self.cache.fetch(path, lambda: self.api.get(path))

    def zending_updates(self, zending_id: int) -> list[dict]:
        path = f"/api/zendingen/{zending_id}/updates"
        return self.cache.fetch(path, lambda: self.api.get(path))

    def track(self, tracking_code: str) -> dict:
        return self.api.get(f"/api/tracking/{tracking_code}")

    def dashboard_stats(self) -> dict:
        return self.cache.fetch("/api/dashboard/stats", lambda: self.api.get("/api/dashboard/stats"))

    # ---------------- admin ----------------
    def contact_messages(self) -> list[dict]:
        return self.cache.fetch("/api/contact", lambda: self.api.get("/api/contact"))

    def prijsoffertes(self) -> list[dict]:
        return self.cache.fetch("/api/prijsofferte", lambda: self.api.get("/api/prijsofferte"))

    def klanten(self, q: str | None = None) -> list[dict]:
        params = {"q": q} if q else None
        return self.cache.fetch(_key("/api/admin/klanten", params), lambda: self.api.get("/api/admin/klanten", params))
