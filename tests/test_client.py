import pytest
from fastapi.testclient import TestClient

from priorityparcel.main import create_app
from priorityparcel.repositories.memory import MemStorage
from priorityparcel_client.api import ApiClient, ApiError
from priorityparcel_client.cache import QueryCache
from priorityparcel_client.portal import AUTH_USER_KEY, PortalClient
from priorityparcel_client.session import TokenStore


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def portal(clock):
    app = create_app(MemStorage(), seed=True)
    with TestClient(app) as http:
        api = ApiClient("http://testserver", session=http, token_store=TokenStore(path=None))
        yield PortalClient(api, QueryCache(clock=clock))


# ---------------- cache ----------------
def test_cache_serves_fresh_entries(clock):
    cache = QueryCache(clock=clock)
    calls = []

    def fetcher():
        calls.append(1)
        return len(calls)

    assert cache.fetch("/x", fetcher, stale_time=10) == 1
    clock.now = 9
    assert cache.fetch("/x", fetcher, stale_time=10) == 1
    clock.now = 10
    assert cache.fetch("/x", fetcher, stale_time=10) == 2
    assert len(calls) == 2


def test_cache_failed_refetch_keeps_old_entry(clock):
    cache = QueryCache(clock=clock)
    cache.set("/x", "oud")

    def boom():
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError):
        cache.fetch("/x", boom)
    assert cache.get("/x") == "oud"


def test_cache_invalidate_by_prefix(clock):
    cache = QueryCache(clock=clock)
    cache.set("/api/zendingen", [])
    cache.set("/api/zendingen?status=gepland", [])
    cache.set("/api/contact", [])
    cache.invalidate("/api/zendingen")
    assert "/api/zendingen" not in cache
    assert "/api/zendingen?status=gepland" not in cache
    assert "/api/contact" in cache


# ---------------- token store ----------------
def test_token_store_remember_me_persists(tmp_path):
    path = tmp_path / "token"
    TokenStore(path).set("abc", remember=True)
    assert TokenStore(path).get() == "abc"

    store = TokenStore(path)
    store.set("xyz")
    assert store.get() == "xyz"
    assert not path.exists()
    assert TokenStore(path).get() is None


def test_token_store_clear(tmp_path):
    store = TokenStore(tmp_path / "token")
    store.set("abc", remember=True)
    store.clear()
    assert store.get() is None
    assert not (tmp_path / "token").exists()


# ---------------- api errors ----------------
@pytest.mark.parametrize("status, category", [
    (400, "validation"),
    (401, "auth"),
    (403, "auth"),
    (404, "not_found"),
    (409, "conflict"),
    (500, "server"),
    (418, "http"),
])
def test_api_error_category(status, category):
    assert ApiError(status, {"message": "x"}, "/p").category == category


def test_api_error_message_falls_back_to_body():
    assert ApiError(502, "Bad Gateway", "/p").message == "Bad Gateway"
    assert ApiError(502, None, "/p").message == "Request failed"


# ---------------- portal against the app ----------------
def test_login_caches_current_user(portal):
    assert portal.current_user() is None
    portal.login("huso@priorityparcel.nl", "klant123")

    assert portal.is_authenticated
    assert AUTH_USER_KEY in portal.cache
    assert portal.current_user()["username"] == "huso"


def test_current_user_is_refetched_after_five_minutes(portal, clock):
    portal.login("huso@priorityparcel.nl", "klant123")
    portal.cache.set(AUTH_USER_KEY, {"username": "stale"})
    assert portal.current_user()["username"] == "stale"

    clock.now = 5 * 60
    assert portal.current_user()["username"] == "huso"


def test_rejected_token_signs_out(portal):
    portal.api.token_store.set("not-a-token")
    assert portal.current_user() is None
    assert not portal.is_authenticated


def test_logout_clears_state(portal):
    portal.login("huso@priorityparcel.nl", "klant123")
    portal.zendingen()
    portal.logout()
    assert not portal.is_authenticated
    assert "/api/zendingen" not in portal.cache


def test_failed_login_raises_auth_error(portal):
    with pytest.raises(ApiError) as exc_info:
        portal.login("huso@priorityparcel.nl", "verkeerd")
    assert exc_info.value.status == 401
    assert exc_info.value.category == "auth"
    assert exc_info.value.message == "Invalid email or password"
    assert not portal.is_authenticated


def test_submit_contact_reports_field_errors(portal):
    with pytest.raises(ApiError) as exc_info:
        portal.submit_contact({"name": "J", "email": "jan@example.nl", "message": "Hallo daar"})
    assert exc_info.value.category == "validation"
    assert [e["field"] for e in exc_info.value.field_errors] == ["name"]


def test_request_quote_returns_indication(portal):
    data = portal.request_quote({
        "transportType": "internationaal",
        "gewicht": "5-10",
        "afmetingen": "middel",
        "spoed": "standaard",
        "naam": "Petra Jansen",
        "email": "petra@example.nl",
        "telefoon": "0201234567",
        "ophaladres": "Damrak 1, Amsterdam",
        "afleveradres": "Rue de la Loi 16, Brussel",
    })
    assert data["prijsIndicatie"] == "€29,95 - €49,95"


def test_shipments_and_tracking(portal):
    portal.login("huso@priorityparcel.nl", "klant123")
    zendingen = portal.zendingen()
    assert len(zendingen) == 3
    assert portal.zendingen(status="gepland")[0]["trackingCode"] == "PNL23456789"

    detail = portal.zending(zendingen[0]["id"])
    assert detail["trackingCode"] == zendingen[0]["trackingCode"]
    assert portal.zending_updates(detail["id"])[0]["status"] == "gepland"

    assert portal.track("PNL12345678")["status"] == "onderweg"
    assert portal.dashboard_stats()["afgeleverd"] == 1


def test_admin_views(portal):
    portal.login("admin@priorityparcel.nl", "admin123")
    portal.submit_contact({"name": "Jan", "email": "jan@example.nl", "message": "Bel mij terug"})
    assert portal.contact_messages()[0]["name"] == "Jan"
    assert portal.prijsoffertes() == []
    assert [u["username"] for u in portal.klanten(q="huso")] == ["huso"]


def test_klant_gets_forbidden_on_admin_views(portal):
    portal.login("huso@priorityparcel.nl", "klant123")
    with pytest.raises(ApiError) as exc_info:
        portal.klanten()
    assert exc_info.value.status == 403
