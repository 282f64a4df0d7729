from fastapi.testclient import TestClient

from conftest import ADMIN, bearer, login
from priorityparcel.main import create_app
from priorityparcel.repositories.memory import MemStorage

CONTACT = {
    "name": "Jan de Vries",
    "email": "jan@example.nl",
    "phone": "0612345678",
    "location": "Utrecht",
    "message": "Graag een terugbelverzoek.",
}

OFFERTE = {
    "transportType": "nationaal",
    "gewicht": "0-5",
    "afmetingen": "klein",
    "spoed": "standaard",
    "naam": "Petra Jansen",
    "email": "petra@example.nl",
    "telefoon": "0201234567",
    "ophaladres": "Damrak 1, Amsterdam",
    "afleveradres": "Coolsingel 40, Rotterdam",
}


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


# ---------------- contact ----------------
def test_submit_contact(client, admin_headers):
    r = client.post("/api/contact", json=CONTACT)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Contact message submitted successfully"

    saved = client.get(f"/api/contact/{body['id']}", headers=admin_headers).json()
    assert saved["name"] == "Jan de Vries"
    assert saved["isBeantwoord"] is False
    assert saved["ipAddress"] == "testclient"
    assert saved["createdAt"]


def test_submit_contact_short_message(client):
    r = client.post("/api/contact", json={**CONTACT, "message": "hoi"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation error"
    assert [e["field"] for e in body["errors"]] == ["message"]


def test_contact_list_is_admin_only(client, admin_headers, klant_headers):
    client.post("/api/contact", json=CONTACT)
    client.post("/api/contact", json={**CONTACT, "name": "Piet Bakker"})

    r = client.get("/api/contact", headers=admin_headers)
    assert r.status_code == 200
    assert [m["name"] for m in r.json()] == ["Piet Bakker", "Jan de Vries"]

    assert client.get("/api/contact", headers=klant_headers).status_code == 403
    assert client.get("/api/contact").status_code == 401


def test_contact_not_found(client, admin_headers):
    r = client.get("/api/contact/999", headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Contact message not found"}


# ---------------- prijsofferte ----------------
def test_submit_prijsofferte(client, admin_headers):
    r = client.post("/api/prijsofferte", json=OFFERTE)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Quote request submitted successfully"
    assert body["prijsIndicatie"] == "€7,95 - €12,95"

    saved = client.get(f"/api/prijsofferte/{body['id']}", headers=admin_headers).json()
    assert saved["transportType"] == "nationaal"
    assert saved["prijsIndicatie"] == "€7,95 - €12,95"
    assert saved["isVerwerkt"] is False


def test_prijsofferte_urgent_bulky(client):
    r = client.post("/api/prijsofferte", json={**OFFERTE, "afmetingen": "groot", "spoed": "extra-spoed"})
    assert r.json()["prijsIndicatie"] == "€20,90 - €30,90"


def test_prijsofferte_rejects_unknown_enum(client):
    r = client.post("/api/prijsofferte", json={**OFFERTE, "transportType": "maan"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "transportType"


def test_prijsofferte_list_is_admin_only(client, admin_headers, klant_headers):
    client.post("/api/prijsofferte", json=OFFERTE)
    assert len(client.get("/api/prijsofferte", headers=admin_headers).json()) == 1
    assert client.get("/api/prijsofferte", headers=klant_headers).status_code == 403


# ---------------- zendingen ----------------
def test_klant_sees_own_zendingen(client, klant_headers):
    r = client.get("/api/zendingen", headers=klant_headers)
    assert r.status_code == 200
    codes = [z["trackingCode"] for z in r.json()]
    assert codes == ["PNL23456789", "PNL12345678", "PNL34567890"]

    first = r.json()[1]
    assert first["lastUpdate"]["status"] == "onderweg"
    assert first["lastUpdate"]["locatie"] == "Distributiecentrum Utrecht"


def test_klant_cannot_list_other_users(client, klant_headers):
    r = client.get("/api/zendingen", params={"userId": 1}, headers=klant_headers)
    assert r.status_code == 403
    assert client.get("/api/zendingen", params={"userId": 2}, headers=klant_headers).status_code == 200


def test_zendingen_require_login(client):
    assert client.get("/api/zendingen").status_code == 401


def test_admin_filters_zendingen(client, admin_headers):
    everything = client.get("/api/zendingen", headers=admin_headers).json()
    assert len(everything) == 3

    delivered = client.get("/api/zendingen", params={"status": "afgeleverd"}, headers=admin_headers).json()
    assert [z["trackingCode"] for z in delivered] == ["PNL34567890"]

    found = client.get("/api/zendingen", params={"q": "rotterdam"}, headers=admin_headers).json()
    assert [z["trackingCode"] for z in found] == ["PNL12345678"]

    assert client.get("/api/zendingen", params={"userId": 1}, headers=admin_headers).json() == []


def test_bad_status_filter_is_validation_error(client, admin_headers):
    r = client.get("/api/zendingen", params={"status": "kwijt"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "status"


def test_get_zending_and_updates(client, klant_headers):
    zending = client.get("/api/zendingen", headers=klant_headers).json()[1]
    r = client.get(f"/api/zendingen/{zending['id']}", headers=klant_headers)
    assert r.status_code == 200
    assert r.json()["trackingCode"] == "PNL12345678"

    updates = client.get(f"/api/zendingen/{zending['id']}/updates", headers=klant_headers).json()
    assert [u["status"] for u in updates] == ["onderweg", "opgehaald", "gepland"]
    assert updates[1]["notitie"] == "Opgehaald door chauffeur"


def test_unknown_zending_is_404(client, klant_headers):
    r = client.get("/api/zendingen/99999", headers=klant_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Zending not found"}


def test_klant_cannot_open_foreign_zending(client, admin_headers):
    client.post("/api/register", json={"username": "petra", "email": "petra@example.nl", "password": "geheim123"})
    other = bearer(login(client, {"email": "petra@example.nl", "password": "geheim123"})["token"])

    zending_id = client.get("/api/zendingen", headers=admin_headers).json()[0]["id"]
    assert client.get(f"/api/zendingen/{zending_id}", headers=other).status_code == 403
    assert client.get(f"/api/zendingen/{zending_id}/updates", headers=other).status_code == 403
    assert client.get("/api/zendingen", headers=other).json() == []


# ---------------- tracking ----------------
def test_public_tracking(client):
    r = client.get("/api/tracking/pnl34567890")
    assert r.status_code == 200
    body = r.json()
    assert body["trackingCode"] == "PNL34567890"
    assert body["status"] == "afgeleverd"
    assert body["werkelijkeAfleverDatum"]
    assert body["updates"][0]["status"] == "afgeleverd"
    # no addresses or owner on the public view
    assert "afleveradres" not in body
    assert "userId" not in body


def test_unknown_tracking_code(client):
    r = client.get("/api/tracking/PNL00000000")
    assert r.status_code == 404
    assert r.json() == {"message": "No shipment found for this tracking code"}


# ---------------- dashboard ----------------
def test_dashboard_stats(client, klant_headers):
    r = client.get("/api/dashboard/stats", headers=klant_headers)
    assert r.status_code == 200
    assert r.json() == {
        "totaalZendingen": 3,
        "actieveZendingen": 2,
        "afgeleverd": 1,
        "gemiddeldeLeveringstijd": "2.1 dagen",
        "klanttevredenheid": "4.8 / 5",
    }


def test_dashboard_requires_login(client):
    assert client.get("/api/dashboard/stats").status_code == 401


# ---------------- admin ----------------
def test_admin_lists_klanten(client, admin_headers, klant_headers):
    r = client.get("/api/admin/klanten", headers=admin_headers)
    assert r.status_code == 200
    assert [u["username"] for u in r.json()] == ["huso"]

    assert client.get("/api/admin/klanten", params={"q": "kantoor"}, headers=admin_headers).json()[0]["id"] == 2
    assert client.get("/api/admin/klanten", params={"q": "onbekend"}, headers=admin_headers).json() == []
    assert client.get("/api/admin/klanten", headers=klant_headers).status_code == 403


# ---------------- errors ----------------
class BrokenStorage(MemStorage):
    async def count_zendingen(self) -> int:
        raise RuntimeError("database went away")


def test_unexpected_error_is_500_envelope():
    app = create_app(BrokenStorage(), seed=True)
    with TestClient(app, raise_server_exceptions=False) as c:
        token = login(c, ADMIN)["token"]
        r = c.get("/api/dashboard/stats", headers=bearer(token))
    assert r.status_code == 500
    assert r.json() == {"message": "Error processing your request"}
