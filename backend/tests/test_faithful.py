# backend/tests/test_faithful.py
from parish.db import SessionLocal
from parish.models import Donation, Intention, LapseEvent, Ministry

from conftest import faithful_payload


def test_create_and_fetch_faithful(client, fixed_clock):
    r = client.post(
        "/api/faithful",
        json=faithful_payload(
            baptismId="B-100",
            dateOfBaptism="1990-05-01",
            ministry=["lector", " catechist ", ""],
            lapseHistory=[{"lapseType": "schism", "lapseDate": "2010-01-01", "lapseReason": "left"}],
        ),
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Faithful created successfully"
    data = body["data"]
    assert data["baptismId"] == "B-100"
    assert [m["ministryType"] for m in data["ministries"]] == ["lector", "catechist"]
    assert data["lapseEvents"][0]["lapseType"] == "schism"
    assert data["createdAt"] == "2024-06-15 10:30:00"

    r = client.get(f"/api/faithful/{data['id']}")
    assert r.status_code == 200, r.text
    assert r.json()["data"]["name"] == "Habimana"


def test_duplicate_baptism_id_is_rejected(client, make_faithful):
    first = make_faithful(baptismId="B-001")

    r = client.post("/api/faithful", json=faithful_payload(name="Mukamana", baptismId="B-001"))
    assert r.status_code == 400, r.text
    body = r.json()
    assert "B-001" in body["message"]
    assert body["errors"] == {"baptismId": "Baptism ID already exists: B-001"}

    # updating the holder itself without changing the id is fine
    r = client.put(f"/api/faithful/{first['id']}", json=faithful_payload(baptismId="B-001", firstname="Jean-Paul"))
    assert r.status_code == 200, r.text
    assert r.json()["data"]["firstname"] == "Jean-Paul"


def test_duplicate_confirmation_id_on_update(client, make_faithful):
    make_faithful(confirmationId="C-7")
    other = make_faithful(name="Ndayisaba")

    r = client.put(f"/api/faithful/{other['id']}", json=faithful_payload(name="Ndayisaba", confirmationId="C-7"))
    assert r.status_code == 400
    assert "C-7" in r.json()["message"]


def test_duplicate_matrimony_id(client, make_faithful):
    make_faithful(name="Ishimwe", matrimonyId="M-2020-14")
    other = make_faithful(name="Niyonsaba")

    r = client.post("/api/faithful", json=faithful_payload(name="Gatete", matrimonyId="M-2020-14"))
    assert r.status_code == 400, r.text
    assert r.json()["message"] == "Matrimony ID already exists: M-2020-14"

    r = client.put(f"/api/faithful/{other['id']}", json=faithful_payload(name="Niyonsaba", matrimonyId="M-2020-14"))
    assert r.status_code == 400
    assert r.json()["errors"] == {"matrimonyId": "Matrimony ID already exists: M-2020-14"}


def test_blank_sacrament_ids_never_collide(client, make_faithful):
    make_faithful(baptismId="")
    second = make_faithful(name="Ingabire", baptismId="   ")
    assert second["baptismId"] is None


def test_update_replaces_every_writable_field(client, make_faithful):
    created = make_faithful(godparentName="Alice", ministry=["choir_member"], spouseName="X")

    r = client.put(f"/api/faithful/{created['id']}", json=faithful_payload(ministry=["lector"]))
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["godparentName"] is None
    assert data["spouseName"] is None
    assert [m["ministryType"] for m in data["ministries"]] == ["lector"]
    assert data["createdAt"] == created["createdAt"]


def test_completed_sacraments_listing(client, make_faithful):
    full = make_faithful(
        name="Complete",
        dateOfBaptism="1990-05-01",
        dateOfFirstCommunion="1999-06-01",
        dateOfConfirmation="2005-07-01",
    )
    make_faithful(name="Partial", dateOfBaptism="1990-05-01", dateOfFirstCommunion="1999-06-01")

    r = client.get("/api/faithful/sacraments/completed")
    assert r.status_code == 200
    ids = [f["id"] for f in r.json()["data"]]
    assert ids == [full["id"]]


def test_delete_removes_owned_children_and_donations(client, make_faithful):
    f = make_faithful(ministry=["lector", "catechist"], lapseHistory=[{"lapseType": "irregular_union"}])
    r = client.post(
        "/api/donations",
        json={"faithfulId": f["id"], "year": 2024, "amount": 10, "date": "2024-01-10"},
    )
    assert r.status_code == 201, r.text
    r = client.post(
        "/api/intentions",
        json={"intentionType": "THANKSGIVING", "intentionText": "For the family", "faithfulId": f["id"]},
    )
    assert r.status_code == 201, r.text
    intention_id = r.json()["id"]

    r = client.delete(f"/api/faithful/{f['id']}")
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Faithful deleted successfully"

    with SessionLocal() as db:
        assert db.query(Ministry).filter_by(faithful_id=f["id"]).count() == 0
        assert db.query(LapseEvent).filter_by(faithful_id=f["id"]).count() == 0
        assert db.query(Donation).filter_by(faithful_id=f["id"]).count() == 0
        kept = db.get(Intention, intention_id)
        assert kept.faithful_id is None
        assert kept.external_faithful_name == "Habimana"

    assert client.get(f"/api/faithful/{f['id']}").status_code == 404


def test_delete_unknown_faithful_is_404(client):
    r = client.delete("/api/faithful/9999")
    assert r.status_code == 404
    assert r.json()["error"] == "Not Found"


def test_searches_and_counts(client, make_faithful):
    make_faithful(name="Uwimana", parish="Regina Pacis", subparish="Remera", basicEcclesialCommunity="St John")
    make_faithful(name="Uwamahoro", parish="Regina Pacis", subparish="Remera", basicEcclesialCommunity="St Mark")
    make_faithful(name="Kayitesi", baptismId="B-9", hasRelocated=True, newParishName="Butare")

    r = client.get("/api/faithful/search/name", params={"name": "uwi"})
    assert [f["name"] for f in r.json()["data"]] == ["Uwimana"]

    r = client.get("/api/faithful/search/parish", params={"parish": "Regina Pacis"})
    assert len(r.json()["data"]) == 2

    r = client.get("/api/faithful/search/baptism", params={"baptismId": "B-9"})
    assert r.json()["data"]["name"] == "Kayitesi"

    r = client.get("/api/faithful/search/baptism", params={"baptismId": "missing"})
    assert r.status_code == 404

    r = client.get("/api/faithful/relocated")
    assert [f["name"] for f in r.json()["data"]] == ["Kayitesi"]

    assert client.get("/api/faithful/stats/count").json()["data"] == 3
    assert client.get("/api/faithful/stats/count", params={"parish": "Regina Pacis"}).json()["data"] == 2
    assert client.get("/api/faithful/stats/by-subparish").json()["data"] == {"Gisozi": 1, "Remera": 2}
    assert client.get("/api/faithful/stats/by-bec").json()["data"]["St Mark"] == 1


def test_born_between(client, make_faithful):
    make_faithful(name="Old", dateOfBirth="1950-01-01")
    make_faithful(name="Young", dateOfBirth="2000-01-01")

    r = client.get("/api/faithful/born-between", params={"startDate": "1990-01-01", "endDate": "2010-12-31"})
    assert [f["name"] for f in r.json()["data"]] == ["Young"]


def test_request_validation_returns_field_map(client):
    r = client.post("/api/faithful", json=faithful_payload(name="X", fatherName=""))
    assert r.status_code == 400
    errors = r.json()
    assert set(errors) == {"name", "fatherName"}


def test_dates_are_checked_against_the_clock(client, make_faithful, fixed_clock):
    # the fixed clock says 2024-06-15, whatever the machine date is
    r = client.post("/api/faithful", json=faithful_payload(dateOfBirth="2024-06-15", dateOfBaptism="2024-06-16"))
    assert r.status_code == 400, r.text
    assert r.json()["errors"] == {
        "dateOfBirth": "Date of birth must be in the past",
        "dateOfBaptism": "Baptism date cannot be in the future",
    }

    created = make_faithful(dateOfBirth="2024-06-14", dateOfBaptism="2024-06-15")
    r = client.put(f"/api/faithful/{created['id']}", json=faithful_payload(dateOfBaptism="2024-07-01"))
    assert r.status_code == 400
    assert "dateOfBaptism" in r.json()["errors"]
