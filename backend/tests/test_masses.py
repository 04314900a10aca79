# backend/tests/test_masses.py
from parish.db import SessionLocal
from parish.models import Event, Mass


def _mass_payload(main_id, concelebrant_ids=(), **overrides):
    payload = {
        "massType": "SUNDAY",
        "massDate": "2024-03-03",
        "location": "Main Church",
        "mainCelebrantId": main_id,
        "concelebrantIds": list(concelebrant_ids),
    }
    payload.update(overrides)
    return payload


def test_create_mass_with_concelebrants(client, make_priest, make_mass):
    for pid in (1, 2, 3):
        make_priest(pid)

    mass = make_mass(1, concelebrant_ids=(2, 3), liturgicalSeason="LENT")
    assert mass["title"] == "Sunday Mass"
    assert mass["mainCelebrant"]["id"] == 1
    assert sorted(p["id"] for p in mass["concelebrants"]) == [2, 3]
    assert mass["liturgicalSeason"] == "LENT"
    assert mass["intentions"] == []

    r = client.get("/api/masses")
    assert r.status_code == 200
    row = r.json()[0]
    assert row["mainCelebrantName"] == "Fr. Priest 1"
    assert row["concelebrantCount"] == 2


def test_main_celebrant_cannot_concelebrate(client, make_priest):
    make_priest(1)
    make_priest(2)

    r = client.post("/api/masses", json=_mass_payload(1, (1, 2)))
    assert r.status_code == 400, r.text
    assert r.json()["message"] == "Mass validation failed: Main celebrant cannot also be a concelebrant"

    with SessionLocal() as db:
        assert db.query(Mass).count() == 0
        assert db.query(Event).count() == 0


def test_both_rule_violations_are_reported_together(client, make_priest):
    make_priest(1)
    make_priest(2)

    r = client.post("/api/masses", json=_mass_payload(1, (1, 2, 2)))
    assert r.status_code == 400
    assert r.json()["message"] == (
        "Mass validation failed: Main celebrant cannot also be a concelebrant, "
        "Duplicate concelebrants are not allowed"
    )


def test_duplicate_concelebrants(client, make_priest):
    for pid in (1, 2):
        make_priest(pid)

    r = client.post("/api/masses", json=_mass_payload(1, (2, 2)))
    assert r.status_code == 400
    assert "Duplicate concelebrants" in r.json()["message"]


def test_update_cannot_add_main_celebrant_as_concelebrant(client, make_priest, make_mass):
    for pid in (1, 2):
        make_priest(pid)
    mass = make_mass(1, concelebrant_ids=(2,))

    r = client.put(f"/api/masses/{mass['id']}", json=_mass_payload(1, (2, 1)))
    assert r.status_code == 400

    r = client.get(f"/api/masses/{mass['id']}")
    assert [p["id"] for p in r.json()["concelebrants"]] == [2]


def test_update_changes_celebrants(client, make_priest, make_mass):
    for pid in (1, 2, 3):
        make_priest(pid)
    mass = make_mass(1, concelebrant_ids=(2,))

    r = client.put(f"/api/masses/{mass['id']}", json=_mass_payload(3, (1,), title="Patronal Feast"))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["title"] == "Patronal Feast"
    assert body["mainCelebrant"]["id"] == 3
    assert [p["id"] for p in body["concelebrants"]] == [1]


def test_unknown_priests(client, make_priest):
    make_priest(1)

    r = client.post("/api/masses", json=_mass_payload(42))
    assert r.status_code == 404
    assert r.json()["message"] == "Main celebrant not found with ID: 42"

    r = client.post("/api/masses", json=_mass_payload(1, (77,)))
    assert r.status_code == 404
    assert r.json()["message"] == "One or more concelebrants not found"

    assert client.get("/api/masses/priest/42").status_code == 404


def test_date_queries(client, make_priest, make_mass):
    make_priest(1)
    make_mass(1, massDate="2024-03-03")
    make_mass(1, massDate="2024-03-10", massType="WEEKDAY")

    r = client.get("/api/masses/date-range", params={"startDate": "2024-03-01", "endDate": "2024-03-05"})
    assert [m["massDate"] for m in r.json()] == ["2024-03-03"]

    r = client.get("/api/masses/date-range", params={"startDate": "2024-03-05", "endDate": "2024-03-01"})
    assert r.status_code == 400
    assert r.json()["message"] == "End date must be after start date"

    assert len(client.get("/api/masses/date/2024-03-10").json()) == 1
    assert [m["massType"] for m in client.get("/api/masses/type/WEEKDAY").json()] == ["WEEKDAY"]
    assert len(client.get("/api/masses/priest/1").json()) == 2


def test_masses_are_not_listed_as_general_events(client, make_priest, make_mass):
    make_priest(1)
    mass = make_mass(1)

    assert client.get("/api/events").json() == []
    assert client.get(f"/api/events/{mass['id']}").status_code == 404


def test_delete_keeps_intentions_unscheduled(client, make_priest, make_mass):
    make_priest(1)
    mass = make_mass(1)
    r = client.post(
        "/api/intentions",
        json={
            "intentionType": "DECEASED",
            "intentionText": "Rest for grandmother",
            "externalFaithfulName": "Uwera",
            "massId": mass["id"],
        },
    )
    assert r.status_code == 201, r.text
    intention_id = r.json()["id"]
    assert client.get(f"/api/masses/{mass['id']}").json()["intentions"][0]["id"] == intention_id

    r = client.delete(f"/api/masses/{mass['id']}")
    assert r.status_code == 204

    assert client.get(f"/api/masses/{mass['id']}").status_code == 404
    r = client.get(f"/api/intentions/{intention_id}")
    assert r.status_code == 200
    assert r.json()["mass"] is None
