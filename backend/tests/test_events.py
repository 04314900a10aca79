# backend/tests/test_events.py
def _event(**overrides):
    payload = {"title": "Parish Retreat", "eventDate": "2024-04-20", "eventType": "RETREAT", "location": "Kabgayi"}
    payload.update(overrides)
    return payload


def test_event_crud(client):
    r = client.post("/api/events", json=_event(isPublic=True))
    assert r.status_code == 201, r.text
    event = r.json()
    assert event["category"] == "GENERAL"
    assert event["isPublic"] is True

    r = client.put(f"/api/events/{event['id']}", json=_event(title="Youth Retreat"))
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Youth Retreat"
    assert r.json()["isPublic"] is False

    assert client.delete(f"/api/events/{event['id']}").status_code == 204
    r = client.get(f"/api/events/{event['id']}")
    assert r.status_code == 404
    assert r.json()["message"] == f"Event not found with ID: {event['id']}"


def test_mass_type_is_rejected(client):
    r = client.post("/api/events", json=_event(eventType="MASS"))
    assert r.status_code == 400
    assert "eventType" in r.json()["errors"]


def test_event_queries(client):
    client.post("/api/events", json=_event(title="Easter Vigil Agape", eventDate="2024-03-30", eventType="FEAST", isPublic=True))
    client.post("/api/events", json=_event(title="Council Meeting", eventDate="2024-04-05", eventType="MEETING"))
    client.post("/api/events", json=_event(title="Pilgrimage to Kibeho", eventDate="2023-11-28", eventType="PILGRIMAGE"))

    assert [e["title"] for e in client.get("/api/events/public").json()] == ["Easter Vigil Agape"]
    assert [e["title"] for e in client.get("/api/events/type/MEETING").json()] == ["Council Meeting"]
    assert len(client.get("/api/events/year/2024").json()) == 2
    assert [e["title"] for e in client.get("/api/events/year/2024", params={"month": 4}).json()] == ["Council Meeting"]

    r = client.get("/api/events/date-range", params={"startDate": "2023-01-01", "endDate": "2024-03-31"})
    assert {e["title"] for e in r.json()} == {"Easter Vigil Agape", "Pilgrimage to Kibeho"}


def test_invalid_month(client):
    r = client.get("/api/events/year/2024", params={"month": 13})
    assert r.status_code == 400
    assert r.json()["message"] == "Month must be between 1 and 12"
