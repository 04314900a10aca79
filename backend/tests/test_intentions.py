# backend/tests/test_intentions.py
import pytest


def _intention(**overrides):
    payload = {"intentionType": "THANKSGIVING", "intentionText": "For a safe journey"}
    payload.update(overrides)
    return payload


def test_external_requestor_defaults(client):
    r = client.post("/api/intentions", json=_intention(externalFaithfulName="Uwera Claudine"))
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["requestorName"] == "Uwera Claudine"
    assert body["faithfulId"] is None
    assert body["requestedDate"] == "2024-06-15"
    assert body["isPaid"] is True
    assert body["createdAt"] == "2024-06-15 10:30:00"


def test_registered_requestor_name(client, make_faithful):
    f = make_faithful(name="Hakizimana")

    r = client.post("/api/intentions", json=_intention(faithfulId=f["id"], offeringAmount=2000))
    assert r.status_code == 201, r.text
    assert r.json()["requestorName"] == "Hakizimana"
    assert r.json()["offeringAmount"] == 2000.0

    r = client.get(f"/api/intentions/faithful/{f['id']}")
    assert [i["requestorName"] for i in r.json()] == ["Hakizimana"]


@pytest.mark.parametrize(
    "requestor",
    [
        {},
        {"externalFaithfulName": "   "},
        {"faithfulId": 1, "externalFaithfulName": "Both"},
    ],
)
def test_exactly_one_requestor(client, make_faithful, requestor):
    make_faithful()
    r = client.post("/api/intentions", json=_intention(**requestor))
    assert r.status_code == 400, r.text
    errors = r.json()["errors"]
    assert set(errors) == {"faithfulId", "externalFaithfulName"}


def test_unknown_references(client):
    r = client.post("/api/intentions", json=_intention(faithfulId=404))
    assert r.status_code == 404

    r = client.post("/api/intentions", json=_intention(externalFaithfulName="X", massId=404))
    assert r.status_code == 404
    assert r.json()["message"] == "Mass not found with ID: 404"


def test_unpaid_and_mark_paid(client):
    r = client.post("/api/intentions", json=_intention(externalFaithfulName="Kamali", isPaid=False))
    intention_id = r.json()["id"]
    assert r.json()["isPaid"] is False

    assert [i["id"] for i in client.get("/api/intentions/unpaid").json()] == [intention_id]

    r = client.post(f"/api/intentions/{intention_id}/mark-paid")
    assert r.status_code == 200
    assert r.json()["isPaid"] is True
    assert client.get("/api/intentions/unpaid").json() == []


def test_period_and_type_queries(client):
    client.post("/api/intentions", json=_intention(externalFaithfulName="A", requestedDate="2024-01-10"))
    client.post(
        "/api/intentions",
        json=_intention(externalFaithfulName="B", requestedDate="2024-02-10", intentionType="DECEASED"),
    )
    client.post(
        "/api/intentions",
        json=_intention(externalFaithfulName="C", requestedDate="2024-05-10", intentionType="DECEASED"),
    )

    period = {"startDate": "2024-01-01", "endDate": "2024-03-31"}
    assert len(client.get("/api/intentions/period", params=period).json()) == 2
    assert [i["requestorName"] for i in client.get("/api/intentions/deceased", params=period).json()] == ["B"]
    assert client.get("/api/intentions/counts-by-type", params=period).json() == {"THANKSGIVING": 1, "DECEASED": 1}
    assert len(client.get("/api/intentions/type/DECEASED").json()) == 2

    r = client.get("/api/intentions/period", params={"startDate": "2024-03-31", "endDate": "2024-01-01"})
    assert r.status_code == 400


def test_update_and_delete(client):
    r = client.post("/api/intentions", json=_intention(externalFaithfulName="Before"))
    intention_id = r.json()["id"]

    r = client.put(
        f"/api/intentions/{intention_id}",
        json=_intention(externalFaithfulName="After", intentionText="Updated", requestedDate="2024-06-01"),
    )
    assert r.status_code == 200, r.text
    assert r.json()["requestorName"] == "After"
    assert r.json()["intentionText"] == "Updated"

    assert client.delete(f"/api/intentions/{intention_id}").status_code == 204
    assert client.get(f"/api/intentions/{intention_id}").status_code == 404
