# backend/tests/test_donations.py
import pytest


def _donate(client, faithful_id, amount, day, year=2024, **extra):
    payload = {"faithfulId": faithful_id, "year": year, "amount": amount, "date": day}
    payload.update(extra)
    r = client.post("/api/donations", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def donor(make_faithful):
    return make_faithful(name="Mugisha", subparish="Gisozi", basicEcclesialCommunity="Saint Paul")


def test_create_and_totals(client, donor):
    first = _donate(client, donor["id"], 150.00, "2024-01-15", contributionType="TITHE")
    _donate(client, donor["id"], 50.50, "2024-02-10", contributionType="OFFERING")

    assert first["amount"] == 150.0
    assert first["faithfulName"] == "Mugisha"
    assert first["createdAt"] == "2024-06-15 10:30:00"

    r = client.get(f"/api/donations/statistics/faithful/{donor['id']}/total")
    assert r.json() == {"total": 200.5}
    assert client.get("/api/donations/statistics/year/2024/total").json() == {"total": 200.5, "year": 2024}
    assert client.get("/api/donations/statistics/total").json() == {"total": 200.5}
    assert 2024 in client.get("/api/donations/statistics/available-years").json()

    by_type = client.get("/api/donations/statistics/year/2024/by-type").json()
    assert by_type == {"TITHE": 150.0, "OFFERING": 50.5}

    monthly = client.get("/api/donations/statistics/year/2024/monthly").json()
    assert monthly == {"1": 150.0, "2": 50.5}


def test_unknown_faithful_is_rejected(client):
    r = client.post("/api/donations", json={"faithfulId": 999, "year": 2024, "amount": 10, "date": "2024-01-01"})
    assert r.status_code == 404
    assert r.json()["message"] == "Umukristu ntabwo abonetse (ID: 999)"


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_amount_is_rejected(client, donor, amount):
    r = client.post("/api/donations", json={"faithfulId": donor["id"], "year": 2024, "amount": amount, "date": "2024-01-01"})
    assert r.status_code == 400
    assert "amount" in r.json()


def test_summary_for_range(client, donor):
    _donate(client, donor["id"], 10, "2024-03-01")
    _donate(client, donor["id"], 20, "2024-03-02")
    _donate(client, donor["id"], 20, "2024-03-03")

    r = client.get("/api/donations/statistics/summary", params={"startDate": "2024-03-01", "endDate": "2024-03-31"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["totalAmount"] == 50.0
    assert body["donationCount"] == 3
    assert body["averageAmount"] == 16.67
    assert body["maxAmount"] == 20.0
    assert body["minAmount"] == 10.0
    assert body["period"] == "2024-03-01 - 2024-03-31"


def test_summary_for_empty_range(client):
    r = client.get(
        "/api/donations/statistics/summary",
        params={"startDate": "2023-01-01", "endDate": "2023-12-31", "period": "2023"},
    )
    assert r.json() == {
        "totalAmount": 0.0,
        "donationCount": 0,
        "averageAmount": 0.0,
        "maxAmount": 0.0,
        "minAmount": 0.0,
        "period": "2023",
    }


def test_partial_update_keeps_unsent_fields(client, donor):
    d = _donate(client, donor["id"], 75, "2024-04-01", contributionType="TITHE", notes="April")

    r = client.put(f"/api/donations/{d['id']}", json={"amount": 80})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["amount"] == 80.0
    assert body["contributionType"] == "TITHE"
    assert body["notes"] == "April"
    assert body["date"] == "2024-04-01"


def test_filter_precedence(client, donor, make_faithful):
    other = make_faithful(name="Iradukunda")
    _donate(client, donor["id"], 10, "2023-05-01", year=2023, contributionType="TITHE")
    _donate(client, other["id"], 20, "2024-05-01", contributionType="TITHE")
    _donate(client, other["id"], 30, "2024-06-01", contributionType="OFFERING")

    def amounts(**params):
        r = client.get("/api/donations", params=params)
        assert r.status_code == 200, r.text
        return sorted(d["amount"] for d in r.json())

    # faithful wins over everything else
    assert amounts(faithfulId=donor["id"], year=2024, contributionType="OFFERING") == [10.0]
    # year wins over range and type
    assert amounts(year=2024, contributionType="TITHE", startDate="2023-01-01", endDate="2023-12-31") == [20.0, 30.0]
    # a range needs both ends
    assert amounts(startDate="2024-01-01", endDate="2024-05-31", contributionType="OFFERING") == [20.0]
    assert amounts(startDate="2024-01-01", contributionType="OFFERING") == [30.0]
    assert amounts() == [10.0, 20.0, 30.0]


def test_by_faithful_newest_first(client, donor):
    _donate(client, donor["id"], 1, "2024-01-01")
    _donate(client, donor["id"], 2, "2024-03-01")

    r = client.get(f"/api/donations/faithful/{donor['id']}")
    assert [d["date"] for d in r.json()] == ["2024-03-01", "2024-01-01"]


def test_top_donors(client, donor, make_faithful):
    other = make_faithful(name="Nshimiyimana")
    _donate(client, donor["id"], 5, "2024-01-01")
    _donate(client, other["id"], 40, "2024-01-02")
    _donate(client, donor["id"], 5, "2024-01-03")

    r = client.get("/api/donations/statistics/year/2024/top-donors", params={"limit": 1})
    assert r.json() == [{"faithfulId": other["id"], "faithfulName": "Nshimiyimana", "totalAmount": 40.0}]


def test_totals_by_subparish_and_bec(client, donor, make_faithful):
    remera = make_faithful(name="Uwase", subparish="Remera", basicEcclesialCommunity="Saint Luc")
    neighbour = make_faithful(name="Mutoni", subparish="Gisozi", basicEcclesialCommunity="Saint Marc")
    _donate(client, donor["id"], 100, "2024-01-01")
    _donate(client, remera["id"], 25, "2024-01-01")
    _donate(client, neighbour["id"], 10, "2023-01-01", year=2023)

    assert client.get("/api/donations/statistics/by-subparish").json() == {"Gisozi": 110.0, "Remera": 25.0}
    assert client.get("/api/donations/statistics/by-subparish", params={"year": 2024}).json() == {
        "Gisozi": 100.0,
        "Remera": 25.0,
    }

    r = client.get("/api/donations/statistics/by-bec", params={"subParish": "Gisozi"})
    assert r.json() == {"Saint Paul": 100.0, "Saint Marc": 10.0}


def test_year_totals_partition_the_grand_total(client, donor):
    _donate(client, donor["id"], 12.25, "2022-01-01", year=2022)
    _donate(client, donor["id"], 7.75, "2023-01-01", year=2023)
    _donate(client, donor["id"], 30, "2024-01-01")

    years = client.get("/api/donations/statistics/available-years").json()
    assert years == [2024, 2023, 2022]
    per_year = sum(client.get(f"/api/donations/statistics/year/{y}/total").json()["total"] for y in years)
    assert per_year == client.get("/api/donations/statistics/total").json()["total"] == 50.0


def test_get_and_delete(client, donor):
    d = _donate(client, donor["id"], 15, "2024-01-01")

    r = client.delete(f"/api/donations/{d['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Ituro ryasibwe neza"}

    r = client.get(f"/api/donations/{d['id']}")
    assert r.status_code == 404
    assert r.json()["message"] == f"Ituro ntiribonetse (ID: {d['id']})"


def test_faithful_totals_partition_the_grand_total(client, donor, make_faithful):
    second = make_faithful(name="Uwimana")
    third = make_faithful(name="Habyarimana")
    _donate(client, donor["id"], 10.10, "2024-01-05")
    _donate(client, second["id"], 0.20, "2024-01-06")
    _donate(client, third["id"], 5.05, "2023-12-30", year=2023)

    everyone = [f["id"] for f in client.get("/api/faithful").json()["data"]]
    assert len(everyone) == 3
    per_faithful = [
        client.get(f"/api/donations/statistics/faithful/{fid}/total").json()["total"] for fid in everyone
    ]
    grand_total = client.get("/api/donations/statistics/total").json()["total"]
    assert round(sum(per_faithful), 2) == grand_total == 15.35


def test_date_after_the_clock_is_rejected(client, donor, fixed_clock):
    # the fixed clock says 2024-06-15
    r = client.post("/api/donations", json={"faithfulId": donor["id"], "year": 2024, "amount": 5, "date": "2024-06-16"})
    assert r.status_code == 400, r.text
    assert r.json()["errors"] == {"date": "Date cannot be in the future"}

    d = _donate(client, donor["id"], 5, "2024-06-15")
    r = client.put(f"/api/donations/{d['id']}", json={"date": "2024-07-01"})
    assert r.status_code == 400
    assert client.get(f"/api/donations/{d['id']}").json()["date"] == "2024-06-15"
