# backend/tests/test_statistics.py
import pytest


@pytest.fixture
def parish_calendar(client, make_priest, make_mass):
    """Two priests, three Masses in March 2024, one on the fixed 'today'."""
    make_priest(1, priestType="DIOCESAN")
    make_priest(2, priestType="RELIGIOUS", isAssigned=False)
    first = make_mass(1, concelebrant_ids=(2,), massDate="2024-03-03")
    make_mass(1, massDate="2024-03-10", massType="WEEKDAY")
    make_mass(2, massDate="2024-06-15", massType="WEEKDAY")

    def intention(**extra):
        payload = {"intentionType": "THANKSGIVING", "intentionText": "Thanks", "externalFaithfulName": "Mukamana"}
        payload.update(extra)
        r = client.post("/api/intentions", json=payload)
        assert r.status_code == 201, r.text

    intention(requestedDate="2024-03-01", massId=first["id"], offeringAmount=1000)
    intention(requestedDate="2024-03-02", intentionType="DECEASED", isPaid=False)
    client.post("/api/events", json={"title": "Choir Day", "eventDate": "2024-03-20", "eventType": "CELEBRATION"})
    return first


MARCH = {"startDate": "2024-03-01", "endDate": "2024-03-31"}


def test_mass_statistics(client, parish_calendar):
    body = client.get("/api/statistics/masses", params=MARCH).json()
    assert body["totalMasses"] == 2
    assert body["massesByType"] == {"SUNDAY": 1, "WEEKDAY": 1}
    assert body["topCelebratingPriests"][0]["priestId"] == 1
    assert body["topCelebratingPriests"][0]["massCount"] == 2

    r = client.get("/api/statistics/masses/priest/1/count", params=MARCH)
    assert r.json() == 2
    assert client.get("/api/statistics/masses/yearly").json() == [{"year": 2024, "count": 3}]


def test_priest_rankings(client, parish_calendar):
    top = client.get("/api/statistics/priests/top", params={"limit": 1}).json()
    assert top == [
        {
            "rank": 1,
            "priestId": 1,
            "priestName": "Fr. Priest 1",
            "priestType": "DIOCESAN",
            "email": "priest1@parish.rw",
            "massCount": 2,
        }
    ]

    celebrating = client.get("/api/statistics/priests/celebrating/period", params=MARCH).json()
    # priest 2 only concelebrated in March but still counts as celebrating
    assert sorted(p["priestId"] for p in celebrating) == [1, 2]

    stats = client.get("/api/statistics/priests").json()
    assert stats["totalPriests"] == 2
    assert stats["activePriests"] == 1
    assert stats["inactivePriests"] == 1
    assert stats["priestsCelebratingThisMonth"] == 1

    breakdown = client.get("/api/statistics/priests/type-breakdown").json()
    assert breakdown["totalPriests"] == 2
    assert {row["priestType"]: row["percentage"] for row in breakdown["typeBreakdown"]} == {
        "DIOCESAN": "50.00%",
        "RELIGIOUS": "50.00%",
    }


def test_intention_statistics(client, parish_calendar):
    body = client.get("/api/statistics/intentions", params=MARCH).json()
    assert body["totalIntentions"] == 2
    assert body["deceasedIntentions"] == 1
    assert body["unpaidIntentionsCount"] == 1
    assert body["paymentRate"] == "50.00%"

    unpaid = client.get("/api/statistics/intentions/unpaid").json()
    assert [u["intentionType"] for u in unpaid] == ["DECEASED"]
    assert client.get("/api/statistics/intentions/deceased/count", params=MARCH).json() == 1


def test_payment_rate_without_intentions(client):
    body = client.get("/api/statistics/intentions", params=MARCH).json()
    assert body["totalIntentions"] == 0
    assert body["paymentRate"] == "N/A"


def test_dashboard(client, parish_calendar):
    body = client.get("/api/statistics/dashboard", params=MARCH).json()
    assert body["startDate"] == "2024-03-01"
    assert body["totalMasses"] == 2
    assert body["totalIntentions"] == 2
    assert body["totalEvents"] == 1
    assert body["totalPriests"] == 2
    assert body["massesToday"] == 1

    r = client.get("/api/statistics/dashboard", params={"startDate": "2024-03-31", "endDate": "2024-03-01"})
    assert r.status_code == 400


def test_year_statistics(client, parish_calendar):
    body = client.get("/api/statistics/year/2024").json()
    assert len(body["monthlyMasses"]) == 12
    assert body["monthlyMasses"][2] == {"month": 3, "monthName": "MARCH", "massCount": 2}
    assert body["monthlyMasses"][5]["massCount"] == 1
    assert body["monthlyOfferings"] == [{"month": 3, "offeringTotal": 1000.0}]
    assert body["totalMassesForYear"] == 3


def test_comparison(client, parish_calendar):
    r = client.get(
        "/api/statistics/compare",
        params={
            "period1Start": "2024-01-01",
            "period1End": "2024-01-31",
            "period2Start": "2024-03-01",
            "period2End": "2024-03-31",
        },
    )
    changes = r.json()["changes"]
    assert changes["massChange"] == 2
    assert changes["massPercentChange"] == "N/A"

    r = client.get(
        "/api/statistics/compare",
        params={
            "period1Start": "2024-03-01",
            "period1End": "2024-03-31",
            "period2Start": "2024-06-01",
            "period2End": "2024-06-30",
        },
    )
    changes = r.json()["changes"]
    assert changes["massChange"] == -1
    assert changes["massPercentChange"] == "-50.00%"
    assert changes["intentionPercentChange"] == "-100.00%"


def test_current_month_and_week_follow_the_clock(client, parish_calendar):
    month = client.get("/api/statistics/current-month").json()
    assert month["startDate"] == "2024-06-01"
    assert month["endDate"] == "2024-06-30"
    assert month["totalMasses"] == 1

    week = client.get("/api/statistics/current-week").json()
    assert week["startDate"] == "2024-06-10"
    assert week["endDate"] == "2024-06-16"
