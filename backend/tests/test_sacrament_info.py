# backend/tests/test_sacrament_info.py
def test_search_and_get_sacrament_info(client, make_faithful):
    f = make_faithful(name="Mukeshimana", baptismId="B-55", dateOfBaptism="1991-02-03", baptismMinister="Fr. Paul")
    make_faithful(name="Other")

    r = client.get("/api/faithful/search", params={"name": "keshi"})
    assert r.status_code == 200, r.text
    rows = r.json()
    assert len(rows) == 1
    assert rows[0]["baptismId"] == "B-55"
    assert rows[0]["baptismMinister"] == "Fr. Paul"
    assert "ministries" not in rows[0]

    r = client.get(f"/api/faithful/{f['id']}/sacrament-info")
    assert r.status_code == 200
    assert r.json()["dateOfBaptism"] == "1991-02-03"


def test_sacrament_info_unknown_id(client):
    assert client.get("/api/faithful/12345/sacrament-info").status_code == 404
