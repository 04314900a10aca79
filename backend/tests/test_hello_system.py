# backend/tests/test_hello_system.py
import pytest


@pytest.mark.parametrize("prefix", ["/hello", "/api/hello"])
def test_hello(client, prefix):
    r = client.get(prefix)
    assert r.status_code == 200
    assert r.json()["data"] == "Hello, Most welcomed User of Parish Management System application !"


def test_greet(client):
    assert client.get("/api/hello/greet").json()["data"] == "Greetings, Christ's Faithful! Yezu Akuzwe iteka ryose."
    assert client.get("/hello/greet", params={"name": "Aline"}).json()["data"] == (
        "Greetings, Aline! Yezu Akuzwe iteka ryose."
    )


def test_health_and_version(client, monkeypatch):
    monkeypatch.delenv("TZ", raising=False)
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["database"] == {"dialect": "sqlite", "reachable": True}
    assert body["timezone"] == "Africa/Kigali"

    info = client.get("/version").json()
    assert info == {"app": "Parish Registry Backend", "version": "0.1.0", "dialect": "sqlite"}
