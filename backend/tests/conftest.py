# backend/tests/conftest.py
"""Test setup: a throwaway SQLite database and a fixed clock.

DATABASE_URL must be set before anything imports `parish`, because the
engine is created at import time.
"""
import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

DB_FILE = Path(tempfile.gettempdir()) / "parish_registry_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{DB_FILE}"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from parish.db import engine  # noqa: E402
from parish.dependencies import get_clock  # noqa: E402
from parish.main import app  # noqa: E402
from parish.models import Base  # noqa: E402

FIXED_NOW = datetime(2024, 6, 15, 10, 30, 0)


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)
    engine.dispose()
    if DB_FILE.exists():
        DB_FILE.unlink()


@pytest.fixture(autouse=True)
def _clean_tables():
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture(autouse=True)
def fixed_clock():
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    yield FIXED_NOW
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def client():
    return TestClient(app)


# ─────────────────────────────────────────────────────────────────────────────
# Record builders
# ─────────────────────────────────────────────────────────────────────────────

def faithful_payload(**overrides):
    payload = {
        "firstname": "Jean",
        "name": "Habimana",
        "fatherName": "Pierre Habimana",
        "motherName": "Marie Uwase",
        "diocese": "Kigali",
        "parish": "Sainte Famille",
        "subparish": "Gisozi",
        "basicEcclesialCommunity": "Saint Paul",
        "dateOfBirth": "1990-04-12",
    }
    payload.update(overrides)
    return payload


def priest_payload(priest_id, **overrides):
    payload = {
        "id": priest_id,
        "names": f"Fr. Priest {priest_id}",
        "priestType": "DIOCESAN",
        "email": f"priest{priest_id}@parish.rw",
        "phone": "+250 788 000 000",
        "isAssigned": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_faithful(client):
    def _make(**overrides):
        r = client.post("/api/faithful", json=faithful_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_priest(client):
    def _make(priest_id, **overrides):
        r = client.post("/api/priests", json=priest_payload(priest_id, **overrides))
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_mass(client):
    def _make(main_id, concelebrant_ids=(), **overrides):
        payload = {
            "massType": "SUNDAY",
            "massDate": "2024-03-03",
            "location": "Main Church",
            "mainCelebrantId": main_id,
            "concelebrantIds": list(concelebrant_ids),
        }
        payload.update(overrides)
        r = client.post("/api/masses", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
