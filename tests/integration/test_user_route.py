from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from cinema.db.models import UserHistory
from cinema.db.session import get_db
from cinema.main import app
from tests.helpers import FakeSession


@pytest.fixture(autouse=True)
def _disable_db_startup(monkeypatch):
    monkeypatch.setattr("cinema.main.init_engine", lambda: None)
    monkeypatch.setattr("cinema.main.get_sessionmaker", lambda: None)
    yield
    app.dependency_overrides.clear()


def test_post_history_records_each_item_once():
    session = FakeSession()

    def override_get_db() -> Iterator[FakeSession]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        resp = client.post(
            "/user/history",
            json={"user_id": "u1", "items": [3, 4, 3], "event_type": " Played "},
        )

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "user_id": "u1", "recorded": 2}
    assert session.commits == 1
    assert all(isinstance(row, UserHistory) for row in session.added)
    assert [(row.item_id, row.event_type) for row in session.added] == [
        (3, "played"),
        (4, "played"),
    ]


def test_post_history_defaults_to_watched():
    session = FakeSession()

    def override_get_db() -> Iterator[FakeSession]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        client.post("/user/history", json={"user_id": "u1", "items": [7]})

    assert session.added[0].event_type == "watched"
