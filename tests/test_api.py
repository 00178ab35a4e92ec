"""HTTP surface for the calendar and analytics views."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from closet_app.app import ClosetApp
from closet_app.config import ClosetConfig
from models.records import Garment, User
from server import api


@pytest.fixture()
def client(tmp_path: Path):
    closet = ClosetApp(config=ClosetConfig(database_path=str(tmp_path / "api.db")))
    closet.store.create_user(User(id="user-1", name="Sam", email="sam@example.com"))
    closet.store.create_garment(Garment(id="g1", user_id="user-1", category="tops", color="black"))
    closet.store.create_garment(Garment(id="g2", user_id="user-1", category="shoes", color="white"))

    api.app.dependency_overrides[api.get_closet] = lambda: closet
    with TestClient(api.app) as test_client:
        yield test_client
    api.app.dependency_overrides.pop(api.get_closet, None)


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_responses_carry_correlation_id(client: TestClient) -> None:
    echoed = client.get("/healthz", headers={"X-Correlation-ID": "req-42"})
    assert echoed.headers["X-Correlation-ID"] == "req-42"

    first = client.get("/healthz").headers["X-Correlation-ID"]
    second = client.get("/healthz").headers["X-Correlation-ID"]
    assert first and second and first != second


def test_user_lookup(client: TestClient) -> None:
    assert client.get("/users/user-1").json()["preferences"] == {"styles": [], "favorite_colors": []}
    assert client.get("/users/nobody").status_code == 404


def test_log_outfit_and_read_calendar(client: TestClient) -> None:
    for outfit_id, day in [("o1", "2025-06-11"), ("o2", "2025-06-12")]:
        response = client.post(
            "/users/user-1/outfits",
            json={"id": outfit_id, "date": day, "garment_ids": ["g2", "g1"]},
        )
        assert response.status_code == 201

    outfits = client.get("/users/user-1/outfits").json()
    assert [(o["id"], o["date"]) for o in outfits] == [("o1", "2025-06-11"), ("o2", "2025-06-12")]
    assert client.get("/users/nobody/outfits").json() == []

    month = client.get("/users/user-1/calendar/2025/6").json()
    assert len(month["cells"]) == 35
    assert month["most_worn"]["signature"] == "g1,g2"
    assert month["most_worn"]["count"] == 2

    streak = client.get("/users/user-1/calendar/streak", params={"today": "2025-06-12"}).json()
    assert streak["current"] == 2

    week = client.get("/users/user-1/calendar/week", params={"day": "2025-06-12"}).json()
    assert week[0]["key"] == "2025-06-08"

    assert client.delete("/users/user-1/outfits/o2").status_code == 204
    assert client.delete("/users/user-1/outfits/o2").status_code == 404
    streak = client.get("/users/user-1/calendar/streak", params={"today": "2025-06-12"}).json()
    assert streak["current"] == 0


def test_invalid_month_is_rejected(client: TestClient) -> None:
    response = client.get("/users/user-1/calendar/2025/13")
    assert response.status_code == 422
    assert response.json()["status"] == "invalid"


def test_usage_updates_analytics(client: TestClient) -> None:
    response = client.post(
        "/users/user-1/usages", json={"id": "u1", "garment_id": "g1", "worn_date": "2025-06-12"}
    )
    assert response.status_code == 201
    assert client.post(
        "/users/user-1/usages", json={"id": "u1", "garment_id": "g1", "worn_date": "2025-06-12"}
    ).status_code == 409
    assert client.post(
        "/users/user-1/usages", json={"id": "u2", "garment_id": "nope", "worn_date": "2025-06-12"}
    ).status_code == 404

    overview = client.get("/users/user-1/analytics/overview").json()
    assert overview["total_items"] == 2
    assert overview["wardrobe_usage_percent"] == 50

    most_worn = client.get("/users/user-1/analytics/most-worn").json()
    assert [item["id"] for item in most_worn] == ["g1"]
    never_worn = client.get("/users/user-1/analytics/never-worn", params={"limit": 1}).json()
    assert [item["id"] for item in never_worn] == ["g2"]
    assert client.get("/users/user-1/analytics/least-worn", params={"limit": 0}).status_code == 422

    categories = client.get("/users/user-1/analytics/categories").json()
    assert sum(c["percent"] for c in categories) == 100
    colours = client.get("/users/user-1/analytics/colours").json()
    assert {c["colour"] for c in colours} == {"black", "white"}
    assert client.get("/users/user-1/analytics/wear-audit").json() == []


def test_empty_wardrobe_analytics(client: TestClient) -> None:
    assert client.get("/users/someone-else/analytics/categories").json() == []
    assert client.get("/users/someone-else/calendar/2024/2").json()["most_worn"] is None
