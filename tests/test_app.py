from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.api import notifications as notifications_api
from app.api import weather as weather_api
from app.core.config import FRONTEND_URL
from app.core.rate_limit import RateLimiter, RateLimitRule
from app.db.session import get_db
from app.main import app
from app.services.weather import WEATHER_BASELINES, current_weather
from conftest import FARMER


# --------------------------------------------------------------------
# Health & routing
# --------------------------------------------------------------------
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["database"] == "Connected"
    assert body["uptime"] >= 0
    assert "timestamp" in body


class UnreachableSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def close(self):
        pass


def test_health_reports_database_outage(client):
    app.dependency_overrides[get_db] = lambda: UnreachableSession()
    try:
        response = client.get("/health")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json()["status"] == "ERROR"
    assert response.json()["database"] == "Disconnected"


def test_unknown_route_lists_endpoints(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Endpoint not found"
    assert body["message"] == "GET /api/does-not-exist is not a valid endpoint"
    assert "POST /api/login" in body["availableEndpoints"]


def test_unhandled_errors_hide_details(client, monkeypatch):
    def explode(location):
        raise RuntimeError("weather table on fire")

    monkeypatch.setattr(weather_api, "current_weather", explode)
    response = client.get("/api/weather", params={"location": "Rift Valley"})

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert response.json()["message"] == "Something went wrong"


def test_unhandled_errors_keep_cors_and_security_headers(client, monkeypatch):
    def explode(location):
        raise RuntimeError("weather table on fire")

    monkeypatch.setattr(weather_api, "current_weather", explode)
    response = client.get("/api/weather", params={"location": "Rift Valley"},
                          headers={"Origin": FRONTEND_URL})

    assert response.status_code == 500
    assert response.headers["access-control-allow-origin"] == FRONTEND_URL
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"


# --------------------------------------------------------------------
# Weather
# --------------------------------------------------------------------
def test_weather_known_region(client):
    response = client.get("/api/weather", params={"location": "Rift Valley"})

    assert response.status_code == 200
    body = response.json()
    assert body["location"] == {"name": "Rift Valley", "country": "Kenya", "region": "Rift Valley"}
    assert 20 <= body["current"]["temperature"] <= 23
    assert body["current"]["weather_descriptions"] == ["Cool"]


def test_weather_unknown_region_falls_back(client):
    body = client.get("/api/weather", params={"location": "Atlantis"}).json()
    assert body["location"]["name"] == "Central Kenya"


def test_weather_requires_location(client):
    response = client.get("/api/weather")

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "location"


@pytest.mark.parametrize("region", sorted(WEATHER_BASELINES))
def test_weather_jitter_is_bounded(region):
    baselines = WEATHER_BASELINES[region][2]
    for _ in range(50):
        current = current_weather(region)["current"]
        for field, (value, spread) in baselines.items():
            assert value - spread <= current[field] <= value + spread - 1


def test_weather_history(client, farmer_headers):
    body = client.get("/api/weather-history", params={"region": "Western Kenya", "year": 2023},
                      headers=farmer_headers).json()

    assert len(body["data"]) == 12
    assert body["region"] == "Western Kenya"
    assert body["year"] == 2023
    assert body["totalRainfall"] == 761
    assert body["averageTemperature"] == 26


# --------------------------------------------------------------------
# Notifications
# --------------------------------------------------------------------
def test_notifications(client, farmer_headers):
    response = client.get("/api/notifications", headers=farmer_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    first = body["notifications"][0]
    assert first["type"] == "weather"
    assert first["priority"] == "high"
    assert first["time"] == "2 hours ago"
    assert first["isRead"] is False
    assert first["createdAt"].endswith("+00:00")
    assert body["timestamp"].endswith("+00:00")
    assert [n["time"] for n in body["notifications"][1:]] == ["1 day ago", "3 days ago"]


def test_admin_creates_notification(client, admin_headers, farmer_headers):
    payload = {"message": "Maize prices up 10% in Eldoret", "type": "general", "priority": "low"}
    response = client.post("/api/notifications", json=payload, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["message"] == payload["message"]

    latest = client.get("/api/notifications", headers=farmer_headers).json()["notifications"][0]
    assert latest["message"] == payload["message"]
    assert latest["time"] == "Just now"


def test_farmer_cannot_create_notification(client, farmer_headers):
    response = client.post("/api/notifications", json={"message": "hi"}, headers=farmer_headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Admin access required"


def test_notification_type_is_checked(client, admin_headers):
    response = client.post("/api/notifications", json={"message": "x", "type": "gossip"}, headers=admin_headers)
    assert response.status_code == 400


def test_time_ago():
    now = datetime(2025, 3, 1, 12, 0)
    assert notifications_api.time_ago(now - timedelta(minutes=59), now) == "Just now"
    assert notifications_api.time_ago(now - timedelta(hours=1), now) == "1 hour ago"
    assert notifications_api.time_ago(now - timedelta(hours=23), now) == "23 hours ago"
    assert notifications_api.time_ago(now - timedelta(days=1), now) == "1 day ago"
    assert notifications_api.time_ago(now - timedelta(days=4, hours=3), now) == "4 days ago"


# --------------------------------------------------------------------
# Rate limiting
# --------------------------------------------------------------------
def test_login_rate_limit(client):
    for _ in range(5):
        assert client.post("/api/login", json=FARMER).status_code == 200

    response = client.post("/api/login", json=FARMER)

    assert response.status_code == 429
    assert response.json()["error"] == "Too many login attempts, please try again later"
    assert int(response.headers["Retry-After"]) > 0


def test_rate_limit_ignores_payload_validity(client):
    for _ in range(5):
        client.post("/api/login", json={"email": "bad"})
    assert client.post("/api/login", json={"email": "bad"}).status_code == 429


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_rate_limiter_window():
    clock = FakeClock()
    limiter = RateLimiter(
        [RateLimitRule("/api/login", 2, "slow down"), RateLimitRule("/api/", 3, "too many")],
        window_seconds=60,
        clock=clock,
    )

    assert limiter.hit("1.2.3.4", "/api/login") is None
    assert limiter.hit("1.2.3.4", "/api/login") is None
    rule, retry_after = limiter.hit("1.2.3.4", "/api/login")
    assert rule.message == "slow down"
    assert retry_after == 60

    # other clients and non-api paths are unaffected
    assert limiter.hit("5.6.7.8", "/api/login") is None
    assert limiter.hit("1.2.3.4", "/health") is None

    # general budget was charged by the two accepted logins
    assert limiter.hit("1.2.3.4", "/api/chat") is None
    rule, _ = limiter.hit("1.2.3.4", "/api/chat")
    assert rule.message == "too many"

    clock.now += 60
    assert limiter.hit("1.2.3.4", "/api/login") is None


def test_rate_limiter_forgets_expired_windows():
    clock = FakeClock()
    limiter = RateLimiter([RateLimitRule("/api/", 3, "too many")], window_seconds=60, clock=clock)

    for n in range(1000):
        limiter.hit(f"10.0.{n // 256}.{n % 256}", "/api/chat")
    assert len(limiter._windows) == 1000

    clock.now += 3600
    assert limiter.hit("1.2.3.4", "/api/chat") is None

    assert list(limiter._windows) == [("/api/", "1.2.3.4")]


def test_rate_limiter_keeps_live_windows_when_sweeping():
    clock = FakeClock()
    limiter = RateLimiter([RateLimitRule("/api/", 1, "too many")], window_seconds=60, clock=clock)

    limiter.hit("old", "/api/chat")
    clock.now += 59
    limiter.hit("recent", "/api/chat")
    clock.now += 2
    limiter.hit("new", "/api/chat")

    assert set(client for _, client in limiter._windows) == {"recent", "new"}
    # the surviving window still counts against its client
    assert limiter.hit("recent", "/api/chat") is not None
