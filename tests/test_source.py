"""Tests for the HTTP weather source. httpx.get is replaced by a URL-routing fake."""

from __future__ import annotations

import json
import random

import httpx
import pytest

from weatheraura import source
from weatheraura.models import Location, RenderMode
from weatheraura.source import (
    WeatherSourceError,
    clamp_hour,
    fetch_current_snapshot,
    fetch_elevation,
    fetch_hourly_snapshots,
    fetch_snapshot,
    geocode_place,
    reverse_geocode,
    run,
    short_location_name,
)

NOMINATIM_HIT = [
    {
        "lat": "38.627",
        "lon": "-90.199",
        "display_name": "St. Louis, MO, United States",
    }
]

CURRENT = {
    "current": {
        "temperature_2m": 24.5,
        "cloud_cover": 80,
        "wind_speed_10m": 22.0,
        "wind_direction_10m": 200,
        "precipitation": -0.1,
        "relative_humidity_2m": 70,
        "surface_pressure": 1002.0,
        "uv_index": 6.5,
        "visibility": 24140.0,
        "is_day": 1,
        "weather_code": 63,
    }
}


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://fake.test")
            raise httpx.HTTPStatusError(
                f"{self.status_code}",
                request=request,
                response=httpx.Response(self.status_code, request=request),
            )


class FakeHttp:
    """Routes httpx.get calls by URL; records every call."""

    def __init__(self, routes):
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, url, params=None, headers=None, timeout=None):
        self.calls.append((url, params or {}))
        for prefix, payload in self.routes.items():
            if url.startswith(prefix):
                if isinstance(payload, Exception):
                    raise payload
                if isinstance(payload, FakeResponse):
                    return payload
                return FakeResponse(payload)
        raise AssertionError(f"unexpected URL {url}")

    def urls(self):
        return [url for url, _ in self.calls]


@pytest.fixture
def fake_http(monkeypatch, settings):
    def install(routes):
        fake = FakeHttp(routes)
        monkeypatch.setattr(source.httpx, "get", fake)
        return fake

    return install


def _hourly(hours: int = 24):
    return {
        "hourly": {
            "temperature_2m": [10.0 + h for h in range(hours)],
            "cloud_cover": [h * 4 for h in range(hours)],
            "wind_speed_10m": [5.0] * hours,
            "precipitation": [0.0] * hours,
            "visibility": [10000.0] * hours,
            "is_day": [1 if 6 <= h < 18 else 0 for h in range(hours)],
            "weather_code": [0] * hours,
        }
    }


# --- short_location_name ---


@pytest.mark.parametrize(
    "display,expected",
    [
        ("St. Louis, MO, United States", "St. Louis, MO"),
        ("Denver, Colorado, United States", "Denver, Colorado"),
        ("Busan, South Korea", "Busan"),
        ("Singapore", "Singapore"),
    ],
)
def test_short_location_name(display, expected):
    assert short_location_name(display) == expected


def test_short_location_name_from_address_parts():
    assert short_location_name(None, {"town": "Hallstatt", "state": "Upper Austria"}) == "Hallstatt"
    assert short_location_name("", {"country": "Iceland"}) == "Iceland"
    assert short_location_name(None, {}) is None
    assert short_location_name(None) is None


# --- geocoding ---


def test_geocode_place(fake_http, settings):
    fake = fake_http({"https://geo.test/search": NOMINATIM_HIT})
    location = geocode_place("St Louis", settings)
    assert location.name == "St. Louis, MO"
    assert location.latitude == pytest.approx(38.627)
    assert location.longitude == pytest.approx(-90.199)
    assert fake.calls[0][1]["limit"] == 1


def test_geocode_miss_raises(fake_http, settings):
    fake_http({"https://geo.test/search": []})
    with pytest.raises(WeatherSourceError, match="not found"):
        geocode_place("Atlantis", settings)


def test_geocode_transport_error_raises(fake_http, settings):
    fake_http({"https://geo.test/search": httpx.ConnectError("offline")})
    with pytest.raises(WeatherSourceError):
        geocode_place("Paris", settings)


def test_special_places_skip_the_network(fake_http, settings):
    fake = fake_http({})
    location = geocode_place("Point Nemo, Pacific Ocean", settings)
    assert location.latitude == pytest.approx(-48.8767)
    assert fake.calls == []


def test_reverse_geocode(fake_http, settings):
    fake_http({"https://geo.test/reverse": {"display_name": "Busan, South Korea"}})
    assert reverse_geocode(35.1, 129.0, settings) == "Busan"


def test_reverse_geocode_failure_returns_none(fake_http, settings):
    fake_http({"https://geo.test/reverse": FakeResponse({}, status_code=500)})
    assert reverse_geocode(35.1, 129.0, settings) is None


# --- elevation ---


def test_fetch_elevation(fake_http, settings):
    fake_http({"https://weather.test/elevation": {"elevation": [1609.4]}})
    assert fetch_elevation(39.7, -105.0, settings) == 1609


@pytest.mark.parametrize(
    "payload",
    [httpx.ReadTimeout("slow"), {"elevation": []}, {"error": True}],
)
def test_fetch_elevation_degrades_to_default(fake_http, settings, payload, caplog):
    fake_http({"https://weather.test/elevation": payload})
    assert fetch_elevation(0, 0, settings) == 100
    assert "Elevation lookup failed" in caplog.text


# --- current conditions ---


def test_fetch_current_snapshot(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": CURRENT,
            "https://air.test/air-quality": {"current": {"us_aqi": 88}},
        }
    )
    location = Location("St. Louis, MO", 38.6, -90.2, 142.0)
    snapshot = fetch_current_snapshot(location, settings)
    assert snapshot.temperature == 24.5
    assert snapshot.visibility == pytest.approx(24.14)  # metres → km
    assert snapshot.precipitation == 0  # floored
    assert snapshot.weather_code == 63
    assert snapshot.air_quality == 88
    assert snapshot.altitude == 142
    assert (snapshot.latitude, snapshot.longitude) == (38.6, -90.2)


def test_air_quality_failure_keeps_default(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": CURRENT,
            "https://air.test/air-quality": httpx.ConnectError("down"),
        }
    )
    snapshot = fetch_current_snapshot(Location("X", 0, 0), settings)
    assert snapshot.air_quality == 50


def test_forecast_failure_raises(fake_http, settings):
    fake_http({"https://weather.test/forecast": FakeResponse({}, status_code=503)})
    with pytest.raises(WeatherSourceError, match="Forecast unavailable"):
        fetch_current_snapshot(Location("X", 0, 0), settings)


def test_missing_current_block_gives_defaults(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": {},
            "https://air.test/air-quality": {"current": {}},
        }
    )
    snapshot = fetch_current_snapshot(Location("X", 0, 0), settings)
    assert snapshot.cloud_cover == 50
    assert snapshot.visibility == 10


# --- hourly ---


def test_fetch_hourly_snapshots(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": _hourly(),
            "https://air.test/air-quality": {"hourly": {"us_aqi": list(range(24))}},
        }
    )
    snapshots = fetch_hourly_snapshots(Location("X", 10, 20), settings=settings)
    assert len(snapshots) == 24
    assert snapshots[0].temperature == 10
    assert snapshots[23].temperature == 33
    assert snapshots[3].is_day is False
    assert snapshots[12].is_day is True
    assert snapshots[5].air_quality == 5
    assert snapshots[0].visibility == 10


def test_short_hourly_series_fall_back_to_defaults(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": _hourly(hours=6),
            "https://air.test/air-quality": httpx.ConnectError("down"),
        }
    )
    snapshots = fetch_hourly_snapshots(Location("X", 0, 0), settings=settings)
    assert len(snapshots) == 24
    assert snapshots[10].temperature == 20
    assert snapshots[10].air_quality == 50


@pytest.mark.parametrize("hour,expected", [(-5, 0), (0, 0), (12, 12), (23, 23), (40, 23)])
def test_clamp_hour(hour, expected):
    assert clamp_hour(hour) == expected


# --- top level ---


def _full_routes():
    return {
        "https://geo.test/search": NOMINATIM_HIT,
        "https://weather.test/elevation": {"elevation": [142.0]},
        "https://weather.test/forecast": CURRENT,
        "https://air.test/air-quality": {"current": {"us_aqi": 40}},
    }


def test_fetch_snapshot_pipeline(fake_http, settings):
    fake = fake_http(_full_routes())
    location, snapshot = fetch_snapshot("St Louis", settings=settings)
    assert location.altitude == 142
    assert snapshot.altitude == 142
    assert snapshot.air_quality == 40
    assert fake.urls()[0].startswith("https://geo.test")


def test_fetch_snapshot_for_an_hour(fake_http, settings):
    routes = _full_routes()
    routes["https://weather.test/forecast"] = _hourly()
    fake_http(routes)
    _, snapshot = fetch_snapshot("St Louis", hour=99, settings=settings)
    assert snapshot.temperature == 33  # clamped to hour 23


def test_run_composes_an_aura(fake_http, settings):
    fake_http(_full_routes())
    descriptor = run("St Louis", RenderMode.FRACTAL, random.Random(1), settings=settings)
    assert descriptor.mode is RenderMode.FRACTAL
    assert descriptor.severity.weather_type.value == "heavy_rain"


def test_run_is_reproducible_with_a_seed(fake_http, settings):
    fake_http(_full_routes())
    a = run("St Louis", "randomizer", random.Random(4), settings=settings)
    b = run("St Louis", "randomizer", random.Random(4), settings=settings)
    assert a == b


# --- malformed bodies and local hours ---


class HtmlResponse(FakeResponse):
    """200 response whose body is an HTML error page."""

    def __init__(self):
        super().__init__(None)

    def json(self):
        return json.loads("<html>maintenance</html>")


def test_reverse_geocode_non_json_body_returns_none(fake_http, settings):
    fake_http({"https://geo.test/reverse": HtmlResponse()})
    assert reverse_geocode(35.1, 129.0, settings) is None


def test_air_quality_non_json_body_keeps_default(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": CURRENT,
            "https://air.test/air-quality": HtmlResponse(),
        }
    )
    assert fetch_current_snapshot(Location("X", 0, 0), settings).air_quality == 50


def test_hourly_air_quality_non_json_body_keeps_default(fake_http, settings):
    fake_http(
        {
            "https://weather.test/forecast": _hourly(),
            "https://air.test/air-quality": HtmlResponse(),
        }
    )
    snapshots = fetch_hourly_snapshots(Location("X", 0, 0), settings=settings)
    assert all(s.air_quality == 50 for s in snapshots)


def test_non_json_forecast_raises(fake_http, settings):
    fake_http({"https://weather.test/forecast": HtmlResponse()})
    with pytest.raises(WeatherSourceError):
        fetch_current_snapshot(Location("X", 0, 0), settings)


def test_hourly_requests_use_local_time(fake_http, settings):
    fake = fake_http(
        {
            "https://weather.test/forecast": _hourly(),
            "https://air.test/air-quality": {"hourly": {"us_aqi": [10] * 24}},
        }
    )
    fetch_hourly_snapshots(Location("X", 35.1, 129.0), settings=settings)
    assert [params.get("timezone") for _, params in fake.calls] == ["auto", "auto"]
