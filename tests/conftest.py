"""Shared pytest fixtures for weatheraura tests."""

from __future__ import annotations

import random

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from weatheraura.config import Settings  # noqa: E402
from weatheraura.models import WeatherSnapshot  # noqa: E402


@pytest.fixture
def rng():
    """Seeded random source so jittered overlays are reproducible."""
    return random.Random(42)


@pytest.fixture
def calm_snapshot():
    """All-default reading: mild, dry, light breeze."""
    return WeatherSnapshot()


@pytest.fixture
def storm_snapshot():
    """Thunderstorm with heavy rain, strong wind and poor visibility."""
    return WeatherSnapshot(
        temperature=18,
        cloud_cover=95,
        wind_speed=70,
        wind_direction=225,
        precipitation=30,
        humidity=95,
        pressure=985,
        uv_index=1,
        visibility=2,
        is_day=False,
        weather_code=97,
        air_quality=120,
        altitude=300,
        latitude=35.18,
        longitude=129.08,
    )


@pytest.fixture
def snow_snapshot():
    """Heavy snow below freezing."""
    return WeatherSnapshot(
        temperature=-8,
        cloud_cover=100,
        wind_speed=25,
        wind_direction=10,
        precipitation=12,
        visibility=4,
        weather_code=75,
        altitude=1200,
    )


@pytest.fixture
def settings():
    return Settings(
        user_agent="weatheraura-tests",
        http_timeout=1.0,
        nominatim_url="https://geo.test",
        forecast_url="https://weather.test/forecast",
        elevation_url="https://weather.test/elevation",
        air_quality_url="https://air.test/air-quality",
        default_mode="radial",
        seed=None,
        log_level="DEBUG",
        log_dir=None,
    )
