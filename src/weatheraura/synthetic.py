"""Plausible synthetic weather for places where live readings are missing.

Each generator depends on latitude/longitude/altitude and carries a small
chance of a catastrophic outlier. All randomness comes from the caller's
``random.Random``.
"""

import dataclasses
import random

from weatheraura.models import WeatherSnapshot

_DEFAULTS = WeatherSnapshot()


def realistic_temperature(rng: random.Random, lat: float, altitude: float) -> float:
    """°C, clamped to −50…50. Equator ≈ 28 °C, poles ≈ −50 °C, −6.5 °C per km."""
    if rng.random() < 0.02:
        if rng.random() < 0.5:
            return float(round(45 + rng.random() * 5))
        return float(round(-50 + rng.random() * 5))

    lat_factor = abs(lat) / 90
    base = 28 - lat_factor * 78
    lapse = -(altitude / 1000) * 6.5
    seasonal = (rng.random() - 0.5) * (20 - lat_factor * 10)
    daily = (rng.random() - 0.5) * (12 - lat_factor * 4)

    desert = 0.0
    if abs(lat) < 30 and altitude < 1000 and rng.random() < 0.3:
        desert = 15.0 if rng.random() < 0.5 else -10.0

    temp = base + lapse + seasonal + daily + desert
    return float(round(max(-50.0, min(50.0, temp))))


def realistic_wind_speed(
    rng: random.Random, lat: float, lon: float, altitude: float
) -> float:
    """km/h, 0…250. Coasts, mountains and polar regions are windier."""
    if rng.random() < 0.015:
        if rng.random() < 0.7:
            return float(round(120 + rng.random() * 80))  # hurricane
        return float(round(200 + rng.random() * 50))  # tornado

    wind = 3 + rng.random() * 7
    coastal = abs(lat) < 60 and (abs(lon % 60) < 5 or altitude < 200)
    if coastal:
        wind += 8 + rng.random() * 20
    if altitude > 2000:
        wind += (altitude / 1000) * 8
    if abs(lat) > 70:
        wind += 10 + rng.random() * 15  # katabatic

    wind += (rng.random() - 0.5) * (25 if coastal else 15)
    if rng.random() < 0.05:
        wind = 60 + rng.random() * 60  # gale
    return float(round(max(0.0, min(250.0, wind))))


# (cumulative probability, low, span)
_URBAN_AQI = ((0.30, 20, 30), (0.70, 50, 50), (0.90, 100, 50), (0.98, 150, 50), (1.0, 200, 100))
_RURAL_AQI = ((0.70, 10, 40), (0.95, 50, 50), (0.99, 100, 50), (1.0, 150, 50))


def realistic_aqi(rng: random.Random, lat: float, lon: float, altitude: float) -> float:
    """US AQI, 0…500. Rough urban guess from coordinates; mountains are cleaner."""
    if rng.random() < 0.01:
        return float(round(300 + rng.random() * 200))

    urban = abs(lat) < 60 and abs(lon % 30) < 15
    roll = rng.random()
    low, span = 0.0, 0.0
    for threshold, low, span in _URBAN_AQI if urban else _RURAL_AQI:
        if roll < threshold:
            break
    aqi = low + rng.random() * span

    if altitude > 1500:
        aqi *= 0.6
    if altitude > 3000:
        aqi = min(aqi, 30 + rng.random() * 20)

    aqi += (rng.random() - 0.5) * 30
    return float(round(max(0.0, min(500.0, aqi))))


def realistic_precipitation(
    rng: random.Random, cloud_cover: float, lat: float, altitude: float
) -> float:
    """mm/h, 0…50. Correlated with cloud cover; tropics and mountains rain harder."""
    if rng.random() < 0.01 and cloud_cover > 50:
        return min(50.0, 30 + rng.random() * 20)

    if cloud_cover < 30:
        return rng.random() * 2.5 if rng.random() < 0.1 else 0.0

    if cloud_cover < 70:
        if rng.random() >= 0.4:
            return 0.0
        if rng.random() < 0.6:
            return rng.random() * 2.5
        return 2.5 + rng.random() * 5.1

    intensity = rng.random()
    if intensity < 0.4:
        precip = 2.5 + rng.random() * 5.1
    elif intensity < 0.85:
        precip = 7.6 + rng.random() * 17.4
    else:
        precip = 25 + rng.random() * 25

    if abs(lat) < 20:
        precip *= 1.3 + rng.random() * 0.4
    if altitude > 1000:
        precip *= 1.1 + rng.random() * 0.3
    if abs(lat) < 25 and rng.random() < 0.1:
        precip *= 1.5  # monsoon
    return min(50.0, precip)


def fill_defaults(snapshot: WeatherSnapshot, rng: random.Random) -> WeatherSnapshot:
    """Replace readings still sitting at their defaults with synthetic ones.

    Only temperature, air quality, wind speed and precipitation are filled.
    Precipitation uses the snapshot's cloud cover.
    """
    lat, lon, alt = snapshot.latitude, snapshot.longitude, snapshot.altitude
    changes: dict[str, float] = {}
    if snapshot.temperature == _DEFAULTS.temperature:
        changes["temperature"] = realistic_temperature(rng, lat, alt)
    if snapshot.air_quality == _DEFAULTS.air_quality:
        changes["air_quality"] = realistic_aqi(rng, lat, lon, alt)
    if snapshot.wind_speed == _DEFAULTS.wind_speed:
        changes["wind_speed"] = realistic_wind_speed(rng, lat, lon, alt)
    if snapshot.precipitation == _DEFAULTS.precipitation:
        changes["precipitation"] = round(
            realistic_precipitation(rng, snapshot.cloud_cover, lat, alt), 1
        )
    if not changes:
        return snapshot
    return dataclasses.replace(snapshot, **changes)
