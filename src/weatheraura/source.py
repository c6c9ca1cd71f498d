"""Weather source: geocoding, elevation, forecast and air-quality lookups over HTTP.

Nominatim (OpenStreetMap) resolves place names; Open-Meteo supplies
elevation, current and hourly weather, and US AQI. Only the place lookup and
the forecast call are fatal; the rest degrade to snapshot defaults.
"""

import logging
import random
from collections.abc import Mapping
from typing import Any

import httpx

from weatheraura.compose import compose_aura
from weatheraura.config import Settings, load_settings
from weatheraura.models import AuraDescriptor, Location, RenderMode, WeatherSnapshot
from weatheraura.places import special_location

logger = logging.getLogger(__name__)

# Open-Meteo variable → snapshot field
_CURRENT_VARIABLES: dict[str, str] = {
    "temperature_2m": "temperature",
    "cloud_cover": "cloud_cover",
    "wind_speed_10m": "wind_speed",
    "wind_direction_10m": "wind_direction",
    "precipitation": "precipitation",
    "relative_humidity_2m": "humidity",
    "surface_pressure": "pressure",
    "uv_index": "uv_index",
    "visibility": "visibility",
    "is_day": "is_day",
    "weather_code": "weather_code",
}

# Second address components kept in the short name besides 2–3 letter codes
_KNOWN_STATES = ("Missouri", "Colorado", "California", "New York", "Texas")

DEFAULT_ALTITUDE = 100.0


class WeatherSourceError(Exception):
    """Place lookup or forecast call failure."""


def _settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else load_settings()


def _get_json(url: str, params: dict[str, Any], settings: Settings) -> Any:
    resp = httpx.get(
        url,
        params=params,
        headers={"User-Agent": settings.user_agent},
        timeout=settings.http_timeout,
    )
    resp.raise_for_status()
    return resp.json()


def short_location_name(
    display_name: str | None, address: Mapping[str, str] | None = None
) -> str | None:
    """Shorten a geocoder display name for labels.

    Keeps the first comma-separated component, plus the second when it is a
    short code ("St. Louis, MO") or a well-known state name. Without a display
    name, one is assembled from the address parts (city/town/village/
    municipality, then state/region, then country as a last resort).

    Returns:
        The short name, or None when nothing usable is available.
    """
    if not display_name and address:
        parts: list[str] = []
        for key in ("city", "town", "village", "municipality"):
            if address.get(key):
                parts.append(address[key])
                break
        for key in ("state", "region"):
            if address.get(key):
                parts.append(address[key])
                break
        if not parts and address.get("country"):
            parts.append(address["country"])
        display_name = ", ".join(parts)

    if not display_name:
        return None

    pieces = [p.strip() for p in display_name.split(",")]
    name = pieces[0]
    if len(pieces) > 1:
        second = pieces[1]
        if len(second) <= 3 or any(state in second for state in _KNOWN_STATES):
            name = f"{name}, {second}"
    return name


def geocode_place(query: str, settings: Settings | None = None) -> Location:
    """Resolve a free-text place name to a Location (altitude left at its default).

    Args:
        query: Place name in any language.
        settings: Endpoint/timeout settings. Read from the environment if None.

    Returns:
        Location with a short display name.

    Raises:
        WeatherSourceError: On transport errors or when nothing is found.
    """
    special = special_location(query.strip())
    if special is not None:
        return special

    settings = _settings(settings)
    try:
        results = _get_json(
            f"{settings.nominatim_url}/search",
            {"q": query, "format": "json", "limit": 1, "addressdetails": 1},
            settings,
        )
    except (httpx.HTTPError, ValueError) as e:
        raise WeatherSourceError(f"Geocoding failed for {query!r}: {e}") from e
    if not results:
        raise WeatherSourceError(f"Place not found: {query}")

    r = results[0]
    name = short_location_name(r.get("display_name"), r.get("address")) or query
    return Location(name=name, latitude=float(r["lat"]), longitude=float(r["lon"]))


def reverse_geocode(
    lat: float, lon: float, settings: Settings | None = None
) -> str | None:
    """Short display name for coordinates, or None if the lookup fails."""
    settings = _settings(settings)
    try:
        data = _get_json(
            f"{settings.nominatim_url}/reverse",
            {"lat": lat, "lon": lon, "format": "json"},
            settings,
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Reverse geocoding failed for (%s, %s): %s", lat, lon, e)
        return None
    return short_location_name(data.get("display_name"), data.get("address"))


def fetch_elevation(lat: float, lon: float, settings: Settings | None = None) -> float:
    """Ground elevation in metres; the altitude default on any failure."""
    settings = _settings(settings)
    try:
        data = _get_json(
            settings.elevation_url, {"latitude": lat, "longitude": lon}, settings
        )
        return float(round(data["elevation"][0]))
    except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning("Elevation lookup failed for (%s, %s): %s", lat, lon, e)
        return DEFAULT_ALTITUDE


def with_altitude(location: Location, settings: Settings | None = None) -> Location:
    altitude = fetch_elevation(location.latitude, location.longitude, settings)
    return Location(location.name, location.latitude, location.longitude, altitude)


def _normalize(values: Mapping[str, Any]) -> dict[str, Any]:
    """Open-Meteo variables → snapshot kwargs (visibility m → km, rain ≥ 0)."""
    fields: dict[str, Any] = {}
    for variable, field_name in _CURRENT_VARIABLES.items():
        value = values.get(variable)
        if value is not None:
            fields[field_name] = value
    if isinstance(fields.get("visibility"), (int, float)):
        fields["visibility"] = fields["visibility"] / 1000
    if isinstance(fields.get("precipitation"), (int, float)):
        fields["precipitation"] = max(0.0, fields["precipitation"])
    return fields


def _location_fields(location: Location) -> dict[str, float]:
    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "altitude": location.altitude,
    }


def _forecast(location: Location, params: dict[str, Any], settings: Settings) -> Any:
    base = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    }
    try:
        return _get_json(settings.forecast_url, {**base, **params}, settings)
    except (httpx.HTTPError, ValueError) as e:
        raise WeatherSourceError(f"Forecast unavailable for {location.name}: {e}") from e


def fetch_air_quality(
    location: Location, settings: Settings | None = None
) -> float | None:
    """Current US AQI, or None if the lookup fails."""
    settings = _settings(settings)
    try:
        data = _get_json(
            settings.air_quality_url,
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "current": "us_aqi",
            },
            settings,
        )
        return data["current"]["us_aqi"]
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        logger.warning("Air quality lookup failed for %s: %s", location.name, e)
        return None


def fetch_current_snapshot(
    location: Location, settings: Settings | None = None
) -> WeatherSnapshot:
    """Current conditions at a location, merged with its air quality.

    Raises:
        WeatherSourceError: When the forecast call fails.
    """
    settings = _settings(settings)
    data = _forecast(location, {"current": ",".join(_CURRENT_VARIABLES)}, settings)
    fields = _normalize(data.get("current") or {})
    fields.update(_location_fields(location))
    aqi = fetch_air_quality(location, settings)
    if aqi is not None:
        fields["air_quality"] = aqi
    return WeatherSnapshot(**fields)


def fetch_hourly_snapshots(
    location: Location, hours: int = 24, settings: Settings | None = None
) -> tuple[WeatherSnapshot, ...]:
    """One snapshot per forecast hour, starting at local midnight today.

    Hours are in the location's own timezone (``timezone=auto``).

    Hours missing from the response fall back to snapshot defaults. Air
    quality is merged hour by hour when available.

    Raises:
        WeatherSourceError: When the forecast call fails.
    """
    settings = _settings(settings)
    data = _forecast(
        location,
        {"hourly": ",".join(_CURRENT_VARIABLES), "forecast_days": 1, "timezone": "auto"},
        settings,
    )
    hourly: Mapping[str, list[Any]] = data.get("hourly") or {}

    aqi_series: list[Any] = []
    try:
        aqi_data = _get_json(
            settings.air_quality_url,
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "hourly": "us_aqi",
                "forecast_days": 1,
                "timezone": "auto",
            },
            settings,
        )
        aqi_series = aqi_data.get("hourly", {}).get("us_aqi") or []
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Hourly air quality lookup failed for %s: %s", location.name, e)

    snapshots = []
    for i in range(hours):
        values = {
            variable: series[i]
            for variable, series in hourly.items()
            if isinstance(series, list) and i < len(series)
        }
        fields = _normalize(values)
        fields.update(_location_fields(location))
        if i < len(aqi_series) and aqi_series[i] is not None:
            fields["air_quality"] = aqi_series[i]
        snapshots.append(WeatherSnapshot(**fields))
    return tuple(snapshots)


def clamp_hour(hour: int) -> int:
    return max(0, min(23, int(hour)))


def fetch_snapshot(
    query: str, hour: int | None = None, settings: Settings | None = None
) -> tuple[Location, WeatherSnapshot]:
    """Resolve a place and fetch its weather.

    Args:
        query: Place name.
        hour: Forecast hour (0–23, clamped) instead of current conditions.
        settings: Endpoint/timeout settings. Read from the environment if None.

    Returns:
        The resolved Location (with altitude) and its WeatherSnapshot.

    Raises:
        WeatherSourceError: When the place or its forecast cannot be fetched.
    """
    settings = _settings(settings)
    location = with_altitude(geocode_place(query, settings), settings)
    if hour is None:
        return location, fetch_current_snapshot(location, settings)
    snapshots = fetch_hourly_snapshots(location, settings=settings)
    return location, snapshots[clamp_hour(hour)]


def run(
    query: str,
    mode: RenderMode | str = RenderMode.RADIAL,
    rng: random.Random | None = None,
    settings: Settings | None = None,
) -> AuraDescriptor:
    """Top-level entry point: place name in, aura out.

    Args:
        query: Place name.
        mode: Render mode or its name.
        rng: Random source for the composer. Seeded from WEATHERAURA_SEED if None.
        settings: Endpoint/timeout settings. Read from the environment if None.

    Returns:
        Fully composed AuraDescriptor for the place's current weather.

    Raises:
        WeatherSourceError: When the place or its forecast cannot be fetched.
    """
    settings = _settings(settings)
    if rng is None:
        rng = random.Random(settings.seed)
    location, snapshot = fetch_snapshot(query, settings=settings)
    logger.info("Composing aura for %s", location.name)
    return compose_aura(snapshot, mode, rng)
