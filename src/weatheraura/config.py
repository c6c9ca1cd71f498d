"""Environment-driven settings. Entry points call load_dotenv() before load_settings()."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    user_agent: str
    http_timeout: float  # seconds
    nominatim_url: str
    forecast_url: str
    elevation_url: str
    air_quality_url: str
    default_mode: str
    seed: int | None  # fixes the random source when set
    log_level: str
    log_dir: str | None  # rotating log file directory; console only when unset


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def load_settings() -> Settings:
    """Read WEATHERAURA_* environment variables, falling back to defaults."""
    return Settings(
        user_agent=os.environ.get(
            "WEATHERAURA_USER_AGENT", "WeatherAuraGenerator/1.0"
        ),
        http_timeout=_float_env("WEATHERAURA_HTTP_TIMEOUT", 10.0),
        nominatim_url=os.environ.get(
            "WEATHERAURA_NOMINATIM_URL", "https://nominatim.openstreetmap.org"
        ),
        forecast_url=os.environ.get(
            "WEATHERAURA_FORECAST_URL", "https://api.open-meteo.com/v1/forecast"
        ),
        elevation_url=os.environ.get(
            "WEATHERAURA_ELEVATION_URL", "https://api.open-meteo.com/v1/elevation"
        ),
        air_quality_url=os.environ.get(
            "WEATHERAURA_AIR_QUALITY_URL",
            "https://air-quality-api.open-meteo.com/v1/air-quality",
        ),
        default_mode=os.environ.get("WEATHERAURA_DEFAULT_MODE", "radial"),
        seed=_int_env("WEATHERAURA_SEED"),
        log_level=os.environ.get("WEATHERAURA_LOG_LEVEL", "INFO"),
        log_dir=os.environ.get("WEATHERAURA_LOG_DIR") or None,
    )
