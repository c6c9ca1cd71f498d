"""Data model definitions: explicit boundaries between input, derivation, and render layers."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class RenderMode(str, Enum):
    """Aura layout modes. RANDOMIZER resolves to one of the concrete modes per call."""

    RADIAL = "radial"
    LAYERED = "layered"
    SWIRL = "swirl"
    LINEAR = "linear"
    PARTICLE = "particle"
    FRACTAL = "fractal"
    RANDOMIZER = "randomizer"

    @classmethod
    def concrete(cls) -> tuple["RenderMode", ...]:
        """All modes that have a layout strategy (everything but RANDOMIZER)."""
        return tuple(m for m in cls if m is not cls.RANDOMIZER)


class WeatherType(str, Enum):
    NORMAL = "normal"
    FOG = "fog"
    LIGHT_PRECIP = "light_precip"
    SHOWERS = "showers"
    HEAVY_RAIN = "heavy_rain"
    HEAVY_SNOW = "heavy_snow"
    HIGH_WIND = "high_wind"
    THUNDERSTORM = "thunderstorm"


class GradientKind(str, Enum):
    RADIAL = "radial"
    LINEAR = "linear"
    CONIC = "conic"


def _finite(value: Any, default: float) -> float:
    """Coerce value to a finite float, or return default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# Physical bounds for readings; keeps derived hues, blurs and layer counts finite
_BOUNDS: dict[str, tuple[float, float]] = {
    "temperature": (-100.0, 100.0),  # °C
    "cloud_cover": (0.0, 100.0),
    "wind_speed": (0.0, 500.0),  # km/h
    "precipitation": (0.0, 500.0),  # mm/h
    "humidity": (0.0, 100.0),
    "pressure": (800.0, 1100.0),  # hPa
    "uv_index": (0.0, 20.0),
    "visibility": (0.0, 100.0),  # km
    "air_quality": (0.0, 500.0),
    "altitude": (-500.0, 9000.0),  # metres
    "latitude": (-90.0, 90.0),
    "longitude": (-180.0, 180.0),
}


# camelCase names used by upstream weather payloads → field names
_CAMEL_ALIASES: dict[str, str] = {
    "cloudCover": "cloud_cover",
    "windSpeed": "wind_speed",
    "windDirection": "wind_direction",
    "uvIndex": "uv_index",
    "isDay": "is_day",
    "weatherCode": "weather_code",
    "airQuality": "air_quality",
    "lat": "latitude",
    "lon": "longitude",
}


@dataclass(frozen=True)
class WeatherSnapshot:
    """One weather reading for one place. Every field is finite after construction.

    Missing (None), NaN or unparsable values fall back to the defaults below;
    out-of-range values are clamped rather than rejected.
    """

    temperature: float = 20.0  # °C
    cloud_cover: float = 50.0  # %, 0–100
    wind_speed: float = 10.0  # km/h
    wind_direction: float = 0.0  # compass bearing, degrees
    precipitation: float = 0.0  # mm/h
    humidity: float = 50.0  # %, 0–100
    pressure: float = 1013.0  # hPa
    uv_index: float = 5.0
    visibility: float = 10.0  # km
    is_day: bool = True
    weather_code: int = 0  # WMO code
    air_quality: float = 50.0  # US AQI
    altitude: float = 100.0  # metres
    latitude: float = 40.7128
    longitude: float = -74.0060

    def __post_init__(self) -> None:
        defaults = {f.name: f.default for f in fields(self)}
        coerced: dict[str, Any] = {
            name: _finite(getattr(self, name), default)
            for name, default in defaults.items()
            if name not in ("is_day", "weather_code")
        }
        for name, (low, high) in _BOUNDS.items():
            coerced[name] = _clamp(coerced[name], low, high)
        coerced["wind_direction"] = coerced["wind_direction"] % 360.0
        coerced["weather_code"] = int(_finite(self.weather_code, 0.0))
        is_day = self.is_day
        if isinstance(is_day, bool):
            coerced["is_day"] = is_day
        elif isinstance(is_day, str):
            coerced["is_day"] = is_day.strip().lower() not in ("0", "false", "no")
        else:
            # Open-Meteo sends 0/1; None falls back to daytime
            coerced["is_day"] = bool(_finite(is_day, 1.0))
        for name, value in coerced.items():
            object.__setattr__(self, name, value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WeatherSnapshot":
        """Build a snapshot from a loosely-typed mapping (camelCase or snake_case keys).

        Unknown keys are ignored; missing keys take their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class Location:
    """Result of geocoding + elevation lookup. Input to the weather fetch."""

    name: str  # Short display name ("St. Louis, MO")
    latitude: float
    longitude: float
    altitude: float = 100.0  # metres


@dataclass(frozen=True)
class SeverityFactor:
    name: str  # "weatherCode", "wind", "precipitation", "visibility", "cloudCover"
    value: float  # 0–1 sub-score
    weight: float


@dataclass(frozen=True)
class SeverityResult:
    """Inclement-weather score with the factors that produced it."""

    score: float  # 0–1 weighted average of factors
    weather_type: WeatherType
    factors: tuple[SeverityFactor, ...]

    def factor(self, name: str) -> SeverityFactor:
        """Look up a factor by name. Raises KeyError if absent."""
        for f in self.factors:
            if f.name == name:
                return f
        raise KeyError(name)


@dataclass(frozen=True)
class FactorContribution:
    """A factor's share of the final score, for explanation UIs."""

    name: str
    value: float
    weight: float
    contribution: float  # value * weight
    share: float  # contribution / score (0 when score is 0)


@dataclass(frozen=True)
class StarParams:
    points: int
    spike_intensity: float  # 0 = regular polygon, 1 = deepest spikes
    spike_sharpness: float
    inner_radius_ratio: float


CIRCLE_SIDES = 999


@dataclass(frozen=True)
class ShapeDescriptor:
    """Outline the aura is clipped to. Coordinates are percent of the aura box."""

    sides: int  # base side count from cloud cover; CIRCLE_SIDES = circle
    star: StarParams | None
    corner_smoothing: float  # border-radius analogue, percent (50 = round)
    vertices: tuple[tuple[float, float], ...]

    @property
    def is_circle(self) -> bool:
        return self.star is None and self.sides >= CIRCLE_SIDES

    @property
    def is_star(self) -> bool:
        return self.star is not None


@dataclass(frozen=True)
class PaletteParams:
    base_hue: float  # [0, 360)
    temp_hue: float  # [0, 360)
    saturation: float  # [0, 100]


@dataclass(frozen=True)
class WindEffect:
    layers: int  # 2–8
    spread: float  # 0–40
    turbulence: float  # wind / 100


@dataclass(frozen=True)
class PrecipEffect:
    intensity: float  # 0–1
    blur: float  # px
    desaturation: float
    streak_count: int
    droplet_count: int
    is_snow: bool
    vertical_shift: float
    gloss_intensity: float
    particle_density: float
    highlight_count: int


@dataclass(frozen=True)
class EffectParams:
    wind: WindEffect
    altitude_intensity: float  # 0.5–1.0 for altitudes within the reference peak
    precip: PrecipEffect


@dataclass(frozen=True)
class HSLA:
    hue: float
    saturation: float  # percent
    lightness: float  # percent
    alpha: float = 1.0


TRANSPARENT = HSLA(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ColorStop:
    color: HSLA
    offset: float  # percent for radial/linear, degrees for conic


@dataclass(frozen=True)
class GradientLayer:
    """One background gradient. Layers are listed top-most first."""

    kind: GradientKind
    stops: tuple[ColorStop, ...]
    center: tuple[float, float] = (50.0, 50.0)  # percent; radial/conic anchor
    angle: float = 0.0  # degrees; linear direction or conic start
    ellipse: bool = False  # radial only: ellipse instead of circle


@dataclass(frozen=True)
class Filter:
    name: str  # "brightness", "blur", "saturate", "contrast"
    value: float  # multiplier, except blur (px) and saturate (percent)


@dataclass(frozen=True)
class Shadow:
    dx: float
    dy: float
    blur: float
    color: HSLA


@dataclass(frozen=True)
class AuraInputs:
    """Everything a mode strategy needs. Built once per composition."""

    snapshot: WeatherSnapshot
    severity: SeverityResult
    shape: ShapeDescriptor
    palette: PaletteParams
    effects: EffectParams


@dataclass(frozen=True)
class AuraDescriptor:
    """The sole input to renderers. Fully computed state."""

    mode: RenderMode  # concrete mode actually used
    layers: tuple[GradientLayer, ...]
    outline: ShapeDescriptor
    filters: tuple[Filter, ...]
    shadow: Shadow
    opacity: float
    animation_period: float  # seconds per breathing cycle
    severity: SeverityResult
    rotation: float = 0.0  # post-transform, degrees
    size: int = field(default=400)  # nominal box size in px
