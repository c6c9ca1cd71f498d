"""Colour derivation: place sets the hue, temperature shifts it, air quality mutes it."""

from weatheraura.models import PaletteParams

AQI_SATURATION_CEILING = 300.0  # calibration constant, kept for visual parity

# (upper bound inclusive, category key)
_AQI_CATEGORIES: tuple[tuple[float, str], ...] = (
    (50, "good"),
    (100, "moderate"),
    (150, "sensitive"),
    (200, "unhealthy"),
    (300, "very_unhealthy"),
)


def _wrap_hue(hue: float) -> float:
    """Wrap into [0, 360). Guards the float case where x % 360 == 360.0."""
    wrapped = hue % 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def base_hue(lat: float, lon: float) -> float:
    lat_norm = (lat + 90) / 180 * 360
    lon_norm = (lon + 180) / 360 * 360
    return _wrap_hue(lat_norm + lon_norm)


def temperature_hue(hue: float, temperature: float) -> float:
    """Shift hue by temperature: −40 °C → +120° (toward blue), 50 °C → −60° (toward red)."""
    normalized = (temperature + 40) / 90
    return _wrap_hue(hue + (120 - normalized * 180))


def air_quality_saturation(aqi: float) -> float:
    """Cleaner air is more saturated: 80% at AQI 0 down to 30% at the ceiling."""
    normalized = min(max(aqi, 0.0) / AQI_SATURATION_CEILING, 1.0)
    return 80 - normalized * 50


def air_quality_category(aqi: float) -> str:
    """US AQI category key ("good" … "hazardous"), translated by i18n."""
    for upper, key in _AQI_CATEGORIES:
        if aqi <= upper:
            return key
    return "hazardous"


def derive_palette(
    lat: float, lon: float, temperature: float, air_quality: float
) -> PaletteParams:
    hue = base_hue(lat, lon)
    return PaletteParams(
        base_hue=hue,
        temp_hue=temperature_hue(hue, temperature),
        saturation=air_quality_saturation(air_quality),
    )
