"""Dynamics derivation: wind, altitude and precipitation into layout/filter parameters."""

import math

from weatheraura.models import EffectParams, PrecipEffect, WindEffect

REFERENCE_PEAK_METERS = 8848.0  # calibration constant, kept for visual parity


def wind_effect(wind_speed: float) -> WindEffect:
    """Higher wind → more layers, wider spread, more chaotic mixing."""
    wind = max(0.0, wind_speed)
    return WindEffect(
        layers=max(2, min(8, int(math.floor(2 + wind / 25)))),
        spread=min(40.0, wind / 5),
        turbulence=wind / 100,
    )


def altitude_intensity(altitude: float) -> float:
    """0.5 at sea level to 1.0 at the reference peak. Not clamped beyond it."""
    return 0.5 + (altitude / REFERENCE_PEAK_METERS) * 0.5


def precipitation_effect(precipitation: float, temperature: float) -> PrecipEffect:
    precip = max(0.0, precipitation)
    intensity = min(1.0, precip / 50)
    return PrecipEffect(
        intensity=intensity,
        blur=precip / 10,
        desaturation=precip / 100,
        streak_count=int(math.floor(precip / 5)),
        droplet_count=int(math.floor(precip / 3)),
        is_snow=temperature < 0,
        vertical_shift=precip / 20,
        gloss_intensity=intensity * 0.6,
        particle_density=precip / 2,
        highlight_count=int(math.floor(precip / 4)),
    )


def derive_effects(
    wind_speed: float, altitude: float, precipitation: float, temperature: float
) -> EffectParams:
    return EffectParams(
        wind=wind_effect(wind_speed),
        altitude_intensity=altitude_intensity(altitude),
        precip=precipitation_effect(precipitation, temperature),
    )
