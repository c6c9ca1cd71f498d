"""Outline synthesis: cloud cover sets the polygon, severity turns it into a star."""

import math

from weatheraura.models import (
    CIRCLE_SIDES,
    SeverityResult,
    ShapeDescriptor,
    StarParams,
    WeatherType,
)

STAR_THRESHOLD = 0.1  # scores above this grow spikes
SMOOTH_THRESHOLD = 0.2  # smooth outlines below this get extra vertices
SMOOTH_MIN_VERTICES = 16
OUTER_RADIUS = 50.0  # percent of the aura box

# weather type → (min points, max points, point growth per unit score,
#                 sharpness base, sharpness slope, inner ratio base, inner ratio slope)
_STAR_PROFILES: dict[WeatherType, tuple[int, int, int, float, float, float, float]] = {
    WeatherType.THUNDERSTORM: (8, 16, 8, 0.40, 0.20, 0.30, 0.20),
    WeatherType.HEAVY_RAIN: (6, 12, 6, 0.30, 0.15, 0.40, 0.20),
    WeatherType.HEAVY_SNOW: (6, 12, 6, 0.25, 0.10, 0.45, 0.15),
    WeatherType.HIGH_WIND: (6, 10, 4, 0.35, 0.15, 0.35, 0.20),
    WeatherType.SHOWERS: (5, 8, 3, 0.20, 0.10, 0.50, 0.15),
    WeatherType.LIGHT_PRECIP: (4, 6, 2, 0.20, 0.05, 0.55, 0.10),
    WeatherType.FOG: (3, 5, 2, 0.15, 0.05, 0.60, 0.10),
    WeatherType.NORMAL: (3, 8, 5, 0.25, 0.15, 0.50, 0.20),
}


def polygon_sides(cloud_cover: float) -> int:
    """Base side count from cloud cover.

    0% is a circle (CIRCLE_SIDES); 0–30% interpolates from the circle down to
    a triangle; from 30% one side is added per 10% (30% → 3 … 100% → 10).
    """
    clouds = max(0.0, min(100.0, cloud_cover))
    if clouds == 0:
        return CIRCLE_SIDES
    if clouds < 30:
        return int(math.floor(CIRCLE_SIDES - clouds / 30 * (CIRCLE_SIDES - 3) + 0.5))
    return 3 + int(math.floor((clouds - 30) / 10))


def star_params(severity: SeverityResult, base_sides: int) -> StarParams | None:
    """Spike parameters for the severity's weather type, or None below the star threshold."""
    s = severity.score
    if s <= STAR_THRESHOLD:
        return None
    lo, hi, growth, sharp, sharp_slope, ratio, ratio_slope = _STAR_PROFILES[
        severity.weather_type
    ]
    points = max(lo, min(hi, base_sides + int(math.floor(s * growth))))
    return StarParams(
        points=points,
        spike_intensity=s,
        spike_sharpness=sharp + s * sharp_slope,
        inner_radius_ratio=ratio + s * ratio_slope,
    )


def polygon_vertices(sides: int) -> tuple[tuple[float, float], ...]:
    """Regular polygon inscribed in the aura box, first vertex at the top."""
    out = []
    for i in range(sides):
        angle = i * 2 * math.pi / sides - math.pi / 2
        out.append(
            (
                OUTER_RADIUS + OUTER_RADIUS * math.cos(angle),
                OUTER_RADIUS + OUTER_RADIUS * math.sin(angle),
            )
        )
    return tuple(out)


def star_vertices(star: StarParams) -> tuple[tuple[float, float], ...]:
    """Alternating outer/inner vertices; inner ones sit at the angular midpoints."""
    n = star.points
    inner = OUTER_RADIUS * (
        star.inner_radius_ratio
        + (1 - star.inner_radius_ratio) * (1 - star.spike_intensity)
    )
    # sharper spikes pull the inner vertices back toward the tips
    inner += star.spike_sharpness * (OUTER_RADIUS - inner)

    out = []
    for i in range(n):
        angle = i * 2 * math.pi / n - math.pi / 2
        mid = angle + math.pi / n
        out.append(
            (
                OUTER_RADIUS + OUTER_RADIUS * math.cos(angle),
                OUTER_RADIUS + OUTER_RADIUS * math.sin(angle),
            )
        )
        out.append((OUTER_RADIUS + inner * math.cos(mid), OUTER_RADIUS + inner * math.sin(mid)))
    return tuple(out)


def corner_smoothing(score: float) -> float:
    """Border-radius analogue in percent: fully round when calm, sharper as severity rises."""
    if score < STAR_THRESHOLD:
        return 50.0
    return (1 - score) * 50.0


def shape(cloud_cover: float, severity: SeverityResult) -> ShapeDescriptor:
    """Derive the aura outline.

    Args:
        cloud_cover: Cloud cover percentage (0–100).
        severity: Result of the severity model for the same snapshot.

    Returns:
        ShapeDescriptor with base side count, optional star parameters,
        corner smoothing and the outline vertices.
    """
    sides = polygon_sides(cloud_cover)
    star = star_params(severity, sides)
    if star is not None:
        vertices = star_vertices(star)
    else:
        count = sides
        if severity.score < SMOOTH_THRESHOLD:
            count = max(count, SMOOTH_MIN_VERTICES)
        vertices = polygon_vertices(count)
    return ShapeDescriptor(
        sides=sides,
        star=star,
        corner_smoothing=corner_smoothing(severity.score),
        vertices=vertices,
    )
