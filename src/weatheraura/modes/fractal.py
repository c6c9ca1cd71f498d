"""Fractal mode: a tessellated grid of diamonds, ring pairs and crosses."""

import math
import random

from weatheraura.models import (
    HSLA,
    AuraInputs,
    ColorStop,
    Filter,
    GradientKind,
    GradientLayer,
    RenderMode,
    Shadow,
)
from weatheraura.modes.base import (
    ModeStrategy,
    clear,
    day_night,
    drop_shadow,
    rain_angle,
    stop,
    streak_color,
)

MIN_GRID = 6
RINGS_PER_CELL = 2
CLEAR_CODES = (0, 1)
FOG_CODES = (45, 49)

# sub-pattern selected by (i + j) % 3
DIAMOND, RINGS, CROSS = 0, 1, 2


def grid_size(inputs: AuraInputs) -> int:
    return max(MIN_GRID, int(math.floor(inputs.effects.wind.layers * 1.5)))


def clarity_contrast(weather_code: int) -> float:
    """Clear sky sharpens the pattern, fog flattens it."""
    if weather_code in CLEAR_CODES:
        return 1.2
    if FOG_CODES[0] <= weather_code <= FOG_CODES[1]:
        return 0.8
    return 1.0


def _band(angle: float, center: float, half_width: float, color: HSLA) -> GradientLayer:
    """A thin linear band peaking at ``center``."""
    return GradientLayer(
        kind=GradientKind.LINEAR,
        angle=angle % 360,
        stops=(
            clear(center - half_width),
            ColorStop(color, center),
            clear(center + half_width),
        ),
    )


class FractalMode(ModeStrategy):
    mode = RenderMode.FRACTAL

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        sat = palette.saturation
        wind_dir = inputs.snapshot.wind_direction
        g = grid_size(inputs)
        cell = 100 / g

        out: list[GradientLayer] = []
        for i in range(g):
            for j in range(g):
                cx = i * cell + cell / 2
                cy = j * cell + cell / 2
                hue = palette.temp_hue + (i + j) * 25 + wind.turbulence * 40
                lightness = 40 + ((i + j) % 3) * 25
                pattern = (i + j) % 3

                if pattern == DIAMOND:
                    angle = wind_dir + (i + j) * 30
                    half = cell * 0.6 / 2
                    color = HSLA(hue % 360, sat, lightness, 0.8)
                    out.append(_band(angle, cx, half, color))
                    out.append(_band(angle + 90, cy, half, color))
                elif pattern == RINGS:
                    for ring in range(RINGS_PER_CELL):
                        r = (cell * 0.4) / RINGS_PER_CELL * (ring + 1)
                        out.append(
                            GradientLayer(
                                kind=GradientKind.RADIAL,
                                center=(cx, cy),
                                stops=(
                                    clear(r * 0.7),
                                    stop(hue, sat, lightness, 0.6, r * 0.7),
                                    stop(hue, sat, lightness, 0.3, r),
                                    clear(r * 1.2),
                                ),
                            )
                        )
                else:
                    half = cell * 0.15
                    color = HSLA(hue % 360, sat, lightness, 0.7)
                    out.append(_band(wind_dir, cx, half, color))
                    out.append(_band(wind_dir + 90, cy, half, color))
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        color = streak_color(inputs, snow=(90, 0.2), rain=(50, 0.3))
        angle = rain_angle(inputs.snapshot)
        return [
            _band(angle, rng.random() * 100, 5, color)
            for _ in range(inputs.effects.precip.streak_count)
        ]

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        effects = inputs.effects
        snapshot = inputs.snapshot
        brightness = effects.altitude_intensity * day_night(snapshot, 0.7)
        contrast = (1 + effects.wind.turbulence) * clarity_contrast(snapshot.weather_code)
        return [
            Filter("brightness", brightness),
            Filter("contrast", contrast),
            Filter("blur", effects.precip.blur * 0.3),
            Filter("saturate", 100 - effects.precip.desaturation * 50),
        ]

    def shadow(self, inputs: AuraInputs) -> Shadow:
        return drop_shadow(
            inputs, offset=10, blur=35, lightness=25, alpha=0.3 * inputs.effects.altitude_intensity
        )
