"""Swirl mode: a two-turn spiral of shrinking glows over a conic base, rotated by the wind."""

import math
import random

from weatheraura.models import (
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
    base_filters,
    clear,
    day_night,
    drop_shadow,
    stop,
    streak_color,
)

SPIRAL_TURNS_DEG = 720
SPIRAL_MAX_RADIUS = 40


def swirl_rotation(inputs: AuraInputs) -> float:
    """Wind direction, or a turbulence-driven angle when the bearing is exactly north."""
    direction = inputs.snapshot.wind_direction
    if direction:
        return direction
    return inputs.effects.wind.turbulence * 45


class SwirlMode(ModeStrategy):
    mode = RenderMode.SWIRL

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        sat = palette.saturation
        rotation = swirl_rotation(inputs)
        count = max(4, wind.layers * 2)

        out = []
        for i in range(count):
            progress = i / count
            angle = math.radians((rotation + progress * SPIRAL_TURNS_DEG) % 360)
            radius = progress * SPIRAL_MAX_RADIUS
            hue = palette.temp_hue + i * 25
            lightness = 45 + (i % 3) * 20
            size = 30 + (1 - progress) * 25  # larger near the centre
            out.append(
                GradientLayer(
                    kind=GradientKind.RADIAL,
                    center=(50 + math.cos(angle) * radius, 50 + math.sin(angle) * radius),
                    stops=(
                        stop(hue, sat, lightness, 0.7 - progress * 0.4, 0.0),
                        stop(hue, sat, lightness - 10, 0.5 - progress * 0.3, size * 0.4),
                        clear(size),
                    ),
                )
            )

        hue = palette.temp_hue
        out.append(
            GradientLayer(
                kind=GradientKind.CONIC,
                angle=rotation,
                stops=(
                    stop(hue, sat, 55, 1.0, 0.0),
                    stop(hue + 40, sat, 50, 1.0, 120.0),
                    stop(hue + 80, sat, 45, 1.0, 240.0),
                    stop(hue, sat, 55, 1.0, 360.0),
                ),
            )
        )
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        rotation = swirl_rotation(inputs)
        count = inputs.effects.precip.streak_count * 2
        color = streak_color(inputs, snow=(90, 0.2), rain=(60, 0.3))

        out = []
        for i in range(count):
            angle = math.radians(i * 360 / count + rotation)
            radius = 30 + (i % 3) * 10
            out.append(
                GradientLayer(
                    kind=GradientKind.RADIAL,
                    ellipse=True,
                    center=(50 + math.cos(angle) * radius, 50 + math.sin(angle) * radius),
                    stops=(ColorStop(color, 0.0), clear(15.0)),
                )
            )
        return out

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        effects = inputs.effects
        brightness = effects.altitude_intensity * day_night(inputs.snapshot, 0.7)
        return base_filters(brightness, effects.wind.turbulence * 2 + effects.precip.blur, inputs)

    def shadow(self, inputs: AuraInputs) -> Shadow:
        return drop_shadow(
            inputs,
            offset=min(25.0, inputs.effects.wind.turbulence * 20),
            blur=50,
            lightness=10,
            alpha=0.5 * inputs.effects.altitude_intensity,
        )

    def rotation(self, inputs: AuraInputs) -> float:
        return swirl_rotation(inputs)
