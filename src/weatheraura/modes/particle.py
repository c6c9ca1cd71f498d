"""Particle mode: a pointillist cloud of small glows drifting downwind."""

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
    rain_angle,
    stop,
    streak_color,
)

MIN_PARTICLES = 30
MAX_PARTICLES = 200


def particle_count(inputs: AuraInputs) -> int:
    """30–200 dots; more wind and more precipitation mean more dots."""
    base = 50 + inputs.effects.wind.turbulence * 100
    density = base + inputs.effects.precip.particle_density
    return int(math.ceil(max(MIN_PARTICLES, min(MAX_PARTICLES, density))))


class ParticleMode(ModeStrategy):
    mode = RenderMode.PARTICLE

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        wind_rad = math.radians(inputs.snapshot.wind_direction)
        drift = wind.turbulence * 15
        spread = 20 + wind.spread * 2

        out = []
        for i in range(particle_count(inputs)):
            angle = rng.random() * 2 * math.pi
            distance = rng.random() * spread
            bias = (rng.random() - 0.5) * drift
            x = 50 + math.cos(angle) * distance + math.cos(wind_rad) * bias
            y = 50 + math.sin(angle) * distance + math.sin(wind_rad) * bias

            hue = i * 15 + palette.temp_hue + wind.turbulence * 60
            lightness = 30 + (i % 4) * 20
            size = 3 + rng.random() * 8 + wind.turbulence * 5
            alpha = 0.4 + rng.random() * 0.4
            out.append(
                GradientLayer(
                    kind=GradientKind.RADIAL,
                    center=(x, y),
                    stops=(
                        stop(hue, palette.saturation, lightness, alpha, 0.0),
                        stop(hue, palette.saturation, lightness, alpha * 0.5, size * 0.3),
                        clear(size),
                    ),
                )
            )
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        precip = inputs.effects.precip
        color = streak_color(inputs, snow=(90, 0.3), rain=(50, 0.4))
        angle = rain_angle(inputs.snapshot)
        length = 15 if precip.is_snow else 10

        out = []
        for _ in range(precip.streak_count):
            y = 10 + rng.random() * 80
            out.append(
                GradientLayer(
                    kind=GradientKind.LINEAR,
                    angle=angle,
                    stops=(clear(y - length), ColorStop(color, y), clear(y + length)),
                )
            )
        return out

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        brightness = inputs.effects.altitude_intensity * day_night(inputs.snapshot, 0.8)
        return base_filters(brightness, inputs.effects.precip.blur * 0.5, inputs)

    def shadow(self, inputs: AuraInputs) -> Shadow:
        return drop_shadow(
            inputs, offset=8, blur=25, lightness=20, alpha=0.2 * inputs.effects.altitude_intensity
        )
