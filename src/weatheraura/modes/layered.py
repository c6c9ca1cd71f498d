"""Layered mode: stacked concentric bands, linear ones mixed in when the wind is rough."""

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
    droplet_layers,
    rain_angle,
    stop,
    streak_color,
    wet_gloss_filters,
)

LINEAR_TURBULENCE = 0.5
STANDARD_PRESSURE = 1013.0


class LayeredMode(ModeStrategy):
    mode = RenderMode.LAYERED

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        wind_dir = inputs.snapshot.wind_direction
        wind_rad = math.radians(wind_dir)
        use_linear = wind.turbulence > LINEAR_TURBULENCE
        n = wind.layers

        out = []
        for i in range(n):
            progress = i / (n - 1)
            hue = palette.temp_hue + progress * 60
            lightness = 50 + progress * 20
            alpha = 0.8 - progress * 0.3
            if use_linear and i % 2 == 0:
                out.append(
                    GradientLayer(
                        kind=GradientKind.LINEAR,
                        angle=(wind_dir + i * 30) % 360,
                        stops=(
                            stop(hue, palette.saturation, lightness, alpha, 0.0),
                            clear(50 + wind.spread),
                        ),
                    )
                )
            else:
                drift = wind.turbulence * 8 * progress
                start = progress * 30
                out.append(
                    GradientLayer(
                        kind=GradientKind.RADIAL,
                        center=(50 + math.cos(wind_rad) * drift, 50 + math.sin(wind_rad) * drift),
                        stops=(
                            stop(hue, palette.saturation, lightness, alpha, start),
                            clear(start + 20 + wind.spread),
                        ),
                    )
                )
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        count = inputs.effects.precip.streak_count
        color = streak_color(inputs, snow=(85, 0.35), rain=(65, 0.45))
        angle = rain_angle(inputs.snapshot)

        out = []
        for i in range(count):
            x = 10 + i * (80 / max(1, count))
            length = 10 + rng.random() * 15
            out.append(
                GradientLayer(
                    kind=GradientKind.LINEAR,
                    angle=angle,
                    stops=(
                        clear(x - length),
                        ColorStop(color, x),
                        ColorStop(color, x + 1),
                        clear(x + length),
                    ),
                )
            )
        return out + droplet_layers(inputs, rng, alpha=0.5, halo_alpha=0.25)

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        brightness = inputs.effects.altitude_intensity * day_night(inputs.snapshot, 0.75)
        return base_filters(brightness, inputs.effects.precip.blur, inputs) + wet_gloss_filters(
            inputs
        )

    def shadow(self, inputs: AuraInputs) -> Shadow:
        # low pressure pushes the shadow further out
        anomaly = (STANDARD_PRESSURE - inputs.snapshot.pressure) / 50
        return drop_shadow(
            inputs,
            offset=15 + anomaly,
            blur=40,
            lightness=15,
            alpha=0.4 * inputs.effects.altitude_intensity,
        )
