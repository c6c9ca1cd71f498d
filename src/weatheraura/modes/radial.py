"""Radial mode: overlapping radial glows around a wind-pushed centre."""

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
    base_filters,
    clear,
    day_night,
    drop_shadow,
    droplet_layers,
    rain_angle,
    stop,
    streak_color,
    wet_gloss_filters,
    wet_saturation,
)


class RadialMode(ModeStrategy):
    mode = RenderMode.RADIAL

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        n = wind.layers

        # wind pushes every glow the same way
        wind_rad = math.radians(inputs.snapshot.wind_direction)
        push = wind.turbulence * 10
        push_x = math.cos(wind_rad) * push
        push_y = math.sin(wind_rad) * push

        out = []
        for i in range(n):
            angle = math.radians(i * 360 / n + wind.turbulence * i * 30)
            cx = 50 + math.sin(angle) * wind.spread + push_x
            cy = 50 + math.cos(angle) * wind.spread + push_y
            out.append(
                GradientLayer(
                    kind=GradientKind.RADIAL,
                    center=(cx, cy),
                    stops=(
                        stop(palette.temp_hue + i * 20, palette.saturation, 40 + (i % 2) * 20, 1.0, 0.0),
                        clear(60 + wind.turbulence * 20),
                    ),
                )
            )
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        precip = inputs.effects.precip
        angle = rain_angle(inputs.snapshot)
        color = streak_color(inputs, snow=(90, 0.4), rain=(70, 0.5))

        out = []
        count = precip.streak_count
        for i in range(count):
            x = i * (100 / max(1, count)) + (rng.random() * 10 - 5)
            length = 15 + rng.random() * 20
            out.append(
                GradientLayer(
                    kind=GradientKind.LINEAR,
                    angle=angle,
                    stops=(
                        clear(max(0.0, x - length / 2)),
                        ColorStop(color, x - 1),
                        ColorStop(color, x),
                        ColorStop(color, x + 1),
                        clear(min(100.0, x + length / 2)),
                    ),
                )
            )

        out += droplet_layers(inputs, rng, alpha=0.6, halo_alpha=0.3)

        # wet-surface reflections follow the light direction
        gloss = HSLA(inputs.palette.temp_hue, wet_saturation(inputs), 90, precip.gloss_intensity * 0.4)
        highlight_angle = (inputs.snapshot.wind_direction + 45) % 360
        for _ in range(precip.highlight_count):
            y = rng.random() * 100
            size = 5 + rng.random() * 10
            out.append(
                GradientLayer(
                    kind=GradientKind.LINEAR,
                    angle=highlight_angle,
                    stops=(clear(y - size), ColorStop(gloss, y), clear(y + size)),
                )
            )
        return out

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        snapshot = inputs.snapshot
        uv_brightness = 1 + (snapshot.uv_index / 11) * 0.3
        brightness = inputs.effects.altitude_intensity * uv_brightness * day_night(snapshot, 0.7)
        humidity_blur = snapshot.humidity / 100 * 3
        return base_filters(
            brightness, humidity_blur + inputs.effects.precip.blur, inputs
        ) + wet_gloss_filters(inputs)

    def shadow(self, inputs: AuraInputs) -> Shadow:
        wind = inputs.effects.wind
        alt = inputs.effects.altitude_intensity
        return drop_shadow(
            inputs,
            offset=min(20.0, wind.turbulence * 15),
            blur=30 + alt * 20,
            lightness=20,
            alpha=0.3 + alt * 0.2,
        )

    def opacity(self, inputs: AuraInputs) -> float:
        """Poor visibility fades the aura."""
        return min(1.0, inputs.snapshot.visibility / 10)
