"""Linear mode: crossing linear washes fanned out from the wind direction."""

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


def uv_brightness(uv_index: float) -> float:
    """UV 0 → 1.0, UV 11 → 1.2."""
    return 1 + (uv_index / 11) * 0.2


class LinearMode(ModeStrategy):
    mode = RenderMode.LINEAR

    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        wind = inputs.effects.wind
        palette = inputs.palette
        sat = palette.saturation
        base_angle = inputs.snapshot.wind_direction + wind.turbulence * 180
        n = wind.layers

        out = []
        for i in range(n):
            progress = i / (n - 1)
            hue = palette.temp_hue + progress * 80
            lightness = 40 + progress * 30
            out.append(
                GradientLayer(
                    kind=GradientKind.LINEAR,
                    angle=(base_angle + i * 45) % 360,
                    stops=(
                        stop(hue, sat, lightness, 0.9 - progress * 0.4, 0.0),
                        stop(hue + 40, sat, lightness - 10, 0.7 - progress * 0.3, 50.0),
                        clear(100.0),
                    ),
                )
            )
        return out

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        precip = inputs.effects.precip
        color = streak_color(inputs, snow=(90, 0.5), rain=(60, 0.6))
        angle = rain_angle(inputs.snapshot)
        shift = precip.vertical_shift

        streak = GradientLayer(
            kind=GradientKind.LINEAR,
            angle=angle,
            stops=(ColorStop(color, 0.0), ColorStop(color, 50 - shift), clear(50 + shift)),
        )
        # identical washes stack into a denser curtain
        out = [streak] * (precip.streak_count * 2)
        return out + droplet_layers(inputs, rng, alpha=0.5, halo_alpha=0.25)

    def filters(self, inputs: AuraInputs) -> list[Filter]:
        snapshot = inputs.snapshot
        brightness = (
            inputs.effects.altitude_intensity
            * uv_brightness(snapshot.uv_index)
            * day_night(snapshot, 0.75)
        )
        return base_filters(brightness, inputs.effects.precip.blur, inputs) + wet_gloss_filters(
            inputs
        )

    def shadow(self, inputs: AuraInputs) -> Shadow:
        return drop_shadow(
            inputs, offset=20, blur=45, lightness=20, alpha=0.4 * inputs.effects.altitude_intensity
        )
