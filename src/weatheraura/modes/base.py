"""Shared layout machinery for the aura mode strategies.

Every strategy builds its own gradient layers, filter stack and shadow; the
outline, opacity and breathing period are common and assembled here.
Randomness only enters through the ``rng`` argument of ``layers`` and
``precipitation_layers`` so a seeded ``random.Random`` freezes the output.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from weatheraura.models import (
    HSLA,
    TRANSPARENT,
    AuraDescriptor,
    AuraInputs,
    ColorStop,
    Filter,
    GradientKind,
    GradientLayer,
    RenderMode,
    Shadow,
    WeatherSnapshot,
)

PRECIP_OVERLAY_THRESHOLD = 0.1
MIN_BREATHING_PERIOD = 0.8


def stop(hue: float, saturation: float, lightness: float, alpha: float, offset: float) -> ColorStop:
    return ColorStop(HSLA(hue % 360, saturation, lightness, alpha), offset)


def clear(offset: float) -> ColorStop:
    """Fully transparent stop."""
    return ColorStop(TRANSPARENT, offset)


def rain_angle(snapshot: WeatherSnapshot) -> float:
    """Rain falls down but tilts with the wind."""
    return (snapshot.wind_direction + 90) % 360


def wet_saturation(inputs: AuraInputs) -> float:
    """Palette saturation after precipitation desaturation."""
    return max(0.0, inputs.palette.saturation - inputs.effects.precip.desaturation * 100)


def streak_color(
    inputs: AuraInputs, snow: tuple[float, float], rain: tuple[float, float]
) -> HSLA:
    """Streak colour for the current precipitation kind.

    ``snow``/``rain`` are (lightness, alpha factor); alpha scales with intensity.
    """
    precip = inputs.effects.precip
    lightness, alpha_factor = snow if precip.is_snow else rain
    return HSLA(
        inputs.palette.temp_hue, wet_saturation(inputs), lightness, precip.intensity * alpha_factor
    )


def droplet_layers(
    inputs: AuraInputs, rng: random.Random, alpha: float, halo_alpha: float
) -> list[GradientLayer]:
    """Small water beads with a bright core and a softer halo."""
    precip = inputs.effects.precip
    hue = inputs.palette.temp_hue
    sat = wet_saturation(inputs)
    layers = []
    for _ in range(precip.droplet_count):
        x = 10 + rng.random() * 80
        y = 10 + rng.random() * 80
        size = 1 + rng.random() * 2
        core = HSLA(hue, sat, 95, precip.intensity * alpha)
        layers.append(
            GradientLayer(
                kind=GradientKind.RADIAL,
                center=(x, y),
                stops=(
                    ColorStop(core, 0.0),
                    ColorStop(core, size * 0.3),
                    ColorStop(HSLA(hue, sat, 80, precip.intensity * halo_alpha), size * 0.6),
                    clear(size),
                ),
            )
        )
    return layers


def base_filters(brightness: float, blur: float, inputs: AuraInputs) -> list[Filter]:
    """brightness → blur → saturate, the order every mode starts with."""
    return [
        Filter("brightness", brightness),
        Filter("blur", blur),
        Filter("saturate", max(0.0, 100 - inputs.effects.precip.desaturation * 50)),
    ]


def wet_gloss_filters(inputs: AuraInputs) -> list[Filter]:
    precip = inputs.effects.precip
    if precip.intensity <= PRECIP_OVERLAY_THRESHOLD:
        return []
    return [
        Filter("contrast", 1 + precip.gloss_intensity * 0.2),
        Filter("brightness", 1 + precip.gloss_intensity * 0.1),
    ]


def day_night(snapshot: WeatherSnapshot, night: float) -> float:
    return 1.0 if snapshot.is_day else night


def drop_shadow(
    inputs: AuraInputs, offset: float, blur: float, lightness: float, alpha: float
) -> Shadow:
    return Shadow(
        dx=offset,
        dy=offset,
        blur=blur,
        color=HSLA(inputs.palette.temp_hue, inputs.palette.saturation, lightness, alpha),
    )


def breathing_period(wind_speed: float) -> float:
    """Seconds per pulse. Faster breathing at higher wind, never below 0.8 s."""
    return max(2 - wind_speed / 100, MIN_BREATHING_PERIOD)


def cloud_opacity(cloud_cover: float) -> float:
    return 0.3 + (cloud_cover / 100) * 0.7


class ModeStrategy(ABC):
    """One geometric layout of gradient layers.

    Subclasses set ``mode`` and implement ``layers``, ``filters`` and
    ``shadow``; the rest has defaults.
    """

    mode: RenderMode

    @abstractmethod
    def layers(self, inputs: AuraInputs, rng: random.Random) -> list[GradientLayer]:
        """The mode's own gradient layers, top-most first."""

    def precipitation_layers(
        self, inputs: AuraInputs, rng: random.Random
    ) -> list[GradientLayer]:
        """Rain/snow overlays, only called when precipitation is noticeable."""
        return []

    @abstractmethod
    def filters(self, inputs: AuraInputs) -> list[Filter]:
        """Ordered filter chain."""

    @abstractmethod
    def shadow(self, inputs: AuraInputs) -> Shadow:
        """Drop shadow behind the outline."""

    def opacity(self, inputs: AuraInputs) -> float:
        """Mode-specific opacity factor applied on top of the cloud opacity."""
        return 1.0

    def rotation(self, inputs: AuraInputs) -> float:
        return 0.0

    def compose(self, inputs: AuraInputs, rng: random.Random) -> AuraDescriptor:
        """Assemble the full aura for this mode.

        Args:
            inputs: Derived parameters for one snapshot.
            rng: Random source for jittered sub-effects.

        Returns:
            AuraDescriptor for this mode.
        """
        layers = self.layers(inputs, rng)
        if inputs.effects.precip.intensity > PRECIP_OVERLAY_THRESHOLD:
            layers = layers + self.precipitation_layers(inputs, rng)
        snapshot = inputs.snapshot
        return AuraDescriptor(
            mode=self.mode,
            layers=tuple(layers),
            outline=inputs.shape,
            filters=tuple(self.filters(inputs)),
            shadow=self.shadow(inputs),
            opacity=cloud_opacity(snapshot.cloud_cover) * self.opacity(inputs),
            animation_period=breathing_period(snapshot.wind_speed),
            severity=inputs.severity,
            rotation=self.rotation(inputs),
        )
