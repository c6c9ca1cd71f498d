"""Aura composition: weather snapshot + render mode → AuraDescriptor.

Runs the four derivations (severity, outline, palette, effects) once and
hands the result to the selected mode strategy. The ``randomizer`` mode picks
one of the six concrete strategies with the injected random source.
"""

import logging
import random

from weatheraura.effects import derive_effects
from weatheraura.models import AuraDescriptor, AuraInputs, RenderMode, WeatherSnapshot
from weatheraura.modes.base import ModeStrategy
from weatheraura.modes.fractal import FractalMode
from weatheraura.modes.layered import LayeredMode
from weatheraura.modes.linear import LinearMode
from weatheraura.modes.particle import ParticleMode
from weatheraura.modes.radial import RadialMode
from weatheraura.modes.swirl import SwirlMode
from weatheraura.palette import derive_palette
from weatheraura.severity import score
from weatheraura.shape import shape

logger = logging.getLogger(__name__)

STRATEGIES: dict[RenderMode, ModeStrategy] = {
    strategy.mode: strategy
    for strategy in (
        RadialMode(),
        LayeredMode(),
        SwirlMode(),
        LinearMode(),
        ParticleMode(),
        FractalMode(),
    )
}


def resolve_mode(value: RenderMode | str | None) -> RenderMode:
    """Map a user-supplied mode selector to a RenderMode. Unknown values become RADIAL."""
    if isinstance(value, RenderMode):
        return value
    try:
        return RenderMode(str(value).strip().lower())
    except ValueError:
        logger.debug("Unknown render mode %r, falling back to radial", value)
        return RenderMode.RADIAL


def pick_strategy(mode: RenderMode, rng: random.Random) -> ModeStrategy:
    """Return the strategy for mode, drawing one uniformly for RANDOMIZER."""
    if mode is RenderMode.RANDOMIZER:
        mode = rng.choice(RenderMode.concrete())
        logger.debug("Randomizer picked %s", mode.value)
    return STRATEGIES[mode]


def build_inputs(snapshot: WeatherSnapshot) -> AuraInputs:
    """Run the deterministic derivations shared by every mode."""
    severity = score(snapshot)
    return AuraInputs(
        snapshot=snapshot,
        severity=severity,
        shape=shape(snapshot.cloud_cover, severity),
        palette=derive_palette(
            snapshot.latitude,
            snapshot.longitude,
            snapshot.temperature,
            snapshot.air_quality,
        ),
        effects=derive_effects(
            snapshot.wind_speed,
            snapshot.altitude,
            snapshot.precipitation,
            snapshot.temperature,
        ),
    )


def compose_aura(
    snapshot: WeatherSnapshot,
    mode: RenderMode | str | None = RenderMode.RADIAL,
    rng: random.Random | None = None,
) -> AuraDescriptor:
    """Compose the aura for one snapshot under one render mode.

    Args:
        snapshot: Weather reading. Missing values were defaulted at construction.
        mode: Render mode or its name. Unknown names fall back to radial.
        rng: Random source for the randomizer pick and jittered overlays.
            Defaults to an unseeded ``random.Random``; pass a seeded instance
            for reproducible output.

    Returns:
        AuraDescriptor whose ``mode`` is the concrete mode actually used.
    """
    if rng is None:
        rng = random.Random()
    strategy = pick_strategy(resolve_mode(mode), rng)
    return strategy.compose(build_inputs(snapshot), rng)
