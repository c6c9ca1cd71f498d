"""Tests for the six mode strategies and their shared machinery."""

from __future__ import annotations

import random

import pytest

from weatheraura.compose import STRATEGIES, build_inputs
from weatheraura.models import GradientKind, RenderMode, WeatherSnapshot
from weatheraura.modes.base import breathing_period, cloud_opacity, rain_angle
from weatheraura.modes.fractal import CROSS, DIAMOND, RINGS, clarity_contrast, grid_size
from weatheraura.modes.linear import uv_brightness
from weatheraura.modes.particle import MAX_PARTICLES, MIN_PARTICLES, particle_count
from weatheraura.modes.swirl import swirl_rotation

ALL_MODES = list(RenderMode.concrete())


def _filters(descriptor):
    return [f.name for f in descriptor.filters]


@pytest.mark.parametrize("mode", ALL_MODES)
def test_every_mode_composes_a_complete_descriptor(mode, storm_snapshot, rng):
    descriptor = STRATEGIES[mode].compose(build_inputs(storm_snapshot), rng)
    assert descriptor.mode is mode
    assert descriptor.layers
    assert descriptor.outline.vertices
    assert descriptor.filters
    assert 0 < descriptor.opacity <= 1
    assert descriptor.animation_period >= 0.8
    for layer in descriptor.layers:
        assert layer.stops
        for s in layer.stops:
            assert 0 <= s.color.hue < 360
            assert s.color.alpha >= 0


@pytest.mark.parametrize("mode", ALL_MODES)
def test_every_mode_renders_an_all_default_snapshot(mode, calm_snapshot, rng):
    descriptor = STRATEGIES[mode].compose(build_inputs(calm_snapshot), rng)
    assert descriptor.layers
    assert descriptor.severity.weather_type.value == "normal"


@pytest.mark.parametrize("mode", ALL_MODES)
def test_filters_start_with_brightness(mode, calm_snapshot, rng):
    descriptor = STRATEGIES[mode].compose(build_inputs(calm_snapshot), rng)
    assert _filters(descriptor)[0] == "brightness"
    assert "saturate" in _filters(descriptor)


def test_breathing_period():
    assert breathing_period(0) == 2
    assert breathing_period(50) == pytest.approx(1.5)
    assert breathing_period(500) == 0.8


def test_opacity_follows_cloud_cover_and_radial_visibility(rng):
    clear_day = build_inputs(WeatherSnapshot(cloud_cover=0))
    foggy = build_inputs(WeatherSnapshot(cloud_cover=100, visibility=2))
    radial = STRATEGIES[RenderMode.RADIAL]
    assert radial.compose(clear_day, rng).opacity == pytest.approx(cloud_opacity(0))
    assert radial.compose(foggy, rng).opacity == pytest.approx(1.0 * 0.2)
    layered = STRATEGIES[RenderMode.LAYERED]
    assert layered.compose(foggy, rng).opacity == pytest.approx(1.0)


def test_rain_angle_tilts_with_wind():
    assert rain_angle(WeatherSnapshot(wind_direction=0)) == 90
    assert rain_angle(WeatherSnapshot(wind_direction=300)) == 30


def test_precipitation_overlays_only_when_noticeable(rng):
    dry = build_inputs(WeatherSnapshot(precipitation=5))  # intensity exactly 0.1
    wet = build_inputs(WeatherSnapshot(precipitation=20))
    radial = STRATEGIES[RenderMode.RADIAL]
    assert len(radial.compose(dry, rng).layers) == dry.effects.wind.layers
    assert len(radial.compose(wet, rng).layers) > wet.effects.wind.layers


def test_wet_gloss_filters(rng):
    wet = build_inputs(WeatherSnapshot(precipitation=20))
    dry = build_inputs(WeatherSnapshot())
    for mode in (RenderMode.RADIAL, RenderMode.LAYERED, RenderMode.LINEAR):
        assert "contrast" in _filters(STRATEGIES[mode].compose(wet, rng))
        assert "contrast" not in _filters(STRATEGIES[mode].compose(dry, rng))


def test_night_dims_brightness(rng):
    day = build_inputs(WeatherSnapshot(is_day=True))
    night = build_inputs(WeatherSnapshot(is_day=False))
    for mode in ALL_MODES:
        strategy = STRATEGIES[mode]
        day_b = strategy.compose(day, rng).filters[0].value
        night_b = strategy.compose(night, rng).filters[0].value
        assert night_b < day_b


def test_radial_highlights_follow_wind(rng):
    inputs = build_inputs(WeatherSnapshot(precipitation=20, wind_direction=100))
    layers = STRATEGIES[RenderMode.RADIAL].precipitation_layers(inputs, rng)
    angles = {layer.angle for layer in layers if layer.kind is GradientKind.LINEAR}
    assert 145 in angles  # highlights at wind + 45
    assert 190 in angles  # streaks at wind + 90


def test_layered_switches_to_linear_in_rough_wind(rng):
    calm = build_inputs(WeatherSnapshot(wind_speed=20))
    rough = build_inputs(WeatherSnapshot(wind_speed=80))
    layered = STRATEGIES[RenderMode.LAYERED]
    assert {layer.kind for layer in layered.layers(calm, rng)} == {GradientKind.RADIAL}
    assert GradientKind.LINEAR in {layer.kind for layer in layered.layers(rough, rng)}


def test_layered_shadow_grows_with_low_pressure():
    layered = STRATEGIES[RenderMode.LAYERED]
    normal = layered.shadow(build_inputs(WeatherSnapshot(pressure=1013)))
    low = layered.shadow(build_inputs(WeatherSnapshot(pressure=963)))
    assert normal.dx == pytest.approx(15)
    assert low.dx == pytest.approx(16)


def test_swirl_rotation_and_conic_base(rng):
    inputs = build_inputs(WeatherSnapshot(wind_direction=120))
    descriptor = STRATEGIES[RenderMode.SWIRL].compose(inputs, rng)
    assert descriptor.rotation == 120
    assert descriptor.layers[-1].kind is GradientKind.CONIC
    assert sum(layer.kind is GradientKind.CONIC for layer in descriptor.layers) == 1

    north = build_inputs(WeatherSnapshot(wind_direction=0, wind_speed=40))
    assert swirl_rotation(north) == pytest.approx(18)


@pytest.mark.parametrize("mode", [m for m in ALL_MODES if m is not RenderMode.SWIRL])
def test_only_swirl_rotates(mode, rng):
    inputs = build_inputs(WeatherSnapshot(wind_direction=120))
    assert STRATEGIES[mode].compose(inputs, rng).rotation == 0


def test_linear_uv_brightness():
    assert uv_brightness(0) == 1.0
    assert uv_brightness(11) == pytest.approx(1.2)


def test_particle_count_bounds():
    calm = build_inputs(WeatherSnapshot(wind_speed=0, precipitation=0))
    wild = build_inputs(WeatherSnapshot(wind_speed=250, precipitation=50))
    assert particle_count(calm) == 50
    assert particle_count(wild) == MAX_PARTICLES
    assert MIN_PARTICLES <= particle_count(build_inputs(WeatherSnapshot())) <= MAX_PARTICLES


def test_particle_layers_match_count(rng):
    inputs = build_inputs(WeatherSnapshot(wind_speed=30))
    layers = STRATEGIES[RenderMode.PARTICLE].layers(inputs, rng)
    assert len(layers) == particle_count(inputs)
    assert all(layer.kind is GradientKind.RADIAL for layer in layers)


def test_fractal_grid_and_patterns(rng):
    inputs = build_inputs(WeatherSnapshot(wind_speed=10))
    g = grid_size(inputs)
    assert g == 6
    layers = STRATEGIES[RenderMode.FRACTAL].layers(inputs, rng)
    per_pattern = {DIAMOND: 2, RINGS: 2, CROSS: 2}
    expected = sum(per_pattern[(i + j) % 3] for i in range(g) for j in range(g))
    assert len(layers) == expected


@pytest.mark.parametrize("code,contrast", [(0, 1.2), (1, 1.2), (45, 0.8), (48, 0.8), (63, 1.0)])
def test_fractal_clarity_contrast(code, contrast):
    assert clarity_contrast(code) == contrast


def test_fractal_contrast_filter_uses_clarity(rng):
    clear = build_inputs(WeatherSnapshot(weather_code=0, wind_speed=0))
    fog = build_inputs(WeatherSnapshot(weather_code=45, wind_speed=0))
    fractal = STRATEGIES[RenderMode.FRACTAL]
    clear_contrast = dict((f.name, f.value) for f in fractal.filters(clear))["contrast"]
    fog_contrast = dict((f.name, f.value) for f in fractal.filters(fog))["contrast"]
    assert clear_contrast == pytest.approx(1.2)
    assert fog_contrast == pytest.approx(0.8)


def test_jitter_is_confined_to_the_random_source(storm_snapshot):
    inputs = build_inputs(storm_snapshot)
    for mode in ALL_MODES:
        a = STRATEGIES[mode].compose(inputs, random.Random(3))
        b = STRATEGIES[mode].compose(inputs, random.Random(3))
        assert a == b
