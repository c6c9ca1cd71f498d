"""Tests for colour and dynamics derivation."""

from __future__ import annotations

import pytest

from weatheraura.effects import altitude_intensity, derive_effects, precipitation_effect, wind_effect
from weatheraura.palette import (
    air_quality_category,
    air_quality_saturation,
    base_hue,
    derive_palette,
    temperature_hue,
)


@pytest.mark.parametrize("lat", [-90, -45, 0, 45, 90])
@pytest.mark.parametrize("lon", [-180, -90, 0, 90, 180])
@pytest.mark.parametrize("temp", [-40, 0, 20, 50])
def test_hues_wrap_into_range(lat, lon, temp):
    palette = derive_palette(lat, lon, temp, 50)
    assert 0 <= palette.base_hue < 360
    assert 0 <= palette.temp_hue < 360


def test_base_hue_formula():
    # (0 + 90)/180*360 + (0 + 180)/360*360 = 180 + 180 → 0
    assert base_hue(0, 0) == pytest.approx(0)
    assert base_hue(-90, -180) == pytest.approx(0)
    assert base_hue(45, 0) == pytest.approx(90)


def test_temperature_shift():
    assert temperature_hue(100, -40) == pytest.approx(220)  # +120, toward blue
    assert temperature_hue(100, 50) == pytest.approx(40)  # −60, toward red
    assert temperature_hue(30, 50) == pytest.approx(330)


def test_air_quality_saturation():
    assert air_quality_saturation(0) == 80
    assert air_quality_saturation(150) == pytest.approx(55)
    assert air_quality_saturation(300) == 30
    assert air_quality_saturation(500) == 30


@pytest.mark.parametrize(
    "aqi,category",
    [
        (0, "good"),
        (50, "good"),
        (51, "moderate"),
        (150, "sensitive"),
        (200, "unhealthy"),
        (300, "very_unhealthy"),
        (301, "hazardous"),
    ],
)
def test_air_quality_category(aqi, category):
    assert air_quality_category(aqi) == category


def test_wind_effect_layers_clamped():
    assert wind_effect(0).layers == 2
    assert wind_effect(50).layers == 4
    assert wind_effect(1000).layers == 8
    assert wind_effect(300).spread == 40
    assert wind_effect(45).turbulence == pytest.approx(0.45)


def test_altitude_intensity():
    assert altitude_intensity(0) == 0.5
    assert altitude_intensity(8848) == 1.0
    assert altitude_intensity(4424) == pytest.approx(0.75)


def test_precipitation_effect():
    effect = precipitation_effect(15, 5)
    assert effect.intensity == pytest.approx(0.3)
    assert effect.blur == pytest.approx(1.5)
    assert effect.desaturation == pytest.approx(0.15)
    assert effect.streak_count == 3
    assert effect.droplet_count == 5
    assert effect.vertical_shift == pytest.approx(0.75)
    assert effect.gloss_intensity == pytest.approx(0.18)
    assert effect.particle_density == pytest.approx(7.5)
    assert effect.highlight_count == 3
    assert not effect.is_snow


def test_snow_below_freezing_and_intensity_cap():
    effect = precipitation_effect(80, -1)
    assert effect.is_snow
    assert effect.intensity == 1.0


def test_derive_effects_bundles_all_three():
    effects = derive_effects(wind_speed=30, altitude=100, precipitation=0, temperature=20)
    assert effects.wind.layers == 3
    assert effects.precip.intensity == 0
    assert 0.5 <= effects.altitude_intensity <= 1.0
