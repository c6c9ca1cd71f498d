"""Inclement-weather severity scoring: weighted multi-factor model over one snapshot."""

from weatheraura.models import (
    FactorContribution,
    SeverityFactor,
    SeverityResult,
    WeatherSnapshot,
    WeatherType,
)

WEIGHT_WEATHER_CODE = 0.40
WEIGHT_WIND = 0.25
WEIGHT_PRECIPITATION = 0.20
WEIGHT_VISIBILITY = 0.10
WEIGHT_CLOUD_COVER = 0.05

HIGH_WIND_THRESHOLD = 0.6

# WMO code ranges in priority order: (low, high, score_at_low, score_at_high, type)
_CODE_BANDS: tuple[tuple[int, int, float, float, WeatherType], ...] = (
    (95, 99, 0.90, 1.00, WeatherType.THUNDERSTORM),
    (71, 77, 0.60, 0.80, WeatherType.HEAVY_SNOW),
    (61, 67, 0.50, 0.70, WeatherType.HEAVY_RAIN),
    (80, 86, 0.30, 0.50, WeatherType.SHOWERS),
    (51, 57, 0.15, 0.25, WeatherType.LIGHT_PRECIP),
)
_FOG_CODES = (45, 49)
_FOG_SCORE = 0.2

# Five-band piecewise-linear curves: (upper bound, score at lower bound, score at upper bound).
# Beyond the last bound: 0.7 + min(0.3, (x - last) / overflow_scale).
_WIND_BANDS: tuple[tuple[float, float, float], ...] = (
    (15.0, 0.0, 0.10),
    (30.0, 0.10, 0.30),
    (50.0, 0.30, 0.50),
    (80.0, 0.50, 0.70),
)
_WIND_OVERFLOW_SCALE = 100.0

_PRECIP_BANDS: tuple[tuple[float, float, float], ...] = (
    (0.5, 0.0, 0.10),
    (2.0, 0.10, 0.30),
    (5.0, 0.30, 0.50),
    (10.0, 0.50, 0.70),
)
_PRECIP_OVERFLOW_SCALE = 20.0


def weather_code_factor(code: int) -> tuple[float, WeatherType]:
    """Score a WMO weather code and label it.

    Within each range the score interpolates linearly across the code's
    position in the range. Codes outside every range score 0 ("normal").
    """
    for low, high, score_low, score_high, weather_type in _CODE_BANDS:
        if low <= code <= high:
            position = (code - low) / (high - low)
            return score_low + position * (score_high - score_low), weather_type
    if _FOG_CODES[0] <= code <= _FOG_CODES[1]:
        return _FOG_SCORE, WeatherType.FOG
    return 0.0, WeatherType.NORMAL


def _banded(
    x: float, bands: tuple[tuple[float, float, float], ...], overflow_scale: float
) -> float:
    lower = 0.0
    for upper, score_low, score_high in bands:
        if x <= upper:
            return score_low + (x - lower) / (upper - lower) * (score_high - score_low)
        lower = upper
    return 0.7 + min(0.3, (x - lower) / overflow_scale)


def wind_factor(wind_speed: float) -> float:
    """Wind sub-score (km/h). Monotonic non-decreasing, 0–1."""
    return _banded(max(0.0, wind_speed), _WIND_BANDS, _WIND_OVERFLOW_SCALE)


def precipitation_factor(precipitation: float) -> float:
    """Precipitation sub-score (mm/h). Monotonic non-decreasing, 0–1."""
    return _banded(max(0.0, precipitation), _PRECIP_BANDS, _PRECIP_OVERFLOW_SCALE)


def visibility_factor(visibility_km: float) -> float:
    if visibility_km < 1:
        return 0.5
    if visibility_km < 3:
        return 0.3
    if visibility_km < 5:
        return 0.15
    return 0.0


def cloud_cover_factor(cloud_cover: float) -> float:
    if cloud_cover > 90:
        return 0.2
    if cloud_cover > 75:
        return 0.1
    return 0.0


def score(snapshot: WeatherSnapshot) -> SeverityResult:
    """Classify a snapshot into a severity score and weather type.

    Total: every snapshot yields a result. All five factors are returned,
    zero-valued ones included, so callers can reconstruct each factor's share.

    Args:
        snapshot: Weather reading (already coerced to finite values).

    Returns:
        SeverityResult with score in [0, 1].
    """
    code_score, weather_type = weather_code_factor(snapshot.weather_code)
    wind_score = wind_factor(snapshot.wind_speed)

    # High wind only replaces the default label, never an active precipitation label
    if wind_score > HIGH_WIND_THRESHOLD and weather_type is WeatherType.NORMAL:
        weather_type = WeatherType.HIGH_WIND

    factors = (
        SeverityFactor("weatherCode", code_score, WEIGHT_WEATHER_CODE),
        SeverityFactor("wind", wind_score, WEIGHT_WIND),
        SeverityFactor(
            "precipitation",
            precipitation_factor(snapshot.precipitation),
            WEIGHT_PRECIPITATION,
        ),
        SeverityFactor(
            "visibility", visibility_factor(snapshot.visibility), WEIGHT_VISIBILITY
        ),
        SeverityFactor(
            "cloudCover", cloud_cover_factor(snapshot.cloud_cover), WEIGHT_CLOUD_COVER
        ),
    )
    total_weight = sum(f.weight for f in factors)
    weighted = sum(f.value * f.weight for f in factors) / total_weight
    return SeverityResult(
        score=max(0.0, min(1.0, weighted)),
        weather_type=weather_type,
        factors=factors,
    )


def contributions(
    result: SeverityResult, min_contribution: float = 0.01
) -> tuple[FactorContribution, ...]:
    """Factors ranked by contribution to the score, negligible ones dropped.

    Args:
        result: A scoring result.
        min_contribution: Factors contributing this much or less are omitted.

    Returns:
        Tuple of FactorContribution, largest contribution first.
    """
    ranked = sorted(result.factors, key=lambda f: f.value * f.weight, reverse=True)
    out: list[FactorContribution] = []
    for f in ranked:
        contribution = f.value * f.weight
        if contribution <= min_contribution:
            continue
        share = contribution / result.score if result.score > 0 else 0.0
        out.append(
            FactorContribution(
                name=f.name,
                value=f.value,
                weight=f.weight,
                contribution=contribution,
                share=share,
            )
        )
    return tuple(out)
