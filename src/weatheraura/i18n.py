"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "날씨 오라",
        "en": "Weather Aura",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_mode": {
        "ko": "모드",
        "en": "Mode",
    },
    "label_hour": {
        "ko": "예보 시각",
        "en": "Forecast hour",
    },
    "label_live": {
        "ko": "현재 날씨",
        "en": "Current weather",
    },
    "btn_generate": {
        "ko": "✦ 오라 보기",
        "en": "✦ View Aura",
    },
    "btn_random_place": {
        "ko": "무작위 장소",
        "en": "Random place",
    },
    "placeholder": {
        "ko": "장소를 입력하고 그곳의 날씨 오라를 불러오세요",
        "en": "Enter a location to see its weather aura",
    },
    "loading_fetch": {
        "ko": "✦ 날씨를 불러오는 중",
        "en": "✦ Fetching the weather",
    },
    "error_place": {
        "ko": "날씨를 불러올 수 없어요. ({error})",
        "en": "Could not load the weather. ({error})",
    },
    "severity_title": {
        "ko": "악천후 지수",
        "en": "Severity",
    },
    "factor_chart_title": {
        "ko": "요인별 기여도",
        "en": "Factor contributions",
    },
    "air_quality": {
        "ko": "대기질",
        "en": "Air quality",
    },
    # --- render modes ---
    "mode_radial": {"ko": "방사형", "en": "Radial"},
    "mode_layered": {"ko": "겹침", "en": "Layered"},
    "mode_swirl": {"ko": "소용돌이", "en": "Swirl"},
    "mode_linear": {"ko": "선형", "en": "Linear"},
    "mode_particle": {"ko": "입자", "en": "Particle"},
    "mode_fractal": {"ko": "프랙탈", "en": "Fractal"},
    "mode_randomizer": {"ko": "무작위", "en": "Randomizer"},
    # --- weather types ---
    "weather_normal": {"ko": "평온", "en": "Normal"},
    "weather_fog": {"ko": "안개", "en": "Fog"},
    "weather_light_precip": {"ko": "약한 비", "en": "Light precipitation"},
    "weather_showers": {"ko": "소나기", "en": "Showers"},
    "weather_heavy_rain": {"ko": "폭우", "en": "Heavy rain"},
    "weather_heavy_snow": {"ko": "폭설", "en": "Heavy snow"},
    "weather_high_wind": {"ko": "강풍", "en": "High wind"},
    "weather_thunderstorm": {"ko": "뇌우", "en": "Thunderstorm"},
    # --- severity factors ---
    "factor_weatherCode": {"ko": "날씨 코드", "en": "Weather code"},
    "factor_wind": {"ko": "바람", "en": "Wind"},
    "factor_precipitation": {"ko": "강수", "en": "Precipitation"},
    "factor_visibility": {"ko": "가시거리", "en": "Visibility"},
    "factor_cloudCover": {"ko": "구름", "en": "Cloud cover"},
    # --- AQI categories ---
    "aqi_good": {"ko": "좋음", "en": "Good"},
    "aqi_moderate": {"ko": "보통", "en": "Moderate"},
    "aqi_sensitive": {"ko": "민감군 영향", "en": "Unhealthy for Sensitive"},
    "aqi_unhealthy": {"ko": "나쁨", "en": "Unhealthy"},
    "aqi_very_unhealthy": {"ko": "매우 나쁨", "en": "Very Unhealthy"},
    "aqi_hazardous": {"ko": "위험", "en": "Hazardous"},
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
