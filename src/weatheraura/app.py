"""Weather Aura: Streamlit app that renders a place's weather as an aura."""

import random

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from weatheraura.compose import compose_aura  # noqa: E402
from weatheraura.config import load_settings  # noqa: E402
from weatheraura.i18n import t  # noqa: E402
from weatheraura.logging_config import setup_logging  # noqa: E402
from weatheraura.models import RenderMode  # noqa: E402
from weatheraura.palette import air_quality_category  # noqa: E402
from weatheraura.places import random_place  # noqa: E402
from weatheraura.renderers.html import render_aura_html  # noqa: E402
from weatheraura.renderers.plotly_factors import render_factor_chart  # noqa: E402
from weatheraura.source import WeatherSourceError, fetch_snapshot  # noqa: E402
from weatheraura.synthetic import fill_defaults  # noqa: E402

_settings = load_settings()
logger = setup_logging("weatheraura", _settings.log_level)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "rng" not in st.session_state:
    st.session_state.rng = random.Random(_settings.seed)
if "location" not in st.session_state:
    st.session_state.location = None
if "snapshot" not in st.session_state:
    st.session_state.snapshot = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "place" not in st.session_state:
    st.session_state.place = "Busan, South Korea"

# --- Dark theme CSS (static) ---
st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    /* Full background */
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    /* Hide header/toolbar */
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    /* Bottom overlay common styles */
    .overlay-box {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 1.2rem 1.6rem;
        color: #e8d5a3;
        margin-bottom: 0.5rem;
    }
    /* Input fields */
    [data-testid="stTextInput"] input {
        background-color: #ffffff !important;
        color: #111111 !important;
        border-radius: 6px !important;
    }
    /* Buttons */
    [data-testid="stButton"] button {
        background-color: rgba(126, 200, 227, 0.2) !important;
        color: #7ec8e3 !important;
        border: 1px solid #7ec8e3 !important;
        border-radius: 6px !important;
        font-weight: 600;
    }
    /* Labels */
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Input row ---
col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 1.5, 1.5])
with col1:
    place = st.text_input(t("label_place", _lang), key="place")
with col2:
    mode = st.selectbox(
        t("label_mode", _lang),
        options=list(RenderMode),
        index=list(RenderMode).index(RenderMode(_settings.default_mode))
        if _settings.default_mode in {m.value for m in RenderMode}
        else 0,
        format_func=lambda m: t(f"mode_{m.value}", _lang),
    )
with col3:
    live = st.toggle(t("label_live", _lang), value=True)
    hour = st.slider(t("label_hour", _lang), 0, 23, 12, disabled=live)
with col4:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    random_clicked = st.button(t("btn_random_place", _lang), use_container_width=True)
with col5:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(t("btn_generate", _lang), use_container_width=True)

# --- Submission handler ---
if random_clicked:
    place = random_place(st.session_state.rng)

if (submitted or random_clicked) and place:
    st.session_state.error_msg = None
    with st.spinner(t("loading_fetch", _lang)):
        try:
            location, snapshot = fetch_snapshot(
                place, hour=None if live else hour, settings=_settings
            )
            if random_clicked:
                snapshot = fill_defaults(snapshot, st.session_state.rng)
            st.session_state.location = location
            st.session_state.snapshot = snapshot
        except WeatherSourceError as e:
            logger.warning("Weather fetch failed for %s: %s", place, e)
            st.session_state.error_msg = t("error_place", _lang).format(error=e)

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='overlay-box' style='border:1px solid #ff6b6b; color:#ff9999;'>"
        f"{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

# --- Aura area ---
if st.session_state.snapshot is None:
    st.markdown(
        f"<div style='height:60vh; display:flex; align-items:center; justify-content:center;"
        f" color:#334466; font-size:1.2rem;'>{t('placeholder', _lang)}</div>",
        unsafe_allow_html=True,
    )
    st.stop()

snapshot = st.session_state.snapshot
location = st.session_state.location
descriptor = compose_aura(snapshot, mode, st.session_state.rng)
severity = descriptor.severity

aura_col, info_col = st.columns([3, 2])
with aura_col:
    subtitle = (
        f"{t('mode_' + descriptor.mode.value, _lang)} · "
        f"{t('weather_' + severity.weather_type.value, _lang)}"
    )
    components.html(
        render_aura_html(descriptor, location.name, subtitle, _lang),
        height=620,
        scrolling=False,
    )
with info_col:
    st.metric(t("severity_title", _lang), f"{severity.score:.2f}")
    aqi_label = t("aqi_" + air_quality_category(snapshot.air_quality), _lang)
    st.markdown(
        f"<div class='overlay-box'>{t('air_quality', _lang)}: "
        f"{snapshot.air_quality:.0f} ({aqi_label})</div>",
        unsafe_allow_html=True,
    )
    st.plotly_chart(
        render_factor_chart(severity, _lang),
        use_container_width=True,
        config={"displayModeBar": False},
    )
