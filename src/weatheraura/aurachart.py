"""CLI entry point for weather aura generation.

    weatheraura "St. Louis, MO" --mode swirl --seed 7
    weatheraura "Pacific Ocean" --format html --output pacific.html
"""

import argparse
import dataclasses
import json
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from weatheraura.compose import compose_aura, resolve_mode  # noqa: E402
from weatheraura.config import load_settings  # noqa: E402
from weatheraura.i18n import t  # noqa: E402
from weatheraura.logging_config import setup_logging  # noqa: E402
from weatheraura.models import AuraDescriptor, RenderMode  # noqa: E402
from weatheraura.renderers.html import render_aura_html  # noqa: E402
from weatheraura.renderers.static import save_static_aura  # noqa: E402
from weatheraura.source import WeatherSourceError, fetch_snapshot  # noqa: E402

_FORMATS = ("png", "html", "json")


def _parser(default_mode: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weatheraura", description="Render the weather of a place as an aura"
    )
    parser.add_argument("place", help="Place name, e.g. 'Busan' or 'Pacific Ocean'")
    parser.add_argument(
        "--mode",
        default=default_mode,
        help=f"One of {', '.join(m.value for m in RenderMode)} (unknown → radial)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Fix the random source")
    parser.add_argument(
        "--hour", type=int, default=None, help="Forecast hour 0-23 instead of now"
    )
    parser.add_argument("--format", choices=_FORMATS, default="png")
    parser.add_argument("--output", type=Path, default=None, help="Destination file")
    parser.add_argument("--lang", choices=("en", "ko"), default="en")
    return parser


def descriptor_json(descriptor: AuraDescriptor) -> str:
    return json.dumps(dataclasses.asdict(descriptor), ensure_ascii=False, indent=2)


def summary_line(place: str, descriptor: AuraDescriptor, lang: str) -> str:
    severity = descriptor.severity
    return (
        f"{place} · {t('mode_' + descriptor.mode.value, lang)} · "
        f"{t('weather_' + severity.weather_type.value, lang)} · "
        f"{t('severity_title', lang)} {severity.score:.2f}"
    )


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    logger = setup_logging("weatheraura", settings.log_level)
    args = _parser(settings.default_mode).parse_args(argv)

    seed = args.seed if args.seed is not None else settings.seed
    rng = random.Random(seed)
    try:
        location, snapshot = fetch_snapshot(args.place, hour=args.hour, settings=settings)
    except WeatherSourceError as e:
        print(t("error_place", args.lang).format(error=e), file=sys.stderr)
        return 1

    descriptor = compose_aura(snapshot, resolve_mode(args.mode), rng)
    logger.info("Rendered %s aura for %s", descriptor.mode.value, location.name)

    if args.format == "png":
        path = save_static_aura(descriptor, args.output, name=location.name)
    else:
        suffix = "html" if args.format == "html" else "json"
        path = args.output or Path(
            f"{location.name}__{descriptor.mode.value}.{suffix}".replace(" ", "_").replace(",", "")
        )
        if args.format == "html":
            subtitle = t("weather_" + descriptor.severity.weather_type.value, args.lang)
            text = render_aura_html(descriptor, location.name, subtitle, args.lang)
        else:
            text = descriptor_json(descriptor)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    print(f"Saved: {path}")
    print(summary_line(location.name, descriptor, args.lang))
    return 0


if __name__ == "__main__":
    sys.exit(main())
