"""CSS renderer: AuraDescriptor → CSS declarations.

Output is a plain ``dict[str, str]`` (property → value) plus the text of the
``pulse`` keyframes. Numbers are formatted with fixed precision so identical
descriptors always produce identical strings.
"""

from __future__ import annotations

from weatheraura.models import (
    HSLA,
    AuraDescriptor,
    ColorStop,
    Filter,
    GradientKind,
    GradientLayer,
    Shadow,
    ShapeDescriptor,
)

# CSS filter functions and the unit each takes
_FILTER_UNITS = {"brightness": "", "contrast": "", "blur": "px", "saturate": "%"}

PULSE_SCALE = 1.05


def _num(value: float, digits: int = 2) -> str:
    text = f"{value:.{digits}f}"
    # avoid "-0.00"
    return text[1:] if text.startswith("-") and float(text) == 0 else text


def hsla(color: HSLA) -> str:
    return (
        f"hsla({_num(color.hue, 1)}, {_num(color.saturation, 1)}%, "
        f"{_num(color.lightness, 1)}%, {_num(color.alpha, 3)})"
    )


def _stops(stops: tuple[ColorStop, ...], unit: str) -> str:
    return ", ".join(f"{hsla(s.color)} {_num(s.offset)}{unit}" for s in stops)


def gradient(layer: GradientLayer) -> str:
    """One CSS gradient function for a layer."""
    x, y = layer.center
    at = f"at {_num(x)}% {_num(y)}%"
    if layer.kind is GradientKind.RADIAL:
        shape = "ellipse" if layer.ellipse else "circle"
        return f"radial-gradient({shape} {at}, {_stops(layer.stops, '%')})"
    if layer.kind is GradientKind.LINEAR:
        return f"linear-gradient({_num(layer.angle)}deg, {_stops(layer.stops, '%')})"
    return f"conic-gradient(from {_num(layer.angle)}deg {at}, {_stops(layer.stops, 'deg')})"


def clip_path(outline: ShapeDescriptor) -> str:
    if outline.is_circle:
        return "circle(50% at 50% 50%)"
    points = ", ".join(f"{_num(x)}% {_num(y)}%" for x, y in outline.vertices)
    return f"polygon({points})"


def filter_chain(filters: tuple[Filter, ...]) -> str:
    if not filters:
        return "none"
    return " ".join(
        f"{f.name}({_num(f.value, 3)}{_FILTER_UNITS.get(f.name, '')})" for f in filters
    )


def box_shadow(shadow: Shadow) -> str:
    return (
        f"{_num(shadow.dx)}px {_num(shadow.dy)}px {_num(shadow.blur)}px "
        f"{hsla(shadow.color)}"
    )


def _rotate(rotation: float) -> str:
    return f"rotate({_num(rotation)}deg)"


def render_css(descriptor: AuraDescriptor) -> dict[str, str]:
    """Map a descriptor onto CSS properties for a single aura element.

    Args:
        descriptor: Fully composed aura.

    Returns:
        Ordered mapping of CSS property names to values.
    """
    return {
        "width": f"{descriptor.size}px",
        "height": f"{descriptor.size}px",
        "background": ", ".join(gradient(layer) for layer in descriptor.layers) or "none",
        "clip-path": clip_path(descriptor.outline),
        "border-radius": f"{_num(descriptor.outline.corner_smoothing)}%",
        "filter": filter_chain(descriptor.filters),
        "box-shadow": box_shadow(descriptor.shadow),
        "transform": _rotate(descriptor.rotation),
        "opacity": _num(descriptor.opacity, 3),
        "animation": f"pulse {_num(descriptor.animation_period)}s ease-in-out infinite",
    }


def pulse_keyframes(descriptor: AuraDescriptor) -> str:
    """The breathing animation. Carries the rotation so the pulse does not undo it."""
    rotate = _rotate(descriptor.rotation)
    return (
        "@keyframes pulse {\n"
        f"  0%, 100% {{ transform: {rotate} scale(1); }}\n"
        f"  50% {{ transform: {rotate} scale({PULSE_SCALE}); }}\n"
        "}"
    )


def declarations(css: dict[str, str], indent: str = "  ") -> str:
    """Serialize a property mapping as a declaration block body."""
    return "\n".join(f"{indent}{prop}: {value};" for prop, value in css.items())
