"""Matplotlib static PNG renderer.

Rasterizes the gradient layers with numpy the way a browser paints CSS
backgrounds (first layer on top, premultiplied alpha), then applies the
filter chain, the outline clip, opacity, the drop shadow and the rotation.

Coordinate system (matches the descriptor):
  x ∈ [0, 100]  percent of the aura box, left to right
  y ∈ [0, 100]  percent of the aura box, top to bottom
"""

import colorsys
import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.path import Path as MplPath
from matplotlib.transforms import Affine2D

from weatheraura.models import (
    HSLA,
    AuraDescriptor,
    Filter,
    GradientKind,
    GradientLayer,
    Shadow,
    ShapeDescriptor,
)

_ROOT = Path(__file__).parent.parent.parent.parent
_BG = "#0d1b35"
_MARGIN = 25.0  # percent of the box, room for rotation and shadow

# Rec. 709 luma weights, as used by the CSS saturate() filter
_LUMA = np.array([0.2126, 0.7152, 0.0722])


def _grid(resolution: int) -> tuple[np.ndarray, np.ndarray]:
    """Pixel-centre coordinates in percent of the box."""
    coords = (np.arange(resolution) + 0.5) / resolution * 100
    return np.meshgrid(coords, coords)


def _clip01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _premultiplied(color: HSLA) -> np.ndarray:
    r, g, b = colorsys.hls_to_rgb(
        (color.hue % 360) / 360,
        _clip01(color.lightness / 100),
        _clip01(color.saturation / 100),
    )
    a = _clip01(color.alpha)
    return np.array([r * a, g * a, b * a, a])


def _gradient_position(layer: GradientLayer, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Per-pixel position along the gradient, in the unit of the stop offsets."""
    cx, cy = layer.center
    if layer.kind is GradientKind.LINEAR:
        # 0deg points up, 90deg points right; the line runs through the box centre
        theta = math.radians(layer.angle)
        ux, uy = math.sin(theta), -math.cos(theta)
        length = abs(100 * ux) + abs(100 * uy)
        return ((xs - 50) * ux + (ys - 50) * uy) / length * 100 + 50
    if layer.kind is GradientKind.CONIC:
        theta = np.degrees(np.arctan2(xs - cx, -(ys - cy)))
        return (theta - layer.angle) % 360

    # radial: percentages are relative to the farthest corner
    ratio = 1.0
    if layer.ellipse:
        side_x = min(cx, 100 - cx)
        side_y = min(cy, 100 - cy)
        if side_x > 0 and side_y > 0:
            ratio = side_x / side_y
    ray = max(
        math.hypot(corner_x - cx, (corner_y - cy) * ratio)
        for corner_x in (0.0, 100.0)
        for corner_y in (0.0, 100.0)
    )
    return np.hypot(xs - cx, (ys - cy) * ratio) / max(ray, 1e-9) * 100


def _paint_layer(layer: GradientLayer, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    out = np.zeros(xs.shape + (4,))
    if not layer.stops:
        return out
    pos = _gradient_position(layer, xs, ys)
    # CSS treats a stop placed before its predecessor as sitting on it
    offsets = np.maximum.accumulate(np.array([s.offset for s in layer.stops], dtype=float))
    colors = np.array([_premultiplied(s.color) for s in layer.stops])
    for channel in range(4):
        out[..., channel] = np.interp(pos, offsets, colors[:, channel])
    return out


def rasterize_layers(
    layers: tuple[GradientLayer, ...], resolution: int = 200
) -> np.ndarray:
    """Composite all layers into a premultiplied RGBA array of shape (res, res, 4)."""
    xs, ys = _grid(resolution)
    image = np.zeros((resolution, resolution, 4))
    for layer in reversed(layers):
        src = _paint_layer(layer, xs, ys)
        image = src + image * (1 - src[..., 3:4])
    return image


def _gaussian_blur(image: np.ndarray, sigma: float) -> np.ndarray:
    """Separable Gaussian blur over the first two axes. sigma in pixels."""
    if sigma <= 0.05:
        return image
    radius = max(1, int(math.ceil(3 * sigma)))
    radius = min(radius, (image.shape[0] - 1) // 2)
    x = np.arange(-radius, radius + 1)
    kernel = np.exp(-(x**2) / (2 * sigma**2))
    kernel /= kernel.sum()
    for axis in (0, 1):
        image = np.apply_along_axis(np.convolve, axis, image, kernel, mode="same")
    return image


def _straight_rgb(image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    alpha = image[..., 3:4]
    rgb = np.divide(
        image[..., :3], alpha, out=np.zeros_like(image[..., :3]), where=alpha > 0
    )
    return rgb, alpha


def apply_filters(
    image: np.ndarray, filters: tuple[Filter, ...], px_scale: float = 1.0
) -> np.ndarray:
    """Apply the filter chain in order. Unknown filter names are skipped.

    Args:
        image: Premultiplied RGBA array.
        filters: Ordered filter chain.
        px_scale: Raster pixels per CSS pixel, for blur radii.

    Returns:
        Filtered premultiplied RGBA array.
    """
    for f in filters:
        if f.name == "blur":
            image = _gaussian_blur(image, f.value * px_scale)
            continue
        rgb, alpha = _straight_rgb(image)
        if f.name == "brightness":
            rgb = rgb * f.value
        elif f.name == "contrast":
            rgb = (rgb - 0.5) * f.value + 0.5
        elif f.name == "saturate":
            luma = (rgb @ _LUMA)[..., None]
            rgb = luma + (rgb - luma) * (f.value / 100)
        else:
            continue
        image = np.concatenate([np.clip(rgb, 0, 1) * alpha, alpha], axis=-1)
    return image


def _rounded_box(xs: np.ndarray, ys: np.ndarray, radius: float) -> np.ndarray:
    r = max(0.0, min(50.0, radius))
    qx = np.maximum(np.abs(xs - 50) - (50 - r), 0)
    qy = np.maximum(np.abs(ys - 50) - (50 - r), 0)
    return np.hypot(qx, qy) <= r


def outline_mask(outline: ShapeDescriptor, resolution: int = 200) -> np.ndarray:
    """Boolean (res, res) mask of the pixels inside the outline and its rounded box."""
    xs, ys = _grid(resolution)
    if outline.is_circle:
        inside = np.hypot(xs - 50, ys - 50) <= 50
    else:
        path = MplPath(np.array(outline.vertices))
        points = np.column_stack([xs.ravel(), ys.ravel()])
        inside = path.contains_points(points).reshape(xs.shape)
    return inside & _rounded_box(xs, ys, outline.corner_smoothing)


def _shadow_image(mask: np.ndarray, shadow: Shadow, px_scale: float) -> np.ndarray:
    # CSS shadow blur radius is twice the Gaussian sigma
    spread = _gaussian_blur(mask.astype(float)[..., None], shadow.blur / 2 * px_scale)
    return spread * _premultiplied(shadow.color)


def _to_rgba(image: np.ndarray) -> np.ndarray:
    rgb, alpha = _straight_rgb(image)
    return np.concatenate([np.clip(rgb, 0, 1), np.clip(alpha, 0, 1)], axis=-1)


def render_static_aura(
    descriptor: AuraDescriptor, chart_size: int = 6, resolution: int = 200
) -> Figure:
    """Render an AuraDescriptor as a static matplotlib image.

    Args:
        descriptor: Fully composed aura.
        chart_size: Output image size in inches.
        resolution: Raster size of the aura box in pixels.

    Returns:
        matplotlib Figure object.
    """
    px_scale = resolution / descriptor.size
    image = rasterize_layers(descriptor.layers, resolution)
    image = apply_filters(image, descriptor.filters, px_scale)
    mask = outline_mask(descriptor.outline, resolution)
    image = image * mask[..., None] * descriptor.opacity
    shadow = _shadow_image(mask, descriptor.shadow, px_scale) * descriptor.opacity

    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    rotate = Affine2D().rotate_deg_around(50, 50, descriptor.rotation)
    dx = descriptor.shadow.dx / descriptor.size * 100
    dy = descriptor.shadow.dy / descriptor.size * 100
    extent = (0, 100, 100, 0)

    shadow_im = ax.imshow(_to_rgba(shadow), extent=extent, interpolation="bilinear")
    shadow_im.set_transform(rotate + Affine2D().translate(dx, dy) + ax.transData)
    aura_im = ax.imshow(_to_rgba(image), extent=extent, interpolation="bilinear")
    aura_im.set_transform(rotate + ax.transData)

    ax.set_xlim(-_MARGIN, 100 + _MARGIN)
    ax.set_ylim(100 + _MARGIN, -_MARGIN)  # y down, as in CSS
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_aura(
    descriptor: AuraDescriptor, output_path: Path | None = None, name: str = "aura"
) -> Path:
    """Save an AuraDescriptor as a PNG file.

    Args:
        descriptor: Fully composed aura.
        output_path: Destination path. Auto-generated under results/ if None.
        name: Place name used in the auto-generated filename.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"{name}__{descriptor.mode.value}.png".replace(" ", "_").replace(",", "")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_aura(descriptor)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
