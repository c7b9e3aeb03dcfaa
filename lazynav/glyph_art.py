"""Image-to-glyph rendering for the preview pane.

Terminal cells are roughly twice as tall as they are wide, so images are
stretched horizontally before being shrunk into the character grid.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .config import DEFAULT_IMAGE_HORIZONTAL_SCALE
from .errors import ImageDecodeError

# Ordered sparse -> dense; brighter pixels get denser glyphs.
GLYPH_RAMP = " .:-=+*#%@"


def luminance_to_glyph(value: int, ramp: str = GLYPH_RAMP) -> str:
    """Map an 8-bit luminance sample to its rank in ``ramp``."""
    value = max(0, min(255, value))
    return ramp[value * (len(ramp) - 1) // 255]


def load_grayscale(path: Path) -> Image.Image:
    """Decode ``path`` into an 8-bit grayscale image.

    Raises ``ImageDecodeError`` for unreadable, truncated, or unsupported data.
    """
    try:
        with Image.open(path) as image:
            image.load()
            if image.mode in {"RGBA", "LA", "PA"} or "transparency" in image.info:
                # Flatten transparency onto black so empty regions stay sparse.
                rgba = image.convert("RGBA")
                background = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
                background.alpha_composite(rgba)
                return background.convert("L")
            return image.convert("L")
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"{path}: {exc}") from exc


def fit_to_grid(image: Image.Image, columns: int, rows: int, horizontal_scale: float) -> Image.Image:
    """Widen by ``horizontal_scale`` then shrink to fit ``columns x rows``."""
    width, height = image.size
    widened = image.resize(
        (max(1, round(width * horizontal_scale)), max(1, height)),
        Image.Resampling.NEAREST,
    )
    widened.thumbnail((max(1, columns), max(1, rows)), Image.Resampling.BILINEAR)
    return widened


def glyph_rows(image: Image.Image, ramp: str = GLYPH_RAMP) -> list[str]:
    width, height = image.size
    data = image.tobytes()
    return [
        "".join(luminance_to_glyph(value, ramp) for value in data[row * width : (row + 1) * width])
        for row in range(height)
    ]


def center_rows(lines: list[str], columns: int, rows: int) -> list[str]:
    """Pad glyph rows so the art sits centered in a ``columns x rows`` grid."""
    art_width = max((len(line) for line in lines), default=0)
    left = " " * max(0, (columns - art_width) // 2)
    top = max(0, (rows - len(lines)) // 2)
    blank = ""
    out = [blank] * top
    out.extend(left + line for line in lines)
    out.extend([blank] * max(0, rows - len(out)))
    return out[:rows]


def render_glyph_art(
    path: Path,
    columns: int,
    rows: int,
    horizontal_scale: float = DEFAULT_IMAGE_HORIZONTAL_SCALE,
    ramp: str = GLYPH_RAMP,
) -> list[str]:
    """Render ``path`` as exactly ``rows`` text lines no wider than ``columns``."""
    image = load_grayscale(path)
    fitted = fit_to_grid(image, columns, rows, horizontal_scale)
    return center_rows(glyph_rows(fitted, ramp), columns, rows)


__all__ = [
    "GLYPH_RAMP",
    "center_rows",
    "fit_to_grid",
    "glyph_rows",
    "load_grayscale",
    "luminance_to_glyph",
    "render_glyph_art",
]
