"""Shared Pillow helpers for the image tools."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

BACKGROUND_COLOR = (255, 255, 255)


def load_image(path: Path) -> Image.Image:
    """Load an image fully into memory as RGBA and release the file handle."""
    with Image.open(path) as img:
        return img.convert("RGBA")


def new_canvas(width: int, height: int) -> Image.Image:
    """Create a white RGB canvas."""
    return Image.new("RGB", (width, height), BACKGROUND_COLOR)


def paste_on(canvas: Image.Image, image: Image.Image, x: int, y: int) -> None:
    """Paste an RGBA image onto the canvas, using its alpha as the mask."""
    canvas.paste(image, (x, y), image)
