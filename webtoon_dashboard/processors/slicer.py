"""Slicing tall images into fixed aspect-ratio segments."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from pathlib import Path

from PIL import Image

from webtoon_dashboard.models.image import ImageResult
from webtoon_dashboard.processors.canvas import load_image, new_canvas, paste_on

# Slice height as a multiple of the image width
ASPECT_RATIOS: dict[str, float] = {
    "4:5": 5 / 4,
    "6:9": 9 / 6,
}
DEFAULT_ASPECT_RATIO = "4:5"


def validate_aspect_ratio(aspect_ratio: str) -> float:
    """
    Look up the height factor for an aspect ratio.

    Raises:
        ValueError: If the aspect ratio is not supported
    """
    try:
        return ASPECT_RATIOS[aspect_ratio]
    except KeyError:
        supported = ", ".join(ASPECT_RATIOS)
        raise ValueError(f"Unsupported aspect ratio '{aspect_ratio}' (supported: {supported})") from None


def slice_height_for(width: int, aspect_ratio: str) -> int:
    """Height of a full slice for an image of the given width."""
    return max(1, math.floor(width * validate_aspect_ratio(aspect_ratio)))


def slice_image(image: Image.Image, base_name: str, aspect_ratio: str = DEFAULT_ASPECT_RATIO) -> list[ImageResult]:
    """
    Slice one image from top to bottom.

    Every slice is ``floor(width * ratio)`` tall except the last, which keeps
    whatever height remains.

    Args:
        image: The (tall) image to slice
        base_name: Name prefix for the slices
        aspect_ratio: One of ``ASPECT_RATIOS``

    Returns:
        list[ImageResult]: Slices named ``{base_name}_slice_001.png`` onwards
    """
    width, total_height = image.size
    slice_height = slice_height_for(width, aspect_ratio)
    slice_count = math.ceil(total_height / slice_height)

    slices: list[ImageResult] = []
    for i in range(slice_count):
        start_y = i * slice_height
        actual_height = min(slice_height, total_height - start_y)

        canvas = new_canvas(width, actual_height)
        paste_on(canvas, image.crop((0, start_y, width, start_y + actual_height)), 0, 0)
        slices.append(ImageResult(name=f"{base_name}_slice_{i + 1:03d}.png", image=canvas))

    return slices


def slice_images(
    image_paths: Sequence[Path],
    aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[ImageResult]:
    """
    Slice every image and return all slices in order.

    Args:
        image_paths: Images to slice
        aspect_ratio: One of ``ASPECT_RATIOS``
        progress_callback: Callback(completed_images, total_images)

    Raises:
        ValueError: If the aspect ratio is not supported
    """
    validate_aspect_ratio(aspect_ratio)

    results: list[ImageResult] = []
    for index, path in enumerate(image_paths):
        results.extend(slice_image(load_image(path), path.stem, aspect_ratio))
        if progress_callback:
            progress_callback(index + 1, len(image_paths))

    return results
