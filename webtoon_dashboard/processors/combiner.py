"""Vertical image combining."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from pathlib import Path

from PIL import Image

from webtoon_dashboard.models.image import ImageResult
from webtoon_dashboard.processors.canvas import load_image, new_canvas, paste_on


def chunk_images(items: Sequence[Path], split_count: int) -> list[list[Path]]:
    """
    Split items into at most ``split_count`` consecutive chunks.

    Chunks hold ``ceil(len(items) / split_count)`` items each, so the last one
    may be shorter and fewer than ``split_count`` chunks may come back.

    Raises:
        ValueError: If split_count is less than 1
    """
    if split_count < 1:
        raise ValueError(f"split_count must be at least 1, got {split_count}")
    if not items:
        return []

    chunk_size = math.ceil(len(items) / split_count)
    return [list(items[i:i + chunk_size]) for i in range(0, len(items), chunk_size)]


def stack_vertically(images: Sequence[Image.Image]) -> Image.Image:
    """Stack images top to bottom on white, centring narrower ones."""
    max_width = max(img.width for img in images)
    total_height = sum(img.height for img in images)

    canvas = new_canvas(max_width, total_height)
    current_y = 0
    for img in images:
        paste_on(canvas, img, (max_width - img.width) // 2, current_y)
        current_y += img.height
    return canvas


def combined_name(index: int, split_count: int) -> str:
    """Output file name for the combined image at ``index`` (0-based)."""
    if split_count > 1:
        return f"combined_part_{index + 1}.png"
    return "combined.png"


def combine_images(
    image_paths: Sequence[Path],
    split_count: int = 1,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[ImageResult]:
    """
    Combine images vertically into one or more long strips.

    Args:
        image_paths: Images in the order they should be stacked
        split_count: Number of strips to divide the images into
        progress_callback: Callback(completed_strips, total_strips)

    Returns:
        list[ImageResult]: One result per strip

    Raises:
        ValueError: If split_count is less than 1
    """
    chunks = chunk_images(image_paths, split_count)

    results: list[ImageResult] = []
    for index, chunk in enumerate(chunks):
        images = [load_image(path) for path in chunk]
        results.append(ImageResult(name=combined_name(index, split_count), image=stack_vertically(images)))
        if progress_callback:
            progress_callback(index + 1, len(chunks))

    return results
