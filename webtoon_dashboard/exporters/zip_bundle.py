"""ZIP packaging of image results."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Sequence
from pathlib import Path

from webtoon_dashboard.models.image import ImageResult


def encode_png(result: ImageResult) -> bytes:
    """Encode a result image as PNG bytes."""
    buffer = io.BytesIO()
    result.image.save(buffer, format="PNG")
    return buffer.getvalue()


def zip_path_for(output_dir: Path, zip_filename: str) -> Path:
    """Resolve the archive path, appending ``.zip`` when missing."""
    if not zip_filename.lower().endswith(".zip"):
        zip_filename = f"{zip_filename}.zip"
    return output_dir / zip_filename


def write_zip(results: Sequence[ImageResult], destination: Path) -> Path:
    """
    Write results into a ZIP archive, one PNG per result.

    Args:
        results: Images to package
        destination: Archive path; ``.zip`` is appended when missing

    Returns:
        Path: The written archive

    Raises:
        ValueError: If there is nothing to package
    """
    if not results:
        raise ValueError("No images to package")

    destination = zip_path_for(destination.parent, destination.name)
    destination.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for result in results:
            archive.writestr(result.name, encode_png(result))

    return destination


def save_images(results: Sequence[ImageResult], output_dir: Path) -> list[Path]:
    """Save each result as its own PNG file in ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    saved: list[Path] = []
    for result in results:
        path = output_dir / result.name
        result.image.save(path, format="PNG")
        saved.append(path)
    return saved
