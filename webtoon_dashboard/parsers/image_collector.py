"""Image file collection utilities."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from rich.console import Console

console = Console()

# Supported image file extensions
SUPPORTED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff'}

_DIGIT_RUN = re.compile(r'(\d+)')


def natural_sort_key(name: str) -> list[tuple[int, int | str]]:
    """
    Build a sort key that orders embedded numbers numerically.

    ``page2.png`` sorts before ``page10.png``.

    Args:
        name: File name to build the key for

    Returns:
        list: Comparable key parts
    """
    parts: list[tuple[int, int | str]] = []
    for part in _DIGIT_RUN.split(name.lower()):
        if not part:
            continue
        if part.isdigit():
            parts.append((0, int(part)))
        else:
            parts.append((1, part))
    return parts


def is_image_file(file_path: Path) -> bool:
    """Check whether a path points to a supported image file."""
    return file_path.is_file() and file_path.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS


def sort_naturally(paths: Iterable[Path]) -> list[Path]:
    """Sort paths by file name using natural ordering."""
    return sorted(paths, key=lambda x: natural_sort_key(x.name))


def collect_image_files(folder_path: Path) -> list[Path]:
    """
    Collect all image files from a folder with supported extensions.

    Args:
        folder_path: Path to the folder to scan

    Returns:
        list[Path]: List of image file paths, in natural name order
    """
    if not folder_path.exists() or not folder_path.is_dir():
        console.print(f"[red]Warning: Folder does not exist or is not a directory: {folder_path}[/red]")
        return []

    image_files = [file_path for file_path in folder_path.iterdir() if is_image_file(file_path)]

    if not image_files:
        console.print(f"[yellow]Warning: No image files found in folder: {folder_path}[/yellow]")

    return sort_naturally(image_files)


def expand_image_paths(paths: Iterable[Path]) -> list[Path]:
    """
    Expand a mix of image files and folders into one ordered image list.

    Folders contribute their images; other non-image paths are skipped with a
    warning. The combined list is ordered naturally by file name, the way the
    upload zones order dropped files.

    Args:
        paths: Files and/or folders given on the command line

    Returns:
        list[Path]: Image files in natural name order
    """
    image_files: list[Path] = []
    for path in paths:
        if path.is_dir():
            image_files.extend(collect_image_files(path))
        elif is_image_file(path):
            image_files.append(path)
        else:
            console.print(f"[yellow]Warning: Skipping non-image path: {path}[/yellow]")

    return sort_naturally(image_files)
