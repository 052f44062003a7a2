from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path: Path):
    """Write a solid-colour image and return its path."""

    def _make(name: str, size: tuple[int, int], color=(255, 0, 0, 255), mode: str = "RGBA") -> Path:
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return path

    return _make
