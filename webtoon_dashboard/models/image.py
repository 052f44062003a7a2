"""Image tool result model."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


@dataclass
class ImageResult:
    """A generated image and the filename it should be saved under."""

    name: str
    image: Image.Image
