"""Image tools and export orchestration."""

from .chapter_exporter import ChapterExporter, plan_export
from .combiner import combine_images
from .slicer import ASPECT_RATIOS, slice_images

__all__ = ["ASPECT_RATIOS", "ChapterExporter", "combine_images", "plan_export", "slice_images"]
