"""Work-log parsing and image file collection utilities."""

from .image_collector import collect_image_files, expand_image_paths, natural_sort_key
from .work_log import WorkLogParser, parse_work_log, total_chapters

__all__ = [
    "WorkLogParser",
    "collect_image_files",
    "expand_image_paths",
    "natural_sort_key",
    "parse_work_log",
    "total_chapters",
]
