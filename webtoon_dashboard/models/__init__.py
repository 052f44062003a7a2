"""Data models for the webtoon team dashboard."""

from .image import ImageResult
from .project import GlobalProject, ParsedProject, TeamMember, TeamSummary
from .upload import ExportResult

__all__ = [
    "ExportResult",
    "GlobalProject",
    "ImageResult",
    "ParsedProject",
    "TeamMember",
    "TeamSummary",
]
