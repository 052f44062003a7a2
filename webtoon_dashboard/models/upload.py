"""Export result data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExportResult:
    """Result of a cloud export operation."""

    success: bool
    folder_id: str | None
    uploaded_files: int
    total_files: int
    error_message: str | None
