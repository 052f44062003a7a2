"""Chapter export orchestration to Google Drive."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple, final

from requests.exceptions import RequestException

from webtoon_dashboard.exporters.zip_bundle import encode_png
from webtoon_dashboard.models.image import ImageResult
from webtoon_dashboard.models.upload import ExportResult
from webtoon_dashboard.uploaders.google_drive import GoogleDriveUploader

# TikTok posts hold at most 35 images
TIKTOK_BATCH_SIZE = 35


class ExportBatch(NamedTuple):
    """Files destined for one folder; ``part_name`` is None for the chapter folder itself."""

    part_name: str | None
    files: list[tuple[str, ImageResult]]


def sequential_name(index: int) -> str:
    """Drive file name for the image at ``index`` (0-based): ``01.png``, ``02.png``..."""
    return f"{index + 1:02d}.png"


def chapter_folder_name(chapter_number: str) -> str:
    return f"Chapter {chapter_number}"


def plan_export(
    results: Sequence[ImageResult],
    tiktok_mode: bool = False,
    batch_size: int = TIKTOK_BATCH_SIZE,
) -> list[ExportBatch]:
    """
    Lay out results into upload batches.

    In TikTok mode results are split into ``Part 1``, ``Part 2``... folders of
    ``batch_size`` images, numbering restarting at ``01.png`` in every part.
    Otherwise all results go straight into the chapter folder.
    """
    if not tiktok_mode:
        return [ExportBatch(None, [(sequential_name(i), r) for i, r in enumerate(results)])]

    batches: list[ExportBatch] = []
    for part, start in enumerate(range(0, len(results), batch_size)):
        chunk = results[start:start + batch_size]
        batches.append(
            ExportBatch(f"Part {part + 1}", [(sequential_name(i), r) for i, r in enumerate(chunk)])
        )
    return batches


@final
class ChapterExporter:
    """Uploads a chapter's images into ``Story/Chapter N[/Part k]`` on Google Drive."""

    def __init__(self, uploader: GoogleDriveUploader) -> None:
        """Initialize the exporter.

        Args:
            uploader: Authenticated Drive uploader
        """
        self.uploader = uploader

    def export(
        self,
        results: Sequence[ImageResult],
        story_name: str,
        chapter_number: str,
        tiktok_mode: bool = False,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> ExportResult:
        """Export images to Drive.

        Args:
            results: Images to upload, in reading order
            story_name: Top-level story folder name
            chapter_number: Chapter label, e.g. ``"01"``
            tiktok_mode: Split into 35-image part folders
            progress_callback: Callback(uploaded_files, total_files)

        Returns:
            ExportResult describing what was uploaded

        Raises:
            ValueError: If the story name or chapter number is missing
        """
        story_name = story_name.strip()
        chapter_number = chapter_number.strip()
        if not story_name or not chapter_number:
            raise ValueError("Please select a story and enter a chapter number.")

        total_files = len(results)
        if not results:
            return ExportResult(
                success=False,
                folder_id=None,
                uploaded_files=0,
                total_files=0,
                error_message="No images provided for export",
            )

        chapter_folder_id: str | None = None
        uploaded = 0
        try:
            story_folder_id = self.uploader.find_or_create_folder(story_name)
            chapter_folder_id = self.uploader.find_or_create_folder(
                chapter_folder_name(chapter_number), story_folder_id
            )

            for batch in plan_export(results, tiktok_mode):
                folder_id = chapter_folder_id
                if batch.part_name is not None:
                    folder_id = self.uploader.find_or_create_folder(batch.part_name, chapter_folder_id)

                for name, result in batch.files:
                    self.uploader.upload_file(name, encode_png(result), folder_id)
                    uploaded += 1
                    if progress_callback:
                        progress_callback(uploaded, total_files)

        except (RequestException, KeyError, ValueError) as e:
            return ExportResult(
                success=False,
                folder_id=chapter_folder_id,
                uploaded_files=uploaded,
                total_files=total_files,
                error_message=f"Failed after {uploaded}/{total_files} files: {e}",
            )

        return ExportResult(
            success=True,
            folder_id=chapter_folder_id,
            uploaded_files=uploaded,
            total_files=total_files,
            error_message=None,
        )
