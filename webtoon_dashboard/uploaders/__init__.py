"""Cloud storage uploaders."""

from .google_drive import GoogleDriveUploader

__all__ = ["GoogleDriveUploader"]
