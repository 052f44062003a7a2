"""Google Drive API uploader implementation."""

from __future__ import annotations

import json
import os
from typing import Any

import requests
from dotenv import load_dotenv
from requests_toolbelt.multipart.encoder import MultipartEncoder

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
PNG_MIME_TYPE = "image/png"


def escape_query_value(value: str) -> str:
    """Escape a value for use inside a quoted Drive search query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_folder_query(name: str, parent_id: str | None = None) -> str:
    """Build the search query for a non-trashed folder with an exact name."""
    query = (
        f"name='{escape_query_value(name)}' "
        f"and mimeType='{FOLDER_MIME_TYPE}' and trashed=false"
    )
    if parent_id:
        query += f" and '{escape_query_value(parent_id)}' in parents"
    return query


class GoogleDriveUploader:
    """Handles Google Drive API integration for folder creation and image uploads."""

    def __init__(self, access_token: str | None = None) -> None:
        """Initialize the uploader with an OAuth access token.

        Args:
            access_token: Bearer token; read from GOOGLE_DRIVE_ACCESS_TOKEN when omitted

        Raises:
            ValueError: If no access token is available
        """
        _ = load_dotenv()
        self.access_token: str | None = access_token or os.getenv("GOOGLE_DRIVE_ACCESS_TOKEN")
        if not self.access_token:
            raise ValueError(
                "GOOGLE_DRIVE_ACCESS_TOKEN not found in environment variables. "
                + "Please add it to your .env file."
            )

        self.base_url: str = "https://www.googleapis.com/drive/v3"
        self.upload_url: str = "https://www.googleapis.com/upload/drive/v3/files"
        self.timeout: int = 60

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        data: Any = None,
        json_body: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Make an API request with error handling.

        Args:
            method: HTTP method
            url: Absolute request URL
            params: Query string parameters
            data: Request body (a MultipartEncoder)
            json_body: JSON request body

        Returns:
            Response object

        Raises:
            requests.exceptions.RequestException: If the request fails
        """
        headers = {"Authorization": f"Bearer {self.access_token}"}

        # Multipart bodies carry their own boundary in the Content-Type
        if hasattr(data, "content_type"):
            headers["Content-Type"] = data.content_type

        try:
            response = requests.request(
                method,
                url,
                params=params,
                data=data,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            if e.response is not None:
                raise requests.exceptions.HTTPError(
                    f"{e} - Response: {e.response.text}", response=e.response
                ) from e
            raise

    def test_connection(self) -> bool:
        """Test the API connection and authentication.

        Returns:
            True if the token is accepted
        """
        try:
            response = self._make_request("GET", f"{self.base_url}/about", params={"fields": "user"})
            user = response.json().get("user", {})
            print(f"Success: Connected as '{user.get('displayName', 'Unknown')}'")
            return True
        except (requests.exceptions.RequestException, ValueError) as e:
            print(f"Debug: Drive connection test failed with error: {e}")
            return False

    def find_folder(self, name: str, parent_id: str | None = None) -> str | None:
        """Find a folder by exact name.

        Returns:
            The first matching folder id, or None
        """
        response = self._make_request(
            "GET",
            f"{self.base_url}/files",
            params={
                "q": build_folder_query(name, parent_id),
                "fields": "files(id, name)",
                "spaces": "drive",
            },
        )
        files = response.json().get("files") or []
        if files:
            return files[0]["id"]
        return None

    def create_folder(self, name: str, parent_id: str | None = None) -> str:
        """Create a folder and return its id."""
        metadata: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            metadata["parents"] = [parent_id]

        response = self._make_request(
            "POST", f"{self.base_url}/files", params={"fields": "id"}, json_body=metadata
        )
        return response.json()["id"]

    def find_or_create_folder(self, name: str, parent_id: str | None = None) -> str:
        """Return the id of an existing folder, creating it when missing.

        Args:
            name: Folder name
            parent_id: Parent folder id; the drive root when omitted

        Returns:
            Folder id
        """
        folder_id = self.find_folder(name, parent_id)
        if folder_id is not None:
            return folder_id
        return self.create_folder(name, parent_id)

    def upload_file(
        self,
        name: str,
        content: bytes,
        folder_id: str,
        mime_type: str = PNG_MIME_TYPE,
    ) -> str:
        """Upload one file into a folder.

        Args:
            name: File name on Drive
            content: File bytes
            folder_id: Destination folder id
            mime_type: MIME type of the content

        Returns:
            The new file id
        """
        metadata = {"name": name, "mimeType": mime_type, "parents": [folder_id]}
        encoder = MultipartEncoder(
            fields=[
                ("metadata", (None, json.dumps(metadata), "application/json")),
                ("file", (name, content, mime_type)),
            ]
        )

        response = self._make_request(
            "POST", self.upload_url, params={"uploadType": "multipart"}, data=encoder
        )
        return response.json().get("id", "")
