"""Shared-password gate for the image tools."""

from __future__ import annotations

import hmac
from pathlib import Path

from webtoon_dashboard.config import DEFAULT_AUTH_FLAG_FILE


class PasswordGate:
    """Checks the shared tools password and remembers a successful login.

    Only the ``true``/``false`` flag is written to disk, never the password.
    """

    def __init__(self, password: str | None, flag_file: Path | None = None) -> None:
        """Initialize the gate.

        Args:
            password: Expected password; when None every login fails
            flag_file: File holding the authenticated flag
        """
        self.password = password
        self.flag_file = flag_file or DEFAULT_AUTH_FLAG_FILE

    @property
    def is_authenticated(self) -> bool:
        """Whether a previous login is still recorded."""
        try:
            return self.flag_file.read_text(encoding="utf-8").strip() == "true"
        except OSError:
            return False

    def _store_flag(self, authenticated: bool) -> None:
        self.flag_file.parent.mkdir(parents=True, exist_ok=True)
        _ = self.flag_file.write_text("true" if authenticated else "false", encoding="utf-8")

    def login(self, password: str) -> bool:
        """Try to log in.

        Returns:
            True if the password matched
        """
        if not self.password or not hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8")):
            return False

        self._store_flag(True)
        return True

    def logout(self) -> None:
        """Forget the login."""
        self._store_flag(False)
