"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

TRUTHY_VALUES = {"1", "true", "yes", "on"}

DEFAULT_AUTH_FLAG_FILE = Path(".tools_authenticated")
DEFAULT_OUTPUT_DIR = Path("output")


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY_VALUES


@dataclass
class Settings:
    """Dashboard settings loaded from the environment and ``.env``."""

    tools_password: str | None = None
    auth_flag_file: Path = DEFAULT_AUTH_FLAG_FILE
    drive_access_token: str | None = None
    range_expansion_enabled: bool = False
    output_dir: Path = DEFAULT_OUTPUT_DIR

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> Settings:
        """Build settings from environment variables.

        Args:
            load_env_file: Load ``.env`` from the working directory first
        """
        if load_env_file:
            _ = load_dotenv()

        return cls(
            tools_password=os.getenv("TOOLS_PASSWORD") or None,
            auth_flag_file=Path(os.getenv("TOOLS_AUTH_FLAG_FILE") or DEFAULT_AUTH_FLAG_FILE),
            drive_access_token=os.getenv("GOOGLE_DRIVE_ACCESS_TOKEN") or None,
            range_expansion_enabled=env_flag("WORKLOG_RANGE_EXPANSION"),
            output_dir=Path(os.getenv("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
        )
