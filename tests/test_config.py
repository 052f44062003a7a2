from __future__ import annotations

from pathlib import Path

import pytest

from webtoon_dashboard.config import Settings, env_flag

ENV_VARS = (
    "TOOLS_PASSWORD",
    "TOOLS_AUTH_FLAG_FILE",
    "GOOGLE_DRIVE_ACCESS_TOKEN",
    "WORKLOG_RANGE_EXPANSION",
    "OUTPUT_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env(load_env_file=False)
    assert settings.tools_password is None
    assert settings.drive_access_token is None
    assert settings.range_expansion_enabled is False
    assert settings.auth_flag_file == Path(".tools_authenticated")
    assert settings.output_dir == Path("output")


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOOLS_PASSWORD", "secret")
    monkeypatch.setenv("GOOGLE_DRIVE_ACCESS_TOKEN", "token")
    monkeypatch.setenv("WORKLOG_RANGE_EXPANSION", "Yes")
    monkeypatch.setenv("OUTPUT_DIR", "exports")

    settings = Settings.from_env(load_env_file=False)

    assert settings.tools_password == "secret"
    assert settings.drive_access_token == "token"
    assert settings.range_expansion_enabled is True
    assert settings.output_dir == Path("exports")


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("on", True), ("0", False), ("", False)])
def test_env_flag(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("WORKLOG_RANGE_EXPANSION", value)
    assert env_flag("WORKLOG_RANGE_EXPANSION") is expected
