"""Team roster management."""

from __future__ import annotations

import secrets
import string
from pathlib import Path

from rich.console import Console

from webtoon_dashboard.models.project import TeamMember
from webtoon_dashboard.parsers.image_collector import natural_sort_key
from webtoon_dashboard.parsers.work_log import WorkLogParser, total_chapters

MEMBER_LOG_SUFFIX = ".txt"
UNNAMED_MEMBER = "Unnamed"

_ID_ALPHABET = string.ascii_lowercase + string.digits


class MemberNotFoundError(KeyError):
    """Raised when a member id is not on the roster."""
    pass


def generate_member_id(length: int = 7) -> str:
    """Generate a short random member id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class TeamRoster:
    """Keeps team members in memory and re-derives their parsed projects."""

    def __init__(self, parser: WorkLogParser | None = None, console: Console | None = None) -> None:
        """Initialize the roster.

        Args:
            parser: Work-log parser used whenever a member's input changes
            console: Rich console instance for warnings
        """
        self.parser = parser or WorkLogParser()
        self.console = console or Console()
        self._members: dict[str, TeamMember] = {}

    @property
    def members(self) -> list[TeamMember]:
        """Members in the order they were added."""
        return list(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def get_member(self, member_id: str) -> TeamMember:
        """Look up a member by id.

        Raises:
            MemberNotFoundError: If no member has this id
        """
        try:
            return self._members[member_id]
        except KeyError:
            raise MemberNotFoundError(member_id) from None

    def add_member(self, name: str | None = None, raw_input: str = "") -> TeamMember:
        """Add a member, named ``Member N`` unless a name is given.

        Args:
            name: Display name of the member
            raw_input: Initial work-log text

        Returns:
            The new member
        """
        member_id = generate_member_id()
        while member_id in self._members:
            member_id = generate_member_id()

        if name is None:
            name = f"Member {len(self._members) + 1}"

        member = TeamMember(id=member_id, name=name.strip() or UNNAMED_MEMBER)
        self._members[member_id] = member
        if raw_input:
            self.update_input(member_id, raw_input)
        return member

    def rename_member(self, member_id: str, name: str) -> TeamMember:
        """Rename a member; blank names become ``Unnamed``."""
        member = self.get_member(member_id)
        member.name = name.strip() or UNNAMED_MEMBER
        return member

    def update_input(self, member_id: str, raw_input: str) -> TeamMember:
        """Replace a member's work log and re-parse it from scratch."""
        member = self.get_member(member_id)
        member.raw_input = raw_input
        member.projects = self.parser.parse(raw_input)
        member.total_chapters = total_chapters(member.projects)
        return member

    def remove_member(self, member_id: str) -> TeamMember:
        """Remove a member from the roster.

        Returns:
            The removed member
        """
        member = self.get_member(member_id)
        del self._members[member_id]
        return member

    def load_folder(self, folder: Path) -> list[TeamMember]:
        """Add one member per ``.txt`` work log found in a folder.

        The member name is the file name without its extension.

        Args:
            folder: Folder holding the member logs

        Returns:
            Members that were added, in natural file name order
        """
        if not folder.exists() or not folder.is_dir():
            self.console.print(f"[red]Error: Folder does not exist or is not a directory: {folder}[/red]")
            return []

        log_files = sorted(
            (f for f in folder.iterdir() if f.is_file() and f.suffix.lower() == MEMBER_LOG_SUFFIX),
            key=lambda f: natural_sort_key(f.name),
        )
        if not log_files:
            self.console.print(f"[yellow]Warning: No {MEMBER_LOG_SUFFIX} work logs found in {folder}[/yellow]")
            return []

        added: list[TeamMember] = []
        for log_file in log_files:
            try:
                raw_input = log_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                self.console.print(f"[yellow]Warning: Could not read {log_file}: {e}[/yellow]")
                continue

            added.append(self.add_member(log_file.stem, raw_input))

        return added
