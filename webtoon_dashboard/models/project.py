"""Work-log project data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedProject:
    """A project recovered from one member's work log.

    ``chapters`` is always ascending and duplicate-free. ``count`` equals
    ``len(chapters)`` whenever chapters were recovered; otherwise it counts
    how many times the project was mentioned without numbers.
    """

    name: str
    chapters: tuple[int, ...] = ()
    count: int = 0


@dataclass
class TeamMember:
    """A team member and the projects parsed from their pasted log."""

    id: str
    name: str
    raw_input: str = ""
    projects: list[ParsedProject] = field(default_factory=list)
    total_chapters: int = 0


@dataclass
class GlobalProject:
    """A project aggregated across every member that logged it."""

    name: str
    total_count: int
    contributors: list[str] = field(default_factory=list)


@dataclass
class TeamSummary:
    """Team-wide totals."""

    projects: list[GlobalProject]
    total_chapters: int
    active_members: int
    total_projects: int
