"""Free-text work-log parsing.

Turns one member's pasted log, e.g.::

    Eleceed 137, 138, 139
    IRL Quest 50
    ME - 506 / 522 / 517
    Total - 12

into an ordered list of :class:`ParsedProject` records. Parsing is pure: the
same text always yields the same result and nothing outside the call is read
or modified, so it is safe to re-run on every edit.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import NamedTuple, final

from webtoon_dashboard.models.project import ParsedProject

DASHES = "-–—"

# "Total - 12", "total: 5" are hand-written subtotals, not projects
TOTAL_LINE_PATTERN = re.compile(rf"^total\s*[{DASHES}:]", re.IGNORECASE)

DASH_FORM_PATTERN = re.compile(rf"^(?P<name>.+?)\s*[{DASHES}]\s*(?P<numbers>.*)$")
# With ranges enabled "100-105" is a range, so a hyphen only separates when spaced
SPACED_DASH_FORM_PATTERN = re.compile(r"^(?P<name>.+?)(?:\s+-|\s*[–—])\s*(?P<numbers>.*)$")
TRAILING_NUMBERS_PATTERN = re.compile(r"^(?P<name>.+?)\s+(?P<numbers>[0-9,\s/\-]+)$")

TOKEN_SEPARATOR_PATTERN = re.compile(r"[,/\s]+")
# Longer digit runs are not chapter numbers and are dropped like any other junk
MAX_NUMBER_DIGITS = 9
NUMBER_TOKEN_PATTERN = re.compile(rf"[0-9]{{1,{MAX_NUMBER_DIGITS}}}")
RANGE_TOKEN_PATTERN = re.compile(
    rf"(?P<start>[0-9]{{1,{MAX_NUMBER_DIGITS}}})-(?P<end>[0-9]{{1,{MAX_NUMBER_DIGITS}}})"
)

DEFAULT_MAX_RANGE_SPAN = 1000


class LineEntry(NamedTuple):
    """One work-log line after splitting and tokenizing."""

    name: str
    chapters: tuple[int, ...]


@dataclass(frozen=True)
class GrammarRule:
    """A named name/number split rule.

    A rule without a pattern always matches and treats the whole line as the
    project name. Name groups are non-empty and start the line, so on a
    stripped line the name is never blank.
    """

    name: str
    pattern: re.Pattern[str] | None = None

    def match(self, line: str) -> tuple[str, str | None] | None:
        """Split a line into ``(name, number_field)`` or return None."""
        if self.pattern is None:
            return line.strip(), None

        match = self.pattern.match(line)
        if match is None:
            return None
        return match.group("name").strip(), match.group("numbers")


DASH_FORM = GrammarRule("dash", DASH_FORM_PATTERN)
SPACED_DASH_FORM = GrammarRule("spaced-dash", SPACED_DASH_FORM_PATTERN)
TRAILING_NUMBERS_FORM = GrammarRule("trailing-numbers", TRAILING_NUMBERS_PATTERN)
FALLBACK_FORM = GrammarRule("fallback")


def is_total_line(line: str) -> bool:
    """Check whether a stripped line is a hand-written subtotal."""
    return TOTAL_LINE_PATTERN.match(line) is not None


def tokenize_numbers(
    number_field: str,
    range_expansion_enabled: bool = False,
    max_range_span: int = DEFAULT_MAX_RANGE_SPAN,
) -> list[int]:
    """Extract chapter numbers from a number field.

    Args:
        number_field: Text after the project name, e.g. ``"506 / 522"``
        range_expansion_enabled: Expand ``"100-105"`` into 100..105
        max_range_span: Ranges covering more chapters than this are dropped

    Returns:
        Numbers in the order they appear, duplicates included
    """
    numbers: list[int] = []
    for token in TOKEN_SEPARATOR_PATTERN.split(number_field):
        if not token:
            continue

        if NUMBER_TOKEN_PATTERN.fullmatch(token):
            numbers.append(int(token))
            continue

        if not range_expansion_enabled:
            continue

        range_match = RANGE_TOKEN_PATTERN.fullmatch(token)
        if range_match is None:
            continue

        start = int(range_match.group("start"))
        end = int(range_match.group("end"))
        if start <= end and end - start < max_range_span:
            numbers.extend(range(start, end + 1))

    return numbers


@dataclass
class ProjectTally:
    """Running totals for one project while a single log is parsed.

    Every line mentioning the project is added in turn; :meth:`to_project`
    gives the same record whatever order the lines came in.
    """

    name: str
    chapters: set[int] = field(default_factory=set)
    mentions: int = 0

    def add(self, entry: LineEntry) -> None:
        """Fold one line entry into the tally."""
        if entry.chapters:
            self.chapters.update(entry.chapters)
        else:
            self.mentions += 1

    def to_project(self) -> ParsedProject:
        # bare mentions only count until chapters are recovered
        if self.chapters:
            return ParsedProject(self.name, tuple(sorted(self.chapters)), len(self.chapters))
        return ParsedProject(self.name, (), self.mentions)


def fold_accents(text: str) -> str:
    """Strip combining marks, so ``"Éclair"`` folds to ``"Eclair"``."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def project_sort_key(project: ParsedProject) -> tuple[str, str, str]:
    """Sort key ordering projects alphabetically, ignoring accents and case first."""
    folded = project.name.casefold()
    return fold_accents(folded), folded, project.name


@final
class WorkLogParser:
    """Parses free-text work logs into deduplicated, sorted projects."""

    def __init__(
        self,
        range_expansion_enabled: bool = False,
        max_range_span: int = DEFAULT_MAX_RANGE_SPAN,
    ) -> None:
        """Initialize the parser.

        Args:
            range_expansion_enabled: Treat ``a-b`` tokens as inclusive chapter
                ranges. A hyphen then only separates name and numbers when
                whitespace precedes it, so ``"Solo Leveling 100-105"`` keeps
                its range.
            max_range_span: Largest range that will be expanded
        """
        self.range_expansion_enabled = range_expansion_enabled
        self.max_range_span = max_range_span

        dash_rule = SPACED_DASH_FORM if range_expansion_enabled else DASH_FORM
        self.rules: tuple[GrammarRule, ...] = (dash_rule, TRAILING_NUMBERS_FORM, FALLBACK_FORM)

    def parse_line(self, line: str) -> LineEntry | None:
        """Parse a single line.

        Returns:
            The line entry, or None for blank lines and subtotal lines
        """
        line = line.strip()
        if not line or is_total_line(line):
            return None

        # the fallback rule is last and always matches
        name, number_field = next(
            split for split in (rule.match(line) for rule in self.rules) if split is not None
        )

        if number_field is None:
            return LineEntry(name, ())

        numbers = tokenize_numbers(
            number_field,
            range_expansion_enabled=self.range_expansion_enabled,
            max_range_span=self.max_range_span,
        )
        return LineEntry(name, tuple(numbers))

    def parse(self, raw_text: str) -> list[ParsedProject]:
        """Parse a whole work log.

        Lines are tallied per casefolded name; the first spelling seen is kept.

        Args:
            raw_text: One member's pasted log

        Returns:
            Projects sorted by name; empty for blank input
        """
        tallies: dict[str, ProjectTally] = {}
        for line in raw_text.split("\n"):
            entry = self.parse_line(line)
            if entry is None:
                continue

            key = entry.name.casefold()
            if key not in tallies:
                tallies[key] = ProjectTally(entry.name)
            tallies[key].add(entry)

        projects = [tally.to_project() for tally in tallies.values()]
        return sorted(projects, key=project_sort_key)


def parse_work_log(raw_text: str, range_expansion_enabled: bool = False) -> list[ParsedProject]:
    """Parse a work log with a default-configured :class:`WorkLogParser`."""
    return WorkLogParser(range_expansion_enabled=range_expansion_enabled).parse(raw_text)


def total_chapters(projects: list[ParsedProject]) -> int:
    """Sum of project counts, the per-member total shown on the dashboard."""
    return sum(project.count for project in projects)
