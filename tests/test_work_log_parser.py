from __future__ import annotations

import pytest

from webtoon_dashboard.models.project import ParsedProject
from webtoon_dashboard.parsers.work_log import (
    DASH_FORM,
    FALLBACK_FORM,
    SPACED_DASH_FORM,
    TRAILING_NUMBERS_FORM,
    LineEntry,
    ProjectTally,
    WorkLogParser,
    is_total_line,
    parse_work_log,
    tokenize_numbers,
    total_chapters,
)


def test_merges_repeated_project_lines() -> None:
    projects = parse_work_log("A 1, 2\nA 3")
    assert projects == [ParsedProject("A", (1, 2, 3), 3)]


def test_line_order_does_not_change_merged_set() -> None:
    assert parse_work_log("A 3\nA 1, 2") == parse_work_log("A 1, 2\nA 3")


def test_case_insensitive_merge_keeps_first_casing() -> None:
    projects = parse_work_log("Eleceed 1\neleceed 2")
    assert projects == [ParsedProject("Eleceed", (1, 2), 2)]


def test_duplicates_within_line_are_removed() -> None:
    projects = parse_work_log("A 1, 1, 2")
    assert projects == [ParsedProject("A", (1, 2), 2)]


def test_results_sorted_by_name() -> None:
    projects = parse_work_log("B 1\nA 1")
    assert [p.name for p in projects] == ["A", "B"]


def test_sort_ignores_case() -> None:
    projects = parse_work_log("Beta 1\nalpha 1")
    assert [p.name for p in projects] == ["alpha", "Beta"]


def test_blank_and_total_lines_are_dropped() -> None:
    projects = parse_work_log("\n  \nTotal - 10\nA 5")
    assert projects == [ParsedProject("A", (5,), 1)]


@pytest.mark.parametrize("line", ["Total - 12", "Total: 5", "TOTAL-3", "total : 9", "Total – 7"])
def test_total_line_variants(line: str) -> None:
    assert is_total_line(line)
    assert parse_work_log(line) == []


def test_project_starting_with_total_is_kept() -> None:
    projects = parse_work_log("Totally Spies 3")
    assert projects == [ParsedProject("Totally Spies", (3,), 1)]


def test_name_without_numbers_counts_mentions() -> None:
    assert parse_work_log("JustAName") == [ParsedProject("JustAName", (), 1)]
    assert parse_work_log("JustAName\nJustAName") == [ParsedProject("JustAName", (), 2)]


def test_dash_form_with_slash_separated_numbers() -> None:
    projects = parse_work_log("ME - 506 / 522 / 517")
    assert projects == [ParsedProject("ME", (506, 517, 522), 3)]


@pytest.mark.parametrize("line", ["Eleceed – 12, 13", "Eleceed — 12, 13", "Eleceed-12,13"])
def test_dash_variants(line: str) -> None:
    assert parse_work_log(line) == [ParsedProject("Eleceed", (12, 13), 2)]


def test_dash_form_drops_non_numeric_tokens() -> None:
    projects = parse_work_log("Tower of God - ch 5")
    assert projects == [ParsedProject("Tower of God", (5,), 1)]


def test_dash_form_with_empty_number_field() -> None:
    assert parse_work_log("Eleceed -") == [ParsedProject("Eleceed", (), 1)]


def test_trailing_numbers_keep_punctuated_name() -> None:
    projects = parse_work_log("Tower of God Ep. 1, 2, 3")
    assert projects == [ParsedProject("Tower of God Ep.", (1, 2, 3), 3)]


def test_mixed_log() -> None:
    raw = "Eleceed 137, 138, 139\nIRL Quest 50\nME - 506 / 522 / 517\nTotal - 7\n"
    projects = parse_work_log(raw)
    assert projects == [
        ParsedProject("Eleceed", (137, 138, 139), 3),
        ParsedProject("IRL Quest", (50,), 1),
        ParsedProject("ME", (506, 517, 522), 3),
    ]
    assert total_chapters(projects) == 7


def test_bare_mention_does_not_inflate_recovered_chapters() -> None:
    expected = [ParsedProject("A", (1,), 1)]
    assert parse_work_log("A 1\nA") == expected
    assert parse_work_log("A\nA 1") == expected


def test_surrounding_whitespace_and_crlf() -> None:
    projects = parse_work_log("  Eleceed 5  \r\nIRL Quest 6\r\n")
    assert projects == [ParsedProject("Eleceed", (5,), 1), ParsedProject("IRL Quest", (6,), 1)]


@pytest.mark.parametrize("raw", ["", "   ", "\n\n", " \t \n "])
def test_empty_input(raw: str) -> None:
    assert parse_work_log(raw) == []


def test_parsing_is_repeatable() -> None:
    raw = "Eleceed 1\nME - 3 / 2\nJustAName\neleceed 4"
    assert parse_work_log(raw) == parse_work_log(raw)


def test_strict_mode_treats_hyphen_as_separator() -> None:
    projects = parse_work_log("Solo Leveling 100-105")
    assert projects == [ParsedProject("Solo Leveling 100", (105,), 1)]


def test_range_expansion() -> None:
    projects = parse_work_log("Solo Leveling 100-105", range_expansion_enabled=True)
    assert projects == [ParsedProject("Solo Leveling", (100, 101, 102, 103, 104, 105), 6)]


def test_range_mode_still_handles_dash_form() -> None:
    parser = WorkLogParser(range_expansion_enabled=True)
    assert parser.parse("ME - 506 / 522 / 517") == [ParsedProject("ME", (506, 517, 522), 3)]
    assert parser.parse("Eleceed - ch 5") == [ParsedProject("Eleceed", (5,), 1)]


def test_range_mode_mixes_ranges_and_numbers() -> None:
    projects = parse_work_log("A 1-3, 7, 2", range_expansion_enabled=True)
    assert projects == [ParsedProject("A", (1, 2, 3, 7), 4)]


def test_reversed_range_is_dropped() -> None:
    projects = parse_work_log("A 5-3", range_expansion_enabled=True)
    assert projects == [ParsedProject("A", (), 1)]


def test_oversized_range_is_dropped() -> None:
    parser = WorkLogParser(range_expansion_enabled=True, max_range_span=10)
    assert parser.parse("A 1-10") == [ParsedProject("A", tuple(range(1, 11)), 10)]
    assert parser.parse("A 1-11") == [ParsedProject("A", (), 1)]


def test_tokenize_numbers() -> None:
    assert tokenize_numbers("1, 2/3  4") == [1, 2, 3, 4]
    assert tokenize_numbers("12a, 5") == [5]
    assert tokenize_numbers("1-3") == []
    assert tokenize_numbers("1-3", range_expansion_enabled=True) == [1, 2, 3]
    assert tokenize_numbers("") == []


def test_grammar_rules_in_isolation() -> None:
    assert DASH_FORM.match("ME - 506") == ("ME", "506")
    assert DASH_FORM.match("No dash here") is None
    assert TRAILING_NUMBERS_FORM.match("IRL Quest 50") == ("IRL Quest", "50")
    assert TRAILING_NUMBERS_FORM.match("Eleceed") is None
    assert FALLBACK_FORM.match(" Eleceed ") == ("Eleceed", None)


def test_parse_line() -> None:
    parser = WorkLogParser()
    assert parser.parse_line("   ") is None
    assert parser.parse_line("Total: 4") is None
    assert parser.parse_line("A 1, 1") == LineEntry("A", (1, 1))
    assert parser.parse_line("JustAName") == LineEntry("JustAName", ())


def test_project_tally_counts_mentions_until_chapters_appear() -> None:
    tally = ProjectTally("A")
    tally.add(LineEntry("A", ()))
    tally.add(LineEntry("a", ()))
    assert tally.to_project() == ParsedProject("A", (), 2)

    tally.add(LineEntry("a", (3, 1, 3)))
    assert tally.to_project() == ParsedProject("A", (1, 3), 2)


def test_range_mode_dash_separator_with_range() -> None:
    projects = parse_work_log("Eleceed - 100-102", range_expansion_enabled=True)
    assert projects == [ParsedProject("Eleceed", (100, 101, 102), 3)]


def test_range_mode_keeps_hyphenated_names() -> None:
    projects = parse_work_log("Spider-Man - 5", range_expansion_enabled=True)
    assert projects == [ParsedProject("Spider-Man", (5,), 1)]


def test_spaced_dash_rule() -> None:
    assert SPACED_DASH_FORM.match("Solo Leveling 100-105") is None
    assert SPACED_DASH_FORM.match("ME - 506") == ("ME", "506")
    assert SPACED_DASH_FORM.match("ME—506") == ("ME", "506")


@pytest.mark.parametrize("range_expansion_enabled", [False, True])
def test_oversized_digit_runs_are_dropped(range_expansion_enabled: bool) -> None:
    huge = "1" * 5000
    raw = f"A {huge}\nB {huge}-2\nC 7, {huge}"
    projects = parse_work_log(raw, range_expansion_enabled=range_expansion_enabled)
    by_name = {project.name: project for project in projects}
    assert by_name["A"].chapters == ()
    assert by_name["C"].chapters == (7,)


def test_range_with_oversized_endpoint_is_dropped() -> None:
    assert tokenize_numbers("1-" + "9" * 5000, range_expansion_enabled=True) == []
    assert tokenize_numbers("123456789") == [123456789]
    assert tokenize_numbers("1234567890") == []


def test_large_log_with_many_projects() -> None:
    distinct = "\n".join(f"Project {index:05d} - {index}" for index in range(20000))
    repeated = "\n".join(f"Eleceed {chapter}" for chapter in range(20000))

    projects = parse_work_log(distinct + "\n" + repeated)

    assert len(projects) == 20001
    eleceed = next(project for project in projects if project.name == "Eleceed")
    assert eleceed.count == 20000
    assert eleceed.chapters == tuple(range(20000))
    assert projects[-1].name == "Project 19999"


def test_sort_ignores_accents() -> None:
    projects = parse_work_log("Fable 1\nÉclair 2\nApple 3\neclair 4")
    assert [project.name for project in projects] == ["Apple", "eclair", "Éclair", "Fable"]


@pytest.mark.parametrize("range_expansion_enabled", [False, True])
def test_every_non_blank_line_gets_a_name(range_expansion_enabled: bool) -> None:
    parser = WorkLogParser(range_expansion_enabled=range_expansion_enabled)
    assert parser.parse_line("- 5") == LineEntry("-", (5,))
    assert parser.parse_line("  ?  ") == LineEntry("?", ())
