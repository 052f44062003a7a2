from __future__ import annotations

from webtoon_dashboard.roster.team import TeamRoster
from webtoon_dashboard.summary.global_summary import build_team_summary, summary_to_dict


def make_roster() -> TeamRoster:
    roster = TeamRoster()
    roster.add_member("Ana", "Eleceed 1, 2\nIRL Quest 50")
    roster.add_member("Ben", "eleceed 3\nSolo Leveling 5, 6, 7")
    roster.add_member("Cy")
    return roster


def test_projects_are_aggregated_case_insensitively() -> None:
    summary = build_team_summary(make_roster().members)

    assert [(p.name, p.total_count, p.contributors) for p in summary.projects] == [
        ("Eleceed", 3, ["Ana", "Ben"]),
        ("Solo Leveling", 3, ["Ben"]),
        ("IRL Quest", 1, ["Ana"]),
    ]


def test_totals() -> None:
    summary = build_team_summary(make_roster().members)
    assert summary.total_chapters == 7
    assert summary.active_members == 2
    assert summary.total_projects == 3


def test_contributors_listed_once() -> None:
    roster = TeamRoster()
    roster.add_member("Sam", "A 1")
    roster.add_member("Sam", "A 2")
    summary = build_team_summary(roster.members)
    assert summary.projects[0].contributors == ["Sam"]
    assert summary.projects[0].total_count == 2


def test_empty_team() -> None:
    summary = build_team_summary([])
    assert summary.projects == []
    assert summary.total_chapters == 0
    assert summary.active_members == 0


def test_summary_to_dict() -> None:
    roster = make_roster()
    data = summary_to_dict(build_team_summary(roster.members), roster.members)

    assert data["total_chapters"] == 7
    assert data["projects"][0] == {"name": "Eleceed", "total_count": 3, "contributors": ["Ana", "Ben"]}
    assert data["members"][0]["projects"][0] == {"name": "Eleceed", "chapters": [1, 2], "count": 2}
    assert "members" not in summary_to_dict(build_team_summary(roster.members))
