"""Team-wide aggregation of parsed work logs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from webtoon_dashboard.models.project import GlobalProject, TeamMember, TeamSummary


def aggregate_projects(members: Iterable[TeamMember]) -> list[GlobalProject]:
    """Combine every member's projects by case-insensitive project name.

    The first spelling seen names the project. Contributors are listed once
    each, in the order they first logged the project.

    Returns:
        Projects ordered by total count, highest first
    """
    projects: dict[str, GlobalProject] = {}

    for member in members:
        for project in member.projects:
            key = project.name.casefold()
            existing = projects.get(key)
            if existing is None:
                projects[key] = GlobalProject(
                    name=project.name,
                    total_count=project.count,
                    contributors=[member.name],
                )
                continue

            existing.total_count += project.count
            if member.name not in existing.contributors:
                existing.contributors.append(member.name)

    # sorted() is stable so equal totals keep first-seen order
    return sorted(projects.values(), key=lambda p: p.total_count, reverse=True)


def build_team_summary(members: Iterable[TeamMember]) -> TeamSummary:
    """Build the team summary shown below the member cards."""
    members = list(members)
    projects = aggregate_projects(members)
    return TeamSummary(
        projects=projects,
        total_chapters=sum(p.total_count for p in projects),
        active_members=sum(1 for m in members if m.total_chapters > 0),
        total_projects=len(projects),
    )


def summary_to_dict(summary: TeamSummary, members: Iterable[TeamMember] = ()) -> dict[str, Any]:
    """Convert a summary (and optionally the per-member breakdown) to JSON-ready data."""
    data: dict[str, Any] = {
        "total_chapters": summary.total_chapters,
        "active_members": summary.active_members,
        "total_projects": summary.total_projects,
        "projects": [
            {
                "name": p.name,
                "total_count": p.total_count,
                "contributors": list(p.contributors),
            }
            for p in summary.projects
        ],
    }

    member_data = [
        {
            "name": m.name,
            "total_chapters": m.total_chapters,
            "projects": [
                {"name": p.name, "chapters": list(p.chapters), "count": p.count}
                for p in m.projects
            ],
        }
        for m in members
    ]
    if member_data:
        data["members"] = member_data

    return data
