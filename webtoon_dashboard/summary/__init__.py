"""Team-wide aggregation."""

from .global_summary import aggregate_projects, build_team_summary, summary_to_dict

__all__ = ["aggregate_projects", "build_team_summary", "summary_to_dict"]
