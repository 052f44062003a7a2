"""Team member management."""

from .team import MemberNotFoundError, TeamRoster

__all__ = ["MemberNotFoundError", "TeamRoster"]
