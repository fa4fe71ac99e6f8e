"""Match a spoken team name against the user's Plant Ranger teams."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

_TEAM_PREFIX = re.compile(r"^team\s+")


def normalize_team_name(spoken: str) -> str:
    """Lower-case, trim and drop a leading spoken "team"."""
    return _TEAM_PREFIX.sub("", spoken.strip().lower()).strip()


def team_display_name(team: Dict[str, Any]) -> str:
    return team.get("name") or "Unnamed Team"


@dataclass(frozen=True)
class TeamMatch:
    team: Optional[Dict[str, Any]] = None
    candidates: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ambiguous(self) -> bool:
        return self.team is None and len(self.candidates) > 1


def match_team(teams: Sequence[Dict[str, Any]], spoken: str) -> TeamMatch:
    """Exact name wins; otherwise a single substring candidate in either direction."""
    wanted = normalize_team_name(spoken)
    if not wanted:
        return TeamMatch()

    named = [(team, (team.get("name") or "").strip().lower()) for team in teams]
    for team, name in named:
        if name == wanted:
            return TeamMatch(team=team, candidates=[team])

    candidates = [
        team for team, name in named if name and (wanted in name or name in wanted)
    ]
    if len(candidates) == 1:
        return TeamMatch(team=candidates[0], candidates=candidates)
    return TeamMatch(candidates=candidates)


__all__ = ["TeamMatch", "match_team", "normalize_team_name", "team_display_name"]
