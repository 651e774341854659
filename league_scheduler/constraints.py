"""
Compilation of team unavailability into per-week search tables.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Sequence, Set, Tuple, Mapping, Union


@dataclass
class CompiledConstraints:
    """Static tables consulted by the search."""
    weeks: int
    forbidden_per_week: List[Set[int]]
    capacity_per_week: List[int]
    # upcoming_byes[team][week] has weeks + 1 columns; the last is always 0
    upcoming_byes: List[List[int]]
    dropped: List[Tuple[int, int]] = field(default_factory=list)
    unknown_teams: List[Union[int, str]] = field(default_factory=list)

    def remaining_capacity(self, week: int) -> int:
        """Total capacity of weeks ``week..weeks-1``."""
        return sum(self.capacity_per_week[week:])


def compile_constraints(n_teams: int, unavailability: Mapping[int, Sequence[int]],
                        games_per_week: int, weeks: int) -> CompiledConstraints:
    """
    Build forbidden-team sets, week capacities and upcoming forced byes.

    Args:
        n_teams: Number of teams in the league
        unavailability: Team index -> 0-based week indices the team cannot play
        games_per_week: Weekly game cap
        weeks: Season horizon

    Returns:
        CompiledConstraints: Tables for the search. Weeks at or beyond the
        horizon are dropped, and teams outside ``0..n_teams-1`` are ignored.
    """
    forbidden_per_week: List[Set[int]] = [set() for _ in range(weeks)]
    dropped = []
    unknown_teams = []

    for team, team_weeks in unavailability.items():
        if not isinstance(team, int) or not 0 <= team < n_teams:
            unknown_teams.append(team)
            continue
        for week in team_weeks:
            if 0 <= week < weeks:
                forbidden_per_week[week].add(team)
            else:
                dropped.append((team, week))

    capacity_per_week = [
        min(games_per_week, (n_teams - len(forbidden)) // 2)
        for forbidden in forbidden_per_week
    ]

    upcoming_byes = [[0] * (weeks + 1) for _ in range(n_teams)]
    for week in range(weeks - 1, -1, -1):
        forbidden = forbidden_per_week[week]
        for team in range(n_teams):
            upcoming_byes[team][week] = upcoming_byes[team][week + 1] + (1 if team in forbidden else 0)

    return CompiledConstraints(
        weeks=weeks,
        forbidden_per_week=forbidden_per_week,
        capacity_per_week=capacity_per_week,
        upcoming_byes=upcoming_byes,
        dropped=dropped,
        unknown_teams=unknown_teams,
    )


def resolve_team_keys(team_names: Sequence[str],
                      unavailability: Mapping[Union[int, str], Sequence[int]]) -> Dict[Union[int, str], List[int]]:
    """
    Key an unavailability mapping by team index.

    Names are looked up in ``team_names``; integer keys pass through. Unknown
    names are kept as-is so the compiler can report them.
    """
    resolved: Dict[Union[int, str], List[int]] = {}
    for key, weeks in unavailability.items():
        if isinstance(key, str) and key in team_names:
            key = team_names.index(key)
        resolved.setdefault(key, []).extend(weeks)
    return resolved
