"""
Up-front feasibility checks on a league's unavailability map.

These are necessary conditions only; a map that passes can still be
infeasible once the search runs.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple
from .config import LeagueConfig


@dataclass
class AvailabilityReport:
    """Summary of how much room the unavailability map leaves."""
    weeks: int
    total_games_needed: int
    total_possible_games: int
    possible_games_per_week: List[int]
    max_unavailable_per_team: int
    unavailable_weeks_per_team: Dict[str, int]
    ignored_weeks: Dict[str, List[int]] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_feasible_upfront(self) -> bool:
        return not self.errors


def _unavailable_in_week(unavailability: Dict[str, List[int]], week_number: int) -> int:
    return sum(1 for weeks in unavailability.values() if week_number in weeks)


def possible_games_per_week(config: LeagueConfig) -> List[int]:
    """Maximum playable games in each week given who is unavailable."""
    games = []
    for week_number in range(1, config.weeks + 1):
        available = config.n_teams - _unavailable_in_week(config.unavailability, week_number)
        games.append(min(config.games_per_week, available // 2))
    return games


def check_availability(config: LeagueConfig) -> AvailabilityReport:
    """
    Check an unavailability map against the league shape.

    Args:
        config: League configuration

    Returns:
        AvailabilityReport: capacities, per-team counts, warnings and errors
    """
    per_week = possible_games_per_week(config)
    total_possible = sum(per_week)
    max_unavailable = config.weeks - config.games_per_team

    report = AvailabilityReport(
        weeks=config.weeks,
        total_games_needed=config.total_games,
        total_possible_games=total_possible,
        possible_games_per_week=per_week,
        max_unavailable_per_team=max_unavailable,
        unavailable_weeks_per_team={},
    )

    for team in config.team_names:
        weeks = sorted(set(config.unavailability.get(team, [])))
        in_horizon = [w for w in weeks if w <= config.weeks]
        beyond = [w for w in weeks if w > config.weeks]
        report.unavailable_weeks_per_team[team] = len(in_horizon)

        if beyond:
            report.ignored_weeks[team] = beyond
            report.warnings.append(
                f"{team}: weeks {beyond} are beyond the {config.weeks}-week season and will be ignored"
            )
        if len(in_horizon) > max_unavailable:
            report.errors.append(
                f"{team} cannot have more than {max_unavailable} unavailable weeks "
                f"(has {len(in_horizon)})"
            )

    if total_possible < config.total_games:
        report.errors.append(
            f"The total possible games ({total_possible}) are less than the total "
            f"games needed ({config.total_games})"
        )

    for index, games in enumerate(per_week):
        if games == 0:
            report.warnings.append(f"Week {index + 1} has no playable games")

    return report


def can_mark_unavailable(config: LeagueConfig, team: str, week_number: int) -> Tuple[bool, str]:
    """
    Check whether marking ``team`` unavailable in ``week_number`` keeps the
    league feasible up front.

    Args:
        config: League configuration
        team: Team name
        week_number: 1-based week

    Returns:
        Tuple[bool, str]: whether the change is allowed, and the reason if not
    """
    if team not in config.team_names:
        return False, f"Unknown team: {team}"
    if not 1 <= week_number <= config.weeks:
        return False, f"Week {week_number} is outside the {config.weeks}-week season"

    current = set(config.unavailability.get(team, []))
    if week_number in current:
        return True, ""

    updated = dict(config.unavailability)
    updated[team] = sorted(current | {week_number})
    candidate = config.model_copy(update={'unavailability': updated})

    if sum(possible_games_per_week(candidate)) < config.total_games:
        return False, (
            f"Cannot mark {team} as unavailable for Week {week_number}. Doing so would reduce "
            f"the total possible games below the required {config.total_games}."
        )

    max_unavailable = config.weeks - config.games_per_team
    in_horizon = [w for w in updated[team] if w <= config.weeks]
    if len(in_horizon) > max_unavailable:
        return False, f"{team} cannot have more than {max_unavailable} unavailable weeks."

    return True, ""
