"""
Core scheduling engine: backtracking search over weeks and pairings.
"""

import math
import sys
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Set, Sequence, Mapping, Union, Any
from .models import Game, Schedule, ScheduleResult, SearchStats
from .config import LeagueConfig
from .constraints import CompiledConstraints, compile_constraints, resolve_team_keys
from .formatter import success_result, infeasible_result, cancelled_result, format_week_lines


class InvalidConfigurationError(ValueError):
    """League shape that no search should be attempted for."""


class SearchCancelled(Exception):
    """Raised inside the search to unwind after the cancel token is set."""


@dataclass
class SearchState:
    """Mutable state owned by one search; every change is undone on backtrack."""
    games_remaining: List[int]
    games_to_place: int
    games_played: Set[Game] = field(default_factory=set)
    schedule: List[List[Game]] = field(default_factory=list)


def horizon(n_teams: int, games_per_team: int, games_per_week: int) -> int:
    """Number of weeks needed when every week is filled to the cap."""
    return math.ceil(n_teams * games_per_team / (2 * games_per_week))


def check_league_shape(n_teams: int, games_per_team: int, games_per_week: int) -> None:
    """Raise InvalidConfigurationError for a league that cannot be scheduled."""
    if n_teams < 2:
        raise InvalidConfigurationError(f"At least 2 teams are required, got {n_teams}")
    if not 1 <= games_per_team <= n_teams - 1:
        raise InvalidConfigurationError(
            f"games_per_team must be between 1 and {n_teams - 1}, got {games_per_team}"
        )
    if not 1 <= games_per_week <= n_teams // 2:
        raise InvalidConfigurationError(
            f"games_per_week must be between 1 and {n_teams // 2}, got {games_per_week}"
        )
    if (n_teams * games_per_team) % 2 != 0:
        raise InvalidConfigurationError(
            f"{n_teams} teams x {games_per_team} games is odd; every game needs two teams"
        )


class SchedulingEngine:
    """Backtracking schedule search with feasibility pruning."""

    def __init__(self, team_names: Sequence[str], games_per_team: int, games_per_week: int,
                 cancel_token=None, cancel_check_interval: int = 1000, verbose: bool = False):
        check_league_shape(len(team_names), games_per_team, games_per_week)
        if len(set(team_names)) != len(team_names):
            raise InvalidConfigurationError("Team names must be unique")

        self.team_names = list(team_names)
        self.n_teams = len(team_names)
        self.games_per_team = games_per_team
        self.games_per_week = games_per_week
        self.weeks = horizon(self.n_teams, games_per_team, games_per_week)
        self.cancel_token = cancel_token
        self.cancel_check_interval = max(1, cancel_check_interval)
        self.verbose = verbose

        # Ascending pair order pins which feasible schedule is found first
        self.all_games: List[Game] = [
            (a, b) for a in range(self.n_teams) for b in range(a + 1, self.n_teams)
        ]

        self.tables: Optional[CompiledConstraints] = None
        self.state: Optional[SearchState] = None
        self.stats = SearchStats()
        self._capacity_from: List[int] = []

    def schedule(self, unavailability: Optional[Mapping[Union[int, str], Sequence[int]]] = None) -> ScheduleResult:
        """
        Search for a schedule.

        Args:
            unavailability: Team name or index -> 0-based weeks the team cannot play

        Returns:
            ScheduleResult: success, infeasible, or cancelled
        """
        self.stats = SearchStats()
        by_index = resolve_team_keys(self.team_names, unavailability or {})
        self.tables = compile_constraints(self.n_teams, by_index, self.games_per_week, self.weeks)
        self._capacity_from = [self.tables.remaining_capacity(w) for w in range(self.weeks + 1)]

        self._log(f"There will be {self.weeks} weeks, and "
                  f"{self.weeks - self.games_per_team} byes for each team")
        if self.tables.dropped:
            self._log(f"Ignoring {len(self.tables.dropped)} unavailable weeks beyond the horizon")
        if self.tables.unknown_teams:
            self._log(f"Ignoring unavailability for unknown teams: {self.tables.unknown_teams}")

        self.state = SearchState(
            games_remaining=[self.games_per_team] * self.n_teams,
            games_to_place=self.n_teams * self.games_per_team // 2,
        )

        # One frame per placed game plus two per week
        needed_depth = self.state.games_to_place + 2 * self.weeks + 100
        previous_limit = sys.getrecursionlimit()
        if previous_limit < needed_depth:
            sys.setrecursionlimit(needed_depth)

        try:
            self._check_cancelled()
            found = self._sequence_week(0)
            if found:
                result = success_result(self.state.schedule, self.team_names, self.stats)
                for line in format_week_lines(result.schedule):
                    self._log(line)
                return result
            self._log("No solution found")
            return infeasible_result(self.stats)
        except SearchCancelled:
            self._log("Search cancelled")
            return cancelled_result(self.stats)
        finally:
            self.state = None
            sys.setrecursionlimit(previous_limit)

    def _sequence_week(self, week: int) -> bool:
        """Outer search: prune, then fill ``week`` and move on."""
        self._check_cancelled()
        state = self.state
        stats = self.stats
        stats.weeks_entered += 1
        stats.deepest_week = max(stats.deepest_week, week)

        remaining_capacity = self._capacity_from[week]
        self._log(f"Week: {week + 1}  remaining capacity: {remaining_capacity}  "
                  f"games needed: {state.games_to_place}")

        if remaining_capacity < state.games_to_place:
            stats.capacity_prunes += 1
            stats.last_prune = "capacity"
            return False

        if week == self.weeks:
            if all(left == 0 for left in state.games_remaining):
                return True
            stats.terminal_failures += 1
            return False

        weeks_left = self.weeks - week
        byes = self.tables.upcoming_byes
        for team in range(self.n_teams):
            if state.games_remaining[team] + byes[team][week] > weeks_left:
                stats.deadline_prunes += 1
                stats.last_prune = "deadline"
                return False

        return self._assign_week(week, [], set(), 0)

    def _assign_week(self, week: int, week_games: List[Game], busy: Set[int], start: int) -> bool:
        """Inner search: close out ``week`` now, or add one more game and recurse."""
        state = self.state
        self.stats.nodes += 1
        capacity = self.tables.capacity_per_week[week]
        at_capacity = len(week_games) >= capacity

        # Compares games still needed, not unplayed pairs, with later capacity
        if at_capacity or state.games_to_place <= self._capacity_from[week + 1]:
            state.schedule.append(list(week_games))
            if self._sequence_week(week + 1):
                return True
            state.schedule.pop()
            if at_capacity:
                return False

        forbidden = self.tables.forbidden_per_week[week]
        remaining = state.games_remaining
        played = state.games_played
        for index in range(start, len(self.all_games)):
            self._count_attempt()
            game = self.all_games[index]
            a, b = game
            if (game in played or a in forbidden or b in forbidden or a in busy or b in busy
                    or remaining[a] == 0 or remaining[b] == 0):
                continue

            played.add(game)
            remaining[a] -= 1
            remaining[b] -= 1
            state.games_to_place -= 1
            week_games.append(game)
            busy.add(a)
            busy.add(b)

            if self._assign_week(week, week_games, busy, index + 1):
                return True

            busy.discard(a)
            busy.discard(b)
            week_games.pop()
            state.games_to_place += 1
            remaining[a] += 1
            remaining[b] += 1
            played.discard(game)

        return False

    def _count_attempt(self):
        self.stats.candidate_attempts += 1
        if self.stats.candidate_attempts % self.cancel_check_interval == 0:
            self._check_cancelled()

    def _check_cancelled(self):
        if self.cancel_token is not None and self.cancel_token.is_set():
            raise SearchCancelled()

    def _log(self, message: str):
        if self.verbose:
            print(message)


def generate_schedule(team_names: Sequence[str],
                      team_constraints: Optional[Mapping[Union[int, str], Sequence[int]]],
                      games_per_team: int, games_per_week: int,
                      cancel_token=None, cancel_check_interval: int = 1000,
                      verbose: bool = False) -> ScheduleResult:
    """
    Convenience function to run the scheduler.

    Args:
        team_names: Ordered, unique team names
        team_constraints: Team name or index -> 0-based unavailable weeks
        games_per_team: Games each team must play
        games_per_week: Weekly game cap
        cancel_token: Object with ``is_set()``, e.g. ``threading.Event``
        cancel_check_interval: Candidate attempts between cancellation checks
        verbose: Print search progress

    Returns:
        ScheduleResult: success, infeasible, or cancelled
    """
    engine = SchedulingEngine(
        team_names, games_per_team, games_per_week,
        cancel_token=cancel_token,
        cancel_check_interval=cancel_check_interval,
        verbose=verbose,
    )
    return engine.schedule(team_constraints)


def schedule_league(config: LeagueConfig, cancel_token=None) -> ScheduleResult:
    """Run the scheduler for a validated league configuration."""
    return generate_schedule(
        config.team_names,
        config.unavailability_by_index(),
        config.games_per_team,
        config.games_per_week,
        cancel_token=cancel_token,
        cancel_check_interval=config.cancel_check_interval,
        verbose=config.verbose,
    )


def validate_schedule(schedule: Schedule, config: LeagueConfig) -> Dict[str, List[str]]:
    """
    Validate a completed schedule for constraint violations.

    Args:
        schedule: Schedule to validate
        config: League configuration

    Returns:
        Dict[str, List[str]]: Validation results
    """
    violations: Dict[str, Any] = {
        'errors': [],
        'warnings': []
    }

    if len(schedule.weeks) != config.weeks:
        violations['errors'].append(
            f"Schedule has {len(schedule.weeks)} weeks, expected {config.weeks}"
        )

    unavailable = {
        team: set(weeks) for team, weeks in config.unavailability.items()
    }
    seen_pairs = set()

    for week in schedule.weeks:
        available = config.n_teams - sum(
            1 for weeks in unavailable.values() if week.week_number in weeks
        )
        capacity = min(config.games_per_week, available // 2)
        if len(week.games) > capacity:
            violations['errors'].append(
                f"Week {week.week_number} has {len(week.games)} games, capacity is {capacity}"
            )

        teams_this_week = set()
        for team_a, team_b in week.games:
            pair = frozenset((team_a, team_b))
            if team_a == team_b:
                violations['errors'].append(f"Team {team_a} scheduled against itself in week {week.week_number}")
            if pair in seen_pairs:
                violations['errors'].append(f"Matchup {team_a} vs {team_b} scheduled more than once")
            seen_pairs.add(pair)

            for team in (team_a, team_b):
                if team not in config.team_names:
                    violations['errors'].append(f"Unknown team {team} in week {week.week_number}")
                if team in teams_this_week:
                    violations['errors'].append(
                        f"Team {team} scheduled multiple games in week {week.week_number}"
                    )
                if week.week_number in unavailable.get(team, set()):
                    violations['errors'].append(
                        f"Team {team} scheduled in week {week.week_number} but is unavailable"
                    )
                teams_this_week.add(team)

        if not week.games:
            violations['warnings'].append(f"Week {week.week_number} has no games")

    for team in config.team_names:
        played = len(schedule.get_team_schedule(team))
        if played != config.games_per_team:
            violations['errors'].append(
                f"Team {team} plays {played} games, expected {config.games_per_team}"
            )

    return violations
