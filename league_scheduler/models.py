"""
Data models for the league scheduler.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Tuple
from enum import Enum
import pandas as pd


# Unordered pair of team indices, stored with the lower index first
Game = Tuple[int, int]


class ResultStatus(Enum):
    """Outcome of a schedule search."""
    SUCCESS = "success"
    INFEASIBLE = "infeasible"
    CANCELLED = "cancelled"


@dataclass
class WeekSchedule:
    """Games and byes for one week of the season."""
    week_index: int
    games: List[Tuple[str, str]] = field(default_factory=list)
    byes: List[str] = field(default_factory=list)

    @property
    def week_number(self) -> int:
        """1-based week number for display."""
        return self.week_index + 1

    @property
    def teams_playing(self) -> List[str]:
        return [team for game in self.games for team in game]


@dataclass
class Schedule:
    """A complete schedule mapped to team names."""
    team_names: List[str]
    weeks: List[WeekSchedule] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return sum(len(week.games) for week in self.weeks)

    def as_pairs(self) -> List[List[Tuple[str, str]]]:
        """Week-ordered lists of team-name pairs."""
        return [list(week.games) for week in self.weeks]

    def get_team_schedule(self, team_name: str) -> List[Tuple[int, str]]:
        """Get (week number, opponent) for every game a team plays."""
        games = []
        for week in self.weeks:
            for home, away in week.games:
                if home == team_name:
                    games.append((week.week_number, away))
                elif away == team_name:
                    games.append((week.week_number, home))
        return games

    def get_bye_weeks(self, team_name: str) -> List[int]:
        """Get the 1-based weeks in which a team does not play."""
        return [week.week_number for week in self.weeks if team_name in week.byes]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert schedule to pandas DataFrame, one row per game."""
        data = []
        for week in self.weeks:
            for order, (team_a, team_b) in enumerate(week.games, start=1):
                data.append({
                    'Week': week.week_number,
                    'Order': order,
                    'Team A': team_a,
                    'Team B': team_b,
                })

        return pd.DataFrame(data, columns=['Week', 'Order', 'Team A', 'Team B'])

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get summary statistics for the schedule."""
        if not self.weeks:
            return {}

        games_per_team = {name: len(self.get_team_schedule(name)) for name in self.team_names}

        return {
            'total_games': self.total_games,
            'total_teams': len(self.team_names),
            'weeks': len(self.weeks),
            'games_per_week': [len(week.games) for week in self.weeks],
            'games_per_team': games_per_team,
            'byes_per_team': {name: len(self.get_bye_weeks(name)) for name in self.team_names},
        }


@dataclass
class SearchStats:
    """Counters collected while searching; shows where a search failed."""
    nodes: int = 0
    weeks_entered: int = 0
    candidate_attempts: int = 0
    capacity_prunes: int = 0
    deadline_prunes: int = 0
    terminal_failures: int = 0
    deepest_week: int = 0
    last_prune: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': self.nodes,
            'weeks_entered': self.weeks_entered,
            'candidate_attempts': self.candidate_attempts,
            'capacity_prunes': self.capacity_prunes,
            'deadline_prunes': self.deadline_prunes,
            'terminal_failures': self.terminal_failures,
            'deepest_week': self.deepest_week,
            'last_prune': self.last_prune,
        }


@dataclass
class ScheduleResult:
    """Outcome of a search: a schedule, an infeasibility message, or a cancellation."""
    status: ResultStatus
    schedule: Optional[Schedule] = None
    message: Optional[str] = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def cancelled(self) -> bool:
        return self.status is ResultStatus.CANCELLED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the plain success/failure dictionary shape."""
        if self.success:
            return {
                'success': True,
                'schedule': [[list(game) for game in week] for week in self.schedule.as_pairs()],
            }
        result = {'success': False, 'message': self.message}
        if self.cancelled:
            result['cancelled'] = True
        return result
