"""
Conversion of raw search output into named schedules and results.
"""

from typing import List, Sequence
from .models import Game, WeekSchedule, Schedule, ScheduleResult, ResultStatus, SearchStats


INFEASIBLE_MESSAGE = "No valid schedule exists under the given constraints."
CANCELLED_MESSAGE = "Schedule generation cancelled."


def format_schedule(games_per_week: Sequence[Sequence[Game]], team_names: Sequence[str]) -> Schedule:
    """
    Map week-indexed team-index pairs to team names.

    Week order and the order games were added within a week are preserved.
    """
    weeks = []
    for week_index, week_games in enumerate(games_per_week):
        playing = {team for game in week_games for team in game}
        weeks.append(WeekSchedule(
            week_index=week_index,
            games=[(team_names[a], team_names[b]) for a, b in week_games],
            byes=[name for idx, name in enumerate(team_names) if idx not in playing],
        ))
    return Schedule(team_names=list(team_names), weeks=weeks)


def success_result(games_per_week: Sequence[Sequence[Game]], team_names: Sequence[str],
                   stats: SearchStats) -> ScheduleResult:
    return ScheduleResult(
        status=ResultStatus.SUCCESS,
        schedule=format_schedule(games_per_week, team_names),
        stats=stats,
    )


def infeasible_result(stats: SearchStats) -> ScheduleResult:
    return ScheduleResult(status=ResultStatus.INFEASIBLE, message=INFEASIBLE_MESSAGE, stats=stats)


def cancelled_result(stats: SearchStats) -> ScheduleResult:
    return ScheduleResult(status=ResultStatus.CANCELLED, message=CANCELLED_MESSAGE, stats=stats)


def format_week_lines(schedule: Schedule) -> List[str]:
    """Human-readable one-line summaries, e.g. ``Week 1: A vs B, C vs D | Byes: E``."""
    lines = []
    for week in schedule.weeks:
        games = ", ".join(f"{a} vs {b}" for a, b in week.games) or "No games"
        byes = ", ".join(week.byes) or "None"
        lines.append(f"Week {week.week_number}: {games} | Byes: {byes}")
    return lines
