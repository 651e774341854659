"""
Tests for up-front availability checks.
"""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).parent.parent))

from league_scheduler.config import LeagueConfig
from league_scheduler.availability import (
    check_availability, can_mark_unavailable, possible_games_per_week,
)


def _six_team_config(unavailability=None):
    """Six teams, 3 games each, 2 per week: 5 weeks, 9 games, 2 byes per team."""
    return LeagueConfig.with_default_names(6, games_per_team=3, games_per_week=2,
                                           unavailability=unavailability or {})


def test_possible_games_per_week():
    config = _six_team_config(unavailability={"Team 1": [1], "Team 2": [1], "Team 3": [1]})

    assert possible_games_per_week(config) == [1, 2, 2, 2, 2]


def test_clean_report():
    """No unavailability leaves every week at the weekly cap."""
    report = check_availability(_six_team_config())

    assert report.weeks == 5
    assert report.total_games_needed == 9
    assert report.total_possible_games == 10
    assert report.max_unavailable_per_team == 2
    assert report.unavailable_weeks_per_team["Team 1"] == 0
    assert report.is_feasible_upfront
    assert report.errors == []


def test_too_many_unavailable_weeks():
    """A team cannot sit out more weeks than it has byes."""
    config = _six_team_config(unavailability={"Team 4": [1, 2, 3]})
    report = check_availability(config)

    assert not report.is_feasible_upfront
    assert any("Team 4 cannot have more than 2" in error for error in report.errors)


def test_capacity_shortfall():
    """Losing too many weekly slots drops below the games needed."""
    config = _six_team_config(unavailability={
        "Team 1": [1], "Team 2": [1], "Team 3": [1],
        "Team 4": [2], "Team 5": [2], "Team 6": [2],
    })
    report = check_availability(config)

    assert report.total_possible_games == 8
    assert any("less than the total games needed" in error for error in report.errors)


def test_weeks_beyond_season_are_warned():
    config = _six_team_config(unavailability={"Team 2": [3, 9]})
    report = check_availability(config)

    assert report.ignored_weeks == {"Team 2": [9]}
    assert report.unavailable_weeks_per_team["Team 2"] == 1
    assert any("beyond the 5-week season" in warning for warning in report.warnings)
    assert report.is_feasible_upfront


def test_can_mark_unavailable_allowed():
    ok, reason = can_mark_unavailable(_six_team_config(), "Team 1", 1)

    assert ok
    assert reason == ""


def test_can_mark_unavailable_already_marked():
    config = _six_team_config(unavailability={"Team 1": [1, 2]})

    assert can_mark_unavailable(config, "Team 1", 2) == (True, "")


def test_can_mark_unavailable_team_limit():
    config = _six_team_config(unavailability={"Team 1": [1, 2]})
    ok, reason = can_mark_unavailable(config, "Team 1", 3)

    assert not ok
    assert "cannot have more than 2 unavailable weeks" in reason


def test_can_mark_unavailable_capacity_limit():
    config = _six_team_config(unavailability={
        "Team 1": [1], "Team 2": [1], "Team 3": [1],
        "Team 4": [2], "Team 5": [2],
    })
    ok, reason = can_mark_unavailable(config, "Team 6", 2)

    assert not ok
    assert "below the required 9" in reason


def test_can_mark_unavailable_rejects_bad_input():
    config = _six_team_config()

    assert can_mark_unavailable(config, "Nobody", 1)[0] is False
    assert can_mark_unavailable(config, "Team 1", 6)[0] is False
    assert can_mark_unavailable(config, "Team 1", 0)[0] is False
