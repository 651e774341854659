"""
Tests for compiling unavailability into search tables.
"""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).parent.parent))

from league_scheduler.constraints import compile_constraints, resolve_team_keys


def test_compile_tables():
    """Forbidden sets, capacities and upcoming byes for a small league."""
    tables = compile_constraints(4, {0: [0, 2], 1: [2], 3: [5]}, games_per_week=2, weeks=3)

    assert tables.forbidden_per_week == [{0}, set(), {0, 1}]
    assert tables.capacity_per_week == [1, 2, 1]
    assert tables.upcoming_byes[0] == [2, 1, 1, 0]
    assert tables.upcoming_byes[1] == [1, 1, 1, 0]
    assert tables.upcoming_byes[2] == [0, 0, 0, 0]
    assert tables.upcoming_byes[3] == [0, 0, 0, 0]


def test_weeks_beyond_horizon_are_dropped():
    """Weeks past the end of the season are ignored, not an error."""
    tables = compile_constraints(4, {3: [5, 1], 2: [3]}, games_per_week=2, weeks=3)

    assert tables.forbidden_per_week == [set(), {3}, set()]
    assert sorted(tables.dropped) == [(2, 3), (3, 5)]


def test_unknown_teams_are_ignored():
    """Team keys outside the roster do not affect the tables."""
    tables = compile_constraints(4, {7: [0], "Nobody": [1]}, games_per_week=2, weeks=3)

    assert tables.forbidden_per_week == [set(), set(), set()]
    assert tables.capacity_per_week == [2, 2, 2]
    assert tables.unknown_teams == [7, "Nobody"]


def test_capacity_limited_by_available_teams():
    """Capacity is the weekly cap or half the available teams, whichever is smaller."""
    tables = compile_constraints(6, {0: [0], 1: [0], 2: [0]}, games_per_week=3, weeks=2)

    assert tables.capacity_per_week == [1, 3]


def test_remaining_capacity():
    """Remaining capacity sums the current and later weeks."""
    tables = compile_constraints(4, {0: [0]}, games_per_week=2, weeks=3)

    assert tables.remaining_capacity(0) == 5
    assert tables.remaining_capacity(1) == 4
    assert tables.remaining_capacity(3) == 0


def test_resolve_team_keys():
    """Names map to indices; indices and unknown names pass through."""
    resolved = resolve_team_keys(["A", "B"], {"B": [1], 0: [2], "Z": [0]})

    assert resolved == {1: [1], 0: [2], "Z": [0]}
