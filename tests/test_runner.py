"""
Tests for running searches on a worker thread.
"""

import pytest
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).parent.parent))

from league_scheduler.config import LeagueConfig
from league_scheduler.engine import InvalidConfigurationError
from league_scheduler.runner import ScheduleJob, run_schedule


@pytest.fixture
def config():
    return LeagueConfig.with_default_names(6, games_per_team=3, games_per_week=2)


def test_job_returns_schedule(config):
    job = ScheduleJob(config).start()
    result = job.result(timeout=30)

    assert result.success
    assert job.done()
    assert len(result.schedule.weeks) == config.weeks


def test_cancel_before_start(config):
    """A job cancelled before it runs reports a cancellation."""
    job = ScheduleJob(config)
    job.cancel()
    result = job.start().result(timeout=30)

    assert result.cancelled
    assert result.schedule is None


def test_context_manager(config):
    with ScheduleJob(config) as job:
        result = job.result(timeout=30)

    assert result.success


def test_result_requires_start(config):
    with pytest.raises(RuntimeError, match="not started"):
        ScheduleJob(config).result()


def test_start_twice(config):
    job = ScheduleJob(config).start()
    with pytest.raises(RuntimeError, match="already started"):
        job.start()
    job.result(timeout=30)


def test_timeout_from_config():
    config = LeagueConfig.with_default_names(4, games_per_team=3, games_per_week=2, timeout_seconds=60)
    job = ScheduleJob(config)

    assert job.timeout_seconds == 60
    assert ScheduleJob(config, timeout_seconds=5).timeout_seconds == 5


def test_run_schedule(config):
    result = run_schedule(config, timeout_seconds=60)

    assert result.success


def test_timeout_cancels_long_search():
    """A full 22-team round-robin cannot finish in half a second."""
    config = LeagueConfig.with_default_names(22, games_per_team=21, games_per_week=11)

    result = run_schedule(config, timeout_seconds=0.5)

    assert result.cancelled
    assert result.schedule is None


def test_context_manager_keeps_body_exception(config, monkeypatch):
    """An error from the worker does not replace one raised in the with block."""
    def failing_search(config, cancel_token):
        raise InvalidConfigurationError("bad league")

    monkeypatch.setattr("league_scheduler.runner.schedule_league", failing_search)

    with pytest.raises(KeyError, match="body"):
        with ScheduleJob(config) as job:
            raise KeyError("body")

    assert job.done()
