"""
League Scheduler - round-robin schedule search under team unavailability.
"""

__version__ = "0.1.0"

from .config import LeagueConfig, load_config
from .models import Schedule, ScheduleResult, ResultStatus, SearchStats
from .engine import generate_schedule, schedule_league, validate_schedule, InvalidConfigurationError
from .runner import ScheduleJob
from .export import write_csv, write_excel

__all__ = [
    "LeagueConfig",
    "load_config",
    "Schedule",
    "ScheduleResult",
    "ResultStatus",
    "SearchStats",
    "generate_schedule",
    "schedule_league",
    "validate_schedule",
    "InvalidConfigurationError",
    "ScheduleJob",
    "write_csv",
    "write_excel",
]
