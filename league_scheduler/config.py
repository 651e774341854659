"""
Configuration management for the league scheduler.
"""

import math
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Dict, Optional


class ExportOptions(BaseModel):
    """Export configuration for CSV and Excel output."""
    csv_name: str = Field(default="schedule_export.csv", description="Default CSV file name")
    include_constraints: bool = Field(default=True, description="Include the unavailability section")
    include_summaries: bool = Field(default=True, description="Include summary sheets in Excel output")
    sheets: Dict[str, str] = Field(
        default_factory=lambda: {
            "schedule": "Schedule",
            "constraints": "Unavailability",
            "team_summary": "Team Summary",
        },
        description="Sheet names for Excel output"
    )


class LeagueConfig(BaseModel):
    """Main configuration for the league scheduler."""
    team_names: List[str] = Field(description="Ordered, unique team display names")
    games_per_team: int = Field(ge=1, description="Games each team must play")
    games_per_week: int = Field(ge=1, description="Maximum games in a single week")

    # Team name -> 1-based week numbers the team cannot play
    unavailability: Dict[str, List[int]] = Field(default_factory=dict)

    # Search behaviour
    cancel_check_interval: int = Field(default=1000, ge=1, description="Candidate attempts between cancellation checks")
    timeout_seconds: Optional[float] = Field(default=None, gt=0, description="Cancel the search after this many seconds")
    verbose: bool = Field(default=False, description="Print search progress")

    # Output configuration
    export: ExportOptions = Field(default_factory=ExportOptions)

    @field_validator('team_names')
    @classmethod
    def validate_team_names(cls, v):
        if len(v) < 2:
            raise ValueError(f"At least 2 teams are required, got {len(v)}")
        if any(not name.strip() for name in v):
            raise ValueError("Team names must not be blank")
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate team names: {duplicates}")
        return v

    @field_validator('unavailability')
    @classmethod
    def validate_weeks(cls, v):
        for team, weeks in v.items():
            bad = [w for w in weeks if w < 1]
            if bad:
                raise ValueError(f"Invalid week numbers for {team}: {bad}. Weeks start at 1.")
        return v

    @model_validator(mode='after')
    def validate_league_shape(self):
        n = len(self.team_names)
        if self.games_per_team > n - 1:
            raise ValueError(
                f"games_per_team ({self.games_per_team}) must be at most {n - 1} for {n} teams"
            )
        if self.games_per_week > n // 2:
            raise ValueError(
                f"games_per_week ({self.games_per_week}) must be at most {n // 2} for {n} teams"
            )
        if (n * self.games_per_team) % 2 != 0:
            raise ValueError(
                f"{n} teams x {self.games_per_team} games is odd; every game needs two teams"
            )
        unknown = [team for team in self.unavailability if team not in self.team_names]
        if unknown:
            raise ValueError(f"Unavailability given for unknown teams: {unknown}")
        return self

    @property
    def n_teams(self) -> int:
        return len(self.team_names)

    @property
    def weeks(self) -> int:
        """Number of weeks in the season horizon."""
        return math.ceil(self.n_teams * self.games_per_team / (2 * self.games_per_week))

    @property
    def byes_per_team(self) -> int:
        return self.weeks - self.games_per_team

    @property
    def total_games(self) -> int:
        return self.n_teams * self.games_per_team // 2

    def unavailability_by_index(self) -> Dict[int, List[int]]:
        """Unavailability keyed by team index with 0-based week indices."""
        by_index = {}
        for team, weeks in self.unavailability.items():
            by_index[self.team_names.index(team)] = [w - 1 for w in weeks]
        return by_index

    @classmethod
    def with_default_names(cls, n_teams: int, games_per_team: int, games_per_week: int, **kwargs) -> "LeagueConfig":
        """Build a config with "Team 1".."Team N" names."""
        names = [f"Team {i + 1}" for i in range(n_teams)]
        return cls(team_names=names, games_per_team=games_per_team,
                   games_per_week=games_per_week, **kwargs)


def load_config(config_path: str) -> LeagueConfig:
    """Load configuration from YAML file."""
    import yaml

    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f)

    return LeagueConfig(**config_data)


def save_config(config: LeagueConfig, config_path: str) -> None:
    """Save configuration to YAML file."""
    import yaml

    with open(config_path, 'w') as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, indent=2)
