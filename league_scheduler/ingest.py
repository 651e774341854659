"""
Loading team unavailability from CSV or Excel files.
"""

import io
import pandas as pd
from pathlib import Path
from typing import List, Dict
from .config import LeagueConfig


TEAM_COLUMN = 'Team Name'
WEEKS_COLUMN = 'Unavailable Weeks'


def parse_weeks(value) -> List[int]:
    """
    Parse a cell of 1-based week numbers.

    Accepts ``"2, 5"``, ``"2;5"``, a bare number, or an empty cell.
    """
    if value is None:
        return []
    if pd.api.types.is_number(value):
        return [] if pd.isna(value) else [int(value)]

    weeks = []
    for part in str(value).replace(';', ',').split(','):
        part = part.strip()
        if not part:
            continue
        try:
            weeks.append(int(float(part)))
        except ValueError:
            raise ValueError(f"Invalid week number: {part!r}")
    return weeks


def _read_constraints_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in ('.xlsx', '.xls'):
        return pd.read_excel(path)

    # An exported schedule file has the constraints first, then a blank line
    lines = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            if not line.strip():
                break
            lines.append(line)
    return pd.read_csv(io.StringIO(''.join(lines)), dtype=str, skipinitialspace=True)


def load_unavailability(path: str) -> Dict[str, List[int]]:
    """
    Load team unavailability from a file.

    Args:
        path: CSV or Excel file with 'Team Name' and 'Unavailable Weeks' columns

    Returns:
        Dict[str, List[int]]: Team name -> 1-based weeks
    """
    df = _read_constraints_frame(Path(path))

    missing_columns = [col for col in (TEAM_COLUMN, WEEKS_COLUMN) if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}. Found columns: {list(df.columns)}")

    unavailability: Dict[str, List[int]] = {}
    for _, row in df.iterrows():
        team = str(row[TEAM_COLUMN]).strip()
        weeks = parse_weeks(row[WEEKS_COLUMN])
        if weeks:
            unavailability.setdefault(team, []).extend(weeks)

    return {team: sorted(set(weeks)) for team, weeks in unavailability.items()}


def apply_unavailability(config: LeagueConfig, unavailability: Dict[str, List[int]]) -> LeagueConfig:
    """Return a validated copy of ``config`` with ``unavailability`` merged in."""
    merged = {team: list(weeks) for team, weeks in config.unavailability.items()}
    for team, weeks in unavailability.items():
        merged[team] = sorted(set(merged.get(team, [])) | set(weeks))

    data = config.model_dump()
    data['unavailability'] = merged
    return LeagueConfig(**data)
