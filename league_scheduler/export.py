"""
Export functionality for writing schedules to CSV and Excel.
"""

import io
import pandas as pd
from typing import Optional
from .models import ScheduleResult, Schedule
from .config import LeagueConfig


NO_SCHEDULE_TEXT = "No schedule available to export."


def constraints_dataframe(config: LeagueConfig) -> pd.DataFrame:
    """One row per team with its 1-based unavailable weeks."""
    rows = []
    for team in config.team_names:
        weeks = sorted(config.unavailability.get(team, []))
        rows.append({
            'Team Name': team,
            'Unavailable Weeks': ", ".join(str(w) for w in weeks),
        })
    return pd.DataFrame(rows, columns=['Team Name', 'Unavailable Weeks'])


def schedule_grid_dataframe(schedule: Schedule) -> pd.DataFrame:
    """One row per week with ``A vs B`` cells, padded to the busiest week."""
    max_games = max((len(week.games) for week in schedule.weeks), default=0)
    columns = ['Week'] + [f'Game{i}' for i in range(1, max_games + 1)]

    rows = []
    for week in schedule.weeks:
        cells = [f"{a} vs {b}" for a, b in week.games]
        cells += [''] * (max_games - len(cells))
        rows.append([f"Week {week.week_number}"] + cells)

    return pd.DataFrame(rows, columns=columns)


def team_summary_dataframe(schedule: Schedule) -> pd.DataFrame:
    """Games, byes and bye weeks per team."""
    rows = []
    for team in schedule.team_names:
        bye_weeks = schedule.get_bye_weeks(team)
        rows.append({
            'Team': team,
            'Games': len(schedule.get_team_schedule(team)),
            'Byes': len(bye_weeks),
            'Bye Weeks': ", ".join(str(w) for w in bye_weeks),
        })
    return pd.DataFrame(rows, columns=['Team', 'Games', 'Byes', 'Bye Weeks'])


def schedule_to_csv_text(result: ScheduleResult, config: LeagueConfig) -> str:
    """
    Render the unavailability table and the weekly schedule as CSV text.

    Args:
        result: Search result; only a successful result has a schedule
        config: League configuration

    Returns:
        str: CSV text with the constraints section, a blank line, and the schedule
    """
    buffer = io.StringIO()

    if config.export.include_constraints:
        constraints_dataframe(config).to_csv(buffer, index=False, lineterminator='\n')
        buffer.write('\n')

    if result.success and result.schedule.weeks:
        schedule_grid_dataframe(result.schedule).to_csv(buffer, index=False, lineterminator='\n')
    else:
        buffer.write(NO_SCHEDULE_TEXT + '\n')

    return buffer.getvalue()


def write_csv(result: ScheduleResult, config: LeagueConfig, output_path: Optional[str] = None) -> str:
    """
    Write the schedule export to a CSV file.

    Returns:
        str: The path written
    """
    output_path = output_path or config.export.csv_name
    print(f"Writing schedule to {output_path}")

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(schedule_to_csv_text(result, config))

    print(f"Schedule exported successfully to {output_path}")
    return output_path


def write_excel(result: ScheduleResult, config: LeagueConfig, output_path: str) -> None:
    """
    Write schedule to Excel file with summary sheets.

    Args:
        result: Search result to export
        config: League configuration
        output_path: Path to output Excel file
    """
    print(f"Writing schedule to {output_path}")
    sheets = config.export.sheets

    with pd.ExcelWriter(output_path, engine='xlsxwriter') as writer:
        _write_schedule_sheet(result, writer, sheets.get('schedule', 'Schedule'))

        if config.export.include_constraints:
            sheet_name = sheets.get('constraints', 'Unavailability')
            constraints_dataframe(config).to_excel(writer, sheet_name=sheet_name, index=False)
            writer.sheets[sheet_name].set_column(0, 1, 20)

        if config.export.include_summaries and result.success:
            sheet_name = sheets.get('team_summary', 'Team Summary')
            team_summary_dataframe(result.schedule).to_excel(writer, sheet_name=sheet_name, index=False)
            writer.sheets[sheet_name].set_column(0, 3, 14)

    print(f"Schedule exported successfully to {output_path}")


def _write_schedule_sheet(result: ScheduleResult, writer, sheet_name: str) -> None:
    """Write the main schedule sheet."""
    if not result.success:
        print("Warning: No schedule to export")
        pd.DataFrame({'Message': [result.message or NO_SCHEDULE_TEXT]}).to_excel(
            writer, sheet_name=sheet_name, index=False
        )
        return

    df = schedule_grid_dataframe(result.schedule)
    df.to_excel(writer, sheet_name=sheet_name, index=False)

    worksheet = writer.sheets[sheet_name]
    workbook = writer.book
    _format_schedule_worksheet(worksheet, workbook, df)


def _format_schedule_worksheet(worksheet, workbook, df: pd.DataFrame) -> None:
    """Apply formatting to the schedule worksheet."""
    header_format = workbook.add_format({
        'bold': True,
        'text_wrap': True,
        'valign': 'top',
        'fg_color': '#D7E4BC',
        'border': 1
    })

    worksheet.set_column(0, 0, 10)
    if len(df.columns) > 1:
        worksheet.set_column(1, len(df.columns) - 1, 24)

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_format)
