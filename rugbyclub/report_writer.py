"""Excel export for performance reports."""

import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Font

from .models import PlayerPerformanceSummary, SessionAttendanceSummary, TeamPerformanceSummary

logger = logging.getLogger('rugbyclub.report_writer')

TEAM_ROWS = [
    ('Matches', 'total_matches'),
    ('Tries', 'total_tries'),
    ('Tackles made', 'total_tackles'),
    ('Tackles missed', 'total_tackles_missed'),
    ('Ball carries', 'total_ball_carries'),
    ('Handling errors', 'total_handling_errors'),
    ('Minutes played', 'total_minutes'),
    ('Tackle success %', 'tackle_success_rate'),
    ('Tries per match', 'avg_tries_per_match'),
    ('Tackles per match', 'avg_tackles_per_match'),
]

PLAYER_COLUMNS = [
    ('Player', 'name'),
    ('Matches', 'total_matches'),
    ('Tries', 'total_tries'),
    ('Tackles', 'total_tackles'),
    ('Minutes', 'total_minutes'),
    ('Avg minutes', 'avg_minutes'),
    ('Sessions', 'total_sessions'),
    ('Present', 'present_count'),
    ('Attendance %', 'attendance_rate'),
]

SESSION_COLUMNS = [
    ('Date', 'session_date'),
    ('Present', 'present'),
    ('Justified', 'justified'),
    ('Absent', 'absent'),
    ('Injured', 'injured'),
    ('Total', 'total'),
    ('Attendance %', 'attendance_rate'),
]


def _write_header(ws, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = Font(bold=True)


def write_performance_report(
    excel_path: str | Path,
    team: TeamPerformanceSummary,
    players: list[PlayerPerformanceSummary],
    sessions: Optional[list[SessionAttendanceSummary]] = None,
    title: str = 'Performance Report',
) -> Path:
    """
    Write team, player and (optionally) session summaries to an Excel workbook.

    Sheets:
        Team     - one label/value row per team total or rate
        Players  - one row per player, in the order given
        Sessions - one row per training session (only if sessions is provided)

    Args:
        excel_path: Destination .xlsx path (parent directories are created)
        team: Team summary
        players: Player summaries, already in display order
        sessions: Optional per-session attendance summaries
        title: Heading written to the first row of the Team sheet

    Returns:
        Path of the written workbook
    """
    excel_path = Path(excel_path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()

    ws = wb.active
    ws.title = 'Team'
    ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=14)
    _write_header(ws, 3, ['Metric', 'Value'])
    for row, (label, attr) in enumerate(TEAM_ROWS, 4):
        ws.cell(row=row, column=1, value=label)
        ws.cell(row=row, column=2, value=getattr(team, attr))

    ws = wb.create_sheet('Players')
    _write_header(ws, 1, [label for label, _ in PLAYER_COLUMNS])
    for row, player in enumerate(players, 2):
        for col, (_, attr) in enumerate(PLAYER_COLUMNS, 1):
            ws.cell(row=row, column=col, value=getattr(player, attr))

    if sessions is not None:
        ws = wb.create_sheet('Sessions')
        _write_header(ws, 1, [label for label, _ in SESSION_COLUMNS])
        for row, session in enumerate(sessions, 2):
            for col, (_, attr) in enumerate(SESSION_COLUMNS, 1):
                ws.cell(row=row, column=col, value=getattr(session, attr))

    wb.save(excel_path)
    wb.close()
    logger.info(f'Report saved to {excel_path}')
    return excel_path
