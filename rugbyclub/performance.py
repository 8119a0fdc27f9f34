"""Team, player and training-session performance summaries.

All functions here are pure reductions: they accept validated schema rows or
raw query mappings, never mutate their inputs, and return freshly built
summaries. Rows that fail validation are left out (see schemas.coerce_rows).

Rounding:
    - Percentages and per-match averages: one decimal place, half-up
    - Average minutes per match: whole number, half-up
    - Any zero denominator yields 0
"""

from collections import defaultdict
from typing import Any, Iterable

from .constants import MATCH_STAT_FIELDS
from .models import PlayerPerformanceSummary, SessionAttendanceSummary, TeamPerformanceSummary
from .schemas import (
    AttendanceRecord,
    AttendanceStatus,
    MatchStatRecord,
    PlayerIdentity,
    TrainingSession,
    coerce_rows,
)
from .utils import ratio


def _match_totals(stats: list[MatchStatRecord]) -> dict[str, int]:
    totals = defaultdict(int)
    for stat in stats:
        for field in MATCH_STAT_FIELDS:
            totals[field] += getattr(stat, field)
    totals['matches'] = len({stat.match_id for stat in stats})
    return totals


def _count_statuses(records: list[AttendanceRecord]) -> dict[AttendanceStatus, int]:
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        counts[record.status] += 1
    return counts


def attendance_rate(records: Iterable[Any]) -> float:
    """
    Percentage of attendance rows marked Present.

    Returns:
        Rate rounded to one decimal place, 0.0 when there are no rows
    """
    rows, _ = coerce_rows(records, AttendanceRecord)
    present = sum(1 for r in rows if r.status == AttendanceStatus.PRESENT)
    return ratio(present, len(rows), scale=100)


def summarize_team(match_stats: Iterable[Any]) -> TeamPerformanceSummary:
    """
    Aggregate every match-stat row into team totals and rates.

    Derived rates:
        - tackle_success_rate = made / (made + missed) * 100
        - avg_tries_per_match / avg_tackles_per_match use the count of
          distinct match_id values, not the row count

    Args:
        match_stats: MatchStatRecord instances or raw match_stats rows

    Returns:
        TeamPerformanceSummary (all zeros for empty input)
    """
    stats, _ = coerce_rows(match_stats, MatchStatRecord)
    totals = _match_totals(stats)
    tackles = totals['tackles_made']
    missed = totals['tackles_missed']
    matches = totals['matches']

    return TeamPerformanceSummary(
        total_matches=matches,
        total_tries=totals['tries_scored'],
        total_tackles=tackles,
        total_tackles_missed=missed,
        total_ball_carries=totals['ball_carries'],
        total_handling_errors=totals['ball_handling_errors'],
        total_minutes=totals['minutes_played'],
        tackle_success_rate=ratio(tackles, tackles + missed, scale=100),
        avg_tries_per_match=ratio(totals['tries_scored'], matches),
        avg_tackles_per_match=ratio(tackles, matches),
    )


def summarize_players(
    roster: Iterable[Any],
    match_stats: Iterable[Any],
    attendance: Iterable[Any],
) -> list[PlayerPerformanceSummary]:
    """
    Build one summary per roster entry, in roster order.

    Players without any match or attendance rows still appear with zeros.

    Args:
        roster: PlayerIdentity instances or raw player rows
        match_stats: MatchStatRecord instances or raw match_stats rows
        attendance: AttendanceRecord instances or raw training_attendance rows

    Returns:
        List of PlayerPerformanceSummary, same order as the roster
    """
    players, _ = coerce_rows(roster, PlayerIdentity)
    stats, _ = coerce_rows(match_stats, MatchStatRecord)
    records, _ = coerce_rows(attendance, AttendanceRecord)

    stats_by_player = defaultdict(list)
    for stat in stats:
        stats_by_player[stat.player_id].append(stat)

    attendance_by_player = defaultdict(list)
    for record in records:
        attendance_by_player[record.player_id].append(record)

    summaries = []
    for player in players:
        totals = _match_totals(stats_by_player.get(player.id, []))
        player_records = attendance_by_player.get(player.id, [])
        present = _count_statuses(player_records)[AttendanceStatus.PRESENT]

        summaries.append(PlayerPerformanceSummary(
            player_id=player.id,
            name=player.name,
            total_matches=totals['matches'],
            total_tries=totals['tries_scored'],
            total_tackles=totals['tackles_made'],
            total_minutes=totals['minutes_played'],
            avg_minutes=int(ratio(totals['minutes_played'], totals['matches'], places=0)),
            attendance_rate=ratio(present, len(player_records), scale=100),
            total_sessions=len(player_records),
            present_count=present,
        ))

    return summaries


def summarize_sessions(
    sessions: Iterable[Any],
    attendance: Iterable[Any],
) -> list[SessionAttendanceSummary]:
    """
    Attendance breakdown for each training session, in session order.

    Args:
        sessions: TrainingSession instances or raw training_sessions rows
        attendance: AttendanceRecord instances or raw training_attendance rows

    Returns:
        List of SessionAttendanceSummary
    """
    session_rows, _ = coerce_rows(sessions, TrainingSession)
    records, _ = coerce_rows(attendance, AttendanceRecord)

    records_by_session = defaultdict(list)
    for record in records:
        records_by_session[record.session_id].append(record)

    summaries = []
    for session in session_rows:
        # Sessions not yet stored have no id and therefore no attendance
        session_records = records_by_session.get(session.id, []) if session.id else []
        counts = _count_statuses(session_records)
        total = len(session_records)

        summaries.append(SessionAttendanceSummary(
            session_id=session.id or '',
            session_date=session.session_date,
            present=counts[AttendanceStatus.PRESENT],
            justified=counts[AttendanceStatus.JUSTIFIED_ABSENCE],
            absent=counts[AttendanceStatus.UNJUSTIFIED_ABSENCE],
            injured=counts[AttendanceStatus.INJURED],
            total=total,
            attendance_rate=ratio(counts[AttendanceStatus.PRESENT], total, scale=100),
        ))

    return summaries
