#!/usr/bin/env python3
"""
Performance Report CLI

Builds team, player and training-session summaries from JSON dumps of the
players, match_stats, training_attendance and training_sessions tables.

Usage:
    python performance_report.py --roster data/players.json --match-stats data/match_stats.json \
        --attendance data/attendance.json
    python performance_report.py --roster data/players.json --match-stats data/match_stats.json \
        --attendance data/attendance.json --sessions data/sessions.json --excel reports/club.xlsx
"""

import argparse
import sys
from pathlib import Path

from rugbyclub import (
    AttendanceRecord,
    MatchStatRecord,
    PlayerIdentity,
    TrainingSession,
    coerce_rows,
    summarize_players,
    summarize_sessions,
    summarize_team,
    write_performance_report,
)
from rugbyclub.config import get_club_name, get_current_season, get_log_dir, get_reports_dir
from rugbyclub.logging_config import setup_logging
from rugbyclub.utils import load_json, save_json


def load_rows(path: Path | None, schema) -> list:
    """Load a JSON list of rows and validate it, reporting rejected rows."""
    if path is None:
        return []

    data = load_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of rows")

    rows, errors = coerce_rows(data, schema)
    for error in errors:
        print(f"⚠️  {error}")
    return rows


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rugby club performance report")
    parser.add_argument(
        "--roster", "-r",
        required=True,
        help="JSON list of player rows",
    )
    parser.add_argument(
        "--match-stats", "-s",
        default=None,
        help="JSON list of match_stats rows",
    )
    parser.add_argument(
        "--attendance", "-a",
        default=None,
        help="JSON list of training_attendance rows",
    )
    parser.add_argument(
        "--sessions",
        default=None,
        help="JSON list of training_sessions rows (adds a per-session breakdown)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the report JSON (defaults to {reports_dir}/performance_{season}.json)",
    )
    parser.add_argument(
        "--excel", "-x",
        default=None,
        help="Also write the report to this .xlsx path",
    )
    parser.add_argument(
        "--sort-by-attendance",
        action="store_true",
        help="List players by attendance rate, highest first",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress the printed summary",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a log file to the configured log directory",
    )

    args = parser.parse_args(argv)

    setup_logging(log_dir=get_log_dir(), log_to_file=args.log_file)

    roster_path = Path(args.roster)
    if not roster_path.exists():
        print(f"❌ Roster file not found: {roster_path}")
        return 1

    def optional_path(value):
        return Path(value) if value else None

    for value in (args.match_stats, args.attendance, args.sessions):
        if value and not Path(value).exists():
            print(f"❌ Input file not found: {value}")
            return 1

    try:
        roster = load_rows(roster_path, PlayerIdentity)
        match_stats = load_rows(optional_path(args.match_stats), MatchStatRecord)
        attendance = load_rows(optional_path(args.attendance), AttendanceRecord)
        session_rows = load_rows(optional_path(args.sessions), TrainingSession)
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    team = summarize_team(match_stats)
    players = summarize_players(roster, match_stats, attendance)
    if args.sort_by_attendance:
        players = sorted(players, key=lambda p: p.attendance_rate, reverse=True)

    sessions = None
    if args.sessions:
        sessions = summarize_sessions(session_rows, attendance)

    season = get_current_season()
    report = {
        'club': get_club_name(),
        'season': season,
        'team': team.to_dict(),
        'players': [p.to_dict() for p in players],
    }
    if sessions is not None:
        report['sessions'] = [s.to_dict() for s in sessions]

    output_path = Path(args.output) if args.output else get_reports_dir() / f"performance_{season}.json"
    save_json(output_path, report)

    if args.excel:
        write_performance_report(
            args.excel, team, players, sessions,
            title=f"{get_club_name()} {season} Performance Report",
        )

    if not args.quiet:
        print("\n" + "="*60)
        print("TEAM")
        print("="*60)
        print(f"  Matches: {team.total_matches}  Tries: {team.total_tries}  "
              f"Tackle success: {team.tackle_success_rate:.1f}%")
        print("\n" + "="*60)
        print("PLAYERS")
        print("="*60)
        for player in players:
            print(f"  {player.name or player.player_id}: {player.total_matches} matches, "
                  f"{player.total_tries} tries, {player.attendance_rate:.1f}% attendance")

    print(f"Report saved: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
