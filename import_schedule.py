#!/usr/bin/env python3
"""
Training Schedule Import CLI

Parses a plain-text or PDF training schedule and writes the training_sessions
rows to insert for a coach, numbered after the coach's existing sessions.

Usage:
    python import_schedule.py schedule.txt --coach-id COACH_UUID
    python import_schedule.py schedule.pdf --coach-id COACH_UUID --existing data/sessions.json -o out.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rugbyclub import (
    TrainingSession,
    UnreadableDocumentError,
    coerce_rows,
    number_sessions,
    parse_schedule_file,
)
from rugbyclub.config import get_log_dir
from rugbyclub.logging_config import setup_logging
from rugbyclub.utils import load_json, save_json


def load_existing_numbers(sessions_path: Path, coach_id: str) -> list[int]:
    """Session numbers the coach already owns, from a training_sessions JSON dump."""
    if not sessions_path.exists():
        return []

    data = load_json(sessions_path)
    if not isinstance(data, list):
        raise ValueError(f"{sessions_path} must contain a JSON list of session rows")

    sessions, errors = coerce_rows(data, TrainingSession)
    for error in errors:
        print(f"⚠️  {error}")

    return [s.session_number for s in sessions if s.coach_id == coach_id]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import a training schedule file")
    parser.add_argument(
        "file",
        help="Schedule file (.txt or .pdf)",
    )
    parser.add_argument(
        "--coach-id", "-c",
        required=True,
        help="Coach who owns the imported sessions",
    )
    parser.add_argument(
        "--media-type", "-m",
        default=None,
        help="Declared MIME type (text/plain or application/pdf); defaults to the file suffix",
    )
    parser.add_argument(
        "--existing", "-e",
        default=None,
        help="JSON dump of existing training_sessions rows, used to continue numbering",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the new session rows (defaults to stdout)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every skipped line",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a log file to the configured log directory",
    )

    args = parser.parse_args(argv)

    setup_logging(
        log_dir=get_log_dir(),
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=args.log_file,
    )

    schedule_path = Path(args.file)
    if not schedule_path.exists():
        print(f"❌ Schedule file not found: {schedule_path}")
        return 1

    try:
        candidates = parse_schedule_file(
            schedule_path.read_bytes(),
            media_type=args.media_type,
            filename=schedule_path.name,
        )
    except UnreadableDocumentError as e:
        print(f"❌ Could not read file: {e}")
        return 1

    if not candidates:
        print("⚠️  No training sessions found in the file. Please check the file format.")
        return 0

    existing_numbers = []
    if args.existing:
        try:
            existing_numbers = load_existing_numbers(Path(args.existing), args.coach_id)
        except ValueError as e:
            print(f"❌ {e}")
            return 1

    rows = number_sessions(candidates, args.coach_id, existing_numbers)

    if args.output:
        save_json(args.output, rows)
        print(f"Imported {len(rows)} training session(s) -> {args.output}")
    else:
        print(json.dumps(rows, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
