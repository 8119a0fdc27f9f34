"""Training schedule import.

Coaches upload a plain-text or PDF schedule with one session per line.
Supported line formats:
    2024-12-15, 18:00, Training Ground, Focus on scrummaging
    12/15/2024 | 18:00 | Main Pitch | Lineouts
    2024-12-15<TAB>18:00<TAB>Gym<TAB>Weights
    2024-12-15 - Fitness session
    15 December 2024

Delimiters are tried in the order comma, pipe, tab, " - ". The first field
is always the date. Lines whose date cannot be read are skipped.

Supported date formats (first match wins):
    YYYY-MM-DD, MM/DD/YYYY, MM/DD/YY, M/D/YYYY, M-D-YYYY, D Month YYYY
Anything else containing a four-digit year is handed to pandas.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .constants import DASH_DELIMITER, FIELD_DELIMITERS, MEDIA_TYPE_PDF, MEDIA_TYPE_TEXT
from .documents import DocumentDecoder, PyMuPdfDecoder, decode_text
from .models import ParsedSessionCandidate

logger = logging.getLogger('rugbyclub.schedule')


# (gate pattern, strptime formats) in priority order
DATE_PATTERNS = [
    (re.compile(r'\d{4}-\d{2}-\d{2}'), ('%Y-%m-%d',)),
    (re.compile(r'\d{2}/\d{2}/\d{4}'), ('%m/%d/%Y',)),
    (re.compile(r'\d{2}/\d{2}/\d{2}'), ('%m/%d/%y',)),
    (re.compile(r'\d{1,2}/\d{1,2}/\d{4}'), ('%m/%d/%Y',)),
    (re.compile(r'\d{1,2}-\d{1,2}-\d{4}'), ('%m-%d-%Y',)),
    (re.compile(r'\d{1,2} [A-Za-z]+ \d{4}'), ('%d %B %Y', '%d %b %Y')),
]


def _clean_date_token(token: str) -> str:
    """Collapse whitespace and drop ordinal suffixes / abbreviation dots ("15th Dec. 2024")."""
    s = re.sub(r'(?<=\d)(st|nd|rd|th)\b', '', token, flags=re.IGNORECASE)
    s = re.sub(r'(?<=[A-Za-z])\.', '', s)
    return re.sub(r'\s+', ' ', s).strip()


def normalize_date(token: str) -> Optional[str]:
    """
    Normalize a date token to YYYY-MM-DD.

    Examples:
        "2024-12-15"       -> "2024-12-15"
        "12/15/24"         -> "2024-12-15"
        "3-7-2025"         -> "2025-03-07"
        "15 December 2024" -> "2024-12-15"
        "not a date"       -> None

    Returns:
        ISO date string, or None if the token is not a date
    """
    if not token:
        return None

    s = _clean_date_token(token)
    if not s:
        return None

    for pattern, formats in DATE_PATTERNS:
        if not pattern.fullmatch(s):
            continue
        for fmt in formats:
            try:
                return datetime.strptime(s, fmt).date().isoformat()
            except ValueError:
                pass

    # Free-form fallback; a bare time or word ("18:00", "today") is not a session date
    if not re.search(r'\d{4}', s):
        return None

    parsed = pd.to_datetime(s, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.strftime('%Y-%m-%d')


def _field(parts: list[str], index: int) -> Optional[str]:
    if index < len(parts) and parts[index]:
        return parts[index]
    return None


def parse_schedule_line(line: str) -> Optional[ParsedSessionCandidate]:
    """
    Parse one schedule line into a session candidate.

    Returns:
        ParsedSessionCandidate, or None if the line has no readable date
    """
    line = line.strip()
    if not line:
        return None

    for delimiter, joiner in FIELD_DELIMITERS:
        if delimiter in line:
            parts = [p.strip() for p in line.split(delimiter)]
            date = normalize_date(parts[0])
            if date is None:
                return None
            return ParsedSessionCandidate(
                date=date,
                time=_field(parts, 1),
                location=_field(parts, 2),
                description=joiner.join(parts[3:]) or None,
            )

    if DASH_DELIMITER in line:
        parts = [p.strip() for p in line.split(DASH_DELIMITER)]
        date = normalize_date(parts[0])
        if date is None:
            return None
        return ParsedSessionCandidate(
            date=date,
            description=DASH_DELIMITER.join(parts[1:]) or None,
        )

    date = normalize_date(line)
    if date is None:
        return None
    return ParsedSessionCandidate(date=date)


def parse_schedule_text(text: str) -> list[ParsedSessionCandidate]:
    """
    Parse schedule text into session candidates, in line order.

    Blank lines are ignored. Lines without a readable date are dropped and
    logged; duplicates are kept.
    """
    sessions = []
    dropped = 0

    for line_num, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue

        candidate = parse_schedule_line(line)
        if candidate is None:
            dropped += 1
            logger.debug(f'Skipping line {line_num}, no readable date: {line.strip()!r}')
            continue
        sessions.append(candidate)

    logger.info(f'Parsed {len(sessions)} training session(s), skipped {dropped} line(s)')
    return sessions


def resolve_media_type(media_type: Optional[str] = None, filename: Optional[str] = None) -> str:
    """Decide how to read an upload: PDF by declared type or .pdf name, otherwise text."""
    if media_type == MEDIA_TYPE_PDF:
        return MEDIA_TYPE_PDF
    if filename and filename.lower().endswith('.pdf'):
        return MEDIA_TYPE_PDF
    return MEDIA_TYPE_TEXT


def parse_schedule_file(
    data: bytes,
    media_type: Optional[str] = MEDIA_TYPE_TEXT,
    filename: Optional[str] = None,
    pdf_decoder: Optional[DocumentDecoder] = None,
) -> list[ParsedSessionCandidate]:
    """
    Parse an uploaded schedule file.

    Args:
        data: Raw file bytes
        media_type: Declared MIME type ('text/plain' or 'application/pdf')
        filename: Original file name, used when the declared type is missing or generic
        pdf_decoder: Text extractor for PDFs (default: PyMuPDF)

    Returns:
        List of ParsedSessionCandidate in file order (empty if nothing was found)

    Raises:
        UnreadableDocumentError: If the file cannot be decoded at all
    """
    resolved = resolve_media_type(media_type, filename)

    if resolved == MEDIA_TYPE_PDF:
        decoder = pdf_decoder or PyMuPdfDecoder()
        text = decoder.extract_text(data)
    else:
        text = decode_text(data)

    logger.debug(f'Reading {filename or "upload"} as {resolved}')
    return parse_schedule_text(text)


def load_schedule_file(
    schedule_path: str | Path,
    pdf_decoder: Optional[DocumentDecoder] = None,
) -> list[ParsedSessionCandidate]:
    """
    Parse a schedule file from disk. The suffix decides PDF vs text.

    Raises:
        FileNotFoundError: If the file doesn't exist
        UnreadableDocumentError: If the file cannot be decoded at all
    """
    schedule_path = Path(schedule_path)
    if not schedule_path.exists():
        raise FileNotFoundError(f"Schedule file not found: {schedule_path}")

    return parse_schedule_file(
        schedule_path.read_bytes(),
        media_type=None,
        filename=schedule_path.name,
        pdf_decoder=pdf_decoder,
    )


def next_session_number(existing_numbers: Iterable[Optional[int]]) -> int:
    """Next sequence number for a coach: highest existing number + 1, or 1."""
    numbers = [n for n in existing_numbers if n is not None]
    return max(numbers) + 1 if numbers else 1


def number_sessions(
    candidates: list[ParsedSessionCandidate],
    coach_id: str,
    existing_numbers: Iterable[Optional[int]] = (),
) -> list[dict]:
    """
    Turn parsed candidates into insertable training_sessions rows.

    Args:
        candidates: Parsed sessions in import order
        coach_id: Owner of the new sessions
        existing_numbers: session_number values the coach already has

    Returns:
        List of row dicts numbered consecutively from next_session_number()
    """
    start = next_session_number(existing_numbers)
    rows = []

    for offset, session in enumerate(candidates):
        rows.append({
            'session_number': start + offset,
            'session_date': session.date,
            'session_time': session.time,
            'location': session.location,
            'description': session.description,
            'coach_id': coach_id,
        })

    return rows
