"""Pydantic schemas for rows entering the core and for JSON data files."""

import logging
from enum import Enum
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import ATTENDANCE_ALIASES, ATTENDANCE_CODES

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('rugbyclub.schemas')


class AttendanceStatus(str, Enum):
    """Training attendance outcome, valued by its stored code."""

    PRESENT = 'P'
    JUSTIFIED_ABSENCE = 'A'
    UNJUSTIFIED_ABSENCE = 'X'
    INJURED = 'I'


def _normalize_id(v: Any) -> Any:
    # Query results mix uuid strings and integer keys
    if v is None or isinstance(v, str):
        return v.strip() if isinstance(v, str) else v
    return str(v)


class PlayerIdentity(BaseModel):
    """One roster row."""

    id: str = Field(..., min_length=1)
    name: str = ''
    position: str | None = None
    status: str | None = None

    @field_validator('id', mode='before')
    @classmethod
    def normalize_ids(cls, v):
        return _normalize_id(v)

    model_config = ConfigDict(extra='ignore')


class AttendanceRecord(BaseModel):
    """One training_attendance row."""

    player_id: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    status: AttendanceStatus = Field(..., alias='attendance_status')

    @field_validator('player_id', 'session_id', mode='before')
    @classmethod
    def normalize_ids(cls, v):
        return _normalize_id(v)

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        """Accept stored codes (P/A/X/I) and long names (Present, Injured, ...)."""
        if isinstance(v, AttendanceStatus) or not isinstance(v, str):
            return v
        text = v.strip()
        if text.upper() in ATTENDANCE_CODES:
            return text.upper()
        key = text.lower().replace(' ', '').replace('_', '')
        if key in ATTENDANCE_ALIASES:
            return ATTENDANCE_ALIASES[key]
        raise ValueError(f'Invalid attendance status: {v}')

    model_config = ConfigDict(extra='ignore', populate_by_name=True)


class MatchStatRecord(BaseModel):
    """One match_stats row. Missing or null counts default to 0."""

    player_id: str = Field(..., min_length=1)
    match_id: str = Field(..., min_length=1)
    tackles_made: int = Field(default=0, ge=0)
    tackles_missed: int = Field(default=0, ge=0)
    ball_carries: int = Field(default=0, ge=0)
    ball_handling_errors: int = Field(default=0, ge=0)
    tries_scored: int = Field(default=0, ge=0)
    minutes_played: int = Field(default=0, ge=0)

    @field_validator('player_id', 'match_id', mode='before')
    @classmethod
    def normalize_ids(cls, v):
        return _normalize_id(v)

    @field_validator(
        'tackles_made',
        'tackles_missed',
        'ball_carries',
        'ball_handling_errors',
        'tries_scored',
        'minutes_played',
        mode='before',
    )
    @classmethod
    def default_null_counts(cls, v):
        """Treat null counts as zero."""
        return 0 if v is None else v

    model_config = ConfigDict(extra='ignore')


class TrainingSession(BaseModel):
    """One stored training_sessions row."""

    id: str | None = None
    session_number: int = Field(..., ge=1)
    session_date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    session_time: str | None = None
    location: str | None = None
    description: str | None = None
    coach_id: str | None = None

    @field_validator('id', 'coach_id', mode='before')
    @classmethod
    def normalize_ids(cls, v):
        return _normalize_id(v)

    model_config = ConfigDict(extra='ignore')


class ClubConfig(BaseModel):
    """Club configuration settings."""

    club_name: str = Field(..., min_length=1)
    current_season: int = Field(..., ge=2000, le=2100)
    reports_dir: str = 'reports'
    log_dir: str = 'logs'

    model_config = ConfigDict(extra='forbid')


def coerce_rows(rows: Iterable[Any], schema: type[T]) -> tuple[list[T], list[str]]:
    """
    Validate raw query rows against a schema.

    Rows that are already schema instances pass through. Rows that fail
    validation are left out and described in the returned error list.

    Args:
        rows: Iterable of mappings (or schema instances)
        schema: Pydantic model each row must satisfy

    Returns:
        Tuple of (valid_rows, errors); errors is empty when every row is valid

    Example:
        stats, errors = coerce_rows(query_result, MatchStatRecord)
    """
    valid = []
    errors = []

    for index, row in enumerate(rows):
        if isinstance(row, schema):
            valid.append(row)
            continue
        try:
            valid.append(schema.model_validate(row))
        except ValidationError as e:
            fields = ', '.join('.'.join(str(p) for p in err['loc']) or 'row' for err in e.errors())
            message = f'{schema.__name__} row {index} rejected: invalid {fields}'
            logger.warning(message)
            errors.append(message)

    return valid, errors
