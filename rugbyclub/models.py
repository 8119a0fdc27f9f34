"""Data models for the rugby club core."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class ParsedSessionCandidate:
    """One training session extracted from an uploaded schedule, not yet stored."""
    date: str  # always YYYY-MM-DD
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


@dataclass
class PlayerPerformanceSummary:
    """Per-player match and training totals. Recomputed on every request."""
    player_id: str
    name: str = ''
    total_matches: int = 0
    total_tries: int = 0
    total_tackles: int = 0
    total_minutes: int = 0
    avg_minutes: int = 0
    attendance_rate: float = 0.0
    total_sessions: int = 0
    present_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TeamPerformanceSummary:
    """Totals and derived rates across all match-stat rows."""
    total_matches: int = 0
    total_tries: int = 0
    total_tackles: int = 0
    total_tackles_missed: int = 0
    total_ball_carries: int = 0
    total_handling_errors: int = 0
    total_minutes: int = 0
    tackle_success_rate: float = 0.0
    avg_tries_per_match: float = 0.0
    avg_tackles_per_match: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SessionAttendanceSummary:
    """Attendance breakdown for a single training session."""
    session_id: str
    session_date: Optional[str] = None
    present: int = 0
    justified: int = 0
    absent: int = 0  # unjustified
    injured: int = 0
    total: int = 0
    attendance_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)
