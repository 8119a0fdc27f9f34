from .errors import UnreadableDocumentError
from .models import (
    ParsedSessionCandidate,
    PlayerPerformanceSummary,
    SessionAttendanceSummary,
    TeamPerformanceSummary,
)
from .schemas import (
    AttendanceRecord,
    AttendanceStatus,
    MatchStatRecord,
    PlayerIdentity,
    TrainingSession,
    coerce_rows,
)
from .documents import DocumentDecoder, PyMuPdfDecoder
from .schedule import (
    normalize_date,
    parse_schedule_line,
    parse_schedule_text,
    parse_schedule_file,
    load_schedule_file,
    resolve_media_type,
    next_session_number,
    number_sessions,
)
from .performance import (
    attendance_rate,
    summarize_team,
    summarize_players,
    summarize_sessions,
)
from .report_writer import write_performance_report

__all__ = [
    # Errors
    'UnreadableDocumentError',
    # Models
    'ParsedSessionCandidate',
    'PlayerPerformanceSummary',
    'SessionAttendanceSummary',
    'TeamPerformanceSummary',
    # Row schemas
    'AttendanceRecord',
    'AttendanceStatus',
    'MatchStatRecord',
    'PlayerIdentity',
    'TrainingSession',
    'coerce_rows',
    # Schedule import
    'DocumentDecoder',
    'PyMuPdfDecoder',
    'normalize_date',
    'parse_schedule_line',
    'parse_schedule_text',
    'parse_schedule_file',
    'load_schedule_file',
    'resolve_media_type',
    'next_session_number',
    'number_sessions',
    # Performance
    'attendance_rate',
    'summarize_team',
    'summarize_players',
    'summarize_sessions',
    # Reports
    'write_performance_report',
]
