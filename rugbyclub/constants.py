"""Constants and mappings for the rugby club core."""

# Media types accepted by the schedule importer
MEDIA_TYPE_PDF = 'application/pdf'
MEDIA_TYPE_TEXT = 'text/plain'

# Field delimiters for schedule lines, in precedence order.
# Each entry is (split token, token used to rejoin trailing description fields).
FIELD_DELIMITERS = [
    (',', ', '),
    ('|', ' | '),
    ('\t', '\t'),
]
DASH_DELIMITER = ' - '

# Attendance codes as stored in training_attendance.attendance_status
ATTENDANCE_CODES = {
    'P': 'Present',
    'A': 'JustifiedAbsence',
    'X': 'UnjustifiedAbsence',
    'I': 'Injured',
}

# Long-form / legacy spellings accepted on input
ATTENDANCE_ALIASES = {
    'present': 'P',
    'justifiedabsence': 'A',
    'justified': 'A',
    'unjustifiedabsence': 'X',
    'unjustified': 'X',
    'absent': 'X',
    'injured': 'I',
}

# Match stat count columns summed by the aggregator
MATCH_STAT_FIELDS = (
    'tackles_made',
    'tackles_missed',
    'ball_carries',
    'ball_handling_errors',
    'tries_scored',
    'minutes_played',
)
