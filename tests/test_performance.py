"""Unit tests for performance aggregation."""

import copy
import random

import pytest

from rugbyclub.models import PlayerPerformanceSummary, TeamPerformanceSummary
from rugbyclub.performance import (
    attendance_rate,
    summarize_players,
    summarize_sessions,
    summarize_team,
)
from rugbyclub.schemas import AttendanceRecord, MatchStatRecord, PlayerIdentity


def stat(player_id, match_id, **counts):
    return {'player_id': player_id, 'match_id': match_id, **counts}


def attend(player_id, session_id, status):
    return {'player_id': player_id, 'session_id': session_id, 'attendance_status': status}


@pytest.fixture
def roster():
    return [
        {'id': 'p1', 'name': 'Tom Fletcher', 'position': 'Prop'},
        {'id': 'p2', 'name': 'Sam Owens', 'position': 'Fly-half'},
        {'id': 'p3', 'name': 'Ravi Patel', 'position': 'Wing'},
    ]


@pytest.fixture
def season_stats():
    return [
        stat('p1', 'm1', tackles_made=8, tackles_missed=1, tries_scored=0, minutes_played=80),
        stat('p2', 'm1', tackles_made=4, tackles_missed=2, tries_scored=1, minutes_played=80, ball_carries=9),
        stat('p1', 'm2', tackles_made=6, tackles_missed=0, tries_scored=1, minutes_played=65),
        stat('p2', 'm2', tackles_made=3, tackles_missed=1, tries_scored=2, minutes_played=70, ball_handling_errors=2),
    ]


class TestSummarizeTeam:
    """Tests for team-level aggregation."""

    def test_empty_input(self):
        """Test no rows gives all zeros and no division errors."""
        assert summarize_team([]) == TeamPerformanceSummary()

    def test_tackle_success_rate(self):
        """Test 35 made / 5 missed across one match is 87.5%."""
        made = [4, 4, 4, 4, 4, 3, 3, 3, 3, 3]
        missed = [1, 1, 1, 1, 1, 0, 0, 0, 0, 0]
        rows = [
            stat(f'p{i}', 'm1', tackles_made=made[i], tackles_missed=missed[i])
            for i in range(10)
        ]
        summary = summarize_team(rows)
        assert summary.total_tackles == 35
        assert summary.total_tackles_missed == 5
        assert summary.tackle_success_rate == 87.5
        assert summary.total_matches == 1
        assert summary.avg_tackles_per_match == 35.0

    def test_totals_and_averages(self, season_stats):
        """Test sums and per-match averages over distinct matches."""
        summary = summarize_team(season_stats)
        assert summary.total_matches == 2
        assert summary.total_tries == 4
        assert summary.total_tackles == 21
        assert summary.total_tackles_missed == 4
        assert summary.total_ball_carries == 9
        assert summary.total_handling_errors == 2
        assert summary.total_minutes == 295
        assert summary.tackle_success_rate == 84.0
        assert summary.avg_tries_per_match == 2.0
        assert summary.avg_tackles_per_match == 10.5

    def test_averages_round_to_one_decimal(self):
        """Test per-match averages round half-up to one place."""
        rows = [
            stat('p1', 'm1', tries_scored=1),
            stat('p1', 'm2', tries_scored=1),
            stat('p1', 'm3', tries_scored=0),
        ]
        assert summarize_team(rows).avg_tries_per_match == 0.7

    def test_no_tackle_attempts(self):
        """Test zero tackle attempts gives a 0 success rate."""
        summary = summarize_team([stat('p1', 'm1', tries_scored=2)])
        assert summary.tackle_success_rate == 0.0
        assert summary.avg_tries_per_match == 2.0

    def test_order_independent(self, season_stats):
        """Test permuting the rows does not change the result."""
        expected = summarize_team(season_stats)
        shuffled = season_stats[:]
        random.Random(7).shuffle(shuffled)
        assert summarize_team(shuffled) == expected
        assert summarize_team(list(reversed(season_stats))) == expected

    def test_null_counts_default_to_zero(self):
        """Test null counts from the store are treated as zero."""
        summary = summarize_team([stat('p1', 'm1', tackles_made=None, tries_scored=1)])
        assert summary.total_tackles == 0
        assert summary.total_tries == 1

    def test_invalid_rows_left_out(self):
        """Test a row with a negative count is rejected, others still count."""
        rows = [
            stat('p1', 'm1', tackles_made=5),
            stat('p2', 'm1', tackles_made=-3),
        ]
        assert summarize_team(rows).total_tackles == 5

    def test_accepts_schema_instances(self):
        """Test already-validated rows pass straight through."""
        rows = [MatchStatRecord(player_id='p1', match_id='m1', tackles_made=3, tackles_missed=1)]
        assert summarize_team(rows).tackle_success_rate == 75.0

    def test_inputs_not_mutated(self, season_stats):
        """Test the caller's rows are left untouched."""
        before = copy.deepcopy(season_stats)
        summarize_team(season_stats)
        assert season_stats == before


class TestSummarizePlayers:
    """Tests for per-player aggregation."""

    def test_no_rows_keeps_roster(self, roster):
        """Test empty stats give one zero entry per player, in roster order."""
        summaries = summarize_players(roster, [], [])
        assert [s.player_id for s in summaries] == ['p1', 'p2', 'p3']
        assert summaries[0] == PlayerPerformanceSummary(player_id='p1', name='Tom Fletcher')
        assert all(s.attendance_rate == 0.0 and s.avg_minutes == 0 for s in summaries)

    def test_attendance_rate(self, roster):
        """Test 17 present out of 20 sessions is 85.0%."""
        records = [attend('p1', f's{i}', 'P') for i in range(17)]
        records += [attend('p1', f's{i}', 'X') for i in range(17, 20)]
        summary = summarize_players(roster, [], records)[0]
        assert summary.attendance_rate == 85.0
        assert summary.total_sessions == 20
        assert summary.present_count == 17

    def test_non_present_statuses_count_as_sessions(self, roster):
        """Test justified, unjustified and injured rows all count toward total sessions."""
        records = [
            attend('p2', 's1', 'P'),
            attend('p2', 's2', 'A'),
            attend('p2', 's3', 'X'),
            attend('p2', 's4', 'I'),
        ]
        summary = summarize_players(roster, [], records)[1]
        assert summary.total_sessions == 4
        assert summary.present_count == 1
        assert summary.attendance_rate == 25.0

    def test_match_totals(self, roster, season_stats):
        """Test each player's match stats are scoped to that player."""
        p1, p2, p3 = summarize_players(roster, season_stats, [])
        assert (p1.total_matches, p1.total_tries, p1.total_tackles, p1.total_minutes) == (2, 1, 14, 145)
        assert (p2.total_matches, p2.total_tries, p2.total_tackles, p2.total_minutes) == (2, 3, 7, 150)
        assert p3.total_matches == 0

    def test_avg_minutes_rounds_half_up(self, roster, season_stats):
        """Test 145 minutes over 2 matches rounds to 73."""
        p1 = summarize_players(roster, season_stats, [])[0]
        assert p1.avg_minutes == 73

    def test_distinct_matches(self, roster):
        """Test two rows for the same match count as one match."""
        rows = [stat('p1', 'm1', minutes_played=40), stat('p1', 'm1', minutes_played=40)]
        p1 = summarize_players(roster, rows, [])[0]
        assert p1.total_matches == 1
        assert p1.avg_minutes == 80

    def test_roster_order_not_sorted(self, roster):
        """Test output follows the roster, not attendance rate."""
        records = [attend('p3', 's1', 'P'), attend('p1', 's1', 'X')]
        reordered = [roster[2], roster[0], roster[1]]
        summaries = summarize_players(reordered, [], records)
        assert [s.player_id for s in summaries] == ['p3', 'p1', 'p2']

    def test_integer_ids_match(self):
        """Test numeric ids from the store match string ids in the roster."""
        roster = [{'id': 12, 'name': 'Ben Hale'}]
        rows = [{'player_id': '12', 'match_id': 3, 'tries_scored': 2}]
        assert summarize_players(roster, rows, [])[0].total_tries == 2

    def test_idempotent_under_permutation(self, roster, season_stats):
        """Test repeated calls with shuffled inputs give identical output."""
        records = [attend('p1', 's1', 'P'), attend('p1', 's2', 'X'), attend('p2', 's1', 'I')]
        expected = summarize_players(roster, season_stats, records)
        again = summarize_players(roster, list(reversed(season_stats)), list(reversed(records)))
        assert again == expected

    def test_accepts_schema_instances(self):
        """Test validated instances are accepted for every input."""
        roster = [PlayerIdentity(id='p1', name='Tom')]
        stats = [MatchStatRecord(player_id='p1', match_id='m1', minutes_played=60)]
        records = [AttendanceRecord(player_id='p1', session_id='s1', status='P')]
        summary = summarize_players(roster, stats, records)[0]
        assert summary.avg_minutes == 60
        assert summary.attendance_rate == 100.0


class TestAttendanceRate:
    """Tests for the standalone attendance rate."""

    def test_empty(self):
        assert attendance_rate([]) == 0.0

    def test_rounds_to_one_decimal(self):
        """Test 2 of 3 present is 66.7%."""
        records = [attend('p1', 's1', 'P'), attend('p1', 's2', 'P'), attend('p1', 's3', 'I')]
        assert attendance_rate(records) == 66.7


class TestSummarizeSessions:
    """Tests for per-session attendance breakdowns."""

    def test_breakdown(self):
        """Test status counts and rate for each session, in session order."""
        sessions = [
            {'id': 's2', 'session_number': 2, 'session_date': '2024-12-17'},
            {'id': 's1', 'session_number': 1, 'session_date': '2024-12-15'},
        ]
        records = [
            attend('p1', 's1', 'P'),
            attend('p2', 's1', 'P'),
            attend('p3', 's1', 'A'),
            attend('p4', 's1', 'X'),
            attend('p5', 's1', 'I'),
            attend('p1', 's2', 'P'),
        ]
        s2, s1 = summarize_sessions(sessions, records)
        assert (s1.present, s1.justified, s1.absent, s1.injured, s1.total) == (2, 1, 1, 1, 5)
        assert s1.attendance_rate == 40.0
        assert s1.session_date == '2024-12-15'
        assert (s2.present, s2.total, s2.attendance_rate) == (1, 1, 100.0)

    def test_session_without_attendance(self):
        """Test a session nobody was marked for reports zeros."""
        sessions = [{'id': 's9', 'session_number': 9, 'session_date': '2025-01-05'}]
        summary = summarize_sessions(sessions, [])[0]
        assert summary.total == 0
        assert summary.attendance_rate == 0.0
