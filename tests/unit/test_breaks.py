"""Tests for break computation between sessions."""

from datetime import date, datetime

from clockpay.sdk.breaks import break_segments, compute_breaks, sort_sessions
from clockpay.sdk.sessions import Session

DAY = date(2025, 7, 25)


def session(entry: str, exit_: str, minutes: int = 0) -> Session:
    """Session on DAY from HH:MM strings."""
    def at(hhmm):
        hour, minute = (int(p) for p in hhmm.split(":"))
        return datetime(DAY.year, DAY.month, DAY.day, hour, minute)

    return Session("Dani", DAY, at(entry), at(exit_), minutes)


class TestComputeBreaks:
    """Tests for compute_breaks()."""

    def test_no_sessions(self):
        assert compute_breaks([]) == 0

    def test_single_session(self):
        assert compute_breaks([session("09:00", "13:00")]) == 0

    def test_gap_between_two_sessions(self):
        sessions = [session("09:00", "13:00"), session("14:00", "18:00")]
        assert compute_breaks(sessions) == 60

    def test_gaps_are_summed(self):
        sessions = [
            session("08:00", "10:00"),
            session("10:15", "12:00"),
            session("12:45", "16:00"),
        ]
        assert compute_breaks(sessions) == 15 + 45

    def test_overlap_counts_as_zero(self):
        sessions = [
            session("09:00", "13:00"),
            session("12:30", "15:00"),
            session("15:30", "17:00"),
        ]
        assert compute_breaks(sessions) == 30

    def test_never_negative(self):
        sessions = [session("09:00", "18:00"), session("10:00", "11:00")]
        assert compute_breaks(sessions) == 0


class TestSortSessions:
    """Tests for sort_sessions()."""

    def test_orders_by_entry(self):
        late = session("14:00", "18:00")
        early = session("09:00", "13:00")

        assert sort_sessions([late, early]) == [early, late]

    def test_unsorted_input_gives_correct_breaks_once_sorted(self):
        sessions = [session("14:00", "18:00"), session("09:00", "13:00")]
        assert compute_breaks(sort_sessions(sessions)) == 60


class TestBreakSegments:
    """Tests for break_segments()."""

    def test_first_session_has_no_break(self):
        segments = break_segments([session("09:00", "13:00"), session("14:00", "18:00")])

        assert segments[0][1] is None
        assert segments[1][1] == 60

    def test_overlap_clamped(self):
        segments = break_segments([session("09:00", "13:00"), session("12:00", "18:00")])
        assert segments[1][1] == 0
