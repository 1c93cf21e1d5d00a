"""Break time between sessions on the same day."""

from typing import List, Optional, Sequence, Tuple

from .sessions import Session


def sort_sessions(sessions: Sequence[Session]) -> List[Session]:
    """Order a day's sessions by entry time."""
    return sorted(sessions, key=lambda s: s.entry)


def _gap_minutes(previous: Session, current: Session) -> float:
    return (current.entry - previous.exit).total_seconds() / 60


def compute_breaks(sessions: Sequence[Session]) -> float:
    """Total idle minutes between consecutive sessions.

    Sessions must already be sorted by entry time. Overlapping sessions
    produce negative gaps, which count as zero.
    """
    total = 0.0
    for previous, current in zip(sessions, sessions[1:]):
        gap = _gap_minutes(previous, current)
        if gap > 0:
            total += gap
    return total


def break_segments(sessions: Sequence[Session]) -> List[Tuple[Session, Optional[float]]]:
    """Pair each session with the break that preceded it.

    The first session has no preceding break (None); later ones carry the
    clamped gap from the previous exit.
    """
    segments: List[Tuple[Session, Optional[float]]] = []
    previous = None
    for session in sessions:
        if previous is None:
            segments.append((session, None))
        else:
            segments.append((session, max(0.0, _gap_minutes(previous, session))))
        previous = session
    return segments
