"""
Best and historical set resolution.

Given the sessions an exercise has been performed in, these functions answer
the questions the set editor shows next to each exercise:
- What is the heaviest qualifying set ever recorded (best set)?
- What did I do last time (most recent session with data)?
- What did the last few sessions look like (historical sessions)?
- How has the exercise progressed over time (progress points)?

The reference date and the workout being edited are always explicit
arguments; nothing here reads the clock or any ambient state.
"""
import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from backend.core.set_completion import BEST_SET_MIN_REPS
from domain.models import HistoricalSession, WorkoutSet

DEFAULT_HISTORY_LIMIT = 3


# =============================================================================
# Best set
# =============================================================================


def find_best_set(sets: Iterable[WorkoutSet]) -> Optional[WorkoutSet]:
    """
    Find the heaviest set performed for at least BEST_SET_MIN_REPS reps.

    Ties on weight go to the set with more reps. Sets without a weight never
    qualify.

    Args:
        sets: Every set recorded for the exercise, across all sessions

    Returns:
        The best set, or None if no set qualifies

    Examples:
        >>> find_best_set([
        ...     WorkoutSet(set_number=1, weight=80, reps=5),
        ...     WorkoutSet(set_number=2, weight=60, reps=8),
        ...     WorkoutSet(set_number=3, weight=60, reps=6),
        ... ])
        WorkoutSet(set_number=2, weight=60.0, reps=8)
    """
    best: Optional[WorkoutSet] = None
    for s in sets:
        if s.weight is None or s.reps is None or s.reps < BEST_SET_MIN_REPS:
            continue
        if best is None or (s.weight, s.reps) > (best.weight, best.reps):
            best = s
    return best


# =============================================================================
# Session filters
# =============================================================================


def session_has_data(session: HistoricalSession) -> bool:
    """A session counts as performed when at least one set has reps > 0."""
    return any(s.reps is not None and s.reps > 0 for s in session.sets)


def has_exercise_been_done(sessions: Iterable[HistoricalSession]) -> bool:
    return any(session_has_data(session) for session in sessions)


def find_most_recent_with_data(
    sessions: Sequence[HistoricalSession],
    reference_date: Optional[dt.date],
    reference_workout_id: Optional[str] = None,
) -> Optional[List[WorkoutSet]]:
    """
    Find the sets from the latest session that actually has data.

    Sessions after ``reference_date`` and the session belonging to
    ``reference_workout_id`` are ignored, as are sessions where every set
    has zero or absent reps. Sessions on the reference date itself are
    eligible (an earlier workout the same day counts as "last time").

    Args:
        sessions: Candidate sessions in any order
        reference_date: Date of the workout being viewed; None means no cut-off
        reference_workout_id: Workout being viewed, excluded from the search

    Returns:
        Sets of the most recent qualifying session, or None
    """
    eligible = [
        session for session in sessions
        if (reference_date is None or session.date <= reference_date)
        and (reference_workout_id is None or session.workout_id != reference_workout_id)
        and session_has_data(session)
    ]
    if not eligible:
        return None

    # max() keeps the first of equal dates, so input order breaks ties
    latest = max(eligible, key=lambda session: session.date)
    return list(latest.sets)


def build_historical_sessions(
    sessions: Sequence[HistoricalSession],
    reference_date: Optional[dt.date],
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> List[HistoricalSession]:
    """
    Build the "previous sessions" list shown under the set editor.

    Keeps sessions strictly before ``reference_date`` that have data,
    newest first, capped at ``limit`` entries. Sessions sharing a date keep
    their input order.
    """
    if limit <= 0:
        return []

    eligible = [
        session for session in sessions
        if (reference_date is None or session.date < reference_date)
        and session_has_data(session)
    ]
    eligible.sort(key=lambda session: session.date, reverse=True)
    return [
        HistoricalSession(date=session.date, sets=list(session.sets), workout_id=session.workout_id)
        for session in eligible[:limit]
    ]


# =============================================================================
# Progress chart
# =============================================================================


@dataclass
class ProgressPoint:
    """One point on the progress chart for an exercise."""
    date: dt.date
    total_volume: float
    avg_power: Optional[int]
    max_weight: float


def build_progress_point(session: HistoricalSession) -> ProgressPoint:
    """
    Summarise one session.

    ``avg_power`` is the rounded mean of weight*reps over sets that have
    both values (None when there are none). ``max_weight`` only considers
    sets with at least BEST_SET_MIN_REPS reps.
    """
    products = [
        s.weight * s.reps for s in session.sets
        if s.weight is not None and s.reps is not None
    ]
    total = float(sum(products))
    qualifying = [
        s.weight for s in session.sets
        if s.weight is not None and s.reps is not None and s.reps >= BEST_SET_MIN_REPS
    ]
    return ProgressPoint(
        date=session.date,
        total_volume=total,
        avg_power=round(total / len(products)) if products else None,
        max_weight=max(qualifying) if qualifying else 0,
    )


def build_progress_points(
    sessions: Iterable[HistoricalSession],
    since: Optional[dt.date] = None,
) -> List[ProgressPoint]:
    """
    Chart data for an exercise, oldest first.

    Args:
        sessions: Sessions in any order
        since: Only include sessions on or after this date

    Returns:
        One ProgressPoint per session with data, ordered date-ascending
    """
    points = [
        build_progress_point(session)
        for session in sessions
        if session_has_data(session) and (since is None or session.date >= since)
    ]
    points.sort(key=lambda point: point.date)
    return points


def progress_window_start(reference_date: dt.date, months: int = 12) -> dt.date:
    """First day included in a trailing ``months`` window ending at reference_date."""
    year = reference_date.year
    month = reference_date.month - months
    while month <= 0:
        month += 12
        year -= 1
    # Clamp to the last valid day of the target month
    day = reference_date.day
    while True:
        try:
            return dt.date(year, month, day)
        except ValueError:
            day -= 1
