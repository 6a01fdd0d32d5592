"""Workout Statistics - Pure functions over session history.

All functions are pure: same input always produces same output, no side effects.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from .models import WorkoutRoutine, WorkoutSession, WorkoutStats
from .reports import as_aware, local_day


WEEK = timedelta(days=7)


def session_days(sessions: list[WorkoutSession], tz: Optional[tzinfo] = None) -> set[date]:
    """Distinct calendar days that have at least one session."""
    return {local_day(s.started_at, tz) for s in sessions}


def total_volume(sessions: list[WorkoutSession]) -> float:
    """Sum of weight x reps over every set; a set missing either counts as zero."""
    return sum(
        (s.weight_kg or 0) * (s.reps or 0)
        for session in sessions
        for exercise in session.exercises
        for s in exercise.sets
    )


def current_streak(days: set[date], today: date) -> int:
    """Consecutive days with a workout, walking back from today.

    A day without a workout yet does not break the streak: the walk then
    starts from yesterday.
    """
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(days: set[date]) -> int:
    """Longest run of consecutive workout days anywhere in history."""
    ordered = sorted(days, reverse=True)
    if not ordered:
        return 0

    longest = run = 1
    for newer, older in zip(ordered, ordered[1:]):
        if (newer - older).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def weekly_workout_count(sessions: list[WorkoutSession], now: Optional[datetime] = None) -> int:
    """Sessions started within the seven days ending at ``now`` (inclusive)."""
    now = as_aware(now) if now is not None else datetime.now().astimezone()
    start = now - WEEK
    return sum(1 for s in sessions if start <= as_aware(s.started_at) <= now)


def compute_workout_stats(
    sessions: list[WorkoutSession],
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> WorkoutStats:
    """Derive profile statistics from a session history.

    Args:
        sessions: Full session history
        today: Day the current streak is anchored on (defaults to the local today)
        now: End of the weekly window (defaults to the current time)
        tz: Zone used to find each session's calendar day

    Returns:
        WorkoutStats with counts, volume and streaks
    """
    now = as_aware(now) if now is not None else datetime.now(tz).astimezone(tz)
    if today is None:
        today = local_day(now, tz)

    days = session_days(sessions, tz)

    return WorkoutStats(
        total_workouts=len(sessions),
        total_volume_kg=total_volume(sessions),
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days),
        weekly_workouts=weekly_workout_count(sessions, now),
    )


def active_routines(routines: list[WorkoutRoutine]) -> list[WorkoutRoutine]:
    """Routines that are not archived, in their original order."""
    return [r for r in routines if r.is_archived is not True]


def newest_first(sessions: list[WorkoutSession]) -> list[WorkoutSession]:
    """Sessions ordered by start time, most recent first."""
    return sorted(sessions, key=lambda s: as_aware(s.started_at), reverse=True)
