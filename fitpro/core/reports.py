"""Report Generation - Pure functions for per-day exercise statistics.

All functions are pure: same input always produces same output, no side effects.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from .models import DailyStat, DailySummary, DashboardSnapshot, Exercise


def local_day(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of ``moment`` in ``tz`` (the local zone when None).

    Naive datetimes are taken as local time.
    """
    return moment.astimezone(tz).date()


def as_aware(moment: datetime) -> datetime:
    """Attach the local zone to naive datetimes; aware ones pass through."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


def ymd_key(value: date | datetime | str, tz: Optional[tzinfo] = None) -> str:
    """Format a calendar-day key (YYYY-MM-DD).

    Strings are assumed to already be keys and are returned unchanged.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        value = local_day(value, tz)
    return value.isoformat()


def day_range(days: int, today: date) -> list[date]:
    """The ``days`` calendar days ending at ``today``, newest first.

    Returns an empty list when the range cannot be computed.
    """
    if days < 1:
        return []
    try:
        return [today - timedelta(days=offset) for offset in range(days)]
    except OverflowError:
        return []


def aggregate_daily(
    exercises: list[Exercise],
    days: int,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> list[DailyStat]:
    """Roll exercises up into one DailyStat per day, newest first.

    Every day from ``today - days + 1`` to ``today`` gets an entry, with zero
    totals when nothing was performed that day. Missing duration or calories
    count as zero.

    Args:
        exercises: Exercises to aggregate (any order, any range)
        days: Number of days in the window
        today: Last day of the window (defaults to the local today)
        tz: Zone used to find each exercise's calendar day

    Returns:
        List of ``days`` DailyStats, or an empty list for an invalid window
    """
    if today is None:
        today = datetime.now(tz).date()

    totals: dict[str, list[float]] = defaultdict(lambda: [0.0, 0.0, 0])
    for exercise in exercises:
        bucket = totals[ymd_key(exercise.performed_at, tz)]
        bucket[0] += exercise.duration_min or 0
        bucket[1] += exercise.calories or 0
        bucket[2] += 1

    stats = []
    for day in day_range(days, today):
        key = day.isoformat()
        minutes, calories, count = totals.get(key, (0.0, 0.0, 0))
        stats.append(
            DailyStat(
                date=key,
                total_duration_min=minutes,
                total_calories=calories,
                count=int(count),
            )
        )
    return stats


def stats_from_summaries(summaries: list[DailySummary]) -> list[DailyStat]:
    """Convert server-computed summaries, treating missing totals as zero."""
    return [
        DailyStat(
            date=s.date,
            total_duration_min=s.total_duration_min or 0,
            total_calories=s.total_calories or 0,
            count=s.count,
        )
        for s in summaries
    ]


def dashboard_snapshot(daily: list[DailyStat], today_key: str) -> DashboardSnapshot:
    """Summarize a window of DailyStats for the home screen.

    Args:
        daily: Per-day stats for the window
        today_key: Key of today's date (YYYY-MM-DD)

    Returns:
        DashboardSnapshot with range totals and today's numbers (zero if absent)
    """
    today = next((d for d in daily if d.date == today_key), None)

    return DashboardSnapshot(
        total_workouts=sum(d.count for d in daily),
        total_minutes=sum(d.total_duration_min for d in daily),
        total_calories=sum(d.total_calories for d in daily),
        today_workouts=today.count if today else 0,
        today_minutes=today.total_duration_min if today else 0,
        today_calories=today.total_calories if today else 0,
    )
