"""Turns a user's sessions into dashboard statistics.

Pure: the result depends only on the sessions and the supplied current time.
Month and year partitions and daily buckets all use UTC.
"""

from collections.abc import Sequence
from datetime import date, datetime

from meetstats.core.modules.session.models import Session
from meetstats.core.modules.stats.models import DailyStat, PeriodStats, RecentSession, StatsSummary, UserStats
from meetstats.utils import to_utc

RECENT_SESSIONS_LIMIT = 10


def average_duration(total_duration: int, count: int) -> int:
    """Mean duration rounded half up, 0 for an empty set."""
    if count == 0:
        return 0
    return (2 * total_duration + count) // (2 * count)


def aggregate_sessions(sessions: Sequence[Session], current_time: datetime) -> UserStats:
    if not sessions:
        return UserStats.empty()

    current_time = to_utc(current_time)
    total_duration = 0
    this_month = PeriodStats()
    this_year = PeriodStats()
    daily: dict[date, DailyStat] = {}

    for session in sessions:
        started = to_utc(session.start_time)
        duration = session.duration
        total_duration += duration

        if started.year == current_time.year:
            this_year.count += 1
            this_year.duration += duration
            if started.month == current_time.month:
                this_month.count += 1
                this_month.duration += duration

        day = started.date()
        bucket = daily.get(day)
        if bucket is None:
            daily[day] = DailyStat(date=day, session_count=1, duration=duration)
        else:
            bucket.session_count += 1
            bucket.duration += duration

    # sorted() is stable with reverse=True, so equal start times keep store order
    recent = sorted(sessions, key=lambda s: s.start_time, reverse=True)[:RECENT_SESSIONS_LIMIT]

    return UserStats(
        summary=StatsSummary(
            total_sessions=len(sessions),
            total_duration=total_duration,
            avg_duration=average_duration(total_duration, len(sessions)),
            this_month=this_month,
            this_year=this_year,
        ),
        daily_stats=[daily[day] for day in sorted(daily)],
        recent_sessions=[RecentSession.from_domain(session) for session in recent],
    )
