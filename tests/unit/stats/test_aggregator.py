"""Tests for session statistics aggregation."""

from datetime import UTC, date, datetime

from meetstats.core.modules.stats.aggregator import RECENT_SESSIONS_LIMIT, aggregate_sessions, average_duration
from meetstats.core.modules.stats.models import UserStats

MINUTE = 60_000
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


class TestEmptyAggregation:
    """Aggregating a user with no sessions."""

    def test_all_counters_zero(self):
        stats = aggregate_sessions([], NOW)
        assert stats.summary.total_sessions == 0
        assert stats.summary.total_duration == 0
        assert stats.summary.avg_duration == 0
        assert stats.summary.this_month.count == 0
        assert stats.summary.this_month.duration == 0
        assert stats.summary.this_year.count == 0
        assert stats.summary.this_year.duration == 0
        assert stats.daily_stats == []
        assert stats.recent_sessions == []

    def test_matches_empty_shape(self):
        assert aggregate_sessions([], NOW) == UserStats.empty()

    def test_serialized_keys_are_camel_case(self):
        data = UserStats.empty().model_dump(mode="json", by_alias=True)
        assert data == {
            "summary": {
                "totalSessions": 0,
                "totalDuration": 0,
                "avgDuration": 0,
                "thisMonth": {"count": 0, "duration": 0},
                "thisYear": {"count": 0, "duration": 0},
            },
            "dailyStats": [],
            "recentSessions": [],
        }


class TestSummary:
    """Totals, average and month/year partitions."""

    def test_two_sessions_same_day(self, make_session):
        sessions = [
            make_session("2024-06-01T10:00", "2024-06-01T11:30"),
            make_session("2024-06-01T14:00", "2024-06-01T14:15"),
        ]
        stats = aggregate_sessions(sessions, NOW)

        assert stats.summary.total_sessions == 2
        assert stats.summary.total_duration == 105 * MINUTE
        assert stats.summary.avg_duration == 105 * MINUTE // 2
        assert len(stats.daily_stats) == 1
        assert stats.daily_stats[0].date == date(2024, 6, 1)
        assert stats.daily_stats[0].session_count == 2
        assert stats.daily_stats[0].duration == 105 * MINUTE

    def test_month_and_year_partitions(self, make_session):
        sessions = [
            make_session("2024-06-02T10:00", "2024-06-02T10:10"),  # this month
            make_session("2024-03-02T10:00", "2024-03-02T10:20"),  # this year
            make_session("2023-06-02T10:00", "2023-06-02T10:40"),  # same month, previous year
        ]
        stats = aggregate_sessions(sessions, NOW)

        assert stats.summary.this_month.count == 1
        assert stats.summary.this_month.duration == 10 * MINUTE
        assert stats.summary.this_year.count == 2
        assert stats.summary.this_year.duration == 30 * MINUTE
        assert stats.summary.total_sessions == 3
        assert stats.summary.total_duration == 70 * MINUTE

    def test_partition_uses_start_time(self, make_session):
        # Starts in May, ends in June
        sessions = [make_session("2024-05-31T23:30", "2024-06-01T00:30")]
        stats = aggregate_sessions(sessions, NOW)
        assert stats.summary.this_month.count == 0
        assert stats.summary.this_year.count == 1

    def test_zero_length_session_counts(self, make_session):
        stats = aggregate_sessions([make_session("2024-06-01T10:00", "2024-06-01T10:00")], NOW)
        assert stats.summary.total_sessions == 1
        assert stats.summary.total_duration == 0
        assert stats.daily_stats[0].session_count == 1

    def test_average_rounds_half_up(self):
        assert average_duration(3, 2) == 2
        assert average_duration(5, 4) == 1
        assert average_duration(7, 4) == 2
        assert average_duration(10, 3) == 3
        assert average_duration(0, 0) == 0


class TestDailyStats:
    """Per-UTC-day histogram."""

    def test_sorted_by_date(self, make_session):
        sessions = [
            make_session("2024-06-03T10:00", "2024-06-03T10:05"),
            make_session("2024-05-20T10:00", "2024-05-20T10:05"),
            make_session("2024-06-01T10:00", "2024-06-01T10:05"),
        ]
        stats = aggregate_sessions(sessions, NOW)
        assert [entry.date for entry in stats.daily_stats] == [date(2024, 5, 20), date(2024, 6, 1), date(2024, 6, 3)]

    def test_bucket_uses_utc_start_date(self, make_session):
        sessions = [
            make_session("2024-06-01T23:50", "2024-06-02T00:20"),
            make_session("2024-06-02T00:10", "2024-06-02T00:20"),
        ]
        stats = aggregate_sessions(sessions, NOW)
        assert [(entry.date, entry.session_count) for entry in stats.daily_stats] == [
            (date(2024, 6, 1), 1),
            (date(2024, 6, 2), 1),
        ]

    def test_serialized_date_format(self, make_session):
        stats = aggregate_sessions([make_session("2024-06-01T10:00", "2024-06-01T10:05")], NOW)
        data = stats.model_dump(mode="json", by_alias=True)
        assert data["dailyStats"] == [{"date": "2024-06-01", "sessionCount": 1, "duration": 5 * MINUTE}]


class TestRecentSessions:
    """Most recent sessions list."""

    def test_limited_and_descending(self, make_session):
        sessions = [make_session(f"2024-06-{day:02d}T10:00", f"2024-06-{day:02d}T10:30") for day in range(1, 15)]
        stats = aggregate_sessions(sessions, NOW)

        assert len(stats.recent_sessions) == RECENT_SESSIONS_LIMIT
        starts = [entry.start_time for entry in stats.recent_sessions]
        assert starts == sorted(starts, reverse=True)
        assert starts[0] == datetime(2024, 6, 14, 10, 0, tzinfo=UTC)
        assert all(entry.duration == 30 * MINUTE for entry in stats.recent_sessions)

    def test_fewer_than_limit(self, make_session):
        sessions = [
            make_session("2024-06-01T10:00", "2024-06-01T10:30"),
            make_session("2024-06-02T10:00", "2024-06-02T10:30"),
        ]
        stats = aggregate_sessions(sessions, NOW)
        assert [entry.id for entry in stats.recent_sessions] == [sessions[1].id, sessions[0].id]

    def test_ties_keep_input_order(self, make_session):
        first = make_session("2024-06-01T10:00", "2024-06-01T10:30")
        second = make_session("2024-06-01T10:00", "2024-06-01T10:45")
        stats = aggregate_sessions([first, second], NOW)
        assert [entry.id for entry in stats.recent_sessions] == [first.id, second.id]

    def test_entries_keep_snake_case_keys(self, make_session, user_id):
        session = make_session("2024-06-01T10:00", "2024-06-01T10:30")
        data = aggregate_sessions([session], NOW).model_dump(mode="json", by_alias=True)
        entry = data["recentSessions"][0]
        assert set(entry) == {"id", "user_id", "start_time", "end_time", "duration"}
        assert entry["id"] == str(session.id)
        assert entry["user_id"] == user_id


class TestDeterminism:
    def test_repeated_calls_identical(self, make_session):
        sessions = [
            make_session("2024-06-01T10:00", "2024-06-01T11:30"),
            make_session("2024-05-01T14:00", "2024-05-01T14:15"),
        ]
        first = aggregate_sessions(sessions, NOW).model_dump_json(by_alias=True)
        second = aggregate_sessions(sessions, NOW).model_dump_json(by_alias=True)
        assert first == second
