"""Tests for the meetstats-tracker command line."""

import re
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest
from typer.testing import CliRunner

from meetstats.errors import NetworkError
from meetstats.tracker.cli import app, format_duration
from meetstats.tracker.client import SessionApiClient
from meetstats.tracker.state import StateStore, TrackerState

runner = CliRunner()

UUID_RE = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}")


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("MEETSTATS_TRACKER_DATA_DIR", str(tmp_path))
    return tmp_path


def test_whoami_is_stable(data_dir):
    first = runner.invoke(app, ["whoami"])
    second = runner.invoke(app, ["whoami"])
    assert first.exit_code == 0
    # Output may interleave log lines, the id is printed last
    user_id = UUID_RE.findall(first.output)[-1]
    assert UUID(user_id).version == 4
    assert UUID_RE.findall(second.output)[-1] == user_id
    assert user_id in (data_dir / "user.json").read_text(encoding="utf-8")


def test_status_idle():
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "Active" in result.output
    assert "no" in result.output


def test_status_open_session(data_dir):
    session_id = uuid4()
    StateStore(data_dir / "session.json").save(TrackerState.opened(session_id, datetime(2024, 6, 1, 10, tzinfo=UTC)))
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "yes" in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "Usage" in result.output


def test_stats_prints_totals(monkeypatch):
    fetched = []

    def fake_get_user_stats(self, user_id):
        fetched.append(user_id)
        return {
            "summary": {
                "totalSessions": 3,
                "totalDuration": 5_400_000,
                "thisMonth": {"count": 2, "duration": 3_600_000},
                "thisYear": {"count": 3, "duration": 5_400_000},
            }
        }

    monkeypatch.setattr(SessionApiClient, "get_user_stats", fake_get_user_stats)
    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    assert UUID(fetched[0]).version == 4
    assert "1h 30m" in result.output
    assert "1h 00m" in result.output


def test_stats_backend_unreachable(monkeypatch):
    def failing_get_user_stats(self, user_id):
        raise NetworkError("GET /sessions/user failed: refused")

    monkeypatch.setattr(SessionApiClient, "get_user_stats", failing_get_user_stats)
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 1
    assert "refused" in result.output


def test_format_duration():
    assert format_duration(0) == "0h 00m"
    assert format_duration(5_400_000) == "1h 30m"
    assert format_duration(59_999) == "0h 00m"
