"""Shared pytest fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

import pytest

from meetstats.core.modules.session.models import Session

USER_ID = "3f1c9a52-8d1e-4b7a-9c2f-5e6d7a8b9c0d"


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def make_session(user_id) -> Callable[..., Session]:
    """Build sessions from ISO strings, e.g. make_session("2024-06-01T10:00", "2024-06-01T11:30")."""

    def factory(start: str, end: str, owner: str | None = None, session_id: UUID | None = None) -> Session:
        kwargs = {}
        if session_id is not None:
            kwargs["id"] = session_id
        return Session(
            user_id=owner or user_id,
            start_time=datetime.fromisoformat(start).replace(tzinfo=UTC),
            end_time=datetime.fromisoformat(end).replace(tzinfo=UTC),
            **kwargs,
        )

    return factory
