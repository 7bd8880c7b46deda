"""Aggregated statistics returned to the dashboard.

Durations are integer milliseconds. Keys are serialized in camelCase
except for recent session entries, which mirror stored session fields.
"""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from meetstats.core.modules.session.models import Session


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PeriodStats(BaseModel):
    count: int = Field(0, description="Sessions started in the period", ge=0)
    duration: int = Field(0, description="Summed duration in milliseconds", ge=0)


class StatsSummary(CamelModel):
    total_sessions: int = Field(0, ge=0)
    total_duration: int = Field(0, ge=0)
    avg_duration: int = Field(0, ge=0)
    this_month: PeriodStats = Field(default_factory=PeriodStats)
    this_year: PeriodStats = Field(default_factory=PeriodStats)


class DailyStat(CamelModel):
    date: dt.date = Field(..., description="UTC calendar date of session starts")
    session_count: int = Field(..., ge=1)
    duration: int = Field(..., ge=0)


class RecentSession(BaseModel):
    id: UUID
    user_id: str
    start_time: dt.datetime
    end_time: dt.datetime
    duration: int = Field(..., description="end_time - start_time in milliseconds", ge=0)

    @classmethod
    def from_domain(cls, session: Session) -> "RecentSession":
        return cls(
            id=session.id,
            user_id=session.user_id,
            start_time=session.start_time,
            end_time=session.end_time,
            duration=session.duration,
        )


class UserStats(CamelModel):
    summary: StatsSummary = Field(default_factory=StatsSummary)
    daily_stats: list[DailyStat] = Field(default_factory=list)
    recent_sessions: list[RecentSession] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "UserStats":
        """Stats for a user without any sessions."""
        return cls()
