"""Session tracking models."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from meetstats.core.db import MongoModel
from meetstats.utils import duration_ms, to_utc

UtcDatetime = Annotated[datetime, AfterValidator(to_utc)]


class Session(MongoModel):
    """One contiguous period spent in a meeting.

    start_time is fixed at creation; end_time is pushed forward while the
    meeting is still open. Indexed on user_id and (user_id, start_time).
    """

    user_id: str
    start_time: UtcDatetime
    end_time: UtcDatetime

    @property
    def duration(self) -> int:
        """Session length in milliseconds."""
        return duration_ms(self.start_time, self.end_time)
