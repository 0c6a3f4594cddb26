"""Scheduling schemas"""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..quotes.schemas import QuoteResponse

RECURRING_OPTIONS = ("none", "weekly", "biweekly", "monthly")


class ScheduleCreate(BaseModel):
    scheduledDate: date
    scheduledTime: Optional[time] = None
    recurring: str = "none"
    assignedTo: Optional[int] = None

    @field_validator("recurring")
    @classmethod
    def check_recurring(cls, v):
        if v not in RECURRING_OPTIONS:
            raise ValueError(f"Invalid recurring value. Must be one of: {', '.join(RECURRING_OPTIONS)}")
        return v


class ScheduledJob(QuoteResponse):
    """A scheduled quote with the assignee's display name"""

    assigned_to_name: Optional[str] = Field(default=None)
    assigned_to_color: Optional[str] = Field(default=None)


class ScheduleListResponse(BaseModel):
    jobs: list[ScheduledJob]
