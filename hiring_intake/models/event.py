"""Pydantic models for the append-only ``events`` table."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from hiring_intake.core.constants import EVENT_SOURCE_SYSTEM
from hiring_intake.models.enums import EventType


class EventCreate(BaseModel):
    """Payload for appending an audit event.

    Exactly one subject is required: a candidate or an employee.
    """
    org_id: str
    type: EventType
    candidate_id: str | None = None
    employee_id: str | None = None
    summary: str
    source: str = EVENT_SOURCE_SYSTEM
    payload: dict[str, Any] | None = None
    created_at: datetime

    @model_validator(mode="after")
    def _one_subject(self) -> "EventCreate":
        if (self.candidate_id is None) == (self.employee_id is None):
            raise ValueError("event needs exactly one of candidate_id or employee_id")
        return self


class Event(BaseModel):
    """Full events record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str
    type: EventType
    candidate_id: str | None = None
    employee_id: str | None = None
    summary: str
    source: str | None = None
    payload: dict[str, Any] | None = None
    created_at: datetime
