"""Audit event logging.

Events are append-only and org-scoped.  Appends are not deduplicated: a
retried intake appends another ``RESUME_PARSED`` event, so the timeline shows
every attempt.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from hiring_intake.core.constants import (
    GENERIC_RESUME_EVENT_SUMMARY,
    SCORED_RESUME_EVENT_SUMMARY,
)
from hiring_intake.db.record_store import RecordStore
from hiring_intake.models.enums import EventType
from hiring_intake.models.event import Event, EventCreate
from hiring_intake.models.intake import FitScore, ResumeProfile

logger = logging.getLogger(__name__)


def resume_event_summary(fit: FitScore | None) -> str:
    """One-line summary: includes the score when there is one."""
    if fit is None:
        return GENERIC_RESUME_EVENT_SUMMARY
    return SCORED_RESUME_EVENT_SUMMARY.format(score=fit.score)


def build_resume_parsed_event(
    org_id: str,
    candidate_id: str,
    profile: ResumeProfile,
    fit: FitScore | None,
    declared_format: str,
) -> EventCreate:
    return EventCreate(
        org_id=org_id,
        type=EventType.RESUME_PARSED,
        candidate_id=candidate_id,
        summary=resume_event_summary(fit),
        payload={
            "declaredFormat": declared_format,
            "aiSummary": profile.summary or None,
            "skills": profile.skills,
            "matchScore": fit.score if fit else None,
        },
        created_at=datetime.now(timezone.utc),
    )


class AuditEventLogger:
    """Appends audit events through the Record Store.

    ``append`` returns only after the row is written; a failed write raises
    ``PersistenceError`` instead of being dropped.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def append(self, event: EventCreate) -> Event:
        stored = self._store.insert_event(event)
        logger.info(
            "audit_event_appended",
            extra={
                "event_id": stored.id,
                "org_id": stored.org_id,
                "type": stored.type.value,
                "candidate_id": stored.candidate_id,
                "employee_id": stored.employee_id,
            },
        )
        return stored
