"""Org-scoped Record Store over the Supabase ``candidates``, ``jobs`` and
``events`` tables.

Every query carries an ``org_id`` filter.  Read failures raise
``UpstreamFetchError`` and write failures raise ``PersistenceError``; callers
decide whether a failure is fatal.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from supabase import Client

from hiring_intake.core.errors import (
    CandidateNotFoundError,
    PersistenceError,
    RecordStoreError,
    UpstreamFetchError,
)
from hiring_intake.models.candidate import (
    INTAKE_OWNED_COLUMNS,
    Candidate,
    CandidateProfileUpdate,
)
from hiring_intake.models.enums import CandidateStage
from hiring_intake.models.event import Event, EventCreate
from hiring_intake.models.job import Job

logger = logging.getLogger(__name__)


def _candidate_from_row(
    row: dict[str, Any], error_cls: type[RecordStoreError]
) -> Candidate:
    try:
        return Candidate(**row)
    except ValidationError as exc:
        logger.error(
            "candidate_row_invalid",
            extra={"record_id": row.get("id"), "error_message": str(exc)},
        )
        raise error_cls(f"Candidate row {row.get('id')} is malformed: {exc}") from exc


class RecordStore:
    """Record Store bound to one organization."""

    def __init__(self, client: Client, org_id: str) -> None:
        if not org_id:
            raise ValueError("org_id is required for every Record Store call")
        self._client = client
        self.org_id = org_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _fetch_one(self, table: str, record_id: str) -> dict[str, Any] | None:
        try:
            result = (
                self._client.table(table)
                .select("*")
                .eq("id", record_id)
                .eq("org_id", self.org_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            logger.error(
                "record_fetch_failed",
                extra={
                    "table": table,
                    "record_id": record_id,
                    "org_id": self.org_id,
                    "error_message": str(exc),
                },
            )
            raise UpstreamFetchError(f"Failed to read {table}/{record_id}: {exc}") from exc
        return result.data[0] if result.data else None

    def get_candidate(self, candidate_id: str) -> Candidate:
        """Return the candidate or raise ``CandidateNotFoundError``."""
        row = self._fetch_one("candidates", candidate_id)
        if row is None:
            raise CandidateNotFoundError(candidate_id)
        return _candidate_from_row(row, UpstreamFetchError)

    def get_job(self, job_id: str) -> Job | None:
        """Return the job, or None when it does not exist in this org."""
        row = self._fetch_one("jobs", job_id)
        return Job(**row) if row is not None else None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _update_candidate(self, candidate_id: str, data: dict[str, Any]) -> Candidate:
        try:
            result = (
                self._client.table("candidates")
                .update(data)
                .eq("id", candidate_id)
                .eq("org_id", self.org_id)
                .execute()
            )
        except Exception as exc:
            logger.error(
                "candidate_update_failed",
                extra={
                    "candidate_id": candidate_id,
                    "org_id": self.org_id,
                    "columns": sorted(data),
                    "error_message": str(exc),
                },
            )
            raise PersistenceError(f"Failed to update candidate {candidate_id}: {exc}") from exc

        if not result.data:
            raise CandidateNotFoundError(candidate_id)
        return _candidate_from_row(result.data[0], PersistenceError)

    def update_candidate_profile(
        self, candidate_id: str, update: CandidateProfileUpdate
    ) -> Candidate:
        """Overwrite the intake-owned columns of a candidate."""
        data = update.model_dump(mode="json")
        if update.resume_path is None:
            data.pop("resume_path")
            data.pop("resume_url")
        return self._update_candidate(candidate_id, data)

    def restore_candidate_profile(self, snapshot: Candidate) -> Candidate:
        """Write back the intake-owned columns of an earlier snapshot."""
        data = snapshot.model_dump(mode="json", include=set(INTAKE_OWNED_COLUMNS))
        if data["updated_at"] is None:
            data.pop("updated_at")
        return self._update_candidate(snapshot.id, data)

    def update_candidate_stage(
        self, candidate_id: str, stage: CandidateStage, updated_at: str
    ) -> Candidate:
        """Set ``stage`` directly.  Last write wins."""
        return self._update_candidate(
            candidate_id, {"stage": stage.value, "updated_at": updated_at}
        )

    def insert_event(self, event: EventCreate) -> Event:
        """Append one row to ``events``."""
        if event.org_id != self.org_id:
            raise PersistenceError(
                f"Event org {event.org_id} does not match store org {self.org_id}"
            )
        try:
            result = self._client.table("events").insert(event.model_dump(mode="json")).execute()
        except Exception as exc:
            logger.error(
                "event_insert_failed",
                extra={
                    "org_id": self.org_id,
                    "type": event.type.value,
                    "error_message": str(exc),
                },
            )
            raise PersistenceError(f"Failed to append {event.type.value} event: {exc}") from exc

        if not result.data:
            raise PersistenceError(f"Event insert returned no row for {event.type.value}")
        return Event(**result.data[0])
