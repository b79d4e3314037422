"""Shared test fixtures.

Seeds the environment ``Settings`` needs, and provides a ``test_client``
for FastAPI, chainable Supabase table mocks, an in-memory Record Store and
fake language model clients for use across all test modules.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from hiring_intake.core.errors import CandidateNotFoundError
from hiring_intake.models.candidate import (
    INTAKE_OWNED_COLUMNS,
    Candidate,
    CandidateProfileUpdate,
)
from hiring_intake.models.enums import CandidateStage
from hiring_intake.models.event import Event, EventCreate
from hiring_intake.models.job import Job

ORG_ID = "org-acme"


def chainable_table_mock() -> MagicMock:
    """Return a mock that supports fluent Supabase query chaining."""
    m = MagicMock()
    for method in (
        "select", "insert", "upsert", "update", "eq", "limit",
        "in_", "is_", "order",
    ):
        getattr(m, method).return_value = m
    return m


def fake_llm(payload: Any = None, side_effect: Any = None) -> MagicMock:
    """Return a stand-in ``LanguageModelClient`` whose ``complete_json`` is an AsyncMock."""
    llm = MagicMock()
    llm.is_configured = True
    llm.complete_json = AsyncMock(return_value=payload, side_effect=side_effect)
    return llm


class InMemoryRecordStore:
    """Dict-backed stand-in for ``RecordStore`` with the same method surface."""

    def __init__(self, org_id: str = ORG_ID) -> None:
        self.org_id = org_id
        self.candidates: dict[str, dict[str, Any]] = {}
        self.jobs: dict[str, dict[str, Any]] = {}
        self.events: list[Event] = []
        self.profile_writes = 0
        self.fail_profile_write: Exception | None = None
        self.fail_event_write: Exception | None = None
        self.fail_job_read: Exception | None = None
        self.fail_restore: Exception | None = None
        self.restores = 0

    def add_job(self, description: str | None, job_id: str | None = None) -> str:
        job_id = job_id or f"job-{uuid4().hex[:8]}"
        self.jobs[job_id] = {
            "id": job_id,
            "org_id": self.org_id,
            "title": "Role",
            "description": description,
        }
        return job_id

    def add_candidate(self, job_id: str | None = None, **fields: Any) -> str:
        candidate_id = fields.pop("id", None) or f"cand-{uuid4().hex[:8]}"
        self.candidates[candidate_id] = {
            "id": candidate_id,
            "org_id": self.org_id,
            "job_id": job_id,
            "stage": CandidateStage.NEW.value,
            **fields,
        }
        return candidate_id

    def get_candidate(self, candidate_id: str) -> Candidate:
        row = self.candidates.get(candidate_id)
        if row is None:
            raise CandidateNotFoundError(candidate_id)
        return Candidate(**row)

    def get_job(self, job_id: str) -> Job | None:
        if self.fail_job_read is not None:
            raise self.fail_job_read
        row = self.jobs.get(job_id)
        return Job(**row) if row else None

    def update_candidate_profile(
        self, candidate_id: str, update: CandidateProfileUpdate
    ) -> Candidate:
        if self.fail_profile_write is not None:
            raise self.fail_profile_write
        if candidate_id not in self.candidates:
            raise CandidateNotFoundError(candidate_id)
        data = update.model_dump(mode="json")
        if update.resume_path is None:
            data.pop("resume_path")
            data.pop("resume_url")
        self.candidates[candidate_id].update(data)
        self.profile_writes += 1
        return Candidate(**self.candidates[candidate_id])

    def restore_candidate_profile(self, snapshot: Candidate) -> Candidate:
        if self.fail_restore is not None:
            raise self.fail_restore
        data = snapshot.model_dump(mode="json", include=set(INTAKE_OWNED_COLUMNS))
        self.candidates[snapshot.id].update(data)
        self.restores += 1
        return Candidate(**self.candidates[snapshot.id])

    def update_candidate_stage(
        self, candidate_id: str, stage: CandidateStage, updated_at: str
    ) -> Candidate:
        if candidate_id not in self.candidates:
            raise CandidateNotFoundError(candidate_id)
        self.candidates[candidate_id].update(stage=stage.value, updated_at=updated_at)
        return Candidate(**self.candidates[candidate_id])

    def insert_event(self, event: EventCreate) -> Event:
        if self.fail_event_write is not None:
            raise self.fail_event_write
        stored = Event(
            id=f"evt-{len(self.events) + 1}",
            **event.model_dump(),
        )
        self.events.append(stored)
        return stored


@pytest.fixture()
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture()
def mock_supabase() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` where the routers' dependencies import it."""
    mock_client = MagicMock()
    with patch("hiring_intake.routers.deps.get_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient with dependency overrides cleared after use."""
    from hiring_intake.main import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

