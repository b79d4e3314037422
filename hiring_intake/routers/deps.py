"""FastAPI dependencies wiring services to the org of the current request.

Every request must carry ``X-Org-Id``; the Record Store, Event Logger and
file store built here are bound to it.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException

from hiring_intake.core.config import settings
from hiring_intake.db.record_store import RecordStore
from hiring_intake.db.storage import ResumeFileStore
from hiring_intake.db.supabase import get_supabase
from hiring_intake.services.audit import AuditEventLogger
from hiring_intake.services.intake import IntakeOrchestrator
from hiring_intake.services.job_fit import JobFitScorer
from hiring_intake.services.llm import LanguageModelClient
from hiring_intake.services.profile_extractor import ProfileExtractor
from hiring_intake.services.stages import CandidateStageMachine


def get_org_id(
    x_org_id: str = Header(..., alias="X-Org-Id", min_length=1),
) -> str:
    org_id = x_org_id.strip()
    if not org_id:
        raise HTTPException(status_code=400, detail="X-Org-Id header is required")
    return org_id


def get_record_store(org_id: str = Depends(get_org_id)) -> RecordStore:
    return RecordStore(get_supabase(), org_id)


def get_intake_orchestrator(
    store: RecordStore = Depends(get_record_store),
) -> IntakeOrchestrator:
    file_store = (
        ResumeFileStore(get_supabase(), settings.RESUME_BUCKET)
        if settings.RESUME_BUCKET
        else None
    )
    return IntakeOrchestrator(
        store=store,
        profile_extractor=ProfileExtractor(
            LanguageModelClient(settings.llm_config("extraction"))
        ),
        fit_scorer=JobFitScorer(
            LanguageModelClient(settings.llm_config("scoring")), store
        ),
        audit_logger=AuditEventLogger(store),
        file_store=file_store,
    )


def get_stage_machine(
    store: RecordStore = Depends(get_record_store),
) -> CandidateStageMachine:
    return CandidateStageMachine(store)
