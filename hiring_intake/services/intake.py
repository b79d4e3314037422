"""Resume intake orchestration.

Runs one resume submission through the pipeline:

1. Extract text from the upload (fatal on unreadable input)
2. Extract a structured profile (never fatal)
3. Score fit against the candidate's job (never fatal, runs alongside 2)
4. Persist profile + score onto the candidate (fatal on failure)
5. Append one ``RESUME_PARSED`` audit event (fatal on failure)

Either the run aborts and nothing stays mutated, or step 4 succeeds and
exactly one event is appended.  A failed append after step 4 restores the
columns the run overwrote; the restore is best-effort and logged.

Quality problems (unsupported format, malformed model output, missing job)
degrade the result; durability problems raise ``IntakeError``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone

from hiring_intake.core.errors import (
    CandidateNotFoundError,
    ExtractionIOError,
    IntakeError,
    PersistenceError,
    RecordStoreError,
    UpstreamFetchError,
)
from hiring_intake.db.record_store import RecordStore
from hiring_intake.db.storage import ResumeFileStore
from hiring_intake.models.candidate import Candidate, CandidateProfileUpdate
from hiring_intake.models.enums import IntakeStatus
from hiring_intake.models.intake import FitScore, IntakeOutcome, ResumeProfile, StoredResume
from hiring_intake.services.audit import AuditEventLogger, build_resume_parsed_event
from hiring_intake.services.job_fit import JobFitScorer
from hiring_intake.services.profile_extractor import ProfileExtractor
from hiring_intake.services.text_extraction import extract_text

logger = logging.getLogger(__name__)


def _phase_complete(candidate_id: str, phase: str, phase_start: float, **fields: object) -> None:
    logger.info(
        "phase_complete",
        extra={
            "event": "phase_complete",
            "candidate_id": candidate_id,
            "phase": phase,
            "duration_ms": int((time.time() - phase_start) * 1000),
            **fields,
        },
    )


class IntakeOrchestrator:
    """Coordinates extraction, scoring, persistence and audit for one org."""

    def __init__(
        self,
        store: RecordStore,
        profile_extractor: ProfileExtractor,
        fit_scorer: JobFitScorer,
        audit_logger: AuditEventLogger,
        file_store: ResumeFileStore | None = None,
    ) -> None:
        self._store = store
        self._profile_extractor = profile_extractor
        self._fit_scorer = fit_scorer
        self._audit = audit_logger
        self._file_store = file_store

    async def _score_best_effort(self, resume_text: str, job_id: str | None) -> FitScore | None:
        """Scoring must never block persistence of the profile."""
        try:
            return await self._fit_scorer.score_candidate(resume_text, job_id)
        except Exception as exc:
            logger.error(
                "fit_scoring_unexpected_error",
                extra={
                    "job_id": job_id,
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                },
            )
            return None

    async def _extract_profile_best_effort(self, resume_text: str) -> ResumeProfile:
        try:
            return await self._profile_extractor.extract_profile(resume_text)
        except Exception as exc:
            logger.error(
                "profile_extraction_unexpected_error",
                extra={
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                },
            )
            return ResumeProfile.empty()

    def _store_file(
        self,
        candidate_id: str,
        file_bytes: bytes,
        filename: str | None,
        content_type: str | None,
    ) -> StoredResume | None:
        if self._file_store is None:
            return None
        try:
            return self._file_store.store(
                self._store.org_id, candidate_id, file_bytes, filename, content_type
            )
        except PersistenceError as exc:
            raise IntakeError("storage", str(exc)) from exc

    def _discard_file(self, stored: StoredResume | None) -> None:
        if stored is not None and self._file_store is not None:
            self._file_store.remove(stored.path)

    def _restore_profile(self, snapshot: Candidate) -> bool:
        """Put back the columns this run overwrote; False when that fails too."""
        try:
            self._store.restore_candidate_profile(snapshot)
        except (RecordStoreError, CandidateNotFoundError) as exc:
            logger.error(
                "intake_rollback_failed",
                extra={
                    "candidate_id": snapshot.id,
                    "error_message": str(exc),
                },
            )
            return False
        logger.warning("intake_rolled_back", extra={"candidate_id": snapshot.id})
        return True

    async def intake(
        self,
        candidate_id: str,
        file_bytes: bytes,
        declared_format: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> IntakeOutcome:
        """Run the full intake pipeline for one uploaded resume.

        Raises
        ------
        CandidateNotFoundError
            The candidate does not exist in this organization.
        IntakeError
            A fatal step failed; ``stage`` names it.  Nothing stays persisted,
            except when an ``audit`` failure could not be rolled back.
        """
        start_time = time.time()
        logger.info(
            "intake_start",
            extra={
                "event": "intake_start",
                "org_id": self._store.org_id,
                "candidate_id": candidate_id,
                "declared_format": declared_format,
                "size_bytes": len(file_bytes),
            },
        )

        # ---- PHASE 0: Candidate lookup ----
        try:
            candidate = self._store.get_candidate(candidate_id)
        except UpstreamFetchError as exc:
            raise IntakeError("lookup", str(exc)) from exc

        # ---- PHASE 1: Text extraction ----
        phase_start = time.time()
        try:
            resume_text = extract_text(file_bytes, declared_format)
        except ExtractionIOError as exc:
            logger.error(
                "intake_error",
                extra={
                    "event": "intake_error",
                    "candidate_id": candidate_id,
                    "phase": "extraction",
                    "error": str(exc),
                },
            )
            raise IntakeError("extraction", str(exc)) from exc
        stored = self._store_file(candidate_id, file_bytes, filename, content_type)
        _phase_complete(candidate_id, "extraction", phase_start, text_length=len(resume_text))

        # ---- PHASES 2+3: Profile extraction and fit scoring ----
        # Scoring reads the original text, not the profile, so both run at once.
        phase_start = time.time()
        profile, fit = await asyncio.gather(
            self._extract_profile_best_effort(resume_text),
            self._score_best_effort(resume_text, candidate.job_id),
        )
        _phase_complete(
            candidate_id,
            "model_inference",
            phase_start,
            skills_count=len(profile.skills),
            match_score=fit.score if fit else None,
        )

        # ---- PHASE 4: Persistence ----
        phase_start = time.time()
        update = CandidateProfileUpdate(
            resume_text=resume_text,
            resume_url=stored.public_url if stored else None,
            resume_path=stored.path if stored else None,
            summary=profile.summary or None,
            skills=profile.skills,
            experience=profile.experience,
            match_score=fit.score if fit else None,
            match_details=fit.details() if fit else None,
            updated_at=datetime.now(timezone.utc),
        )
        try:
            updated = self._store.update_candidate_profile(candidate_id, update)
        except (PersistenceError, CandidateNotFoundError) as exc:
            # CandidateNotFoundError here means it was deleted after lookup
            self._discard_file(stored)
            raise IntakeError("persistence", str(exc)) from exc
        _phase_complete(candidate_id, "persistence", phase_start)

        # ---- PHASE 5: Audit ----
        event = build_resume_parsed_event(
            self._store.org_id, candidate_id, profile, fit, declared_format
        )
        try:
            self._audit.append(event)
        except PersistenceError as exc:
            # No event means no profile: undo the overwrite
            if self._restore_profile(candidate):
                self._discard_file(stored)
            raise IntakeError("audit", str(exc)) from exc

        if fit is not None:
            status = IntakeStatus.scored
        elif not profile.is_empty:
            status = IntakeStatus.parsed
        else:
            status = IntakeStatus.text_only

        logger.info(
            "intake_complete",
            extra={
                "event": "intake_complete",
                "org_id": self._store.org_id,
                "candidate_id": candidate_id,
                "status": status.value,
                "match_score": fit.score if fit else None,
                "duration_seconds": round(time.time() - start_time, 2),
            },
        )

        return IntakeOutcome(
            candidate=updated,
            status=status,
            declared_format=declared_format,
            text_length=len(resume_text),
            match_score=fit.score if fit else None,
            event_summary=event.summary,
        )
