"""Job fit scoring: resume text against a job description.

Scoring is best-effort.  A missing job, a job without a description, a
failed job lookup, an unreachable model or a reply without a numeric
``score`` all produce ``None`` instead of an error.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from hiring_intake.core.constants import (
    FIT_SYSTEM_PROMPT,
    MATCH_SCORE_MAX,
    MATCH_SCORE_MIN,
    MAX_PROMPT_DOCUMENT_CHARS,
)
from hiring_intake.core.errors import (
    ModelResponseError,
    ModelTransportError,
    UpstreamFetchError,
)
from hiring_intake.db.record_store import RecordStore
from hiring_intake.models.candidate import clean_string_list
from hiring_intake.models.intake import FitScore
from hiring_intake.models.job import Job
from hiring_intake.services.llm import LanguageModelClient

logger = logging.getLogger(__name__)


def fit_from_payload(payload: dict[str, Any]) -> FitScore | None:
    """Build a ``FitScore`` from parsed model JSON.

    ``score`` must be a JSON number; anything else (missing, string, bool,
    null) discards the whole result.
    """
    raw_score = payload.get("score")
    if isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
        return None
    if not math.isfinite(raw_score):
        return None

    score = max(MATCH_SCORE_MIN, min(MATCH_SCORE_MAX, round(raw_score)))
    notes = payload.get("notes")
    return FitScore(
        score=score,
        strengths=clean_string_list(payload.get("strengths")),
        gaps=clean_string_list(payload.get("gaps")),
        notes=notes.strip() if isinstance(notes, str) else "",
    )


class JobFitScorer:
    """Scores how well a resume fits a candidate's job."""

    def __init__(self, llm: LanguageModelClient, store: RecordStore) -> None:
        self._llm = llm
        self._store = store

    async def score_fit(self, resume_text: str, job: Job | None) -> FitScore | None:
        """Score ``resume_text`` against ``job``; None when scoring is skipped or fails."""
        if job is None or not job.has_description:
            logger.info(
                "fit_scoring_skipped",
                extra={
                    "reason": "no_job_description",
                    "job_id": job.id if job else None,
                },
            )
            return None
        if not resume_text.strip():
            logger.info(
                "fit_scoring_skipped",
                extra={"reason": "empty_resume", "job_id": job.id},
            )
            return None

        documents = [
            f"JOB DESCRIPTION:\n{job.description[:MAX_PROMPT_DOCUMENT_CHARS]}",
            f"CANDIDATE RESUME:\n{resume_text[:MAX_PROMPT_DOCUMENT_CHARS]}",
        ]
        try:
            payload = await self._llm.complete_json(
                FIT_SYSTEM_PROMPT,
                documents,
                temperature=0.2,
                max_tokens=800,
                purpose="fit_scoring",
            )
        except (ModelResponseError, ModelTransportError) as exc:
            logger.warning(
                "fit_scoring_failed",
                extra={
                    "job_id": job.id,
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                },
            )
            return None

        fit = fit_from_payload(payload)
        if fit is None:
            logger.warning(
                "fit_scoring_failed",
                extra={
                    "job_id": job.id,
                    "error_type": "NonNumericScore",
                    "error_message": f"score={payload.get('score')!r}",
                },
            )
            return None

        logger.info(
            "fit_scoring_complete",
            extra={"job_id": job.id, "score": fit.score},
        )
        return fit

    async def score_candidate(self, resume_text: str, job_id: str | None) -> FitScore | None:
        """Fetch the candidate's job, then score against it.

        A failed job lookup is logged and treated as "no job".
        """
        job: Job | None = None
        if job_id:
            try:
                job = self._store.get_job(job_id)
            except UpstreamFetchError as exc:
                logger.warning(
                    "fit_scoring_job_lookup_failed",
                    extra={"job_id": job_id, "error_message": str(exc)},
                )
                return None
        return await self.score_fit(resume_text, job)
