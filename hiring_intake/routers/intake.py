"""Resume intake endpoint.

POST /candidates/{candidate_id}/resume -- uploads a resume, runs the intake
pipeline and redirects to the candidate's profile view.

Only two failures are user-visible: an unreadable file (400) and a record
that could not be updated (500).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import RedirectResponse

from hiring_intake.core.config import settings
from hiring_intake.core.errors import CandidateNotFoundError, IntakeError
from hiring_intake.routers.deps import get_intake_orchestrator
from hiring_intake.services.intake import IntakeOrchestrator
from hiring_intake.services.text_extraction import resolve_format

logger = logging.getLogger(__name__)

router = APIRouter()

READ_FAILURE_DETAIL = "Could not read your file"
UPDATE_FAILURE_DETAIL = "Could not update this record"


def _too_large(limit: int) -> HTTPException:
    return HTTPException(status_code=413, detail=f"File exceeds {limit} bytes")


@router.post("/{candidate_id}/resume", response_model=None)
async def upload_resume(
    candidate_id: str,
    file: UploadFile = File(..., description="Resume document (pdf, docx, txt, md)"),
    redirect: bool = Query(True, description="Redirect to the profile view on success"),
    orchestrator: IntakeOrchestrator = Depends(get_intake_orchestrator),
) -> Any:
    """Run resume intake for one candidate.

    On success redirects (303) to the candidate profile view, or returns the
    intake outcome as JSON when ``redirect=false``.
    """
    limit = settings.MAX_UPLOAD_BYTES
    if file.size is not None and file.size > limit:
        raise _too_large(limit)

    try:
        # One byte past the limit is enough to tell an oversized upload
        file_bytes = await file.read(limit + 1)
    except OSError as exc:
        logger.error(
            "resume_upload_read_failed",
            extra={"candidate_id": candidate_id, "error_message": str(exc)},
        )
        raise HTTPException(status_code=400, detail=READ_FAILURE_DETAIL) from exc

    if len(file_bytes) > limit:
        raise _too_large(limit)

    declared_format = resolve_format(file.filename, file.content_type)

    try:
        outcome = await orchestrator.intake(
            candidate_id,
            file_bytes,
            declared_format,
            filename=file.filename,
            content_type=file.content_type,
        )
    except CandidateNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Candidate not found") from exc
    except IntakeError as exc:
        logger.error(
            "resume_intake_failed",
            extra={
                "candidate_id": candidate_id,
                "stage": exc.stage,
                "error_message": str(exc),
            },
        )
        if exc.stage == "extraction":
            raise HTTPException(status_code=400, detail=READ_FAILURE_DETAIL) from exc
        raise HTTPException(status_code=500, detail=UPDATE_FAILURE_DETAIL) from exc

    if not redirect:
        return outcome.model_dump(mode="json")

    return RedirectResponse(
        url=settings.PROFILE_URL_TEMPLATE.format(candidate_id=candidate_id),
        status_code=303,
    )
