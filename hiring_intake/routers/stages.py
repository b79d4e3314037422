"""Candidate stage endpoints consumed by the hiring board.

PATCH /candidates/{candidate_id}/stage -- moves a candidate to a stage.
GET   /stages                          -- ordered stage list for the board.

The board applies a move optimistically and rolls back when this endpoint
answers with an error; 422 responses carry ``allowed_stages`` for that.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from hiring_intake.core.errors import (
    CandidateNotFoundError,
    InvalidStageError,
    PersistenceError,
)
from hiring_intake.models.candidate import Candidate, StageTransitionRequest
from hiring_intake.routers.deps import get_stage_machine
from hiring_intake.services.stages import CandidateStageMachine, list_stages

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stages", status_code=200)
async def get_stages() -> dict[str, Any]:
    """Return the known stages in board order."""
    return {"stages": [stage.value for stage in list_stages()]}


@router.patch("/candidates/{candidate_id}/stage", status_code=200)
async def transition_stage(
    candidate_id: str,
    body: StageTransitionRequest,
    machine: CandidateStageMachine = Depends(get_stage_machine),
) -> Candidate:
    """Set a candidate's stage; any known stage is accepted from any other."""
    try:
        return machine.transition(candidate_id, body.stage)
    except InvalidStageError as exc:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(exc),
                "stage": body.stage,
                "allowed_stages": exc.allowed,
            },
        ) from exc
    except CandidateNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Candidate not found") from exc
    except PersistenceError as exc:
        logger.error(
            "stage_transition_failed",
            extra={
                "candidate_id": candidate_id,
                "stage": body.stage,
                "error_message": str(exc),
            },
        )
        raise HTTPException(
            status_code=500, detail="Could not update this record"
        ) from exc
