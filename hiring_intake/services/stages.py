"""Candidate stage state machine.

Validation is membership-only: any known stage may follow any other, since
recruiters skip stages (``NEW -> HIRED``) and reject from anywhere.  The
write is a direct field update with last-write-wins semantics.  Optimistic
board updates and their rollback belong to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from hiring_intake.core.errors import InvalidStageError
from hiring_intake.db.record_store import RecordStore
from hiring_intake.models.candidate import Candidate
from hiring_intake.models.enums import CandidateStage

logger = logging.getLogger(__name__)


def list_stages() -> list[CandidateStage]:
    """All stages in board order, ``REJECTED`` last."""
    return list(CandidateStage)


def parse_stage(value: object) -> CandidateStage:
    """Return the stage named by ``value`` or raise ``InvalidStageError``."""
    if isinstance(value, CandidateStage):
        return value
    if isinstance(value, str):
        try:
            return CandidateStage(value)
        except ValueError:
            pass
    raise InvalidStageError(value, (s.value for s in CandidateStage))


class CandidateStageMachine:
    """Applies validated stage transitions for one organization."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def transition(self, candidate_id: str, target_stage: object) -> Candidate:
        """Move a candidate to ``target_stage``.

        Raises
        ------
        InvalidStageError
            ``target_stage`` is not a known stage.  Nothing is read or written.
        CandidateNotFoundError
            The candidate does not exist in this organization.
        PersistenceError
            The write failed.
        """
        try:
            stage = parse_stage(target_stage)
        except InvalidStageError:
            logger.warning(
                "stage_transition_rejected",
                extra={
                    "org_id": self._store.org_id,
                    "candidate_id": candidate_id,
                    "requested_stage": str(target_stage),
                },
            )
            raise

        candidate = self._store.update_candidate_stage(
            candidate_id, stage, datetime.now(timezone.utc).isoformat()
        )
        logger.info(
            "stage_transition_applied",
            extra={
                "org_id": self._store.org_id,
                "candidate_id": candidate_id,
                "stage": stage.value,
            },
        )
        return candidate
