"""Exception taxonomy for the intake pipeline and stage machine.

Errors that only affect the quality of derived data (extraction, model output,
job lookup for scoring) are absorbed by the services that raise them.  Errors
that affect durability or input validity reach the routers and become HTTP
responses.
"""

from __future__ import annotations

from collections.abc import Iterable


class HiringIntakeError(Exception):
    """Base class for all errors raised by this package."""


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------


class ExtractionIOError(HiringIntakeError):
    """The uploaded document could not be read.  Fatal for the submission."""


class UnsupportedFormatError(HiringIntakeError):
    """No extractor exists for the declared format.  Soft-fail: yields ``""``."""

    def __init__(self, declared_format: str) -> None:
        self.declared_format = declared_format
        super().__init__(f"Unsupported document format: {declared_format!r}")


# ---------------------------------------------------------------------------
# Language model
# ---------------------------------------------------------------------------


class ModelResponseError(HiringIntakeError):
    """The model replied, but not with the JSON object the call site expects."""


class ModelTransportError(HiringIntakeError):
    """The model could not be reached (timeout, connection, 429/5xx, no key)."""

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        self.retryable = retryable
        super().__init__(message)


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------


class RecordStoreError(HiringIntakeError):
    """Base class for Record Store failures."""


class UpstreamFetchError(RecordStoreError):
    """A read from the Record Store failed."""


class PersistenceError(RecordStoreError):
    """A write to the Record Store failed.  Always surfaced to the caller."""


class CandidateNotFoundError(HiringIntakeError):
    """No candidate with this id exists in the caller's organization."""

    def __init__(self, candidate_id: str) -> None:
        self.candidate_id = candidate_id
        super().__init__(f"Candidate not found: {candidate_id}")


# ---------------------------------------------------------------------------
# Stage machine
# ---------------------------------------------------------------------------


class InvalidStageError(HiringIntakeError):
    """The requested stage is not a member of the known stage set."""

    def __init__(self, stage: object, allowed: Iterable[str]) -> None:
        self.stage = stage
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown stage {stage!r}; expected one of {', '.join(self.allowed)}"
        )


# ---------------------------------------------------------------------------
# Intake orchestration
# ---------------------------------------------------------------------------


class IntakeError(HiringIntakeError):
    """An intake invocation aborted.

    ``stage`` names the pipeline step that failed (``lookup``, ``extraction``,
    ``storage``, ``persistence`` or ``audit``).  The original exception is
    chained as ``__cause__``.
    """

    def __init__(self, stage: str, message: str, *, fatal: bool = True) -> None:
        self.stage = stage
        self.fatal = fatal
        super().__init__(f"Intake failed during {stage}: {message}")
