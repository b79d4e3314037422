"""Enum types mirroring the PostgreSQL custom enums."""

from enum import Enum


class CandidateStage(str, Enum):
    """Position of a candidate in a job's hiring pipeline.

    Declaration order is the board's column order.  ``REJECTED`` is a side
    state reachable from any stage.
    """
    NEW = "NEW"
    PHONE_SCREEN = "PHONE_SCREEN"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    HIRED = "HIRED"
    REJECTED = "REJECTED"


class EventType(str, Enum):
    """Audit event kinds written by this service."""
    RESUME_PARSED = "RESUME_PARSED"


class IntakeStatus(str, Enum):
    """How completely an intake invocation derived data from the resume."""
    scored = "scored"
    parsed = "parsed"
    text_only = "text_only"
