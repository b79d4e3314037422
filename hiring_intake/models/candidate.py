"""Pydantic models for the ``candidates`` table.

The intake pipeline owns the profile and scoring columns; the stage machine
owns ``stage``.  The two write models below never overlap.

Rows created outside this service carry NULL in every column intake has not
filled yet, so the read model coerces those to empty values.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hiring_intake.models.enums import CandidateStage

# Columns written by an intake run and restored when its audit append fails
INTAKE_OWNED_COLUMNS = frozenset(
    {
        "resume_text",
        "resume_url",
        "resume_path",
        "summary",
        "skills",
        "experience",
        "match_score",
        "match_details",
        "updated_at",
    }
)


def clean_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _experience_entry(item: Any) -> str:
    """Flatten one experience entry to a single line of text."""
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        parts = [
            str(v).strip()
            for v in item.values()
            if isinstance(v, (str, int, float)) and not isinstance(v, bool)
        ]
        return " | ".join(p for p in parts if p)
    return ""


def flatten_experience(value: Any) -> list[str]:
    """Experience as one line per entry; objects become ``a | b | c``."""
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []
    entries = (_experience_entry(item) for item in value)
    return [entry for entry in entries if entry]


class MatchDetails(BaseModel):
    """Rationale behind a job fit score."""
    strengths: list[str] = []
    gaps: list[str] = []
    notes: str = ""


class Candidate(BaseModel):
    """Full candidate record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str
    job_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    resume_text: str | None = None
    resume_url: str | None = None
    resume_path: str | None = None
    summary: str | None = None
    skills: list[str] = []
    experience: list[str] = []
    match_score: int | None = Field(default=None, ge=0, le=100)
    match_details: MatchDetails | None = None
    stage: CandidateStage = CandidateStage.NEW
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> list[str]:
        return clean_string_list(value)

    @field_validator("experience", mode="before")
    @classmethod
    def _coerce_experience(cls, value: Any) -> list[str]:
        return flatten_experience(value)

    @field_validator("stage", mode="before")
    @classmethod
    def _default_stage(cls, value: Any) -> Any:
        return value or CandidateStage.NEW


class CandidateProfileUpdate(BaseModel):
    """Columns overwritten by one intake run.

    Every field is written, including nulls: a re-run replaces the previous
    extraction instead of merging into it.  The file reference columns are the
    exception and are only written when this run stored a file.
    """
    resume_text: str
    resume_url: str | None = None
    resume_path: str | None = None
    summary: str | None = None
    skills: list[str] = []
    experience: list[str] = []
    match_score: int | None = Field(default=None, ge=0, le=100)
    match_details: MatchDetails | None = None
    updated_at: datetime


class StageTransitionRequest(BaseModel):
    """Body of PATCH /candidates/{id}/stage.

    ``stage`` is a plain string so unknown values reach the stage machine
    and are rejected there with the list of allowed stages.
    """
    stage: str
