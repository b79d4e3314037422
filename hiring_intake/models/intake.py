"""Models for intermediate and final intake results."""

from pydantic import BaseModel, Field

from hiring_intake.models.candidate import Candidate, MatchDetails
from hiring_intake.models.enums import IntakeStatus


class ResumeProfile(BaseModel):
    """Structured profile extracted from resume text by the model."""
    summary: str = ""
    skills: list[str] = []
    experience: list[str] = []
    raw_text: str = ""

    @classmethod
    def empty(cls) -> "ResumeProfile":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.summary or self.skills or self.experience or self.raw_text)


class FitScore(BaseModel):
    """Job fit estimate for one resume against one job description."""
    score: int = Field(..., ge=0, le=100)
    strengths: list[str] = []
    gaps: list[str] = []
    notes: str = ""

    def details(self) -> MatchDetails:
        return MatchDetails(strengths=self.strengths, gaps=self.gaps, notes=self.notes)


class StoredResume(BaseModel):
    """Location of the raw uploaded file in object storage."""
    path: str
    public_url: str | None = None


class IntakeOutcome(BaseModel):
    """Result of one successful intake invocation."""
    candidate: Candidate
    status: IntakeStatus
    declared_format: str
    text_length: int
    match_score: int | None = None
    event_summary: str
