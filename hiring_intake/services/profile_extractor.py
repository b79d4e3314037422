"""Structured profile extraction from resume text.

Sends the resume to the language model with a fixed JSON schema and coerces
the reply into a ``ResumeProfile``.  Any model failure yields the empty
profile; malformed model output never aborts intake.
"""

from __future__ import annotations

import logging
from typing import Any

from hiring_intake.core.constants import MAX_PROMPT_DOCUMENT_CHARS, PROFILE_SYSTEM_PROMPT
from hiring_intake.core.errors import ModelResponseError, ModelTransportError
from hiring_intake.models.candidate import clean_string_list, flatten_experience
from hiring_intake.models.intake import ResumeProfile
from hiring_intake.services.llm import LanguageModelClient

logger = logging.getLogger(__name__)


def profile_from_payload(payload: dict[str, Any]) -> ResumeProfile:
    """Build a profile from parsed model JSON, dropping ill-typed fields."""
    summary = payload.get("summary")
    raw_text = payload.get("rawText", payload.get("raw_text"))
    return ResumeProfile(
        summary=summary.strip() if isinstance(summary, str) else "",
        skills=clean_string_list(payload.get("skills")),
        experience=flatten_experience(payload.get("experience")),
        raw_text=raw_text if isinstance(raw_text, str) else "",
    )


class ProfileExtractor:
    """Extracts ``{summary, skills, experience, raw_text}`` from a resume."""

    def __init__(self, llm: LanguageModelClient) -> None:
        self._llm = llm

    async def extract_profile(self, resume_text: str) -> ResumeProfile:
        if not resume_text.strip():
            return ResumeProfile.empty()

        try:
            payload = await self._llm.complete_json(
                PROFILE_SYSTEM_PROMPT,
                [resume_text[:MAX_PROMPT_DOCUMENT_CHARS]],
                temperature=0.3,
                max_tokens=2000,
                purpose="profile_extraction",
            )
        except (ModelResponseError, ModelTransportError) as exc:
            logger.warning(
                "profile_extraction_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                },
            )
            return ResumeProfile.empty()

        profile = profile_from_payload(payload)
        logger.info(
            "profile_extraction_complete",
            extra={
                "skills_count": len(profile.skills),
                "experience_count": len(profile.experience),
            },
        )
        return profile
