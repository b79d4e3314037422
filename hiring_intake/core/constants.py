"""Application constants.

Contains document format tables, model prompts, score bounds and audit
event wording.
"""

# ---------------------------------------------------------------------------
# Document formats
# ---------------------------------------------------------------------------
SUPPORTED_FORMATS: frozenset[str] = frozenset({"pdf", "docx", "txt", "md"})

# MIME types mapped to the format name used by the extractor; only consulted
# when the filename carries no usable extension.
CONTENT_TYPE_FORMATS: dict[str, str] = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "text/plain": "txt",
    "text/markdown": "md",
    "application/zip": "zip",
    "application/msword": "doc",
    "application/rtf": "rtf",
    "text/rtf": "rtf",
}

# ---------------------------------------------------------------------------
# Fit score
# ---------------------------------------------------------------------------
MATCH_SCORE_MIN: int = 0
MATCH_SCORE_MAX: int = 100

# Resume/job text sent to the model is truncated to keep prompts bounded
MAX_PROMPT_DOCUMENT_CHARS: int = 12000

# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------
PROFILE_SYSTEM_PROMPT = (
    "You extract structured data from resumes. "
    "Respond ONLY with a JSON object with exactly these keys: "
    '{"summary": "2-3 sentence professional summary", '
    '"skills": ["skill", ...], '
    '"experience": ["Role at Company (dates): one-line description", ...], '
    '"rawText": "the resume text, cleaned of layout noise"}. '
    "No markdown, no commentary."
)

FIT_SYSTEM_PROMPT = (
    "You are a recruiting assistant that compares a candidate resume with a "
    "job description. Estimate how well the candidate fits the job. "
    "Respond ONLY with a JSON object: "
    '{"score": <number 0-100>, "strengths": ["..."], "gaps": ["..."], '
    '"notes": "one or two sentences"}. '
    "No markdown, no commentary."
)

# ---------------------------------------------------------------------------
# Audit events
# ---------------------------------------------------------------------------
EVENT_SOURCE_SYSTEM: str = "system"
GENERIC_RESUME_EVENT_SUMMARY: str = "Resume uploaded and parsed"
SCORED_RESUME_EVENT_SUMMARY: str = "Resume uploaded and parsed; job fit score {score}/100"
