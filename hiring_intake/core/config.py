"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app;
components that talk to the language model receive an explicit
``LanguageModelConfig`` built from it instead of reading it themselves.
"""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LanguageModelConfig(BaseModel):
    """Connection and retry settings for one language model call site."""

    base_url: str
    api_key: str = ""
    model: str
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay_seconds: float = Field(default=0.5, ge=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    RESUME_BUCKET: str = "resumes"

    # LLM
    LLM_PROVIDER: str = "openai"
    LLM_BASE_URL: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_API_KEY: str = ""
    LLM_EXTRACTION_TIMEOUT_SECONDS: float = 30.0
    LLM_SCORING_TIMEOUT_SECONDS: float = 30.0
    LLM_MAX_RETRIES: int = 2
    LLM_RETRY_BASE_DELAY_SECONDS: float = 0.5

    # Intake
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    PROFILE_URL_TEMPLATE: str = "/candidates/{candidate_id}"

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def llm_base_url(self) -> str:
        """Chat-completions base URL; ``LLM_BASE_URL`` wins over the provider name."""
        if self.LLM_BASE_URL:
            return self.LLM_BASE_URL.rstrip("/")
        return f"https://api.{self.LLM_PROVIDER}.com/v1"

    def llm_config(
        self, purpose: Literal["extraction", "scoring"]
    ) -> LanguageModelConfig:
        """Build the explicit model config for one call site.

        Extraction and scoring get independent timeouts so a slow scoring
        call cannot hold up profile extraction.
        """
        timeout = (
            self.LLM_EXTRACTION_TIMEOUT_SECONDS
            if purpose == "extraction"
            else self.LLM_SCORING_TIMEOUT_SECONDS
        )
        return LanguageModelConfig(
            base_url=self.llm_base_url,
            api_key=self.LLM_API_KEY,
            model=self.LLM_MODEL,
            timeout_seconds=timeout,
            max_retries=self.LLM_MAX_RETRIES,
            retry_base_delay_seconds=self.LLM_RETRY_BASE_DELAY_SECONDS,
        )


settings = Settings()  # type: ignore[call-arg]
