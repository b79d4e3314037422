"""Pydantic model for the ``jobs`` table (read-only here)."""

from pydantic import BaseModel, ConfigDict


class Job(BaseModel):
    """Job record as read by the fit scorer."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    org_id: str | None = None
    title: str | None = None
    description: str | None = None

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())
