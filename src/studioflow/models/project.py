"""Saved project model."""

from datetime import datetime
from pydantic import BaseModel, Field


class Project(BaseModel):
    """A finished project as kept in the project store.

    Only the text fields are stored; audio and thumbnails stay in the session.
    """

    id: str = Field(..., description="Unique project identifier")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    topic: str = Field(..., description="Selected topic")
    title: str = Field(default="", description="Generated video title")
    description: str = Field(default="", description="Generated description")
    hashtags: str = Field(default="", description="Generated hashtags")
    script: str = Field(default="", description="Final narration script")

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def display_title(self) -> str:
        return self.title or "Untitled Project"
