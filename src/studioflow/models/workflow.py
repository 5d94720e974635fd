"""Workflow session state model."""

import base64
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Step(str, Enum):
    """Creation workflow steps, in forward order."""
    TOPIC = "topic"
    TOPIC_SELECT = "topic_select"
    SCRIPT_LENGTH = "script_length"
    SCRIPT_REVIEW = "script_review"
    METADATA_REVIEW = "metadata_review"
    THUMBNAIL = "thumbnail"


class VoiceProfile(str, Enum):
    """Preset narration voices."""
    MALE = "male"
    FEMALE = "female"

    @property
    def voice_name(self) -> str:
        """Return the prebuilt voice the speech service knows this preset by."""
        return VOICE_PRESETS[self]


# Kore is firmer and lower, Puck is upbeat and higher
VOICE_PRESETS = {
    VoiceProfile.MALE: "Kore",
    VoiceProfile.FEMALE: "Puck",
}

SCRIPT_LENGTH_PRESETS = (5, 10, 15, 20)
CUSTOM_LENGTH = "custom"


class SuggestedTopic(BaseModel):
    """A bare topic suggestion."""

    kind: Literal["suggested"] = "suggested"
    text: str = Field(..., description="Suggested topic")

    @property
    def topic(self) -> str:
        return self.text


class ResearchedTopic(BaseModel):
    """A researched news item backing a topic."""

    kind: Literal["researched"] = "researched"
    title: str = Field(..., description="Exact news headline")
    snippet: str = Field(default="", description="One or two sentence summary")
    source_url: Optional[str] = Field(None, description="Link to the article")

    @property
    def topic(self) -> str:
        return self.title


TopicCandidate = Union[SuggestedTopic, ResearchedTopic]


class VideoMetadata(BaseModel):
    """Publishing metadata for a video."""

    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Video description")
    hashtags: str = Field(default="", description="Space-separated hashtags")


class SpeechAudio(BaseModel):
    """Raw narration audio: 16-bit little-endian mono PCM."""

    pcm: bytes = Field(..., description="PCM samples")
    sample_rate_hz: int = Field(default=24000, description="Sample rate", gt=0)

    @property
    def duration(self) -> float:
        """Return the audio length in seconds."""
        return len(self.pcm) / 2 / self.sample_rate_hz


class Thumbnail(BaseModel):
    """An encoded thumbnail image."""

    image: bytes = Field(..., description="Encoded raster image")
    mime_type: str = Field(default="image/png", description="Image MIME type")

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.image).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class WorkflowState(BaseModel):
    """The single mutable record of one creation session."""

    step: Step = Field(default=Step.TOPIC, description="Current step")
    topic_query: str = Field(default="", description="Seed text for topic research")
    candidates: List[TopicCandidate] = Field(default_factory=list, description="Topics on offer")
    selected_topic: str = Field(default="", description="Chosen topic title")
    script_length: Union[int, str] = Field(default=5, description="Preset minutes or 'custom'")
    custom_script_length: str = Field(default="", description="User-entered custom minutes")
    script: str = Field(default="", description="Narration text")
    audio: Optional[SpeechAudio] = Field(None, description="Synthesized narration")
    metadata: Optional[VideoMetadata] = Field(None, description="Publishing metadata")
    thumbnail: Optional[Thumbnail] = Field(None, description="Generated thumbnail")
    error_message: str = Field(default="", description="Last recoverable failure")
    error: Optional[Exception] = Field(None, description="Last failure object", exclude=True)
    busy_label: Optional[str] = Field(None, description="Progress label while a call is outstanding")
    metadata_requested: bool = Field(default=False, description="Auto metadata already fired this pass")
    sequence: int = Field(default=0, description="Bumped on every step change and reset")

    class Config:
        """Pydantic config."""
        frozen = False
        arbitrary_types_allowed = True

    @property
    def is_busy(self) -> bool:
        return self.busy_label is not None
