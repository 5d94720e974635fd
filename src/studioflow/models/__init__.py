"""Data models for the creation workflow."""

from .workflow import (
    CUSTOM_LENGTH,
    SCRIPT_LENGTH_PRESETS,
    ResearchedTopic,
    SpeechAudio,
    Step,
    SuggestedTopic,
    Thumbnail,
    TopicCandidate,
    VideoMetadata,
    VoiceProfile,
    WorkflowState,
)
from .project import Project

__all__ = [
    "CUSTOM_LENGTH",
    "SCRIPT_LENGTH_PRESETS",
    "ResearchedTopic",
    "SpeechAudio",
    "Step",
    "SuggestedTopic",
    "Thumbnail",
    "TopicCandidate",
    "VideoMetadata",
    "VoiceProfile",
    "WorkflowState",
    "Project",
]
