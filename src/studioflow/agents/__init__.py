"""Prompting agents for the text generation steps."""

from .base import BaseAgent
from .metadata import MetadataAgent, MetadataInput
from .script import CHANNEL_INTRO, ScriptAgent, ScriptInput
from .topics import TopicResearchAgent, TopicSuggestionAgent

__all__ = [
    "BaseAgent",
    "CHANNEL_INTRO",
    "MetadataAgent",
    "MetadataInput",
    "ScriptAgent",
    "ScriptInput",
    "TopicResearchAgent",
    "TopicSuggestionAgent",
]
