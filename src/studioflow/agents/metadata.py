"""Publishing metadata agent."""

from dataclasses import dataclass

from ..models import VideoMetadata
from ..services.normalizer import parse_metadata
from .base import BaseAgent

METADATA_SYSTEM_PROMPT = (
    "You are a YouTube SEO expert, specialized in creating viral titles, "
    "descriptions, and hashtags. Respond *only* with a valid JSON object with keys: "
    "'title' (string), 'description' (string), 'hashtags' (string). The 'hashtags' "
    "value should be a single string of 10+ space-separated hashtags (e.g., "
    "'#topic #viral #youtube')."
)

SCRIPT_EXCERPT_LIMIT = 800


@dataclass
class MetadataInput:
    """Input data for the metadata agent."""

    topic: str
    script: str


class MetadataAgent(BaseAgent[MetadataInput, VideoMetadata]):
    """Generates a title, description and hashtags for a finished script."""

    grounding = True

    @property
    def name(self) -> str:
        return "MetadataAgent"

    @property
    def system_prompt(self) -> str:
        return METADATA_SYSTEM_PROMPT

    def run(self, input_data: MetadataInput) -> VideoMetadata:
        excerpt = input_data.script[:SCRIPT_EXCERPT_LIMIT]
        prompt = (
            "Generate a viral YouTube title, a compelling description, and 10+ "
            f'high-traffic hashtags for a video about "{input_data.topic}". '
            f'Use this script summary: "{excerpt}..."'
        )
        metadata = parse_metadata(self._create_json(prompt))
        self._logger.info(f"Generated metadata: '{metadata.title}'")
        return metadata
