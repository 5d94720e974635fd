"""Typed generation operations used by the workflow."""

import logging
from typing import List, Optional

from .agents import (
    MetadataAgent,
    MetadataInput,
    ScriptAgent,
    ScriptInput,
    TopicResearchAgent,
    TopicSuggestionAgent,
)
from .errors import PreconditionViolation
from .models import SpeechAudio, Thumbnail, TopicCandidate, VideoMetadata, VoiceProfile
from .services.gemini import GeminiClient
from .services.normalizer import extract_image, extract_speech

logger = logging.getLogger(__name__)

THUMBNAIL_WATERMARK = "EDUSTAR"
THUMBNAIL_ASPECT_RATIO = "16:9"


def thumbnail_prompt(topic: str) -> str:
    """Return the fixed thumbnail prompt for ``topic``."""
    return (
        f'Create a realistic, 4K HD, professional YouTube thumbnail for the selected topic ("{topic}").\n'
        "The final dimension must be exactly 1280x720 pixels (16:9 aspect ratio).\n"
        f'It MUST include the text "{THUMBNAIL_WATERMARK}" as a small, clean logo or watermark.\n'
        "It must feature compelling, high-quality, realistic, viral-themed imagery related to the topic.\n"
        f'It is forbidden to add any other text besides "{THUMBNAIL_WATERMARK}".'
    )


class GenerationGateway:
    """The six remote operations of the creation workflow.

    Every operation either returns a typed value or raises one of
    ``TransientServiceFailure``, ``RejectedRequest`` or ``MalformedResponse``
    (``PreconditionViolation`` for caller mistakes caught before the call).
    """

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client or GeminiClient()
        self._research = TopicResearchAgent(self._client)
        self._suggest = TopicSuggestionAgent(self._client)
        self._script = ScriptAgent(self._client)
        self._metadata = MetadataAgent(self._client)

    def research_topics(self, query: str) -> List[TopicCandidate]:
        return self._research.run(query)

    def suggest_topics(self) -> List[TopicCandidate]:
        return self._suggest.run()

    def generate_script(self, topic: str, length_minutes: int) -> str:
        return self._script.run(ScriptInput(topic=topic, length_minutes=length_minutes))

    def synthesize_voice(self, script: str, profile: VoiceProfile) -> SpeechAudio:
        """Synthesize ``script`` with a preset voice.

        Returns raw 16-bit PCM and its sample rate; wrapping it in a playable
        container is left to `studioflow.media`.
        """
        if not script.strip():
            raise PreconditionViolation("There is no script to read.")

        profile = VoiceProfile(profile)
        logger.info(f"Synthesizing {len(script)} characters with voice {profile.voice_name}")
        audio = extract_speech(self._client.synthesize_speech(script, profile.voice_name))
        logger.info(f"Received {audio.duration:.1f}s of audio at {audio.sample_rate_hz} Hz")
        return audio

    def generate_metadata(self, topic: str, script: str) -> VideoMetadata:
        return self._metadata.run(MetadataInput(topic=topic, script=script))

    def generate_thumbnail(self, topic: str) -> Thumbnail:
        """Generate a 16:9 thumbnail for ``topic``.

        Size and watermark are requested through the prompt only; the returned
        image is not checked against them.
        """
        if not topic.strip():
            raise PreconditionViolation("Please select a topic first.")

        logger.info(f"Generating thumbnail for '{topic}'")
        response = self._client.predict_image(
            thumbnail_prompt(topic),
            aspect_ratio=THUMBNAIL_ASPECT_RATIO,
        )
        thumbnail = extract_image(response)
        logger.info(f"Received {len(thumbnail.image)} byte thumbnail")
        return thumbnail
