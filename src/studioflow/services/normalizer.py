"""Extraction and validation of model responses.

Model output arrives loosely structured: free text, JSON wrapped in markdown
fences, or base64 media embedded in JSON. The helpers here turn it into typed
values or raise ``MalformedResponse``.
"""

import base64
import binascii
import json
import logging
import re
from typing import Any, List

from ..errors import MalformedResponse
from ..models import ResearchedTopic, SpeechAudio, SuggestedTopic, Thumbnail, TopicCandidate, VideoMetadata

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 24000
MAX_TOPICS = 10

_OPENING_FENCE = re.compile(r"^```[\w+-]*")
_SAMPLE_RATE = re.compile(r"rate=(\d+)")


def _first_part(response: Any) -> dict:
    try:
        part = response["candidates"][0]["content"]["parts"][0]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponse("Invalid API response structure: no content part") from None
    if not isinstance(part, dict):
        raise MalformedResponse("Invalid API response structure: content part is not an object")
    return part


def extract_text(response: Any) -> str:
    """Return the first candidate's first text part."""
    text = _first_part(response).get("text")
    if not isinstance(text, str) or not text:
        raise MalformedResponse("Invalid API response structure: no text in response")
    return text


def strip_fences(text: str) -> str:
    """Remove a surrounding markdown code fence and trim whitespace.

    The opening fence may carry a language tag (```` ```json ````). Applying
    this twice gives the same result as applying it once.
    """
    cleaned = text.strip()
    while True:
        previous = cleaned
        opening = _OPENING_FENCE.match(cleaned)
        if opening:
            cleaned = cleaned[opening.end():]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        cleaned = cleaned.strip()
        if cleaned == previous:
            return cleaned


def decode_json(text: str) -> Any:
    """Strip fences from ``text`` and parse it as JSON."""
    cleaned = strip_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON: {e}")
        logger.debug(f"Raw response: {text}")
        raise MalformedResponse() from e


def _decode_base64(data: Any, what: str) -> bytes:
    if not isinstance(data, str) or not data:
        raise MalformedResponse(f"Invalid API response structure: no {what} data")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedResponse(f"The {what} payload is not valid base64") from e


def extract_image(response: Any) -> Thumbnail:
    """Return the first prediction of an image response."""
    try:
        prediction = response["predictions"][0]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponse("Invalid API response structure: no predictions") from None
    if not isinstance(prediction, dict):
        raise MalformedResponse("Invalid API response structure: prediction is not an object")

    image = _decode_base64(prediction.get("bytesBase64Encoded"), "image")
    mime_type = prediction.get("mimeType") or "image/png"
    return Thumbnail(image=image, mime_type=mime_type)


def parse_sample_rate(mime_type: str) -> int:
    """Return the ``rate=`` parameter of an audio MIME type, or 24000."""
    match = _SAMPLE_RATE.search(mime_type)
    return int(match.group(1)) if match else DEFAULT_SAMPLE_RATE


def extract_speech(response: Any) -> SpeechAudio:
    """Return the PCM audio and sample rate from a speech response."""
    inline = _first_part(response).get("inlineData")
    if not isinstance(inline, dict):
        raise MalformedResponse("Invalid API response structure: no inline audio")

    mime_type = inline.get("mimeType")
    if not isinstance(mime_type, str) or not mime_type.startswith("audio/"):
        raise MalformedResponse(f"Expected an audio MIME type, got {mime_type!r}")

    pcm = _decode_base64(inline.get("data"), "audio")
    sample_rate = parse_sample_rate(mime_type)
    if sample_rate <= 0:
        raise MalformedResponse(f"Invalid sample rate in MIME type {mime_type!r}")
    return SpeechAudio(pcm=pcm, sample_rate_hz=sample_rate)


def parse_topics(payload: Any, limit: int = MAX_TOPICS) -> List[TopicCandidate]:
    """Validate a decoded topic list.

    Objects with a title become ``ResearchedTopic``; plain strings become
    ``SuggestedTopic``. Entries that are neither are dropped.
    """
    if isinstance(payload, dict):
        # Some replies wrap the list, e.g. {"topics": [...]}
        lists = [value for value in payload.values() if isinstance(value, list)]
        payload = lists[0] if len(lists) == 1 else payload
    if not isinstance(payload, list):
        raise MalformedResponse("Expected a JSON array of topics")

    topics: List[TopicCandidate] = []
    for item in payload:
        if isinstance(item, str) and item.strip():
            topics.append(SuggestedTopic(text=item.strip()))
        elif isinstance(item, dict) and isinstance(item.get("title"), str) and item["title"].strip():
            topics.append(
                ResearchedTopic(
                    title=item["title"].strip(),
                    snippet=str(item.get("snippet") or ""),
                    source_url=item.get("source_url") or item.get("sourceUrl") or None,
                )
            )
        else:
            logger.debug(f"Skipping unusable topic entry: {item!r}")

    if not topics:
        raise MalformedResponse("The model returned no usable topics")
    return topics[:limit]


def parse_metadata(payload: Any) -> VideoMetadata:
    """Validate a decoded metadata object; missing keys become empty strings."""
    if not isinstance(payload, dict):
        raise MalformedResponse("Expected a JSON object with title, description and hashtags")

    hashtags = payload.get("hashtags") or ""
    if isinstance(hashtags, list):
        hashtags = " ".join(str(tag) for tag in hashtags)

    return VideoMetadata(
        title=str(payload.get("title") or ""),
        description=str(payload.get("description") or ""),
        hashtags=str(hashtags),
    )
