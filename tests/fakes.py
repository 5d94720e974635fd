"""Test doubles and canned service responses."""

import base64
from typing import Any, List, Optional
from unittest.mock import MagicMock

import requests

from studioflow.models import ResearchedTopic


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def make_session(*outcomes) -> MagicMock:
    """Session whose post() returns (or raises) each outcome in turn"""
    session = MagicMock(spec=requests.Session)
    session.post.side_effect = list(outcomes)
    return session


def text_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def speech_response(pcm: bytes, mime_type: str = "audio/L16;codec=pcm;rate=24000") -> dict:
    data = base64.b64encode(pcm).decode("ascii")
    return {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": mime_type, "data": data}}]}}]}


def image_response(image: bytes) -> dict:
    return {"predictions": [{"bytesBase64Encoded": base64.b64encode(image).decode("ascii"), "mimeType": "image/png"}]}


def researched_topics(count: int = 10) -> List[ResearchedTopic]:
    return [
        ResearchedTopic(
            title=f"Headline {i}",
            snippet=f"Summary of story {i}.",
            source_url=f"https://news.example.com/{i}",
        )
        for i in range(1, count + 1)
    ]
