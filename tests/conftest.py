from unittest.mock import MagicMock

import pytest

from studioflow.gateway import GenerationGateway
from studioflow.models import SpeechAudio, SuggestedTopic, Thumbnail, VideoMetadata
from studioflow.store import InMemoryProjectStore

from fakes import researched_topics


@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Keep tests independent of the developer's environment"""
    monkeypatch.setenv("GEMINI_API_KEY", "mock-key")


@pytest.fixture
def gateway():
    """Gateway double with successful defaults for every operation"""
    fake = MagicMock(spec=GenerationGateway)
    fake.research_topics.return_value = researched_topics()
    fake.suggest_topics.return_value = [SuggestedTopic(text=f"Viral idea {i}") for i in range(1, 11)]
    fake.generate_script.return_value = "Welcome! Today we explore..."
    fake.synthesize_voice.return_value = SpeechAudio(pcm=b"\x00\x01" * 240, sample_rate_hz=24000)
    fake.generate_metadata.return_value = VideoMetadata(
        title="Big News",
        description="Everything you need to know.",
        hashtags="#a #b #c #d #e #f #g #h #i #j",
    )
    fake.generate_thumbnail.return_value = Thumbnail(image=b"\x89PNG fake")
    return fake


@pytest.fixture
def store():
    return InMemoryProjectStore()
