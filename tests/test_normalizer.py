"""
Unit tests for response normalization
Tests text/media extraction, fence stripping and JSON validation
"""

import pytest

from studioflow.errors import MalformedResponse
from studioflow.models import ResearchedTopic, SuggestedTopic
from studioflow.services.normalizer import (
    decode_json,
    extract_image,
    extract_speech,
    extract_text,
    parse_metadata,
    parse_sample_rate,
    parse_topics,
    strip_fences,
)

from fakes import image_response, speech_response, text_response


# ============================================================================
# Text
# ============================================================================

def test_extract_text():
    assert extract_text(text_response("Hello there")) == "Hello there"


@pytest.mark.parametrize("response", [
    {},
    {"candidates": []},
    {"candidates": [{"content": {"parts": []}}]},
    {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
    {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
    None,
    "not a dict",
])
def test_extract_text_rejects_missing_text(response):
    with pytest.raises(MalformedResponse):
        extract_text(response)


# ============================================================================
# Fences
# ============================================================================

@pytest.mark.parametrize("raw,expected", [
    ('```json\n[1, 2]\n```', "[1, 2]"),
    ('```\n{"a": 1}\n```', '{"a": 1}'),
    ('  ```JSON\n{"a": 1}```  ', '{"a": 1}'),
    ('{"a": 1}', '{"a": 1}'),
    ("plain text\n", "plain text"),
    ("```", ""),
    ("", ""),
])
def test_strip_fences(raw, expected):
    assert strip_fences(raw) == expected


@pytest.mark.parametrize("raw", [
    '```json\n[1]\n```',
    '```json\n```json\n[1]\n```\n```',
    '```python\nprint(1)\n```',
    "``` ```",
    "````",
    "  text  ",
    "```json",
    "inner ``` fence",
])
def test_strip_fences_is_idempotent(raw):
    once = strip_fences(raw)
    assert strip_fences(once) == once


def test_decode_json_with_fence():
    assert decode_json('```json\n{"title": "x"}\n```') == {"title": "x"}


def test_decode_json_invalid_is_malformed():
    with pytest.raises(MalformedResponse) as excinfo:
        decode_json("Sure! Here are some topics: 1. Foo")
    assert "unexpected format" in excinfo.value.user_message


# ============================================================================
# Media
# ============================================================================

def test_extract_image():
    thumbnail = extract_image(image_response(b"\x89PNG data"))
    assert thumbnail.image == b"\x89PNG data"
    assert thumbnail.mime_type == "image/png"


@pytest.mark.parametrize("response", [
    {},
    {"predictions": []},
    {"predictions": [{}]},
    {"predictions": [{"bytesBase64Encoded": "%%% not base64 %%%"}]},
])
def test_extract_image_rejects_missing_payload(response):
    with pytest.raises(MalformedResponse):
        extract_image(response)


def test_extract_speech():
    audio = extract_speech(speech_response(b"\x01\x00" * 10, "audio/L16;codec=pcm;rate=16000"))
    assert audio.pcm == b"\x01\x00" * 10
    assert audio.sample_rate_hz == 16000


def test_extract_speech_defaults_sample_rate():
    audio = extract_speech(speech_response(b"\x01\x00", "audio/L16"))
    assert audio.sample_rate_hz == 24000


@pytest.mark.parametrize("mime_type", ["video/mp4", "text/plain", "application/octet-stream", ""])
def test_extract_speech_rejects_non_audio_mime(mime_type):
    with pytest.raises(MalformedResponse):
        extract_speech(speech_response(b"\x01\x00", mime_type))


def test_extract_speech_rejects_missing_data():
    response = {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "audio/L16"}}]}}]}
    with pytest.raises(MalformedResponse):
        extract_speech(response)


@pytest.mark.parametrize("mime_type,expected", [
    ("audio/L16;codec=pcm;rate=24000", 24000),
    ("audio/L16;rate=44100", 44100),
    ("audio/wav", 24000),
])
def test_parse_sample_rate(mime_type, expected):
    assert parse_sample_rate(mime_type) == expected


# ============================================================================
# Structured payloads
# ============================================================================

def test_parse_topics_researched_items():
    payload = [
        {"title": "Result announced", "snippet": "Counting ends.", "source_url": "https://x.test/1"},
        {"title": "Turnout record", "snippet": "Highest ever."},
    ]
    topics = parse_topics(payload)

    assert topics == [
        ResearchedTopic(title="Result announced", snippet="Counting ends.", source_url="https://x.test/1"),
        ResearchedTopic(title="Turnout record", snippet="Highest ever.", source_url=None),
    ]


def test_parse_topics_strings_and_limit():
    topics = parse_topics([f"Idea {i}" for i in range(15)])
    assert len(topics) == 10
    assert all(isinstance(t, SuggestedTopic) for t in topics)
    assert topics[0].topic == "Idea 0"


def test_parse_topics_unwraps_single_list():
    topics = parse_topics({"topics": ["One", "Two"]})
    assert [t.topic for t in topics] == ["One", "Two"]


def test_parse_topics_skips_unusable_entries():
    topics = parse_topics(["", {"snippet": "no title"}, 42, "Good one"])
    assert [t.topic for t in topics] == ["Good one"]


@pytest.mark.parametrize("payload", [[], {"a": 1}, "text", [None, ""]])
def test_parse_topics_rejects_empty_or_invalid(payload):
    with pytest.raises(MalformedResponse):
        parse_topics(payload)


def test_parse_metadata_defaults_missing_keys():
    metadata = parse_metadata({"title": "Only a title"})
    assert metadata.title == "Only a title"
    assert metadata.description == ""
    assert metadata.hashtags == ""


def test_parse_metadata_joins_hashtag_list():
    metadata = parse_metadata({"title": "t", "description": "d", "hashtags": ["#a", "#b"]})
    assert metadata.hashtags == "#a #b"


def test_parse_metadata_rejects_array():
    with pytest.raises(MalformedResponse):
        parse_metadata(["title"])
