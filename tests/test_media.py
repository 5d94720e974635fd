"""
Tests for media output helpers
"""

import io
import wave

import pytest

from studioflow.media import AUDIO_FILENAME, pcm_to_wav, save_audio, save_thumbnail, thumbnail_filename
from studioflow.models import SpeechAudio, Thumbnail


def read_wav(data: bytes):
    with wave.open(io.BytesIO(data), "rb") as wav:
        return wav.getnchannels(), wav.getsampwidth(), wav.getframerate(), wav.readframes(wav.getnframes())


def test_pcm_to_wav_header():
    pcm = b"\x01\x00\xff\x7f" * 50

    data = pcm_to_wav(pcm, 24000)

    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    assert read_wav(data) == (1, 2, 24000, pcm)


def test_pcm_to_wav_drops_odd_byte():
    _, _, _, frames = read_wav(pcm_to_wav(b"\x01\x00\x02", 16000))
    assert frames == b"\x01\x00"


@pytest.mark.parametrize("rate", [0, -24000])
def test_pcm_to_wav_rejects_bad_rate(rate):
    with pytest.raises(ValueError):
        pcm_to_wav(b"\x00\x00", rate)


def test_speech_duration():
    audio = SpeechAudio(pcm=b"\x00\x00" * 24000, sample_rate_hz=24000)
    assert audio.duration == pytest.approx(1.0)


def test_save_audio(tmp_path):
    audio = SpeechAudio(pcm=b"\x10\x00" * 100, sample_rate_hz=22050)

    path = save_audio(audio, tmp_path / "out")

    assert path == tmp_path / "out" / AUDIO_FILENAME
    assert read_wav(path.read_bytes())[2] == 22050


@pytest.mark.parametrize("mime_type,expected", [
    ("image/png", "generated_thumbnail.png"),
    ("image/jpeg", "generated_thumbnail.jpg"),
])
def test_thumbnail_filename(mime_type, expected):
    assert thumbnail_filename(Thumbnail(image=b"x", mime_type=mime_type)) == expected


def test_save_thumbnail(tmp_path):
    thumbnail = Thumbnail(image=b"\x89PNG bytes")

    path = save_thumbnail(thumbnail, tmp_path)

    assert path.name == "generated_thumbnail.png"
    assert path.read_bytes() == b"\x89PNG bytes"


def test_thumbnail_data_url():
    assert Thumbnail(image=b"abc").data_url == "data:image/png;base64,YWJj"
