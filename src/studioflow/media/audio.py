"""Audio container handling for synthesized narration."""

import io
import logging
import wave
from pathlib import Path

from ..models import SpeechAudio

logger = logging.getLogger(__name__)

AUDIO_FILENAME = "generated_audio.wav"
CHANNELS = 1
SAMPLE_WIDTH = 2  # bytes, 16-bit


def pcm_to_wav(pcm: bytes, sample_rate_hz: int) -> bytes:
    """Wrap raw PCM in a WAV container.

    Args:
        pcm: 16-bit little-endian mono samples.
        sample_rate_hz: Sample rate of the samples.

    Returns:
        The complete WAV file contents.

    Raises:
        ValueError: If the sample rate is not positive.
    """
    if sample_rate_hz <= 0:
        raise ValueError(f"Invalid sample rate: {sample_rate_hz}")

    # Drop a trailing odd byte; it cannot form a sample
    if len(pcm) % SAMPLE_WIDTH:
        pcm = pcm[:-1]

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(CHANNELS)
        wav.setsampwidth(SAMPLE_WIDTH)
        wav.setframerate(sample_rate_hz)
        wav.writeframes(pcm)
    return buffer.getvalue()


def save_audio(audio: SpeechAudio, directory: Path, filename: str = AUDIO_FILENAME) -> Path:
    """Write narration as a WAV file.

    Args:
        audio: Synthesized narration.
        directory: Target directory, created if missing.
        filename: Name of the file to write.

    Returns:
        Path of the written file.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_bytes(pcm_to_wav(audio.pcm, audio.sample_rate_hz))
    logger.info(f"Saved audio to {path}")
    return path
