"""Containers and files for generated media."""

from .audio import AUDIO_FILENAME, pcm_to_wav, save_audio
from .thumbnail import save_thumbnail, thumbnail_filename

__all__ = [
    # Audio
    "AUDIO_FILENAME",
    "pcm_to_wav",
    "save_audio",
    # Thumbnail
    "save_thumbnail",
    "thumbnail_filename",
]
