"""Google Generative Language API endpoints (Gemini text, Imagen, Gemini TTS)."""

import logging
from typing import Any, Optional

from ..config import config
from .http import ResilientClient

logger = logging.getLogger(__name__)


class GeminiClient:
    """Builds requests for the text, image and speech endpoints.

    Responses are returned as decoded JSON; turning them into domain values is
    the normalizer's job.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        http: Optional[ResilientClient] = None,
        base_url: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        tts_model: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Defaults to GEMINI_API_KEY env var.
            http: Retrying HTTP client. Created if not provided.
            base_url: API root. Defaults to config.api_base_url.
            text_model: Model for text generation.
            image_model: Model for image generation.
            tts_model: Model for speech synthesis.
        """
        self._api_key = api_key or config.gemini_api_key
        if not self._api_key:
            raise ValueError(
                "Gemini API key not provided. Set GEMINI_API_KEY env var."
            )

        self._http = http or ResilientClient()
        self._base_url = (base_url or config.api_base_url).rstrip("/")
        self._text_model = text_model or config.text_model
        self._image_model = image_model or config.image_model
        self._tts_model = tts_model or config.tts_model

    @property
    def text_model(self) -> str:
        return self._text_model

    def _url(self, model: str, method: str) -> str:
        return f"{self._base_url}/models/{model}:{method}"

    def _post(self, url: str, body: dict) -> Any:
        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type": "application/json",
        }
        return self._http.send(url, body, headers=headers)

    def generate_content(
        self,
        prompt: str,
        system: Optional[str] = None,
        grounding: bool = False,
    ) -> Any:
        """Call the text generation endpoint.

        Args:
            prompt: The user prompt.
            system: Optional system instruction.
            grounding: Enable Google Search grounding.
        """
        body: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}
        if grounding:
            body["tools"] = [{"google_search": {}}]

        logger.debug(
            f"Text generation with {self._text_model} "
            f"(grounding={'on' if grounding else 'off'}, prompt length {len(prompt)})"
        )
        return self._post(self._url(self._text_model, "generateContent"), body)

    def predict_image(self, prompt: str, aspect_ratio: str = "16:9") -> Any:
        """Call the image generation endpoint for a single sample."""
        body = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "sampleCount": 1,
                "aspectRatio": aspect_ratio,
            },
        }
        logger.debug(f"Image generation with {self._image_model}: {prompt[:50]}...")
        return self._post(self._url(self._image_model, "predict"), body)

    def synthesize_speech(self, text: str, voice_name: str) -> Any:
        """Call the speech endpoint with a prebuilt voice."""
        body = {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {
                        "prebuiltVoiceConfig": {"voiceName": voice_name}
                    }
                },
            },
        }
        logger.debug(f"Speech synthesis with {self._tts_model} voice {voice_name}")
        return self._post(self._url(self._tts_model, "generateContent"), body)
