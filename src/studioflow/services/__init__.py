"""External service integrations."""

from .http import ResilientClient, is_retryable_status
from .gemini import GeminiClient

__all__ = [
    "ResilientClient",
    "is_retryable_status",
    "GeminiClient",
]
