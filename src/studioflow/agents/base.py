"""Base agent abstraction."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from ..services.gemini import GeminiClient
from ..services.normalizer import decode_json, extract_text

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for text generation agents.

    Provides shared functionality for agents that prompt Gemini.
    Subclasses must implement the `run` method and define their prompts.
    """

    #: Whether requests are grounded with live web search
    grounding: bool = False

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        """Initialize the agent.

        Args:
            client: GeminiClient instance. Created if not provided.
        """
        self._client = client or GeminiClient()
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the agent's name."""
        ...

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """Return the system prompt for this agent."""
        ...

    @abstractmethod
    def run(self, input_data: InputT) -> OutputT:
        """Execute the agent's main task.

        Args:
            input_data: Input data for the agent.

        Returns:
            Structured output from the agent.
        """
        ...

    def _create_message(self, prompt: str) -> str:
        """Send a prompt with the agent's system prompt and return the reply text.

        Raises:
            GenerationError: If the call fails or the reply has no text.
        """
        self._logger.debug(f"Creating message with prompt length: {len(prompt)}")

        response = self._client.generate_content(
            prompt=prompt,
            system=self.system_prompt,
            grounding=self.grounding,
        )
        text = extract_text(response)

        self._logger.debug(f"Received response of length: {len(text)}")
        return text

    def _create_json(self, prompt: str) -> Any:
        """Like `_create_message`, decoding the reply as (possibly fenced) JSON."""
        return decode_json(self._create_message(prompt))
