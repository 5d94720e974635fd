"""Narration script agent."""

from dataclasses import dataclass

from ..errors import PreconditionViolation
from .base import BaseAgent

SCRIPT_SYSTEM_PROMPT = (
    "You are a professional YouTube scriptwriter. You write clean, engaging, and "
    "concise scripts. The output must be *only* the script text itself, with no "
    "timings, 'intro:', 'outro:', speaker names, or any other metadata. Just the "
    "spoken words for the voiceover."
)

# Prepended to every generated script
CHANNEL_INTRO = (
    "Welcome Back to Edu Star Youtube channel and If you are first time to our "
    "channel Dont forgot to subscribe to our chanel done misss updates and lets "
    "start todays video...now today we are talking aboutt... "
)


@dataclass
class ScriptInput:
    """Input data for the script agent."""

    topic: str
    length_minutes: int


class ScriptAgent(BaseAgent[ScriptInput, str]):
    """Writes the narration for a topic.

    Grounding stays off so the model focuses on the writing rather than on
    live facts.
    """

    grounding = False

    @property
    def name(self) -> str:
        return "ScriptAgent"

    @property
    def system_prompt(self) -> str:
        return SCRIPT_SYSTEM_PROMPT

    def run(self, input_data: ScriptInput) -> str:
        """Generate the script body and prepend the channel intro."""
        if not input_data.topic.strip():
            raise PreconditionViolation("Please select a topic first.")
        if input_data.length_minutes <= 0:
            raise PreconditionViolation("Script length must be a positive number of minutes.")

        self._logger.info(
            f"Writing a {input_data.length_minutes}-minute script about '{input_data.topic}'"
        )
        prompt = (
            f"Write a {input_data.length_minutes}-minute YouTube video script about "
            f'"{input_data.topic}". Start the script *immediately* with the main '
            "content. Do not add any intro, greeting, or channel plugs. Just the main "
            "script body."
        )
        body = self._create_message(prompt)
        return CHANNEL_INTRO + body
