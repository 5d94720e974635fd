"""Topic discovery agents."""

from typing import List

from ..errors import PreconditionViolation
from ..models import TopicCandidate
from ..services.normalizer import MAX_TOPICS, parse_topics
from .base import BaseAgent

RESEARCH_SYSTEM_PROMPT = (
    "You are a real-time news aggregation bot. The user has provided a topic. "
    "Perform a deep Google Search of official portals and news sites to find the "
    "TOP 10 *most recent* and *verifiable* breaking news articles. Respond with ONLY "
    "a valid JSON array of objects. Each object must have three keys: 'title' (the "
    "exact news headline), 'snippet' (a short, 1-2 sentence summary), and "
    "'source_url' (the direct URL to the article for proof). Example: "
    '[{"title": "...", "snippet": "...", "source_url": "..."}]'
)

SUGGEST_SYSTEM_PROMPT = (
    "You are a YouTube viral topic expert. Suggest the top 10 most viral-potential "
    "YouTube video topics *right now*. Respond with ONLY a valid JSON array of "
    "strings. Do not include any other text."
)


class TopicResearchAgent(BaseAgent[str, List[TopicCandidate]]):
    """Finds recent, sourced news items for a user query."""

    grounding = True

    @property
    def name(self) -> str:
        return "TopicResearchAgent"

    @property
    def system_prompt(self) -> str:
        return RESEARCH_SYSTEM_PROMPT

    def run(self, input_data: str) -> List[TopicCandidate]:
        """Research ``input_data`` and return up to ten news items.

        Raises:
            PreconditionViolation: If the query is blank.
            GenerationError: If the call fails or the reply is unusable.
        """
        query = (input_data or "").strip()
        if not query:
            raise PreconditionViolation("Please enter a topic to research.")

        self._logger.info(f"Researching topics for: '{query}'")
        prompt = f'Research "{query}" and find {MAX_TOPICS} real-time news headlines with source URLs.'
        topics = parse_topics(self._create_json(prompt))
        self._logger.info(f"Found {len(topics)} topics")
        return topics


class TopicSuggestionAgent(BaseAgent[None, List[TopicCandidate]]):
    """Suggests currently trending video topics."""

    grounding = True

    @property
    def name(self) -> str:
        return "TopicSuggestionAgent"

    @property
    def system_prompt(self) -> str:
        return SUGGEST_SYSTEM_PROMPT

    def run(self, input_data: None = None) -> List[TopicCandidate]:
        topics = parse_topics(self._create_json(f"Suggest top {MAX_TOPICS} viral topics."))
        self._logger.info(f"Suggested {len(topics)} topics")
        return topics
