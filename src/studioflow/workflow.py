"""Workflow controller: the state machine behind the creation flow.

The controller owns a single ``WorkflowState``. Every remote action goes
through `_run`, which marks the session busy, tags the request with the step
and sequence number current at issue time, and on settlement either applies
the result, records a recoverable error, or drops the result as stale if the
user has moved on in the meantime.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .errors import (
    GenerationError,
    InvalidTransition,
    MalformedResponse,
    PreconditionViolation,
    StoreError,
    WorkflowBusy,
)
from .gateway import GenerationGateway
from .models import (
    CUSTOM_LENGTH,
    SCRIPT_LENGTH_PRESETS,
    Project,
    Step,
    TopicCandidate,
    VoiceProfile,
    WorkflowState,
)
from .store import ProjectStore, sort_newest_first

logger = logging.getLogger(__name__)

Ticket = Tuple[Step, int]

BACK_EDGES: Dict[Step, Step] = {
    Step.TOPIC_SELECT: Step.TOPIC,
    Step.SCRIPT_LENGTH: Step.TOPIC_SELECT,
    Step.SCRIPT_REVIEW: Step.SCRIPT_LENGTH,
    Step.METADATA_REVIEW: Step.SCRIPT_REVIEW,
    Step.THUMBNAIL: Step.METADATA_REVIEW,
}

# Progress labels shown while a call is outstanding
LABEL_RESEARCH = "Deep researching real-time news..."
LABEL_SUGGEST = "Generating viral topics..."
LABEL_SCRIPT = "Generating your script..."
LABEL_VOICE = "Generating AI voice..."
LABEL_METADATA = "Generating viral metadata..."
LABEL_THUMBNAIL = "Generating 1280x720 thumbnail..."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowController:
    """Drives one creation session from topic to saved project.

    Actions return ``True`` when they succeed and ``False`` when they fail
    with a recoverable error, which is then available as
    ``state.error_message``. Calling an action the current step does not
    offer raises ``InvalidTransition``; starting a remote action while one
    is outstanding raises ``WorkflowBusy``.
    """

    def __init__(
        self,
        gateway: GenerationGateway,
        store: ProjectStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._clock = clock or _utcnow
        self.state = WorkflowState()
        self._entry_hooks: Dict[Step, Callable[[], Any]] = {
            Step.METADATA_REVIEW: self._enter_metadata_review,
        }

    # ------------------------------------------------------------------
    # Introspection

    @property
    def step(self) -> Step:
        return self.state.step

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    @property
    def error_message(self) -> str:
        return self.state.error_message

    def projects(self) -> List[Project]:
        """Return saved projects, newest first."""
        return sort_newest_first(self._store.list_all())

    def resolved_length(self) -> int:
        """Return the script length in minutes.

        Raises:
            PreconditionViolation: If the custom length is missing or invalid.
        """
        if self.state.script_length != CUSTOM_LENGTH:
            return int(self.state.script_length)

        raw = self.state.custom_script_length.strip()
        if not raw:
            raise PreconditionViolation("Please enter a custom script length in minutes.")
        try:
            minutes = int(raw)
        except ValueError:
            raise PreconditionViolation(f"'{raw}' is not a whole number of minutes.") from None
        if minutes <= 0:
            raise PreconditionViolation("Script length must be a positive number of minutes.")
        return minutes

    # ------------------------------------------------------------------
    # Machinery

    def _require(self, action: str, *steps: Step) -> None:
        if self.state.step not in steps:
            raise InvalidTransition(f"'{action}' is not available in step '{self.state.step.value}'")

    def _require_idle(self, action: str) -> None:
        if self.state.is_busy:
            raise WorkflowBusy(f"Cannot {action} while '{self.state.busy_label}' is in progress")

    def _ticket(self) -> Ticket:
        return (self.state.step, self.state.sequence)

    def _is_stale(self, ticket: Ticket) -> bool:
        return ticket != self._ticket()

    def _transition(self, step: Step) -> None:
        """Move to ``step`` and run its entry hook.

        Any outstanding request is abandoned: its result will not match the
        new sequence number.
        """
        previous = self.state.step
        self.state.step = step
        self.state.sequence += 1
        self.state.busy_label = None
        self._clear_error()
        logger.info(f"Workflow: {previous.value} -> {step.value}")

        hook = self._entry_hooks.get(step)
        if hook:
            hook()

    def _clear_error(self) -> None:
        self.state.error_message = ""
        self.state.error = None

    def _fail(self, error: GenerationError) -> bool:
        logger.warning(f"Step '{self.state.step.value}' failed: {error}")
        self.state.error = error
        self.state.error_message = error.user_message
        self.state.busy_label = None
        return False

    def _run(
        self,
        label: str,
        operation: Callable[[], Any],
        on_success: Callable[[Any], None],
    ) -> bool:
        """Run one remote ``operation`` under the busy flag.

        The result is handed to ``on_success`` only if the step and sequence
        number are still those current when the call was issued.
        """
        self._require_idle(label.rstrip(".").lower())
        ticket = self._ticket()
        self.state.busy_label = label
        self._clear_error()
        logger.debug(f"{label} (step={ticket[0].value}, seq={ticket[1]})")

        try:
            result = operation()
        except GenerationError as e:
            if self._is_stale(ticket):
                logger.debug(f"Discarding stale failure from step '{ticket[0].value}': {e}")
                return False
            return self._fail(e)

        if self._is_stale(ticket):
            logger.debug(f"Discarding stale result from step '{ticket[0].value}'")
            return False

        self.state.busy_label = None
        on_success(result)
        return True

    def _reset(self) -> None:
        self.state = WorkflowState(sequence=self.state.sequence + 1)
        logger.info("Workflow reset")

    def resume(self) -> None:
        """Re-run the entry hook of the current step.

        Views call this whenever they are (re)built; hooks are one-shot, so
        calling it repeatedly has no further effect.
        """
        hook = self._entry_hooks.get(self.state.step)
        if hook:
            hook()

    # ------------------------------------------------------------------
    # Navigation

    def back(self) -> None:
        """Return to the previous step. Allowed while busy."""
        target = BACK_EDGES.get(self.state.step)
        if target is None:
            raise InvalidTransition(f"There is no step before '{self.state.step.value}'")
        if target is Step.TOPIC:
            self.state.candidates = []
        self._transition(target)

    def abandon(self) -> None:
        """Discard the session without saving."""
        self._reset()

    # ------------------------------------------------------------------
    # Topic

    def set_topic_query(self, query: str) -> None:
        self._require("set topic query", Step.TOPIC)
        self.state.topic_query = query

    def _accept_topics(self, topics: List[TopicCandidate]) -> None:
        self.state.candidates = list(topics)
        self._transition(Step.TOPIC_SELECT)

    @staticmethod
    def _non_empty(topics: List[TopicCandidate]) -> List[TopicCandidate]:
        if not topics:
            raise MalformedResponse("The model returned no usable topics")
        return topics

    def research(self, query: Optional[str] = None) -> bool:
        """Research news items for the topic query."""
        self._require("research", Step.TOPIC)
        self._require_idle("research")
        if query is not None:
            self.state.topic_query = query

        query = self.state.topic_query.strip()
        if not query:
            return self._fail(PreconditionViolation("Please enter a topic to research."))

        return self._run(
            LABEL_RESEARCH,
            lambda: self._non_empty(self._gateway.research_topics(query)),
            self._accept_topics,
        )

    def suggest(self) -> bool:
        """Ask for trending topic suggestions; no query needed."""
        self._require("suggest", Step.TOPIC)
        return self._run(
            LABEL_SUGGEST,
            lambda: self._non_empty(self._gateway.suggest_topics()),
            self._accept_topics,
        )

    def select(self, candidate: Union[TopicCandidate, int, str]) -> bool:
        """Choose a topic by candidate, by index into the candidates, or by text."""
        self._require("select", Step.TOPIC_SELECT)
        self._require_idle("select a topic")

        if isinstance(candidate, int):
            if not 0 <= candidate < len(self.state.candidates):
                return self._fail(PreconditionViolation(f"There is no topic number {candidate + 1}."))
            candidate = self.state.candidates[candidate]

        topic = candidate if isinstance(candidate, str) else candidate.topic
        topic = topic.strip()
        if not topic:
            return self._fail(PreconditionViolation("Please choose a topic."))

        self.state.selected_topic = topic
        self._transition(Step.SCRIPT_LENGTH)
        return True

    # ------------------------------------------------------------------
    # Script

    def set_length(self, length: Union[int, str]) -> bool:
        """Pick a preset length in minutes, or ``"custom"``."""
        self._require("set length", Step.SCRIPT_LENGTH)
        if isinstance(length, str) and length != CUSTOM_LENGTH and length.isdigit():
            length = int(length)
        if length != CUSTOM_LENGTH and length not in SCRIPT_LENGTH_PRESETS:
            presets = ", ".join(str(p) for p in SCRIPT_LENGTH_PRESETS)
            return self._fail(
                PreconditionViolation(f"Choose one of {presets} minutes or a custom length.")
            )
        self.state.script_length = length
        return True

    def set_custom_length(self, minutes: Union[int, str]) -> None:
        """Switch to a custom length; validated when the script is generated."""
        self._require("set custom length", Step.SCRIPT_LENGTH)
        self.state.script_length = CUSTOM_LENGTH
        self.state.custom_script_length = str(minutes)

    def _accept_script(self, script: str) -> None:
        self.state.script = script
        # Audio for a previous script no longer matches
        self.state.audio = None
        self._transition(Step.SCRIPT_REVIEW)

    def generate_script(self) -> bool:
        self._require("generate script", Step.SCRIPT_LENGTH)
        self._require_idle("generate a script")
        try:
            minutes = self.resolved_length()
        except PreconditionViolation as e:
            return self._fail(e)
        if not self.state.selected_topic:
            return self._fail(PreconditionViolation("Please select a topic first."))

        topic = self.state.selected_topic
        return self._run(
            LABEL_SCRIPT,
            lambda: self._gateway.generate_script(topic, minutes),
            self._accept_script,
        )

    def edit_script(self, text: str) -> None:
        """Replace the script with the user's edit. Local only, allowed while busy."""
        self._require("edit script", Step.SCRIPT_REVIEW)
        self.state.script = text

    def _accept_audio(self, audio) -> None:
        self.state.audio = audio

    def synthesize_voice(self, profile: Union[VoiceProfile, str]) -> bool:
        self._require("synthesize voice", Step.SCRIPT_REVIEW)
        self._require_idle("synthesize voice")
        script = self.state.script
        if not script.strip():
            return self._fail(PreconditionViolation("There is no script to read."))

        profile = VoiceProfile(profile)
        return self._run(
            LABEL_VOICE,
            lambda: self._gateway.synthesize_voice(script, profile),
            self._accept_audio,
        )

    def proceed(self) -> bool:
        """Move on to metadata, keeping any synthesized audio."""
        self._require("proceed", Step.SCRIPT_REVIEW)
        self._require_idle("proceed")
        self._transition(Step.METADATA_REVIEW)
        return self.state.error is None

    def skip_voice(self) -> bool:
        """Move on to metadata without narration."""
        self._require("skip voice", Step.SCRIPT_REVIEW)
        self._require_idle("skip voice")
        self.state.audio = None
        return self.proceed()

    # ------------------------------------------------------------------
    # Metadata

    def _enter_metadata_review(self) -> None:
        if self.state.metadata_requested:
            return
        self.state.metadata_requested = True
        logger.info("Generating metadata on first entry")
        self._generate_metadata()

    def _accept_metadata(self, metadata) -> None:
        self.state.metadata = metadata

    def _generate_metadata(self) -> bool:
        topic, script = self.state.selected_topic, self.state.script
        return self._run(
            LABEL_METADATA,
            lambda: self._gateway.generate_metadata(topic, script),
            self._accept_metadata,
        )

    def regenerate_metadata(self) -> bool:
        self._require("regenerate metadata", Step.METADATA_REVIEW)
        return self._generate_metadata()

    # ------------------------------------------------------------------
    # Thumbnail

    def _accept_thumbnail(self, thumbnail) -> None:
        self.state.thumbnail = thumbnail
        if self.state.step is not Step.THUMBNAIL:
            self._transition(Step.THUMBNAIL)

    def generate_thumbnail(self) -> bool:
        self._require("generate thumbnail", Step.METADATA_REVIEW)
        topic = self.state.selected_topic
        return self._run(
            LABEL_THUMBNAIL,
            lambda: self._gateway.generate_thumbnail(topic),
            self._accept_thumbnail,
        )

    def regenerate_thumbnail(self) -> bool:
        self._require("regenerate thumbnail", Step.THUMBNAIL)
        topic = self.state.selected_topic
        return self._run(
            LABEL_THUMBNAIL,
            lambda: self._gateway.generate_thumbnail(topic),
            self._accept_thumbnail,
        )

    # ------------------------------------------------------------------
    # Save

    def save(self) -> Optional[Project]:
        """Store the project's text fields and start a fresh session.

        Returns:
            The stored project, or None if a guard or the store failed.
        """
        self._require("save", Step.THUMBNAIL)
        self._require_idle("save")
        state = self.state
        if not state.selected_topic:
            self._fail(PreconditionViolation("Cannot save a project without a topic."))
            return None
        if state.metadata is None:
            self._fail(PreconditionViolation("Cannot save a project without metadata."))
            return None

        project = Project(
            id=uuid.uuid4().hex,
            created_at=self._clock(),
            topic=state.selected_topic,
            title=state.metadata.title,
            description=state.metadata.description,
            hashtags=state.metadata.hashtags,
            script=state.script,
        )
        try:
            self._store.append(project)
        except StoreError as e:
            logger.error(f"Failed to save project: {e}")
            state.error = e
            state.error_message = f"Could not save the project: {e}"
            return None

        logger.info(f"Saved project {project.id}: '{project.display_title}'")
        self._reset()
        return project
