"""Failure taxonomy for remote generation and the workflow."""

from typing import Optional


class StudioFlowError(Exception):
    """Root of all errors raised by this package."""


class GenerationError(StudioFlowError):
    """A recoverable failure that the workflow presents to the user.

    Every subclass carries a ``user_message`` suitable for display.
    """

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class TransientServiceFailure(GenerationError):
    """The service kept failing with retryable errors until retries ran out."""

    default_message = "The service is temporarily unavailable. Please try again."

    def __init__(
        self,
        message: Optional[str] = None,
        attempts: int = 0,
        last_status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_status = last_status


class RejectedRequest(GenerationError):
    """The service refused the request with a non-retryable status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {body}")


class MalformedResponse(GenerationError):
    """The service answered, but the payload could not be used."""

    default_message = "The model returned an unexpected format. Please try again."


class PreconditionViolation(GenerationError):
    """A caller-side guard failed before any remote call was made."""


class WorkflowError(StudioFlowError):
    """Misuse of the workflow controller."""


class InvalidTransition(WorkflowError):
    """The action has no edge from the current step."""


class WorkflowBusy(WorkflowError):
    """A remote action was started while another one is outstanding."""


class StoreError(StudioFlowError):
    """The project store could not be read or written."""
