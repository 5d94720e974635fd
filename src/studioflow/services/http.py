"""HTTP client with retry, exponential backoff and jitter."""

import logging
import random
import time
from typing import Any, Callable, Optional

import requests

from ..config import config
from ..errors import MalformedResponse, RejectedRequest, TransientServiceFailure

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = 429


def is_retryable_status(status_code: int) -> bool:
    """Return True for rate limiting and server-side errors."""
    return status_code == RETRYABLE_STATUS or status_code >= 500


class ResilientClient:
    """Sends JSON POST requests, retrying transient failures.

    Transport errors, 429 and 5xx responses are retried with an exponentially
    growing, jittered delay. Any other non-2xx response fails at once with
    ``RejectedRequest``. When attempts (or the total retry budget) run out the
    call fails with ``TransientServiceFailure``.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        jitter: Optional[float] = None,
        total_budget: Optional[float] = None,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: requests session to reuse. Created if not provided.
            max_attempts: Default attempt count per call.
            base_delay: Base delay in seconds, doubled after every attempt.
            jitter: Upper bound of the uniform random delay added to each wait.
            total_budget: Seconds of backoff sleep a single call may accumulate.
            timeout: Per-request timeout in seconds.
            sleep: Function used to wait between attempts.
            rng: Random source for jitter.
        """
        self._session = session or requests.Session()
        self._max_attempts = max_attempts or config.max_attempts
        self._base_delay = config.backoff_base if base_delay is None else base_delay
        self._jitter = config.backoff_jitter if jitter is None else jitter
        self._total_budget = config.retry_budget if total_budget is None else total_budget
        self._timeout = timeout or config.request_timeout
        self._sleep = sleep
        self._rng = rng or random.Random()

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def backoff_delay(self, attempt: int) -> float:
        """Return the wait in seconds after the 0-indexed ``attempt`` failed."""
        return self._base_delay * (2**attempt) + self._rng.uniform(0, self._jitter)

    def send(
        self,
        endpoint: str,
        body: dict,
        max_attempts: Optional[int] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """POST ``body`` as JSON to ``endpoint`` and return the decoded reply.

        Args:
            endpoint: Full URL of the endpoint.
            body: JSON-serializable request body.
            max_attempts: Override of the default attempt count.
            headers: Extra request headers.

        Returns:
            The decoded JSON response body.

        Raises:
            RejectedRequest: On a non-retryable HTTP status.
            TransientServiceFailure: When retries or the time budget run out.
            MalformedResponse: When a 2xx response is not JSON.
        """
        attempts = max_attempts or self._max_attempts
        waited = 0.0
        last_status: Optional[int] = None

        for attempt in range(attempts):
            final = attempt == attempts - 1
            logger.debug(f"POST {endpoint} (attempt {attempt + 1}/{attempts})")

            try:
                response = self._session.post(
                    endpoint,
                    json=body,
                    headers=headers,
                    timeout=self._timeout,
                )
            except requests.RequestException as e:
                if final:
                    logger.error(f"Request failed after {attempts} attempts: {e}")
                    raise TransientServiceFailure(
                        f"Network error after {attempts} attempts: {e}",
                        attempts=attempts,
                        last_status=last_status,
                    ) from e
                logger.warning(f"Connection error: {e}")
            else:
                if 200 <= response.status_code < 300:
                    try:
                        return response.json()
                    except ValueError as e:
                        logger.error(f"Response from {endpoint} is not JSON: {e}")
                        raise MalformedResponse() from e

                last_status = response.status_code
                if not is_retryable_status(response.status_code):
                    logger.error(f"API error: {response.status_code}: {response.text[:500]}")
                    raise RejectedRequest(response.status_code, response.text)

                logger.warning(f"Retryable status {response.status_code} from service")
                if final:
                    break

            delay = self.backoff_delay(attempt)
            # Only backoff sleep counts; each request is bounded by its own timeout
            if waited + delay > self._total_budget:
                logger.error(
                    f"Retry budget of {self._total_budget:.0f}s exhausted "
                    f"after {attempt + 1} attempts"
                )
                raise TransientServiceFailure(
                    f"Service did not recover within {self._total_budget:.0f}s",
                    attempts=attempt + 1,
                    last_status=last_status,
                )

            logger.warning(f"Retrying in {delay:.1f}s...")
            self._sleep(delay)
            waited += delay

        raise TransientServiceFailure(
            f"API request failed after {attempts} attempts",
            attempts=attempts,
            last_status=last_status,
        )
