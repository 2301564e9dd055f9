"""
Retry policy.

RetryDecider decides whether a failed attempt is worth repeating and how
long to wait first. tenacity runs the attempt loop; the decider only
supplies its strategies, so the policy can be exercised without any I/O.

Backoff is exponential without jitter: 1s, 2s, 4s, ... capped at 30s.
A 429 with a numeric Retry-After waits at least that long, under the
same cap.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx
import structlog
from tenacity import RetryCallState, Retrying, stop_before_delay

DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0

# Exponent bound: base * 2 ** 1024 overflows a float.
MAX_BACKOFF_EXPONENT = 62

# Transient transport failures. Local protocol errors, proxy and URL
# errors are caller or configuration bugs and fail fast.
RETRYABLE_EXCEPTIONS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)

Failure = httpx.Response | BaseException


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of one retry decision."""

    retry: bool
    delay: float = 0.0


def _failure(state: RetryCallState) -> Failure:
    """The exception raised by the attempt, or the response it returned."""
    outcome = state.outcome
    if outcome.failed:
        return outcome.exception()
    return outcome.result()


def _as_exception(failure: Failure) -> BaseException:
    if isinstance(failure, httpx.Response):
        return httpx.HTTPStatusError(
            describe_failure(failure),
            request=failure.request,
            response=failure,
        )
    return failure


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        # HTTP-date form is not supported
        return None


def describe_failure(failure: Failure) -> str:
    if isinstance(failure, httpx.Response):
        return f"HTTP {failure.status_code}"
    return f"{type(failure).__name__}: {failure}"


class RetryDecider:
    """
    Retry policy for one client.

    ``max_retries`` counts retries, not attempts: 0 allows a single
    attempt, 3 allows up to four.
    """

    def __init__(
        self,
        max_retries: int,
        logger: Any = None,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        sleep: Callable[[float], None] | None = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be a non-negative integer")
        self.max_retries = max_retries
        self.max_attempts = max_retries + 1
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._logger = logger if logger is not None else structlog.get_logger()
        self._sleep = sleep or time.sleep

    def is_retryable(self, failure: Failure) -> bool:
        """Server errors, rate limiting and transient network failures."""
        if isinstance(failure, httpx.Response):
            return failure.status_code >= 500 or failure.status_code == 429
        return isinstance(failure, RETRYABLE_EXCEPTIONS)

    def backoff(self, attempt: int, failure: Failure | None = None) -> float:
        """Delay to wait after the given (1-based) attempt failed."""
        delay = self.base_delay * 2 ** min(attempt - 1, MAX_BACKOFF_EXPONENT)
        if isinstance(failure, httpx.Response) and failure.status_code == 429:
            retry_after = _retry_after(failure)
            if retry_after is not None:
                delay = max(delay, retry_after)
        return min(delay, self.max_delay)

    def should_retry(self, attempt: int, failure: Failure) -> RetryDecision:
        """Decide whether to make another attempt after ``attempt`` failed."""
        if attempt >= self.max_attempts or not self.is_retryable(failure):
            return RetryDecision(retry=False)
        return RetryDecision(retry=True, delay=self.backoff(attempt, failure))

    def retrying(self, url: httpx.URL | str, deadline: float | None = None) -> Retrying:
        """
        Build the attempt loop for a single request.

        Args:
            url: Request URL, for log context
            deadline: Overall budget in seconds. No attempt is scheduled
                once the next backoff sleep would overrun it.

        Returns:
            A tenacity controller that returns the last response or
            re-raises the last exception once retries run out. When the
            deadline stops retrying first, it raises httpx.TimeoutException
            chained from the last failure.
        """

        def retry(state: RetryCallState) -> bool:
            return self.should_retry(state.attempt_number, _failure(state)).retry

        def wait(state: RetryCallState) -> float:
            return self.should_retry(state.attempt_number, _failure(state)).delay

        def log_retry(state: RetryCallState) -> None:
            self._logger.warning(
                "vault_request_retry",
                attempt=state.attempt_number,
                url=str(url),
                reason=describe_failure(_failure(state)),
                delay=state.next_action.sleep if state.next_action else None,
            )

        def deadline_exceeded(state: RetryCallState) -> None:
            failure = _failure(state)
            self._logger.warning(
                "vault_request_deadline_exceeded",
                attempt=state.attempt_number,
                url=str(url),
                reason=describe_failure(failure),
                deadline=deadline,
            )
            raise httpx.TimeoutException(
                f"Request deadline of {deadline}s exceeded after {state.attempt_number} attempt(s)",
                request=failure.request if isinstance(failure, httpx.Response) else None,
            ) from _as_exception(failure)

        if deadline is None:
            return Retrying(retry=retry, wait=wait, before_sleep=log_retry, sleep=self._sleep)
        return Retrying(
            retry=retry,
            wait=wait,
            stop=stop_before_delay(deadline),
            before_sleep=log_retry,
            sleep=self._sleep,
            retry_error_callback=deadline_exceeded,
        )
