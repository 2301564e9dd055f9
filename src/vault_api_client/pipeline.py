"""
Transport pipeline.

Every attempt passes through the same stages, composed once when the
pipeline is built:

1. token authentication (httpx auth, re-applied per attempt)
2. raw send with per-attempt timeouts and a wall-clock limit on the whole attempt
3. access log line for the response
4. retry decision, with backoff sleep before the next attempt

Non-retryable responses come back as-is, 4xx included. Turning them
into errors is the client's job.
"""

import time
from typing import Any, Iterator

import httpx

from vault_api_client.authentication import StorageApiTokenAuthenticator
from vault_api_client.models import OutgoingRequest
from vault_api_client.retry import RetryDecider

CONNECT_TIMEOUT = 10.0
TOTAL_TIMEOUT = 120.0

# Request extension carrying the monotonic time an attempt must finish by.
ATTEMPT_EXPIRY = "vault_attempt_expires_at"


class _ExpiringStream(httpx.SyncByteStream):
    """Response body that fails with ReadTimeout once the attempt expires."""

    def __init__(self, stream: httpx.SyncByteStream, request: httpx.Request, expires_at: float):
        self._stream = stream
        self._request = request
        self._expires_at = expires_at

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._stream:
            if time.monotonic() > self._expires_at:
                raise httpx.ReadTimeout("Response body not received in time", request=self._request)
            yield chunk

    def close(self) -> None:
        self._stream.close()


class AttemptTimeoutTransport(httpx.BaseTransport):
    """
    Bounds a whole attempt, body included, by wall-clock time.

    httpx timeouts apply to each connect, read or write step; a server
    trickling its body could otherwise hold an attempt open indefinitely.
    The check runs as each chunk arrives, so a single stalled read is
    still bounded by the read timeout.
    """

    def __init__(self, transport: httpx.BaseTransport):
        self._transport = transport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        response = self._transport.handle_request(request)
        expires_at = request.extensions.get(ATTEMPT_EXPIRY)
        if expires_at is not None:
            response.stream = _ExpiringStream(response.stream, request, expires_at)
        return response

    def close(self) -> None:
        self._transport.close()


class TransportPipeline:
    """Authenticated, retried, logged HTTP sends against one base URL."""

    def __init__(
        self,
        base_url: str,
        authenticator: StorageApiTokenAuthenticator,
        retry_decider: RetryDecider,
        logger: Any,
        user_agent: str,
        transport: httpx.BaseTransport | None = None,
    ):
        self._retry_decider = retry_decider
        self._logger = logger
        self._client = httpx.Client(
            base_url=base_url,
            auth=authenticator,
            headers={"User-Agent": user_agent},
            timeout=httpx.Timeout(TOTAL_TIMEOUT, connect=CONNECT_TIMEOUT),
            transport=AttemptTimeoutTransport(transport or httpx.HTTPTransport()),
            event_hooks={"response": [self._log_response]},
        )

    def build_request(self, request: OutgoingRequest) -> httpx.Request:
        """Resolve a request against the base URL and default headers."""
        return self._client.build_request(
            request.method,
            request.path,
            params=request.params,
            headers=dict(request.headers),
            json=request.json,
            content=request.content,
        )

    def send(self, request: httpx.Request, deadline: float | None = None) -> httpx.Response:
        """
        Send a request, retrying transient failures.

        Args:
            request: Request from build_request
            deadline: Overall budget in seconds for all attempts and sleeps

        Returns:
            The first non-retryable response, or the last response once
            retries are exhausted

        Raises:
            httpx.HTTPError: The last transport failure once retries are
                exhausted, or the first non-retryable one
        """
        started = time.monotonic()
        retrying = self._retry_decider.retrying(request.url, deadline)
        return retrying(self._attempt, request, started, deadline)

    def _attempt(self, request: httpx.Request, started: float, deadline: float | None) -> httpx.Response:
        budget = TOTAL_TIMEOUT
        if deadline is not None:
            remaining = deadline - (time.monotonic() - started)
            if remaining <= 0:
                raise httpx.TimeoutException("Request deadline exceeded", request=request)
            budget = min(TOTAL_TIMEOUT, remaining)
            timeout = httpx.Timeout(budget, connect=min(CONNECT_TIMEOUT, remaining))
            request.extensions["timeout"] = timeout.as_dict()
        request.extensions[ATTEMPT_EXPIRY] = time.monotonic() + budget
        return self._client.send(request)

    def _log_response(self, response: httpx.Response) -> None:
        request = response.request
        self._logger.info(
            "vault_api_response",
            host=request.url.host,
            user_agent=request.headers.get("User-Agent"),
            method=request.method,
            resource=request.url.raw_path.decode("ascii"),
            http_version=response.http_version,
            status_code=response.status_code,
            content_length=response.headers.get("Content-Length"),
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
