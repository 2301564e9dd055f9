"""Scripted stand-in for the network, built on httpx.MockTransport."""

from typing import Any, Callable

import httpx

Outcome = Callable[[httpx.Request], httpx.Response]


def respond(status_code: int, **kwargs: Any) -> Outcome:
    """Reply with a fresh response on every call."""
    return lambda request: httpx.Response(status_code, **kwargs)


def fail(exc_class: type[httpx.RequestError], message: str = "connection refused") -> Outcome:
    """Raise a transport error for the request."""

    def outcome(request: httpx.Request) -> httpx.Response:
        raise exc_class(message, request=request)

    return outcome


class ScriptedTransport(httpx.MockTransport):
    """
    Plays outcomes in order and records every request it sees.

    The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes: Outcome):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        return self.outcomes[index](request)
