"""Request authentication."""

from typing import Generator

import httpx

TOKEN_HEADER = "X-StorageApi-Token"


class StorageApiTokenAuthenticator(httpx.Auth):
    """
    Stamps every outgoing request with the Storage API token.

    httpx runs the auth flow on each send, so retried attempts are
    stamped again with the same value.
    """

    def __init__(self, token: str):
        if not token:
            raise ValueError("Token must be a non-empty string")
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers[TOKEN_HEADER] = self._token
        yield request
