import httpx
import pytest

from vault_api_client.authentication import TOKEN_HEADER, StorageApiTokenAuthenticator


def _authenticate(auth: StorageApiTokenAuthenticator, request: httpx.Request) -> httpx.Request:
    flow = auth.auth_flow(request)
    return next(flow)


def test_sets_token_header():
    request = httpx.Request("GET", "https://vault.example.com/api/secrets")

    stamped = _authenticate(StorageApiTokenAuthenticator("secret-token"), request)

    assert stamped.headers[TOKEN_HEADER] == "secret-token"


def test_reapplying_is_idempotent():
    auth = StorageApiTokenAuthenticator("secret-token")
    request = httpx.Request("GET", "https://vault.example.com/api/secrets", headers={"X-Custom": "1"})

    _authenticate(auth, request)
    stamped = _authenticate(auth, request)

    assert stamped.headers.get_list(TOKEN_HEADER) == ["secret-token"]
    assert stamped.headers["X-Custom"] == "1"


def test_empty_token_rejected():
    with pytest.raises(ValueError, match="Token must be a non-empty string"):
        StorageApiTokenAuthenticator("")
