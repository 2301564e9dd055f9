import pytest

from vault_api_client.config import DEFAULT_BACKOFF_MAX_TRIES, ApiClientConfiguration


def test_defaults():
    configuration = ApiClientConfiguration()

    assert configuration.backoff_max_tries == DEFAULT_BACKOFF_MAX_TRIES
    assert configuration.logger is None
    assert configuration.user_agent is None
    assert configuration.transport is None


def test_is_immutable():
    configuration = ApiClientConfiguration()

    with pytest.raises(AttributeError):
        configuration.backoff_max_tries = 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"backoff_max_tries": -1},
        {"backoff_base_delay": -0.5},
        {"backoff_base_delay": 10.0, "backoff_max_delay": 5.0},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        ApiClientConfiguration(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("VAULT_BACKOFF_MAX_TRIES", "0")
    monkeypatch.setenv("VAULT_USER_AGENT", "ci")

    configuration = ApiClientConfiguration.from_env()

    assert configuration.backoff_max_tries == 0
    assert configuration.user_agent == "ci"


def test_from_env_defaults_and_overrides(monkeypatch):
    monkeypatch.delenv("VAULT_BACKOFF_MAX_TRIES", raising=False)
    monkeypatch.delenv("VAULT_USER_AGENT", raising=False)

    configuration = ApiClientConfiguration.from_env(backoff_base_delay=0.0)

    assert configuration.backoff_max_tries == DEFAULT_BACKOFF_MAX_TRIES
    assert configuration.user_agent is None
    assert configuration.backoff_base_delay == 0.0
