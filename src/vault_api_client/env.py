"""Environment variables read by the client."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EnvVar:
    """An environment variable the client reads, with its documentation."""

    name: str
    description: str = ""
    required: bool = False

    def is_set(self) -> bool:
        return bool(os.environ.get(self.name))

    def get_str(self, default: str = "") -> str:
        return os.environ.get(self.name) or default

    def get_int(self, default: int) -> int:
        """Integer value; unset or unparsable falls back to the default."""
        try:
            return int(os.environ.get(self.name, str(default)))
        except (ValueError, TypeError):
            return default


VAULT_API_URL = EnvVar("VAULT_API_URL", "Vault API base URL", required=True)
VAULT_API_TOKEN = EnvVar("VAULT_API_TOKEN", "Storage API token sent with every request", required=True)
VAULT_BACKOFF_MAX_TRIES = EnvVar("VAULT_BACKOFF_MAX_TRIES", "Retries after the first attempt (0 disables retrying)")
VAULT_USER_AGENT = EnvVar("VAULT_USER_AGENT", "Suffix appended to the client User-Agent")


def require_env(*variables: EnvVar) -> None:
    """
    Check that required variables are set.

    Raises:
        ValueError: Naming every required variable that is missing or empty
    """
    missing = [var.name for var in variables if var.required and not var.is_set()]
    if missing:
        raise ValueError(f"Required environment variable(s) not set: {', '.join(missing)}")
