"""
Vault API client.

Runs pre-built requests through the transport pipeline and hands back
decoded response models. Every failure surfaces as a ClientError.
"""

from typing import Any, TypeVar

import httpx
import structlog

from vault_api_client.authentication import StorageApiTokenAuthenticator
from vault_api_client.config import ApiClientConfiguration
from vault_api_client.decoding import map_response
from vault_api_client.env import VAULT_API_TOKEN, VAULT_API_URL, require_env
from vault_api_client.errors import to_client_error
from vault_api_client.models import OutgoingRequest, ResponseModel
from vault_api_client.pipeline import TransportPipeline
from vault_api_client.retry import RetryDecider

logger = structlog.get_logger()

USER_AGENT = "Vault API Python Client"

T = TypeVar("T", bound=ResponseModel)


class ApiClient:
    """
    Client for the Vault API.

    Holds no per-call state: one instance can serve concurrent calls.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        configuration: ApiClientConfiguration | None = None,
    ):
        if not base_url:
            raise ValueError("Base URL must be a non-empty string")
        if not token:
            raise ValueError("Token must be a non-empty string")
        configuration = configuration or ApiClientConfiguration()
        log = configuration.logger if configuration.logger is not None else logger

        user_agent = USER_AGENT
        if configuration.user_agent:
            user_agent += " - " + configuration.user_agent

        self.configuration = configuration
        self._pipeline = TransportPipeline(
            base_url=base_url,
            authenticator=StorageApiTokenAuthenticator(token),
            retry_decider=RetryDecider(
                configuration.backoff_max_tries,
                logger=log,
                base_delay=configuration.backoff_base_delay,
                max_delay=configuration.backoff_max_delay,
            ),
            logger=log,
            user_agent=user_agent,
            transport=configuration.transport,
        )

    @classmethod
    def from_env(cls, configuration: ApiClientConfiguration | None = None) -> "ApiClient":
        """Create a client from VAULT_API_URL and VAULT_API_TOKEN."""
        require_env(VAULT_API_URL, VAULT_API_TOKEN)
        return cls(
            VAULT_API_URL.get_str(),
            VAULT_API_TOKEN.get_str(),
            configuration or ApiClientConfiguration.from_env(),
        )

    def send_request(self, request: OutgoingRequest, *, deadline: float | None = None) -> None:
        """Send a request and discard the response."""
        self._do_send_request(request, deadline)

    def send_request_and_map_response(
        self,
        request: OutgoingRequest,
        response_class: type[T],
        *,
        is_list: bool = False,
        deadline: float | None = None,
    ) -> T | list[T]:
        """
        Send a request and build response models from the body.

        Args:
            request: Request to send
            response_class: Model built from the decoded body
            is_list: Body is a JSON array; build one model per item
            deadline: Overall budget in seconds, retries included

        Returns:
            A model instance, or a list of them when is_list is set

        Raises:
            ClientError: Transport failure, error response, or a body that
                could not be decoded or mapped
        """
        response = self._do_send_request(request, deadline)
        return map_response(response.content, response_class, is_list=is_list)

    def _do_send_request(self, request: OutgoingRequest, deadline: float | None) -> httpx.Response:
        try:
            http_request = self._pipeline.build_request(request)
            response = self._pipeline.send(http_request, deadline=deadline)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise to_client_error(e) from e
        return response

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._pipeline.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
