"""
vault-api-client: typed client for the Vault secrets and configuration API.

This package provides:
- client: ApiClient, sending requests and mapping responses to models
- config: immutable client configuration, loadable from environment
- models: outgoing requests and the response model protocol
- errors: the ClientError hierarchy and error response translation
- retry: retry and backoff policy
- pipeline: the authenticated, retried, logged transport
"""

from vault_api_client.authentication import TOKEN_HEADER, StorageApiTokenAuthenticator
from vault_api_client.client import ApiClient
from vault_api_client.config import ApiClientConfiguration
from vault_api_client.errors import (
    ClientError,
    DecodeError,
    HttpStatusError,
    MappingError,
    NetworkError,
)
from vault_api_client.models import OutgoingRequest, PydanticResponseModel, ResponseModel
from vault_api_client.retry import RetryDecider, RetryDecision

__version__ = "0.1.0"

__all__ = [
    # Client
    "ApiClient",
    "ApiClientConfiguration",
    # Requests and responses
    "OutgoingRequest",
    "ResponseModel",
    "PydanticResponseModel",
    # Errors
    "ClientError",
    "NetworkError",
    "HttpStatusError",
    "DecodeError",
    "MappingError",
    # Pipeline stages
    "StorageApiTokenAuthenticator",
    "TOKEN_HEADER",
    "RetryDecider",
    "RetryDecision",
    # Version
    "__version__",
]
