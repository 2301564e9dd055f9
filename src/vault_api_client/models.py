"""
Request and response models.

Endpoint code builds OutgoingRequest values and declares one response
model per response shape. Any class with a ``from_response_data``
classmethod qualifies; PydanticResponseModel provides one through
pydantic validation.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class OutgoingRequest:
    """
    A request to the Vault API, relative to the client's base URL.

    The pipeline adds the User-Agent (unless set here) and the token
    header; everything else goes out as given.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] | None = None
    json: Any = None
    content: bytes | str | None = None


@runtime_checkable
class ResponseModel(Protocol):
    """Anything constructible from a decoded JSON object."""

    @classmethod
    def from_response_data(cls, data: Mapping[str, Any]) -> Self: ...


class PydanticResponseModel(BaseModel):
    """
    Base for response models backed by pydantic.

    Unknown fields from the API are ignored; missing or invalid ones
    raise a pydantic ValidationError.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_response_data(cls, data: Mapping[str, Any]) -> Self:
        return cls.model_validate(data)
