"""
Response decoding.

Turns a raw response body into response model instances. A body that
is not the expected JSON raises DecodeError; a model rejecting the
decoded data raises MappingError. Lists are all-or-nothing.
"""

import json
from typing import Any, TypeVar

from vault_api_client.errors import DecodeError, MappingError
from vault_api_client.models import ResponseModel

T = TypeVar("T", bound=ResponseModel)


def decode_json(body: bytes | str) -> Any:
    """Parse a JSON body."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Response is not a valid JSON: {e}", 0, e) from e


def decode_mapping(body: bytes | str) -> dict[str, Any]:
    """Parse a body that must hold a JSON object."""
    data = decode_json(body)
    if not isinstance(data, dict):
        raise DecodeError(f"Response is not a valid JSON: expected an object, got {type(data).__name__}")
    return data


def decode_list(body: bytes | str) -> list[Any]:
    """Parse a body that must hold a JSON array."""
    data = decode_json(body)
    if not isinstance(data, list):
        raise DecodeError(f"Response is not a valid JSON: expected an array, got {type(data).__name__}")
    return data


def _as_mapping(index: int, item: Any) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise TypeError(f"expected an object at index {index}, got {type(item).__name__}")
    return item


def map_response(body: bytes | str, response_class: type[T], is_list: bool = False) -> T | list[T]:
    """
    Decode a body and build response model instances from it.

    Args:
        body: Raw response body
        response_class: Model to build, one per decoded object
        is_list: Expect a JSON array and build one instance per item

    Returns:
        One instance, or a list of instances in body order

    Raises:
        DecodeError: Body is not valid JSON of the expected shape
        MappingError: The model rejected the data, or a list item is not
            an object
    """
    if is_list:
        items = decode_list(body)
        try:
            return [response_class.from_response_data(_as_mapping(index, item)) for index, item in enumerate(items)]
        except Exception as e:
            raise MappingError(f"Failed to map response data: {e}", 0, e) from e

    data = decode_mapping(body)
    try:
        return response_class.from_response_data(data)
    except Exception as e:
        raise MappingError(f"Failed to map response data: {e}", 0, e) from e
