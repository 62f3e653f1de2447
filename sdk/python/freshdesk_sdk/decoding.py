"""Turning response bodies into entities.

The call site picks the mode: ``decode_single`` for one object,
``decode_list`` for a JSON array. Each is given a factory that builds one
entity from a parsed JSON object and the connection it came from.
"""

import json
import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

from .exceptions import DeserializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
EntityFactory = Callable[[Any, Optional[Any]], T]


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise DeserializationError("Response body is not valid JSON", details=str(e)) from e


def _id_of(obj: Any) -> Optional[str]:
    if isinstance(obj, dict) and obj.get("id") is not None:
        return str(obj["id"])
    return None


def _build(factory: EntityFactory[T], obj: Any, connection: Any, index: Optional[int] = None) -> T:
    if not isinstance(obj, dict):
        raise DeserializationError(
            f"Expected a JSON object, got {type(obj).__name__}", index=index
        )
    try:
        return factory(obj, connection)
    except Exception as e:
        raise DeserializationError(
            "Failed to build entity from response",
            freshdesk_id=_id_of(obj),
            index=index,
            details=str(e),
        ) from e


def decode_single(text: str, factory: EntityFactory[T], connection: Any = None) -> T:
    """Build one entity from a JSON object body."""
    return _build(factory, _parse(text), connection)


def decode_list(text: str, factory: EntityFactory[T], connection: Any = None) -> Tuple[T, ...]:
    """Build one entity per element of a JSON array body, in order."""
    payload = _parse(text)
    if not isinstance(payload, list):
        raise DeserializationError(f"Expected a JSON array, got {type(payload).__name__}")
    
    result = tuple(_build(factory, obj, connection, index) for index, obj in enumerate(payload))
    logger.debug("Decoded %d entities", len(result))
    return result
