"""Typed field accessors for reading third-party documents defensively.

Every accessor returns ``(value, was_present)``. When the field is missing,
null or of an unusable type, the default from ``FIELD_DEFAULTS`` (or the one
passed in) is returned with ``was_present=False``.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

import structlog

from .riot_api.errors import ParseError

logger = structlog.get_logger(__name__)

UNKNOWN = "Unknown"

FIELD_DEFAULTS: Dict[Type[Any], Any] = {
    int: 0,
    bool: False,
    str: "",
}


def read_int(
    data: Mapping[str, Any], key: str, default: Optional[int] = None
) -> Tuple[int, bool]:
    """
    Read an integer field, accepting numeric strings.

    Args:
        data: Mapping to read from
        key: Field name
        default: Value when absent (defaults to 0)

    Returns:
        Tuple of (value, was_present)
    """
    fallback = FIELD_DEFAULTS[int] if default is None else default
    value = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(value, bool):
        return int(value), True
    if isinstance(value, int):
        return value, True
    if isinstance(value, float):
        if not math.isfinite(value):
            return fallback, False
        return int(value), True
    if isinstance(value, str):
        try:
            return int(value.strip()), True
        except ValueError:
            return fallback, False
    return fallback, False


def read_bool(
    data: Mapping[str, Any], key: str, default: Optional[bool] = None
) -> Tuple[bool, bool]:
    """Read a boolean field, accepting "true"/"false" strings and integers."""
    fallback = FIELD_DEFAULTS[bool] if default is None else default
    value = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(value, bool):
        return value, True
    if isinstance(value, int):
        return value != 0, True
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true", True
    return fallback, False


def read_str(
    data: Mapping[str, Any],
    key: str,
    default: Optional[str] = None,
    allow_empty: bool = True,
) -> Tuple[str, bool]:
    """Read a string field; numbers are rendered as text."""
    fallback = FIELD_DEFAULTS[str] if default is None else default
    value = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(value, bool):
        return ("true" if value else "false"), True
    if isinstance(value, (int, float)):
        return str(value), True
    if isinstance(value, str):
        if not allow_empty and value.strip() == "":
            return fallback, False
        return value, True
    return fallback, False


def read_list(data: Mapping[str, Any], key: str) -> Tuple[List[Any], bool]:
    """Read a list field; anything else yields an empty list."""
    value = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(value, list):
        return value, True
    return [], False


def read_mapping(data: Mapping[str, Any], key: str) -> Tuple[Dict[str, Any], bool]:
    """Read a nested object field; anything else yields an empty dict."""
    value = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(value, Mapping):
        return dict(value), True
    return {}, False


def read_int_slots(data: Mapping[str, Any], prefix: str, indexes: range) -> List[int]:
    """Read numbered slots such as item0..item6; missing slots are 0."""
    return [read_int(data, f"{prefix}{i}")[0] for i in indexes]


def require_mapping(document: Any, context_name: str = "document") -> Dict[str, Any]:
    """
    Ensure a raw document is a JSON object.

    Raises:
        ParseError: If the document is not an object at all
    """
    if not isinstance(document, Mapping):
        logger.warning(
            "Unrecognizable document shape",
            context=context_name,
            got_type=type(document).__name__,
        )
        raise ParseError(
            f"Expected a JSON object for {context_name}, got {type(document).__name__}"
        )
    return dict(document)


def require_list(document: Any, context_name: str = "document") -> List[Any]:
    """
    Ensure a raw document is a JSON array.

    Raises:
        ParseError: If the document is not an array
    """
    if not isinstance(document, list):
        logger.warning(
            "Unrecognizable document shape",
            context=context_name,
            got_type=type(document).__name__,
        )
        raise ParseError(
            f"Expected a JSON array for {context_name}, got {type(document).__name__}"
        )
    return document
