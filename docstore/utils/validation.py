"""
Input validation utilities.
"""

from collections.abc import Hashable, MutableMapping
from typing import Any, Iterable, List
import re

from ..core.exceptions import ConfigurationError, ValidationError


# Valid store name pattern: alphanumeric, underscores, hyphens, dots
NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_\-\.]+$')

MAX_NAME_LENGTH = 128


def validate_name(name: str) -> str:
    """
    Validate a store name.

    Names end up in file names (see ``Settings.create_storage``), so they
    are restricted to a filesystem-safe alphabet.

    Raises:
        ValidationError: If name is invalid
    """
    if not isinstance(name, str):
        raise ValidationError(f"Name must be a string, got {type(name).__name__}")

    if not name:
        raise ValidationError("Name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name too long: {len(name)} characters (max {MAX_NAME_LENGTH})"
        )

    if not NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid name '{name}': must contain only alphanumeric characters, "
            "underscores, hyphens, or dots"
        )

    return name


def validate_field(field: Any) -> str:
    """Validate a field identifier used as primary key or index."""
    if not isinstance(field, str) or not field:
        raise ConfigurationError(
            f"Field name must be a non-empty string, got {field!r}"
        )
    return field


def validate_fields(fields: Iterable[Any]) -> List[str]:
    """Validate and deduplicate field identifiers, keeping first-seen order."""
    if isinstance(fields, str):
        raise ConfigurationError(
            f"Indexed fields must be a collection of names, got string {fields!r}"
        )
    return list(dict.fromkeys(validate_field(f) for f in fields))


def validate_document(document: Any) -> MutableMapping:
    """
    Validate that a document can be stored.

    Documents are updated in place, so they must be mutable mappings.

    Raises:
        ValidationError: If document is not a mutable mapping
    """
    if not isinstance(document, MutableMapping):
        raise ValidationError(
            f"Document must be a mutable mapping, got {type(document).__name__}"
        )
    return document


def validate_primary_key(value: Any) -> Any:
    """
    Validate a primary key value.

    Raises:
        ValidationError: If value is not hashable
    """
    if not isinstance(value, Hashable):
        raise ValidationError(
            f"Primary key must be hashable, got {type(value).__name__}"
        )
    try:
        hash(value)
    except TypeError as e:
        # e.g. a tuple holding a list
        raise ValidationError(f"Primary key must be hashable: {e}") from e
    return value


def make_hashable(value: Any) -> Any:
    """
    Convert a field value to a hashable bucket key.

    Containers are tagged with their kind, so two keys are equal only
    when the values are: ``[1, 2]`` and ``(1, 2)`` get different keys,
    as do ``{"a": 1}`` and ``[["a", 1]]``. Scalars are returned as is.

    Raises:
        TypeError: If a nested value can't be made hashable
    """
    if isinstance(value, list):
        return ("list", tuple(make_hashable(v) for v in value))
    elif isinstance(value, tuple):
        return ("tuple", tuple(make_hashable(v) for v in value))
    elif isinstance(value, dict):
        # Keys are unique, so a set of items needs no ordering
        return ("dict", frozenset((k, make_hashable(v)) for k, v in value.items()))
    elif isinstance(value, (set, frozenset)):
        return ("set", frozenset(make_hashable(v) for v in value))
    return value
