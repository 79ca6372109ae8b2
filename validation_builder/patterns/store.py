"""Validated edits to a pattern map."""

import logging
import re

from validation_builder.schema.errors import ValidationInputError
from validation_builder.schema.model import PatternsMap

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def validate_pattern_key(key: str) -> str:
    """
    Check a pattern key and return it stripped.

    Raises:
        ValidationInputError: If the key is empty or contains whitespace
    """
    key = (key or "").strip()
    if not key:
        raise ValidationInputError("PatternKey is required")
    if _WHITESPACE.search(key):
        raise ValidationInputError("PatternKey should not contain spaces")
    return key


def add_pattern(patterns: PatternsMap, key: str, value: str, override: bool = False) -> PatternsMap:
    """
    Add a pattern to ``patterns`` in place.

    The map is only changed once every check has passed.

    Args:
        patterns: Pattern map to update
        key: Pattern key (no whitespace)
        value: Pattern spec, e.g. ``regex:^[A-Z]+$`` or ``int:1:10``
        override: Replace an existing key instead of rejecting it

    Returns:
        The updated map

    Raises:
        ValidationInputError: If the key or value is rejected
    """
    key = validate_pattern_key(key)
    value = (value or "").strip()
    if not value:
        raise ValidationInputError(
            "Pattern value is required (e.g. regex:..., int:min:max)")

    if key in patterns:
        if not override:
            raise ValidationInputError(f"Pattern {key} already exists")
        logger.warning(f"Overriding existing pattern: {key}")

    patterns[key] = value
    return patterns
