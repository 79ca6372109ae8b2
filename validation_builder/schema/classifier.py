"""
JSON value classification.

Maps any decoded JSON value onto the small set of shape kinds the
inference engine reasons about.
"""

from enum import Enum
from typing import Any


class DetectedType(str, Enum):
    """Shape kinds a JSON value can be classified as."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


def detect_type(value: Any) -> DetectedType:
    """
    Classify a JSON value.

    Args:
        value: Any value produced by ``json.loads``

    Returns:
        DetectedType enum value (``None`` maps to UNKNOWN)
    """
    if isinstance(value, list):
        return DetectedType.ARRAY
    elif isinstance(value, str):
        return DetectedType.STRING
    elif isinstance(value, bool):
        # bool is a subclass of int, so it must be checked first
        return DetectedType.BOOLEAN
    elif isinstance(value, (int, float)):
        return DetectedType.NUMBER
    elif isinstance(value, dict):
        return DetectedType.OBJECT
    else:
        return DetectedType.UNKNOWN


def is_container(detected: DetectedType) -> bool:
    """Whether the kind is walked into rather than recorded as a leaf."""
    return detected in (DetectedType.OBJECT, DetectedType.ARRAY)
