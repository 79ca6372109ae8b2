"""
Validation JSON loader.

Parses an existing Validation JSON document back into the in-memory
model. ``Patterns`` and ``ObjectTypes`` are optional and default to
empty; ``Types`` must hold at least one entry. The first entry of
``Types`` becomes the active type.

Detected types cannot be recovered from the wire form, so every loaded
rule carries ``DetectedType.UNKNOWN``.
"""

import logging
import math
from typing import Any, Dict

from validation_builder.common.logging_config import PerformanceTracker
from validation_builder.schema.classifier import DetectedType
from validation_builder.schema.errors import ShapeError
from validation_builder.schema.model import (
    FieldsConfig,
    FieldValidationConfig,
    PatternsMap,
    ValidationModel,
)
from validation_builder.schema.parsing import parse_json_text

logger = logging.getLogger(__name__)


def _truthy(value: Any) -> bool:
    """Truthiness as the wire format's producers see it (``!!value``)."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    # Empty lists and objects still count as set
    return True


def _length(value: Any):
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return None


def _load_field(entry: Any, location: str, include_object_type: bool) -> FieldValidationConfig:
    if not isinstance(entry, dict):
        raise ShapeError(f"Field entry {location} must be an object")

    pattern_key = entry.get("PatternKey")
    cfg = FieldValidationConfig(
        required=_truthy(entry.get("Required")),
        pattern_key=pattern_key if isinstance(pattern_key, str) else "",
        detected_type=DetectedType.UNKNOWN,
        min_length=_length(entry.get("MinLength")),
        max_length=_length(entry.get("MaxLength")),
    )

    if include_object_type:
        object_type = entry.get("ObjectType")
        if isinstance(object_type, str):
            cfg.object_type = object_type

    return cfg


def _load_fields(section: Any, location: str, include_object_type: bool) -> FieldsConfig:
    if not isinstance(section, dict):
        raise ShapeError(f"{location} must be an object")

    return {
        path: _load_field(entry, f"{location}[{path!r}]", include_object_type)
        for path, entry in section.items()
    }


def load_validation(document: Any) -> ValidationModel:
    """
    Convert a decoded Validation JSON document into the in-memory model.

    Args:
        document: Decoded JSON value

    Returns:
        ValidationModel with patterns, object types, root fields and type name

    Raises:
        ShapeError: If a required section is missing or malformed
    """
    if not isinstance(document, dict):
        raise ShapeError("Root must be an object")

    validation = document.get("Validation")
    if not isinstance(validation, dict):
        raise ShapeError("Missing Validation section")

    patterns: PatternsMap = {}
    raw_patterns = validation.get("Patterns")
    if isinstance(raw_patterns, dict):
        patterns = dict(raw_patterns)

    object_types: Dict[str, FieldsConfig] = {}
    raw_object_types = validation.get("ObjectTypes")
    if isinstance(raw_object_types, dict):
        for name, fields in raw_object_types.items():
            object_types[name] = _load_fields(
                fields, f"Validation.ObjectTypes[{name!r}]", include_object_type=False)

    types = validation.get("Types")
    if not isinstance(types, dict):
        raise ShapeError("Missing Validation.Types")
    if not types:
        raise ShapeError("Validation.Types is empty")

    # dicts keep document order, so this is the first type in the file
    type_name = next(iter(types))
    root_fields = _load_fields(
        types[type_name], f"Validation.Types[{type_name!r}]", include_object_type=True)

    if len(types) > 1:
        logger.info(
            f"Validation.Types has {len(types)} entries, using the first: {type_name}")

    return ValidationModel(
        patterns=patterns,
        object_types=object_types,
        root_fields=root_fields,
        type_name=type_name,
    )


def loads_validation(text: str) -> ValidationModel:
    """
    Parse Validation JSON text.

    Raises:
        ParseError: If the text is not valid JSON
        ShapeError: If a required section is missing or malformed
    """
    document = parse_json_text(text)

    with PerformanceTracker("validation_load", logger):
        return load_validation(document)
