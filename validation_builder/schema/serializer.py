"""
Validation JSON serializer.

Projects the in-memory model into the nested document shape::

    {"Validation": {"Patterns": ..., "ObjectTypes": ..., "Types": {name: ...}}}
"""

import json
import math
from typing import Any, Dict

from validation_builder.schema.model import (
    FieldsConfig,
    FieldValidationConfig,
    PatternsMap,
    ValidationModel,
)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def project_field(cfg: FieldValidationConfig, include_object_type: bool = False) -> Dict[str, Any]:
    """
    Project one rule into its wire form.

    Key order is fixed: Required, PatternKey, MinLength, MaxLength,
    ObjectType. Optional keys are omitted when unset.

    Args:
        cfg: Rule to project
        include_object_type: True for root fields

    Returns:
        Field entry dictionary
    """
    entry: Dict[str, Any] = {"Required": cfg.required}

    if cfg.pattern_key:
        entry["PatternKey"] = cfg.pattern_key
    if _is_number(cfg.min_length):
        entry["MinLength"] = cfg.min_length
    if _is_number(cfg.max_length):
        entry["MaxLength"] = cfg.max_length
    if include_object_type and cfg.object_type:
        entry["ObjectType"] = cfg.object_type

    return entry


def _project_fields(fields: FieldsConfig, include_object_type: bool) -> Dict[str, Dict[str, Any]]:
    return {
        path: project_field(cfg, include_object_type)
        for path, cfg in fields.items()
    }


def serialize_validation(
    patterns: PatternsMap,
    object_types: Dict[str, FieldsConfig],
    root_fields: FieldsConfig,
    type_name: str,
) -> Dict[str, Any]:
    """
    Build a Validation JSON document.

    Args:
        patterns: Pattern key to pattern spec, copied verbatim
        object_types: Object type name to relative fields
        root_fields: Fields of the primary type
        type_name: Key the root fields are stored under in ``Types``

    Returns:
        Document dictionary ready for ``json.dumps``
    """
    return {
        "Validation": {
            "Patterns": dict(patterns),
            "ObjectTypes": {
                name: _project_fields(fields, include_object_type=False)
                for name, fields in object_types.items()
            },
            "Types": {
                type_name: _project_fields(root_fields, include_object_type=True),
            },
        }
    }


def serialize_model(model: ValidationModel) -> Dict[str, Any]:
    return serialize_validation(
        model.patterns, model.object_types, model.root_fields, model.type_name)


def dumps_validation(document: Dict[str, Any], indent: int = 2) -> str:
    """
    Render a Validation JSON document as text.

    Raises:
        ValueError: If the document holds NaN or Infinity, which JSON cannot express
    """
    return json.dumps(document, indent=indent, ensure_ascii=False, allow_nan=False)
