"""
In-memory validation model.

A schema is kept as flat mappings from field path to validation rule:

- ``a.b.c`` addresses nested object members
- ``items[*]`` addresses every element of the array at ``items``
- a bare ``[*]`` addresses the elements of a root-level array
"""

from dataclasses import dataclass, field, fields as dataclass_fields, replace
from typing import Any, Dict, Optional

from validation_builder.schema.classifier import DetectedType
from validation_builder.schema.errors import ValidationInputError


@dataclass
class FieldValidationConfig:
    """One validation rule attached to a field path."""
    required: bool = True
    pattern_key: str = ""
    detected_type: DetectedType = DetectedType.UNKNOWN

    # Optional string length constraints
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    # Root fields only: name of an entry in the object-type registry
    object_type: Optional[str] = None

    def merged(self, **patch: Any) -> "FieldValidationConfig":
        """
        Return a copy with the explicitly supplied attributes replaced.

        Attributes that are not passed are kept as they are. Passing
        ``None`` for an optional attribute clears it.

        Raises:
            ValidationInputError: If an attribute name or value is invalid
        """
        for name, value in patch.items():
            _check_attribute(name, value)
        return replace(self, **patch)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation used by the HTTP surface."""
        result: Dict[str, Any] = {
            "required": self.required,
            "pattern_key": self.pattern_key,
            "detected_type": self.detected_type.value,
        }
        for name in ("min_length", "max_length", "object_type"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result


FieldsConfig = Dict[str, FieldValidationConfig]
PatternsMap = Dict[str, str]

_ATTRIBUTES = {f.name for f in dataclass_fields(FieldValidationConfig)}


def _check_attribute(name: str, value: Any) -> None:
    if name not in _ATTRIBUTES:
        raise ValidationInputError(f"Unknown field attribute: {name}")

    if name == "required":
        if not isinstance(value, bool):
            raise ValidationInputError("required must be a boolean")
    elif name == "pattern_key":
        if not isinstance(value, str):
            raise ValidationInputError("pattern_key must be a string")
    elif name == "detected_type":
        if not isinstance(value, DetectedType):
            raise ValidationInputError("detected_type must be a DetectedType")
    elif name in ("min_length", "max_length"):
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationInputError(f"{name} must be an integer")
        if value < 0:
            raise ValidationInputError(f"{name} must not be negative")
    elif name == "object_type":
        if value is not None and not isinstance(value, str):
            raise ValidationInputError("object_type must be a string")


def set_field(fields: FieldsConfig, path: str, **attrs: Any) -> FieldValidationConfig:
    """
    Write a rule at ``path``, merging into any rule already there.

    Args:
        fields: Mapping to write into
        path: Field path
        **attrs: Attributes to set on the rule

    Returns:
        The rule now stored at ``path``
    """
    current = fields.get(path)
    if current is None:
        current = FieldValidationConfig()
    fields[path] = current.merged(**attrs)
    return fields[path]


def normalize_detected_types(fields: FieldsConfig) -> FieldsConfig:
    """Copy of ``fields`` with every detected type reset to UNKNOWN."""
    return {
        path: replace(cfg, detected_type=DetectedType.UNKNOWN)
        for path, cfg in fields.items()
    }


def fields_to_dict(fields: FieldsConfig) -> Dict[str, Dict[str, Any]]:
    return {path: cfg.to_dict() for path, cfg in fields.items()}


@dataclass
class ValidationModel:
    """Everything a Validation JSON document describes."""
    patterns: PatternsMap = field(default_factory=dict)
    object_types: Dict[str, FieldsConfig] = field(default_factory=dict)
    root_fields: FieldsConfig = field(default_factory=dict)
    type_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type_name": self.type_name,
            "patterns": dict(self.patterns),
            "object_types": {
                name: fields_to_dict(fields)
                for name, fields in self.object_types.items()
            },
            "root_fields": fields_to_dict(self.root_fields),
        }
