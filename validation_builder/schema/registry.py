"""
Object-type registry.

Holds named, reusable field mappings describing the elements of arrays
of objects. Each name is built from a sample at most once.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Set

from validation_builder.schema.classifier import DetectedType
from validation_builder.schema.errors import ValidationInputError
from validation_builder.schema.model import FieldsConfig, FieldValidationConfig

logger = logging.getLogger(__name__)


class ObjectTypeRegistry:
    """
    Accumulator of object types.

    ``types`` maps a type name to fields relative to one array element.
    The set of built names keeps inference from walking a name twice.
    """

    def __init__(self, types: Optional[Dict[str, FieldsConfig]] = None):
        """
        Initialize registry.

        Args:
            types: Optional existing entries (copied, not shared)
        """
        self.types: Dict[str, FieldsConfig] = {
            name: dict(fields) for name, fields in (types or {}).items()
        }
        self._built: Set[str] = set()

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __getitem__(self, name: str) -> FieldsConfig:
        return self.types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def ensure(self, name: str) -> FieldsConfig:
        """Return the entry for ``name``, creating an empty one if needed."""
        if name not in self.types:
            self.types[name] = {}
        return self.types[name]

    def claim(self, name: str) -> bool:
        """
        Mark ``name`` as built.

        Returns:
            True if the caller should build it, False if it was built already
        """
        if name in self._built:
            return False
        self._built.add(name)
        return True

    def is_built(self, name: str) -> bool:
        return name in self._built

    def add(self, name: str) -> FieldsConfig:
        """
        Create an empty object type by hand.

        Raises:
            ValidationInputError: If the name is empty or already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationInputError("ObjectType name is required")
        if name in self.types:
            raise ValidationInputError("ObjectType already exists")

        self.types[name] = {}
        logger.info(f"Added object type {name}")
        return self.types[name]

    def add_field(self, name: str, path: str) -> FieldValidationConfig:
        """
        Add a required field with unknown type to an existing object type.

        Raises:
            ValidationInputError: If the type is unknown or the path is empty
        """
        fields = self._get(name)
        path = (path or "").strip()
        if not path:
            raise ValidationInputError("Field path is required")

        fields[path] = FieldValidationConfig(
            required=True,
            pattern_key="",
            detected_type=DetectedType.UNKNOWN,
        )
        return fields[path]

    def update_field(self, name: str, path: str, **patch: Any) -> FieldValidationConfig:
        """
        Shallow-merge an edit into one object-type field.

        Raises:
            ValidationInputError: If the type or field is unknown, or the
                patch sets ``object_type``
        """
        if "object_type" in patch:
            raise ValidationInputError(
                "ObjectType can only be set on root fields")

        fields = self._get(name)
        if path not in fields:
            raise ValidationInputError(
                f"Unknown field {path!r} in ObjectType {name!r}")

        fields[path] = fields[path].merged(**patch)
        return fields[path]

    def to_dict(self) -> Dict[str, FieldsConfig]:
        return {name: dict(fields) for name, fields in self.types.items()}

    def _get(self, name: str) -> FieldsConfig:
        if name not in self.types:
            raise ValidationInputError(f"Unknown ObjectType: {name}")
        return self.types[name]
