"""
Editing session.

Holds the model a user is working on: the pattern map, the object-type
registry, the root fields and the active type name. Analyze and load
replace state wholesale; everything else is a field-by-field edit.
"""

import logging
from typing import Any, Dict, Optional

from validation_builder.config.settings import get_settings
from validation_builder.patterns.client import PatternFetchResult
from validation_builder.patterns.store import add_pattern
from validation_builder.schema.errors import ValidationInputError
from validation_builder.schema.inference import (
    InferenceResult,
    SchemaInferrer,
    infer_schema_from_text,
)
from validation_builder.schema.loader import loads_validation
from validation_builder.schema.model import (
    FieldsConfig,
    FieldValidationConfig,
    PatternsMap,
    ValidationModel,
)
from validation_builder.schema.registry import ObjectTypeRegistry
from validation_builder.schema.serializer import dumps_validation, serialize_validation

logger = logging.getLogger(__name__)


class BuilderSession:
    """In-memory state for one user building a Validation JSON document."""

    def __init__(self, type_name: Optional[str] = None):
        settings = get_settings()
        self.type_name: str = type_name if type_name is not None else settings.default_type_name
        self.patterns: PatternsMap = {}
        self.object_types = ObjectTypeRegistry()
        self.root_fields: FieldsConfig = {}
        self.notice: Optional[str] = None
        self._indent = settings.output_indent

    # ==================== Whole-model operations ====================

    def analyze(self, raw_json: str) -> None:
        """
        Infer root fields and object types from sample JSON text.

        Patterns and the type name are kept.

        Raises:
            ParseError: If the text is not valid JSON
        """
        self._apply_inference(infer_schema_from_text(raw_json))

    def analyze_value(self, sample: Any) -> None:
        self._apply_inference(SchemaInferrer().infer(sample))

    def _apply_inference(self, result: InferenceResult) -> None:
        self.root_fields = result.root_fields
        self.object_types = ObjectTypeRegistry(result.object_types)
        logger.info(
            f"Analyzed sample: {len(self.root_fields)} root fields, "
            f"{len(self.object_types)} object types"
        )

    def load(self, raw_json: str) -> None:
        """
        Replace the whole session with an existing Validation JSON document.

        State is untouched if loading fails.

        Raises:
            ParseError: If the text is not valid JSON
            ShapeError: If a required section is missing or malformed
        """
        model = loads_validation(raw_json)

        self.patterns = model.patterns
        self.object_types = ObjectTypeRegistry(model.object_types)
        self.root_fields = model.root_fields
        self.type_name = model.type_name
        logger.info(f"Loaded Validation JSON for type {model.type_name}")

    def generate(self) -> Dict[str, Any]:
        """Serialize the session into a Validation JSON document."""
        return serialize_validation(
            self.patterns,
            self.object_types.to_dict(),
            self.root_fields,
            self.type_name,
        )

    def generate_json(self) -> str:
        return dumps_validation(self.generate(), indent=self._indent)

    def model(self) -> ValidationModel:
        return ValidationModel(
            patterns=dict(self.patterns),
            object_types=self.object_types.to_dict(),
            root_fields=dict(self.root_fields),
            type_name=self.type_name,
        )

    # ==================== Patterns ====================

    def add_pattern(self, key: str, value: str, override: bool = False) -> None:
        add_pattern(self.patterns, key, value, override=override)

    def apply_registry_patterns(self, result: PatternFetchResult) -> None:
        """Take the outcome of a registry fetch; a failure leaves the map empty."""
        self.patterns = dict(result.patterns)
        self.notice = result.notice

    # ==================== Object types ====================

    def add_object_type(self, name: str) -> None:
        self.object_types.add(name)

    def add_object_type_field(self, name: str, path: str) -> FieldValidationConfig:
        return self.object_types.add_field(name, path)

    def update_object_type_field(self, name: str, path: str, **patch: Any) -> FieldValidationConfig:
        return self.object_types.update_field(name, path, **patch)

    # ==================== Root fields ====================

    def update_root_field(self, path: str, **patch: Any) -> FieldValidationConfig:
        """
        Shallow-merge an edit into one root field.

        Raises:
            ValidationInputError: If the field is unknown or the edit is invalid
        """
        if path not in self.root_fields:
            raise ValidationInputError(f"Unknown root field: {path}")

        self.root_fields[path] = self.root_fields[path].merged(**patch)
        return self.root_fields[path]

    def set_type_name(self, name: str) -> None:
        """
        Rename the active type.

        Raises:
            ValidationInputError: If the name is empty
        """
        name = (name or "").strip()
        if not name:
            raise ValidationInputError("Type name is required")
        self.type_name = name

    def to_dict(self) -> Dict[str, Any]:
        data = self.model().to_dict()
        data["notice"] = self.notice
        return data


# Global session (one user per process)
_session: Optional[BuilderSession] = None


def get_session() -> BuilderSession:
    """Get the global session, creating it on first use."""
    global _session
    if _session is None:
        _session = BuilderSession()
    return _session


def reset_session() -> None:
    """Drop the global session so the next call starts fresh."""
    global _session
    _session = None
