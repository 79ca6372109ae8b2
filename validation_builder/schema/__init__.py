"""
Schema module for Validation JSON.

Provides type classification, path-based schema inference, and
round-trip serialization of the Validation JSON format.
"""

from validation_builder.schema.classifier import DetectedType, detect_type
from validation_builder.schema.errors import (
    SchemaBuilderError,
    ParseError,
    ShapeError,
    ValidationInputError,
)
from validation_builder.schema.model import (
    FieldValidationConfig,
    FieldsConfig,
    PatternsMap,
    ValidationModel,
    set_field,
    normalize_detected_types,
)
from validation_builder.schema.registry import ObjectTypeRegistry
from validation_builder.schema.inference import (
    InferenceResult,
    SchemaInferrer,
    infer_object_type_name,
    infer_schema,
    infer_schema_from_text,
)
from validation_builder.schema.serializer import (
    project_field,
    serialize_validation,
    serialize_model,
    dumps_validation,
)
from validation_builder.schema.parsing import parse_json_text
from validation_builder.schema.loader import load_validation, loads_validation

__all__ = [  # ruff: noqa: RUF022
    # Classification
    "DetectedType",
    "detect_type",
    # Errors
    "SchemaBuilderError",
    "ParseError",
    "ShapeError",
    "ValidationInputError",
    # Model
    "FieldValidationConfig",
    "FieldsConfig",
    "PatternsMap",
    "ValidationModel",
    "set_field",
    "normalize_detected_types",
    "ObjectTypeRegistry",
    # Inference
    "InferenceResult",
    "SchemaInferrer",
    "infer_object_type_name",
    "infer_schema",
    "infer_schema_from_text",
    # Serialization
    "project_field",
    "serialize_validation",
    "serialize_model",
    "dumps_validation",
    "parse_json_text",
    "load_validation",
    "loads_validation",
]
