"""
Schema inference from a sample JSON document.

Walks a decoded JSON value and produces:

- root fields: flat field paths with per-field validation rules
- object types: named field sets for elements of arrays of objects

Arrays are sampled through their first element only. Later elements
that are shaped differently are not reconciled.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from validation_builder.common.logging_config import PerformanceTracker
from validation_builder.schema.classifier import DetectedType, detect_type, is_container
from validation_builder.schema.model import FieldsConfig, set_field
from validation_builder.schema.parsing import parse_json_text
from validation_builder.schema.registry import ObjectTypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_TYPE_BASE = "Item"
ROOT_LEAF_NAME = "root"
ELEMENT_LEAF_NAME = "value"
ARRAY_SUFFIX = "[*]"


@dataclass
class InferenceResult:
    """Output of a single inference pass."""
    root_fields: FieldsConfig = field(default_factory=dict)
    object_types: Dict[str, FieldsConfig] = field(default_factory=dict)


def infer_object_type_name(path: str) -> str:
    """
    Guess an object type name from a collection path.

    Takes the last dotted segment, drops any ``[...]`` suffix, strips one
    trailing ``s`` and capitalizes, e.g. ``roles`` -> ``Role`` and
    ``audit.tasks[*]`` -> ``Task``.

    Args:
        path: Path of the array holding the objects

    Returns:
        Object type name
    """
    base = path.split(".")[-1] if path else DEFAULT_TYPE_BASE

    bracket = base.find("[")
    if bracket >= 0:
        base = base[:bracket]

    if base.endswith("s") and len(base) > 1:
        base = base[:-1]

    if not base:
        base = DEFAULT_TYPE_BASE

    return base[0].upper() + base[1:]


def _array_path(prefix: str) -> str:
    return f"{prefix}{ARRAY_SUFFIX}" if prefix else ARRAY_SUFFIX


def _child_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


class SchemaInferrer:
    """
    Infers root fields and object types from one sample document.

    Every call to ``infer`` starts from an empty registry, so repeated
    calls on the same sample give identical results. The walks use an
    explicit stack, so nesting depth is bounded only by memory.
    """

    def __init__(self):
        self._registry: Optional[ObjectTypeRegistry] = None
        self._root_fields: FieldsConfig = {}

    def infer(self, sample: Any) -> InferenceResult:
        """
        Infer a schema from a decoded JSON value.

        Args:
            sample: Any JSON value (object, array or scalar)

        Returns:
            InferenceResult with root fields and object types
        """
        self._registry = ObjectTypeRegistry()
        self._root_fields = {}

        with PerformanceTracker("schema_inference", logger):
            self._walk_root(sample)

        result = InferenceResult(
            root_fields=self._root_fields,
            object_types=self._registry.to_dict(),
        )
        logger.debug(
            f"Inferred {len(result.root_fields)} root fields and "
            f"{len(result.object_types)} object types"
        )
        return result

    def _walk_root(self, sample: Any) -> None:
        # (value, path, named): a named path is used as is even when empty
        stack: List[Tuple[Any, str, bool]] = [(sample, "", False)]

        while stack:
            value, prefix, named = stack.pop()
            detected = detect_type(value)

            if not is_container(detected):
                set_field(
                    self._root_fields,
                    prefix if named else (prefix or ROOT_LEAF_NAME),
                    required=True,
                    pattern_key="",
                    detected_type=detected,
                )
            elif detected == DetectedType.ARRAY:
                nested = self._walk_root_array(value, prefix)
                if nested is not None:
                    stack.append(nested)
            else:
                # Reversed so children come off the stack in document order
                for key, child in reversed(list(value.items())):
                    stack.append((child, _child_path(prefix, key), True))

    def _walk_root_array(self, value: list, prefix: str) -> Optional[Tuple[Any, str, bool]]:
        """Record the array at ``prefix``; return the element still to walk, if any."""
        array_path = _array_path(prefix)

        if not value:
            # Nothing to sample
            set_field(
                self._root_fields,
                array_path,
                required=True,
                pattern_key="",
                detected_type=DetectedType.ARRAY,
            )
            return None

        element = value[0]
        element_type = detect_type(element)

        if element_type == DetectedType.OBJECT:
            type_name = infer_object_type_name(prefix)
            self._build_object_type(element, type_name)
            set_field(
                self._root_fields,
                array_path,
                required=True,
                pattern_key="",
                detected_type=DetectedType.ARRAY,
                object_type=type_name,
            )
        elif element_type == DetectedType.ARRAY:
            return (element, array_path, False)
        else:
            set_field(
                self._root_fields,
                array_path,
                required=True,
                pattern_key="",
                detected_type=element_type,
            )
        return None

    def _build_object_type(self, sample: dict, type_name: str) -> None:
        fields = self._registry.ensure(type_name)

        if not self._registry.claim(type_name):
            logger.debug(f"Object type {type_name} already built, reusing it")
            return

        self._walk_element(sample, fields)

    def _walk_element(self, sample: Any, fields: FieldsConfig) -> None:
        # Same walk as the root, but arrays of objects are flattened into
        # the current type instead of becoming object types of their own.
        stack: List[Tuple[Any, str, bool]] = [(sample, "", False)]

        while stack:
            value, prefix, named = stack.pop()
            detected = detect_type(value)

            if not is_container(detected):
                set_field(
                    fields,
                    prefix if named else (prefix or ELEMENT_LEAF_NAME),
                    required=True,
                    pattern_key="",
                    detected_type=detected,
                )
            elif detected == DetectedType.ARRAY:
                if value:
                    stack.append((value[0], _array_path(prefix), False))
            else:
                for key, child in reversed(list(value.items())):
                    stack.append((child, _child_path(prefix, key), True))


def infer_schema(sample: Any) -> InferenceResult:
    """Infer a schema from a decoded JSON value."""
    return SchemaInferrer().infer(sample)


def infer_schema_from_text(text: str) -> InferenceResult:
    """
    Parse JSON text and infer a schema from it.

    Raises:
        ParseError: If the text is not valid JSON
    """
    return infer_schema(parse_json_text(text))
