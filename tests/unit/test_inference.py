"""
Unit tests for schema inference.
"""

import pytest

from validation_builder.schema.classifier import DetectedType
from validation_builder.schema.errors import ParseError
from validation_builder.schema.inference import (
    SchemaInferrer,
    infer_object_type_name,
    infer_schema,
    infer_schema_from_text,
)
from validation_builder.schema.model import FieldValidationConfig


def rule(detected, object_type=None):
    return FieldValidationConfig(
        required=True,
        pattern_key="",
        detected_type=detected,
        object_type=object_type,
    )


class TestObjectTypeNaming:
    """Tests for infer_object_type_name."""

    @pytest.mark.parametrize("path, expected", [
        ("roles", "Role"),
        ("tasks", "Task"),
        ("audit.history", "History"),
        ("audit.tasks[*]", "Task"),
        ("c", "C"),
        ("s", "S"),
        ("status", "Statu"),
        ("data", "Data"),
        ("", "Item"),
        ("[*]", "Item"),
    ])
    def test_names(self, path, expected):
        assert infer_object_type_name(path) == expected

    def test_only_one_trailing_s_is_stripped(self):
        assert infer_object_type_name("classes") == "Classe"


class TestRootInference:
    """Tests for root-level field inference."""

    def test_reference_example(self):
        result = infer_schema({"a": {"b": 1}, "c": [{"x": True}]})

        assert result.root_fields == {
            "a.b": rule(DetectedType.NUMBER),
            "c[*]": rule(DetectedType.ARRAY, object_type="C"),
        }
        assert result.object_types == {
            "C": {"x": rule(DetectedType.BOOLEAN)},
        }

    def test_empty_array_creates_no_object_type(self):
        result = infer_schema({"items": []})

        assert result.root_fields == {"items[*]": rule(DetectedType.ARRAY)}
        assert result.object_types == {}

    def test_scalar_array_uses_element_type(self):
        result = infer_schema({"permissions": ["read", "write"], "scores": [1, 2]})

        assert result.root_fields["permissions[*]"].detected_type == DetectedType.STRING
        assert result.root_fields["scores[*]"].detected_type == DetectedType.NUMBER

    def test_array_of_nulls_is_unknown(self):
        result = infer_schema({"gaps": [None]})

        assert result.root_fields == {"gaps[*]": rule(DetectedType.UNKNOWN)}

    def test_array_of_arrays(self):
        result = infer_schema({"matrix": [[1, 2], [3, 4]]})

        assert result.root_fields == {"matrix[*][*]": rule(DetectedType.NUMBER)}

    def test_array_of_arrays_of_objects(self):
        result = infer_schema({"grid": [[{"x": 1}]]})

        assert result.root_fields == {
            "grid[*][*]": rule(DetectedType.ARRAY, object_type="Grid"),
        }
        assert result.object_types == {"Grid": {"x": rule(DetectedType.NUMBER)}}

    def test_null_leaf_is_unknown(self):
        result = infer_schema({"nickname": None})

        assert result.root_fields == {"nickname": rule(DetectedType.UNKNOWN)}

    def test_empty_object_contributes_nothing(self):
        result = infer_schema({"meta": {}, "id": 1})

        assert list(result.root_fields) == ["id"]

    def test_root_scalar(self):
        assert infer_schema("text").root_fields == {"root": rule(DetectedType.STRING)}
        assert infer_schema(None).root_fields == {"root": rule(DetectedType.UNKNOWN)}

    def test_root_array_of_objects(self):
        result = infer_schema([{"a": 1}])

        assert result.root_fields == {"[*]": rule(DetectedType.ARRAY, object_type="Item")}
        assert result.object_types == {"Item": {"a": rule(DetectedType.NUMBER)}}

    def test_root_array_of_scalars(self):
        result = infer_schema(["x", "y"])

        assert result.root_fields == {"[*]": rule(DetectedType.STRING)}

    def test_root_empty_array(self):
        assert infer_schema([]).root_fields == {"[*]": rule(DetectedType.ARRAY)}

    def test_realistic_document(self, user_sample):
        result = infer_schema(user_sample)

        assert set(result.root_fields) == {
            "id",
            "profile.age",
            "profile.active",
            "profile.nickname",
            "permissions[*]",
            "roles[*]",
            "audit.history[*]",
            "attachments[*]",
        }
        assert result.root_fields["roles[*]"].object_type == "Role"
        assert result.root_fields["audit.history[*]"].object_type == "History"
        assert result.root_fields["attachments[*]"].object_type is None
        assert set(result.object_types) == {"Role", "History"}

    def test_every_inferred_rule_is_required_without_pattern(self, user_sample):
        result = infer_schema(user_sample)

        for fields in [result.root_fields, *result.object_types.values()]:
            for cfg in fields.values():
                assert cfg.required is True
                assert cfg.pattern_key == ""
                assert cfg.min_length is None
                assert cfg.max_length is None


class TestObjectTypeInference:
    """Tests for object types built from arrays of objects."""

    def test_fields_are_relative_to_element(self, user_sample):
        result = infer_schema(user_sample)

        assert result.object_types["Role"] == {
            "name": rule(DetectedType.STRING),
            "level": rule(DetectedType.NUMBER),
            "scopes[*]": rule(DetectedType.STRING),
        }

    def test_nested_arrays_of_objects_are_flattened(self):
        sample = {
            "users": [{
                "name": "a",
                "history": [{"action": "create", "by": {"id": 7}}],
                "empty": [],
                "meta": {"k": None},
            }]
        }

        result = infer_schema(sample)

        assert list(result.object_types) == ["User"]
        assert result.object_types["User"] == {
            "name": rule(DetectedType.STRING),
            "history[*].action": rule(DetectedType.STRING),
            "history[*].by.id": rule(DetectedType.NUMBER),
            "meta.k": rule(DetectedType.UNKNOWN),
        }

    def test_nested_scalar_arrays_inside_element(self):
        result = infer_schema({"rows": [{"cells": [[True]]}]})

        assert result.object_types["Row"] == {"cells[*][*]": rule(DetectedType.BOOLEAN)}

    def test_only_first_element_is_sampled(self):
        result = infer_schema({"xs": [{"a": 1}, {"b": "two"}]})

        assert result.object_types == {"X": {"a": rule(DetectedType.NUMBER)}}

    def test_type_name_is_built_once(self):
        sample = {
            "team": {"roles": [{"x": 1}]},
            "org": {"roles": [{"y": "other"}]},
        }

        result = infer_schema(sample)

        assert result.root_fields["team.roles[*]"].object_type == "Role"
        assert result.root_fields["org.roles[*]"].object_type == "Role"
        assert result.object_types == {"Role": {"x": rule(DetectedType.NUMBER)}}

    def test_empty_element_object_gives_empty_type(self):
        result = infer_schema({"blobs": [{}]})

        assert result.object_types == {"Blob": {}}
        assert result.root_fields["blobs[*]"].object_type == "Blob"


class TestInferrerState:
    """Tests that inference carries no state between calls."""

    def test_idempotent(self, user_sample):
        assert infer_schema(user_sample) == infer_schema(user_sample)

    def test_reused_inferrer_starts_fresh(self):
        inferrer = SchemaInferrer()

        first = inferrer.infer({"roles": [{"x": 1}]})
        second = inferrer.infer({"roles": [{"y": True}]})

        assert first.object_types == {"Role": {"x": rule(DetectedType.NUMBER)}}
        assert second.object_types == {"Role": {"y": rule(DetectedType.BOOLEAN)}}

    def test_results_are_independent(self):
        inferrer = SchemaInferrer()
        first = inferrer.infer({"a": 1})
        inferrer.infer({"b": 2})

        assert list(first.root_fields) == ["a"]


class TestInferFromText:
    """Tests for infer_schema_from_text."""

    def test_parses_and_infers(self):
        result = infer_schema_from_text('{"name": "x", "tags": ["a"]}')

        assert set(result.root_fields) == {"name", "tags[*]"}

    def test_invalid_json_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            infer_schema_from_text('{"name": ')

        assert "Invalid JSON" in str(exc_info.value)


class TestDeepNesting:
    """Inference handles nesting far beyond the interpreter's recursion limit."""

    def test_deep_arrays_from_text(self):
        depth = 700

        result = infer_schema_from_text("[" * depth + "1" + "]" * depth)

        assert result.root_fields == {"[*]" * depth: rule(DetectedType.NUMBER)}

    def test_deep_objects(self):
        depth = 5000
        sample = "leaf"
        for _ in range(depth):
            sample = {"k": sample}

        result = infer_schema(sample)

        assert result.root_fields == {".".join(["k"] * depth): rule(DetectedType.STRING)}

    def test_deep_nesting_inside_object_type(self):
        depth = 5000
        inner = True
        for _ in range(depth):
            inner = [inner]

        result = infer_schema({"rows": [{"cells": inner}]})

        assert result.object_types == {
            "Row": {"cells" + "[*]" * depth: rule(DetectedType.BOOLEAN)},
        }

    def test_children_keep_document_order(self):
        result = infer_schema({"b": 1, "a": {"y": 2, "x": 3}, "c": [4]})

        assert list(result.root_fields) == ["b", "a.y", "a.x", "c[*]"]

    def test_empty_key_at_root(self):
        result = infer_schema({"": 1})

        assert result.root_fields == {"": rule(DetectedType.NUMBER)}


class TestNonJsonConstants:
    """NaN and Infinity are not JSON."""

    @pytest.mark.parametrize("text", ['{"a": NaN}', '{"b": Infinity}', '[-Infinity]'])
    def test_rejected(self, text):
        with pytest.raises(ParseError):
            infer_schema_from_text(text)

    def test_too_deep_to_decode_is_parse_error(self):
        depth = 100000

        with pytest.raises(ParseError, match="nested too deeply"):
            infer_schema_from_text("[" * depth + "]" * depth)
