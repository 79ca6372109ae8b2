"""
Unit tests for the object-type registry.
"""

import pytest

from validation_builder.schema.classifier import DetectedType
from validation_builder.schema.errors import ValidationInputError
from validation_builder.schema.model import FieldValidationConfig
from validation_builder.schema.registry import ObjectTypeRegistry


class TestObjectTypeRegistry:
    """Tests for ObjectTypeRegistry."""

    @pytest.fixture
    def registry(self):
        return ObjectTypeRegistry({
            "Role": {"name": FieldValidationConfig(detected_type=DetectedType.STRING)},
        })

    def test_mapping_protocol(self, registry):
        assert "Role" in registry
        assert len(registry) == 1
        assert list(registry) == ["Role"]
        assert "name" in registry["Role"]

    def test_copies_initial_entries(self):
        source = {"Role": {}}
        registry = ObjectTypeRegistry(source)
        registry.add_field("Role", "name")

        assert source == {"Role": {}}

    def test_ensure_creates_once(self):
        registry = ObjectTypeRegistry()

        first = registry.ensure("Task")
        first["title"] = FieldValidationConfig()

        assert registry.ensure("Task") is first

    def test_claim_only_once(self):
        registry = ObjectTypeRegistry()

        assert registry.claim("Task") is True
        assert registry.is_built("Task")
        assert registry.claim("Task") is False

    def test_add_strips_name(self):
        registry = ObjectTypeRegistry()
        registry.add("  Address ")

        assert registry.to_dict() == {"Address": {}}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_add_rejects_empty(self, name):
        registry = ObjectTypeRegistry()

        with pytest.raises(ValidationInputError, match="required"):
            registry.add(name)
        assert len(registry) == 0

    def test_add_rejects_duplicate(self, registry):
        with pytest.raises(ValidationInputError, match="already exists"):
            registry.add("Role")

        assert "name" in registry["Role"]

    def test_add_field(self, registry):
        cfg = registry.add_field("Role", " level ")

        assert cfg == FieldValidationConfig(
            required=True, pattern_key="", detected_type=DetectedType.UNKNOWN)
        assert "level" in registry["Role"]

    def test_add_field_unknown_type(self, registry):
        with pytest.raises(ValidationInputError, match="Unknown ObjectType"):
            registry.add_field("Missing", "x")

    def test_add_field_empty_path(self, registry):
        with pytest.raises(ValidationInputError):
            registry.add_field("Role", "  ")

    def test_update_field_merges(self, registry):
        registry.update_field("Role", "name", pattern_key="slug", max_length=20)
        registry.update_field("Role", "name", required=False)

        cfg = registry["Role"]["name"]
        assert cfg.required is False
        assert cfg.pattern_key == "slug"
        assert cfg.max_length == 20
        assert cfg.detected_type == DetectedType.STRING

    def test_update_field_rejects_object_type(self, registry):
        with pytest.raises(ValidationInputError, match="root fields"):
            registry.update_field("Role", "name", object_type="Other")

    def test_update_unknown_field(self, registry):
        with pytest.raises(ValidationInputError, match="Unknown field"):
            registry.update_field("Role", "missing", required=False)
