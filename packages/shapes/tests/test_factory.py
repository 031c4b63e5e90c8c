"""Test building descriptors from configuration."""

import json
from collections import OrderedDict

import pytest
import yaml
from dataknobs_config import FactoryBase

from dataknobs_shapes import (
    ConfigurationError,
    Mode,
    ObjectType,
    TypeFactory,
    create_message,
    load_type,
    type_factory,
)


ORDER_CONFIG = {
    "type": "object",
    "name": "Order",
    "mode": "violet",
    "required": {
        "id": {
            "type": "number",
            "constraints": [{"type": "integer"}, {"type": "min", "limit": 1}],
        },
        "lines": {"type": "array", "items": {"type": "string"}},
    },
    "optional": {
        "note": {"type": "string", "allow": [{"type": "number"}]},
    },
}


class TestTypeFactory:
    """Test the TypeFactory configuration surface."""

    def test_is_config_factory(self):
        """Test the factory plugs into dataknobs_config as a FactoryBase."""
        assert isinstance(type_factory, FactoryBase)
        assert issubclass(TypeFactory, FactoryBase)

    def test_object_config(self):
        """Test building a violet object with nested configuration."""
        factory = TypeFactory()
        order = factory.create(**ORDER_CONFIG)

        assert isinstance(order, ObjectType)
        assert order.mode is Mode.VIOLET
        assert order.name == "Order(violet)"
        assert order.shape.required["id"].name == "number(integer, >=1)"
        assert order.shape.optional["note"].name == "(string | number)"

        result = order.decode({"id": 3, "lines": ["a"], "note": 4, "extra": True})
        assert result.value == {"id": 3, "lines": ["a"], "note": 4}

    def test_config_failures_render(self):
        """Test descriptors built from configuration report like hand-built ones."""
        order = type_factory.create(**ORDER_CONFIG)
        result = order.decode({"id": 0, "lines": "a"})

        assert create_message(result).splitlines() == [
            "Invalid value supplied to $: Order(violet)",
            "  Invalid value supplied to $.id: number(integer, >=1)",
            "    Supplied value `0' is not >=1",
            "  Invalid value supplied to $.lines: string[]",
            "    Supplied value `\"a\"' is not string[]",
        ]

    def test_union_config(self):
        """Test union configuration."""
        t = type_factory.create(type="union", types=[{"type": "null"}, {"type": "boolean"}])
        assert t.name == "(null | boolean)"

    def test_strict_config(self):
        """Test strict mode from configuration."""
        t = type_factory.create(type="object", mode="strict", required={"a": {"type": "any"}})
        assert t.name == "{ a: any }(strict)"
        assert not t.decode({"a": 1, "b": 2}).valid

    def test_string_constraints(self):
        """Test constraints given as names or mappings."""
        t = type_factory.create(
            type="string",
            constraints=[{"type": "min_length", "limit": 2}, {"type": "regex", "pattern": "[a-z]+"}],
        )
        assert t.name == "string(length>=2, /[a-z]+/)"

        p = type_factory.create(type="number", constraints=["parse_float", "positive"])
        assert p.decode("2").value == 2.0

    def test_class_constraint(self):
        """Test class refinements loaded from dotted paths."""
        t = type_factory.create(
            type="object",
            required={"a": {"type": "number"}},
            constraints=[{"type": "type", "class": "collections.OrderedDict"}],
        )
        assert t.decode(OrderedDict(a=1)).valid
        assert not t.decode({"a": 1}).valid

    @pytest.mark.parametrize("config", [
        {"type": "date"},
        {},
        {"type": "array"},
        {"type": "union", "types": []},
        {"type": "object", "mode": "lenient"},
        {"type": "number", "constraints": [{"type": "max"}]},
        {"type": "number", "constraints": [{"type": "regex", "pattern": "x"}]},
        {"type": "number", "constraints": [{"type": "between"}]},
        {"type": "object", "constraints": [{"type": "instanceof", "class": "nowhere.Missing"}]},
        {"type": "object", "constraints": [{"type": "instanceof", "class": "collections.Nothing"}]},
        {"type": "object", "constraints": [{"type": "instanceof", "class": "dict"}]},
    ])
    def test_invalid_config(self, config):
        """Test invalid configurations raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            type_factory.create(**config)

    def test_unknown_type_context(self):
        """Test the error context lists the known types."""
        with pytest.raises(ConfigurationError) as exc_info:
            type_factory.create(type="date")
        assert exc_info.value.context["type"] == "date"
        assert "object" in exc_info.value.context["available"]


class TestLoadType:
    """Test loading descriptors from files."""

    def test_yaml_file(self, tmp_path):
        """Test loading a YAML definition."""
        path = tmp_path / "order.yaml"
        path.write_text(yaml.safe_dump(ORDER_CONFIG, sort_keys=False))

        order = load_type(path)
        assert order.name == "Order(violet)"
        assert order.decode({"id": 1, "lines": []}).valid

    def test_json_file(self, tmp_path):
        """Test loading a JSON definition."""
        path = tmp_path / "point.json"
        path.write_text(json.dumps({"type": "array", "items": {"type": "number"}}))
        assert load_type(str(path)).name == "number[]"

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_type(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test unknown extensions are rejected."""
        path = tmp_path / "order.toml"
        path.write_text("type = 'string'")
        with pytest.raises(ConfigurationError):
            load_type(path)

    def test_non_mapping_document(self, tmp_path):
        """Test a document that is not a mapping is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_type(path)

    def test_extends_base_file(self, tmp_path):
        """Test a definition extending a sibling file merges its fields."""
        (tmp_path / "base.yaml").write_text(yaml.safe_dump({
            "type": "object",
            "name": "Record",
            "required": {"id": {"type": "number", "constraints": ["integer"]}},
        }))
        (tmp_path / "child.yaml").write_text(yaml.safe_dump({
            "extends": "base",
            "name": "Order",
            "required": {"total": {"type": "number"}},
        }))

        order = load_type(tmp_path / "child.yaml")
        assert order.name == "Order"
        assert sorted(order.shape.required) == ["id", "total"]
        assert order.decode({"id": 1, "total": 9.5}).valid
        assert not order.decode({"total": 9.5}).valid

    def test_regex_pattern_not_substituted(self, tmp_path):
        """Test a pattern that looks like an environment variable is kept."""
        path = tmp_path / "code.yaml"
        path.write_text(yaml.safe_dump({
            "type": "string",
            "constraints": [{"type": "regex", "pattern": "${HOME}"}],
        }))
        assert load_type(path).name == "string(/${HOME}/)"

    def test_missing_parent_file(self, tmp_path):
        """Test an unknown extends target raises ConfigurationError."""
        path = tmp_path / "child.yaml"
        path.write_text("extends: nowhere\ntype: string\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_type(path)
        assert exc_info.value.context["path"] == str(path)
