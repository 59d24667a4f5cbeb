"""Tests for the typed placeholder rules: string, numeric, clamp and custom handlers."""

from typing import Any

import pytest

from sqlprep.config import EngineConfig
from sqlprep.exceptions import (
    NullabilityError,
    ParameterRangeError,
    ParameterTypeError,
    PlaceholderSyntaxError,
    SerializationError,
)
from sqlprep.parameters import register_type
from sqlprep.parameters.engine import prepare
from sqlprep.parameters.modifiers import Modifiers
from sqlprep.parameters.registry import TypeRegistry


class TestStringRule:
    @pytest.mark.parametrize("type_name", ["s", "string", "varchar", "char", "text"])
    def test_string_types_quote_and_escape(self, type_name: str, config: EngineConfig) -> None:
        assert prepare(f"%{type_name}", "it's", config=config) == '"it\\\'s"'

    def test_requires_string(self, config: EngineConfig) -> None:
        with pytest.raises(ParameterTypeError):
            prepare("%s", 5, config=config)

    @pytest.mark.parametrize(
        ("template", "value", "expected"),
        [
            ("%s:trim", "  a  b  ", "'a  b'"),
            ("%s:pack", "  a \n\t b  ", "'a b'"),
            ("%s:enull", "", "NULL"),
            ("%s:trim:enull", "   ", "NULL"),
            ("%s:enull", "x", "'x'"),
            ("%s:lower", "ABC", "'abc'"),
            ("%s:upper", "abc", "'ABC'"),
            ("%s:ucfirst", "hello world", "'Hello world'"),
            ("%s:ucwords", "hello wORLD", "'Hello WORLD'"),
            ("%s:md5", "abc", "'900150983cd24fb0d6963f7d28e17f72'"),
            ("%s:sha1", "abc", "'a9993e364706816aba3e25717850c26c9cd0d89d'"),
            ("%s:trim:upper:md5", " abc ", "'902fbdd2b1df0c4f70b4a5d23525e932'"),
        ],
    )
    def test_transforms(self, template: str, value: str, expected: str, standard_config: EngineConfig) -> None:
        assert prepare(template, value, config=standard_config) == expected

    def test_length_maximum(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:3", "abc", config=standard_config) == "'abc'"
        with pytest.raises(ParameterRangeError) as exc_info:
            prepare("%s:3", "abcd", config=standard_config)
        assert "maximum of 3" in str(exc_info.value)

    def test_length_crop(self, standard_config: EngineConfig) -> None:
        assert prepare("%varchar:3:crop", "abcdef", config=standard_config) == "'abc'"
        assert prepare("%varchar:crop{2:4}", "abcdef", config=standard_config) == "'abcd'"

    def test_length_minimum(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:2:5", "abc", config=standard_config) == "'abc'"
        with pytest.raises(ParameterRangeError) as exc_info:
            prepare("%s:2:5", "a", config=standard_config)
        assert "minimum of 2" in str(exc_info.value)
        assert isinstance(exc_info.value, ValueError)

    def test_length_is_checked_after_trim(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:trim:3", "  abc  ", config=standard_config) == "'abc'"

    @pytest.mark.parametrize("template", ["%s:1:2:3", "%s:1.5", "%s:-1:5"])
    def test_malformed_length_range(self, template: str, standard_config: EngineConfig) -> None:
        with pytest.raises(PlaceholderSyntaxError):
            prepare(template, "abc", config=standard_config)

    def test_quoting_policy(self, config: EngineConfig) -> None:
        assert prepare("%s:raw", "a'b", config=config) == "a'b"
        assert prepare("%s:noquot", "a'b", config=config) == "a\\'b"
        assert prepare("%s:noescape", "a'b", config=config) == "\"a'b\""

    def test_json_encode(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:json_encode AND ?", {"a": 1}, 1, config=standard_config) == "'{\"a\":1}' AND 1"
        assert prepare("%text:jsonify AND ?", ["x", None], 1, config=standard_config) == "'[\"x\",null]' AND 1"

    def test_json_encode_in_compatibility_mode_encodes_whole_list(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:to_json", [1, 2], config=standard_config) == "'[1,2]'"

    def test_json_encode_packs_list_elements(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:to_json:pack", ["  a   b ", 2], config=standard_config) == "'[\"a b\",2]'"

    def test_json_decode(self, standard_config: EngineConfig) -> None:
        assert prepare("%s:json_decode", '"abc"', config=standard_config) == "'abc'"
        with pytest.raises(SerializationError):
            prepare("%s:json_decode", "{bad", config=standard_config)

    def test_null_requires_nullable(self, config: EngineConfig) -> None:
        with pytest.raises(NullabilityError) as exc_info:
            prepare("%s", None, config=config)
        assert exc_info.value.index == 0
        assert prepare("%s:n", None, config=config) == "NULL"
        assert prepare("%s:nullable", None, config=config) == "NULL"


class TestNumericRule:
    @pytest.mark.parametrize("type_name", ["d", "f", "e", "float", "id", "int", "byte", "bit", "integer", "unsigned"])
    def test_numeric_types(self, type_name: str, config: EngineConfig) -> None:
        assert prepare(f"%{type_name}", 42, config=config) == "42"

    @pytest.mark.parametrize(("value", "expected"), [(5, "5"), ("18", "18"), (1.5, "1.5"), (3.0, "3")])
    def test_numeric_values(self, value: Any, expected: str, config: EngineConfig) -> None:
        assert prepare("%d", value, config=config) == expected

    @pytest.mark.parametrize("value", ["abc", "007", True, [1]])
    def test_requires_numeric(self, value: Any, config: EngineConfig) -> None:
        with pytest.raises(ParameterTypeError):
            prepare("%d AND ?", value, 1, config=config)

    def test_null(self, config: EngineConfig) -> None:
        with pytest.raises(NullabilityError):
            prepare("%int", None, config=config)
        assert prepare("%int:n", None, config=config) == "NULL"

    @pytest.mark.parametrize(("value", "expected"), [(50, "10"), (0, "1"), (5, "5"), ("7", "7")])
    def test_clamp_modifier(self, value: Any, expected: str, config: EngineConfig) -> None:
        assert prepare("%d:clamp:1:10", value, config=config) == expected

    def test_clamp_float_bounds(self, config: EngineConfig) -> None:
        assert prepare("%f:clamp:0:1", 1.5, config=config) == "1"
        assert prepare("%f:clamp:0:1.5", 2, config=config) == "1.5"


class TestClampType:
    def test_range_in_argument(self, config: EngineConfig) -> None:
        assert prepare("%clamp{1:10}", 50, config=config) == "10"

    def test_single_bound_defaults_minimum_to_zero(self, config: EngineConfig) -> None:
        assert prepare("%clamp:10", -3, config=config) == "0"
        assert prepare("%clamp:10", 30, config=config) == "10"

    def test_open_bounds(self, config: EngineConfig) -> None:
        assert prepare("%clamp:5:", 1, config=config) == "5"
        assert prepare("%clamp:5:", 100, config=config) == "100"

    def test_requires_range(self, config: EngineConfig) -> None:
        with pytest.raises(PlaceholderSyntaxError):
            prepare("%clamp", 5, config=config)

    def test_inverted_range(self, config: EngineConfig) -> None:
        with pytest.raises(PlaceholderSyntaxError):
            prepare("%clamp:10:1", 5, config=config)

    def test_requires_numeric(self, config: EngineConfig) -> None:
        with pytest.raises(ParameterTypeError):
            prepare("%clamp:1:10", "abc", config=config)


class TestPassthrough:
    @pytest.mark.parametrize(
        ("template", "value", "expected"),
        [
            ("%bogus", 5, "5"),
            ("%bogus", "x'y", "x'y"),
            ("%date", "2024-01-01", "2024-01-01"),
            ("%bool", True, "1"),
        ],
    )
    def test_unknown_and_passthrough_types(self, template: str, value: Any, expected: str, config: EngineConfig) -> None:
        assert prepare(template, value, config=config) == expected


class TestCustomHandlers:
    def test_custom_type_result_is_spliced(self, registry: TypeRegistry, config: EngineConfig) -> None:
        registry.register_type("upper", lambda value, modifiers: f"'{str(value).upper()}'")
        assert prepare("name = %upper", "abc", config=config) == "name = 'ABC'"

    def test_custom_type_receives_modifiers(self, registry: TypeRegistry, config: EngineConfig) -> None:
        seen: "list[Modifiers]" = []

        def handler(value: Any, modifiers: Modifiers) -> str:
            seen.append(modifiers)
            return "x"

        registry.register_type("money", handler)
        prepare("%money:usd{2}", 5, config=config)
        assert seen == [Modifiers(":usd", "2")]

    def test_custom_type_returning_none_falls_back(self, registry: TypeRegistry, config: EngineConfig) -> None:
        registry.register_type("s", lambda value, modifiers: None)
        assert prepare("%s", "abc", config=config) == '"abc"'

    def test_custom_type_can_shadow_builtin(self, registry: TypeRegistry, config: EngineConfig) -> None:
        registry.register_type("d", lambda value, modifiers: f"CAST({value} AS SIGNED)")
        assert prepare("%d", 5, config=config) == "CAST(5 AS SIGNED)"

    def test_custom_modifier_transforms_value(self, registry: TypeRegistry, config: EngineConfig) -> None:
        registry.register_modifier("reverse", lambda value, modifiers: value[::-1])
        assert prepare("%s:reverse:upper", "abc", config=config) == '"CBA"'

    def test_process_registry(self) -> None:
        register_type("upper", lambda value, modifiers: str(value).upper())
        assert prepare("%upper", "abc") == "ABC"

    def test_null_check_runs_before_custom_type(self, registry: TypeRegistry, config: EngineConfig) -> None:
        registry.register_type("money", lambda value, modifiers: "x")
        with pytest.raises(NullabilityError):
            prepare("%money", None, config=config)
