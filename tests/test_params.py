"""Tests for wayfinder.routing.params: path pattern compilation."""

import pytest

from wayfinder.errors import ConfigurationError
from wayfinder.routing.params import CONVERTERS, compile_path, convert_param


class TestConverters:
    def test_all_types_registered(self) -> None:
        assert set(CONVERTERS) == {"str", "int", "float", "path"}

    def test_int_conversion(self) -> None:
        assert convert_param("42", "int") == 42
        assert isinstance(convert_param("42", "int"), int)

    def test_float_conversion(self) -> None:
        assert convert_param("3.14", "float") == pytest.approx(3.14)

    def test_unknown_converter_raises(self) -> None:
        with pytest.raises(KeyError):
            convert_param("x", "uuid")


class TestCompilePath:
    def test_static(self) -> None:
        compiled = compile_path("/about")
        assert compiled.match("/about") == {}
        assert compiled.match("/about/team") is None

    def test_default_str_param_stops_at_slash(self) -> None:
        compiled = compile_path("/users/{name}")
        assert compiled.match("/users/ada") == {"name": "ada"}
        assert compiled.match("/users/ada/posts") is None

    def test_path_param_spans_slashes(self) -> None:
        compiled = compile_path("/files/{filepath:path}")
        assert compiled.match("/files/docs/api/v2.md") == {"filepath": "docs/api/v2.md"}

    def test_regex_metacharacters_are_literal(self) -> None:
        compiled = compile_path("/logo.png")
        assert compiled.match("/logo.png") == {}
        assert compiled.match("/logoXpng") is None

    def test_param_inside_segment(self) -> None:
        compiled = compile_path("/v{version:int}/items")
        assert compiled.match("/v2/items") == {"version": 2}

    def test_float_param(self) -> None:
        compiled = compile_path("/price/{amount:float}")
        assert compiled.match("/price/9.5") == {"amount": 9.5}

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter"):
            compile_path("/users/{id:uuid}")

    def test_duplicate_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            compile_path("/{id}/{id}")

    def test_path_converter_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="last segment"):
            compile_path("/{rest:path}/edit")

    def test_rejects_angle_placeholder(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            compile_path("/share/<slug>")
        assert "{param}" in str(exc_info.value)

    def test_requires_leading_slash(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_path("users")

    def test_invalid_param_name(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_path("/{not-valid}")
