"""Tests for human and JSON result formatting."""

import json

from resourcemap.output.console import create_console, get_output, style_for_kind
from resourcemap.output.formatters import format_result
from resourcemap.services.result import OperationError, OperationResult


class TestFormatResult:
    def test_json_output(self) -> None:
        result = OperationResult(ok=True, op="encode", data={"tree": {"a": 1}})
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["data"]["tree"] == {"a": 1}

    def test_error_with_path(self) -> None:
        result = OperationResult(
            ok=False,
            op="decode",
            error=OperationError(code="type_mismatch", message="expected string", path="a[0]"),
        )
        assert format_result(result) == "ERROR: decode - type_mismatch at a[0]: expected string"

    def test_error_without_path(self) -> None:
        result = OperationResult(
            ok=False, op="describe", error=OperationError(code="not_a_shape", message="nope")
        )
        assert format_result(result) == "ERROR: describe - not_a_shape: nope"

    def test_generic_success(self) -> None:
        result = OperationResult(
            ok=True, op="decode", data={"shape": "Inner", "tree": {"value": "x"}}
        )
        assert format_result(result) == 'OK: decode\n  shape: Inner\n  tree: {"value":"x"}'

    def test_describe_table(self) -> None:
        result = OperationResult(
            ok=True,
            op="describe",
            data={
                "shape": "Widths",
                "count": 2,
                "fields": [
                    {
                        "name": "tiny",
                        "tag": "tiny",
                        "kind": "integer",
                        "computed": False,
                        "width": "int8",
                    },
                    {
                        "name": "tags",
                        "tag": "tags",
                        "kind": "list_of_string",
                        "computed": True,
                        "container": "set",
                    },
                ],
            },
        )
        output = format_result(result, no_color=True)
        assert "Widths (2 fields)" in output
        assert "width=int8" in output
        assert "container=set" in output
        assert "yes" in output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_style_for_kind(self) -> None:
        assert style_for_kind("string") == "map.kind.scalar"
        assert style_for_kind("map_of_bool") == "map.kind.collection"
        assert style_for_kind("nested_list_of_object") == "map.kind.nested"
