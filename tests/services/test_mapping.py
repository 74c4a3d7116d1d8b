"""Tests for MappingService and shape import."""

from pathlib import Path

import pytest

from resourcemap.config.settings import MapSettings
from resourcemap.domain.errors import ErrorCode, ShapeError
from resourcemap.services.mapping import MappingService, import_shape
from tests.shapes import Inner, MapOfObjects, Outer, SimpleType


@pytest.fixture
def service(tmp_path: Path) -> MappingService:
    return MappingService(MapSettings.from_cli(start=tmp_path))


class TestImportShape:
    def test_imports_dataclass(self) -> None:
        assert import_shape("tests.shapes:Inner") is Inner

    @pytest.mark.parametrize(
        "ref",
        ["tests.shapes", "tests.shapes:", ":Inner", "tests.nope:Inner", "tests.shapes:Nope"],
    )
    def test_bad_reference(self, ref: str) -> None:
        with pytest.raises(ShapeError) as exc_info:
            import_shape(ref)
        assert exc_info.value.code is ErrorCode.NOT_A_SHAPE

    def test_not_a_shape(self) -> None:
        with pytest.raises(ShapeError, match="neither a dataclass"):
            import_shape("tests.shapes:attribute")


class TestDescribe:
    def test_lists_descriptors(self, service: MappingService) -> None:
        result = service.describe(Outer)
        assert result.ok
        assert result.data["shape"] == "Outer"
        assert result.data["count"] == 1
        assert result.data["fields"][0]["tag"] == "inner"
        assert result.data["fields"][0]["kind"] == "nested_list_of_object"

    def test_unsupported_shape(self, service: MappingService) -> None:
        result = service.describe(MapOfObjects)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "unrecognized_kind"


class TestEncode:
    def test_success(self, service: MappingService) -> None:
        result = service.encode(Inner("a"))
        assert result.ok
        assert result.data == {"shape": "Inner", "tree": {"value": "a"}}

    def test_failure(self, service: MappingService) -> None:
        result = service.encode(SimpleType(number=2**64))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "integer_overflow"
        assert result.error.path == "number"


class TestDecode:
    def test_canonical_tree(self, service: MappingService) -> None:
        result = service.decode(Outer, {"inner": [{"value": "x"}]})
        assert result.ok
        assert result.data["tree"] == {"inner": [{"value": "x"}]}
        assert result.data["object"] == repr(Outer([Inner("x")]))
        assert result.warnings == []

    def test_unknown_keys_warned(self, service: MappingService) -> None:
        result = service.decode(Inner, {"value": "x", "zeta": 1, "alpha": 2})
        assert result.ok
        assert result.warnings == ["Ignored unknown key: alpha", "Ignored unknown key: zeta"]

    def test_nested_failure_carries_cause(self, service: MappingService) -> None:
        result = service.decode(Outer, {"inner": [{"value": 1}]})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "nested_decode_failed"
        assert result.error.path == "inner[0]"
        assert result.error.detail["cause"]["path"] == "inner[0].value"
