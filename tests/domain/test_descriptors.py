"""Tests for kind classification and descriptor building."""

from typing import Annotated, Any, Optional

import pytest

from resourcemap.domain.descriptors import (
    FieldDescriptor,
    build_descriptors,
    classify,
    declared_fields,
    is_shape,
)
from resourcemap.domain.errors import ErrorCode, ShapeError
from resourcemap.domain.kinds import INT64, Int32, IntWidth, Kind, UInt8
from tests.shapes import (
    BareNested,
    ComputedType,
    DuplicateTags,
    Inner,
    IntKeys,
    ListOfLists,
    MapOfObjects,
    ModelInner,
    ModelNetwork,
    Partial,
    SimpleType,
    UntaggedOnly,
)


class TestClassify:
    @pytest.mark.parametrize(
        "annotation,kind",
        [
            (str, Kind.STRING),
            (int, Kind.INTEGER),
            (float, Kind.FLOAT),
            (bool, Kind.BOOL),
            (list[str], Kind.LIST_OF_STRING),
            (list[int], Kind.LIST_OF_INTEGER),
            (list[float], Kind.LIST_OF_FLOAT),
            (list[bool], Kind.LIST_OF_BOOL),
            (dict[str, str], Kind.MAP_OF_STRING),
            (dict[str, int], Kind.MAP_OF_INTEGER),
            (dict[str, float], Kind.MAP_OF_FLOAT),
            (dict[str, bool], Kind.MAP_OF_BOOL),
            (list[Inner], Kind.NESTED_LIST_OF_OBJECT),
            (list[ModelInner], Kind.NESTED_LIST_OF_OBJECT),
        ],
    )
    def test_supported(self, annotation: Any, kind: Kind) -> None:
        assert classify(annotation).kind is kind

    @pytest.mark.parametrize(
        "annotation",
        [
            list[list[int]],
            dict[int, str],
            dict[str, Inner],
            dict[str, list[str]],
            Inner,
            Any,
            list,
            bytes,
            int | str,
            tuple[int, str],
        ],
    )
    def test_unrecognized(self, annotation: Any) -> None:
        assert classify(annotation).kind is Kind.UNRECOGNIZED

    def test_plain_int_is_64_bit(self) -> None:
        assert classify(int).width == INT64

    def test_annotated_width(self) -> None:
        assert classify(Int32).width == IntWidth(32)
        assert classify(list[UInt8]).width == IntWidth(8, signed=False)
        assert classify(dict[str, Int32]).width == IntWidth(32)

    def test_optional_unwrapped(self) -> None:
        assert classify(str | None).kind is Kind.STRING
        assert classify(Optional[list[int]]).kind is Kind.LIST_OF_INTEGER
        assert classify(Optional[Int32]).width == IntWidth(32)

    def test_containers_recorded(self) -> None:
        assert classify(set[str]).container is set
        assert classify(frozenset[int]).container is frozenset
        assert classify(tuple[float, ...]).container is tuple
        assert classify(list[bool]).container is list

    def test_nested_shape_recorded(self) -> None:
        assert classify(list[Inner]).nested is Inner

    def test_width_ignored_on_non_integers(self) -> None:
        assert classify(Annotated[str, IntWidth(8)]).width is None


class TestIsShape:
    def test_dataclass_and_model(self) -> None:
        assert is_shape(Inner)
        assert is_shape(ModelInner)

    def test_instances_and_plain_types(self) -> None:
        assert not is_shape(Inner())
        assert not is_shape(dict)
        assert not is_shape("Inner")


class TestDeclaredFields:
    def test_not_a_shape(self) -> None:
        with pytest.raises(ShapeError) as exc_info:
            declared_fields(dict)
        assert exc_info.value.code is ErrorCode.NOT_A_SHAPE

    def test_pydantic_width_preserved(self) -> None:
        fields = {f.name: f for f in declared_fields(ModelNetwork)}
        assert classify(fields["port"].annotation).width == IntWidth(32)


class TestBuildDescriptors:
    def test_simple_type_in_declaration_order(self) -> None:
        descriptors = build_descriptors(SimpleType)
        assert [d.tag for d in descriptors] == [
            "string",
            "number",
            "price",
            "enabled",
            "list_of_floats",
            "list_of_numbers",
            "list_of_strings",
            "map_of_bools",
            "map_of_numbers",
            "map_of_strings",
        ]
        assert descriptors[1] == FieldDescriptor(
            name="number", tag="number", kind=Kind.INTEGER, width=INT64
        )

    def test_computed_flag(self) -> None:
        descriptors = build_descriptors(ComputedType)
        assert all(d.computed for d in descriptors)

    def test_untagged_fields_excluded(self) -> None:
        assert [d.name for d in build_descriptors(Partial)] == ["name", "output"]
        assert build_descriptors(UntaggedOnly) == ()

    def test_non_init_field_marked(self) -> None:
        output = build_descriptors(Partial)[1]
        assert output.init is False
        assert output.computed is True

    def test_pydantic_model(self) -> None:
        descriptors = {d.tag: d for d in build_descriptors(ModelNetwork)}
        assert set(descriptors) == {"name", "port", "networks", "block", "output"}
        assert descriptors["block"].nested is ModelInner
        assert descriptors["output"].computed is True

    def test_map_of_nested_objects_unsupported(self) -> None:
        with pytest.raises(ShapeError) as exc_info:
            build_descriptors(MapOfObjects)
        assert exc_info.value.code is ErrorCode.UNRECOGNIZED_KIND
        assert exc_info.value.path == "MapOfObjects.by_name"
        assert exc_info.value.detail["tag"] == "by_name"

    @pytest.mark.parametrize("shape", [ListOfLists, IntKeys, BareNested])
    def test_other_unrecognized_kinds(self, shape: type) -> None:
        with pytest.raises(ShapeError) as exc_info:
            build_descriptors(shape)
        assert exc_info.value.code is ErrorCode.UNRECOGNIZED_KIND

    def test_duplicate_tag(self) -> None:
        with pytest.raises(ShapeError) as exc_info:
            build_descriptors(DuplicateTags)
        assert exc_info.value.code is ErrorCode.DUPLICATE_TAG

    def test_custom_tag_keys(self) -> None:
        from dataclasses import dataclass, field

        @dataclass
        class Custom:
            name: str = field(default="", metadata={"tf": "name", "ro": "true"})
            other: str = field(default="", metadata={"hcl": "other"})

        descriptors = build_descriptors(Custom, name_tag="tf", computed_tag="ro")
        assert [(d.tag, d.computed) for d in descriptors] == [("name", True)]

    def test_invalid_tag(self) -> None:
        from dataclasses import dataclass, field

        @dataclass
        class Empty:
            name: str = field(default="", metadata={"hcl": ""})

        with pytest.raises(ShapeError) as exc_info:
            build_descriptors(Empty)
        assert exc_info.value.code is ErrorCode.INVALID_TAG

    def test_to_dict(self) -> None:
        descriptors = {d.tag: d.to_dict() for d in build_descriptors(ModelNetwork)}
        assert descriptors["port"] == {
            "name": "port",
            "tag": "port",
            "kind": "integer",
            "computed": False,
            "width": "int32",
        }
        assert descriptors["block"]["nested"] == "ModelInner"
