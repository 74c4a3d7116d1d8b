"""Properties that tie encode and decode together."""

import pytest

from resourcemap.engine.decoder import decode
from resourcemap.engine.encoder import encode
from tests.shapes import (
    ComputedType,
    FrozenNetwork,
    Inner,
    ModelInner,
    ModelNetwork,
    SimpleType,
    Tree,
    ValuedFirst,
    ValuedSecond,
    ValuedThird,
    ValuedThreeLevels,
    Widths,
)

VALUES = [
    SimpleType(
        string="world",
        number=-(2**63),
        price=129.99,
        enabled=True,
        list_of_numbers=[1, 2],
        map_of_numbers={"max": 2**63 - 1},
    ),
    ComputedType(computed_string="c", computed_list_of_strings=["a"]),
    FrozenNetwork(name="prod", subnets=[Inner("a"), Inner("b")]),
    Widths(tiny=-1, port=8080, octet=255, octets=[0, 1], limits={"x": -5}),
    Tree("root", [Tree("a", [Tree("a1", [])]), Tree("b", [])]),
    ValuedThreeLevels(
        [ValuedFirst("f", [ValuedSecond("s", [ValuedThird("t1"), ValuedThird("t2")])])]
    ),
    ModelNetwork(name="n", port=1, networks=["x"], blocks=[ModelInner(value="v")]),
]


@pytest.mark.parametrize("value", VALUES, ids=lambda v: type(v).__name__)
def test_decode_inverts_encode(value: object) -> None:
    assert decode(type(value), encode(value)) == value


@pytest.mark.parametrize("value", VALUES, ids=lambda v: type(v).__name__)
def test_encode_is_canonical(value: object) -> None:
    tree = encode(value)
    assert encode(decode(type(value), tree)) == tree


def test_zero_value_tree_has_every_key() -> None:
    tree = encode(SimpleType())
    assert decode(SimpleType, {}) == decode(SimpleType, tree)
