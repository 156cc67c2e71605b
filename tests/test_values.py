#
# EasyJ - Values Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from easyj.values import (
    Array,
    CharArray,
    Mapping,
    Null,
    Scalar,
    Sequence,
    StringScalar,
    as_value,
    iter_entries,
    iter_items,
    to_value,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class AnyClass:
    def __str__(self):
        return "any"


class TestToValue:
    @pytest.mark.parametrize(
        "obj, kind",
        [
            pytest.param(None, Null, id="none"),
            pytest.param("abc", StringScalar, id="str"),
            pytest.param("", StringScalar, id="str-empty"),
            pytest.param(1, Scalar, id="int"),
            pytest.param(2.5, Scalar, id="float"),
            pytest.param(False, Scalar, id="bool"),
            pytest.param(b"ab", Scalar, id="bytes"),
            pytest.param(bytearray(b"ab"), Scalar, id="bytearray"),
            pytest.param(int, Scalar, id="class"),
            pytest.param(AnyClass(), Scalar, id="object"),
            pytest.param(iter([1]), Scalar, id="iterator"),
            pytest.param([1], Sequence, id="list"),
            pytest.param({1}, Sequence, id="set"),
            pytest.param(frozenset(), Sequence, id="frozenset"),
            pytest.param(collections.deque(), Sequence, id="deque"),
            pytest.param(range(2), Sequence, id="range"),
            pytest.param({"a": 1}.keys(), Sequence, id="dict-keys"),
            pytest.param((1, 2), Array, id="tuple"),
            pytest.param(array.array("i", [1, 2]), Array, id="int-array"),
            pytest.param({"a": 1}, Mapping, id="dict"),
            pytest.param(frozendict(a=1), Mapping, id="frozendict"),
        ],
    )
    def test_kind(self, obj, kind):
        """Adapt native objects to the matching variant."""
        assert type(to_value(obj)) is kind

    @pytest.mark.filterwarnings("ignore::DeprecationWarning")
    def test_char_array(self):
        """Adapt character arrays to CharArray."""
        value = to_value(array.array("u", "hey"))
        assert isinstance(value, CharArray)
        assert value.chars == "hey"

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(Null(), id="null"),
            pytest.param(Scalar(1), id="scalar"),
            pytest.param(Sequence(), id="sequence"),
            pytest.param(Mapping(), id="mapping"),
        ],
    )
    def test_value_passthrough(self, value):
        """Return Value instances unchanged."""
        assert to_value(value) is value

    def test_nested_contents(self):
        """Convert nested items and entries in order."""
        value = to_value({"k": [1, "x"]})
        (key, item), = value.entries
        assert isinstance(key, StringScalar) and key.text == "k"
        assert [type(i) for i in item.items] == [Scalar, StringScalar]

    def test_source_kept(self):
        """Remember the native object a composite was built from."""
        items = [1]
        assert to_value(items).source is items

    def test_self_reference_identity(self):
        """Map a self-containing list to a self-containing Sequence."""
        items = [1]
        items.append(items)
        value = to_value(items)
        assert value.items[1] is value

    def test_shared_child_single_node(self):
        """Map a sub-object shared by two parents to one node."""
        shared = [1]
        value = to_value([shared, shared])
        assert value.items[0] is value.items[1]

    def test_indirect_cycle(self):
        """Build indirect cycles without recursing forever."""
        outer = {}
        outer["inner"] = [outer]
        value = to_value(outer)
        (_, inner), = value.entries
        assert inner.items[0] is value

    def test_deep_nesting(self):
        """Build deeply nested input without exhausting the interpreter stack."""
        deep = []
        for _ in range(5000):
            deep = [deep]
        value = to_value(deep)
        for _ in range(5000):
            (value,) = value.items
        assert isinstance(value, Sequence) and value.items == []


class TestCharArray:
    def test_joins_characters(self):
        """Join an iterable of characters into text."""
        assert CharArray(["a", "b"]).chars == "ab"

    def test_keeps_str(self):
        """Keep str content as is."""
        assert CharArray("a\tb").chars == "a\tb"


class TestIdentity:
    def test_equal_content_not_equal_values(self):
        """Compare values by identity, not by content."""
        assert Sequence([Scalar(1)]) != Sequence([Scalar(1)])

    def test_repr_of_self_reference_terminates(self):
        """Produce a finite repr for a self-containing node."""
        seq = Sequence()
        seq.items.append(seq)
        assert "..." in repr(seq)


class TestAsValue:
    def test_shallow(self):
        """Adapt the top level only and keep children native."""
        inner = [1, 2]
        node = as_value([inner, "x"])
        assert isinstance(node, Sequence)
        assert node.items == []
        assert list(iter_items(node)) == [inner, "x"]
        assert next(iter_items(node)) is inner

    def test_entries_read_from_source(self):
        """Read mapping entries from the native source."""
        node = as_value({"a": [1]})
        assert isinstance(node, Mapping)
        assert list(iter_entries(node)) == [("a", [1])]

    def test_hand_built_children(self):
        """Read children of hand-built nodes from items and entries."""
        one = Scalar(1)
        assert list(iter_items(Array([one]))) == [one]
        pair = (StringScalar("k"), Null())
        assert list(iter_entries(Mapping([pair]))) == [pair]

    def test_nothing_iterated(self):
        """Leave a huge input unread."""
        node = as_value(range(10**12))
        assert isinstance(node, Sequence)
        assert node.source == range(10**12)

    @pytest.mark.parametrize(
        "obj, kind",
        [
            pytest.param(None, Null, id="none"),
            pytest.param("s", StringScalar, id="str"),
            pytest.param(1, Scalar, id="int"),
            pytest.param((1,), Array, id="tuple"),
            pytest.param({}, Mapping, id="dict"),
        ],
    )
    def test_kind(self, obj, kind):
        """Dispatch like to_value()."""
        assert type(as_value(obj)) is kind
