"""
Value model rendered by the EasyJ formatters.

A Value is a closed tagged union: Null, Scalar, StringScalar, CharArray,
Sequence, Array and Mapping. The formatters dispatch on these variants only,
adapting native Python objects one level at a time with as_value().

A composite node either holds its children in `items` / `entries`, or, when
`source` is set, stands for that native container, whose children are read
from it on demand. Children may be Values or native objects.

Composite nodes are compared by identity: a Sequence holding itself in its own
items list is a self-reference, while two equal but distinct Sequences are not.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc
from dataclasses import dataclass, field
from typing import Any, Iterator, Union

__all__ = [
    "Array",
    "CharArray",
    "COMPOSITE_TYPES",
    "Mapping",
    "Null",
    "Scalar",
    "Sequence",
    "StringScalar",
    "Value",
    "VALUE_TYPES",
    "as_value",
    "iter_entries",
    "iter_items",
    "to_value",
]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(eq=False)
class Null:
    """The absent value, rendered as 'null'."""


@dataclass(eq=False)
class Scalar:
    """Any non-composite value, rendered with str()."""
    value: Any


@dataclass(eq=False)
class StringScalar:
    """Character data; escaped and quoted in verbose mode."""
    text: str


@dataclass(eq=False)
class CharArray:
    """
    Raw character buffer, rendered as its literal content.

    Accepts a str or any iterable of single characters.
    """
    chars: str

    def __post_init__(self):
        if not isinstance(self.chars, str):
            self.chars = "".join(self.chars)


@dataclass(eq=False)
class Sequence:
    """Ordered collection of values, insertion order preserved."""
    items: list["Value"] = field(default_factory=list)
    source: Any = field(default=None, repr=False)


@dataclass(eq=False)
class Array:
    """Fixed-size ordered collection of values."""
    items: list["Value"] = field(default_factory=list)
    source: Any = field(default=None, repr=False)


@dataclass(eq=False)
class Mapping:
    """Ordered (key, value) pairs; keys are not deduplicated."""
    entries: list[tuple["Value", "Value"]] = field(default_factory=list)
    source: Any = field(default=None, repr=False)


Value = Union[Null, Scalar, StringScalar, CharArray, Sequence, Array, Mapping]

VALUE_TYPES = (Null, Scalar, StringScalar, CharArray, Sequence, Array, Mapping)
COMPOSITE_TYPES = (Sequence, Array, Mapping)

_CHAR_TYPECODES = ("u", "w")


# Methods --------------------------------------------------------------------------------------------------------------

def as_value(obj: Any) -> Value:
    """
    Adapt the top level of a native object, leaving its children native.

    Composite nodes come back empty with `source` set to obj; read their
    children with iter_items() or iter_entries(). Nothing is iterated here, so
    the cost does not depend on the size of obj.

    Examples:
        >>> node = as_value([[1, 2], 3])
        >>> node.items, node.source
        ([], [[1, 2], 3])
        >>> list(iter_items(node))
        [[1, 2], 3]
    """
    return _adapt(obj, None)


def iter_items(value: Sequence | Array) -> Iterator[Any]:
    """
    Children of a Sequence or Array, read lazily.

    Iterates `source` when the node was adapted from a native object, `items`
    otherwise. Children may be Values or native objects.
    """
    return iter(value.items if value.source is None else value.source)


def iter_entries(value: Mapping) -> Iterator[tuple[Any, Any]]:
    """Key-value pairs of a Mapping, read lazily; see iter_items()."""
    return iter(value.entries if value.source is None else value.source.items())


def to_value(obj: Any) -> Value:
    """
    Adapt a native Python object into a fully built Value graph.

    Dispatch, first match wins:
        - None → Null
        - Value instances → returned as is
        - str → StringScalar
        - bytes, bytearray, memoryview → Scalar
        - array.array of characters ('u', 'w') → CharArray
        - Mapping → Mapping
        - tuple, array.array → Array
        - other sized iterable containers (list, set, deque, range, dict views) → Sequence
        - everything else → Scalar

    Composites are memoized by identity while building, so a list that contains
    itself becomes a Sequence whose item is that same Sequence, and a sub-object
    shared by several parents maps to a single node. The graph is built without
    recursion, so nesting depth is not limited by the interpreter stack.

    Note:
        The whole input is read. The formatters do not call this; they adapt
        one element at a time with as_value() so that a size budget also
        bounds the work.

    Examples:
        >>> to_value([1, "a"])
        Sequence(items=[Scalar(value=1), StringScalar(text='a')])
        >>> loop = []; loop.append(loop)
        >>> node = to_value(loop)
        >>> node.items[0] is node
        True
    """
    memo = {}
    root = _adapt(obj, memo)
    pending = [root]
    filled = set()
    while pending:
        node = pending.pop()
        if not isinstance(node, COMPOSITE_TYPES) or node.source is None or id(node) in filled:
            continue
        filled.add(id(node))
        if isinstance(node, Mapping):
            node.entries = [(_adapt(k, memo), _adapt(v, memo)) for k, v in node.source.items()]
            pending.extend(part for entry in node.entries for part in entry)
        else:
            node.items = [_adapt(item, memo) for item in node.source]
            pending.extend(node.items)
    return root


# Private Methods ------------------------------------------------------------------------------------------------------

def _adapt(obj: Any, memo: dict[int, tuple[Any, Value]] | None) -> Value:
    if obj is None:
        return Null()
    if isinstance(obj, VALUE_TYPES):
        source = getattr(obj, "source", None)
        if memo is not None and source is not None:
            memo.setdefault(id(source), (source, obj))
        return obj
    if isinstance(obj, str):
        return StringScalar(obj)
    if isinstance(obj, (bytes, bytearray, memoryview, type)):
        return Scalar(obj)
    if isinstance(obj, array.array) and obj.typecode in _CHAR_TYPECODES:
        return CharArray(obj.tounicode())

    if memo is not None:
        # memo keeps obj alive alongside its node so ids are not reused mid-build
        seen = memo.get(id(obj))
        if seen is not None:
            return seen[1]

    if isinstance(obj, abc.Mapping):
        node = Mapping(source=obj)
    elif isinstance(obj, (tuple, array.array)):
        node = Array(source=obj)
    elif isinstance(obj, abc.Collection):
        node = Sequence(source=obj)
    else:
        return Scalar(obj)

    if memo is not None:
        memo[id(obj)] = (obj, node)
    return node
