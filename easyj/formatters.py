"""
Cycle-safe, size-bounded formatters for composite values.

Renders sequences, arrays and mappings into a canonical bracketed text such as
`[1, 2, [a:b]]`, with an optional verbose mode that quotes and escapes strings.
All formatters accept either a Value (see easyj.values) or any native Python
object, whose children are adapted one at a time while rendering, so a finite
size budget bounds both the work done and the recursion depth.

Output grammar:
    - Sequence and Array: `[]`, `[e1, e2]`
    - Mapping: `[:]`, `[k1:v1, k2:v2]`
    - Direct self-reference: `(this Collection)`, `(this Map)`
    - Truncation marker: `...`, enclosing brackets still close
    - Null anywhere: `null`
    - Safe-mode fallback: `<module.Kind@hexid>`

A render keeps no state between calls: every top-level call owns one output sink
and one size budget, threaded through the recursion by parameter.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifunset
from .utils import class_name, identity_hash
from .values import (
    Array,
    COMPOSITE_TYPES,
    CharArray,
    Mapping,
    Null,
    Scalar,
    Sequence,
    StringScalar,
    VALUE_TYPES,
    Value,
    as_value,
    iter_entries,
    iter_items,
)

UNBOUNDED = -1

NULL_TEXT = "null"
EMPTY_MAP_TEXT = "[:]"
SELF_COLLECTION_TEXT = "(this Collection)"
SELF_MAP_TEXT = "(this Map)"
TRUNCATION_TEXT = "..."
SEPARATOR = ", "

# Applied in order, each over the previous result. The last pair maps backslash
# onto itself, so backslashes already present in the text stay unescaped.
VERBOSE_ESCAPES = (
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\f", "\\f"),
    ("'", "\\'"),
    ("\\", "\\"),
)


# Classes --------------------------------------------------------------------------------------------------------------

class ElementRenderError(RuntimeError):
    """Rendering one element of a composite value failed."""


@dataclass(frozen=True)
class FmtOptions:
    """
    Per-call formatting options.

    Attributes:
        verbose: Quote and escape string scalars (inspect mode).
        max_size: Soft character budget for composite output. Negative or None
            means unbounded; normalized to -1.
        safe: Replace elements whose rendering raises with a fallback token
            instead of aborting the whole render.

    Raises:
        ValueError: If max_size is not an int or None.
    """
    verbose: bool = False
    max_size: int | None = UNBOUNDED
    safe: bool = False

    def __post_init__(self):
        """Validate and normalize fields"""
        if self.max_size is None:
            object.__setattr__(self, "max_size", UNBOUNDED)
        elif isinstance(self.max_size, bool) or not isinstance(self.max_size, int):
            raise ValueError(f"max_size must be an int or None, but found {self.max_size!r}")
        elif self.max_size < 0:
            object.__setattr__(self, "max_size", UNBOUNDED)

    @classmethod
    def plain(cls) -> Self:
        """Raw strings, no size limit, failures propagate."""
        return cls()

    @classmethod
    def inspect(cls) -> Self:
        """Quoted and escaped strings, no size limit."""
        return cls(verbose=True)

    @classmethod
    def safe_mode(cls, max_size: int | None = UNBOUNDED) -> Self:
        """Plain output where failing elements degrade to fallback tokens."""
        return cls(max_size=max_size, safe=True)

    @property
    def bounded(self) -> bool:
        return self.max_size >= 0

    def merge(self,
              verbose: bool | UnsetType = UNSET,
              max_size: int | None | UnsetType = UNSET,
              safe: bool | UnsetType = UNSET,
              ) -> "FmtOptions":
        """
        Create a new FmtOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.
        """
        return FmtOptions(
            verbose=ifunset(verbose, default=self.verbose),
            max_size=ifunset(max_size, default=self.max_size),
            safe=ifunset(safe, default=self.safe),
        )


class _Sink:
    """Shared append buffer of one top-level render."""
    __slots__ = ("parts", "length", "truncated")

    def __init__(self) -> None:
        self.parts: list[str] = []
        self.length = 0
        self.truncated = False

    def write(self, text: str) -> None:
        self.parts.append(text)
        self.length += len(text)

    def mark(self) -> tuple[int, int, bool]:
        return len(self.parts), self.length, self.truncated

    def rewind(self, mark: tuple[int, int, bool]) -> None:
        n_parts, self.length, self.truncated = mark
        del self.parts[n_parts:]

    def getvalue(self) -> str:
        return "".join(self.parts)


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_scalar(obj: Any, verbose: bool = False) -> str:
    """
    Render a single non-composite value.

    Args:
        obj: A Null, Scalar, StringScalar or CharArray, or a native object that
            adapts to one of them.
        verbose: Quote and escape strings.

    Returns:
        Text of the value: `null` for None, raw text for strings in plain mode,
        the single-quoted escaped form in verbose mode, str() for other scalars
        and the literal characters of a CharArray.

    Raises:
        TypeError: If obj is a composite value.

    Examples:
        >>> fmt_scalar(None)
        'null'
        >>> fmt_scalar(3.5)
        '3.5'
        >>> fmt_scalar("text", verbose=True)
        "'text'"
        >>> fmt_scalar(CharArray("abc"), verbose=True)
        'abc'
    """
    value = as_value(obj)

    if isinstance(value, Null):
        return NULL_TEXT
    if isinstance(value, StringScalar):
        return _escape(value.text) if verbose else value.text
    if isinstance(value, CharArray):
        return value.chars
    if isinstance(value, Scalar):
        return str(value.value)

    raise TypeError(f"scalar value expected, but found composite {class_name(value)}")


def fmt_value(obj: Any, *, opts: FmtOptions | None = None) -> str:
    """
    Render any value, dispatching on its variant.

    Sequences and arrays render as `[e1, e2]`, mappings as `[k:v]` (`[:]` when
    empty), everything else through fmt_scalar().

    Args:
        obj: A Value or any native Python object.
        opts: Formatting options, defaults to FmtOptions.plain().

    Returns:
        The rendered text.

    Raises:
        ElementRenderError: If an element fails to render and opts.safe is False.

    Examples:
        >>> fmt_value([1, "two", None])
        '[1, two, null]'
        >>> fmt_value({"a": [1, 2]})
        '[a:[1, 2]]'
        >>> fmt_value(list(range(100)), opts=FmtOptions(max_size=10))
        '[0, 1, 2, 3, ...]'
    """
    opts = FmtOptions() if opts is None else opts
    sink = _Sink()
    _render(as_value(obj), sink, opts, opts.max_size)
    return sink.getvalue()


def fmt_list(obj: Any, *, opts: FmtOptions | None = None) -> str:
    """
    Render a list-like value: a Sequence or Array, or a native list, tuple, set, etc.

    Raises:
        TypeError: If obj is not list-like.
        ElementRenderError: If an element fails to render and opts.safe is False.
    """
    return _fmt_kind(obj, (Sequence, Array), "list-like", opts)


def fmt_array(obj: Any, *, opts: FmtOptions | None = None) -> str:
    """
    Render an array value. Native lists are accepted as arrays too.

    Raises:
        TypeError: If obj is not list-like.
    """
    return _fmt_kind(obj, (Array, Sequence), "array", opts)


def fmt_map(obj: Any, *, opts: FmtOptions | None = None) -> str:
    """
    Render a mapping value.

    Raises:
        TypeError: If obj is not a mapping.
        ElementRenderError: If an entry fails to render and opts.safe is False.
    """
    return _fmt_kind(obj, (Mapping,), "mapping", opts)


def fmt_fallback(obj: Any) -> str:
    """
    Identity token used in place of an element that failed to render.

    Shaped as `<` + fully qualified kind name + `@` + lowercase hex identity + `>`.

    Examples:
        >>> fmt_fallback(object()).startswith("<builtins.object@")
        True
    """
    target = _payload(obj) if isinstance(obj, VALUE_TYPES) else obj
    name = class_name(target, fully_qualified=True, fully_qualified_builtins=True)
    return f"<{name}@{identity_hash(target)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_kind(obj: Any, kinds: tuple[type, ...], label: str, opts: FmtOptions | None) -> str:
    value = as_value(obj)
    if not isinstance(value, kinds):
        raise TypeError(f"{label} value expected, but found {class_name(obj)}")
    opts = FmtOptions() if opts is None else opts
    sink = _Sink()
    _render(value, sink, opts, opts.max_size)
    return sink.getvalue()


def _render(value: Value, sink: _Sink, opts: FmtOptions, max_size: int) -> None:
    if not isinstance(value, COMPOSITE_TYPES):
        sink.write(fmt_scalar(value, verbose=opts.verbose))
    elif isinstance(value, Mapping):
        _render_entries(value, sink, opts, max_size)
    else:
        _render_items(value, sink, opts, max_size)


def _render_items(value: Sequence | Array, sink: _Sink, opts: FmtOptions, max_size: int) -> None:
    start = sink.length
    sink.write("[")
    for i, item in enumerate(iter_items(value)):
        if i:
            sink.write(SEPARATOR)
        written = sink.length - start
        if _over_budget(written, max_size):
            sink.write(TRUNCATION_TEXT)
            sink.truncated = True
            break
        if _is_self(item, value):
            sink.write(SELF_COLLECTION_TEXT)
        else:
            _render_element(item, sink, opts, _size_left(max_size, written))
        if sink.truncated:
            break
    sink.write("]")


def _render_entries(value: Mapping, sink: _Sink, opts: FmtOptions, max_size: int) -> None:
    mark = sink.mark()
    start = sink.length
    sink.write("[")
    empty = True
    for i, (key, item) in enumerate(iter_entries(value)):
        empty = False
        if i:
            sink.write(SEPARATOR)
        if _over_budget(sink.length - start, max_size):
            sink.write(TRUNCATION_TEXT)
            sink.truncated = True
            break
        # Keys are never truncated
        _render_element(key, sink, opts, UNBOUNDED)
        sink.write(":")
        if _is_self(item, value):
            sink.write(SELF_MAP_TEXT)
        else:
            _render_element(item, sink, opts, _size_left(max_size, sink.length - start))
        if sink.truncated:
            break
    if empty:
        sink.rewind(mark)
        sink.write(EMPTY_MAP_TEXT)
        return
    sink.write("]")


def _render_element(item: Any, sink: _Sink, opts: FmtOptions, max_size: int) -> None:
    mark = sink.mark()
    try:
        _render(as_value(item), sink, opts, max_size)
    except RecursionError:
        # Indirect cycles without a budget are not recoverable per element
        raise
    except Exception as exc:
        if not opts.safe:
            if isinstance(exc, ElementRenderError):
                raise
            raise ElementRenderError(
                f"cannot render element {fmt_fallback(item)}: {type(exc).__name__}: {exc}"
            ) from exc
        sink.rewind(mark)
        sink.write(fmt_fallback(item))


def _is_self(item: Any, value: Sequence | Array | Mapping) -> bool:
    return item is value or (value.source is not None and item is value.source)


def _over_budget(written: int, max_size: int) -> bool:
    return max_size >= 0 and written > max_size


def _size_left(max_size: int, written: int) -> int:
    return max_size if max_size < 0 else max(0, max_size - written)


def _escape(text: str) -> str:
    for old, new in VERBOSE_ESCAPES:
        text = text.replace(old, new)
    return f"'{text}'"


def _payload(value: Value) -> Any:
    """Native object behind a value, for fallback tokens."""
    if isinstance(value, Null):
        return None
    if isinstance(value, Scalar):
        return value.value
    if isinstance(value, StringScalar):
        return value.text
    if isinstance(value, CharArray):
        return value.chars
    return value if value.source is None else value.source
