#
# EasyJ Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from typing import Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import FmtOptions, NULL_TEXT, UNBOUNDED, fmt_array, fmt_list, fmt_map, fmt_value
from .utils import class_name


# Methods --------------------------------------------------------------------------------------------------------------

def format_value(obj: Any, verbose: bool = False, max_size: int | None = UNBOUNDED, *, safe: bool = False) -> str:
    """
    Render any object as bracketed text.

    Args:
        obj: Scalar, string, list-like, mapping, array or a Value from easyj.values.
        verbose: Quote and escape string scalars.
        max_size: Approximate character budget; -1 or None for no limit.
        safe: Replace elements whose rendering raises with `<kind@hexid>` tokens.

    Examples:
        >>> format_value({"one": 1, "two": [2, 2]})
        '[one:1, two:[2, 2]]'
        >>> format_value(["a", "b"], verbose=True)
        "['a', 'b']"
    """
    return fmt_value(obj, opts=FmtOptions(verbose=verbose, max_size=max_size, safe=safe))


def to_string(obj: Any) -> str:
    """Plain unbounded rendering, `null` for None."""
    return fmt_value(obj)


def inspect(obj: Any) -> str:
    """
    Verbose rendering: strings are single-quoted with control characters escaped.

    Examples:
        >>> print(inspect(["it's"]))
        ['it\\'s']
    """
    return fmt_value(obj, opts=FmtOptions.inspect())


def to_list_string(obj: Any, max_size: int | None = UNBOUNDED, safe: bool = False) -> str:
    """
    Render a list-like object such as `[1, 2, a]`.

    Returns `null` for None without entering the composite renderer.

    Raises:
        TypeError: If obj is not list-like.
        ElementRenderError: If an element fails to render and safe is False.
    """
    if obj is None:
        return NULL_TEXT
    return fmt_list(obj, opts=FmtOptions(max_size=max_size, safe=safe))


def to_map_string(obj: Any, max_size: int | None = UNBOUNDED) -> str:
    """
    Render a mapping such as `[one:1, two:2, three:3]`, or `[:]` when empty.

    Returns `null` for None without entering the composite renderer.

    Raises:
        TypeError: If obj is not a mapping.
    """
    if obj is None:
        return NULL_TEXT
    return fmt_map(obj, opts=FmtOptions(max_size=max_size))


def to_array_string(obj: Any) -> str:
    """Render an array's contents such as `[1, 2, 3]`, `null` for None."""
    if obj is None:
        return NULL_TEXT
    return fmt_array(obj)


def to_type_string(args: Iterable[Any] | None) -> str:
    """
    Comma-separated class names of the given arguments, `null` for None entries.

    Examples:
        >>> to_type_string([1, "a", None])
        'int, str, null'
    """
    if args is None:
        return NULL_TEXT
    if not isinstance(args, abc.Iterable) or isinstance(args, (str, bytes)):
        raise TypeError(f"iterable of arguments expected, but found {class_name(args)}")
    return ", ".join(
        NULL_TEXT if arg is None else class_name(arg, fully_qualified=True) for arg in args
    )
