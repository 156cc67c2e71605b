"""
EasyJ utilities shared across the package.

Contains helpers used by both the formatters and the filesystem tools to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns the class name whether given an instance or the class itself,
    so both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix user classes with their module.
        fully_qualified_builtins (bool): If true, prefix builtin classes with 'builtins'.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> from pathlib import PurePosixPath
        >>> class_name(PurePosixPath("a"), fully_qualified=True)
        'pathlib.PurePosixPath'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    module = getattr(cls, "__module__", None) or "builtins"
    name = cls.__name__

    qualify = fully_qualified_builtins if module == "builtins" else fully_qualified
    return f"{module}.{name}" if qualify else name


def identity_hash(obj: Any) -> str:
    """
    Return a short lowercase hex token identifying obj for the lifetime of the object.

    Unlike hash(), this never fails for unhashable objects such as lists or dicts.

    Examples:
        >>> token = identity_hash(object())
        >>> token == token.lower()
        True
    """
    return format(id(obj), "x")
