"""
Sentinel objects for distinguishing between unset values, None, and other states.

The formatters use UNSET in option merging, where None is a meaningful value
(for example `max_size=None` means "unbounded") and therefore cannot mark an
omitted override.

Sentinels:
    UNSET: Represents an unprovided optional argument (distinguishes from None)

Helper Functions:
    ifunset: Return default if value is UNSET, otherwise return value

Example:
    >>> def merge(max_size: int | None | UnsetType = UNSET) -> int | None:
    ...     return ifunset(max_size, default=-1)
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton compared by identity, falsy, and stable across pickling.
    """
    __slots__ = ()
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifunset(value: Any, *, default: Any) -> Any:
    """Return default if value is UNSET, otherwise return value."""
    return default if value is UNSET else value
