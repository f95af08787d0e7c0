"""Cast helpers for resolved config strings."""

from __future__ import annotations

import re
from typing import Any, Callable

# ---------------------------------------------------------------------------
# Bool
# ---------------------------------------------------------------------------

# Fixed sets; anything else falls back to the caller's default.
_TRUTHY = frozenset({"true", "t", "yes", "y", "1", "-1"})
_FALSY = frozenset({"false", "f", "no", "n", "0"})

def parse_bool(value: str) -> bool | None:
    """Map a known boolean spelling to ``True``/``False``, else ``None``.

    Matching is case-insensitive. Surrounding whitespace is not stripped.
    """
    lower = value.lower()
    if lower in _TRUTHY:
        return True
    if lower in _FALSY:
        return False
    return None

# ---------------------------------------------------------------------------
# Int
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)

def parse_int(value: str) -> int:
    """Parse a plain base-10 integer.

    Only ASCII digits with an optional sign and surrounding whitespace are
    accepted; digit-group underscores and other Unicode digits are rejected.
    Raises ``ValueError`` otherwise.
    """
    if _INT_RE.fullmatch(value) is None:
        raise ValueError(f"invalid literal for base-10 integer: {value!r}")
    return int(value, 10)

# ---------------------------------------------------------------------------
# Csv
# ---------------------------------------------------------------------------

class Csv:
    """Split a string into a list, with optional per-element casting.

    >>> Csv()("a, b, c")
    ['a', 'b', 'c']
    >>> Csv(cast=int)("1,2,3")
    [1, 2, 3]
    """

    def __init__(
        self,
        cast: Callable[[str], Any] = str,
        delimiter: str = ",",
        strip: bool = True,
    ) -> None:
        self.cast = cast
        self.delimiter = delimiter
        self.strip = strip

    def __call__(self, value: str) -> list[Any]:
        parts = value.split(self.delimiter)
        if self.strip:
            parts = [p.strip() for p in parts]
        return [self.cast(p) for p in parts if p]
