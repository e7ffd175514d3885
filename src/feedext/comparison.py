"""
Ordering Composition

Per-field comparators and the composition rule used by every extension to
derive equality and ordering from a single comparison routine.

Fields are compared in a fixed sequence and the first non-zero result wins,
so the composed result is 0 only when every field compares equal.
"""

from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

Comparator = Callable[[Any, Any], int]


def sign(value: int) -> int:
    """Normalize a comparison result to -1, 0 or 1."""
    return (value > 0) - (value < 0)


def compare_fields(comparisons: Iterable[int]) -> int:
    """
    Compose per-field comparison results lexicographically.

    Args:
        comparisons: Per-field results, in field order. Generators are
            consumed lazily and stop at the first difference.

    Returns:
        -1, 0 or 1
    """
    for result in comparisons:
        if result:
            return sign(result)
    return 0


def compose(*comparisons: int) -> int:
    """Compose already-computed per-field results."""
    return compare_fields(comparisons)


def compare_values(first: Any, second: Any) -> int:
    """
    Natural ordering for dates, numbers, durations and booleans.

    An unset value (None) sorts before any set value.
    """
    if first is None or second is None:
        return (first is not None) - (second is not None)
    return (first > second) - (first < second)


def compare_ordinal(first: Optional[str], second: Optional[str]) -> int:
    """Exact, case-sensitive comparison for identifiers and namespaces."""
    return compare_values(first or "", second or "")


def compare_text(first: Optional[str], second: Optional[str]) -> int:
    """Case-insensitive comparison for human-readable text."""
    return compare_values((first or "").casefold(), (second or "").casefold())


def compare_uri(first: Optional[str], second: Optional[str]) -> int:
    """Case-insensitive comparison of URIs; an unset URI sorts first."""
    if first is None or second is None:
        return compare_values(first, second)
    return compare_text(str(first), str(second))


def compare_enum(first: Optional[Enum], second: Optional[Enum]) -> int:
    """Compare enumeration members by declaration order."""
    if first is None or second is None:
        return compare_values(first, second)
    members = list(type(first))
    return compare_values(members.index(first), members.index(second))


def _version_key(version: Optional[str]) -> Tuple:
    parts = []
    for part in (version or "").split("."):
        if part.isdigit():
            parts.append((0, int(part), ""))
        else:
            parts.append((1, 0, part))
    return tuple(parts)


def compare_version(first: Optional[str], second: Optional[str]) -> int:
    """Compare dotted version strings component by component."""
    return compare_values(_version_key(first), _version_key(second))


def compare_objects(first: Any, second: Any) -> int:
    """Compare nested value objects that implement compare_to()."""
    if first is None or second is None:
        return compare_values(first, second)
    return sign(first.compare_to(second))


def compare_sequence(
    first: Sequence[Any],
    second: Sequence[Any],
    comparator: Comparator = compare_values,
) -> int:
    """
    Compare two sequences.

    The longer sequence is greater; sequences of equal length are compared
    element by element with the supplied comparator.
    """
    first = list(first or ())
    second = list(second or ())
    if len(first) != len(second):
        return compare_values(len(first), len(second))
    return compare_fields(comparator(a, b) for a, b in zip(first, second))
