"""Keyed set-diff of a desired mapping against an observed sequence."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping


@dataclass(slots=True, frozen=True)
class DiffResult[D, C]:
    """Four disjoint partitions over the union of desired and current keys.

    ``add`` keeps the insertion order of the desired mapping; ``sub``, ``eq`` and
    ``not_eq`` keep the order in which current items were observed.
    """

    add: list[D] = field(default_factory=list[D])
    sub: list[C] = field(default_factory=list[C])
    eq: list[tuple[D, C]] = field(default_factory=list[tuple[D, C]])
    not_eq: list[tuple[D, C]] = field(default_factory=list[tuple[D, C]])

    @property
    def has_changes(self) -> bool:
        return bool(self.add or self.sub or self.not_eq)


def diff[K, D, C](
    desired: Mapping[K, D],
    current: Iterable[C],
    key: Callable[[C], K],
    equal: Callable[[D, C], bool],
) -> DiffResult[D, C]:
    """Partition ``desired`` and ``current`` by key.

    A key seen twice in ``current`` is matched only on its first occurrence; later
    occurrences land in ``sub``. Duplicate keys in ``desired`` cannot occur since it
    is a mapping.
    """

    remaining = dict(desired)
    sub: list[C] = []
    eq: list[tuple[D, C]] = []
    not_eq: list[tuple[D, C]] = []

    for item in current:
        k = key(item)
        if k not in remaining:
            sub.append(item)
            continue
        wanted = remaining.pop(k)
        if equal(wanted, item):
            eq.append((wanted, item))
        else:
            not_eq.append((wanted, item))

    return DiffResult(add=list(remaining.values()), sub=sub, eq=eq, not_eq=not_eq)
