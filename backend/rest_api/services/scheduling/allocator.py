"""
Table allocator.

Pure functions over an in-memory table inventory; no database access.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar


class SeatingResource(Protocol):
    id: int
    capacity: int


T = TypeVar("T", bound=SeatingResource)


def _available(inventory: Iterable[T], committed_ids: set[int]) -> list[T]:
    # sorted() is stable: equal capacities keep inventory order
    return sorted(
        (table for table in inventory if table.id not in committed_ids),
        key=lambda table: table.capacity,
    )


def free_capacity(inventory: Iterable[SeatingResource], committed_ids: set[int]) -> int:
    """Total seats across tables not in `committed_ids`."""
    return sum(table.capacity for table in inventory if table.id not in committed_ids)


def allocate_tables(
    inventory: Sequence[T],
    committed_ids: set[int],
    party_size: int,
) -> list[T] | None:
    """
    Choose the tables for a party, or None when the free tables cannot seat it.

    Smallest-first covering:
    1. If one free table seats the whole party, take the smallest such table.
    2. Otherwise accumulate free tables in ascending capacity until the party
       fits, then drop the smallest picks that are no longer needed.

    Both steps depart from plain ascending accumulation, which returns the
    whole accumulated prefix: with [2, 4, 6] a party of 3 gets the 4-top
    instead of 2 + 4, and redundant small tables are never held.

    Larger tables stay free for larger parties. Ties between equal capacities
    follow inventory order.
    """
    if party_size < 1:
        raise ValueError(f"party_size must be positive, got {party_size}")

    available = _available(inventory, committed_ids)

    for table in available:
        if table.capacity >= party_size:
            return [table]

    selected: list[T] = []
    seated = 0
    for table in available:
        selected.append(table)
        seated += table.capacity
        if seated >= party_size:
            break
    else:
        return None

    # The last pick closed the gap; earlier small picks may now be redundant
    while len(selected) > 1 and seated - selected[0].capacity >= party_size:
        seated -= selected.pop(0).capacity

    return selected
