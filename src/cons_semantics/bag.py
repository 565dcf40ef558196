"""Multiset (bag) operations over natural-number sequences.

Order is not part of a bag's meaning; results keep the input order and are
never sorted. Element comparison is id comparison: naturals are hash-consed,
so a value that was never interned cannot occur in any bag.
"""

from __future__ import annotations

from cons_core.ontology import OP_CONS
from cons_semantics.sequence import (
    Seq,
    _filter_ids,
    _fold_left_ids,
    _walk,
    append,
)

Bag = Seq


def count(v, bag: Bag) -> int:
    target = bag.store.lookup_nat(v, "count")
    if target is None:
        return 0
    return _fold_left_ids(
        lambda acc, elem: acc + (1 if elem == target else 0), 0, bag, "count"
    )


def member(v, bag: Bag) -> bool:
    target = bag.store.lookup_nat(v, "member")
    if target is None:
        return False
    for cell in _walk(bag, "member"):
        if cell.head == target:
            return True
    return False


def add(v, bag: Bag) -> Bag:
    store = bag.store
    return Seq(store, store.intern(OP_CONS, store.intern_nat(v, "add"), bag.id))


def bag_sum(b1: Bag, b2: Bag) -> Bag:
    return append(b1, b2)


def remove_one(v, bag: Bag) -> Bag:
    """Drop the head-most occurrence of v; the suffix after it is reused."""
    store = bag.store
    target = store.lookup_nat(v, "remove_one")
    if target is None:
        return bag
    prefix = []
    for cell in _walk(bag, "remove_one"):
        if cell.head == target:
            return Seq(store, store.intern_chain(prefix, cell.tail))
        prefix.append(cell.head)
    return bag


def remove_all(v, bag: Bag) -> Bag:
    target = bag.store.lookup_nat(v, "remove_all")
    if target is None:
        return bag
    return _filter_ids(lambda elem: elem != target, bag, "remove_all")


def subset(b1: Bag, b2: Bag) -> bool:
    """True iff every value occurs in b1 at most as often as in b2.

    Each matched head of b1 consumes one instance of b2 (the head-most one),
    so repeated values in b1 need repeated values in b2.
    Bags from different stores are compared by value without allocating.
    """
    if b2.store is b1.store:
        available = [cell.head for cell in _walk(b2, "subset")]
    else:
        # None marks a value b1's store never built; it matches no head.
        lookup = b1.store.lookup_element
        available = [lookup(value, "subset") for value in b2]
    for cell in _walk(b1, "subset"):
        try:
            i = available.index(cell.head)
        except ValueError:
            return False
        del available[i]
    return True


__all__ = [
    "Bag",
    "count",
    "member",
    "add",
    "bag_sum",
    "remove_one",
    "remove_all",
    "subset",
]
