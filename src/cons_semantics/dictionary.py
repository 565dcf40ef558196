"""Append-only association chain of (key, value) naturals.

insert prepends an OP_PAIR binding; older bindings for the same key stay in
the chain but are shadowed, because find returns the front-most match.
"""

from __future__ import annotations

from cons_core.errors import ConsCorruptNodeError
from cons_core.ontology import OP_CONS, OP_PAIR
from cons_ledger.store import LedgerStore
from cons_semantics.option import ABSENT, Option, Present
from cons_semantics.sequence import Seq, _walk, empty

Dictionary = Seq


def empty_dict(store: LedgerStore | None = None) -> Dictionary:
    return empty(store)


def insert(key, value, d: Dictionary) -> Dictionary:
    store = d.store
    binding = store.intern_pair(
        store.intern_nat(key, "insert"), store.intern_nat(value, "insert")
    )
    return Seq(store, store.intern(OP_CONS, binding, d.id))


def find(key, d: Dictionary) -> Option:
    store = d.store
    target = store.lookup_nat(key, "find")
    if target is None:
        return ABSENT
    view = store.host_view()
    for cell in _walk(d, "find"):
        op, bound_key, bound_value = view.row(cell.head, "find")
        if op != OP_PAIR:
            raise ConsCorruptNodeError(node_id=cell.head, opcode=op, context="find")
        if bound_key == target:
            return Present(store.decode(bound_value, "find"))
    return ABSENT


def bindings(d: Dictionary) -> list[tuple[int, int]]:
    """All stored bindings, most recent first (shadowed ones included)."""
    return list(d)


__all__ = [
    "Dictionary",
    "empty_dict",
    "insert",
    "find",
    "bindings",
]
