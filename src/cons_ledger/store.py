"""Host-side holder for a hash-consed ledger.

A LedgerStore owns the current Ledger columns plus the key index that maps
(op, a1, a2) to a row id. Rows are only ever appended, so a node id handed
out once denotes the same immutable value for the lifetime of the store and
structurally equal values always share one id.

Naturals above MAX_INLINE_NAT do not fit an int32 column. They live in a
host-side table owned by the store and their OP_BIGNAT row carries the table
slot, so hash-consing still gives one id per value.

Nothing is ever freed. Memory grows with the number of distinct values built
in a store; long-running callers start a fresh store per computation and
carry their live values over with cons_semantics.sequence.transfer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from cons_core.config import DEFAULT_LEDGER_CONFIG, LedgerConfig
from cons_core.domains import _require_nat
from cons_core.errors import (
    ConsCorruptNodeError,
    ConsElementTypeError,
    ConsLedgerCapacityError,
)
from cons_core.guards import _guards_enabled
from cons_core.host import _host_int_value
from cons_core.ontology import (
    MAX_INLINE_NAT,
    MAX_LEDGER_CAPACITY,
    NULL_ID,
    OP_BIGNAT,
    OP_CONS,
    OP_NAT,
    OP_NULL,
    OP_PAIR,
)
from cons_ledger.intern import append_rows, grow_ledger, init_ledger, snapshot_ledger
from cons_ledger.structures import HostView, NodeBatch
from cons_metrics.metrics import (
    _ledger_metrics_commit,
    _ledger_metrics_grow,
    _ledger_metrics_intern,
    _ledger_metrics_snapshot,
)

_LOGGER = logging.getLogger(__name__)


@dataclass
class _Pending:
    op: list = field(default_factory=list)
    a1: list = field(default_factory=list)
    a2: list = field(default_factory=list)
    keys: dict = field(default_factory=dict)
    bignats: list = field(default_factory=list)
    bignat_slots: dict = field(default_factory=dict)
    hits: int = 0


class LedgerStore:
    def __init__(self, cfg: LedgerConfig = DEFAULT_LEDGER_CONFIG):
        if cfg.initial_capacity < 1 or cfg.initial_capacity > cfg.max_capacity:
            raise ValueError(
                "LedgerConfig expects 1 <= initial_capacity <= max_capacity"
            )
        if cfg.max_capacity > MAX_LEDGER_CAPACITY:
            raise ValueError(
                f"LedgerConfig max_capacity must be <= {MAX_LEDGER_CAPACITY}"
            )
        self.cfg = cfg
        self.ledger = init_ledger(cfg.initial_capacity)
        self._count = 1
        self._keys: dict[tuple[int, int, int], int] = {(OP_NULL, 0, 0): NULL_ID}
        self._bignats: list[int] = []
        self._bignat_slots: dict[int, int] = {}
        self._view: HostView | None = None

    def __repr__(self) -> str:
        return f"LedgerStore(count={self._count}, capacity={self.capacity})"

    @property
    def count(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return int(self.ledger.opcode.shape[0])

    # --- lookup (no allocation) ---

    def lookup(self, op: int, a1: int, a2: int) -> int | None:
        return self._keys.get((int(op), int(a1), int(a2)))

    def lookup_nat(self, value, label: str = "lookup_nat") -> int | None:
        """Id of an interned natural, or None if this store never built it.

        Non-naturals raise; a natural outside cfg.max_nat cannot have been
        interned, so it is simply absent.
        """
        v = _require_nat(value, label)
        max_nat = self.cfg.max_nat
        if max_nat is not None and v > max_nat:
            return None
        if v <= MAX_INLINE_NAT:
            return self.lookup(OP_NAT, v, 0)
        slot = self._bignat_slots.get(v)
        if slot is None:
            return None
        return self.lookup(OP_BIGNAT, slot, 0)

    def lookup_element(self, value, label: str = "lookup_element") -> int | None:
        """Id of an already-interned element, or None if it was never built."""
        if isinstance(value, tuple):
            if len(value) != 2:
                raise ConsElementTypeError(value=value, context=label)
            first = self.lookup_element(value[0], label)
            second = self.lookup_element(value[1], label)
            if first is None or second is None:
                return None
            return self.lookup(OP_PAIR, first, second)
        if not isinstance(value, (int, np.integer)):
            raise ConsElementTypeError(value=value, context=label)
        return self.lookup_nat(value, label)

    # --- interning ---

    def intern(self, op: int, a1: int, a2: int) -> int:
        return self.intern_batch(NodeBatch(op=[op], a1=[a1], a2=[a2]))[0]

    def intern_batch(self, batch: NodeBatch) -> list[int]:
        pending = _Pending()
        ids = [
            self._intern_row(int(op), int(a1), int(a2), pending)
            for op, a1, a2 in zip(batch.op, batch.a1, batch.a2)
        ]
        self._commit(pending)
        return ids

    def intern_nat(self, value, label: str = "intern_nat") -> int:
        v = _require_nat(value, label, max_nat=self.cfg.max_nat)
        pending = _Pending()
        node = self._nat_row(v, pending)
        self._commit(pending)
        return node

    def intern_pair(self, first_id: int, second_id: int) -> int:
        return self.intern(OP_PAIR, first_id, second_id)

    def intern_chain(self, elements: Iterable[int], tail: int = NULL_ID) -> int:
        """Cons `elements` (element ids, front first) onto `tail` in one commit."""
        pending = _Pending()
        node = int(tail)
        for elem in reversed(list(elements)):
            node = self._intern_row(OP_CONS, int(elem), node, pending)
        self._commit(pending)
        return node

    def encode(self, value, label: str = "encode") -> int:
        return self.encode_many([value], label)[0]

    def encode_many(self, values: Iterable, label: str = "encode_many") -> list[int]:
        """Intern element values (naturals or 2-tuples) in a single commit."""
        pending = _Pending()
        ids = [self._encode_row(value, pending, label) for value in values]
        self._commit(pending)
        return ids

    def decode(self, node_id: int, label: str = "decode"):
        view = self.host_view()
        op, a1, a2 = view.row(int(node_id), label)
        if op == OP_NAT:
            return a1
        if op == OP_BIGNAT:
            return self._bignats[a1]
        if op == OP_PAIR:
            return (self.decode(a1, label), self.decode(a2, label))
        raise ConsCorruptNodeError(node_id=int(node_id), opcode=op, context=label)

    # --- host snapshot ---

    def host_view(self) -> HostView:
        view = self._view
        if view is None or view.count != self._count:
            if _guards_enabled():
                device_count = _host_int_value(self.ledger.count)
                if device_count != self._count:
                    raise RuntimeError(
                        "CORRUPT: ledger count drift "
                        f"(host={self._count}, device={device_count})"
                    )
            view = snapshot_ledger(self.ledger, self._count)
            self._view = view
            _ledger_metrics_snapshot()
        return view

    # --- internals ---

    def _encode_row(self, value, pending: _Pending, label: str) -> int:
        if isinstance(value, tuple):
            if len(value) != 2:
                raise ConsElementTypeError(value=value, context=label)
            first = self._encode_row(value[0], pending, label)
            second = self._encode_row(value[1], pending, label)
            return self._intern_row(OP_PAIR, first, second, pending)
        if not isinstance(value, (int, np.integer)):
            raise ConsElementTypeError(value=value, context=label)
        v = _require_nat(value, label, max_nat=self.cfg.max_nat)
        return self._nat_row(v, pending)

    def _nat_row(self, v: int, pending: _Pending) -> int:
        if v <= MAX_INLINE_NAT:
            return self._intern_row(OP_NAT, v, 0, pending)
        slot = self._bignat_slots.get(v)
        if slot is None:
            slot = pending.bignat_slots.get(v)
        if slot is None:
            slot = len(self._bignats) + len(pending.bignats)
            pending.bignats.append(v)
            pending.bignat_slots[v] = slot
        return self._intern_row(OP_BIGNAT, slot, 0, pending)

    def _intern_row(self, op: int, a1: int, a2: int, pending: _Pending) -> int:
        key = (op, a1, a2)
        node = self._keys.get(key)
        if node is None:
            node = pending.keys.get(key)
        if node is not None:
            pending.hits += 1
            return node
        node = self._count + len(pending.op)
        pending.op.append(op)
        pending.a1.append(a1)
        pending.a2.append(a2)
        pending.keys[key] = node
        return node

    def _commit(self, pending: _Pending) -> None:
        n = len(pending.op)
        _ledger_metrics_intern(n, pending.hits)
        if n == 0:
            return
        end = self._count + n
        if end > self.capacity:
            self._grow(end)
        self.ledger = append_rows(
            self.ledger,
            self._count,
            NodeBatch(op=pending.op, a1=pending.a1, a2=pending.a2),
            label="ledger_commit",
        )
        self._count = end
        self._keys.update(pending.keys)
        self._bignats.extend(pending.bignats)
        self._bignat_slots.update(pending.bignat_slots)
        self._view = None
        _ledger_metrics_commit(n)
        _LOGGER.debug("ledger commit rows=%d count=%d", n, end)

    def _grow(self, required: int) -> None:
        max_capacity = self.cfg.max_capacity
        if required > max_capacity:
            raise ConsLedgerCapacityError(
                requested=required, max_capacity=max_capacity
            )
        capacity = self.capacity
        while capacity < required:
            capacity *= 2
        capacity = min(capacity, max_capacity)
        _LOGGER.debug("ledger grow capacity=%d -> %d", self.capacity, capacity)
        self.ledger = grow_ledger(self.ledger, capacity)
        _ledger_metrics_grow()


_DEFAULT_STORE: LedgerStore | None = None


def default_store() -> LedgerStore:
    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        _DEFAULT_STORE = LedgerStore()
    return _DEFAULT_STORE


def reset_default_store(cfg: LedgerConfig = DEFAULT_LEDGER_CONFIG) -> LedgerStore:
    """Replace the process-wide store; values built on the old one stay valid."""
    global _DEFAULT_STORE
    _DEFAULT_STORE = LedgerStore(cfg)
    return _DEFAULT_STORE


def resolve_store(store: LedgerStore | None) -> LedgerStore:
    return default_store() if store is None else store


__all__ = [
    "LedgerStore",
    "default_store",
    "reset_default_store",
    "resolve_store",
]
