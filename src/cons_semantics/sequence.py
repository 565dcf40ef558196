"""Immutable sequences over the hash-consed ledger.

A Seq is a handle (store, id) onto an OP_NULL or OP_CONS row. Walks read the
store's host snapshot iteratively, one cons cell per step, so depth is never
bounded by the interpreter's recursion limit. Building operations collect the
element ids they need and commit a whole chain at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, NamedTuple, TypeVar

from cons_core.config import DEFAULT_SEQUENCE_CONFIG, SequenceConfig
from cons_core.domains import _require_nat
from cons_core.errors import ConsCorruptNodeError
from cons_core.guards import _guard_walk_steps
from cons_core.modes import ReverseMode, coerce_reverse_mode
from cons_core.ontology import NULL_ID, OP_CONS, OP_NULL
from cons_ledger.store import LedgerStore, resolve_store
from cons_semantics.option import ABSENT, Option, Present

A = TypeVar("A")


@dataclass(frozen=True, eq=False)
class Seq:
    store: LedgerStore
    id: int

    def __iter__(self) -> Iterator:
        decode = self.store.decode
        for cell in _walk(self, "iter"):
            yield decode(cell.head, "iter")

    def __len__(self) -> int:
        return length(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Seq):
            return NotImplemented
        return equals(self, other)

    def __hash__(self) -> int:
        # Equality is by value (also across stores), so hash by value too.
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Seq({to_list(self)!r})"

    @property
    def is_empty(self) -> bool:
        return self.id == NULL_ID


class _Cell(NamedTuple):
    node: int
    head: int
    tail: int


def _walk(seq: Seq, label: str) -> Iterator[_Cell]:
    view = seq.store.host_view()
    node = seq.id
    steps = 0
    while True:
        op, a1, a2 = view.row(node, label)
        if op == OP_NULL:
            return
        if op == OP_CONS:
            yield _Cell(node, a1, a2)
            node = a2
            steps += 1
            _guard_walk_steps(steps, view.count, node, label)
            continue
        raise ConsCorruptNodeError(node_id=node, opcode=op, context=label)


def _spine(seq: Seq, label: str) -> list[_Cell]:
    return list(_walk(seq, label))


def _first_cell(seq: Seq, label: str) -> _Cell | None:
    for cell in _walk(seq, label):
        return cell
    return None


def _in_store(seq: Seq, store: LedgerStore, label: str) -> Seq:
    if seq.store is store:
        return seq
    elems = store.encode_many(seq, label)
    return Seq(store, store.intern_chain(elems))


def _fold_left_ids(f: Callable[[A, int], A], init: A, seq: Seq, label: str) -> A:
    acc = init
    for cell in _walk(seq, label):
        acc = f(acc, cell.head)
    return acc


def _fold_right_ids(f: Callable[[int, A], A], init: A, seq: Seq, label: str) -> A:
    acc = init
    for cell in reversed(_spine(seq, label)):
        acc = f(cell.head, acc)
    return acc


def _filter_ids(keep: Callable[[int], bool], seq: Seq, label: str) -> Seq:
    def step(elem, kept):
        if keep(elem):
            kept.append(elem)
        return kept

    # Right fold collects survivors back to front.
    kept = _fold_right_ids(step, [], seq, label)
    kept.reverse()
    return Seq(seq.store, seq.store.intern_chain(kept))


# --- constructors ---


def empty(store: LedgerStore | None = None) -> Seq:
    return Seq(resolve_store(store), NULL_ID)


def cons(x, seq: Seq) -> Seq:
    store = seq.store
    elem = store.encode(x, "cons")
    return Seq(store, store.intern(OP_CONS, elem, seq.id))


def singleton(x, store: LedgerStore | None = None) -> Seq:
    return cons(x, empty(store))


def from_iterable(values: Iterable, store: LedgerStore | None = None) -> Seq:
    store = resolve_store(store)
    elems = store.encode_many(values, "from_iterable")
    return Seq(store, store.intern_chain(elems))


def to_list(seq: Seq) -> list:
    return list(seq)


def transfer(seq: Seq, store: LedgerStore | None = None) -> Seq:
    """The same value rebuilt in `store` (the default store if None).

    Stores never free rows, so a long computation can start a fresh store and
    transfer only the values it still needs.
    """
    return _in_store(seq, resolve_store(store), "transfer")


# --- primitives ---


def length(seq: Seq) -> int:
    n = 0
    for _ in _walk(seq, "length"):
        n += 1
    return n


def append(s1: Seq, s2: Seq) -> Seq:
    """Elements of s1 followed by s2, built in s1's store.

    s2's cells are reused as the tail; an s2 from another store is copied in.
    """
    store = s1.store
    s2 = _in_store(s2, store, "append")
    heads = [cell.head for cell in _walk(s1, "append")]
    return Seq(store, store.intern_chain(heads, s2.id))


def snoc(seq: Seq, x) -> Seq:
    return append(seq, singleton(x, seq.store))


def reverse(
    seq: Seq,
    *,
    mode: ReverseMode | str | None = None,
    cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG,
) -> Seq:
    """Reverse a sequence.

    ReverseMode.ACCUMULATE builds the result in one pass. ReverseMode.SNOC is
    the reference definition, reverse(h :: t) = snoc(reverse(t), h), and is
    quadratic. Both return the same value.
    """
    mode = coerce_reverse_mode(
        cfg.reverse_mode if mode is None else mode, context="reverse"
    )
    store = seq.store
    heads = [cell.head for cell in _walk(seq, "reverse")]
    if mode == ReverseMode.ACCUMULATE:
        heads.reverse()
        return Seq(store, store.intern_chain(heads))
    out = empty(store)
    for head in reversed(heads):
        out = append(out, Seq(store, store.intern(OP_CONS, head, NULL_ID)))
    return out


def head_or(default, seq: Seq):
    cell = _first_cell(seq, "head_or")
    if cell is None:
        return default
    return seq.store.decode(cell.head, "head_or")


def tail_or(seq: Seq) -> Seq:
    cell = _first_cell(seq, "tail_or")
    if cell is None:
        return seq
    return Seq(seq.store, cell.tail)


def head_option(seq: Seq) -> Option:
    cell = _first_cell(seq, "head_option")
    if cell is None:
        return ABSENT
    return Present(seq.store.decode(cell.head, "head_option"))


def nth_option(n, seq: Seq) -> Option:
    n = _require_nat(n, "nth_option")
    for i, cell in enumerate(_walk(seq, "nth_option")):
        if i == n:
            return Present(seq.store.decode(cell.head, "nth_option"))
    return ABSENT


def interleave(s1: Seq, s2: Seq) -> Seq:
    """Alternate s1 and s2 per round, then attach the longer side's rest as is."""
    store = s1.store
    s2 = _in_store(s2, store, "interleave")
    c1 = _spine(s1, "interleave")
    c2 = _spine(s2, "interleave")
    rounds = min(len(c1), len(c2))
    heads = []
    for i in range(rounds):
        heads.append(c1[i].head)
        heads.append(c2[i].head)
    if len(c1) > rounds:
        tail = c1[rounds].node
    elif len(c2) > rounds:
        tail = c2[rounds].node
    else:
        tail = NULL_ID
    return Seq(store, store.intern_chain(heads, tail))


def filter_seq(pred: Callable[[object], bool], seq: Seq) -> Seq:
    decode = seq.store.decode
    return _filter_ids(
        lambda elem: bool(pred(decode(elem, "filter_seq"))), seq, "filter_seq"
    )


def fold_left(f: Callable[[A, object], A], init: A, seq: Seq) -> A:
    decode = seq.store.decode
    return _fold_left_ids(
        lambda acc, elem: f(acc, decode(elem, "fold_left")), init, seq, "fold_left"
    )


def fold_right(f: Callable[[object, A], A], init: A, seq: Seq) -> A:
    decode = seq.store.decode
    return _fold_right_ids(
        lambda elem, acc: f(decode(elem, "fold_right"), acc), init, seq, "fold_right"
    )


def equals(
    s1: Seq, s2: Seq, beq: Callable[[object, object], bool] | None = None
) -> bool:
    if beq is None and s1.store is s2.store:
        # Hash-consing: structurally equal sequences share one id.
        return s1.id == s2.id
    c1 = _spine(s1, "equals")
    c2 = _spine(s2, "equals")
    if len(c1) != len(c2):
        return False
    if beq is None:
        beq = _default_beq
    decode1 = s1.store.decode
    decode2 = s2.store.decode
    for a, b in zip(c1, c2):
        if not beq(decode1(a.head, "equals"), decode2(b.head, "equals")):
            return False
    return True


def _default_beq(a, b) -> bool:
    return a == b


__all__ = [
    "Seq",
    "empty",
    "cons",
    "singleton",
    "from_iterable",
    "to_list",
    "transfer",
    "length",
    "append",
    "snoc",
    "reverse",
    "head_or",
    "tail_or",
    "head_option",
    "nth_option",
    "interleave",
    "filter_seq",
    "fold_left",
    "fold_right",
    "equals",
]
