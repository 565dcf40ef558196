"""Facade for the cons-cell list library.

Re-exports the ledger, sequence, bag and dictionary surfaces so callers and
tests can `import conslib as cl`.
"""

from cons_core.config import (
    DEFAULT_LEDGER_CONFIG,
    DEFAULT_SEQUENCE_CONFIG,
    LedgerConfig,
    SequenceConfig,
)
from cons_core.errors import (
    ConsCorruptNodeError,
    ConsElementTypeError,
    ConsLedgerCapacityError,
    ConsNatDomainError,
    ConsReverseModeError,
)
from cons_core.modes import ReverseMode, coerce_reverse_mode
from cons_core.ontology import (
    MAX_INLINE_NAT,
    MAX_LEDGER_CAPACITY,
    NULL_ID,
    OP_BIGNAT,
    OP_CONS,
    OP_NAMES,
    OP_NAT,
    OP_NULL,
    OP_PAIR,
)
from cons_ledger.intern import append_rows, grow_ledger, init_ledger, snapshot_ledger
from cons_ledger.store import (
    LedgerStore,
    default_store,
    reset_default_store,
)
from cons_ledger.structures import HostView, Ledger, NodeBatch
from cons_metrics.metrics import ledger_metrics_get, ledger_metrics_reset
from cons_semantics.bag import (
    Bag,
    add,
    bag_sum,
    count,
    member,
    remove_all,
    remove_one,
    subset,
)
from cons_semantics.dictionary import (
    Dictionary,
    bindings,
    empty_dict,
    find,
    insert,
)
from cons_semantics.option import (
    ABSENT,
    Absent,
    Option,
    Present,
    is_present,
    option_elim,
)
from cons_semantics.sequence import (
    Seq,
    append,
    cons,
    empty,
    equals,
    filter_seq,
    fold_left,
    fold_right,
    from_iterable,
    head_option,
    head_or,
    interleave,
    length,
    nth_option,
    reverse,
    singleton,
    snoc,
    tail_or,
    to_list,
    transfer,
)

__all__ = [
    "DEFAULT_LEDGER_CONFIG",
    "DEFAULT_SEQUENCE_CONFIG",
    "LedgerConfig",
    "SequenceConfig",
    "ConsCorruptNodeError",
    "ConsElementTypeError",
    "ConsLedgerCapacityError",
    "ConsNatDomainError",
    "ConsReverseModeError",
    "ReverseMode",
    "coerce_reverse_mode",
    "MAX_INLINE_NAT",
    "MAX_LEDGER_CAPACITY",
    "NULL_ID",
    "OP_BIGNAT",
    "OP_CONS",
    "OP_NAMES",
    "OP_NAT",
    "OP_NULL",
    "OP_PAIR",
    "append_rows",
    "grow_ledger",
    "init_ledger",
    "snapshot_ledger",
    "LedgerStore",
    "default_store",
    "reset_default_store",
    "HostView",
    "Ledger",
    "NodeBatch",
    "ledger_metrics_get",
    "ledger_metrics_reset",
    "Bag",
    "add",
    "bag_sum",
    "count",
    "member",
    "remove_all",
    "remove_one",
    "subset",
    "Dictionary",
    "bindings",
    "empty_dict",
    "find",
    "insert",
    "ABSENT",
    "Absent",
    "Option",
    "Present",
    "is_present",
    "option_elim",
    "Seq",
    "append",
    "cons",
    "empty",
    "equals",
    "filter_seq",
    "fold_left",
    "fold_right",
    "from_iterable",
    "head_option",
    "head_or",
    "interleave",
    "length",
    "nth_option",
    "reverse",
    "singleton",
    "snoc",
    "tail_or",
    "to_list",
    "transfer",
]
