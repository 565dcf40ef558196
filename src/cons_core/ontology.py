from __future__ import annotations

# --- 1. Ontology (Opcodes) ---
# Ledger id 0 is the semantic reserve for NULL (the empty sequence).
OP_NULL = 0
OP_NAT = 1
OP_CONS = 2
OP_PAIR = 3
OP_BIGNAT = 4  # arg1 indexes the store's host-side table of large naturals.
NULL_ID = 0  # Must stay aligned with OP_NULL (empty sequence identity).

OP_NAMES = {
    0: "NULL",
    1: "nat",
    2: "cons",
    3: "pair",
    4: "bignat",
}

# Largest natural stored inline in an int32 ledger column.
MAX_INLINE_NAT = (1 << 31) - 1
# Node ids are int32 and the scatter sentinel equals the capacity.
MAX_LEDGER_CAPACITY = (1 << 31) - 1


def op_name(op: int) -> str:
    return OP_NAMES.get(int(op), f"op{int(op)}")


__all__ = [
    "OP_NULL",
    "OP_NAT",
    "OP_CONS",
    "OP_PAIR",
    "OP_BIGNAT",
    "NULL_ID",
    "OP_NAMES",
    "MAX_INLINE_NAT",
    "MAX_LEDGER_CAPACITY",
    "op_name",
]
