"""Pure ledger column updates.

Every function here takes a Ledger and returns a new one; committed rows are
never rewritten. Host bookkeeping (key index, id assignment) lives in
cons_ledger.store.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from cons_core import jax_safe as _jax_safe
from cons_ledger.structures import HostView, Ledger, NodeBatch

_scatter_drop = _jax_safe.scatter_drop


def init_ledger(capacity: int) -> Ledger:
    # Row 0 stays all-zero: (OP_NULL, 0, 0) is the empty sequence.
    return Ledger(
        opcode=jnp.zeros(capacity, dtype=jnp.int32),
        arg1=jnp.zeros(capacity, dtype=jnp.int32),
        arg2=jnp.zeros(capacity, dtype=jnp.int32),
        count=jnp.array(1, dtype=jnp.int32),
    )


def grow_ledger(ledger: Ledger, capacity: int) -> Ledger:
    current = int(ledger.opcode.shape[0])
    if capacity <= current:
        return ledger
    pad = jnp.zeros(capacity - current, dtype=jnp.int32)
    return ledger._replace(
        opcode=jnp.concatenate([ledger.opcode, pad]),
        arg1=jnp.concatenate([ledger.arg1, pad]),
        arg2=jnp.concatenate([ledger.arg2, pad]),
    )


def append_rows(
    ledger: Ledger, start: int, batch: NodeBatch, *, label: str = "append_rows"
) -> Ledger:
    """Write `batch` into rows [start, start + n) and bump the count."""
    n = len(batch.op)
    if len(batch.a1) != n or len(batch.a2) != n:
        raise ValueError("append_rows expects aligned node batches")
    if n == 0:
        return ledger
    capacity = int(ledger.opcode.shape[0])
    if start + n > capacity:
        raise ValueError(
            f"{label}: rows [{start}, {start + n}) exceed capacity={capacity}"
        )
    size = _jax_safe.bucket_size(n)
    ids = np.arange(start, start + n, dtype=np.int32)
    # Padding slots point one past the end and are dropped by the scatter.
    idx = _jax_safe.pad_batch(ids, size, capacity)
    ops = _jax_safe.pad_batch(batch.op, size, 0)
    a1s = _jax_safe.pad_batch(batch.a1, size, 0)
    a2s = _jax_safe.pad_batch(batch.a2, size, 0)
    return ledger._replace(
        opcode=_scatter_drop(ledger.opcode, idx, ops, f"{label}.opcode"),
        arg1=_scatter_drop(ledger.arg1, idx, a1s, f"{label}.arg1"),
        arg2=_scatter_drop(ledger.arg2, idx, a2s, f"{label}.arg2"),
        count=jnp.array(start + n, dtype=jnp.int32),
    )


def snapshot_ledger(ledger: Ledger, count: int) -> HostView:
    # Pull whole columns (fixed shapes) and cut on the host.
    ops, a1s, a2s = jax.device_get((ledger.opcode, ledger.arg1, ledger.arg2))
    return HostView(
        opcode=np.asarray(ops)[:count],
        arg1=np.asarray(a1s)[:count],
        arg2=np.asarray(a2s)[:count],
        count=int(count),
    )


__all__ = ["init_ledger", "grow_ledger", "append_rows", "snapshot_ledger"]
