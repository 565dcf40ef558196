from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
import numpy as np

from cons_core.errors import ConsCorruptNodeError


class Ledger(NamedTuple):
    opcode: jnp.ndarray
    arg1: jnp.ndarray
    arg2: jnp.ndarray
    count: jnp.ndarray


class NodeBatch(NamedTuple):
    op: list
    a1: list
    a2: list


class HostView(NamedTuple):
    """Host snapshot of the committed ledger rows."""

    opcode: np.ndarray
    arg1: np.ndarray
    arg2: np.ndarray
    count: int

    def row(self, node_id: int, label: str) -> tuple[int, int, int]:
        if node_id < 0 or node_id >= self.count:
            raise ConsCorruptNodeError(node_id=node_id, opcode=None, context=label)
        return (
            int(self.opcode[node_id]),
            int(self.arg1[node_id]),
            int(self.arg2[node_id]),
        )


__all__ = ["Ledger", "NodeBatch", "HostView"]
