from __future__ import annotations

import jax.numpy as jnp
import numpy as np

from cons_core.guards import _env_flag, _guards_enabled

# dataflow-bundle: indices, max_index


def scatter_guard_enabled() -> bool:
    return _guards_enabled() or _env_flag("CONS_SCATTER_GUARD")


def scatter_guard(indices, max_index: int, label: str) -> None:
    """Host-side bounds check for scatter ids (sentinel == max_index allowed)."""
    if not scatter_guard_enabled():
        return
    idx = np.asarray(indices)
    if idx.size == 0:
        return
    min_idx = int(idx.min())
    max_idx = int(idx.max())
    if min_idx < 0 or max_idx > max_index:
        raise RuntimeError(
            "scatter index out of bounds in "
            f"{label} (min={min_idx}, max={max_idx}, size={max_index})"
        )


def scatter_drop(target, indices, values, label: str):
    max_index = int(target.shape[0])
    scatter_guard(indices, max_index, label)
    # NOTE: drop semantics allow sentinel indices for padded scatters.
    return target.at[indices].set(values, mode="drop")


def bucket_size(n: int, minimum: int = 4) -> int:
    """Round a batch length up to a power of two (stable scatter shapes)."""
    size = max(int(minimum), 1)
    while size < n:
        size *= 2
    return size


def pad_batch(values, size: int, fill: int) -> jnp.ndarray:
    out = np.full((size,), fill, dtype=np.int32)
    out[: len(values)] = np.asarray(values, dtype=np.int32)
    return jnp.asarray(out)


__all__ = [
    "scatter_guard_enabled",
    "scatter_guard",
    "scatter_drop",
    "bucket_size",
    "pad_batch",
]
