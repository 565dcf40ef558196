"""Natural-number domain checks at API boundaries."""

from __future__ import annotations

import numpy as np

from cons_core.errors import ConsNatDomainError


def _require_nat(value, label: str, *, max_nat: int | None = None) -> int:
    # bool is an int subclass; it is not a natural here.
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConsNatDomainError(value=value, max_value=max_nat, context=label)
    v = int(value)
    if v < 0 or (max_nat is not None and v > max_nat):
        raise ConsNatDomainError(value=value, max_value=max_nat, context=label)
    return v


__all__ = ["_require_nat"]
