from __future__ import annotations

from dataclasses import dataclass

from cons_core.modes import ReverseMode
from cons_core.ontology import MAX_LEDGER_CAPACITY


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Ledger DI bundle (capacity + element domain).

    max_nat=None admits every natural; a bound only restricts what may be
    interned, and larger values simply never occur in the store.
    """

    initial_capacity: int = 1024
    max_capacity: int = MAX_LEDGER_CAPACITY
    max_nat: int | None = None


DEFAULT_LEDGER_CONFIG = LedgerConfig()


@dataclass(frozen=True, slots=True)
class SequenceConfig:
    """Algorithm choices for sequence operations."""

    reverse_mode: ReverseMode = ReverseMode.ACCUMULATE


DEFAULT_SEQUENCE_CONFIG = SequenceConfig()


__all__ = [
    "LedgerConfig",
    "DEFAULT_LEDGER_CONFIG",
    "SequenceConfig",
    "DEFAULT_SEQUENCE_CONFIG",
]
