from __future__ import annotations

from dataclasses import dataclass

from cons_core.ontology import op_name


def _error_record(cls):
    """Freeze the declared fields but leave exception dunders writable.

    Raising machinery (contextlib, add_note) assigns __traceback__ and
    __notes__ on the instance while it propagates.
    """
    cls = dataclass(frozen=True, eq=False)(cls)
    frozen_setattr = cls.__setattr__

    def __setattr__(self, name, value):
        if name.startswith("__") and name.endswith("__"):
            object.__setattr__(self, name, value)
        else:
            frozen_setattr(self, name, value)

    cls.__setattr__ = __setattr__
    return cls


@_error_record
class ConsNatDomainError(ValueError):
    value: object
    max_value: int | None = None
    context: str | None = None

    def __str__(self) -> str:
        where = f" in {self.context}" if self.context else ""
        bound = "" if self.max_value is None else f" <= {self.max_value}"
        return f"expected a natural number{bound}{where}, got {self.value!r}"


@_error_record
class ConsElementTypeError(TypeError):
    value: object
    context: str | None = None

    def __str__(self) -> str:
        return (
            "cannot encode element of type "
            f"{type(self.value).__name__}: {self.value!r}"
        )


@_error_record
class ConsLedgerCapacityError(RuntimeError):
    requested: int
    max_capacity: int

    def __str__(self) -> str:
        return (
            "Ledger capacity exceeded "
            f"(requested={self.requested}, max={self.max_capacity})"
        )


@_error_record
class ConsCorruptNodeError(RuntimeError):
    node_id: int
    opcode: int | None
    context: str

    def __str__(self) -> str:
        if self.opcode is None:
            return f"CORRUPT: {self.context}: node id={self.node_id} out of range"
        return (
            f"CORRUPT: {self.context}: node id={self.node_id} "
            f"has unexpected opcode {op_name(self.opcode)}"
        )


@_error_record
class ConsReverseModeError(ValueError):
    mode: object
    allowed: tuple[str, ...] = ("accumulate", "snoc")
    context: str | None = None

    def __str__(self) -> str:
        return f"unknown reverse_mode={self.mode!r}"


__all__ = [
    "ConsNatDomainError",
    "ConsElementTypeError",
    "ConsLedgerCapacityError",
    "ConsCorruptNodeError",
    "ConsReverseModeError",
]
