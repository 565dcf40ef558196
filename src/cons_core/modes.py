from __future__ import annotations

from enum import Enum

from cons_core.errors import ConsReverseModeError


class ReverseMode(str, Enum):
    ACCUMULATE = "accumulate"
    SNOC = "snoc"


def coerce_reverse_mode(
    mode: ReverseMode | str | None, *, context: str | None = None
) -> ReverseMode:
    if mode is None:
        return ReverseMode.ACCUMULATE
    if isinstance(mode, ReverseMode):
        return mode
    if isinstance(mode, str):
        if mode == ReverseMode.ACCUMULATE.value:
            return ReverseMode.ACCUMULATE
        if mode == ReverseMode.SNOC.value:
            return ReverseMode.SNOC
    raise ConsReverseModeError(
        mode=mode,
        allowed=(ReverseMode.ACCUMULATE.value, ReverseMode.SNOC.value),
        context=context,
    )


__all__ = [
    "ReverseMode",
    "coerce_reverse_mode",
]
