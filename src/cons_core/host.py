from __future__ import annotations

from dataclasses import dataclass

import jax


@dataclass(frozen=True)
class HostInt:
    v: int

    def __int__(self) -> int:
        return int(self.v)

    def __index__(self) -> int:
        return int(self.v)


def _host_int(value) -> HostInt:
    if isinstance(value, HostInt):
        return value
    if isinstance(value, bool):
        raise TypeError("expected HostInt, got bool")
    return HostInt(int(jax.device_get(value)))


def _host_int_value(value) -> int:
    return int(_host_int(value))


__all__ = [
    "HostInt",
    "_host_int",
    "_host_int_value",
]
