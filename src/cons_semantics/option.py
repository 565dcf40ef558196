from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    value: T


@dataclass(frozen=True)
class Absent:
    pass


ABSENT = Absent()

Option = Union[Present[T], Absent]


def is_present(opt: Option) -> bool:
    if isinstance(opt, Present):
        return True
    if isinstance(opt, Absent):
        return False
    raise TypeError(f"expected Present or Absent, got {type(opt).__name__}")


def option_elim(default: T, opt: Option[T]) -> T:
    """Value of `opt`, or `default` when it is Absent."""
    if is_present(opt):
        return opt.value
    return default


__all__ = [
    "Present",
    "Absent",
    "ABSENT",
    "Option",
    "is_present",
    "option_elim",
]
