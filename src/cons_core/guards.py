from __future__ import annotations

import os

from cons_core.errors import ConsCorruptNodeError


def _env_flag(name: str) -> bool:
    value = os.environ.get(name, "").strip().lower()
    return value in ("1", "true", "yes", "on")


def _guards_enabled() -> bool:
    # Read per call so tests can toggle the flag with monkeypatch.setenv.
    return _env_flag("CONS_TEST_GUARDS")


def _guard_walk_steps(steps: int, count: int, node_id: int, label: str) -> None:
    # A well-formed chain visits each committed row at most once.
    if steps > count:
        raise ConsCorruptNodeError(node_id=node_id, opcode=None, context=label)


__all__ = [
    "_env_flag",
    "_guards_enabled",
    "_guard_walk_steps",
]
