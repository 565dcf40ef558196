import os
import sys

import pytest

# Keep XLA from grabbing the whole device for a handful of small columns.
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")
# Enable strict scatter/count guards in tests unless explicitly overridden.
os.environ.setdefault("CONS_TEST_GUARDS", "1")

import jax

# Ensure repo root and src/ are importable when pytest uses importlib mode.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
for _path in (SRC, ROOT):
    if _path not in sys.path:
        sys.path.insert(0, _path)

import conslib as cl

_MARKER_DESCRIPTIONS = {
    "ledger": "hash-consed node ledger and store",
    "sequence": "sequence primitives",
    "bag": "multiset operations",
    "dict": "association dictionary",
    "laws": "algebraic properties over random cases",
}


def pytest_configure(config):
    for name, desc in _MARKER_DESCRIPTIONS.items():
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture
def store():
    # Small initial capacity so growth paths run in ordinary tests.
    return cl.LedgerStore(cl.LedgerConfig(initial_capacity=64))


@pytest.fixture(autouse=True)
def _fresh_default_store():
    cl.reset_default_store()
    yield
    cl.reset_default_store()


@pytest.fixture(autouse=True)
def _set_default_device():
    with jax.default_device(jax.devices("cpu")[0]):
        yield
