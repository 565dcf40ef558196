import jax
import jax.numpy as jnp
import numpy as np
import pytest

import conslib as cl
from cons_core import jax_safe
from tests import harness

pytestmark = pytest.mark.ledger


def test_fresh_store_has_only_null_row(store):
    assert store.count == 1
    assert store.capacity == 64
    view = store.host_view()
    assert view.row(0, "test") == (cl.OP_NULL, 0, 0)
    assert int(jax.device_get(store.ledger.count)) == 1


def test_intern_nat_dedup(store):
    a = store.intern_nat(7)
    b = store.intern_nat(7)
    assert a == b
    assert store.count == 2


def test_intern_batch_dedup_within_batch(store):
    batch = cl.NodeBatch(op=[cl.OP_NAT, cl.OP_NAT], a1=[3, 3], a2=[0, 0])
    ids = store.intern_batch(batch)
    assert ids[0] == ids[1]
    assert store.count == 2


def test_from_iterable_row_layout(store):
    s = harness.seq(store, [1, 2, 3])
    # Naturals first (one commit), then the chain from the back.
    assert store.count == 7
    assert s.id == 6
    view = store.host_view()
    assert view.row(4, "test") == (cl.OP_CONS, 3, cl.NULL_ID)
    assert view.row(5, "test") == (cl.OP_CONS, 2, 4)
    assert view.row(6, "test") == (cl.OP_CONS, 1, 5)


def test_structurally_equal_sequences_share_one_id(store):
    direct = harness.seq(store, [1, 2, 3])
    built = cl.append(harness.seq(store, [1]), harness.seq(store, [2, 3]))
    assert direct.id == built.id
    before = store.count
    harness.seq(store, [1, 2, 3])
    assert store.count == before


def test_commits_never_rewrite_existing_rows(store):
    harness.seq(store, [4, 5, 6])
    view0 = store.host_view()
    pre = (view0.opcode.copy(), view0.arg1.copy(), view0.arg2.copy())
    start = view0.count

    s = harness.seq(store, [9, 8, 7, 6])
    cl.reverse(s)
    cl.remove_all(6, s)

    view1 = store.host_view()
    assert view1.count > start
    assert np.array_equal(pre[0], view1.opcode[:start])
    assert np.array_equal(pre[1], view1.arg1[:start])
    assert np.array_equal(pre[2], view1.arg2[:start])


def test_store_grows_by_doubling():
    store = cl.LedgerStore(cl.LedgerConfig(initial_capacity=4, max_capacity=256))
    s = harness.seq(store, range(40))
    # 40 naturals + 40 cons cells + NULL.
    assert store.count == 81
    assert store.capacity == 128
    assert cl.to_list(s) == list(range(40))
    assert int(jax.device_get(store.ledger.count)) == store.count


def test_store_capacity_error_leaves_store_untouched():
    store = cl.LedgerStore(cl.LedgerConfig(initial_capacity=4, max_capacity=8))
    with pytest.raises(cl.ConsLedgerCapacityError, match="Ledger capacity exceeded"):
        harness.seq(store, range(10))
    assert store.count == 1
    assert store.lookup_nat(0) is None


def test_invalid_ledger_config_rejected():
    with pytest.raises(ValueError, match="initial_capacity"):
        cl.LedgerStore(cl.LedgerConfig(initial_capacity=16, max_capacity=8))
    with pytest.raises(ValueError, match="max_capacity"):
        cl.LedgerStore(
            cl.LedgerConfig(initial_capacity=8, max_capacity=cl.MAX_LEDGER_CAPACITY + 1)
        )
    assert cl.DEFAULT_LEDGER_CONFIG.max_capacity == cl.MAX_LEDGER_CAPACITY


def test_fresh_store_carries_live_values():
    cfg = cl.LedgerConfig(initial_capacity=16, max_capacity=64)
    live = cl.empty(cl.LedgerStore(cfg))
    for i in range(300):
        if live.store.count > cfg.max_capacity // 2:
            live = cl.transfer(live, cl.LedgerStore(cfg))
        live = cl.singleton(i, live.store)
    assert cl.to_list(live) == [299]
    assert live.store.count <= cfg.max_capacity


def test_lookup_does_not_allocate(store):
    assert store.lookup_nat(5) is None
    assert store.lookup_element((1, 2)) is None
    assert store.count == 1
    one = store.intern_nat(1)
    two = store.intern_nat(2)
    pair = store.intern_pair(one, two)
    assert store.lookup_element((1, 2)) == pair


def test_encode_decode_nested_pairs(store):
    node = store.encode((1, (2, 3)))
    assert store.decode(node) == (1, (2, 3))
    assert store.encode(np.int32(5)) == store.intern_nat(5)


@pytest.mark.parametrize(
    "value, exc",
    [
        ("x", cl.ConsElementTypeError),
        (1.5, cl.ConsElementTypeError),
        ((1, 2, 3), cl.ConsElementTypeError),
        (-1, cl.ConsNatDomainError),
        (True, cl.ConsNatDomainError),
    ],
)
def test_encode_rejects_out_of_domain_values(store, value, exc):
    with pytest.raises(exc):
        store.encode(value)
    assert store.count == 1


def test_encode_many_is_atomic(store):
    with pytest.raises(cl.ConsNatDomainError):
        store.encode_many([1, 2, -3])
    assert store.count == 1


def test_custom_max_nat():
    store = cl.LedgerStore(cl.LedgerConfig(initial_capacity=8, max_nat=10))
    store.intern_nat(10)
    with pytest.raises(cl.ConsNatDomainError, match="<= 10"):
        store.intern_nat(11)
    # Outside the bound is never interned, so lookups report it absent.
    assert store.lookup_nat(11) is None
    with pytest.raises(cl.ConsNatDomainError):
        store.lookup_nat(-1)


def test_large_naturals_are_interned_out_of_line(store):
    big = 2**40
    node = store.intern_nat(big)
    assert store.decode(node) == big
    assert store.intern_nat(big) == node
    assert store.lookup_nat(big) == node
    assert store.lookup_nat(big + 1) is None
    view = store.host_view()
    assert view.row(node, "test")[0] == cl.OP_BIGNAT
    edge = store.intern_nat(cl.MAX_INLINE_NAT)
    assert store.host_view().row(edge, "test") == (cl.OP_NAT, cl.MAX_INLINE_NAT, 0)
    assert store.decode(store.encode((big, 2**31))) == (big, 2**31)


def test_failed_commit_drops_pending_large_naturals(store):
    with pytest.raises(cl.ConsNatDomainError):
        store.encode_many([2**40, -1])
    assert store.count == 1
    assert store.lookup_nat(2**40) is None
    node = store.intern_nat(2**50)
    assert store.decode(node) == 2**50


def test_walk_rejects_non_sequence_rows(store):
    nat = store.intern_nat(4)
    with pytest.raises(cl.ConsCorruptNodeError, match="unexpected opcode nat"):
        cl.length(cl.Seq(store, nat))
    with pytest.raises(cl.ConsCorruptNodeError, match="out of range"):
        cl.length(cl.Seq(store, 999))


def test_decode_rejects_cons_rows(store):
    s = harness.seq(store, [1])
    with pytest.raises(cl.ConsCorruptNodeError):
        store.decode(s.id)


def test_count_drift_guard(store, monkeypatch):
    monkeypatch.setenv("CONS_TEST_GUARDS", "1")
    harness.seq(store, [1, 2])
    store.ledger = store.ledger._replace(count=jnp.array(99, dtype=jnp.int32))
    store._view = None
    with pytest.raises(RuntimeError, match="count drift"):
        store.host_view()


def test_scatter_guard(monkeypatch):
    target = jnp.zeros(4, dtype=jnp.int32)
    idx = jnp.array([6], dtype=jnp.int32)
    vals = jnp.array([1], dtype=jnp.int32)
    monkeypatch.setenv("CONS_TEST_GUARDS", "1")
    with pytest.raises(RuntimeError, match="scatter index out of bounds"):
        jax_safe.scatter_drop(target, idx, vals, "test")
    monkeypatch.setenv("CONS_TEST_GUARDS", "0")
    out = jax_safe.scatter_drop(target, idx, vals, "test")
    assert int(jnp.sum(out)) == 0


def test_bucket_size():
    assert jax_safe.bucket_size(0) == 4
    assert jax_safe.bucket_size(4) == 4
    assert jax_safe.bucket_size(5) == 8
    assert jax_safe.bucket_size(100) == 128


def test_append_rows_is_pure():
    ledger = cl.init_ledger(8)
    batch = cl.NodeBatch(op=[cl.OP_NAT], a1=[5], a2=[0])
    ledger2 = cl.append_rows(ledger, 1, batch)
    assert int(ledger.opcode[1]) == cl.OP_NULL
    assert int(ledger.count) == 1
    assert int(ledger2.opcode[1]) == cl.OP_NAT
    assert int(ledger2.arg1[1]) == 5
    assert int(ledger2.count) == 2
    # Padding slots are dropped, not written.
    assert int(jnp.sum(ledger2.opcode[2:])) == 0


def test_append_rows_rejects_overflow_and_misaligned():
    ledger = cl.init_ledger(2)
    with pytest.raises(ValueError, match="exceed capacity"):
        cl.append_rows(ledger, 1, cl.NodeBatch(op=[1, 1], a1=[0, 1], a2=[0, 0]))
    with pytest.raises(ValueError, match="aligned"):
        cl.append_rows(ledger, 1, cl.NodeBatch(op=[1], a1=[0, 1], a2=[0]))


def test_grow_ledger_keeps_rows():
    ledger = cl.append_rows(
        cl.init_ledger(4), 1, cl.NodeBatch(op=[cl.OP_NAT], a1=[9], a2=[0])
    )
    grown = cl.grow_ledger(ledger, 16)
    assert grown.opcode.shape[0] == 16
    assert int(grown.arg1[1]) == 9
    assert cl.grow_ledger(grown, 8) is grown
    view = cl.snapshot_ledger(grown, 2)
    assert view.count == 2
    assert view.row(1, "test") == (cl.OP_NAT, 9, 0)


def test_default_store_backs_constructors():
    s = cl.from_iterable([1, 2])
    assert s.store is cl.default_store()
    assert cl.empty().store is cl.default_store()
    fresh = cl.reset_default_store()
    assert cl.empty().store is fresh
    assert fresh is not s.store
