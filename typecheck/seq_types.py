from typing import TYPE_CHECKING, assert_type

import conslib as cl


if TYPE_CHECKING:
    store = cl.LedgerStore()
    s = cl.from_iterable([1, 2, 3], store)
    assert_type(s, cl.Seq)
    assert_type(cl.append(s, s), cl.Seq)
    assert_type(cl.transfer(s, store), cl.Seq)
    assert_type(cl.reverse(s, mode=cl.ReverseMode.SNOC), cl.Seq)
    assert_type(cl.length(s), int)
    assert_type(cl.equals(s, s), bool)
    assert_type(cl.subset(s, s), bool)
    assert_type(cl.count(1, s), int)

    d = cl.insert(1, 2, cl.empty_dict(store))
    assert_type(cl.bindings(d), list[tuple[int, int]])

    view = store.host_view()
    assert_type(view, cl.HostView)
    assert_type(store.lookup_nat(1), int | None)

    _ = cl.append(s, [1, 2])  # type: ignore
    _ = cl.reverse(s, cfg=cl.DEFAULT_LEDGER_CONFIG)  # type: ignore
