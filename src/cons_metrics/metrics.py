import os

# dataflow-bundle: dedup_hits, interned, rows_written

_ledger_metrics_commits = 0
_ledger_metrics_interned = 0
_ledger_metrics_dedup_hits = 0
_ledger_metrics_rows_written = 0
_ledger_metrics_snapshots = 0
_ledger_metrics_grows = 0


def _ledger_metrics_enabled():
    value = os.environ.get("CONS_LEDGER_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def ledger_metrics_reset():
    global _ledger_metrics_commits
    global _ledger_metrics_interned
    global _ledger_metrics_dedup_hits
    global _ledger_metrics_rows_written
    global _ledger_metrics_snapshots
    global _ledger_metrics_grows
    _ledger_metrics_commits = 0
    _ledger_metrics_interned = 0
    _ledger_metrics_dedup_hits = 0
    _ledger_metrics_rows_written = 0
    _ledger_metrics_snapshots = 0
    _ledger_metrics_grows = 0


def ledger_metrics_get():
    if not _ledger_metrics_enabled():
        return {
            "commits": 0,
            "interned": 0,
            "dedup_hits": 0,
            "rows_written": 0,
            "snapshots": 0,
            "grows": 0,
            "dedup_rate": 0.0,
        }
    interned = int(_ledger_metrics_interned)
    hits = int(_ledger_metrics_dedup_hits)
    lookups = interned + hits
    dedup_rate = (hits / lookups) if lookups else 0.0
    return {
        "commits": int(_ledger_metrics_commits),
        "interned": interned,
        "dedup_hits": hits,
        "rows_written": int(_ledger_metrics_rows_written),
        "snapshots": int(_ledger_metrics_snapshots),
        "grows": int(_ledger_metrics_grows),
        "dedup_rate": float(dedup_rate),
    }


def _ledger_metrics_intern(interned, dedup_hits):
    if not _ledger_metrics_enabled():
        return
    global _ledger_metrics_interned
    global _ledger_metrics_dedup_hits
    _ledger_metrics_interned += int(interned)
    _ledger_metrics_dedup_hits += int(dedup_hits)


def _ledger_metrics_commit(rows_written):
    if not _ledger_metrics_enabled():
        return
    global _ledger_metrics_commits
    global _ledger_metrics_rows_written
    _ledger_metrics_commits += 1
    _ledger_metrics_rows_written += int(rows_written)


def _ledger_metrics_snapshot():
    if not _ledger_metrics_enabled():
        return
    global _ledger_metrics_snapshots
    _ledger_metrics_snapshots += 1


def _ledger_metrics_grow():
    if not _ledger_metrics_enabled():
        return
    global _ledger_metrics_grows
    _ledger_metrics_grows += 1


__all__ = [
    "ledger_metrics_reset",
    "ledger_metrics_get",
    "_ledger_metrics_enabled",
    "_ledger_metrics_intern",
    "_ledger_metrics_commit",
    "_ledger_metrics_snapshot",
    "_ledger_metrics_grow",
]
