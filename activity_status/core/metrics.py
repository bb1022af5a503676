"""Snapshot metrics using the Prometheus client library.

All metrics live here so there is one inventory of what the component
measures.  The resolver imports them and observes at the point of action.

Nothing here exposes an HTTP endpoint; the host process decides whether
to serve ``prometheus_client``'s default registry.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

SNAPSHOT_LOADS = Counter(
    "status_snapshot_loads_total",
    "Status snapshot builds by result",
    ["result"],  # "ok" or "error"
)

SNAPSHOT_LOAD_DURATION = Histogram(
    "status_snapshot_load_duration_seconds",
    "Time spent running both bulk queries for one course",
    # Small courses answer in a few ms; large ones with many quiz
    # attempts can take seconds.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

SNAPSHOT_ROWS = Counter(
    "status_snapshot_rows_total",
    "Rows loaded into status snapshots",
    ["source"],  # "submitted" or "completion"
)

UNRECOGNIZED_COMPLETION_CODES = Counter(
    "status_unrecognized_completion_codes_total",
    "Completion codes outside the known set, treated as incomplete",
)
