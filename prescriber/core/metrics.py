"""
Prometheus metrics for interaction discovery.
"""

from prometheus_client import Counter, Histogram

QUERY_LATENCY = Histogram(
    "prescriber_query_duration_seconds",
    "Reference store query latency by category",
    ["category"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)
)

QUERY_FAILURES = Counter(
    "prescriber_query_failures_total",
    "Reference store query failures by category",
    ["category"]
)

INTERACTIONS_FOUND = Counter(
    "prescriber_interactions_found_total",
    "Interactions reported by kind",
    ["kind"]
)
