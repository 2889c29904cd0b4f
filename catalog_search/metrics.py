"""
Prometheus metrics for the catalog search service.

Tracks search outcomes, fallback usage, store failures and suggestions.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "catalog_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Search metrics
search_queries_total = Counter(
    "catalog_search_queries_total", "Total search queries", ["status"]
)

search_query_duration_seconds = Histogram(
    "catalog_search_query_duration_seconds",
    "Search duration in seconds",
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

search_results_per_query = Histogram(
    "catalog_search_results_per_query",
    "Number of ranked candidates per query",
    buckets=(0, 1, 5, 10, 20, 50, 100, 250, 600),
)

search_fallback_total = Counter(
    "catalog_search_fallback_total",
    "Fuzzy fallback phase outcomes",
    ["outcome"],
)

search_fallback_merged_items = Histogram(
    "catalog_search_fallback_merged_items",
    "Items added by the fuzzy fallback phase",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500),
)

# Store metrics
store_failures_total = Counter(
    "catalog_store_failures_total", "Catalog store read failures", ["operation"]
)

# Suggestion metrics
suggestion_requests_total = Counter(
    "catalog_suggestion_requests_total", "Total suggestion requests", ["status"]
)


def track_request_metrics(
    method: str, endpoint: str, status_code: int, duration: float
):
    """Track HTTP request metrics."""
    http_requests_total.labels(
        method=method, endpoint=endpoint, status=status_code
    ).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
        duration
    )


def track_search_query(status: str, duration: float, result_count: int = 0):
    """Track search query metrics."""
    search_queries_total.labels(status=status).inc()
    search_query_duration_seconds.observe(duration)
    search_results_per_query.observe(result_count)


def track_fallback(outcome: str, merged: int = 0):
    """Track a fuzzy fallback run (merged, degraded, deadline)."""
    search_fallback_total.labels(outcome=outcome).inc()
    if outcome == "merged":
        search_fallback_merged_items.observe(merged)


def track_store_failure(operation: str):
    """Track a failed catalog store read."""
    store_failures_total.labels(operation=operation).inc()


def track_suggestions(status: str):
    """Track suggestion requests."""
    suggestion_requests_total.labels(status=status).inc()


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
