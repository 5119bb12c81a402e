"""Prometheus metrics for insight generation, scoring and outbound calls"""

from typing import Iterable

from prometheus_client import Counter, Histogram

# Insight metrics
insights_counter = Counter(
    "revelation_insights_total",
    "Insights emitted by the generators",
    ["severity"],  # critical | warning | neutral | positive
)

generator_failure_counter = Counter(
    "revelation_generator_failures_total",
    "Insight generators that raised and were skipped",
    ["generator"],
)

overall_score_histogram = Histogram(
    "revelation_overall_score",
    "Distribution of overall revelation scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Enrichment metrics
quote_fetch_counter = Counter(
    "revelation_quote_fetch_total",
    "Quote enrichment outcomes",
    ["source"],  # remote | fallback
)

# Data store metrics
data_fetch_failures_counter = Counter(
    "data_fetch_failures_total",
    "Failed data store reads",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Notification webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_insights(severities: Iterable[str]) -> None:
    """Count emitted insights per severity"""
    for severity in severities:
        insights_counter.labels(severity=severity).inc()


def record_score(overall: int) -> None:
    overall_score_histogram.observe(overall)
