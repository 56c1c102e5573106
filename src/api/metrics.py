import time

from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "addy_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "addy_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

CACHE_EVENTS_TOTAL = get_or_create_metric(
    "addy_cache_events_total",
    "Recommendation cache lookups by result",
    Counter,
    labelnames=["result"],
)

MODEL_CALLS_TOTAL = get_or_create_metric(
    "addy_model_calls_total",
    "Completion model invocations",
    Counter,
    labelnames=["provider"],
)

TASKS_FETCHED_TOTAL = get_or_create_metric(
    "addy_tasks_fetched_total", "Total tasks fetched from the task database", Counter
)


def observe_request(endpoint: str, status: str, started_at: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - started_at)
