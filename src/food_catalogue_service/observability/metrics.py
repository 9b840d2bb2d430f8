"""Custom metrics for the food catalogue service."""

from opentelemetry import metrics

meter = metrics.get_meter("food-catalogue")

page_success_counter = meter.create_counter(
    name="catalogue_page_success_total",
    description="Total number of catalogue pages assembled",
    unit="1",
)

page_failure_counter = meter.create_counter(
    name="catalogue_page_failure_total",
    description="Total number of catalogue page requests that failed, by error code",
    unit="1",
)

page_duration_histogram = meter.create_histogram(
    name="catalogue_page_duration_seconds",
    description="Duration of catalogue page assembly",
    unit="s",
)

directory_lookup_duration = meter.create_histogram(
    name="directory_lookup_duration_seconds",
    description="Response time of restaurant directory lookups, by outcome",
    unit="s",
)


def record_page_success(item_count: int, duration_seconds: float) -> None:
    """Record a successfully assembled catalogue page.

    Args:
        item_count: Number of menu items on the page
        duration_seconds: Assembly duration in seconds
    """
    page_success_counter.add(1, {"has_items": item_count > 0})
    page_duration_histogram.record(duration_seconds, {"outcome": "success"})


def record_page_failure(error_code: str, duration_seconds: float) -> None:
    """Record a failed catalogue page request.

    Args:
        error_code: Code of the error that stopped assembly
        duration_seconds: Time spent before failing, in seconds
    """
    page_failure_counter.add(1, {"error_code": error_code})
    page_duration_histogram.record(duration_seconds, {"outcome": "failure"})


def record_directory_lookup(outcome: str, duration_seconds: float) -> None:
    """Record a restaurant directory lookup.

    Args:
        outcome: "success" or the error code of the failure
        duration_seconds: Duration in seconds
    """
    directory_lookup_duration.record(duration_seconds, {"outcome": outcome})
