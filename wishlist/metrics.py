"""Prometheus metrics for the wishlist extraction service."""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
app_info = Info("wishlist", "Wishlist product extraction service info")
app_info.info({"version": "0.1.0", "name": "wishlist"})

# Extraction metrics
extractions_total = Counter(
    "product_extractions_total",
    "Total number of product extraction attempts",
    ["retailer", "status"],
)

extraction_errors_total = Counter(
    "product_extraction_errors_total",
    "Total number of failed product extractions",
    ["retailer", "error_type"],
)

extraction_duration_seconds = Histogram(
    "product_extraction_duration_seconds",
    "Time spent extracting product info",
    ["retailer"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 15.0, 20.0, 30.0],
)

extraction_stage_runs_total = Counter(
    "product_extraction_stage_runs_total",
    "Number of times each extractor stage ran",
    ["stage"],
)

# Browser metrics
browser_sessions_open = Gauge(
    "browser_sessions_open",
    "Headless browser sessions currently open",
)

browser_close_errors_total = Counter(
    "browser_close_errors_total",
    "Errors swallowed while closing browser resources",
    ["resource"],
)


def record_extraction_success(retailer: str, duration: float):
    """Record a successful extraction."""
    extractions_total.labels(retailer=retailer, status="success").inc()
    extraction_duration_seconds.labels(retailer=retailer).observe(duration)


def record_extraction_error(retailer: str, error_type: str, duration: float):
    """Record a failed extraction."""
    extractions_total.labels(retailer=retailer, status="error").inc()
    extraction_errors_total.labels(retailer=retailer, error_type=error_type).inc()
    extraction_duration_seconds.labels(retailer=retailer).observe(duration)


def record_stage_run(stage: str):
    """Record an extractor stage running."""
    extraction_stage_runs_total.labels(stage=stage).inc()
