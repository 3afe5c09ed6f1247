"""Prometheus metrics for the relay service.

Defines and exports metrics for monitoring:
- Sends by kind and outcome (counter)
- Send failures by stage and error code (counter)
- Stage timings (histogram)
- Persisted rows and emitted events (counters)
- Active realtime sessions (gauge)
"""

import logging

from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Send Metrics
# -----------------------------------------------------------------------------

relay_sends_total = Counter(
    "relay_sends_total",
    "Total sends handled by the delivery pipeline",
    labelnames=["kind", "status"],
)

relay_send_failures_total = Counter(
    "relay_send_failures_total",
    "Total failed sends by stage and error code",
    labelnames=["kind", "stage", "code"],
)

relay_send_duration_seconds = Histogram(
    "relay_send_duration_seconds",
    "End-to-end send latency in seconds",
    labelnames=["kind"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0, float("inf")),
)

# -----------------------------------------------------------------------------
# Stage Timing Metrics
# -----------------------------------------------------------------------------

relay_stage_duration_seconds = Histogram(
    "relay_stage_duration_seconds",
    "Per-stage latency in seconds (translation, stt, tts, storage, persistence)",
    labelnames=["stage"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0, float("inf")),
)

# -----------------------------------------------------------------------------
# Fan-out Metrics
# -----------------------------------------------------------------------------

relay_rows_persisted_total = Counter(
    "relay_rows_persisted_total",
    "Total per-recipient message rows persisted",
    labelnames=["kind"],
)

relay_events_emitted_total = Counter(
    "relay_events_emitted_total",
    "Total fan-out events pushed to rooms",
    labelnames=["kind"],
)

relay_gateway_sessions_active = Gauge(
    "relay_gateway_sessions_active",
    "Current number of connected realtime sessions",
)

# -----------------------------------------------------------------------------
# Metric Recording Functions
# -----------------------------------------------------------------------------


def record_send_success(kind: str, duration_ms: int, rows: int) -> None:
    """Record a completed send."""
    try:
        relay_sends_total.labels(kind=kind, status="success").inc()
        relay_send_duration_seconds.labels(kind=kind).observe(duration_ms / 1000.0)
        relay_rows_persisted_total.labels(kind=kind).inc(rows)
    except Exception as e:
        logger.error(f"Failed to record success metrics: {e}")


def record_send_failure(kind: str, stage: str, code: str) -> None:
    """Record a failed send.

    Args:
        kind: Message kind (text, voice)
        stage: Stage tag where the send failed (tts, storage:original, ...)
        code: Error code (TTS_FAILED, PROVIDER_TIMEOUT, ...)
    """
    try:
        relay_sends_total.labels(kind=kind, status="failed").inc()
        relay_send_failures_total.labels(kind=kind, stage=stage, code=code).inc()
    except Exception as e:
        logger.error(f"Failed to record failure metrics: {e}")


def record_stage_timing(stage: str, duration_ms: int) -> None:
    """Record individual stage timing."""
    try:
        relay_stage_duration_seconds.labels(stage=stage).observe(duration_ms / 1000.0)
    except Exception as e:
        logger.error(f"Failed to record stage timing: {e}")


def record_event_emitted(kind: str) -> None:
    try:
        relay_events_emitted_total.labels(kind=kind).inc()
    except Exception as e:
        logger.error(f"Failed to record emitted event: {e}")


def increment_active_sessions() -> None:
    """Increment active sessions count."""
    try:
        relay_gateway_sessions_active.inc()
    except Exception as e:
        logger.error(f"Failed to increment active sessions: {e}")


def decrement_active_sessions() -> None:
    """Decrement active sessions count."""
    try:
        relay_gateway_sessions_active.dec()
    except Exception as e:
        logger.error(f"Failed to decrement active sessions: {e}")
