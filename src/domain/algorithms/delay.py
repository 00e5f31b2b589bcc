from __future__ import annotations

from datetime import datetime

from src.domain.models import DelayAssessment

DELAY_THRESHOLD_MIN = 5.0


def elapsed_minutes(*, last_updated: datetime, now: datetime) -> float:
    return (now - last_updated).total_seconds() / 60.0


def evaluate_delay(
    *,
    eta_min: float,
    last_updated: datetime,
    now: datetime,
    threshold_min: float = DELAY_THRESHOLD_MIN,
) -> DelayAssessment:
    """Compare the fresh ETA with the time elapsed since the client's report.

    `last_updated` comes from the client and is trusted as-is, so a skewed
    clock on the bus shifts the result.
    """

    elapsed = elapsed_minutes(last_updated=last_updated, now=now)
    delay = eta_min - elapsed
    return DelayAssessment(
        elapsed_min=elapsed,
        delay_min=delay,
        is_delayed=delay > threshold_min,
    )
