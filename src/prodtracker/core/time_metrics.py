from __future__ import annotations

import math
from typing import Callable

from prodtracker.core.models import JobMetrics, ProductionJob, TimeWindow
from prodtracker.core.policy import DEFAULT_POLICY, ROLLOVER_THRESHOLD_MIN, MetricsPolicy

MINUTES_PER_DAY = 24 * 60

MISSING = "-"


def round_half_up(value: float) -> int:
    """Round .5 fractions up (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def to_minutes(text: str | None) -> int | None:
    """Convert an ``HH:MM`` time of day into minutes since midnight.

    Returns None for "-", empty strings, strings without ':' and anything that
    is not a valid time of day. Seconds (``HH:MM:SS``) are ignored.
    """
    if text is None:
        return None
    s = str(text).strip()
    if not s or s == MISSING or ":" not in s:
        return None

    parts = s.split(":")
    try:
        hours = int(parts[0].strip())
        minutes = int(parts[1].strip())
    except ValueError:
        return None

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def resolve_window(start: int, finish: int) -> TimeWindow:
    if finish < start:
        return TimeWindow(start=start, finish=finish + MINUTES_PER_DAY, rolled=True)
    return TimeWindow(start=start, finish=finish, rolled=False)


def roll_forward(actual: int, plan_start: int, *, threshold: int = ROLLOVER_THRESHOLD_MIN) -> int:
    """Push an actual time into the next day when it sits far before plan start.

    23:50 against a 00:10 plan is 20 minutes late, not 23 hours early.
    """
    if actual < plan_start and (plan_start - actual) > threshold:
        return actual + MINUTES_PER_DAY
    return actual


def compute_metrics(
    plan_start: str | None,
    plan_finish: str | None,
    actual_finish: str | None,
    actual_start: str | None = None,
    *,
    status: str = "",
    is_completed: Callable[[str], bool] = DEFAULT_POLICY.is_completed,
    rollover_threshold: int = ROLLOVER_THRESHOLD_MIN,
) -> JobMetrics:
    """Derive delay and efficiency score for one job.

    Score is the planned duration's share of the total elapsed time
    (planned + delay): a job that took twice its plan scores 50.
    """
    completed = bool(is_completed(status))

    p_start = to_minutes(plan_start)
    p_finish = to_minutes(plan_finish)
    a_finish = to_minutes(actual_finish)
    a_start = to_minutes(actual_start)

    window = resolve_window(p_start, p_finish) if p_start is not None and p_finish is not None else None

    if window is None or a_finish is None:
        # Not enough data yet: no duration, no score, no delay to report.
        return JobMetrics(
            planned_duration=None,
            delay=0,
            is_on_time=False,
            score=None,
            deducted=None,
            is_completed=completed,
        )

    a_finish = roll_forward(a_finish, window.start, threshold=rollover_threshold)
    start_delay = None
    if a_start is not None:
        a_start = roll_forward(a_start, window.start, threshold=rollover_threshold)
        start_delay = max(0, a_start - window.start)

    planned = window.duration
    delay = max(0, a_finish - window.finish)

    if a_finish <= window.finish:
        return JobMetrics(
            planned_duration=planned,
            delay=0,
            is_on_time=True,
            score=100,
            deducted=0,
            is_completed=completed,
            start_delay=start_delay,
        )

    total = planned + delay
    score = round_half_up(planned / (total if total > 0 else 1) * 100)
    score = max(0, min(100, score))
    return JobMetrics(
        planned_duration=planned,
        delay=delay,
        is_on_time=False,
        score=score,
        deducted=100 - score,
        is_completed=completed,
        start_delay=start_delay,
    )


def job_metrics(
    job: ProductionJob,
    *,
    policy: MetricsPolicy = DEFAULT_POLICY,
) -> JobMetrics:
    return compute_metrics(
        job.plan_start,
        job.plan_finish,
        job.actual_finish,
        job.actual_start,
        status=job.status,
        is_completed=policy.is_completed,
        rollover_threshold=policy.rollover_threshold,
    )
