from __future__ import annotations

from collections.abc import Iterable

from prodtracker.core.models import DashboardKpis, ProcessSummary, ProductionJob, process_key
from prodtracker.core.policy import DEFAULT_POLICY, MetricsPolicy
from prodtracker.core.time_metrics import job_metrics, round_half_up


def summarize(
    jobs: Iterable[ProductionJob],
    *,
    by_date: bool = False,
    policy: MetricsPolicy = DEFAULT_POLICY,
) -> list[ProcessSummary]:
    """Per-process summary, optionally partitioned by ingestion date.

    Groups are returned sorted by (process, date) so output is stable for a
    given input regardless of row order.
    """
    groups: dict[tuple[str, str | None], dict[str, int]] = {}

    for job in jobs:
        key = (process_key(job), job.date if by_date else None)
        g = groups.get(key)
        if g is None:
            g = {"count": 0, "qty": 0, "completed": 0, "perfect": 0, "delayed": 0, "scored": 0, "total_score": 0}
            groups[key] = g

        g["count"] += 1
        g["qty"] += int(job.quantity)

        m = job_metrics(job, policy=policy)
        if m.is_completed:
            g["completed"] += 1
        if m.score is not None:
            g["scored"] += 1
            g["total_score"] += m.score
            if m.score == 100:
                g["perfect"] += 1
            else:
                g["delayed"] += 1

    out: list[ProcessSummary] = []
    for (process, day), g in sorted(groups.items(), key=lambda kv: (kv[0][0], kv[0][1] or "")):
        out.append(
            ProcessSummary(
                process=process,
                date=day,
                job_count=g["count"],
                quantity=g["qty"],
                completed=g["completed"],
                perfect_count=g["perfect"],
                delayed_count=g["delayed"],
                scored_count=g["scored"],
                avg_score=round_half_up(g["total_score"] / g["scored"]) if g["scored"] else None,
            )
        )
    return out


def dashboard_kpis(jobs: Iterable[ProductionJob], *, policy: MetricsPolicy = DEFAULT_POLICY) -> DashboardKpis:
    job_count = 0
    quantity = 0
    completed = 0
    delayed_jobs = 0
    total_delay = 0
    total_score = 0
    scored = 0

    for job in jobs:
        m = job_metrics(job, policy=policy)
        job_count += 1
        quantity += int(job.quantity)
        completed += 1 if m.is_completed else 0
        total_delay += m.delay
        if m.delay > 0:
            delayed_jobs += 1
        if m.score is not None:
            total_score += m.score
            scored += 1

    return DashboardKpis(
        job_count=job_count,
        quantity=quantity,
        completed=completed,
        avg_score=round_half_up(total_score / scored) if scored else None,
        delayed_jobs=delayed_jobs,
        avg_delay=round_half_up(total_delay / job_count) if job_count else 0,
    )


def volume_by_process(jobs: Iterable[ProductionJob]) -> list[tuple[str, int, int]]:
    """(process, quantity, job count), largest volume first."""
    acc: dict[str, list[int]] = {}
    for job in jobs:
        entry = acc.setdefault(process_key(job), [0, 0])
        entry[0] += int(job.quantity)
        entry[1] += 1
    return sorted(((p, q, n) for p, (q, n) in acc.items()), key=lambda t: (-t[1], t[0]))
