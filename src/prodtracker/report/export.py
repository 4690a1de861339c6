from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from prodtracker.core.aggregator import dashboard_kpis
from prodtracker.core.models import ProductionJob
from prodtracker.core.policy import DEFAULT_POLICY, MetricsPolicy
from prodtracker.core.time_metrics import job_metrics

logger = logging.getLogger(__name__)

REPORT_SHEET = "Production Report"
COLUMN_WIDTH = 15

EXPORT_COLUMNS = [
    "No.",
    "Job Name",
    "Cut Time",
    "Quantity",
    "Line",
    "Process",
    "Status",
    "Plan Start",
    "Plan Finish",
    "Actual Start",
    "Actual Finish",
    "Planned (min)",
    "Delay (min)",
    "On Time",
    "Score (%)",
    "Deducted (%)",
]


def _pct(value: int | None) -> str:
    return f"{value}%" if value is not None else "-"


def export_rows(jobs: Sequence[ProductionJob], *, policy: MetricsPolicy = DEFAULT_POLICY) -> list[dict]:
    """Flatten jobs and their metrics into report rows (numbered from 1)."""
    rows: list[dict] = []
    for idx, job in enumerate(jobs, start=1):
        m = job_metrics(job, policy=policy)
        on_time = ("Yes" if m.is_on_time else "No") if m.is_completed else "-"
        values = [
            idx,
            job.job_name,
            job.cut_time,
            job.quantity,
            job.line,
            job.process,
            job.status,
            job.plan_start,
            job.plan_finish,
            job.actual_start,
            job.actual_finish,
            m.planned_duration if m.planned_duration is not None else "-",
            m.delay,
            on_time,
            _pct(m.score),
            _pct(m.deducted),
        ]
        rows.append(dict(zip(EXPORT_COLUMNS, values)))
    return rows


def default_report_name(today: date | None = None) -> str:
    return f"Production_Report_{(today or date.today()).isoformat()}.xlsx"


def write_report_xlsx(rows: Sequence[dict], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(rows), columns=EXPORT_COLUMNS)
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=REPORT_SHEET, index=False)
        ws = writer.sheets[REPORT_SHEET]
        for col_idx in range(1, len(EXPORT_COLUMNS) + 1):
            ws.column_dimensions[get_column_letter(col_idx)].width = COLUMN_WIDTH
    logger.info("Wrote %d rows to %s", len(df), out)
    return out


def shift_message(
    jobs: Sequence[ProductionJob],
    *,
    now: datetime | None = None,
    policy: MetricsPolicy = DEFAULT_POLICY,
) -> str:
    """Short plain-text report for pasting into a chat group."""
    if not jobs:
        return ""
    kpis = dashboard_kpis(jobs, policy=policy)
    processes = {j.process for j in jobs}
    dept = next(iter(processes)) if len(processes) == 1 else "All Areas"
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M")
    efficiency = _pct(kpis.avg_score)

    lines = [
        "Production Report Analysis",
        f"Date: {stamp}",
        f"Dept: {dept}",
        "",
        f"Completed: {kpis.completed}/{kpis.job_count}",
        f"Total Volume: {kpis.quantity:,}",
        f"Efficiency: {efficiency}",
    ]
    if kpis.delayed_jobs > 0:
        lines.append(f"Delays: {kpis.delayed_jobs} jobs detected.")
    return "\n".join(lines) + "\n"


def analysis_payload(jobs: Sequence[ProductionJob]) -> list[dict]:
    """Plain records handed to the external summarizer (JSON-serializable)."""
    return [
        {
            "id": j.job_id,
            "jobName": j.job_name,
            "cutTime": j.cut_time,
            "quantity": j.quantity,
            "line": j.line,
            "process": j.process,
            "status": j.status,
            "planStart": j.plan_start,
            "planFinish": j.plan_finish,
            "actualStart": j.actual_start,
            "actualFinish": j.actual_finish,
            "date": j.date,
        }
        for j in jobs
    ]
