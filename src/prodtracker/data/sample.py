from __future__ import annotations

from datetime import date as date_cls

from prodtracker.core.models import ProductionJob


def sample_jobs(today: date_cls | None = None) -> list[ProductionJob]:
    """Demonstration dataset: one finished, one running, one waiting job."""
    day = (today or date_cls.today()).isoformat()
    return [
        ProductionJob(
            job_id=1,
            job_name="SPTR-161268-R5",
            cut_time="16:31",
            quantity=50,
            line="Line 1",
            process="STAMP",
            status="เสร็จแล้ว @ 16:44",
            plan_start="16:31",
            plan_finish="16:44",
            actual_start="16:31",
            actual_finish="16:44",
            date=day,
        ),
        ProductionJob(
            job_id=2,
            job_name="STK-9901-X",
            cut_time="08:00",
            quantity=120,
            line="Line A",
            process="STK",
            status="กำลังผลิต",
            plan_start="08:00",
            plan_finish="10:00",
            actual_start="08:05",
            actual_finish="-",
            date=day,
        ),
        ProductionJob(
            job_id=3,
            job_name="CTT-5541-B",
            cut_time="09:30",
            quantity=200,
            line="Line 2",
            process="CTT",
            status="รอวัตถุดิบ",
            plan_start="09:30",
            plan_finish="11:30",
            actual_start="-",
            actual_finish="-",
            date=day,
        ),
    ]
