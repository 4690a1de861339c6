from __future__ import annotations

import json
from datetime import date, datetime

import openpyxl
import pandas as pd

from prodtracker.report.export import (
    EXPORT_COLUMNS,
    REPORT_SHEET,
    analysis_payload,
    default_report_name,
    export_rows,
    shift_message,
    write_report_xlsx,
)
from fixtures_jobs import late, make_job, on_time, unscored


def test_export_rows_values():
    rows = export_rows([late(job_name="A"), unscored(job_name="B"), make_job(job_name="C", actual_finish="10:00")])
    assert list(rows[0]) == EXPORT_COLUMNS
    assert [r["No."] for r in rows] == [1, 2, 3]

    a, b, c = rows
    assert a["Planned (min)"] == 120
    assert a["Delay (min)"] == 30
    assert a["On Time"] == "No"
    assert a["Score (%)"] == "80%"
    assert a["Deducted (%)"] == "20%"

    assert b["Score (%)"] == "-"
    assert b["Deducted (%)"] == "-"
    assert b["On Time"] == "-"
    assert b["Planned (min)"] == "-"

    # on time but not completed yet
    assert c["Score (%)"] == "100%"
    assert c["On Time"] == "-"


def test_write_report_xlsx(tmp_path):
    out = write_report_xlsx(export_rows([on_time(job_name="A"), late(job_name="B")]), tmp_path / "out" / "report.xlsx")
    assert out.exists()

    df = pd.read_excel(out, sheet_name=REPORT_SHEET)
    assert list(df.columns) == EXPORT_COLUMNS
    assert df["Job Name"].tolist() == ["A", "B"]
    assert df["On Time"].tolist() == ["Yes", "No"]

    ws = openpyxl.load_workbook(out)[REPORT_SHEET]
    assert ws.column_dimensions["A"].width == 15
    assert ws.column_dimensions["P"].width == 15


def test_write_report_xlsx_empty(tmp_path):
    out = write_report_xlsx([], tmp_path / "empty.xlsx")
    df = pd.read_excel(out, sheet_name=REPORT_SHEET)
    assert list(df.columns) == EXPORT_COLUMNS
    assert df.empty


def test_default_report_name():
    assert default_report_name(date(2026, 1, 5)) == "Production_Report_2026-01-05.xlsx"


def test_shift_message_single_department():
    jobs = [on_time(process="STAMP", quantity=1000), late(process="STAMP", quantity=234)]
    text = shift_message(jobs, now=datetime(2026, 1, 5, 17, 30))
    assert "Date: 2026-01-05 17:30" in text
    assert "Dept: STAMP" in text
    assert "Completed: 2/2" in text
    assert "Total Volume: 1,234" in text
    assert "Efficiency: 90%" in text
    assert "Delays: 1 jobs detected." in text


def test_shift_message_all_areas_without_delays():
    text = shift_message([on_time(process="STAMP"), on_time(process="STK")], now=datetime(2026, 1, 5))
    assert "Dept: All Areas" in text
    assert "Delays" not in text
    assert shift_message([]) == ""


def test_analysis_payload_is_json_ready():
    payload = analysis_payload([make_job(job_id=7, job_name="SPTR-1")])
    assert payload[0]["id"] == 7
    assert payload[0]["jobName"] == "SPTR-1"
    assert set(payload[0]) == {
        "id", "jobName", "cutTime", "quantity", "line", "process", "status",
        "planStart", "planFinish", "actualStart", "actualFinish", "date",
    }
    json.dumps(payload, ensure_ascii=False)
