from __future__ import annotations

import pytest

import prodtracker.app as app_module
from fixtures_jobs import HEADER, make_csv_text


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    # Keep pytest's own log capture in place.
    monkeypatch.setattr(app_module, "configure_logging", lambda level: None)


def test_run_sample(capsys):
    assert app_module.run(["--sample"]) == 0
    out = capsys.readouterr().out
    assert "Showing 3 of 3 jobs" in out
    assert "STAMP" in out
    assert "Total volume: 370" in out


def test_run_without_input():
    assert app_module.run([]) == 2


def test_run_filters_and_exports(tmp_path, capsys):
    out_path = tmp_path / "report.xlsx"
    code = app_module.run(["--sample", "--process", "STAMP", "--message", "--export", str(out_path)])
    assert code == 0
    out = capsys.readouterr().out
    assert "Showing 1 of 3 jobs" in out
    assert "Dept: STAMP" in out
    assert out_path.exists()


def test_run_files_reports_skipped(tmp_path, capsys):
    good = tmp_path / "good.csv"
    good.write_text(
        make_csv_text([[1, "A", "08:00", 5, "Line 1", "Completed", "09:00", "11:00", "09:00", "11:30"]]),
        encoding="utf-8",
    )
    empty = tmp_path / "empty.csv"
    empty.write_text(",".join(HEADER) + "\n", encoding="utf-8")

    code = app_module.run([str(good), str(empty), "--ingest-date", "2026-01-05", "--by-date"])
    assert code == 0
    captured = capsys.readouterr()
    assert "skipped empty.csv" in captured.err
    assert "2026-01-05" in captured.out
    assert "Delayed: 1" in captured.out


def test_run_only_empty_files(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text(",".join(HEADER) + "\n", encoding="utf-8")
    assert app_module.run([str(empty)]) == 1


def test_run_rollover_threshold_flag(tmp_path, capsys):
    src = tmp_path / "night.csv"
    src.write_text(
        make_csv_text([[1, "N", "08:00", 5, "Line 1", "Completed", "09:00", "11:00", "09:00", "01:00"]]),
        encoding="utf-8",
    )

    assert app_module.run([str(src), "--ingest-date", "2026-01-05"]) == 0
    assert "Delayed: 0" in capsys.readouterr().out

    assert app_module.run([str(src), "--ingest-date", "2026-01-05", "--rollover-threshold", "360"]) == 0
    assert "Delayed: 1" in capsys.readouterr().out


def test_run_rejects_bad_rollover_threshold():
    assert app_module.run(["--sample", "--rollover-threshold", "-5"]) == 2
