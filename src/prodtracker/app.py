from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import pandas as pd

from prodtracker.core.aggregator import summarize
from prodtracker.core.dashboard import DashboardState
from prodtracker.core.filters import ALL, DelayFilter
from prodtracker.data.batches import FLAT_PROCESS_LABEL
from prodtracker.data.ingest import ingest_files
from prodtracker.data.sample import sample_jobs
from prodtracker.logging_conf import configure_logging
from prodtracker.report.export import default_report_name, export_rows, shift_message, write_report_xlsx
from prodtracker.settings import Settings, default_report_dir

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart Production Tracker")
    parser.add_argument("files", nargs="*", type=Path, help="CSV or .xlsx production files")
    parser.add_argument("--sample", action="store_true", help="Use the built-in demonstration data")
    parser.add_argument("--ingest-date", type=str, default=None, help="Override file date (YYYY-MM-DD)")
    parser.add_argument("--date", type=str, default=ALL)
    parser.add_argument("--process", type=str, default=ALL)
    parser.add_argument("--job", type=str, default=ALL)
    parser.add_argument("--delay", type=str, default=DelayFilter.ALL, choices=DelayFilter.choices)
    parser.add_argument("--by-date", action="store_true", help="Split process summary by date")
    parser.add_argument("--flat-process", type=str, default=FLAT_PROCESS_LABEL, help="Process label for CSV rows")
    parser.add_argument("--completed-marker", action="append", default=None, help="Status text meaning done")
    parser.add_argument(
        "--rollover-threshold",
        type=int,
        default=None,
        help="Minutes an actual time may precede plan start before it counts as next day",
    )
    parser.add_argument("--export", nargs="?", const="", default=None, help="Write .xlsx report (optional path)")
    parser.add_argument("--message", action="store_true", help="Print the shift message")
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    kwargs: dict = {"report_dir": default_report_dir(), "log_level": args.log_level, "flat_process_label": args.flat_process}
    if args.completed_marker:
        kwargs["completed_markers"] = tuple(args.completed_marker)
    if args.rollover_threshold is not None:
        kwargs["rollover_threshold"] = args.rollover_threshold
    return Settings(**kwargs)


def run(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = _settings_from_args(args)
    configure_logging(settings.log_level)
    try:
        policy = settings.metrics_policy()
    except ValueError as e:
        print(f"invalid settings: {e}", file=sys.stderr)
        return 2

    if args.sample:
        jobs = sample_jobs()
    elif args.files:
        result = ingest_files(args.files, date=args.ingest_date, flat_process=settings.flat_process_label)
        for failure in result.failures:
            print(f"skipped {failure.source}: {failure.reason}", file=sys.stderr)
        jobs = result.jobs
    else:
        print("no input files (use --sample for demonstration data)", file=sys.stderr)
        return 2

    if not jobs:
        print("no valid data found in the selected files", file=sys.stderr)
        return 1

    state = DashboardState.load(jobs, policy=policy).select(date=args.date, process=args.process)
    state = state.select(job_name=args.job, delay=args.delay)
    if state.filters.job_name != args.job:
        logger.warning("Job %r not available for the current date/process; showing all jobs", args.job)

    view = state.view()
    summaries = summarize(view.jobs, by_date=args.by_date, policy=policy)
    print(f"Showing {len(view.jobs)} of {len(state.jobs)} jobs")
    if summaries:
        df = pd.DataFrame([asdict(s) for s in summaries])
        if not args.by_date:
            df = df.drop(columns=["date"])
        print(df.to_string(index=False))

    k = view.kpis
    print(
        f"Total volume: {k.quantity:,} | Completed: {k.completed}/{k.job_count} | "
        f"Efficiency: {k.avg_score if k.avg_score is not None else '-'}% | "
        f"Delayed: {k.delayed_jobs} | Avg latency: {k.avg_delay} min"
    )

    if args.message:
        print()
        print(shift_message(view.jobs, policy=policy), end="")

    if args.export is not None:
        out = Path(args.export) if args.export else settings.report_dir / default_report_name()
        write_report_xlsx(export_rows(view.jobs, policy=policy), out)
        print(f"Report written to {out}")

    return 0


def main() -> None:
    sys.exit(run())


if __name__ in {"__main__", "__mp_main__"}:
    main()
