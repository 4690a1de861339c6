from __future__ import annotations

import pytest

from prodtracker.core.time_metrics import (
    ROLLOVER_THRESHOLD_MIN,
    compute_metrics,
    job_metrics,
    resolve_window,
    roll_forward,
    round_half_up,
    to_minutes,
)
from fixtures_jobs import make_job


@pytest.mark.parametrize(
    "text,expected",
    [
        ("09:30", 570),
        ("00:00", 0),
        ("23:59", 1439),
        ("7:5", 425),
        (" 08:00 ", 480),
        ("16:31:00", 991),
    ],
)
def test_to_minutes_valid(text, expected):
    assert to_minutes(text) == expected


@pytest.mark.parametrize("text", ["-", "", "   ", "0930", None, "24:00", "12:60", "ab:cd", ":", "9.5:00", "-1:30"])
def test_to_minutes_unparsable_is_none(text):
    assert to_minutes(text) is None


def test_to_minutes_is_total():
    samples = ["", "-", ":", "::", "1:2:3:4", "99:99", "٠٩:٣٠", "x", "12:", ":30", "1e3:00", "00:59", "23:00 น."]
    for s in samples:
        r = to_minutes(s)
        assert r is None or 0 <= r <= 1439


def test_resolve_window_rolls_finish_into_next_day():
    w = resolve_window(1410, 15)
    assert w.finish == 1455
    assert w.rolled
    assert w.duration == 45

    same_day = resolve_window(540, 660)
    assert not same_day.rolled
    assert same_day.duration == 120


def test_roll_forward_threshold():
    # 30 minutes early on the same day stays put
    assert roll_forward(510, 540) == 510
    # exactly at the threshold is not rolled
    assert roll_forward(0, ROLLOVER_THRESHOLD_MIN) == 0
    assert roll_forward(10, 1410) == 1450
    assert roll_forward(10, 1410, threshold=1440) == 10


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(80.0) == 80
    assert round_half_up(78.57) == 79
    assert round_half_up(0.49) == 0


def test_late_job_scores_planned_share():
    m = compute_metrics("09:00", "11:00", "11:30")
    assert m.planned_duration == 120
    assert m.delay == 30
    assert m.score == 80
    assert m.deducted == 20
    assert m.is_on_time is False


def test_plan_window_crossing_midnight_on_time():
    m = compute_metrics("23:30", "00:15", "00:10")
    assert m.planned_duration == 45
    assert m.delay == 0
    assert m.is_on_time is True
    assert m.score == 100
    assert m.deducted == 0


def test_actual_finish_after_midnight_is_late_not_early():
    # heuristic, confirm before relying on for audits
    m = compute_metrics("22:00", "23:50", "00:20")
    assert m.delay == 30
    assert m.score == round_half_up(110 / 140 * 100)


def test_missing_actual_finish_has_no_score():
    m = compute_metrics("09:00", "11:00", "-")
    assert m.score is None
    assert m.deducted is None
    assert m.delay == 0
    assert m.is_on_time is False
    assert m.planned_duration is None


@pytest.mark.parametrize("plan_start,plan_finish", [("-", "11:00"), ("09:00", ""), ("0900", "11:00")])
def test_missing_plan_has_no_score_or_duration(plan_start, plan_finish):
    m = compute_metrics(plan_start, plan_finish, "11:30")
    assert m.score is None
    assert m.delay == 0
    assert m.planned_duration is None


def test_zero_planned_duration_does_not_divide_by_zero():
    late = compute_metrics("10:00", "10:00", "10:30")
    assert late.planned_duration == 0
    assert late.delay == 30
    assert late.score == 0
    assert late.deducted == 100

    exact = compute_metrics("10:00", "10:00", "10:00")
    assert exact.score == 100


def test_score_rounds_half_up():
    # 1 planned minute, 7 late -> 12.5%
    m = compute_metrics("10:00", "10:01", "10:08")
    assert m.score == 13
    assert m.deducted == 87


def test_early_finish_is_on_time():
    m = compute_metrics("09:00", "11:00", "08:30")
    assert m.is_on_time
    assert m.score == 100
    assert m.delay == 0


def test_start_delay_when_actual_start_known():
    assert compute_metrics("09:00", "11:00", "11:00", "09:15").start_delay == 15
    assert compute_metrics("09:00", "11:00", "11:00", "08:50").start_delay == 0
    assert compute_metrics("09:00", "11:00", "11:00", "-").start_delay is None


def test_completion_uses_injected_predicate():
    m = compute_metrics("09:00", "11:00", "-", status="DONE", is_completed=lambda s: s == "DONE")
    assert m.is_completed is True
    assert compute_metrics("09:00", "11:00", "-", status="DONE").is_completed is False


def test_job_metrics_is_deterministic():
    job = make_job(actual_finish="11:30", status="เสร็จแล้ว @ 11:30")
    a = job_metrics(job)
    b = job_metrics(job)
    assert a == b
    assert a.is_completed is True


def test_score_and_deducted_invariants():
    cases = [
        ("09:00", "11:00", "11:30"),
        ("09:00", "11:00", "10:00"),
        ("23:30", "00:15", "02:00"),
        ("08:00", "08:05", "20:00"),
        ("00:00", "23:59", "23:59"),
    ]
    for ps, pf, af in cases:
        m = compute_metrics(ps, pf, af)
        assert m.score is not None
        assert 0 <= m.score <= 100
        assert m.score + m.deducted == 100
        if m.is_on_time:
            assert m.delay == 0 and m.score == 100 and m.deducted == 0
