"""
Tests for step log parsing and dead-reckoning reconstruction.
"""

import logging
import math

import pytest

from step_erraticism.steplog import (
    PositionedStep, RawStepRecord, SteplogNotFoundError, load_steps, parse_record,
    parse_records, read_steplog, reconstruct,
)

CLEAN_LINES = [
    "1000,0.7,0.0,0,0",
    "2000,0.7,0.5,0,0",
    "3000,0.8,1.0,0.1,0.2",
    "4000,0.6,-2.0,0,0",
]


def test_parse_record_fields():
    """All five fields are parsed; the trailing two are kept as reserved."""
    record = parse_record("1484922605000000000,0.74,1.5707,3.5,-1\n")
    assert record == RawStepRecord(1484922605000000000, 0.74, 1.5707, (3.5, -1.0))
    assert isinstance(record.timestamp, int)


def test_parse_record_tolerates_whitespace_and_extra_fields():
    record = parse_record("  10 , 1.0 ,\t0.25, 0, 0 ,extra,7\r\n")
    assert record is not None
    assert record.timestamp == 10
    assert record.heading == 0.25


@pytest.mark.parametrize("line", [
    "",
    "   ",
    "10,1.0,0.0,0",            # four fields
    "10,1.0,abc,0,0",          # non-numeric heading
    "1.5,1.0,0.0,0,0",         # fractional timestamp
    "ts,1.0,0.0,0,0",          # header-like line
    "10,nan,0.0,0,0",          # non-finite displacement
    "10,1.0,inf,0,0",          # non-finite heading
    "10,1.0,0.0,0,",           # empty reserved field
    "10,1.0,0.0,0,0abc",       # trailing junk in the last field
])
def test_parse_record_rejects_malformed(line):
    assert parse_record(line) is None


def test_single_step_integration():
    """The first displacement already moves the walker away from the origin."""
    steps = reconstruct([RawStepRecord(0, 1.0, 0.0)])
    assert steps[0].x == 1.0
    assert steps[0].y == 0.0


def test_quarter_turn_integration():
    steps = reconstruct([RawStepRecord(0, 1.0, 0.0), RawStepRecord(1, 1.0, math.pi / 2)])
    assert steps[1].x == pytest.approx(1.0, abs=1e-9)
    assert steps[1].y == pytest.approx(1.0, abs=1e-9)


def test_reconstruct_matches_sequential_sum():
    records = parse_records(CLEAN_LINES)
    steps = reconstruct(records)

    x = y = 0.0
    for record, step in zip(records, steps):
        x += record.displacement * math.cos(record.heading)
        y += record.displacement * math.sin(record.heading)
        assert (step.x, step.y) == (x, y)
        assert (step.timestamp, step.displacement, step.heading) == (
            record.timestamp, record.displacement, record.heading)


def test_reconstruct_is_idempotent():
    records = parse_records(CLEAN_LINES)
    assert reconstruct(records) == reconstruct(records)


def test_empty_input():
    assert reconstruct([]) == []
    assert load_steps([]) == []


def test_malformed_lines_are_skipped():
    """A corrupt line disappears without disturbing its neighbours."""
    noisy = CLEAN_LINES[:2] + ["2500,0.9,0.3,0"] + ["", "garbage"] + CLEAN_LINES[2:]
    assert load_steps(noisy) == load_steps(CLEAN_LINES)


def test_skips_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='step_erraticism.steplog'):
        parse_records(["1,1.0,0.0,0,0", "broken", "2,1.0,0.0,0,0"])
    assert "line 2" in caplog.text
    assert "Skipped 1 malformed line" in caplog.text


def test_timestamps_are_not_resorted(caplog):
    lines = ["300,1.0,0.0,0,0", "100,1.0,0.0,0,0", "200,1.0,0.0,0,0"]
    with caplog.at_level(logging.WARNING, logger='step_erraticism.steplog'):
        steps = load_steps(lines)
    assert [s.timestamp for s in steps] == [300, 100, 200]
    assert [s.x for s in steps] == [1.0, 2.0, 3.0]
    assert "earlier than the previous step" in caplog.text


def test_positioned_step_position():
    step = PositionedStep(timestamp=0, displacement=1.0, heading=0.0, x=2.5, y=-1.0)
    assert step.position == (2.5, -1.0)


def test_read_steplog(tmp_path):
    path = tmp_path / "walk.steplog"
    path.write_text("\n".join(CLEAN_LINES) + "\n")
    assert read_steplog(path) == load_steps(CLEAN_LINES)


def test_read_steplog_missing_file(tmp_path):
    missing = tmp_path / "nope.steplog"
    with pytest.raises(SteplogNotFoundError) as exc_info:
        read_steplog(missing)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert str(missing) in str(exc_info.value)
