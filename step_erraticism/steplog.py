"""
Step log parsing and dead-reckoning trajectory reconstruction.

A step log holds one pedestrian-dead-reckoning step per line:

    timestamp_ns,displacement_m,heading_rad,reserved1,reserved2

Corrupt lines are common in field logs, so parsing is lenient: a line that
does not yield all five numbers is dropped and the rest of the log is still
used. Positions are integrated from an implicit (0, 0) origin; the first
step already moves the walker.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


class SteplogNotFoundError(FileNotFoundError):
    """Raised when a step log cannot be opened for reading."""

    def __init__(self, path):
        super().__init__(f"Unable to open the steplog file: {path}")
        self.path = path


@dataclass(frozen=True)
class RawStepRecord:
    timestamp: int         # nanoseconds
    displacement: float    # meters
    heading: float         # radians
    reserved: Tuple[float, float] = (0.0, 0.0)  # parsed, unused


@dataclass(frozen=True)
class PositionedStep:
    timestamp: int
    displacement: float
    heading: float
    x: float  # cumulative east (meters)
    y: float  # cumulative north (meters)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


def _parse_float(field: str) -> float:
    value = float(field)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value: {field!r}")
    return value


def parse_record(line: str) -> Optional[RawStepRecord]:
    """
    Parse one step log line.

    Args:
        line (str): Raw text line, with or without trailing newline

    Returns:
        RawStepRecord, or None if the line is blank or malformed
    """
    fields = line.strip().split(',')
    if len(fields) < FIELD_COUNT:
        return None

    try:
        timestamp = int(fields[0].strip())
        displacement, heading, reserved1, reserved2 = (
            _parse_float(f.strip()) for f in fields[1:FIELD_COUNT]
        )
    except ValueError:
        return None

    return RawStepRecord(timestamp, displacement, heading, (reserved1, reserved2))


def parse_records(lines: Iterable[str]) -> List[RawStepRecord]:
    """Parse every line, silently dropping malformed ones."""
    records = []
    skipped = 0

    for line_no, line in enumerate(lines, start=1):
        record = parse_record(line)
        if record is None:
            if line.strip():
                skipped += 1
                logger.debug(f"Skipping malformed step log line {line_no}: {line.rstrip()!r}")
            continue
        records.append(record)

    if skipped:
        logger.info(f"Skipped {skipped} malformed line(s), kept {len(records)} step(s)")

    return records


def reconstruct(records: Iterable[RawStepRecord]) -> List[PositionedStep]:
    """
    Integrate displacement along heading into cumulative 2D positions.

    Summation is sequential double-precision, in input order. Records are
    never re-sorted, even if timestamps go backwards.

    Args:
        records: Ordered RawStepRecord sequence

    Returns:
        list[PositionedStep] of the same length and order
    """
    steps = []
    x = 0.0
    y = 0.0
    out_of_order = 0
    last_timestamp = None

    for record in records:
        x += record.displacement * math.cos(record.heading)
        y += record.displacement * math.sin(record.heading)
        steps.append(PositionedStep(
            timestamp=record.timestamp,
            displacement=record.displacement,
            heading=record.heading,
            x=x,
            y=y,
        ))

        if last_timestamp is not None and record.timestamp < last_timestamp:
            out_of_order += 1
        last_timestamp = record.timestamp

    if out_of_order:
        logger.warning(f"{out_of_order} step(s) have a timestamp earlier than the previous step; order kept as logged")

    return steps


def load_steps(lines: Iterable[str]) -> List[PositionedStep]:
    """Parse and reconstruct in one go."""
    return reconstruct(parse_records(lines))


def read_steplog(path) -> List[PositionedStep]:
    """
    Read a step log from disk and reconstruct its trajectory.

    Raises:
        SteplogNotFoundError: If the file cannot be opened
    """
    try:
        handle = open(path, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise SteplogNotFoundError(path) from e

    with handle:
        steps = load_steps(handle)

    logger.info(f"Loaded {len(steps)} step(s) from {path}")
    return steps
