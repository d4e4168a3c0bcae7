"""Parse assessment export rows into immutable records."""

from __future__ import annotations

import csv
import time
from typing import Iterable

from assessment_catalog.common.constants import COLUMN_INDEX, GARAGE_FLAG, SOURCE_COLUMN_COUNT
from assessment_catalog.common.errors import LoadError
from assessment_catalog.common.logging import get_logger, log_event
from assessment_catalog.common.models import PropertyAssessment
from assessment_catalog.common.time_utils import elapsed_ms


def _blank_to_none(value: str) -> str | None:
    if not value.strip():
        return None
    return value


def _parse_int(value: str, field: str, line_no: int) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise LoadError(f"Line {line_no}: invalid {field} {value!r}") from exc


def _parse_float(value: str, field: str, line_no: int) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise LoadError(f"Line {line_no}: invalid {field} {value!r}") from exc


def parse_row(tokens: list[str], line_no: int) -> PropertyAssessment:
    if len(tokens) < SOURCE_COLUMN_COUNT:
        raise LoadError(
            f"Line {line_no}: expected {SOURCE_COLUMN_COUNT} columns, found {len(tokens)}"
        )

    def col(name: str) -> str:
        return tokens[COLUMN_INDEX[name]]

    account_number = col("account_number")
    if not account_number.strip():
        raise LoadError(f"Line {line_no}: missing account number")

    neighbourhood_id = _blank_to_none(col("neighbourhood_id"))
    assessed_value = _parse_int(col("assessed_value"), "assessed value", line_no)
    if assessed_value < 0:
        raise LoadError(f"Line {line_no}: negative assessed value {assessed_value}")

    return PropertyAssessment(
        account_number=account_number,
        suite=_blank_to_none(col("suite")),
        house_number=col("house_number"),
        street_name=col("street_name"),
        has_garage=col("garage") == GARAGE_FLAG,
        neighbourhood_id=(
            None if neighbourhood_id is None else _parse_int(neighbourhood_id, "neighbourhood id", line_no)
        ),
        neighbourhood=col("neighbourhood"),
        ward=col("ward"),
        assessed_value=assessed_value,
        latitude=_parse_float(col("latitude"), "latitude", line_no),
        longitude=_parse_float(col("longitude"), "longitude", line_no),
        assessment_class=col("assessment_class"),
    )


def load_records(lines: Iterable[str], *, source: str | None = None) -> list[PropertyAssessment]:
    """Parse every data line after the header row.

    Fields are comma separated; commas inside double quotes belong to the
    field. Any malformed row aborts the whole load.
    """
    logger = get_logger()
    started_at = time.monotonic()
    log_event(logger, "loading assessments", event="LOAD_START", status="ok", source=source)

    records: list[PropertyAssessment] = []
    seen: set[str] = set()
    rows_in = 0
    try:
        reader = csv.reader(lines)
        next(reader, None)
        for tokens in reader:
            if not tokens:
                continue
            rows_in += 1
            record = parse_row(tokens, reader.line_num)
            if record.account_number in seen:
                raise LoadError(
                    f"Line {reader.line_num}: duplicate account number {record.account_number}"
                )
            seen.add(record.account_number)
            records.append(record)
    except csv.Error as exc:
        raise LoadError(f"Malformed CSV in {source or 'source'}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read {source or 'source'}: {exc}") from exc

    log_event(
        logger,
        "loaded assessments",
        event="LOAD_END",
        status="ok",
        source=source,
        duration_ms=elapsed_ms(started_at),
        rows_in=rows_in,
        rows_out=len(records),
    )
    return records
