from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from fractions import Fraction

import pytest

from linelog.core.line_builder import LineBuilder, format_timestamp, format_value

FIXED = datetime(2024, 1, 2, 3, 4, 5, 678_000)


def _builder(header=("a", "b"), *, log_time=True, log_millis=True, precision=2) -> LineBuilder:
    return LineBuilder(
        header=lambda: header,
        log_time=lambda: log_time,
        log_millis=lambda: log_millis,
        precision=lambda: precision,
        clock=lambda: FIXED,
    )


def test_format_value_float_uses_precision():
    assert format_value(3.14159, 2) == "3.14"
    assert format_value(2.0, 3) == "2.000"
    assert format_value(-0.5, 0) == "-0"
    assert format_value(Decimal("1.23456"), 4) == "1.2346"
    assert format_value(Fraction(1, 3), 2) == "0.33"
    assert format_value(Fraction(7, 2), 0) == "4"


@pytest.mark.parametrize(
    "value, expected",
    [
        (42, "42"),
        ("text", "text"),
        (True, "true"),
        (False, "false"),
        (None, ""),
    ],
)
def test_format_value_natural_text(value, expected):
    assert format_value(value, 2) == expected


def test_format_timestamp_with_and_without_millis():
    assert format_timestamp(FIXED) == "2024-01-02 03:04:05.678"
    assert format_timestamp(FIXED, millis=False) == "2024-01-02 03:04:05"


def test_header_line_with_time_column():
    assert _builder().build_header_line() == "timestamp, a, b"


def test_header_line_without_time():
    assert _builder(log_time=False).build_header_line() == "a, b"


def test_header_line_empty_header_and_no_time_is_empty():
    assert _builder((), log_time=False).build_header_line() == ""


def test_header_line_time_only():
    assert _builder(()).build_header_line() == "timestamp"


def test_custom_timestamp_header():
    b = LineBuilder(
        header=lambda: ("x",),
        log_time=lambda: True,
        log_millis=lambda: True,
        precision=lambda: 2,
        timestamp_header="time",
    )
    assert b.build_header_line() == "time, x"


def test_data_line_with_millis():
    assert _builder().build_data_line([3.14159, "ok"]) == "2024-01-02 03:04:05.678, 3.14, ok"


def test_data_line_without_millis():
    line = _builder(log_millis=False).build_data_line([1, 2])
    assert line == "2024-01-02 03:04:05, 1, 2"


def test_data_line_without_time():
    assert _builder(log_time=False, precision=1).build_data_line([1.25, 7]) == "1.2, 7"


def test_data_line_reads_settings_at_call_time():
    settings = {"precision": 1}
    b = LineBuilder(
        header=lambda: ("v",),
        log_time=lambda: False,
        log_millis=lambda: False,
        precision=lambda: settings["precision"],
    )
    assert b.build_data_line([0.25]) == "0.2"
    settings["precision"] = 3
    assert b.build_data_line([0.25]) == "0.250"


def test_length_mismatch_warns_but_builds(caplog):
    b = _builder(log_time=False)
    with caplog.at_level(logging.WARNING):
        short = b.build_data_line([1])
        longer = b.build_data_line([1, 2, 3])

    assert short == "1"
    assert longer == "1, 2, 3"
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "CSV_LOGGER_LENGTH_MISMATCH" in warnings[0].getMessage()


def test_matching_length_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING):
        _builder().build_data_line([1, 2])
    assert not caplog.records
