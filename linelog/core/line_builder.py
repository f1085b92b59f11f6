# linelog/core/line_builder.py
from __future__ import annotations

import logging
import numbers
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

SEPARATOR = ", "
TIMESTAMP_HEADER = "timestamp"

_TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(ts: datetime, *, millis: bool = True) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS`` with an optional ``.mmm`` suffix."""
    s = ts.strftime(_TS_FORMAT)
    if millis:
        s += f".{ts.microsecond // 1000:03d}"
    return s


def _is_floating(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return True
    return isinstance(value, numbers.Real) and not isinstance(value, numbers.Integral)


def format_value(value: Any, precision: int) -> str:
    """
    Render a single row value.

    Floating values get exactly `precision` fractional digits; everything else
    uses its natural text form (bools as true/false, None as empty).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (float, Decimal)):
        return f"{value:.{int(precision)}f}"
    if _is_floating(value):
        # Fraction and other Real types lack fixed-point __format__ before 3.12
        return f"{float(value):.{int(precision)}f}"
    return str(value)


class LineBuilder:
    """
    Serializes the header and data rows of one logger into delimited text.

    Holds no configuration of its own: every call reads the current settings
    through the getters handed in at construction, so it always reflects the
    owning logger's state.
    """

    def __init__(
        self,
        *,
        header: Callable[[], Sequence[str]],
        log_time: Callable[[], bool],
        log_millis: Callable[[], bool],
        precision: Callable[[], int],
        timestamp_header: str = TIMESTAMP_HEADER,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._header = header
        self._log_time = log_time
        self._log_millis = log_millis
        self._precision = precision
        self._timestamp_header = timestamp_header
        self._clock = clock or datetime.now
        self._log = logger or logging.getLogger(__name__)

    @property
    def timestamp_header(self) -> str:
        return self._timestamp_header

    def build_header_line(self) -> str:
        parts = []
        if self._log_time():
            parts.append(self._timestamp_header)
        parts.extend(str(h) for h in self._header())
        return SEPARATOR.join(parts)

    def build_data_line(self, row: Sequence[Any]) -> str:
        row = list(row)
        parts = []
        if self._log_time():
            parts.append(format_timestamp(self._clock(), millis=self._log_millis()))

        header_len = len(self._header())
        if len(row) != header_len:
            self._log.warning(
                "CSV_LOGGER_LENGTH_MISMATCH row_len=%d header_len=%d (log file will not be aligned)",
                len(row),
                header_len,
            )

        precision = self._precision()
        parts.extend(format_value(v, precision) for v in row)
        return SEPARATOR.join(parts)
