# linelog/app/sinks.py
from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from linelog.interfaces.line_sink import LineSink


class ConsoleSink(LineSink):
    """
    Writes each line to a text stream and flushes it right away.

    The stream is looked up at write time when none is given, so redirected
    or captured stdout is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def write_line(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()


class MemorySink(LineSink):
    """Keeps lines in memory (handy for embedding and tests)."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)
