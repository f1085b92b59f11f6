# linelog/interfaces/line_sink.py
from typing import Protocol


class LineSink(Protocol):
    def write_line(self, line: str) -> None: ...
