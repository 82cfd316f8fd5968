"""
Log Stream - Call-site message buffer for xlog

A LogStream is created by one logging statement, collects the values
appended to it and hands the finished message to a LogWriter exactly once.

Usage:
    import xlog

    with xlog.info() as line:
        line << "worker " << worker_id << " count " << i

    # Outside a with block the stream must be committed explicitly,
    # otherwise the message is dropped
    xlog.warn("disk usage at ", percent, "%").commit()
"""

import os
import sys
from typing import Any, Optional

from xlog.levels import LogLevel
from xlog.writer import LogWriter, get_writer


class LogStream:
    """
    Accumulates one message and commits it to a writer once.

    The message is the concatenation of str() of every appended value, with
    nothing inserted between them. Leaving a ``with`` block commits the
    message, whether the block finished normally or raised.

    Example:
        stream = LogStream(LogLevel.INFO, "main.py", 10)
        stream.append("worker ").append(1).append(" count ").append(3)
        stream.commit()
        # ... main.py : 10 | worker 1 count 3
    """

    def __init__(self, level: LogLevel, source_file: str, source_line: int, writer: Optional[LogWriter] = None):
        """
        Args:
            level: Message severity
            source_file: File name of the logging statement
            source_line: Line number of the logging statement
            writer: Target writer (default: process default writer at commit time)
        """
        self.level = level
        self.source_file = source_file
        self.source_line = source_line
        self.writer = writer
        self._parts = []
        self._committed = False

    def append(self, value: Any) -> "LogStream":
        """Append str(value) to the message and return the stream"""
        self._parts.append(str(value))
        return self

    __lshift__ = append

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def committed(self) -> bool:
        return self._committed

    def commit(self):
        """
        Deliver the message to the writer.

        Only the first call has an effect.
        """
        if self._committed:
            return
        self._committed = True
        writer = self.writer or get_writer()
        writer.record(self.level, self.source_file, self.source_line, self.text)

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit, commits on every exit path"""
        self.commit()
        return False

    def __repr__(self):
        state = "committed" if self._committed else "open"
        return f"<LogStream {self.level.name} {self.source_file}:{self.source_line} {state}>"


def _caller_location(depth: int):
    frame = sys._getframe(depth + 1)
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def stream(level: LogLevel, *values: Any, writer: Optional[LogWriter] = None, stacklevel: int = 1) -> LogStream:
    """
    Create a LogStream bound to the caller's file and line.

    Args:
        level: Message severity
        *values: Values appended right away
        writer: Target writer (default: process default writer)
        stacklevel: Which caller to attribute the line to, 1 is the direct caller

    Returns:
        Open LogStream
    """
    source_file, source_line = _caller_location(stacklevel)
    log_stream = LogStream(LogLevel.parse(level), source_file, source_line, writer)
    for value in values:
        log_stream.append(value)
    return log_stream


def debug(*values: Any, writer: Optional[LogWriter] = None) -> LogStream:
    return stream(LogLevel.DEBUG, *values, writer=writer, stacklevel=2)


def info(*values: Any, writer: Optional[LogWriter] = None) -> LogStream:
    return stream(LogLevel.INFO, *values, writer=writer, stacklevel=2)


def warn(*values: Any, writer: Optional[LogWriter] = None) -> LogStream:
    return stream(LogLevel.WARN, *values, writer=writer, stacklevel=2)


def error(*values: Any, writer: Optional[LogWriter] = None) -> LogStream:
    return stream(LogLevel.ERROR, *values, writer=writer, stacklevel=2)


def fatal(*values: Any, writer: Optional[LogWriter] = None) -> LogStream:
    return stream(LogLevel.FATAL, *values, writer=writer, stacklevel=2)
