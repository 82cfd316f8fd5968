"""
Log Writer - Thread-safe, size-rotated writer for xlog

Formats one line per accepted message and mirrors it to the current log file
and to the console. When the current file has grown past the configured size
the writer switches to a new, higher-indexed file.

Features:
- One lock serializes format, write and rotation of every line
- Files named {base_name}.{index}.log, index 0 first, never reused in a run
- Files are opened in append mode and never truncated or deleted
- Console-only operation when the log file cannot be opened or written

Usage:
    from xlog.writer import LogWriter
    from xlog.levels import LogLevel

    writer = LogWriter()
    writer.initialize("./logs", "app", roll_size=10485760)
    writer.set_level(LogLevel.INFO)
    writer.record(LogLevel.INFO, "main.py", 12, "program start")
    writer.close()
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Optional, TextIO

from xlog.constants import DEFAULT_ROLL_SIZE, LOG_FILE_SUFFIX, TIMESTAMP_FORMAT
from xlog.levels import LogLevel


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Local time with millisecond precision: YYYY-MM-DD HH:MM:SS.mmm"""
    moment = moment or datetime.now()
    return moment.strftime(TIMESTAMP_FORMAT) + f".{moment.microsecond // 1000:03d}"


def format_line(
    level: LogLevel, source_file: str, source_line: int, message: str, moment: Optional[datetime] = None
) -> str:
    """
    Build one complete log line, newline included.

    Example:
        format_line(LogLevel.INFO, "main.py", 7, "hello")
        # 2024-01-20 10:15:30.123 [ INFO  ] main.py : 7 | hello\n
    """
    return f"{format_timestamp(moment)} [ {level.tag} ] {source_file} : {source_line} | {message}\n"


class LogWriter:
    """
    Shared writer owning the log file, its rotation state and the threshold.

    A writer does nothing on disk until initialize() is called; until then
    accepted lines only reach the console.

    Example:
        writer = LogWriter()
        writer.initialize("/var/log/myapp", "app", roll_size=1024)
        writer.record(LogLevel.WARN, "worker.py", 40, "queue is full")
    """

    def __init__(self, level: LogLevel = LogLevel.DEBUG, console: Optional[TextIO] = None, encoding: str = "utf-8"):
        """
        Args:
            level: Minimum level to emit (default: DEBUG)
            console: Console stream (default: sys.stdout at write time)
            encoding: Log file encoding (default: utf-8)
        """
        self.directory: Optional[Path] = None
        self.base_name: Optional[str] = None
        self.roll_size = DEFAULT_ROLL_SIZE
        self.file_index = 0
        self.written = 0
        self.level = LogLevel.parse(level)
        self.console = console
        self.encoding = encoding
        self.current_path: Optional[Path] = None
        self._file = None
        self._lock = Lock()

    def initialize(self, directory: str, base_name: str, roll_size: int = DEFAULT_ROLL_SIZE):
        """
        Configure the output location and open the first log file.

        Creates the directory (and parents) if needed; failure to do so
        propagates. Failure to open the file is not reported: the writer
        keeps logging to the console only.

        Args:
            directory: Directory for log files
            base_name: File name prefix, files are {base_name}.{index}.log
            roll_size: Rotate once a file holds more than this many bytes
        """
        with self._lock:
            self.directory = Path(directory)
            self.base_name = base_name
            self.roll_size = roll_size
            self.directory.mkdir(parents=True, exist_ok=True)
            self._rotate()

    def set_level(self, level: LogLevel):
        """Replace the severity threshold"""
        self.level = LogLevel.parse(level)

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def record(self, level: LogLevel, source_file: str, source_line: int, message: str):
        """
        Emit one message if its level passes the threshold.

        The line goes to the current log file (when one is open) and to the
        console. Lines from concurrent callers never interleave; their order
        is the order in which the callers acquired the writer's lock.

        Args:
            level: Message severity
            source_file: File name of the logging statement
            source_line: Line number of the logging statement
            message: Message text
        """
        # Threshold is read without the lock
        if level < self.level:
            return

        with self._lock:
            line = format_line(level, source_file, source_line, message)

            if self._file is not None:
                self._write_file(line)

            console = self.console or sys.stdout
            console.write(line)
            console.flush()

            if self.written > self.roll_size:
                self._rotate()

    def _write_file(self, line: str):
        data = line.encode(self.encoding, errors="backslashreplace")
        try:
            self._file.write(data)
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError:
            # Continue on the console only
            self._close_file()
            return
        self.written += len(data)

    def _rotate(self):
        """
        Switch to the next log file.

        Closes the current file and opens {base_name}.{file_index}.log in
        append mode. Earlier files are left untouched.
        """
        self._close_file()
        self.current_path = self.directory / f"{self.base_name}.{self.file_index}{LOG_FILE_SUFFIX}"
        try:
            self._file = open(self.current_path, "ab")
        except OSError:
            self._file = None
        self.file_index += 1
        self.written = 0

    def _close_file(self):
        if self._file is not None:
            try:
                self._file.close()
            finally:
                self._file = None

    def close(self):
        """
        Close the current log file.

        Subsequent lines only reach the console until initialize() is
        called again.
        """
        with self._lock:
            self._close_file()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()


_default_writer: Optional[LogWriter] = None
_default_lock = Lock()


def get_writer() -> LogWriter:
    """
    Get the process default writer, creating it on first use.

    Returns:
        LogWriter shared by every call site that does not pass its own
    """
    global _default_writer
    with _default_lock:
        if _default_writer is None:
            _default_writer = LogWriter()
        return _default_writer


def set_writer(writer: LogWriter) -> LogWriter:
    """Install writer as the process default and return it"""
    global _default_writer
    with _default_lock:
        _default_writer = writer
    return writer


def reset():
    """
    Close and discard the process default writer.

    Useful for testing.
    """
    global _default_writer
    with _default_lock:
        if _default_writer is not None:
            _default_writer.close()
        _default_writer = None
