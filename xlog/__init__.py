"""
xlog - Thread-safe call-site logging

Leveled text logging mirrored to the console and to size-rotated log files.

Provides:
- Ordered severity levels with one global threshold
- Fixed-format lines: timestamp, level tag, source file and line, message
- Size based rotation to {base_name}.{index}.log
- Call-site streams that commit exactly once, even when an exception
  leaves the block

Usage:
    import xlog

    xlog.get_writer().initialize("./logs", "app")
    xlog.get_writer().set_level(xlog.LogLevel.INFO)

    with xlog.info() as line:
        line << "worker " << 1 << " count " << 3

Configuration:
    # Via environment variables
    export XLOG_LOG_DIR=/var/log/myapp
    export XLOG_LOG_LEVEL=INFO

    # Via configuration file
    from xlog.config import LoggingConfig
    LoggingConfig.setup_logging(config_path="xlog_config.yml")
"""

from xlog.levels import LogLevel
from xlog.log_stream import LogStream, debug, error, fatal, info, stream, warn
from xlog.writer import LogWriter, get_writer, reset, set_writer

__version__ = "1.0.0"

__all__ = [
    "LogLevel",
    "LogStream",
    "LogWriter",
    "get_writer",
    "set_writer",
    "reset",
    "stream",
    "debug",
    "info",
    "warn",
    "error",
    "fatal",
]
