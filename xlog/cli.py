import sys
from threading import Thread

import click

from xlog import log_stream
from xlog.config import LoggingConfig
from xlog.constants import DEFAULT_BASE_NAME, DEFAULT_LOG_DIRECTORY
from xlog.levels import LogLevel
from xlog.writer import LogWriter

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def elog(msg: str):
    """Logs a message to stderr."""
    click.echo(msg, file=sys.stderr)


def worker(writer: LogWriter, worker_id: int, count: int):
    for i in range(count):
        with log_stream.info(writer=writer) as line:
            line << "worker " << worker_id << " count " << i


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("-c", "--config", type=click.Path(), metavar="", help="Optional path to a logging configuration file.")
@click.option("-d", "--dir", "directory", metavar="", help=f"Log directory. [default: {DEFAULT_LOG_DIRECTORY}]")
@click.option("-n", "--base-name", metavar="", help=f"Log file base name. [default: {DEFAULT_BASE_NAME}]")
@click.option("-r", "--roll-size", type=click.IntRange(min=0), metavar="", help="Rotate after this many bytes.")
@click.option(
    "-l",
    "--level",
    type=click.Choice(list(LogLevel.__members__), case_sensitive=False),
    help="Minimum level to emit.",
)
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    metavar="",
    help="Number of worker threads.",
)
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=5,
    show_default=True,
    metavar="",
    help="Lines logged by each worker.",
)
def cli(config, directory, base_name, roll_size, level, workers, count):
    """Write sample lines at every level, then log from several threads at once"""
    try:
        writer = LoggingConfig.setup_logging(
            config_path=config,
            writer=LogWriter(),
            directory=directory,
            base_name=base_name,
            roll_size=roll_size,
            level=level,
        )
    except ValueError as e:
        elog(f"Error: {e}")
        sys.exit(1)

    with writer:
        log_stream.debug("debug test", writer=writer).commit()
        log_stream.info("program start", writer=writer).commit()
        log_stream.warn("this is warning", writer=writer).commit()
        log_stream.error("something wrong", writer=writer).commit()
        log_stream.fatal("fatal error", writer=writer).commit()

        threads = [Thread(target=worker, args=(writer, worker_id + 1, count)) for worker_id in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()


if __name__ == "__main__":
    cli()
