import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from eventplanner.constants import get_data_directory


def get_log_directory(data_dir: str | None = None) -> Path:
    """Get the log directory path

    Args:
        data_dir (str | None): Base data directory. Defaults to the user data directory.

    Returns:
        Path: `<data_dir>/logs`
    """
    return Path(data_dir or get_data_directory()) / "logs"


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove old log files, keeping only the most recent `max_files` logs

    Log files are sorted by modification time and the oldest are deleted until
    only `max_files` remain. A missing directory is left alone.
    """
    if not log_dir.exists():
        return
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.DEBUG, log_dir: Path | None = None, max_log_files: int = 5
) -> Path:
    """Configures the logger with log file, format and level

    There are two formatters, one for the console and one for the log file. The console
    formatter leaves out the date and time to keep output short; the log file holds the
    full timestamp.

    Each run logs to a new file named after the current date and time.

    Args:
        log_level (int): The log level to log at. Defaults to logging.DEBUG.
        log_dir (Path | None): Where to store the logs. Defaults to `<data dir>/logs`.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        Path: The file this run logs to.
    """
    if log_dir is None:
        log_dir = get_log_directory()

    log_dir.mkdir(exist_ok=True, parents=True)
    # Leave room for the file about to be created
    clean_old_logs(log_dir=log_dir, max_files=max(max_log_files - 1, 0))

    log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")

    file_handler = logging.handlers.RotatingFileHandler(
        log_filename, maxBytes=10 * 1024**2, backupCount=5, encoding="utf-8"
    )
    stream_handler = logging.StreamHandler()

    file_formatter = CustomFormatter(
        "[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S"
    )
    console_formatter = logging.Formatter("%(levelname)s %(message)s", datefmt="%H:%M:%S")

    file_handler.setFormatter(file_formatter)
    stream_handler.setFormatter(console_formatter)

    logging.basicConfig(level=log_level, handlers=[file_handler, stream_handler], force=True)

    # Ensure third party loggers use the same configuration
    for name in logging.root.manager.loggerDict:
        logger = logging.getLogger(name)
        if isinstance(logger, logging.Logger):
            logger.handlers.clear()
            logger.setLevel(log_level)

    return log_filename
