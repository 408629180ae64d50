import argparse
import logging
import os

from eventplanner.constants import DEFAULT_STORAGE_FILE


def arg_path_parse(path):
    if type(path) == list:
        return " ".join(path)
    else:
        return path


def parse_log_level(level):
    """Accept an int value or a level name such as 'debug'."""
    if isinstance(level, int):
        return level
    level = str(level).strip()
    if level.isdigit():
        return int(level)
    named = logging.getLevelName(level.upper())
    if isinstance(named, int):
        return named
    print(f"[ERROR] Log level: {level} is not recognized. Setting to default: {default_log_level}")
    return default_log_level


# Default values for CLI args
default_port = 5000
default_host = "0.0.0.0"
default_log_level = logging.INFO
default_storage_file = DEFAULT_STORAGE_FILE
default_max_log_files = 5


def parse_eventplanner_args(argv=None):
    # parse CLI args
    parser = argparse.ArgumentParser(prog="eventplanner")

    parser.add_argument(
        "-p",
        "--port",
        help="Desired http port (default: %d)" % default_port,
        default=default_port,
        type=int,
        required=False,
    )
    parser.add_argument(
        "--host",
        help="Interface to listen on (default: %s)" % default_host,
        default=default_host,
        required=False,
    )
    parser.add_argument(
        "-d",
        "--data-dir",
        nargs="+",
        help="Directory for stored events, registrations and logs. (default: ~/.eventplanner)",
        default=None,
        required=False,
    )
    parser.add_argument(
        "--storage-file",
        nargs="+",
        help="Storage file name inside the data directory, or an absolute path. (default: %s)"
        % default_storage_file,
        default=default_storage_file,
        required=False,
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level, as an int value (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50) or a name. (default: {default_log_level} )",
        default=default_log_level,
        required=False,
    )
    parser.add_argument(
        "--max-log-files",
        help="Number of previous log files to keep. (default: %d)" % default_max_log_files,
        default=default_max_log_files,
        type=int,
        required=False,
    )
    parser.add_argument(
        "--strict-load",
        action="store_true",
        help="Exit with an error if stored data is malformed, instead of starting with empty collections.",
        required=False,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run Flask with the development configuration.",
        required=False,
    )

    args = parser.parse_args(argv)

    # additional sanitization of args:
    args.log_level = parse_log_level(args.log_level)

    data_dir = arg_path_parse(args.data_dir)
    if data_dir is not None:
        data_dir = os.path.expanduser(data_dir)
    args.data_dir = data_dir
    args.storage_file = os.path.expanduser(arg_path_parse(args.storage_file))

    return args
