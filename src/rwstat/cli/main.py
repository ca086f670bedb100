"""
Command-line interface for the rwstat MySQL read/write probe.

This module parses command-line options, merges them over the TOML
configuration, connects to the server and runs the poll loop until it is
interrupted, the iteration limit is reached or a fetch fails.
"""

import argparse
import dataclasses
import getpass
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import IO, List, Optional

from ..aggregation import SampleAggregator
from ..classification import CounterClassifier
from ..collectors import AbstractSnapshotSource, MySQLStatusSource
from ..config import get_config, set_config_path
from ..models.config import MAX_INTERVAL_SECONDS, AppConfig
from ..orchestration import PollLoop, ProbeState, SignalHandler
from ..reporting import SampleReporter
from ..validation import (
    FetchError,
    ProbeConnectionError,
    ValidationError,
    handle_cli_error,
    validate_enum_choice,
    validate_positive_integer,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
# Trace lines are printed bare, without the log record prefix.
TRACE_FORMAT = "%(message)s"

# Marker for a bare `-p`: ask for the password interactively.
PROMPT_PASSWORD = "\0prompt"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_FETCH_ERROR = 2

logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING", debug: bool = False) -> None:
    """
    Configure logging on stderr; stdout is reserved for samples.

    With `debug` the per-counter trace lines of the `rwstat.trace` logger
    are emitted as well.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
        force=True,
    )
    trace_logger = logging.getLogger("rwstat.trace")
    for handler in list(trace_logger.handlers):
        trace_logger.removeHandler(handler)
    trace_handler = logging.StreamHandler(sys.stderr)
    trace_handler.setFormatter(logging.Formatter(TRACE_FORMAT))
    trace_logger.addHandler(trace_handler)
    trace_logger.propagate = False
    trace_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def silence_stdout() -> None:
    """
    Point the stdout file descriptor at devnull.

    After the reader of a pipe has gone away, the interpreter's final flush
    of stdout would fail again and print "Exception ignored".
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, ValueError):
        # Not backed by a file descriptor
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rwstat",
        description=(
            "Sample MySQL statement counters and print read/write deltas, "
            "totals and ratios, one line per interval."
        ),
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to config.toml.")
    parser.add_argument("-H", "--host", help="Server host name.")
    parser.add_argument("-P", "--port", type=int, help="Server TCP port.")
    parser.add_argument("-S", "--socket", help="Unix socket path (overrides host/port).")
    parser.add_argument("-u", "--user", help="User name to connect as.")
    parser.add_argument(
        "-p",
        "--password",
        nargs="?",
        const=PROMPT_PASSWORD,
        help="Password to connect with; prompts when given without a value.",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        help="Seconds between samples (default from config, 300 if unset).",
    )
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        help="Number of samples to take; 0 runs until interrupted.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=None,
        help="Print per-counter trace lines to stderr.",
    )
    parser.add_argument("--log-level", help="Logging level for stderr diagnostics.")
    return parser


def resolve_password(value: Optional[str]) -> Optional[str]:
    """Return the password option, prompting when `-p` was given bare."""
    if value == PROMPT_PASSWORD:
        return getpass.getpass("Enter password: ")
    return value


def apply_cli_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Merge command-line options over the loaded configuration.

    Raises:
        ValidationError: If an option value is invalid
    """
    probe = app_config.probe
    if args.interval is not None:
        probe = dataclasses.replace(
            probe,
            interval_seconds=validate_positive_integer(
                args.interval,
                min_value=1,
                max_value=MAX_INTERVAL_SECONDS,
                field_name="--interval",
            ),
        )
    if args.iterations is not None:
        probe = dataclasses.replace(
            probe,
            iterations=validate_positive_integer(
                args.iterations, min_value=0, field_name="--iterations"
            ),
        )
    if args.debug:
        probe = dataclasses.replace(probe, debug=True)

    connection = app_config.connection
    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = validate_positive_integer(
            args.port, min_value=1, max_value=65535, field_name="--port"
        )
    if args.socket is not None:
        overrides["unix_socket"] = args.socket
    if args.user is not None:
        overrides["user"] = args.user
    password = resolve_password(args.password)
    if password is not None:
        overrides["password"] = password
    if overrides:
        connection = dataclasses.replace(connection, **overrides)

    logging_config = app_config.logging
    if args.log_level is not None:
        logging_config = dataclasses.replace(
            logging_config,
            level=validate_enum_choice(
                args.log_level,
                valid_choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                field_name="--log-level",
            ),
        )

    return dataclasses.replace(
        app_config, probe=probe, connection=connection, logging=logging_config
    )


def run_probe(
    app_config: AppConfig,
    source: Optional[AbstractSnapshotSource] = None,
    stream: Optional[IO[str]] = None,
    state: Optional[ProbeState] = None,
) -> int:
    """
    Connect, run the poll loop and close the source.

    Returns:
        Number of cycles completed

    Raises:
        ProbeConnectionError: If connecting fails
        FetchError: If a snapshot cannot be retrieved
    """
    source = source or MySQLStatusSource(app_config.connection)
    state = state or ProbeState()
    loop = PollLoop(
        source=source,
        aggregator=SampleAggregator(CounterClassifier(app_config.rules)),
        reporter=SampleReporter(stream),
        interval_seconds=app_config.probe.interval_seconds,
        iterations=app_config.probe.iterations,
        state=state,
    )

    with SignalHandler(state):
        try:
            source.connect()
            return loop.run()
        finally:
            source.close()


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line interface for rwstat.

    Exit codes: 0 on a normal stop, 1 on configuration or connection
    errors, 2 when a snapshot fetch fails.
    """
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level or "WARNING", bool(args.debug))

    try:
        if args.config is not None:
            set_config_path(args.config)
        app_config = apply_cli_overrides(get_config(), args)
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=EXIT_CONFIG_ERROR,
            include_traceback=False,
            logger=logger,
        )

    setup_logging(app_config.logging.level, app_config.probe.debug)

    try:
        cycles = run_probe(app_config)
    except BrokenPipeError:
        # Reader closed the pipe, e.g. `rwstat | head -1`
        silence_stdout()
        logger.info("Output closed by reader, stopping")
        return EXIT_OK
    except ProbeConnectionError as e:
        handle_cli_error(
            error=e,
            context="connecting to server",
            exit_code=EXIT_CONFIG_ERROR,
            include_traceback=False,
            logger=logger,
        )
    except FetchError as e:
        handle_cli_error(
            error=e,
            context="sampling",
            exit_code=EXIT_FETCH_ERROR,
            include_traceback=True,
            logger=logger,
        )

    logger.info(f"rwstat stopped after {cycles} samples")
    return EXIT_OK


def main() -> None:
    """Console-script entry point."""
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
