"""
LMS fixture generator CLI entry point.

Generate a Rust test program that checks the target's LMS verifier against
freshly signed messages.

Usage::

    create-lms-tests --n 32 --w 8 --tree-height 5 --tests 1 --filename lms_tests_n32_w8.rs
    python -m lms_fixtures --n 24 --w 1 --tree-height 10 --tests 5 --filename lms_tests_n24_w1.rs
    create-lms-tests --n 32 --w 4 --tree-height 5 --tests 4 --invalid-tests 2 --filename out.rs

Options:
    --n               Hash output size in bytes: 24 or 32
    --w               Winternitz width: 1, 2, 4 or 8
    --tree-height     LMS tree height: 5, 10, 15 or 20
    --tests           Number of vectors that must verify (1 to 16)
    --invalid-tests   Number of additional corrupted vectors (default: 0)
    --filename        Output file
    --message         Message to sign (default: the built-in message)

Exit codes are listed in `lms_fixtures.fixtures.errors.ExitCode`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from lms_fixtures.config import DEFAULT_MESSAGE
from lms_fixtures.fixtures import (
    FixtureGenerationError,
    GenerationRequest,
    write_fixture_file,
)

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Colors the level name of each log line."""

    RESET = "\x1b[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;40m",
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        return f"{color}{record.levelname:8}{self.RESET} {record.name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Send log lines to stderr, at debug level when `verbose` is set."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)-8s %(name)s: %(message)s")
        if no_color
        else ColoredFormatter()
    )
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--n", "n", type=int, required=True, help="Hash output size in bytes (24 or 32)")
@click.option("--w", "w", type=int, required=True, help="Winternitz width (1, 2, 4 or 8)")
@click.option(
    "--tree-height",
    type=int,
    required=True,
    help="LMS tree height (5, 10, 15 or 20)",
)
@click.option("--tests", type=int, required=True, help="Number of vectors that must verify")
@click.option(
    "--invalid-tests",
    type=int,
    default=0,
    show_default=True,
    help="Number of additional vectors with corrupted signatures",
)
@click.option(
    "--filename",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output file for the generated test program",
)
@click.option(
    "--message",
    default=None,
    help="Message to sign, encoded as UTF-8",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored log output")
def main(
    n: int,
    w: int,
    tree_height: int,
    tests: int,
    invalid_tests: int,
    filename: Path,
    message: str | None,
    verbose: bool,
    no_color: bool,
) -> None:
    """Generate LMS signature verification tests for the target verifier."""
    setup_logging(verbose=verbose, no_color=no_color)

    request = GenerationRequest(
        n=n,
        w=w,
        tree_height=tree_height,
        tests=tests,
        invalid_tests=invalid_tests,
        message=DEFAULT_MESSAGE if message is None else message.encode("utf-8"),
    )

    try:
        write_fixture_file(request, filename)
    except FixtureGenerationError as e:
        logger.error("%s", e.message)
        sys.exit(int(e.exit_code))


if __name__ == "__main__":
    main()
