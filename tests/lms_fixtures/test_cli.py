"""Tests for the command line entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lms_fixtures.__main__ import ColoredFormatter, main, setup_logging
from lms_fixtures.fixtures import ExitCode
from lms_fixtures.fixtures.emitter import rust_bytes


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo the handlers `setup_logging` installs on the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    """A click test runner."""
    return CliRunner()


def _args(path: Path, *, n: int = 32, w: int = 4, tree_height: int = 5, tests: int = 2) -> list[str]:
    return [
        "--n",
        str(n),
        "--w",
        str(w),
        "--tree-height",
        str(tree_height),
        "--tests",
        str(tests),
        "--filename",
        str(path),
        "--no-color",
    ]


def test_generates_program(runner: CliRunner, tmp_path: Path) -> None:
    """A valid invocation writes the program and exits with 0."""
    path = tmp_path / "lms_tests_n32_w4.rs"
    result = runner.invoke(main, _args(path))

    assert result.exit_code == ExitCode.SUCCESS, result.output
    program = path.read_text(encoding="utf-8")
    assert "const TESTS: [LmsTest; 2] = [" in program
    assert program.count("test_passed: true") == 2


def test_invalid_tests_option(runner: CliRunner, tmp_path: Path) -> None:
    """Corrupted vectors are appended after the valid ones."""
    path = tmp_path / "out.rs"
    result = runner.invoke(main, [*_args(path, tests=1), "--invalid-tests", "1"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    program = path.read_text(encoding="utf-8")
    assert program.index("test_passed: true") < program.index("test_passed: false")


def test_custom_message(runner: CliRunner, tmp_path: Path) -> None:
    """`--message` replaces the built-in message."""
    path = tmp_path / "out.rs"
    result = runner.invoke(main, [*_args(path, n=24, tests=1), "--message", "boot"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f"const MESSAGE: [u8; 4] = {rust_bytes(b'boot')};" in path.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "overrides, exit_code",
    [
        pytest.param({"n": 16}, ExitCode.INVALID_HASH_SIZE, id="n"),
        pytest.param({"w": 3}, ExitCode.INVALID_WINTERNITZ_WIDTH, id="w"),
        pytest.param({"tree_height": 8}, ExitCode.INVALID_TREE_HEIGHT, id="tree-height"),
        pytest.param({"tests": 0}, ExitCode.INVALID_TEST_COUNT, id="zero-tests"),
        pytest.param({"tests": 17}, ExitCode.INVALID_TEST_COUNT, id="too-many-tests"),
    ],
)
def test_invalid_arguments_exit_with_their_code(
    runner: CliRunner, tmp_path: Path, overrides: dict[str, int], exit_code: ExitCode
) -> None:
    """Each kind of invalid argument has its own exit code, and nothing is written."""
    path = tmp_path / "out.rs"
    result = runner.invoke(main, _args(path, **overrides))

    assert result.exit_code == exit_code
    assert not path.exists()


def test_unwritable_output_exits_with_output_failure(runner: CliRunner, tmp_path: Path) -> None:
    """A path in a missing directory is reported as an output failure."""
    path = tmp_path / "no" / "such" / "dir.rs"
    result = runner.invoke(main, _args(path, tests=1))

    assert result.exit_code == ExitCode.OUTPUT_FAILURE
    assert not path.exists()


def test_missing_option_is_a_usage_error(runner: CliRunner) -> None:
    """Leaving out a required option is rejected by the argument parser."""
    result = runner.invoke(main, ["--n", "32", "--w", "8"])
    assert result.exit_code == 2
    assert "Missing option" in result.output


def test_help(runner: CliRunner) -> None:
    """`--help` lists the options."""
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    for option in ("--n", "--w", "--tree-height", "--tests", "--invalid-tests", "--filename"):
        assert option in result.output


def test_setup_logging_levels() -> None:
    """Verbose mode logs at debug level, otherwise at info."""
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    setup_logging(no_color=True)
    assert logging.getLogger().level == logging.INFO


def test_colored_formatter() -> None:
    """Log lines carry the level name, logger name and message."""
    record = logging.LogRecord("lms_fixtures", logging.ERROR, __file__, 1, "boom %d", (7,), None)
    line = ColoredFormatter().format(record)
    assert "ERROR" in line
    assert "lms_fixtures" in line
    assert line.endswith("boom 7")


def test_plain_log_lines_have_no_escape_codes() -> None:
    """`--no-color` output carries no ANSI sequences."""
    setup_logging(no_color=True)
    handler = logging.getLogger().handlers[-1]
    record = logging.LogRecord("lms_fixtures", logging.INFO, __file__, 1, "done", (), None)
    assert handler.format(record) == "INFO     lms_fixtures: done"
