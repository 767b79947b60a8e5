"""Logging configuration for schemaform.

The engine only logs through module loggers under the ``schemaform``
namespace, so configuration here never touches the host application's
root logger. The CLI calls setup_cli_logging().
"""
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'schemaform'

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CLI_FORMAT = '%(levelname)s: %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True,
    format_string: Optional[str] = None
) -> logging.Logger:
    """Configure the schemaform package logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to also write logs to.
        console_output: Whether to write logs to stderr.
        format_string: Custom format string (uses DEFAULT_FORMAT if None).

    Returns:
        The configured package logger.
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    # repeated calls (one per CLI invocation in tests) must not stack handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        pkg_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        pkg_logger.addHandler(file_handler)

    return pkg_logger


def setup_cli_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """CLI logging: DEBUG with --verbose, WARNING with --quiet, INFO otherwise."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    return setup_logging(level=level, console_output=True, format_string=CLI_FORMAT)
