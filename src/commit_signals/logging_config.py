"""
Logging configuration for Commit Signals.

Rich-formatted logging on stderr, so JSON on stdout stays parseable. What
gets logged:

- platform requests (DEBUG) and per-repository commit counts
- feed entries skipped as malformed (WARNING)
- repositories whose fetch or analysis failed and were isolated from
  their siblings (WARNING, or ERROR with traceback when unexpected)
- the fatal error that ends a CLI command (ERROR)

The behavioral analyzers themselves never log.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for commit_signals
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("commit_signals")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'commit_signals.runner')
              If None, returns the root commit_signals logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("commit_signals")

    if not name.startswith("commit_signals"):
        name = f"commit_signals.{name}"

    return logging.getLogger(name)
