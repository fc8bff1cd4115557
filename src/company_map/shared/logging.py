"""
Logging setup and console progress reporting for company-map.
"""

import logging
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "company_map"
PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _plain_formatter() -> logging.Formatter:
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def setup_logging(
    level: str = "INFO", log_file: Path | None = None, use_rich: bool = True
) -> logging.Logger:
    """Configure the package logger, replacing any handlers from an earlier call.

    Console records go to stderr, through rich unless ``use_rich`` is off.

    Args:
        level: Level name such as "DEBUG" or "WARNING"
        log_file: Also write plain-format records to this file
        use_rich: Render console records with rich

    Returns:
        The ``company_map`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = Console(stderr=True)
    if use_rich:
        console_handler: logging.Handler = RichHandler(
            console=console, show_time=True, show_path=False, markup=False
        )
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        console_handler = logging.StreamHandler(console.file)
        console_handler.setFormatter(_plain_formatter())
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(_plain_formatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def mask_secret(secret: str | None, visible: int = 4) -> str:
    """Mask all but the first few characters of a credential for log output."""
    if not secret:
        return "<unset>"
    return f"{secret[:visible]}..."


class ProgressLogger:
    """Step-by-step console report of one investigation run.

    Each step is printed as it completes and counted; :meth:`finish` prints a
    summary with the success ratio and elapsed time. Every line is mirrored to
    the logger at DEBUG.
    """

    def __init__(self, logger: logging.Logger | None = None, console: Console | None = None):
        self.logger = logger or get_logger()
        self.console = console or Console(stderr=True)
        self.title = ""
        self.succeeded = 0
        self.failed = 0
        self._started = 0.0

    def begin(self, title: str, planned_steps: int = 0) -> None:
        self.title = title
        self.succeeded = self.failed = 0
        self._started = time.monotonic()
        planned = f" ({planned_steps} steps)" if planned_steps else ""
        self._emit(f"Starting {title}{planned}...", "blue bold")

    def step(self, description: str, ok: bool = True) -> None:
        if ok:
            self.succeeded += 1
            self._emit(f"  ✓ {description}", "green")
        else:
            self.failed += 1
            self._emit(f"  ✗ {description}", "red")

    def finish(self) -> float:
        """Print the summary line and return the elapsed seconds."""
        elapsed = time.monotonic() - self._started
        total = self.succeeded + self.failed
        if self.failed:
            self._emit(
                f"⚠️  {self.title} finished with errors: "
                f"{self.succeeded}/{total} steps successful in {elapsed:.2f}s",
                "yellow bold",
            )
        else:
            self._emit(
                f"✅ {self.title} finished: {self.succeeded}/{total} steps in {elapsed:.2f}s",
                "green bold",
            )
        return elapsed

    def _emit(self, message: str, style: str) -> None:
        self.console.print(message, style=style)
        self.logger.debug(message.strip())
