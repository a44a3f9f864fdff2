"""
Utility functions for the TV catalog.

Provides logging setup, retry backoff, and display helpers.
"""

import logging
import random
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    console_output: bool = True,
) -> logging.Logger:
    """
    Return the `tvcatalog.<name>` logger, attaching handlers on first use.

    Records go to <log_dir>/<name>_<YYYYmmdd>.log. With console_output,
    warnings and errors are echoed to stdout so CLI runs surface them.
    """
    logger = logging.getLogger(f"tvcatalog.{name}")
    if logger.handlers:
        return logger
    logger.setLevel(level)

    log_dir = Path(log_dir) if log_dir else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"

    handlers = [(logging.FileHandler(log_file), level)]
    if console_output:
        handlers.append((logging.StreamHandler(sys.stdout), logging.WARNING))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def calculate_backoff(retry_count: int, base_delay: float = 1.0, max_delay: float = 30.0) -> float:
    """
    Calculate backoff delay with exponential increase and jitter.

    Args:
        retry_count: Current retry attempt number (0-based)
        base_delay: Base delay in seconds
        max_delay: Upper bound in seconds

    Returns:
        Delay in seconds with jitter
    """
    delay = base_delay * (2 ** retry_count)
    # ±25% jitter
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return max(0.0, min(delay + jitter, max_delay))


def to_json_value(value: Any) -> Any:
    """Convert date and datetime values to ISO strings."""
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return value


def format_number(n: int) -> str:
    """Format number with thousands separator."""
    return f"{n:,}"


def print_header(text: str, char: str = "=", width: int = 60) -> None:
    """Print a header with decorative lines."""
    print(char * width)
    print(text.center(width))
    print(char * width)


def print_status_table(data: dict, title: str = "Status") -> None:
    """Print a formatted status table."""
    print(f"\n{title}")
    print("-" * 40)
    max_key_len = max(len(str(k)) for k in data.keys()) if data else 10
    for key, value in data.items():
        print(f"  {key:<{max_key_len + 2}}: {value}")
    print()


def confirm_action(message: str, expected: str = "yes") -> bool:
    """Prompt the user to type an exact confirmation word."""
    try:
        response = input(f"{message} Type '{expected}' to continue: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return response == expected
