"""
Color-coded logging utilities for the proxy.

Provides consistent, color-coded console output for the server banner and
for request diagnostics. Uses colorama for cross-platform terminal color
support.
"""

import datetime
import logging
import sys

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for console output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    INFO = Fore.WHITE
    DIM = Style.DIM
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Banner output
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def info(msg: str) -> None:
    """Print an info message."""
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    """Print a success message."""
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    """Print a warning."""
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    """Print an error."""
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


# ---------------------------------------------------------------------------
# Logger setup
# ---------------------------------------------------------------------------

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    """Formatter that wraps each record in a color picked by its level."""

    LEVEL_COLORS = {
        logging.DEBUG: C.DIM,
        logging.INFO: C.INFO,
        logging.WARNING: C.WARN,
        logging.ERROR: C.ERR,
        logging.CRITICAL: C.ERR,
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{message}{C.RESET}"


def setup_logging(
    name: str = "monarch_proxy",
    level: int | str = logging.INFO,
    color: bool = True,
) -> logging.Logger:
    """
    Configure the proxy's logger to write to stdout.

    Safe to call more than once; handlers are only attached the first time.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if logger.handlers:
        return logger

    formatter_cls = ColorFormatter if color else logging.Formatter
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(ch)

    return logger
