"""Console logging helpers for rwsdk-tools commands.

Informational output goes to stdout; warnings and errors go to stderr so a
command that prints generated text (``--stdout``, ``--dry-run``) can be piped.
"""

import sys


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    DIM = '\033[2m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


def print_header(msg: str) -> None:
    """Print a header message."""
    print(f"{Colors.HEADER}{Colors.BOLD}{msg}{Colors.RESET}")


def print_info(msg: str) -> None:
    """Print an info message."""
    print(f"{Colors.CYAN}{msg}{Colors.RESET}")


def print_dim(msg: str) -> None:
    """Print a low-emphasis detail line."""
    print(f"{Colors.DIM}{msg}{Colors.RESET}")


def print_success(msg: str) -> None:
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {msg}{Colors.RESET}")


def print_warning(msg: str) -> None:
    """Print a warning message to stderr."""
    print(f"{Colors.YELLOW}⚠️  {msg}{Colors.RESET}", file=sys.stderr)


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    print(f"{Colors.RED}❌ {msg}{Colors.RESET}", file=sys.stderr)
