"""
Logging setup and flag-gated diagnostics.
"""

import hashlib
import logging
import sys
from typing import Optional

from superpack.config import get_settings
from superpack.lib.flags import flag

diag_logger = logging.getLogger("superpack.diag")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> None:
    """Set up logging configuration."""
    settings = get_settings()

    log_level = getattr(logging, (level or settings.log_level).upper())
    log_format = format_string or settings.log_format

    # Root logger configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)


# ---------------------------------------------------------------------------
# Flag-gated diagnostics
# ---------------------------------------------------------------------------


def diag(flag_name: str, label: str, msg: str) -> None:
    """Emit a diagnostic message if the given flag is active."""
    if not flag(flag_name):
        return
    diag_logger.info(f"[superpack:{label}] {msg}")


def diag_warn(flag_name: str, label: str, msg: str) -> None:
    if not flag(flag_name):
        return
    diag_logger.warning(f"[superpack:{label}] {msg}")


def diag_error(flag_name: str, label: str, msg: str) -> None:
    if not flag(flag_name):
        return
    diag_logger.error(f"[superpack:{label}] {msg}")


def diag_list(flag_name: str, label: str, title: str, items: list[str]) -> None:
    """Dump a list of items (e.g. file names, tool names)."""
    if not flag(flag_name):
        return
    lines = [f"[superpack:{label}] {title} ({len(items)}):"]
    lines.extend(f"  - {item}" for item in items)
    diag_logger.info("\n".join(lines))


def diag_dump(flag_name: str, label: str, title: str, content: str) -> None:
    """Dump a large block of text (e.g. a system prompt) between markers.

    The header carries line count, UTF-8 byte count and a short sha256, so
    two dumps can be compared without diffing the bodies.
    """
    if not flag(flag_name):
        return
    data = content.encode("utf-8")
    digest = hashlib.sha256(data).hexdigest()[:12]
    line_count = len(content.split("\n"))
    body = content.rstrip("\n")
    diag_logger.info(
        f"[superpack:{label}] begin {title} "
        f"({line_count} lines, {len(data)} bytes, sha256:{digest})\n"
        f"{body}\n"
        f"[superpack:{label}] end {title}"
    )
