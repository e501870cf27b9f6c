"""
Shared line formatting for the console and file channels.

Both channels render through these helpers so the same event produces
identical text on either sink:

    HH:MM:SS.mmm [LEVEL] [component] message
    HH:MM:SS.mmm [Exception] TypeName: message
      at path/to/file.py:42 in func
"""

import traceback
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from .levels import level_name


FRAME_PREFIX = "  at "


def timestamp(now: Optional[datetime] = None) -> str:
    """Return local time as HH:MM:SS.mmm."""
    if now is None:
        now = datetime.now()
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def _text(value) -> str:
    """Render free text; None becomes the empty string."""
    if value is None:
        return ""
    try:
        return str(value)
    except Exception:
        return ""


def format_line(level, message, component,
                now: Optional[datetime] = None) -> str:
    """Format a single log line.

    Args:
        level: SeverityLevel of the record
        message: Free-text message (not validated)
        component: Caller-supplied tag (not validated or normalized)
        now: Optional fixed time, for tests

    Returns:
        "<ts> [<LEVEL>] [<component>] <message>"
    """
    return (f"{timestamp(now)} [{level_name(level)}] "
            f"[{_text(component)}] {_text(message)}")


@dataclass(frozen=True)
class ExceptionRecord:
    """Ephemeral view of an exception: header fields plus frame descriptors."""
    timestamp: str
    type_name: str
    message: str
    frames: Tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, exc,
                       now: Optional[datetime] = None) -> "ExceptionRecord":
        """Build a record from an exception, degrading rather than failing.

        A message that cannot be rendered becomes "". An exception that
        was never raised has no traceback and therefore no frames.
        """
        type_name = type(exc).__name__
        message = _text(exc) if exc is not None else ""

        frames = []
        tb = getattr(exc, "__traceback__", None)
        try:
            for frame in traceback.extract_tb(tb):
                frames.append(
                    f"{FRAME_PREFIX}{frame.filename}:{frame.lineno} in {frame.name}"
                )
        except Exception:
            frames = []

        return cls(timestamp=timestamp(now), type_name=type_name,
                   message=message, frames=tuple(frames))

    def header(self) -> str:
        return f"{self.timestamp} [Exception] {self.type_name}: {self.message}"

    def lines(self) -> List[str]:
        """Header line followed by one line per frame."""
        return [self.header(), *self.frames]


def format_exception_lines(exc, now: Optional[datetime] = None) -> List[str]:
    """Format an exception as a header line plus one line per stack frame."""
    return ExceptionRecord.from_exception(exc, now=now).lines()
