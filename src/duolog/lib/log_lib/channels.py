"""
Console and file channels for the dual-channel diagnostic system.

Each channel owns its own filter state and applies it independently:

    ConsoleChannel   enabled AND mask admits level  →  stdout / stderr
    FileChannel      READY   AND mask admits level  →  append to log file

Neither channel raises from a write. Every write returns a WriteResult;
I/O failures are reported on stderr and the record is dropped.

File channel lifecycle:

    UNINITIALIZED → INITIALIZING → READY      (directory + empty file prepared)
                                 → DISABLED   (directory or file could not be prepared)

Only READY persists writes. Calling initialize() again re-runs the
sequence, truncating the file again.

Each channel serializes its state changes and emits behind an RLock.
The file channel holds it across the whole open-append-close sequence so
concurrent writers cannot interleave partial lines.
"""

import sys
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from .formatting import format_exception_lines, format_line
from .levels import ALL, ERROR, SeverityLevel, admits


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a single channel write.

    Attributes:
        ok: True only if the record reached the sink
        reason: Why the record was not written ('disabled', 'filtered',
            'not ready', or the I/O error text)
        skipped: True if the channel's gating dropped the record on purpose
    """
    ok: bool
    reason: Optional[str] = None
    skipped: bool = False

    @classmethod
    def success(cls) -> "WriteResult":
        return cls(ok=True)

    @classmethod
    def skip(cls, reason: str) -> "WriteResult":
        return cls(ok=False, reason=reason, skipped=True)

    @classmethod
    def failure(cls, reason: str) -> "WriteResult":
        return cls(ok=False, reason=reason)

    @property
    def failed(self) -> bool:
        """True for I/O failures, False for success and deliberate skips."""
        return not self.ok and not self.skipped

    def __bool__(self) -> bool:
        return self.ok


def _as_mask(mask):
    """Normalize a mask to SeverityLevel, keeping unknown bits as a plain int."""
    try:
        return SeverityLevel(int(mask))
    except ValueError:
        return int(mask)


def report(message: str) -> None:
    """Report a subsystem failure on stderr. Never raises."""
    try:
        print(message, file=sys.stderr)
    except Exception:
        pass


# =============================================================================
# Console channel
# =============================================================================

class ConsoleChannel:
    """Interactive diagnostic sink, off until enabled by a startup token.

    Ordinary lines go to stdout, exception traces to stderr. Streams
    default to the process streams looked up at write time, so pytest's
    capsys and redirected sys.stdout both see the output.

    Usage::

        console = ConsoleChannel()
        console.initialize(sys.argv[1:])          # "-debug" enables it
        console.set_filter(ERROR | WARNING)
        console.write(ERROR, "boom", "Loader")
    """

    DEBUG_TOKEN = '-debug'

    def __init__(self, stdout: TextIO = None, stderr: TextIO = None,
                 mask=ALL, enabled: bool = False):
        self._stdout = stdout
        self._stderr = stderr
        self._mask = _as_mask(mask)
        self._enabled = bool(enabled)
        self._lock = threading.RLock()

    def initialize(self, args: Optional[Sequence[str]]) -> bool:
        """Enable the channel if the debug token is present in args.

        The match is case-insensitive and may appear anywhere. Absence of
        the token leaves the current state untouched; no other arguments
        are consumed or validated.

        Returns:
            The enabled flag after the scan
        """
        for arg in args or ():
            if isinstance(arg, str) and arg.lower() == self.DEBUG_TOKEN:
                self.enable()
                break
        return self.enabled

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def mask(self):
        with self._lock:
            return self._mask

    def set_filter(self, mask) -> None:
        """Replace the active mask. An empty mask silences the channel."""
        with self._lock:
            self._mask = _as_mask(mask)

    def admits(self, level) -> bool:
        """Return True if a record at `level` would be emitted right now."""
        with self._lock:
            return self._enabled and admits(self._mask, level)

    def write(self, level, message, component) -> WriteResult:
        """Emit one formatted line on stdout if enabled and admitted."""
        try:
            with self._lock:
                gate = self._gate(level)
                if gate is not None:
                    return gate
                stream = self._stdout if self._stdout is not None else sys.stdout
                return self._emit(stream, [format_line(level, message, component)])
        except Exception as e:
            return WriteResult.failure(str(e))

    def write_exception(self, exc) -> WriteResult:
        """Emit an exception header and its frames on stderr, gated on ERROR."""
        try:
            with self._lock:
                gate = self._gate(ERROR)
                if gate is not None:
                    return gate
                stream = self._stderr if self._stderr is not None else sys.stderr
                return self._emit(stream, format_exception_lines(exc))
        except Exception as e:
            return WriteResult.failure(str(e))

    def _gate(self, level) -> Optional[WriteResult]:
        if not self._enabled:
            return WriteResult.skip('disabled')
        if not admits(self._mask, level):
            return WriteResult.skip('filtered')
        return None

    @staticmethod
    def _emit(stream: TextIO, lines: Iterable[str]) -> WriteResult:
        # Terminal failures are not reported; there is nowhere to report them.
        try:
            for line in lines:
                print(line, file=stream)
            stream.flush()
        except Exception as e:
            return WriteResult.failure(str(e))
        return WriteResult.success()


# =============================================================================
# File channel
# =============================================================================

class FileState(Enum):
    """Lifecycle of the file channel's target file."""
    UNINITIALIZED = 'uninitialized'
    INITIALIZING = 'initializing'
    READY = 'ready'
    DISABLED = 'disabled'


def default_log_dir() -> Path:
    """Return the default log directory (~/Documents/Logs)."""
    return Path.home() / "Documents" / "Logs"


class FileChannel:
    """Persistent diagnostic sink, truncated on initialize, appended after.

    The file is never held open between calls: each write opens it in
    append mode, writes its lines and closes it before returning, so an
    external reader (tail -f) always sees whole lines.

    Usage::

        log = FileChannel()
        log.initialize("myapp.log")     # ~/Documents/Logs/myapp.log, emptied
        log.write(INFO, "started", "App")
    """

    def __init__(self, log_dir=None, mask=ALL):
        self._log_dir = Path(log_dir) if log_dir is not None else None
        self._mask = _as_mask(mask)
        self._state = FileState.UNINITIALIZED
        self._path: Optional[Path] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> FileState:
        with self._lock:
            return self._state

    @property
    def is_ready(self) -> bool:
        return self.state is FileState.READY

    @property
    def path(self) -> Optional[Path]:
        """Absolute target path, or None unless READY."""
        with self._lock:
            return self._path

    @property
    def mask(self):
        with self._lock:
            return self._mask

    def set_filter(self, mask) -> None:
        """Replace the active mask. An empty mask silences the channel."""
        with self._lock:
            self._mask = _as_mask(mask)

    def admits(self, level) -> bool:
        """Return True if a record at `level` would be persisted right now."""
        with self._lock:
            return self._state is FileState.READY and admits(self._mask, level)

    def initialize(self, file_name) -> FileState:
        """Resolve <log_dir>/<file_name>, create the directory, truncate the file.

        On directory or file failure the problem is reported on stderr
        and the channel ends DISABLED with no target path; subsequent
        writes are silent no-ops.

        Args:
            file_name: Bare file name of the log inside the log directory

        Returns:
            The resulting state (READY or DISABLED)
        """
        with self._lock:
            self._state = FileState.INITIALIZING
            self._path = None

            log_dir = self._log_dir if self._log_dir is not None else default_log_dir()
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
            except OSError:
                report(f"Failed to create log directory: {log_dir.absolute()}")
                self._state = FileState.DISABLED
                return self._state

            try:
                path = (log_dir / file_name).absolute()
                with open(path, "w", encoding="utf-8"):
                    pass
            except (OSError, TypeError, ValueError) as e:
                report(f"Failed to initialize log file: {e}")
                self._state = FileState.DISABLED
                return self._state

            self._path = path
            self._state = FileState.READY
            return self._state

    def write(self, level, message, component) -> WriteResult:
        """Append one formatted line if READY and admitted."""
        try:
            with self._lock:
                gate = self._gate(level)
                if gate is not None:
                    return gate
                line = format_line(level, message, component)
                return self._append([line], "Log write failed")
        except Exception as e:
            report(f"Log write failed: {e}")
            return WriteResult.failure(str(e))

    def write_exception(self, exc) -> WriteResult:
        """Append an exception header plus one line per frame, gated on ERROR."""
        try:
            with self._lock:
                gate = self._gate(ERROR)
                if gate is not None:
                    return gate
                return self._append(format_exception_lines(exc),
                                    "Exception log failed")
        except Exception as e:
            report(f"Exception log failed: {e}")
            return WriteResult.failure(str(e))

    def _gate(self, level) -> Optional[WriteResult]:
        if not admits(self._mask, level):
            return WriteResult.skip('filtered')
        if self._state is not FileState.READY:
            return WriteResult.skip('not ready')
        return None

    def _append(self, lines: Iterable[str], failure_label: str) -> WriteResult:
        """Open in append mode, write, close. Caller holds the lock."""
        try:
            with open(self._path, "a", encoding="utf-8",
                      errors="backslashreplace") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            report(f"{failure_label}: {e}")
            return WriteResult.failure(str(e))
        return WriteResult.success()
