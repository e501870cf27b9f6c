"""
Severity level flags for the dual-channel diagnostic system.

Levels are independent bits, not ranks. A channel admits a message when
the message's bit is present in the channel's mask:

    mask & level != 0  →  message is admitted

So VERBOSE is NOT implied by ERROR; each level must be in the mask
explicitly (ALL contains every concrete level).

Bit assignments:
    NONE     0     nothing admitted
    ERROR    1     errors and exceptions
    WARNING  2     unexpected but recoverable
    INFO     4     normal operation
    VERBOSE  8     fine-grained detail
"""

import functools
import operator
import re
from enum import IntFlag


class SeverityLevel(IntFlag):
    """Bit-flag severity vocabulary shared by both channels."""
    NONE = 0
    ERROR = 1 << 0
    WARNING = 1 << 1
    INFO = 1 << 2
    VERBOSE = 1 << 3


# Concrete levels, in display order
CONCRETE_LEVELS = (
    SeverityLevel.ERROR,
    SeverityLevel.WARNING,
    SeverityLevel.INFO,
    SeverityLevel.VERBOSE,
)

NONE = SeverityLevel.NONE
ERROR = SeverityLevel.ERROR
WARNING = SeverityLevel.WARNING
INFO = SeverityLevel.INFO
VERBOSE = SeverityLevel.VERBOSE

# Union of every concrete level. Adding a level to CONCRETE_LEVELS
# extends ALL automatically.
ALL = functools.reduce(operator.or_, CONCRETE_LEVELS, SeverityLevel.NONE)

LEVEL_DESCRIPTIONS = {
    SeverityLevel.ERROR:   'Errors and exceptions',
    SeverityLevel.WARNING: 'Unexpected but recoverable conditions',
    SeverityLevel.INFO:    'Normal operation',
    SeverityLevel.VERBOSE: 'Fine-grained detail',
}

_SPEC_SEPARATORS = re.compile(r'[|,+\s]+')


def admits(mask, level) -> bool:
    """Return True if `level` is present in `mask` (bitwise intersection)."""
    return (int(mask) & int(level)) != 0


def level_name(level) -> str:
    """Return the upper-case tag used in formatted lines (e.g. 'ERROR')."""
    try:
        name = SeverityLevel(level).name
    except ValueError:
        name = None
    return name if name else str(int(level))


def parse_level_spec(spec) -> SeverityLevel:
    """Parse a level spec string into a mask.

    Accepts 'all', 'none', a raw integer, or level names joined by
    '|', ',' or '+' (case-insensitive):

        "error|warning"   -> ERROR | WARNING
        "all"             -> ALL
        "12"              -> INFO | VERBOSE

    Args:
        spec: Spec string, or an int / SeverityLevel passed through.

    Returns:
        SeverityLevel mask

    Raises:
        ValueError: On unknown level names or bits outside ALL.
    """
    if isinstance(spec, int):
        value = int(spec)
        if value & ~int(ALL):
            raise ValueError(f"Mask {value} has bits outside ALL ({int(ALL)})")
        return SeverityLevel(value)

    text = str(spec).strip()
    if text.lstrip('-').isdigit():
        return parse_level_spec(int(text))

    mask = SeverityLevel.NONE
    for token in _SPEC_SEPARATORS.split(text):
        if not token:
            continue
        key = token.upper()
        if key == 'ALL':
            mask |= ALL
        elif key == 'NONE':
            continue
        elif key in SeverityLevel.__members__:
            mask |= SeverityLevel[key]
        else:
            raise ValueError(f"Unknown severity level: {token!r}")
    return mask


def format_level_list() -> str:
    """Format the list of severity levels for display.

    Returns:
        Formatted string listing every concrete level with its bit value.
    """
    lines = ["Severity levels:"]
    max_name = max(len(level_name(lvl)) for lvl in CONCRETE_LEVELS)
    for lvl in CONCRETE_LEVELS:
        desc = LEVEL_DESCRIPTIONS.get(lvl, '')
        lines.append(f"  {level_name(lvl):<{max_name}}  {int(lvl):>2}  {desc}")
    lines.append(f"  {'ALL':<{max_name}}  {int(ALL):>2}  Every level above")
    return "\n".join(lines)
