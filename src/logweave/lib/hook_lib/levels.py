"""
Log level constants and the verbosity gate.

Levels are ordered by severity. A record is shown when its level is at
or above the configured verbosity:

    ←── chattier ──────────────────────── quieter ──→
    debug   info   warn   error   critical   silent
      0      1      2       3        4        (none)

'silent' is only valid as a verbosity; nothing is ever logged "at" it.
"""

from typing import Dict


DEBUG = 'debug'
INFO = 'info'
WARN = 'warn'
ERROR = 'error'
CRITICAL = 'critical'
SILENT = 'silent'

LOG_LEVELS: Dict[str, int] = {
    DEBUG: 0,
    INFO: 1,
    WARN: 2,
    ERROR: 3,
    CRITICAL: 4,
}

VERBOSITIES = set(LOG_LEVELS) | {SILENT}


def level_value(level: str) -> int:
    """Numeric severity of a level name.

    Raises:
        ValueError: if the level is unknown
    """
    try:
        return LOG_LEVELS[level]
    except KeyError:
        raise ValueError(f"Unknown log level {level!r}") from None


def should_log(level: str, verbosity: str) -> bool:
    """True when a record at ``level`` passes the ``verbosity`` gate."""
    if verbosity not in VERBOSITIES:
        raise ValueError(f"Unknown verbosity {verbosity!r}")
    value = level_value(level)
    if verbosity == SILENT:
        return False
    return value >= LOG_LEVELS[verbosity]
