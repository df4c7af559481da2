"""
Logger — the logging façade in front of the hook pipeline.

Each log call is gated by verbosity, turned into a LogEntry, run through
HookManager.process(), written as one line to the output stream, then
handed to HookManager.after_process():

    logger.info("saved", rows=3)
        → process()  (before_log hooks, middleware)
        → "[2026-10-19T12:00:00+00:00] INFO [app] saved"
        → after_process()  (after_log hooks)

Middleware failures are the façade's to handle: the record is dropped and
a one-line report goes to the fallback stream (default: stderr).

Usage::

    log = Logger(verbosity='debug', prefix='app')
    log.on('before_log', redact, priority=90)
    await log.info("user signed in", user_id)

    db = log.scoped('db')        # prefix 'app:db', same hooks
    await db.warn("slow query")
"""

import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from logweave.config import resolve_config
from logweave.lib.hook_lib import (
    DEFAULT_PRIORITY, HookManager, LogEntry, Subscription, should_log,
)
from logweave.lib.hook_lib.levels import CRITICAL, DEBUG, ERROR, INFO, WARN
from logweave.lib.hook_lib.manager import HookCallback, MiddlewareFn


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


class Logger:
    """Verbosity-gated logger whose every record passes through a HookManager.

    Args:
        verbosity: Lowest level shown ('debug' ... 'critical', or 'silent')
        prefix: Scope prefix rendered before the message
        file: Output stream for records (default: stdout)
        hooks: HookManager to share; a private one is created if omitted
        timestamps: Whether rendered lines start with the timestamp
        fallback: Stream for pipeline failure reports (default: stderr)
    """

    def __init__(
        self,
        verbosity: str = INFO,
        prefix: Optional[str] = None,
        file: TextIO = None,
        hooks: HookManager = None,
        timestamps: bool = True,
        fallback: TextIO = None,
    ):
        # Raises ValueError for an unknown verbosity
        should_log(INFO, verbosity)
        self.verbosity = verbosity
        self.prefix = prefix
        self.timestamps = timestamps
        self.hooks = hooks if hooks is not None else HookManager()
        self._file = file
        self._fallback = fallback

    # None means whatever sys.stdout / sys.stderr is at write time
    @property
    def file(self) -> TextIO:
        return self._file if self._file is not None else sys.stdout

    @property
    def fallback(self) -> TextIO:
        return self._fallback if self._fallback is not None else sys.stderr

    # =========================================================================
    # Extension API (pass-through to the HookManager)
    # =========================================================================

    def on(self, event: str, callback: HookCallback,
           priority: float = DEFAULT_PRIORITY) -> Subscription:
        return self.hooks.on(event, callback, priority)

    def once(self, event: str, callback: HookCallback,
             priority: float = DEFAULT_PRIORITY) -> Subscription:
        return self.hooks.once(event, callback, priority)

    def off(self, event: str, callback: HookCallback) -> bool:
        return self.hooks.off(event, callback)

    def use(self, middleware: MiddlewareFn,
            priority: float = DEFAULT_PRIORITY) -> Subscription:
        return self.hooks.use(middleware, priority)

    # =========================================================================
    # Logging
    # =========================================================================

    async def log(self, level: str, *args: Any,
                  correlation_id: str = None, **context: Any) -> Optional[LogEntry]:
        """Log one record at ``level``.

        The first positional argument becomes the message; all of them are
        kept in ``args``. Keyword arguments become the entry's ``context``.

        Returns:
            The entry as emitted, or None if it was filtered by verbosity or
            dropped because a middleware raised.
        """
        if not should_log(level, self.verbosity):
            return None

        entry = LogEntry(
            level=level,
            message=str(args[0]) if args else '',
            args=list(args),
            timestamp=_timestamp(),
            prefix=self.prefix,
            correlation_id=correlation_id,
            context=dict(context) if context else None,
        )

        try:
            processed = await self.hooks.process(entry.to_dict())
        except Exception as exc:
            print(f"Log middleware failed: {type(exc).__name__}: {exc}",
                  file=self.fallback)
            return None

        print(self.format({'level': level, **processed}), file=self.file)
        await self.hooks.after_process(processed)
        return LogEntry.from_dict(processed, default_level=level)

    async def debug(self, *args, **kwargs):
        return await self.log(DEBUG, *args, **kwargs)

    async def info(self, *args, **kwargs):
        return await self.log(INFO, *args, **kwargs)

    async def warn(self, *args, **kwargs):
        return await self.log(WARN, *args, **kwargs)

    async def error(self, *args, **kwargs):
        return await self.log(ERROR, *args, **kwargs)

    async def critical(self, *args, **kwargs):
        return await self.log(CRITICAL, *args, **kwargs)

    def format(self, entry) -> str:
        """Render an entry dict as a single output line."""
        parts = []
        if self.timestamps and entry.get('timestamp'):
            parts.append(f"[{entry['timestamp']}]")
        parts.append(str(entry.get('level', '')).upper())
        if entry.get('prefix'):
            parts.append(f"[{entry['prefix']}]")
        parts.append(str(entry.get('message', '')))
        parts.extend(str(arg) for arg in list(entry.get('args') or [])[1:])
        return ' '.join(parts)

    # =========================================================================
    # Scoping
    # =========================================================================

    def scoped(self, prefix: str) -> 'Logger':
        """Child logger with prefix 'parent:child', sharing hooks and streams."""
        combined = ':'.join(p for p in (self.prefix, prefix) if p) or None
        return Logger(
            verbosity=self.verbosity,
            prefix=combined,
            file=self._file,
            hooks=self.hooks,
            timestamps=self.timestamps,
            fallback=self._fallback,
        )


def create_logger(hooks: HookManager = None, file: TextIO = None,
                  start_dir=None, **overrides) -> Logger:
    """Build a Logger from resolved config (overrides > project > global).

    Call once at program startup and pass the result (or its .hooks) to
    whatever needs it.
    """
    cfg = resolve_config(overrides, start_dir=start_dir)
    return Logger(
        verbosity=cfg["verbosity"],
        prefix=cfg["prefix"],
        timestamps=cfg["timestamps"],
        file=file,
        hooks=hooks,
    )
