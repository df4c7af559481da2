"""
HookManager — the hook & middleware pipeline core.

Every log call passes through here twice:

    entry ──→ process() ──→ [caller emits the record] ──→ after_process()
                │                                            │
                ├─ emit('before_log')  hooks, merged copies   │
                └─ middleware chain    one shared dict        └─ emit('after_log')

Hooks run strictly by descending priority (ties in registration order),
one at a time, each awaited before the next starts. A hook that raises
never breaks logging: the failure is rerouted to an 'on_error' emission
and the remaining hooks still run. Failures inside 'on_error' hooks are
dropped (and counted) so an error handler cannot loop on itself.

Middleware is the opposite trade: it runs as one linear chain with
explicit continuation (``next_``), shares a single working dict, and its
exceptions propagate out of process() to the caller.

Callbacks and middleware may be plain functions or coroutine functions.
Any awaitable they return is awaited, so a plain-function middleware can
continue the chain with ``return next_()``.

Usage::

    hooks = HookManager()
    hooks.on('before_log', lambda e: {'prefix': 'app'}, priority=90)

    async def enrich(entry, next_):
        entry.setdefault('context', {})['host'] = 'web-1'
        await next_()

    hooks.use(enrich)
    entry = await hooks.process({'level': 'info', 'message': 'hi', ...})
    ...  # write the record
    await hooks.after_process(entry)
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, Mapping, Union

from .events import AFTER_LOG, BEFORE_LOG, KNOWN_EVENTS, ON_ERROR, validate_event
from .registry import DEFAULT_PRIORITY, RegistrationStore, Subscription

Entry = Dict[str, Any]
HookCallback = Callable[[Entry], Any]
NextFn = Callable[[], Awaitable[None]]
MiddlewareFn = Callable[[Entry, NextFn], Any]


async def _settle(result):
    """Await ``result`` if it is awaitable, else return it as-is."""
    if inspect.isawaitable(result):
        return await result
    return result


class HookManager:
    """Registration, emission and middleware execution for one logger.

    There is no module-level default instance. Construct one at startup
    and hand it to every Logger that should share it.
    """

    def __init__(self, store: RegistrationStore = None):
        self._store = store if store is not None else RegistrationStore()
        self._swallowed_errors = 0

    # =========================================================================
    # Registration
    # =========================================================================

    def on(self, event: str, callback: HookCallback,
           priority: float = DEFAULT_PRIORITY) -> Subscription:
        """Subscribe ``callback`` to ``event``.

        Args:
            event: One of 'before_log', 'after_log', 'on_error'
            callback: Receives the entry dict; may return a mapping of
                fields to merge into it (or an awaitable of one)
            priority: Higher runs first; ties keep registration order

        Returns:
            Subscription handle; call it (or pass it to unregister) to remove
            this registration. Repeat calls are no-ops.

        Raises:
            UnknownEventError: event outside the fixed vocabulary
        """
        return self._store.add_hook(event, callback, priority, once=False)

    def once(self, event: str, callback: HookCallback,
             priority: float = DEFAULT_PRIORITY) -> Subscription:
        """Like on(), but removed after its first invocation, even a failed one."""
        return self._store.add_hook(event, callback, priority, once=True)

    def off(self, event: str, callback: HookCallback) -> bool:
        """Remove the first registration on ``event`` for ``callback``.

        A callback registered twice on the same event needs two off() calls.
        Returns True if a registration was removed.
        """
        return self._store.remove_callback(event, callback)

    def use(self, middleware: MiddlewareFn,
            priority: float = DEFAULT_PRIORITY) -> Subscription:
        """Add ``middleware(entry, next_)`` to the global chain."""
        return self._store.add_middleware(middleware, priority)

    def unregister(self, subscription: Union[Subscription, str]) -> bool:
        """Remove a registration by handle or id. Returns False if already gone."""
        if isinstance(subscription, Subscription):
            return subscription.cancel()
        return self._store.remove(subscription)

    # =========================================================================
    # Emission
    # =========================================================================

    async def emit(self, event: str, entry: Mapping[str, Any]) -> Entry:
        """Run every hook on ``event`` against a copy of ``entry``.

        Each hook sees the entry as left by the hooks before it. A mapping
        returned by a hook is merged in by shallow field overwrite; any
        other return value is ignored.

        Returns:
            The merged entry. The caller's mapping is never modified by a merge.
        """
        validate_event(event)
        current: Entry = dict(entry)
        spent = []

        try:
            for registration in self._store.hooks_for(event):
                # Unsubscribed by an earlier hook, or a once hook already fired
                # by an overlapping emission
                if not self._store.contains(registration.id):
                    continue
                if registration.once:
                    if registration.fired:
                        continue
                    registration.fired = True
                    spent.append(registration.id)

                try:
                    result = await _settle(registration.callback(current))
                except Exception as exc:
                    if event == ON_ERROR:
                        self._swallowed_errors += 1
                    else:
                        await self.emit(ON_ERROR, {**current, 'error': exc, 'hook_event': event})
                    continue

                if result and isinstance(result, Mapping):
                    current = {**current, **result}
        finally:
            # Fired once hooks go even if a BaseException cut the loop short
            for registration_id in spent:
                self._store.remove(registration_id)
        return current

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def process(self, entry: Mapping[str, Any]) -> Entry:
        """Run 'before_log' hooks, then the middleware chain.

        A middleware that returns without calling ``next_`` halts the chain;
        the entry is returned as it stood at that point. Middleware
        exceptions propagate to the caller.
        """
        current = await self.emit(BEFORE_LOG, entry)
        if self._store.middleware_count():
            await self._run_chain(current)
        return current

    async def after_process(self, entry: Mapping[str, Any]) -> None:
        """Run 'after_log' hooks. Their merges are discarded."""
        await self.emit(AFTER_LOG, entry)

    async def _run_chain(self, entry: Entry) -> None:
        chain = self._store.middlewares()
        cursor = 0

        # The cursor is shared: a second next_() call picks up wherever the
        # chain has got to, and is a no-op once the chain is exhausted.
        async def next_() -> None:
            nonlocal cursor
            if cursor >= len(chain):
                return
            registration = chain[cursor]
            cursor += 1
            await _settle(registration.fn(entry, next_))

        await next_()

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def clear(self) -> None:
        """Drop every hook and middleware and reset the error counter."""
        self._store.clear()
        self._swallowed_errors = 0

    def get_stats(self) -> Dict[str, Any]:
        """Registration counts plus the number of dropped 'on_error' failures.

        Returns:
            {'hooks': {event: count}, 'middlewares': count,
             'swallowed_errors': count}
        """
        counts = self._store.counts()
        return {
            'hooks': {event: counts[event] for event in KNOWN_EVENTS},
            'middlewares': self._store.middleware_count(),
            'swallowed_errors': self._swallowed_errors,
        }
