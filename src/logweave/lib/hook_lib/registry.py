"""
Registration store for hooks and middleware.

Hooks are kept in one bucket per event; middleware in a single global
list. Every bucket is sorted by descending priority after each insert.
list.sort() is stable, so registrations with equal priority keep their
registration order.

The store only holds registrations. It never sees log entries.
"""

import math
import uuid
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Dict, List

from .events import KNOWN_EVENTS, validate_event


DEFAULT_PRIORITY = 50


def _new_id() -> str:
    return uuid.uuid4().hex


def _check_priority(priority) -> None:
    if isinstance(priority, bool) or not isinstance(priority, Real):
        raise TypeError(f"priority must be a number, got {type(priority).__name__}")
    if math.isnan(priority):
        raise ValueError("priority must not be NaN")


@dataclass
class HookRegistration:
    """A callback subscribed to one event."""
    event: str
    callback: Callable[..., Any]
    priority: float = DEFAULT_PRIORITY
    once: bool = False
    id: str = field(default_factory=_new_id)
    fired: bool = field(default=False, compare=False)


@dataclass
class MiddlewareRegistration:
    """A global middleware function; runs once per processed entry."""
    fn: Callable[..., Any]
    priority: float = DEFAULT_PRIORITY
    id: str = field(default_factory=_new_id)


class Subscription:
    """Handle returned by every registration.

    Calling the handle (or ``cancel()``) removes exactly the registration
    it was created for. Repeat calls are no-ops. Truthy result means this
    call removed something.
    """

    def __init__(self, store: 'RegistrationStore', registration):
        self._store = store
        self.registration = registration

    @property
    def id(self) -> str:
        return self.registration.id

    @property
    def active(self) -> bool:
        return self._store.contains(self.registration.id)

    def cancel(self) -> bool:
        return self._store.remove(self.registration.id)

    __call__ = cancel

    def __repr__(self):
        kind = getattr(self.registration, 'event', 'middleware')
        return f"<Subscription {kind} {self.id[:8]} active={self.active}>"


class RegistrationStore:
    """Holds hook buckets (one per known event) and the middleware list."""

    def __init__(self):
        self._hooks: Dict[str, List[HookRegistration]] = {
            event: [] for event in KNOWN_EVENTS
        }
        self._middlewares: List[MiddlewareRegistration] = []

    # -- insertion ----------------------------------------------------------

    def add_hook(self, event: str, callback: Callable[..., Any],
                 priority: float = DEFAULT_PRIORITY,
                 once: bool = False) -> Subscription:
        validate_event(event)
        _check_priority(priority)
        if not callable(callback):
            raise TypeError("hook callback must be callable")
        registration = HookRegistration(event=event, callback=callback,
                                        priority=priority, once=once)
        bucket = self._hooks[event]
        bucket.append(registration)
        bucket.sort(key=lambda r: -r.priority)
        return Subscription(self, registration)

    def add_middleware(self, fn: Callable[..., Any],
                       priority: float = DEFAULT_PRIORITY) -> Subscription:
        _check_priority(priority)
        if not callable(fn):
            raise TypeError("middleware must be callable")
        registration = MiddlewareRegistration(fn=fn, priority=priority)
        self._middlewares.append(registration)
        self._middlewares.sort(key=lambda r: -r.priority)
        return Subscription(self, registration)

    # -- removal ------------------------------------------------------------

    def remove(self, registration_id: str) -> bool:
        """Remove a hook or middleware by id. Returns False if not present."""
        for bucket in (*self._hooks.values(), self._middlewares):
            for i, registration in enumerate(bucket):
                if registration.id == registration_id:
                    del bucket[i]
                    return True
        return False

    def remove_callback(self, event: str, callback: Callable[..., Any]) -> bool:
        """Remove the first registration on ``event`` whose callback equals ``callback``.

        If the same callback is registered several times on one event, only
        one registration goes per call.
        """
        bucket = self._hooks[validate_event(event)]
        for i, registration in enumerate(bucket):
            if registration.callback == callback:
                del bucket[i]
                return True
        return False

    def clear(self) -> None:
        for bucket in self._hooks.values():
            bucket.clear()
        self._middlewares.clear()

    # -- lookup -------------------------------------------------------------

    def contains(self, registration_id: str) -> bool:
        return any(r.id == registration_id
                   for bucket in (*self._hooks.values(), self._middlewares)
                   for r in bucket)

    def hooks_for(self, event: str) -> List[HookRegistration]:
        """Point-in-time ordered copy of the hooks on ``event``."""
        return list(self._hooks[validate_event(event)])

    def middlewares(self) -> List[MiddlewareRegistration]:
        """Point-in-time ordered copy of the middleware list."""
        return list(self._middlewares)

    def counts(self) -> Dict[str, int]:
        return {event: len(bucket) for event, bucket in self._hooks.items()}

    def middleware_count(self) -> int:
        return len(self._middlewares)
