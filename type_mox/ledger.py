"""Per-method behavior table and call capture for a mocked type."""

from __future__ import annotations

import logging
import threading
import typing as t

from .behaviors import ReturnValue

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .behaviors import Behavior
    from .descriptors import ArgumentTuple, MethodIdentity

logger = logging.getLogger(__name__)


class InvocationLedger:
    """Record calls and answer them with the installed behavior.

    Each :class:`~type_mox.descriptors.MethodIdentity` has at most one
    behavior and an append-only list of captured argument tuples. Both are
    created lazily. Capture appends and snapshots are serialised by a lock;
    behaviors run outside it.
    """

    def __init__(self) -> None:
        self._behaviors: dict[MethodIdentity, Behavior] = {}
        self._captured: dict[MethodIdentity, list[ArgumentTuple]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Behavior table
    # ------------------------------------------------------------------
    def install_behavior(self, identity: MethodIdentity, behavior: Behavior) -> None:
        """Install *behavior* for *identity*, replacing any earlier one."""
        if not callable(behavior):
            msg = f"behavior must be callable, got {behavior!r}"
            raise TypeError(msg)
        self._behaviors[identity] = behavior
        logger.debug("Installed %r for %s", behavior, identity)

    def install_constant_return(self, identity: MethodIdentity, value: object) -> None:
        """Make *identity* return *value* whatever its arguments."""
        self.install_behavior(identity, ReturnValue(value))

    def behavior_for(self, identity: MethodIdentity) -> Behavior | None:
        """Return the behavior installed for *identity*, if any."""
        return self._behaviors.get(identity)

    def remove_behavior(self, identity: MethodIdentity) -> None:
        """Drop the behavior for *identity* so calls return ``None`` again."""
        self._behaviors.pop(identity, None)

    # ------------------------------------------------------------------
    # Interception
    # ------------------------------------------------------------------
    def intercept(self, identity: MethodIdentity, arguments: ArgumentTuple) -> object:
        """Capture *arguments* for *identity* and return the stubbed result.

        The capture is recorded before the behavior runs, so calls are
        visible even when no behavior is installed or the behavior raises.
        Returns ``None`` when no behavior is installed.
        """
        arguments = tuple(arguments)
        with self._lock:
            self._captured.setdefault(identity, []).append(arguments)
        logger.debug("Intercepted %s with %r", identity, arguments)
        behavior = self._behaviors.get(identity)
        if behavior is None:
            return None
        return behavior(arguments)

    # ------------------------------------------------------------------
    # Captured arguments
    # ------------------------------------------------------------------
    def last_captured_arguments(self, identity: MethodIdentity) -> ArgumentTuple | None:
        """Return the arguments of the latest call, or ``None`` if never called."""
        with self._lock:
            captured = self._captured.get(identity)
            if not captured:
                return None
            return captured[-1]

    def all_captured_arguments(self, identity: MethodIdentity) -> list[ArgumentTuple]:
        """Return a copy of every captured argument tuple, oldest first."""
        with self._lock:
            return list(self._captured.get(identity, ()))

    def call_count(self, identity: MethodIdentity) -> int:
        """Return how many calls were captured for *identity*."""
        with self._lock:
            return len(self._captured.get(identity, ()))

    def clear_captured(self, identity: MethodIdentity) -> None:
        """Forget the calls captured for *identity*; its behavior is kept."""
        with self._lock:
            captured = self._captured.get(identity)
            if captured is not None:
                captured.clear()

    def clear_all_captured(self) -> None:
        """Forget every captured call; installed behaviors are kept."""
        with self._lock:
            for captured in self._captured.values():
                captured.clear()

    def reset(self) -> None:
        """Drop every behavior and every captured call."""
        with self._lock:
            self._captured.clear()
        self._behaviors.clear()


__all__ = ["InvocationLedger"]
