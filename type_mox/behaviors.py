"""Behavior objects that compute a stubbed method's result."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import ArgumentTuple


class Behavior(t.Protocol):
    """Callable mapping a captured argument tuple to a result."""

    def __call__(self, arguments: ArgumentTuple) -> object:
        """Return the result for a call made with *arguments*."""
        ...


class ReturnValue:
    """Ignore the arguments and always return ``value``."""

    def __init__(self, value: object) -> None:
        self.value = value

    def __call__(self, arguments: ArgumentTuple) -> object:
        """Return the configured value."""
        return self.value

    def __eq__(self, other: object) -> bool:
        """Compare by the returned value."""
        if not isinstance(other, ReturnValue):
            return NotImplemented
        return self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        """Return a debug representation."""
        return f"ReturnValue({self.value!r})"


class RaiseError:
    """Raise ``error`` on every call."""

    def __init__(self, error: BaseException | type[BaseException]) -> None:
        if not (
            isinstance(error, BaseException)
            or (isinstance(error, type) and issubclass(error, BaseException))
        ):
            msg = f"RaiseError expects an exception, got {error!r}"
            raise TypeError(msg)
        self.error = error

    def __call__(self, arguments: ArgumentTuple) -> t.NoReturn:
        """Raise the configured exception."""
        raise self.error

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        """Return a debug representation."""
        return f"RaiseError({self.error!r})"


class Implementation:
    """Call ``func`` with the captured arguments unpacked."""

    def __init__(self, func: t.Callable[..., object]) -> None:
        self.func = func

    def __call__(self, arguments: ArgumentTuple) -> object:
        """Return ``func(*arguments)``."""
        return self.func(*arguments)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        """Return a debug representation."""
        return f"Implementation({self.func!r})"


def as_behavior(obj: object) -> Behavior:
    """Return *obj* when callable, otherwise a :class:`ReturnValue` for it."""
    if callable(obj):
        return t.cast("Behavior", obj)
    return ReturnValue(obj)


__all__ = [
    "Behavior",
    "Implementation",
    "RaiseError",
    "ReturnValue",
    "as_behavior",
]
