"""Custom exceptions raised by TypeMox."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import MethodIdentity


def format_signature(
    type_name: str, method_name: str, argument_types: t.Sequence[object]
) -> str:
    """Return ``Type.name(arg, ...)`` for error messages."""
    args = ", ".join(_type_label(tp) for tp in argument_types)
    return f"{type_name}.{method_name}({args})"


def _type_label(tp: object) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp) if isinstance(tp, str) else str(tp)


class TypeMoxError(Exception):
    """Base exception for TypeMox errors."""


class LifecycleError(TypeMoxError):
    """Raised when a mock's stub instance is bound or read out of order."""


class MethodResolutionError(TypeMoxError, LookupError):
    """Raised when a method name cannot be turned into one declared method."""

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        method_name: str,
        argument_types: t.Sequence[object] = (),
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.method_name = method_name
        self.argument_types = tuple(argument_types)


class MethodNotFoundError(MethodResolutionError):
    """Raised when no declared method matches the name and signature."""

    def __init__(
        self,
        type_name: str,
        method_name: str,
        argument_types: t.Sequence[object] = (),
    ) -> None:
        if argument_types:
            target = format_signature(type_name, method_name, argument_types)
        else:
            target = f"{type_name}.{method_name}"
        msg = f"No method matching {target} in the class or interface hierarchy"
        super().__init__(
            msg,
            type_name=type_name,
            method_name=method_name,
            argument_types=argument_types,
        )


class AmbiguousMethodError(MethodResolutionError):
    """Raised when an overloaded name is used without an argument signature."""

    def __init__(
        self,
        type_name: str,
        method_name: str,
        candidates: t.Sequence[MethodIdentity],
    ) -> None:
        self.candidates = tuple(candidates)
        choices = ", ".join(
            format_signature(c.owner, c.name, c.parameter_types)
            for c in self.candidates
        )
        msg = (
            f"{type_name}.{method_name} is overloaded; pass the argument types "
            f"to pick one of: {choices}"
        )
        super().__init__(msg, type_name=type_name, method_name=method_name)


class FieldNotFoundError(TypeMoxError, AttributeError):
    """Raised when a field helper targets an attribute the object lacks."""

    def __init__(self, obj: object, name: str) -> None:
        msg = f"{type(obj).__qualname__} instance has no field {name!r}"
        super().__init__(msg)
        self.field_name = name


__all__ = [
    "AmbiguousMethodError",
    "FieldNotFoundError",
    "LifecycleError",
    "MethodNotFoundError",
    "MethodResolutionError",
    "TypeMoxError",
    "format_signature",
]
