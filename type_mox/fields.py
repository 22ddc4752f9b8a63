"""White-box helpers that read and replace fields on real objects."""

from __future__ import annotations

import contextlib
import inspect
import logging
import typing as t

from .errors import FieldNotFoundError

logger = logging.getLogger(__name__)

F = t.TypeVar("F")

_MISSING = object()


def _field_name(obj: object, name: str) -> str:
    """Return the attribute name backing *name*, applying name mangling.

    ``__secret`` declared in class ``Account`` is stored as
    ``_Account__secret``; every class in the MRO is tried.
    """
    if getattr(obj, name, _MISSING) is not _MISSING:
        return name
    if name.startswith("__") and not name.endswith("__"):
        for cls in type(obj).__mro__:
            mangled = f"_{cls.__name__.lstrip('_')}{name}"
            if getattr(obj, mangled, _MISSING) is not _MISSING:
                return mangled
    raise FieldNotFoundError(obj, name)


@t.overload
def get_field_value(obj: object, name: str) -> t.Any: ...


@t.overload
def get_field_value(obj: object, name: str, expected_type: type[F]) -> F: ...


def get_field_value(
    obj: object, name: str, expected_type: type[t.Any] | None = None
) -> t.Any:
    """Return the value of field *name* on *obj*.

    Raises :class:`~type_mox.errors.FieldNotFoundError` when the field does
    not exist and :class:`TypeError` when it is not an *expected_type*.
    """
    value = getattr(obj, _field_name(obj, name))
    if expected_type is not None and not isinstance(value, expected_type):
        msg = (
            f"field {name!r} holds {type(value).__name__}, "
            f"expected {expected_type.__name__}"
        )
        raise TypeError(msg)
    return value


def mock_field(obj: object, name: str, value: object) -> None:
    """Replace the existing field *name* on *obj* with *value*."""
    attr = _field_name(obj, name)
    setattr(obj, attr, value)
    logger.debug("Set %s.%s to %r", type(obj).__qualname__, attr, value)


def _is_class_default(obj: object, attr: str) -> bool:
    """Return ``True`` when *attr* is a class attribute *obj* does not shadow.

    Slots and properties are data descriptors: their value is restored with
    ``setattr`` rather than by dropping an instance override.
    """
    own = getattr(obj, "__dict__", None)
    if own is None or attr in own:
        return False
    static = inspect.getattr_static(type(obj), attr, _MISSING)
    return static is not _MISSING and not hasattr(type(static), "__set__")


@contextlib.contextmanager
def temporary_field(obj: object, name: str, value: object) -> t.Iterator[None]:
    """Temporarily replace field *name* on *obj*, restoring it on exit."""
    attr = _field_name(obj, name)
    original = _MISSING if _is_class_default(obj, attr) else getattr(obj, attr)
    setattr(obj, attr, value)
    try:
        yield
    finally:
        if original is _MISSING:
            # The value came from the class; drop the instance override.
            delattr(obj, attr)
        else:
            setattr(obj, attr, original)


__all__ = ["get_field_value", "mock_field", "temporary_field"]
