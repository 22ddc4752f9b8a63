"""Build stub instances whose method calls are routed to a :class:`TypeMock`."""

from __future__ import annotations

import logging
import types
import typing as t

from .registry import TypeMock
from .resolver import AmbiguityPolicy, candidates, select_overload

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import MethodIdentity, TypeDescriptor

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


def _stub_class_name(descriptor: TypeDescriptor) -> str:
    return descriptor.name.rpartition(".")[2] + "Mock"


def _make_dispatcher(
    registry: TypeMock[t.Any],
    name: str,
    variants: tuple[MethodIdentity, ...],
    class_name: str,
) -> t.Callable[..., object]:
    """Return a method that selects an overload and calls ``intercept``."""

    def dispatch(self: object, *args: object, **kwargs: object) -> object:
        identity, arguments = select_overload(variants, args, kwargs)
        return registry.intercept(identity, arguments)

    dispatch.__name__ = name
    dispatch.__qualname__ = f"{class_name}.{name}"
    return dispatch


def build_stub(registry: TypeMock[T]) -> T:
    """Create the stub instance for *registry* without binding it.

    For an introspected class the stub's class derives from it, so
    ``isinstance`` checks in the code under test still pass. The mocked
    class's ``__init__`` is never run.
    """
    descriptor = registry.descriptor
    class_name = _stub_class_name(descriptor)
    namespace: dict[str, object] = {
        name: _make_dispatcher(
            registry, name, candidates(descriptor, name), class_name
        )
        for name in descriptor.method_names()
    }

    def stub_repr(self: object) -> str:
        return f"<{class_name} stub for {descriptor.name}>"

    dispatched = ", ".join(namespace)
    namespace["__repr__"] = stub_repr
    namespace["__module__"] = __name__

    base = descriptor.python_type
    bases: tuple[type, ...] = (base,) if base is not None else ()
    stub_cls = types.new_class(
        class_name, bases, exec_body=lambda ns: ns.update(namespace)
    )
    # Every declared method is now concrete, so abstract bases can be created.
    stub_cls.__abstractmethods__ = frozenset()
    stub = object.__new__(stub_cls)
    logger.debug("Built %s with dispatchers for %s", class_name, dispatched)
    return t.cast("T", stub)


def mock_type(
    mocked_type: type[T] | TypeDescriptor,
    *,
    ambiguity: AmbiguityPolicy | str = AmbiguityPolicy.PREFER_NO_ARGS,
) -> TypeMock[T]:
    """Return a :class:`TypeMock` for *mocked_type* with its stub bound."""
    registry: TypeMock[T] = TypeMock(mocked_type, ambiguity=ambiguity)
    registry.bind(build_stub(registry))
    return registry


__all__ = ["build_stub", "mock_type"]
