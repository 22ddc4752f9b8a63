"""Type descriptors and method identities used by the resolver and ledger."""

from __future__ import annotations

import abc
import dataclasses as dc
import functools
import inspect
import logging
import typing as t

from .errors import format_signature

logger = logging.getLogger(__name__)

_KEPT_DUNDERS: t.Final[frozenset[str]] = frozenset({"__call__"})
_SKIPPED_BASES: t.Final[frozenset[object]] = frozenset(
    {object, t.Generic, t.Protocol, abc.ABC}
)

ArgumentTuple: t.TypeAlias = tuple[t.Any, ...]


def _positional_signature(parameter_types: t.Sequence[object]) -> inspect.Signature:
    """Return a signature of positional parameters ``arg0``, ``arg1``, ..."""
    return inspect.Signature(
        [
            inspect.Parameter(
                f"arg{index}",
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                annotation=tp,
            )
            for index, tp in enumerate(parameter_types)
        ]
    )


@dc.dataclass(frozen=True, slots=True)
class MethodIdentity:
    """One declared method: owning type, name and ordered parameter types.

    Equality and hashing only consider ``owner``, ``name`` and
    ``parameter_types``. ``signature`` describes how runtime arguments bind
    to the parameters and never includes ``self``.
    """

    owner: str
    name: str
    parameter_types: tuple[object, ...] = ()
    signature: inspect.Signature | None = dc.field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        """Normalise ``parameter_types`` and fill in a default signature."""
        object.__setattr__(self, "parameter_types", tuple(self.parameter_types))
        if self.signature is None:
            object.__setattr__(
                self, "signature", _positional_signature(self.parameter_types)
            )

    @property
    def arity(self) -> int:
        """Return the number of declared parameters."""
        return len(self.parameter_types)

    def bind(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> ArgumentTuple:
        """Return the argument tuple for a call, in declaration order.

        Defaults are applied. Raises :class:`TypeError` when the call does
        not fit the signature.
        """
        sig = t.cast("inspect.Signature", self.signature)
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        return tuple(bound.arguments.values())

    def __str__(self) -> str:
        """Return ``Owner.name(types)``."""
        return format_signature(self.owner, self.name, self.parameter_types)


@dc.dataclass(frozen=True, slots=True, eq=False)
class TypeDescriptor:
    """Read-only view of a type's declared methods and its supertypes."""

    name: str
    methods: tuple[MethodIdentity, ...] = ()
    superclass: TypeDescriptor | None = None
    interfaces: tuple[TypeDescriptor, ...] = ()
    python_type: type | None = dc.field(default=None, repr=False)

    @classmethod
    def declare(
        cls,
        name: str,
        methods: t.Mapping[str, t.Iterable[t.Sequence[object]]] | None = None,
        *,
        superclass: TypeDescriptor | None = None,
        interfaces: t.Iterable[TypeDescriptor] = (),
    ) -> TypeDescriptor:
        """Build a descriptor from an explicit declaration table.

        ``methods`` maps each method name to the parameter-type lists of its
        overloads, e.g. ``{"f": [(), (int,)]}``.
        """
        declared = tuple(
            MethodIdentity(name, method_name, tuple(parameter_types))
            for method_name, overloads in (methods or {}).items()
            for parameter_types in overloads
        )
        return cls(
            name=name,
            methods=declared,
            superclass=superclass,
            interfaces=tuple(interfaces),
        )

    def declared(self, method_name: str) -> tuple[MethodIdentity, ...]:
        """Return this type's own methods called *method_name*."""
        return tuple(m for m in self.methods if m.name == method_name)

    def class_chain(self) -> t.Iterator[TypeDescriptor]:
        """Yield this type, then each superclass up to the root."""
        current: TypeDescriptor | None = self
        while current is not None:
            yield current
            current = current.superclass

    def interface_graph(self) -> t.Iterator[TypeDescriptor]:
        """Yield interfaces depth-first, each one before those it extends.

        The type's own interfaces come first, followed by those of each
        superclass. An interface reachable along several paths is yielded
        once.
        """
        seen: set[int] = set()
        for level in self.class_chain():
            for interface in level.interfaces:
                yield from _walk_interface(interface, seen)

    def hierarchy(self) -> t.Iterator[TypeDescriptor]:
        """Yield every type in method search order."""
        yield from self.class_chain()
        yield from self.interface_graph()

    def method_names(self) -> list[str]:
        """Return every method name visible in the hierarchy, first seen first."""
        names: dict[str, None] = {}
        for level in self.hierarchy():
            for method in level.methods:
                names.setdefault(method.name, None)
        return list(names)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"TypeDescriptor({self.name!r})"


def _walk_interface(
    interface: TypeDescriptor, seen: set[int]
) -> t.Iterator[TypeDescriptor]:
    if id(interface) in seen:
        return
    seen.add(id(interface))
    yield interface
    # Concrete mixins described as interfaces still carry a class chain.
    if interface.superclass is not None:
        yield from _walk_interface(interface.superclass, seen)
    for parent in interface.interfaces:
        yield from _walk_interface(parent, seen)


# ----------------------------------------------------------------------
# Introspection of Python classes
# ----------------------------------------------------------------------
def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for *cls*."""
    return f"{cls.__module__}.{cls.__qualname__}"


@functools.cache
def describe(cls: type) -> TypeDescriptor:
    """Return the :class:`TypeDescriptor` for the Python class *cls*.

    The first base that is not an interface becomes the superclass. Protocol
    classes, pure-abstract classes and any further bases are treated as
    interfaces.
    """
    if not isinstance(cls, type):
        msg = f"describe() expects a class, got {type(cls).__name__}"
        raise TypeError(msg)

    owner = qualified_name(cls)
    superclass: TypeDescriptor | None = None
    interfaces: list[TypeDescriptor] = []
    for base in cls.__bases__:
        if base in _SKIPPED_BASES:
            continue
        if superclass is None and not _is_interface(base):
            superclass = describe(base)
        else:
            interfaces.append(describe(base))

    descriptor = TypeDescriptor(
        name=owner,
        methods=tuple(_declared_methods(cls, owner)),
        superclass=superclass,
        interfaces=tuple(interfaces),
        python_type=cls,
    )
    logger.debug(
        "Described %s: %d method(s), superclass=%s, interfaces=%s",
        owner,
        len(descriptor.methods),
        superclass.name if superclass else None,
        [i.name for i in interfaces],
    )
    return descriptor


def _is_skipped_dunder(name: str) -> bool:
    return (
        name.startswith("__") and name.endswith("__") and name not in _KEPT_DUNDERS
    )


def _own_functions(cls: type) -> t.Iterator[tuple[str, t.Callable[..., t.Any]]]:
    """Yield the plain instance methods *cls* declares itself."""
    for name, attr in vars(cls).items():
        if _is_skipped_dunder(name):
            continue
        if inspect.isfunction(attr):
            yield name, attr


def _is_interface(base: type) -> bool:
    """Return ``True`` for protocols and classes whose methods are all abstract."""
    if getattr(base, "_is_protocol", False):
        return True
    functions = [func for _, func in _own_functions(base)]
    return bool(functions) and all(
        getattr(func, "__isabstractmethod__", False) for func in functions
    )


def _declared_methods(cls: type, owner: str) -> t.Iterator[MethodIdentity]:
    for name, func in _own_functions(cls):
        variants = t.get_overloads(func) or [func]
        for variant in variants:
            yield _identity_for(owner, name, variant)


def _identity_for(
    owner: str, name: str, func: t.Callable[..., t.Any]
) -> MethodIdentity:
    sig = inspect.signature(func)
    hints = _type_hints(func)
    params = [
        param.replace(annotation=hints.get(param.name, param.annotation))
        for param in list(sig.parameters.values())[1:]
    ]
    parameter_types = tuple(
        t.Any if param.annotation is inspect.Parameter.empty else param.annotation
        for param in params
    )
    return MethodIdentity(
        owner, name, parameter_types, sig.replace(parameters=params)
    )


def _type_hints(func: t.Callable[..., t.Any]) -> dict[str, t.Any]:
    """Return evaluated annotations, or the raw ones when evaluation fails."""
    try:
        return t.get_type_hints(func)
    except (NameError, TypeError):
        logger.debug(
            "Using raw annotations for %s; forward references did not resolve",
            getattr(func, "__qualname__", func),
        )
        return dict(getattr(func, "__annotations__", {}))


__all__ = [
    "ArgumentTuple",
    "MethodIdentity",
    "TypeDescriptor",
    "describe",
    "qualified_name",
]
