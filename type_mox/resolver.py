"""Resolve method names to declared methods across a type hierarchy.

The search order is the type's own methods, then each superclass up the
chain, then the interface graph depth-first. A match in the class chain
always wins over an interface declaration.
"""

from __future__ import annotations

import enum
import inspect
import logging
import types
import typing as t

from .errors import AmbiguousMethodError, MethodNotFoundError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import ArgumentTuple, MethodIdentity, TypeDescriptor

logger = logging.getLogger(__name__)


class AmbiguityPolicy(enum.StrEnum):
    """How a name lookup without argument types treats overloaded names."""

    PREFER_NO_ARGS = "prefer-no-args"
    FIRST_MATCH = "first-match"
    STRICT = "strict"


def resolve(
    descriptor: TypeDescriptor,
    method_name: str,
    argument_types: t.Sequence[object] = (),
    *,
    ambiguity: AmbiguityPolicy | str = AmbiguityPolicy.PREFER_NO_ARGS,
) -> MethodIdentity:
    """Return the declared method *method_name* of *descriptor*.

    When *argument_types* is non-empty the parameter types must match
    exactly and positionally. When it is empty the first type in search
    order that declares *method_name* supplies the answer; if it declares
    several overloads, *ambiguity* decides which one is returned.

    Raises
    ------
    MethodNotFoundError
        When no declared method matches.
    AmbiguousMethodError
        When the name is overloaded and the policy refuses to pick one.
    """
    if not isinstance(method_name, str) or not method_name:
        msg = "method_name must be a non-empty string"
        raise ValueError(msg)
    policy = AmbiguityPolicy(ambiguity)
    wanted = tuple(argument_types)
    if wanted:
        identity = _find_exact(descriptor, method_name, wanted)
    else:
        identity = _find_by_name(descriptor, method_name, policy)
    logger.debug("Resolved %s%r to %s", method_name, wanted, identity)
    return identity


def _find_exact(
    descriptor: TypeDescriptor, method_name: str, wanted: tuple[object, ...]
) -> MethodIdentity:
    for level in descriptor.hierarchy():
        for method in level.declared(method_name):
            if method.parameter_types == wanted:
                return method
    raise MethodNotFoundError(descriptor.name, method_name, wanted)


def _find_by_name(
    descriptor: TypeDescriptor, method_name: str, policy: AmbiguityPolicy
) -> MethodIdentity:
    for level in descriptor.hierarchy():
        variants = level.declared(method_name)
        if variants:
            return _pick_overload(descriptor, method_name, variants, policy)
    raise MethodNotFoundError(descriptor.name, method_name)


def _pick_overload(
    descriptor: TypeDescriptor,
    method_name: str,
    variants: tuple[MethodIdentity, ...],
    policy: AmbiguityPolicy,
) -> MethodIdentity:
    if len(variants) == 1 or policy is AmbiguityPolicy.FIRST_MATCH:
        return variants[0]
    if policy is AmbiguityPolicy.PREFER_NO_ARGS:
        for variant in variants:
            if not variant.parameter_types:
                return variant
    raise AmbiguousMethodError(descriptor.name, method_name, variants)


def candidates(
    descriptor: TypeDescriptor, method_name: str
) -> tuple[MethodIdentity, ...]:
    """Return every variant of *method_name* in search order.

    A variant whose parameter types repeat one found earlier is an override
    and is left out.
    """
    found: list[MethodIdentity] = []
    signatures: list[tuple[object, ...]] = []
    for level in descriptor.hierarchy():
        for method in level.declared(method_name):
            if method.parameter_types in signatures:
                continue
            signatures.append(method.parameter_types)
            found.append(method)
    return tuple(found)


# ----------------------------------------------------------------------
# Call-time overload selection
# ----------------------------------------------------------------------
def select_overload(
    variants: t.Sequence[MethodIdentity],
    args: t.Sequence[object],
    kwargs: t.Mapping[str, object],
) -> tuple[MethodIdentity, ArgumentTuple]:
    """Return the first variant accepting the runtime arguments.

    A variant accepts a call when the arguments bind to its signature and
    every value is compatible with its parameter annotation.
    """
    for identity in variants:
        try:
            arguments = identity.bind(args, kwargs)
        except TypeError:
            continue
        if _arguments_accepted(identity, arguments):
            return identity, arguments
    name = variants[0].name if variants else "<unknown>"
    msg = f"no overload of {name}() accepts args={tuple(args)!r} kwargs={dict(kwargs)!r}"
    raise TypeError(msg)


def _arguments_accepted(identity: MethodIdentity, arguments: ArgumentTuple) -> bool:
    sig = t.cast("inspect.Signature", identity.signature)
    for param, value in zip(sig.parameters.values(), arguments, strict=True):
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            values: t.Iterable[object] = t.cast("tuple[object, ...]", value)
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            values = t.cast("dict[str, object]", value).values()
        else:
            values = (value,)
        if not all(accepts(param.annotation, v) for v in values):
            return False
    return True


def accepts(annotation: object, value: object) -> bool:
    """Return ``True`` when *value* is compatible with *annotation*.

    Unresolved (string) annotations, ``Any`` and missing annotations accept
    everything, as do annotations that cannot be checked at runtime.
    """
    if (
        annotation is inspect.Parameter.empty
        or annotation is t.Any
        or isinstance(annotation, str)
    ):
        return True
    if annotation is None or annotation is type(None):
        return value is None
    origin = t.get_origin(annotation)
    if origin is t.Union or origin is types.UnionType:
        return any(accepts(arg, value) for arg in t.get_args(annotation))
    if origin is t.Literal:
        return value in t.get_args(annotation)
    if origin is not None:
        annotation = origin
    if annotation is float:
        return isinstance(value, (int, float))
    if annotation is complex:
        return isinstance(value, (int, float, complex))
    if isinstance(annotation, type):
        try:
            return isinstance(value, annotation)
        except TypeError:
            # Protocols that are not runtime checkable.
            return True
    return True


__all__ = [
    "AmbiguityPolicy",
    "accepts",
    "candidates",
    "resolve",
    "select_overload",
]
