"""Mock registry binding a type descriptor, a ledger and a stub instance."""

from __future__ import annotations

import logging
import typing as t

from .behaviors import Implementation, RaiseError, ReturnValue, as_behavior
from .descriptors import TypeDescriptor, describe
from .errors import LifecycleError
from .ledger import InvocationLedger
from .resolver import AmbiguityPolicy, resolve

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .behaviors import Behavior
    from .descriptors import ArgumentTuple, MethodIdentity

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


class TypeMock(t.Generic[T]):
    """Registry of stubbed behavior and captured calls for one mocked type.

    Methods are addressed by name plus, for overloaded names, the ordered
    parameter types. Leaving the types out looks the name up on its own;
    see :func:`type_mox.resolver.resolve` for how overloads are handled.
    """

    def __init__(
        self,
        mocked_type: type[T] | TypeDescriptor,
        *,
        ambiguity: AmbiguityPolicy | str = AmbiguityPolicy.PREFER_NO_ARGS,
    ) -> None:
        """Create a registry with empty tables and no stub bound.

        Parameters
        ----------
        mocked_type:
            The class to mock, or an explicit :class:`TypeDescriptor`.
        ambiguity:
            Policy applied when an overloaded name is used without argument
            types.
        """
        if isinstance(mocked_type, TypeDescriptor):
            self._descriptor = mocked_type
        else:
            self._descriptor = describe(mocked_type)
        self._ambiguity = AmbiguityPolicy(ambiguity)
        self.ledger = InvocationLedger()
        self._mocked: T | None = None
        self._bound = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def descriptor(self) -> TypeDescriptor:
        """Return the descriptor of the mocked type."""
        return self._descriptor

    @property
    def ambiguity(self) -> AmbiguityPolicy:
        """Return the overload policy used for name-only lookups."""
        return self._ambiguity

    @property
    def is_bound(self) -> bool:
        """Return ``True`` once a stub instance has been bound."""
        return self._bound

    @property
    def mocked(self) -> T:
        """Return the stub instance standing in for the mocked type."""
        if not self._bound:
            msg = f"No stub instance bound for {self._descriptor.name}"
            raise LifecycleError(msg)
        return t.cast("T", self._mocked)

    def bind(self, instance: T) -> None:
        """Register the stub *instance*; allowed exactly once."""
        if self._bound:
            msg = f"A stub instance is already bound for {self._descriptor.name}"
            raise LifecycleError(msg)
        self._mocked = instance
        self._bound = True

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, method_name: str, *argument_types: object) -> MethodIdentity:
        """Return the identity of *method_name* in the mocked type."""
        return resolve(
            self._descriptor,
            method_name,
            argument_types,
            ambiguity=self._ambiguity,
        )

    def method(self, method_name: str, *argument_types: object) -> MethodDouble:
        """Return a :class:`MethodDouble` for one resolved method."""
        return MethodDouble(self, self.resolve(method_name, *argument_types))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_return_value(
        self, value: object, method_name: str, *argument_types: object
    ) -> None:
        """Make the method return *value*. Unstubbed methods return ``None``."""
        self.ledger.install_constant_return(
            self.resolve(method_name, *argument_types), value
        )

    def set_mock_implementation(
        self, behavior: Behavior, method_name: str, *argument_types: object
    ) -> None:
        """Compute the method's result with ``behavior(arguments)``."""
        self.ledger.install_behavior(
            self.resolve(method_name, *argument_types), behavior
        )

    def set_side_effect(
        self,
        error: BaseException | type[BaseException],
        method_name: str,
        *argument_types: object,
    ) -> None:
        """Make the method raise *error*."""
        self.ledger.install_behavior(
            self.resolve(method_name, *argument_types), RaiseError(error)
        )

    # ------------------------------------------------------------------
    # Interception
    # ------------------------------------------------------------------
    def intercept(self, identity: MethodIdentity, arguments: ArgumentTuple) -> object:
        """Entry point for the stub: capture the call and return its result."""
        return self.ledger.intercept(identity, arguments)

    # ------------------------------------------------------------------
    # Captured calls
    # ------------------------------------------------------------------
    def last_captured_arguments(
        self, method_name: str, *argument_types: object
    ) -> ArgumentTuple | None:
        """Return the latest call's arguments, or ``None`` if never called."""
        return self.ledger.last_captured_arguments(
            self.resolve(method_name, *argument_types)
        )

    def all_captured_arguments(
        self, method_name: str, *argument_types: object
    ) -> list[ArgumentTuple]:
        """Return every call's arguments, oldest first."""
        return self.ledger.all_captured_arguments(
            self.resolve(method_name, *argument_types)
        )

    def call_count(self, method_name: str, *argument_types: object) -> int:
        """Return how many times the method was called."""
        return self.ledger.call_count(self.resolve(method_name, *argument_types))

    def clear_captured(self, method_name: str, *argument_types: object) -> None:
        """Forget the method's captured calls."""
        self.ledger.clear_captured(self.resolve(method_name, *argument_types))

    def clear_all_captured(self) -> None:
        """Forget every captured call."""
        self.ledger.clear_all_captured()

    def reset(self) -> None:
        """Drop every behavior and captured call; the stub stays bound."""
        self.ledger.reset()
        logger.debug("Reset mock for %s", self._descriptor.name)

    def __repr__(self) -> str:
        """Return a debug representation."""
        state = "bound" if self._bound else "unbound"
        return f"TypeMock({self._descriptor.name!r}, {state})"


class MethodDouble:
    """Fluent handle over one method of a :class:`TypeMock`."""

    def __init__(self, registry: TypeMock[t.Any], identity: MethodIdentity) -> None:
        self.registry = registry
        self.identity = identity

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def returns(self, value: object) -> MethodDouble:
        """Return *value* on every call."""
        self.registry.ledger.install_behavior(self.identity, ReturnValue(value))
        return self

    def runs(self, behavior: Behavior | object) -> MethodDouble:
        """Compute results with ``behavior(arguments)``.

        A non-callable *behavior* is returned as a constant.
        """
        self.registry.ledger.install_behavior(self.identity, as_behavior(behavior))
        return self

    def calls(self, func: t.Callable[..., object]) -> MethodDouble:
        """Compute results with ``func(*arguments)``."""
        self.registry.ledger.install_behavior(self.identity, Implementation(func))
        return self

    def raises(self, error: BaseException | type[BaseException]) -> MethodDouble:
        """Raise *error* on every call."""
        self.registry.ledger.install_behavior(self.identity, RaiseError(error))
        return self

    def reset_behavior(self) -> MethodDouble:
        """Remove the behavior so calls return ``None`` again."""
        self.registry.ledger.remove_behavior(self.identity)
        return self

    def clear(self) -> MethodDouble:
        """Forget the captured calls."""
        self.registry.ledger.clear_captured(self.identity)
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def captured(self) -> list[ArgumentTuple]:
        """Return a copy of every captured argument tuple."""
        return self.registry.ledger.all_captured_arguments(self.identity)

    @property
    def last_arguments(self) -> ArgumentTuple | None:
        """Return the latest captured arguments."""
        return self.registry.ledger.last_captured_arguments(self.identity)

    @property
    def call_count(self) -> int:
        """Return the number of captured calls."""
        return self.registry.ledger.call_count(self.identity)

    @property
    def called(self) -> bool:
        """Return ``True`` if the method was called at least once."""
        return self.call_count > 0

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------
    def assert_called(self) -> None:
        """Raise ``AssertionError`` if the method was never called."""
        self._get_last_arguments()

    def assert_not_called(self) -> None:
        """Raise ``AssertionError`` if the method was called."""
        count = self.call_count
        if count:
            msg = (
                f"Expected {str(self.identity)!r} to be uncalled but it was called "
                f"{count} time(s); last args={self.last_arguments!r}"
            )
            raise AssertionError(msg)

    def assert_called_with(self, *args: object) -> None:
        """Check the latest call's full argument tuple equals *args*."""
        self._validate_arguments(self._get_last_arguments(), args)

    def assert_called_once_with(self, *args: object) -> None:
        """Check the method was called exactly once, with *args*."""
        count = self.call_count
        if count != 1:
            msg = (
                f"Expected {str(self.identity)!r} to be called once but it was "
                f"called {count} time(s)"
            )
            raise AssertionError(msg)
        self.assert_called_with(*args)

    def _get_last_arguments(self) -> ArgumentTuple:
        last = self.last_arguments
        if last is None:
            msg = f"Expected {str(self.identity)!r} to be called but it was never called"
            raise AssertionError(msg)
        return last

    def _validate_arguments(
        self, actual: ArgumentTuple, expected: tuple[object, ...]
    ) -> None:
        if actual != expected:
            msg = f"{str(self.identity)!r} called with args {actual!r}, expected {expected!r}"
            raise AssertionError(msg)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"MethodDouble({str(self.identity)!r})"


__all__ = ["MethodDouble", "TypeMock"]
