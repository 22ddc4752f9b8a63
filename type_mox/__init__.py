"""Python-native test doubles for classes, with per-method stubbing and capture.

A :class:`TypeMock` resolves method names (and, for overloads, argument
types) against the mocked class hierarchy, stores one behavior per method and
records the arguments of every call made on its stub instance.
"""

from __future__ import annotations

from .behaviors import Behavior, Implementation, RaiseError, ReturnValue, as_behavior
from .descriptors import MethodIdentity, TypeDescriptor, describe
from .errors import (
    AmbiguousMethodError,
    FieldNotFoundError,
    LifecycleError,
    MethodNotFoundError,
    MethodResolutionError,
    TypeMoxError,
)
from .fields import get_field_value, mock_field, temporary_field
from .ledger import InvocationLedger
from .proxy import build_stub, mock_type
from .registry import MethodDouble, TypeMock
from .resolver import AmbiguityPolicy, resolve

__all__ = [
    "AmbiguityPolicy",
    "AmbiguousMethodError",
    "Behavior",
    "FieldNotFoundError",
    "Implementation",
    "InvocationLedger",
    "LifecycleError",
    "MethodDouble",
    "MethodIdentity",
    "MethodNotFoundError",
    "MethodResolutionError",
    "RaiseError",
    "ReturnValue",
    "TypeDescriptor",
    "TypeMock",
    "TypeMoxError",
    "as_behavior",
    "build_stub",
    "describe",
    "get_field_value",
    "mock_field",
    "mock_type",
    "resolve",
    "temporary_field",
]
