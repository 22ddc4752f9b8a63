"""Step definitions for TypeMock behavioural tests."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import typing as t

from behave import given, then, when  # type: ignore[attr-defined]

from type_mox.errors import (
    AmbiguousMethodError,
    MethodNotFoundError,
    MethodResolutionError,
)
from type_mox.proxy import mock_type
from type_mox.unittests._sample_types import Counter, FileStream

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from type_mox.registry import TypeMock

MOCKABLE_TYPES: dict[str, type] = {"Counter": Counter, "FileStream": FileStream}


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    mock: TypeMock[t.Any]
    results: list[object]
    resolution_error: MethodResolutionError | None


@given('a mock of the "{type_name}" type')
def step_create_mock(context: BehaveContext, type_name: str) -> None:
    """Create a bound mock of one of the sample types."""
    context.mock = mock_type(MOCKABLE_TYPES[type_name])
    context.results = []
    context.resolution_error = None


@given('the method "{name}" returns "{value}"')
def step_stub_return(context: BehaveContext, name: str, value: str) -> None:
    """Install a constant return value."""
    context.mock.set_return_value(value, name)


@when('"{name}" is called {count:d} times without arguments')
def step_call_without_arguments(context: BehaveContext, name: str, count: int) -> None:
    """Call *name* on the stub *count* times, keeping the results."""
    method = getattr(context.mock.mocked, name)
    context.results.extend(method() for _ in range(count))


@when('"{name}" is called with {value:d}')
def step_call_with_int(context: BehaveContext, name: str, value: int) -> None:
    """Call *name* on the stub with one integer."""
    getattr(context.mock.mocked, name)(value)


@when('the captured calls of "{name}" are cleared')
def step_clear_captured(context: BehaveContext, name: str) -> None:
    """Forget the captured calls of *name*."""
    context.mock.clear_captured(name)


@when('I try to stub the method "{name}"')
def step_try_stub(context: BehaveContext, name: str) -> None:
    """Attempt to stub *name*, keeping the resolution error."""
    try:
        context.mock.set_return_value("unused", name)
    except MethodResolutionError as err:
        context.resolution_error = err


@then('the method "{name}" was captured {count:d} times')
def step_check_capture_count(context: BehaveContext, name: str, count: int) -> None:
    """Check the no-type lookup of *name* captured *count* calls."""
    assert len(context.mock.all_captured_arguments(name)) == count  # noqa: S101


@then('the method "{name}" taking int was captured {count:d} times')
def step_check_int_capture_count(
    context: BehaveContext, name: str, count: int
) -> None:
    """Check the ``(int)`` overload of *name* captured *count* calls."""
    assert len(context.mock.all_captured_arguments(name, int)) == count  # noqa: S101


@then('the method "{name}" taking int last received {value:d}')
def step_check_int_last_arguments(
    context: BehaveContext, name: str, value: int
) -> None:
    """Check the latest arguments of the ``(int)`` overload."""
    assert context.mock.last_captured_arguments(name, int) == (value,)  # noqa: S101


@then('the no-argument results were "{expected}"')
def step_check_results(context: BehaveContext, expected: str) -> None:
    """Compare the collected results with a comma separated list."""
    actual = ",".join(str(result) for result in context.results)
    assert actual == expected  # noqa: S101


@then('resolution fails naming "{name}"')
def step_check_not_found(context: BehaveContext, name: str) -> None:
    """The error is a not-found error that names the method."""
    err = context.resolution_error
    assert isinstance(err, MethodNotFoundError)  # noqa: S101
    assert err.method_name == name  # noqa: S101


@then("resolution fails as ambiguous")
def step_check_ambiguous(context: BehaveContext) -> None:
    """The error reports an ambiguous overloaded name."""
    assert isinstance(context.resolution_error, AmbiguousMethodError)  # noqa: S101
