"""Behavioural tests for TypeMock using pytest-bdd."""

from __future__ import annotations

import typing as t
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from type_mox.errors import (
    AmbiguousMethodError,
    MethodNotFoundError,
    MethodResolutionError,
)
from type_mox.proxy import mock_type
from type_mox.unittests._sample_types import Counter, FileStream

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from type_mox.registry import TypeMock


FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"

MOCKABLE_TYPES: dict[str, type] = {"Counter": Counter, "FileStream": FileStream}


@pytest.fixture
def results() -> list[object]:
    """Collect the results of calls made without arguments."""
    return []


@given(parsers.cfparse('a mock of the "{type_name}" type'), target_fixture="mock")
def create_mock(type_name: str) -> TypeMock[t.Any]:
    """Create a bound mock of one of the sample types."""
    return mock_type(MOCKABLE_TYPES[type_name])


@given(parsers.cfparse('the method "{name}" returns "{value}"'))
def stub_return(mock: TypeMock[t.Any], name: str, value: str) -> None:
    """Install a constant return value."""
    mock.set_return_value(value, name)


@when(parsers.cfparse('"{name}" is called {count:d} times without arguments'))
def call_without_arguments(
    mock: TypeMock[t.Any], results: list[object], name: str, count: int
) -> None:
    """Call *name* on the stub *count* times, keeping the results."""
    method = getattr(mock.mocked, name)
    results.extend(method() for _ in range(count))


@when(parsers.cfparse('"{name}" is called with {value:d}'))
def call_with_int(mock: TypeMock[t.Any], name: str, value: int) -> None:
    """Call *name* on the stub with one integer."""
    getattr(mock.mocked, name)(value)


@when(parsers.cfparse('the captured calls of "{name}" are cleared'))
def clear_captured(mock: TypeMock[t.Any], name: str) -> None:
    """Forget the captured calls of *name*."""
    mock.clear_captured(name)


@when(
    parsers.cfparse('I try to stub the method "{name}"'),
    target_fixture="resolution_error",
)
def try_stub(mock: TypeMock[t.Any], name: str) -> MethodResolutionError:
    """Attempt to stub *name* and return the resolution error."""
    with pytest.raises(MethodResolutionError) as excinfo:
        mock.set_return_value("unused", name)
    return excinfo.value


@then(parsers.cfparse('the method "{name}" was captured {count:d} times'))
def check_capture_count(mock: TypeMock[t.Any], name: str, count: int) -> None:
    """Check the no-type lookup of *name* captured *count* calls."""
    assert len(mock.all_captured_arguments(name)) == count


@then(parsers.cfparse('the method "{name}" taking int was captured {count:d} times'))
def check_int_capture_count(mock: TypeMock[t.Any], name: str, count: int) -> None:
    """Check the ``(int)`` overload of *name* captured *count* calls."""
    assert len(mock.all_captured_arguments(name, int)) == count


@then(parsers.cfparse('the method "{name}" taking int last received {value:d}'))
def check_int_last_arguments(mock: TypeMock[t.Any], name: str, value: int) -> None:
    """Check the latest arguments of the ``(int)`` overload."""
    assert mock.last_captured_arguments(name, int) == (value,)


@then(parsers.cfparse('the no-argument results were "{expected}"'))
def check_results(results: list[object], expected: str) -> None:
    """Compare the collected results with a comma separated list."""
    assert ",".join(str(result) for result in results) == expected


@then(parsers.cfparse('resolution fails naming "{name}"'))
def check_not_found(resolution_error: MethodResolutionError, name: str) -> None:
    """The error is a not-found error that names the method."""
    assert isinstance(resolution_error, MethodNotFoundError)
    assert resolution_error.method_name == name
    assert name in str(resolution_error)


@then("resolution fails as ambiguous")
def check_ambiguous(resolution_error: MethodResolutionError) -> None:
    """The error reports an ambiguous overloaded name."""
    assert isinstance(resolution_error, AmbiguousMethodError)
    assert len(resolution_error.candidates) > 1


@scenario(
    str(FEATURES_DIR / "type_mox.feature"),
    "stubbed overload returns its value and captures calls",
)
def test_stubbed_overload() -> None:
    """Stubbed overloads answer and capture independently."""
    pass


@scenario(str(FEATURES_DIR / "type_mox.feature"), "unstubbed method is still captured")
def test_unstubbed_capture() -> None:
    """Calls without behavior are captured and return ``None``."""
    pass


@scenario(
    str(FEATURES_DIR / "type_mox.feature"), "clearing captures keeps the behavior"
)
def test_clearing_keeps_behavior() -> None:
    """Clearing captures leaves the installed behavior in place."""
    pass


@scenario(str(FEATURES_DIR / "type_mox.feature"), "unknown method is reported")
def test_unknown_method() -> None:
    """Stubbing an unknown method fails immediately."""
    pass


@scenario(
    str(FEATURES_DIR / "type_mox.feature"),
    "overloaded name without argument types is ambiguous",
)
def test_ambiguous_method() -> None:
    """Overloaded names need argument types under the default policy."""
    pass
