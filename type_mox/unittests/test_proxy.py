"""Unit tests for stub construction and call dispatch."""

from __future__ import annotations

import pytest

from type_mox.descriptors import TypeDescriptor, qualified_name
from type_mox.proxy import build_stub, mock_type
from type_mox.registry import TypeMock
from type_mox.unittests._sample_types import (
    BaseStream,
    Closeable,
    Counter,
    FileStream,
    Readable,
    Shouter,
)


def test_stub_is_an_instance_of_the_mocked_type() -> None:
    """The stub subclasses the mocked class, so ``isinstance`` holds."""
    stub = mock_type(FileStream).mocked

    assert isinstance(stub, FileStream)
    assert isinstance(stub, BaseStream)
    assert isinstance(stub, Closeable)
    assert type(stub).__name__ == "FileStreamMock"
    assert repr(stub) == f"<FileStreamMock stub for {qualified_name(FileStream)}>"


def test_mocked_init_is_not_run() -> None:
    """Building the stub never calls the real constructor."""
    FileStream.created = False

    mock_type(FileStream)

    assert FileStream.created is False


def test_abstract_and_protocol_types_can_be_mocked() -> None:
    """Stubs of ABCs and protocols are instantiable."""
    closeable = mock_type(Closeable)
    readable = mock_type(Readable)

    closeable.mocked.abort("stop")
    readable.set_return_value(b"line", "readline")

    assert closeable.last_captured_arguments("abort") == ("stop",)
    assert readable.mocked.readline() == b"line"


def test_inherited_and_interface_methods_are_dispatched() -> None:
    """Methods from superclasses and interfaces are all intercepted."""
    mock = mock_type(FileStream)
    mock.set_return_value("stubbed", "describe")
    stream = mock.mocked

    assert stream.describe() == "stubbed"
    assert stream.flush() is None
    assert stream.readline() is None
    assert mock.call_count("flush") == 1
    assert mock.call_count("readline") == 1


def test_overloads_are_selected_from_runtime_arguments() -> None:
    """``write(bytes)`` and ``write(str, str)`` are told apart at call time."""
    mock = mock_type(FileStream)
    mock.set_return_value(1, "write", bytes)
    mock.set_return_value(2, "write", str, str)
    stream = mock.mocked

    assert stream.write(b"x") == 1
    assert stream.write("x", encoding="ascii") == 2
    assert mock.all_captured_arguments("write", bytes) == [(b"x",)]
    assert mock.all_captured_arguments("write", str, str) == [("x", "ascii")]


def test_calls_no_overload_accepts_raise_type_error() -> None:
    """A call that fits no declared signature fails like a real bad call."""
    mock = mock_type(FileStream)

    with pytest.raises(TypeError, match="no overload of write"):
        mock.mocked.write("missing encoding")
    with pytest.raises(TypeError):
        mock.mocked.read()
    assert mock.call_count("read", int) == 0


def test_shadowed_name_falls_back_to_inherited_signature() -> None:
    """Arguments the subclass rejects may match the inherited declaration."""
    mock = mock_type(Shouter)
    shouter = mock.mocked

    shouter.write("hey")
    shouter.write(b"raw")

    assert mock.all_captured_arguments("write") == [("hey", 1)]
    assert mock.all_captured_arguments("write", bytes) == [(b"raw",)]


def test_call_dunder_and_variadics_are_captured() -> None:
    """``__call__`` is stubbed and variadic parameters are captured whole."""
    mock = mock_type(Shouter)
    mock.method("__call__").calls(lambda message, rest, loud: message.upper())
    shouter = mock.mocked

    assert shouter("hi", 1, 2, loud=False) == "HI"
    assert mock.last_captured_arguments("__call__") == ("hi", (1, 2), False)


def test_declared_table_stub() -> None:
    """Descriptors without a Python type get a plain stub class."""
    descriptor = TypeDescriptor.declare("pkg.Service", {"fetch": [(str,), (str, int)]})
    mock = mock_type(descriptor)
    mock.set_return_value("page", "fetch", str, int)
    service = mock.mocked

    assert type(service).__name__ == "ServiceMock"
    assert service.fetch("url") is None
    assert service.fetch("url", 2) == "page"
    assert mock.all_captured_arguments("fetch", str) == [("url",)]


def test_build_stub_does_not_bind() -> None:
    """``build_stub`` leaves binding to the caller."""
    mock: TypeMock[Counter] = TypeMock(Counter)
    stub = build_stub(mock)

    assert not mock.is_bound
    stub.f()
    assert mock.call_count("f") == 1
    mock.bind(stub)
    assert mock.mocked is stub
