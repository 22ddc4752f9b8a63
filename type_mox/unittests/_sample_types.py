"""Classes with known hierarchies used across the unit tests."""

from __future__ import annotations

import abc
import typing as t


class Counter:
    """Declares ``f()`` and ``f(int)`` as overloads."""

    @t.overload
    def f(self) -> str: ...

    @t.overload
    def f(self, value: int) -> str: ...

    def f(self, value: int | None = None) -> str:
        return "real"


class Readable(t.Protocol):
    """Interface whose ``describe`` is also implemented by a superclass."""

    def read(self, size: int) -> bytes: ...

    def describe(self) -> str: ...

    def readline(self) -> bytes: ...


class Seekable(Readable, t.Protocol):
    """Interface extending :class:`Readable`."""

    def seek(self, offset: int, whence: int = 0) -> int: ...


class Closeable(abc.ABC):
    """Pure-abstract class, treated as an interface."""

    @abc.abstractmethod
    def close(self) -> None: ...

    @abc.abstractmethod
    def abort(self, reason: str) -> None: ...


class BaseStream:
    """Concrete superclass."""

    def describe(self) -> str:
        return "base stream"

    def flush(self) -> None:
        return None

    def write(self, data: bytes) -> int:
        return len(data)


class FileStream(BaseStream, Seekable, Closeable):
    """Concrete class mixing a superclass with two interfaces.

    ``abort`` and ``readline`` stay unimplemented, so the class is abstract.
    """

    created = False

    def __init__(self, path: str) -> None:
        type(self).created = True
        msg = "FileStream must not be constructed by tests"
        raise RuntimeError(msg)

    @t.overload
    def write(self, data: bytes) -> int: ...

    @t.overload
    def write(self, data: str, encoding: str) -> int: ...

    def write(self, data: bytes | str, encoding: str = "utf-8") -> int:
        return len(data)

    def read(self, size: int) -> bytes:
        return b""

    def seek(self, offset: int, whence: int = 0) -> int:
        return offset

    def close(self) -> None:
        return None

    @staticmethod
    def open_default() -> FileStream:
        return FileStream("default")

    @classmethod
    def from_path(cls, path: str) -> FileStream:
        return cls(path)

    @property
    def closed(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0


class Shouter(BaseStream):
    """Shadows ``write`` with a different signature and adds ``__call__``."""

    def write(self, data: str, times: int = 1) -> int:
        return len(data) * times

    def __call__(self, message, *rest, loud=True):  # noqa: ANN001, ANN002, ANN204
        return message

    def tally(self, *values: int, **labels: str) -> int:
        return sum(values)


class Account:
    """Holds public, private and name-mangled fields."""

    kind = "savings"

    def __init__(self) -> None:
        self.balance = 5
        self._owner = "alice"
        self.__pin = 1234


class Slotted:
    """Stores its field in a slot."""

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 1


class SlottedChild(Slotted):
    """Has a ``__dict__`` of its own while ``value`` stays in the base slot."""


class Thermostat:
    """Exposes its field through a property with a setter but no deleter."""

    def __init__(self) -> None:
        self._celsius = 20

    @property
    def celsius(self) -> int:
        return self._celsius

    @celsius.setter
    def celsius(self, value: int) -> None:
        self._celsius = value
