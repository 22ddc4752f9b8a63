"""Unit tests for the field helpers."""

from __future__ import annotations

import pytest

from type_mox.errors import FieldNotFoundError
from type_mox.fields import get_field_value, mock_field, temporary_field
from type_mox.unittests._sample_types import (
    Account,
    Slotted,
    SlottedChild,
    Thermostat,
)


def test_get_field_value_reads_public_private_and_mangled_fields() -> None:
    """Fields are found by their spelled name, including ``__`` names."""
    account = Account()

    assert get_field_value(account, "balance", int) == 5
    assert get_field_value(account, "_owner") == "alice"
    assert get_field_value(account, "__pin", int) == 1234


def test_get_field_value_checks_expected_type() -> None:
    """A value of the wrong type raises ``TypeError``."""
    with pytest.raises(TypeError, match="holds int, expected str"):
        get_field_value(Account(), "balance", str)


def test_missing_fields_raise() -> None:
    """Unknown fields raise ``FieldNotFoundError``, an ``AttributeError``."""
    account = Account()

    with pytest.raises(FieldNotFoundError, match="no field 'missing'"):
        get_field_value(account, "missing")
    with pytest.raises(AttributeError):
        mock_field(account, "__missing", 1)


def test_mock_field_overwrites_value() -> None:
    """``mock_field`` replaces private and mangled fields."""
    account = Account()

    mock_field(account, "balance", 2)
    mock_field(account, "__pin", 0)

    assert account.balance == 2
    assert account._Account__pin == 0  # type: ignore[attr-defined]


def test_temporary_field_restores_instance_value() -> None:
    """The original value comes back after the block, even on error."""
    account = Account()

    with pytest.raises(RuntimeError), temporary_field(account, "balance", 99):
        assert account.balance == 99
        raise RuntimeError

    assert account.balance == 5


def test_temporary_field_removes_class_attribute_override() -> None:
    """Overriding a class attribute leaves no instance attribute behind."""
    account = Account()

    with temporary_field(account, "kind", "checking"):
        assert account.kind == "checking"

    assert account.kind == "savings"
    assert "kind" not in vars(account)


def test_temporary_field_on_slotted_object() -> None:
    """Slot-backed fields are restored by value."""
    slotted = Slotted()

    with temporary_field(slotted, "value", 2):
        assert slotted.value == 2

    assert slotted.value == 1


def test_temporary_field_keeps_inherited_slot_value() -> None:
    """A slot inherited by a class with a ``__dict__`` is restored, not deleted."""
    child = SlottedChild()

    with temporary_field(child, "value", 2):
        assert child.value == 2

    assert child.value == 1
    assert "value" not in vars(child)


def test_temporary_field_restores_property_without_deleter() -> None:
    """Property-backed fields are restored through the setter."""
    thermostat = Thermostat()

    with pytest.raises(RuntimeError), temporary_field(thermostat, "celsius", 30):
        assert thermostat.celsius == 30
        raise RuntimeError

    assert thermostat.celsius == 20
