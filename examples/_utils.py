"""Shared code under test for the runnable examples."""

from __future__ import annotations

import typing as t


class PaymentGateway(t.Protocol):
    """Remote payment service the examples replace with a mock."""

    def charge(self, account: str, cents: int) -> str: ...

    @t.overload
    def refund(self, transaction: str) -> bool: ...

    @t.overload
    def refund(self, transaction: str, cents: int) -> bool: ...

    def refund(self, transaction: str, cents: int | None = None) -> bool: ...


class Checkout:
    """Small service that talks to a :class:`PaymentGateway`."""

    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    def pay(self, account: str, cents: int) -> str:
        """Charge *account* and return the transaction id."""
        return self.gateway.charge(account, cents)

    def cancel(self, transaction: str) -> bool:
        """Refund *transaction* in full."""
        return self.gateway.refund(transaction)
