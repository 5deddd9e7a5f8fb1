"""Payment gateway port (abstract interface).

Checkout asks the gateway for an order handle before the buyer pays. The
browser collects the payment against that handle and the gateway signs the
outcome, which the storefront verifies with ``storefront.payments.signature``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GatewayOrderResult:
    """Result of asking the gateway for an order handle."""

    success: bool
    gateway_order_id: str | None = None
    amount: int | None = None  # minor currency units
    currency: str | None = None
    receipt: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None

    def as_handle(self) -> dict:
        """The fields the browser's checkout widget needs."""
        return {
            "id": self.gateway_order_id,
            "amount": self.amount,
            "currency": self.currency,
            "receipt": self.receipt,
            "status": self.gateway_status,
        }


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrderResult:
        """Open a gateway order for ``amount`` minor units."""
        ...
