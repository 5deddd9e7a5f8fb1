"""Configurable fake payment gateway for development and testing.

Simulates the gateway's order endpoint without any external calls. It can be
configured at runtime to succeed or fail, and records every call so tests can
assert on the amounts that were requested.
"""

from uuid import uuid4

from storefront.payments.gateway.port import GatewayOrderResult, PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrderResult:
        self.calls.append(
            {
                "method": "create_order",
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
            }
        )

        if self.should_succeed:
            return GatewayOrderResult(
                success=True,
                gateway_order_id=f"order_{uuid4().hex[:14]}",
                amount=amount,
                currency=currency,
                receipt=receipt,
                gateway_status="created",
            )
        return GatewayOrderResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )
