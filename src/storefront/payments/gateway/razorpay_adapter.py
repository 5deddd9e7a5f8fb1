"""Razorpay payment gateway adapter.

Opens orders through the razorpay SDK client. Payment collection happens in
the browser; the server only opens orders here.
"""

import razorpay
import requests
import structlog
from razorpay.errors import BadRequestError, GatewayError, ServerError

from storefront.payments.gateway.port import GatewayOrderResult, PaymentGateway

logger = structlog.get_logger(__name__)


class RazorpayGateway(PaymentGateway):
    def __init__(self, key_id: str, key_secret: str, client: razorpay.Client | None = None) -> None:
        self.key_id = key_id
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrderResult:
        try:
            body = self.client.order.create(data={"amount": amount, "currency": currency, "receipt": receipt})
        except (BadRequestError, GatewayError, ServerError, requests.RequestException) as exc:
            logger.error("gateway_order_failed", receipt=receipt, error=str(exc))
            return GatewayOrderResult(success=False, gateway_status="failed", failure_reason=str(exc))

        return GatewayOrderResult(
            success=True,
            gateway_order_id=body["id"],
            amount=body.get("amount", amount),
            currency=body.get("currency", currency),
            receipt=body.get("receipt", receipt),
            gateway_status=body.get("status"),
        )
