"""PlaceOrder: open a pending order and the gateway order the buyer pays against.

The order is validated before the gateway is contacted, and nothing is
persisted unless the gateway hands back an order handle. The buyer's mirrored
user record is created on the way if the identity webhook has not arrived.
"""

import json
import time
from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.errors import UpstreamError
from storefront.identity.session import Identity
from storefront.identity.user.reconciliation import ensure_user
from storefront.identity.user.user import User
from storefront.ordering.order import Order, PaymentMethod, to_minor_units
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import GatewayOrderResult
from storefront.settings import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    gateway_order: GatewayOrderResult


@storefront.command(part_of="Order")
class PlaceOrder:
    # Session identity of the buyer
    buyer_id = String(required=True, max_length=255)
    account_email = String(max_length=254)
    account_first_name = String(max_length=100)
    account_last_name = String(max_length=100)
    account_image_url = String(max_length=1000)

    # Cart snapshot and the pricing the buyer confirmed
    items = Text(required=True)  # JSON: [{product_id, name, image, unit_price, quantity, variant}]
    subtotal = Float(required=True)
    shipping = Float(default=0.0)
    total = Float(required=True)

    # Checkout form
    first_name = String(required=True, max_length=100)
    last_name = String(max_length=100)
    email = String(required=True, max_length=254)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    payment_method = String(required=True, max_length=30)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            PaymentMethod(command.payment_method)
        except ValueError:
            raise ValidationError({"payment_method": [f"Unsupported payment method: {command.payment_method}"]})

        order = Order.place(
            buyer_id=command.buyer_id,
            buyer_email=command.email,
            buyer_name=f"{command.first_name} {command.last_name or ''}".strip(),
            items=json.loads(command.items),
            shipping_address={
                "address": command.address,
                "city": command.city,
                "state": command.state,
                "zip_code": command.zip_code,
                "country": command.country,
            },
            subtotal=command.subtotal,
            shipping=command.shipping,
            total=command.total,
            payment_method=command.payment_method,
        )

        amount = to_minor_units(order.payable_amount)
        gateway_order = get_gateway().create_order(
            amount=amount,
            currency=get_settings().payment_currency,
            receipt=f"receipt_order_{int(time.time() * 1000)}",
        )
        if not gateway_order.success:
            logger.error(
                "gateway_order_failed",
                order_code=order.order_code,
                amount=amount,
                reason=gateway_order.failure_reason,
            )
            raise UpstreamError("Failed to create payment gateway order.")

        order.open_payment(gateway_order.gateway_order_id)
        current_domain.repository_for(Order).add(order)

        user = ensure_user(
            Identity(
                subject=command.buyer_id,
                email=command.account_email or command.email,
                first_name=command.account_first_name,
                last_name=command.account_last_name,
                image_url=command.account_image_url,
            )
        )
        user.record_order(str(order.id))
        current_domain.repository_for(User).add(user)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_code=order.order_code,
            payment_method=command.payment_method,
            amount=amount,
        )
        return PlacedOrder(order=order, gateway_order=gateway_order)
