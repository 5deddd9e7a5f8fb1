"""VerifyPayment: settle a pending order from the gateway's payment callback.

The handler runs in a single unit of work, so the order update, the stock
decrements and the order-history append commit together or not at all.
An order settles once: verifying it again is rejected because its payment is
no longer pending.

A signature mismatch is not an exception here. The order is cancelled and the
cancellation is committed; the result tells the caller to report the failure.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.errors import Forbidden, NotFound
from storefront.identity.user.user import User
from storefront.ordering.order import Order
from storefront.payments.signature import verify_payment_signature
from storefront.settings import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    order_id: str
    verified: bool


@storefront.command(part_of="Order")
class VerifyPayment:
    order_id = Identifier(required=True)
    buyer_id = String(required=True, max_length=255)
    gateway_order_id = String(required=True, max_length=255)
    gateway_payment_id = String(required=True, max_length=255)
    gateway_signature = String(required=True, max_length=255)


@storefront.command_handler(part_of=Order)
class VerifyPaymentHandler:
    @handle(VerifyPayment)
    def verify_payment(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found.")

        if order.buyer_id != command.buyer_id:
            raise Forbidden("You are not allowed to verify payment for this order.")

        verified = order.payment.gateway_order_id == command.gateway_order_id and verify_payment_signature(
            get_settings().payment_secret,
            command.gateway_order_id,
            command.gateway_payment_id,
            command.gateway_signature,
        )

        if not verified:
            order.reject_payment()
            repo.add(order)
            logger.warning("payment_signature_rejected", order_id=str(order.id))
            return VerificationResult(order_id=str(order.id), verified=False)

        order.confirm_payment(command.gateway_payment_id, command.gateway_signature)
        repo.add(order)

        self._take_stock(order)
        self._record_history(order)

        logger.info("payment_verified", order_id=str(order.id), order_code=order.order_code)
        return VerificationResult(order_id=str(order.id), verified=True)

    def _take_stock(self, order: Order) -> None:
        # Variants of one product share its stock
        quantities: dict[str, int] = {}
        for item in order.items:
            quantities[str(item.product_id)] = quantities.get(str(item.product_id), 0) + item.quantity

        product_repo = current_domain.repository_for(Product)
        for product_id, quantity in quantities.items():
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("stock_product_missing", order_id=str(order.id), product_id=product_id)
                continue
            product.decrement_stock(quantity)
            product_repo.add(product)

    def _record_history(self, order: Order) -> None:
        user_repo = current_domain.repository_for(User)
        user = user_repo.find_by_external_id(order.buyer_id)
        if user is None:
            logger.warning("order_history_user_missing", order_id=str(order.id), buyer_id=order.buyer_id)
            return
        user.record_order(str(order.id))
        user_repo.add(user)
