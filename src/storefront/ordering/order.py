"""Order aggregate (CQRS): one purchase attempt.

An order is created pending while the buyer pays through the gateway, and is
settled exactly once by payment verification. Line items are snapshots of the
cart at checkout: later catalogue edits never reach them.

State Machine:
    pending → processing (signature verified)
    pending → cancelled (signature rejected)
    processing → shipped → delivered (declared, not driven by any flow yet)

Pricing is recorded as confirmed by the buyer. The total is not re-derived
from the line items.
"""

import json
import math
import secrets
import string
import time
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced, PaymentRejected, PaymentVerified
from storefront.shared.identity import object_id

_CODE_ALPHABET = string.digits + string.ascii_uppercase
CASH_ON_DELIVERY_ADVANCE = 0.25


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    FULL_ONLINE = "full-online"
    PARTIAL_CASH_ON_DELIVERY = "partial-cash-on-delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def generate_order_code() -> str:
    """Human-readable order code: ``ORD-<epoch millis>-<9 base-36 chars>``."""
    suffix = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


def payable_amount(total: float, payment_method: str) -> float:
    """What the buyer pays online now: everything, or the advance for cash on delivery."""
    if PaymentMethod(payment_method) == PaymentMethod.PARTIAL_CASH_ON_DELIVERY:
        return total * CASH_ON_DELIVERY_ADVANCE
    return total


def to_minor_units(amount: float) -> int:
    """Convert to minor currency units, rounding halves up."""
    return int(math.floor(amount * 100 + 0.5))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as typed by the buyer at checkout."""

    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.value_object(part_of="Order")
class OrderPricing:
    subtotal = Float(required=True, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0)
    total = Float(required=True, min_value=0.0)


@storefront.value_object(part_of="Order")
class PaymentDetails:
    """How the order is paid and the gateway ids that correlate it.

    The payment id and signature are only filled in by a successful
    verification.
    """

    method = String(required=True, choices=PaymentMethod)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    gateway_order_id = String(max_length=255)
    gateway_payment_id = String(max_length=255)
    gateway_signature = String(max_length=255)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A cart line frozen at checkout time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    image = String(max_length=1000)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    variant = String(max_length=100)

    def to_dict(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "image": self.image,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "variant": self.variant,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_code = String(required=True, max_length=40, unique=True)
    buyer_id = String(required=True, max_length=255)
    buyer_email = String(required=True, max_length=254)
    buyer_name = String(required=True, max_length=255)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    pricing = ValueObject(OrderPricing, required=True)
    payment = ValueObject(PaymentDetails, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        buyer_id,
        buyer_email,
        buyer_name,
        items,
        shipping_address,
        subtotal,
        shipping,
        total,
        payment_method,
    ):
        """Build a pending order from the checkout form and cart snapshot.

        ``items`` is a list of dicts with product_id, name, image,
        unit_price, quantity and variant.
        """
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        return cls(
            id=object_id(),
            order_code=generate_order_code(),
            buyer_id=buyer_id,
            buyer_email=buyer_email,
            buyer_name=buyer_name,
            items=[OrderItem(id=object_id(), **item) for item in items],
            shipping_address=ShippingAddress(**shipping_address),
            pricing=OrderPricing(subtotal=subtotal, shipping=shipping, tax=0.0, total=total),
            payment=PaymentDetails(method=payment_method, status=PaymentStatus.PENDING.value),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def payable_amount(self) -> float:
        return payable_amount(self.pricing.total, self.payment.method)

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _assert_payment_pending(self):
        if PaymentStatus(self.payment.status) != PaymentStatus.PENDING:
            raise ValidationError({"payment": ["Payment for this order has already been processed"]})

    def open_payment(self, gateway_order_id: str) -> None:
        """Attach the gateway order handle the buyer will pay against."""
        self._assert_payment_pending()
        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            method=self.payment.method,
            status=PaymentStatus.PENDING.value,
            gateway_order_id=gateway_order_id,
        )
        self.updated_at = now

        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                order_code=self.order_code,
                buyer_id=self.buyer_id,
                items=json.dumps([item.to_dict() for item in self.items]),
                total=self.pricing.total,
                payment_method=self.payment.method,
                payable_amount=to_minor_units(self.payable_amount),
                gateway_order_id=gateway_order_id,
                placed_at=now,
            )
        )

    def confirm_payment(self, gateway_payment_id: str, gateway_signature: str) -> None:
        """Record a verified payment and start processing the order."""
        self._assert_payment_pending()
        self._assert_can_transition(OrderStatus.PROCESSING)

        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            method=self.payment.method,
            status=PaymentStatus.PAID.value,
            gateway_order_id=self.payment.gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            gateway_signature=gateway_signature,
        )
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now

        self.raise_(
            PaymentVerified(
                order_id=str(self.id),
                gateway_order_id=self.payment.gateway_order_id,
                gateway_payment_id=gateway_payment_id,
                verified_at=now,
            )
        )

    def reject_payment(self) -> None:
        """Mark the payment failed and cancel the order."""
        self._assert_payment_pending()
        self._assert_can_transition(OrderStatus.CANCELLED)

        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            method=self.payment.method,
            status=PaymentStatus.FAILED.value,
            gateway_order_id=self.payment.gateway_order_id,
        )
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            PaymentRejected(
                order_id=str(self.id),
                gateway_order_id=self.payment.gateway_order_id,
                rejected_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_buyer(self, buyer_id: str) -> list[Order]:
        """The buyer's orders, newest first."""
        return (
            self._dao.query.filter(buyer_id=buyer_id)
            .order_by("-created_at")
            .limit(None)
            .all()
            .items
        )
