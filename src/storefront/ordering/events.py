"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A pending order was created and a gateway order handle obtained for it."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_code = String(required=True)
    buyer_id = String(required=True)
    items = Text(required=True)  # JSON: list of line item snapshots
    total = Float(required=True)
    payment_method = String(required=True)
    payable_amount = Integer(required=True)  # minor currency units
    gateway_order_id = String(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentVerified:
    """The gateway signature matched; the order moved to processing."""

    __version__ = 1

    order_id = Identifier(required=True)
    gateway_order_id = String(required=True)
    gateway_payment_id = String(required=True)
    verified_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentRejected:
    """The gateway signature did not match; the order was cancelled."""

    __version__ = 1

    order_id = Identifier(required=True)
    gateway_order_id = String()
    rejected_at = DateTime(required=True)
