"""Pydantic request/response schemas for checkout and orders."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.responses import CamelModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CartLineIn(CamelModel):
    product_id: str
    name: str
    image: str | None = None
    price: float
    quantity: int = 1
    variant: str | None = None

    def to_line_item(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "image": self.image,
            "unit_price": self.price,
            "quantity": self.quantity,
            "variant": self.variant,
        }


class CheckoutFormIn(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class PlaceOrderRequest(CamelModel):
    items: list[CartLineIn] = Field(default_factory=list)
    subtotal: float | None = None
    shipping: float = 0.0
    total: float | None = None
    shipping_details: CheckoutFormIn = Field(default_factory=CheckoutFormIn)
    payment_method: str | None = None


class VerifyPaymentRequest(CamelModel):
    order_id: str | None = None
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None
    gateway_signature: str | None = None


class QuoteRequest(CamelModel):
    subtotal: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemOut(CamelModel):
    product_id: str
    name: str
    image: str | None = None
    price: float
    quantity: int
    variant: str | None = None


class ShippingAddressOut(CamelModel):
    address: str
    city: str
    state: str
    zip_code: str
    country: str


class PricingOut(CamelModel):
    subtotal: float
    shipping: float
    tax: float
    total: float


class PaymentOut(CamelModel):
    method: str
    status: str
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None


class CustomerOut(CamelModel):
    id: str
    name: str
    email: str


class OrderOut(CamelModel):
    id: str
    order_code: str
    customer: CustomerOut
    items: list[OrderItemOut]
    shipping_address: ShippingAddressOut
    pricing: PricingOut
    payment: PaymentOut
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderOut:
        address = order.shipping_address
        return cls(
            id=str(order.id),
            order_code=order.order_code,
            customer=CustomerOut(id=order.buyer_id, name=order.buyer_name, email=order.buyer_email),
            items=[
                OrderItemOut(
                    product_id=str(item.product_id),
                    name=item.name,
                    image=item.image,
                    price=item.unit_price,
                    quantity=item.quantity,
                    variant=item.variant,
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressOut(
                address=address.address,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            pricing=PricingOut(
                subtotal=order.pricing.subtotal,
                shipping=order.pricing.shipping,
                tax=order.pricing.tax,
                total=order.pricing.total,
            ),
            payment=PaymentOut(
                method=order.payment.method,
                status=order.payment.status,
                gateway_order_id=order.payment.gateway_order_id,
                gateway_payment_id=order.payment.gateway_payment_id,
            ),
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class GatewayOrderOut(CamelModel):
    id: str
    amount: int
    currency: str
    receipt: str | None = None
    status: str | None = None


class QuoteOut(CamelModel):
    subtotal: float
    shipping: float
    tax: float
    total: float
