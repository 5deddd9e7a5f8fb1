"""FastAPI endpoints for checkout, payment verification and order history."""

import json

import structlog
from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.responses import ok
from storefront.errors import InvalidSignature
from storefront.identity.session import Identity, require_identity
from storefront.ordering.api.schemas import (
    GatewayOrderOut,
    OrderOut,
    PlaceOrderRequest,
    QuoteOut,
    QuoteRequest,
    VerifyPaymentRequest,
)
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.verification import VerifyPayment
from storefront.ordering.pricing import quote

logger = structlog.get_logger(__name__)

order_router = APIRouter(prefix="/orders", tags=["orders"])
payment_router = APIRouter(prefix="/payment", tags=["orders"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])


# --- Order endpoints ---


@order_router.get("")
async def list_orders(identity: Identity = Depends(require_identity)):
    orders = current_domain.repository_for(Order).for_buyer(identity.subject)
    return ok([OrderOut.from_order(o) for o in orders])


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, identity: Identity = Depends(require_identity)):
    form = body.shipping_details
    placed = current_domain.process(
        PlaceOrder(
            buyer_id=identity.subject,
            account_email=identity.email,
            account_first_name=identity.first_name,
            account_last_name=identity.last_name,
            account_image_url=identity.image_url,
            items=json.dumps([line.to_line_item() for line in body.items]),
            subtotal=body.subtotal,
            shipping=body.shipping,
            total=body.total,
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            address=form.address,
            city=form.city,
            state=form.state,
            zip_code=form.zip_code,
            country=form.country,
            payment_method=body.payment_method,
        ),
        asynchronous=False,
    )
    return ok(
        {
            "order": OrderOut.from_order(placed.order),
            "gatewayOrder": GatewayOrderOut(**placed.gateway_order.as_handle()),
        },
        message="Order created, awaiting payment.",
        status_code=201,
    )


# --- Payment endpoints ---


@payment_router.post("/verify")
async def verify_payment(body: VerifyPaymentRequest, identity: Identity = Depends(require_identity)):
    if not all((body.order_id, body.gateway_order_id, body.gateway_payment_id, body.gateway_signature)):
        raise ValidationError({"payment": ["Missing payment verification details."]})

    result = current_domain.process(
        VerifyPayment(
            order_id=body.order_id,
            buyer_id=identity.subject,
            gateway_order_id=body.gateway_order_id,
            gateway_payment_id=body.gateway_payment_id,
            gateway_signature=body.gateway_signature,
        ),
        asynchronous=False,
    )
    if not result.verified:
        raise InvalidSignature()

    return ok(
        {"orderId": result.order_id},
        message="Payment verified and order finalized successfully.",
    )


# --- Cart endpoints ---


@cart_router.post("/quote")
async def quote_cart(body: QuoteRequest):
    q = quote(body.subtotal)
    return ok(QuoteOut(subtotal=q.subtotal, shipping=q.shipping, tax=q.tax, total=q.total))
