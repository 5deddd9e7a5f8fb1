"""Integration tests for checkout, payment verification and order history."""

import os

from protean.utils.globals import current_domain
from storefront.catalogue.product.product import Product
from storefront.ordering.order import Order
from storefront.payments.signature import payment_signature


def _order_body(product, **overrides):
    body = {
        "items": [
            {
                "productId": str(product.id),
                "name": product.name,
                "image": None,
                "price": 500.0,
                "quantity": 2,
                "variant": "Oak",
            }
        ],
        "subtotal": 1000.0,
        "shipping": 0.0,
        "total": 1000.0,
        "shippingDetails": {
            "firstName": "Asha",
            "lastName": "Rao",
            "email": "asha.rao@example.com",
            "address": "12 MG Road",
            "city": "Bengaluru",
            "state": "KA",
            "zipCode": "560001",
            "country": "India",
        },
        "paymentMethod": "full-online",
    }
    body.update(overrides)
    return body


def _place(client, product, headers, **overrides):
    response = client.post("/api/orders", json=_order_body(product, **overrides), headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def _verify_body(placed, signature=None, payment_id="pay_001"):
    gateway_order_id = placed["gatewayOrder"]["id"]
    return {
        "orderId": placed["order"]["id"],
        "gatewayOrderId": gateway_order_id,
        "gatewayPaymentId": payment_id,
        "gatewaySignature": signature
        or payment_signature(os.environ["RAZORPAY_SECRET"], gateway_order_id, payment_id),
    }


class TestPlaceOrderEndpoint:
    def test_requires_session(self, client, make_product):
        response = client.post("/api/orders", json=_order_body(make_product()))
        assert response.status_code == 401

    def test_creates_pending_order(self, client, make_product, auth_headers):
        response = client.post("/api/orders", json=_order_body(make_product()), headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order created, awaiting payment."
        order = body["data"]["order"]
        assert order["status"] == "pending"
        assert order["orderCode"].startswith("ORD-")
        assert order["payment"]["method"] == "full-online"
        assert order["items"][0]["variant"] == "Oak"
        assert order["shippingAddress"]["zipCode"] == "560001"
        gateway_order = body["data"]["gatewayOrder"]
        assert gateway_order["amount"] == 100000
        assert gateway_order["currency"] == "INR"
        assert order["payment"]["gatewayOrderId"] == gateway_order["id"]

    def test_cash_on_delivery_advance(self, client, make_product, auth_headers):
        placed = _place(client, make_product(), auth_headers, paymentMethod="partial-cash-on-delivery")
        assert placed["gatewayOrder"]["amount"] == 25000

    def test_gateway_failure(self, client, make_product, auth_headers, gateway):
        gateway.configure(should_succeed=False)
        response = client.post("/api/orders", json=_order_body(make_product()), headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to create payment gateway order."}
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_missing_shipping_details(self, client, make_product, auth_headers, gateway):
        response = client.post(
            "/api/orders",
            json=_order_body(make_product(), shippingDetails={"firstName": "Asha"}),
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert gateway.calls == []

    def test_malformed_body(self, client, auth_headers):
        response = client.post("/api/orders", json={"items": "nope"}, headers=auth_headers)
        assert response.status_code == 400


class TestListOrdersEndpoint:
    def test_own_orders_newest_first(self, client, make_product, auth_headers, other_auth_headers):
        product = make_product()
        first = _place(client, product, auth_headers)
        second = _place(client, product, auth_headers)
        _place(client, product, other_auth_headers)

        data = client.get("/api/orders", headers=auth_headers).json()["data"]
        assert [o["id"] for o in data] == [second["order"]["id"], first["order"]["id"]]


class TestVerifyPaymentEndpoint:
    def test_verified(self, client, make_product, auth_headers):
        product = make_product(stock=10)
        placed = _place(client, product, auth_headers)

        response = client.post("/api/payment/verify", json=_verify_body(placed), headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"orderId": placed["order"]["id"]},
            "message": "Payment verified and order finalized successfully.",
        }
        assert current_domain.repository_for(Product).get(product.id).stock == 8
        assert current_domain.repository_for(Order).get(placed["order"]["id"]).status == "processing"

    def test_bad_signature_cancels(self, client, make_product, auth_headers):
        product = make_product(stock=10)
        placed = _place(client, product, auth_headers)

        response = client.post(
            "/api/payment/verify", json=_verify_body(placed, signature="f" * 64), headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid payment signature."}
        order = current_domain.repository_for(Order).get(placed["order"]["id"])
        assert order.status == "cancelled"
        assert order.payment.status == "failed"
        assert current_domain.repository_for(Product).get(product.id).stock == 10

    def test_replay_rejected(self, client, make_product, auth_headers):
        placed = _place(client, make_product(stock=10), auth_headers)
        client.post("/api/payment/verify", json=_verify_body(placed), headers=auth_headers)

        response = client.post("/api/payment/verify", json=_verify_body(placed), headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Payment for this order has already been processed"

    def test_missing_fields(self, client, auth_headers):
        response = client.post("/api/payment/verify", json={"orderId": "x"}, headers=auth_headers)
        assert response.status_code == 400

    def test_other_buyer_forbidden(self, client, make_product, auth_headers, other_auth_headers):
        placed = _place(client, make_product(), auth_headers)
        response = client.post("/api/payment/verify", json=_verify_body(placed), headers=other_auth_headers)
        assert response.status_code == 403


class TestCartQuoteEndpoint:
    def test_quote(self, client):
        response = client.post("/api/cart/quote", json={"subtotal": 200})
        assert response.status_code == 200
        assert response.json()["data"] == {"subtotal": 200.0, "shipping": 50.0, "tax": 16.0, "total": 266.0}

    def test_negative_subtotal(self, client):
        assert client.post("/api/cart/quote", json={"subtotal": -5}).status_code == 400
