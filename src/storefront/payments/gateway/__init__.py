"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- RazorpayGateway when PAYMENT_GATEWAY=razorpay
"""

from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import PaymentGateway
from storefront.payments.gateway.razorpay_adapter import RazorpayGateway
from storefront.settings import get_settings

_current_gateway: PaymentGateway | None = None


def _build_default() -> PaymentGateway:
    settings = get_settings()
    if settings.payment_gateway == "razorpay":
        return RazorpayGateway(key_id=settings.payment_key_id, key_secret=settings.payment_secret)
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, creating the configured one on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_default()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
