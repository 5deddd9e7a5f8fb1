"""Gateway payment signatures.

After the buyer pays, the gateway hands the browser a signature equal to the
hex HMAC-SHA256 of ``"<gateway order id>|<gateway payment id>"`` keyed with the
merchant secret. The browser forwards it and the server recomputes it.
"""

import hashlib
import hmac


def payment_signature(secret: str, gateway_order_id: str, gateway_payment_id: str) -> str:
    message = f"{gateway_order_id}|{gateway_payment_id}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def verify_payment_signature(secret: str, gateway_order_id: str, gateway_payment_id: str, signature: str) -> bool:
    """Constant-time check of a gateway signature. An empty secret never verifies."""
    if not secret or not signature:
        return False
    expected = payment_signature(secret, gateway_order_id, gateway_payment_id)
    return hmac.compare_digest(expected.encode(), signature.encode())
