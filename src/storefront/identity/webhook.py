"""Identity-provider webhooks.

Deliveries are signed the Svix way and checked with the ``svix`` library: the
``svix-id``, ``svix-timestamp`` and ``svix-signature`` headers must match the
raw body under the configured ``whsec_`` secret, and stale timestamps are
refused.
"""

from svix.webhooks import Webhook, WebhookVerificationError

from storefront.errors import InvalidSignature
from storefront.identity.user.sync import RemoveUser, SyncUser

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


def verify_webhook(secret: str, headers, body: bytes) -> None:
    """Raise InvalidSignature unless the delivery is authentic and fresh."""
    if not secret:
        raise InvalidSignature("Webhook secret is not configured.")

    try:
        Webhook(secret).verify(body, {name: headers.get(name, "") for name in SIGNATURE_HEADERS})
    except WebhookVerificationError as exc:
        raise InvalidSignature(f"Invalid webhook signature: {exc}")


def _primary(entries: list[dict], primary_id: str | None, key: str) -> str | None:
    """Pick the primary entry's value, falling back to the first one."""
    if not entries:
        return None
    chosen = next((e for e in entries if e.get("id") == primary_id), entries[0])
    return chosen.get(key)


def command_for_event(event_type: str, data: dict):
    """Translate a user event into the command that applies it, or None to ignore it."""
    if event_type in ("user.created", "user.updated"):
        name = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()
        return SyncUser(
            external_id=data.get("id"),
            email=_primary(data.get("email_addresses", []), data.get("primary_email_address_id"), "email_address"),
            name=name or "User",
            phone=_primary(data.get("phone_numbers", []), data.get("primary_phone_number_id"), "phone_number"),
            image_url=data.get("image_url"),
        )

    if event_type == "user.deleted":
        return RemoveUser(external_id=data.get("id"))

    return None
