"""FastAPI endpoint receiving identity-provider webhooks."""

import json

import structlog
from fastapi import APIRouter, Request
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.responses import ok
from storefront.identity.webhook import SIGNATURE_HEADERS, command_for_event, verify_webhook
from storefront.settings import get_settings

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/user")
async def user_webhook(request: Request):
    if not all(request.headers.get(name) for name in SIGNATURE_HEADERS):
        raise ValidationError({"webhook": ["Missing svix headers."]})
    message_id = request.headers["svix-id"]

    body = await request.body()
    verify_webhook(get_settings().identity_webhook_secret, request.headers, body)

    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError({"webhook": ["Webhook payload is not valid JSON."]})

    event_type = payload.get("type")
    command = command_for_event(event_type, payload.get("data") or {})
    if command is None:
        logger.info("webhook_ignored", event_type=event_type, message_id=message_id)
        return ok(message="Webhook received.")

    current_domain.process(command, asynchronous=False)
    logger.info("webhook_processed", event_type=event_type, message_id=message_id)
    return ok(message="Webhook processed.")
