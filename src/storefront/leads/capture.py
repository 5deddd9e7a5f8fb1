"""CaptureLead: store a consultation request."""

from datetime import date

import structlog
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.leads.lead import Lead

logger = structlog.get_logger(__name__)

_REQUIRED = ("customer_name", "email", "mobile_number", "preferred_date", "time_slot")


@storefront.command(part_of="Lead")
class CaptureLead:
    customer_name = String(max_length=255)
    email = String(max_length=254)
    mobile_number = String(max_length=30)
    preferred_date = String(max_length=40)  # ISO date, time part ignored
    time_slot = String(max_length=20)
    project_type = String(max_length=50)
    budget_range = String(max_length=50)
    additional_message = Text()


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationError({"preferred_date": ["A preferred date must be an ISO date (YYYY-MM-DD)"]})


@storefront.command_handler(part_of=Lead)
class CaptureLeadHandler:
    @handle(CaptureLead)
    def capture_lead(self, command):
        if any(not getattr(command, name) for name in _REQUIRED):
            raise ValidationError({"lead": ["Missing required lead information."]})

        lead = Lead.capture(
            customer_name=command.customer_name,
            email=command.email,
            mobile_number=command.mobile_number,
            preferred_date=_parse_date(command.preferred_date),
            time_slot=command.time_slot,
            project_type=command.project_type,
            budget_range=command.budget_range,
            additional_message=command.additional_message,
        )
        current_domain.repository_for(Lead).add(lead)

        logger.info("lead_captured", lead_id=str(lead.id), time_slot=lead.time_slot)
        return lead
