"""Pydantic request/response schemas for lead capture."""

from __future__ import annotations

from datetime import date, datetime

from storefront.api.responses import CamelModel


class LeadRequest(CamelModel):
    customer_name: str | None = None
    email: str | None = None
    mobile_number: str | None = None
    preferred_date: str | None = None
    time_slot: str | None = None
    project_type: str | None = None
    budget_range: str | None = None
    additional_message: str | None = None


class LeadOut(CamelModel):
    id: str
    customer_name: str
    email: str
    mobile_number: str
    preferred_date: date
    time_slot: str
    project_type: str | None = None
    budget_range: str | None = None
    status: str
    additional_message: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_lead(cls, lead) -> LeadOut:
        return cls(
            id=str(lead.id),
            customer_name=lead.customer_name,
            email=lead.email.address,
            mobile_number=lead.mobile_number,
            preferred_date=lead.preferred_date,
            time_slot=lead.time_slot,
            project_type=lead.project_type,
            budget_range=lead.budget_range,
            status=lead.status,
            additional_message=lead.additional_message,
            created_at=lead.created_at,
        )
