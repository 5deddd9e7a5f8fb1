"""FastAPI endpoint for consultation requests."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.responses import ok
from storefront.leads.api.schemas import LeadOut, LeadRequest
from storefront.leads.capture import CaptureLead

router = APIRouter(prefix="/leads", tags=["leads"])


@router.post("", status_code=201)
async def capture_lead(body: LeadRequest):
    lead = current_domain.process(CaptureLead(**body.model_dump()), asynchronous=False)
    return ok(
        LeadOut.from_lead(lead),
        message="Consultation request submitted successfully.",
        status_code=201,
    )
