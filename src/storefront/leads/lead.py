"""Lead aggregate: a consultation request captured from the contact page."""

from datetime import UTC, date, datetime
from enum import Enum

from protean.fields import Date, DateTime, String, Text, ValueObject

from storefront.domain import storefront
from storefront.shared.email import EmailAddress
from storefront.shared.identity import object_id


class TimeSlot(Enum):
    MORNING = "9am-12pm"
    AFTERNOON = "12pm-3pm"
    EVENING = "3pm-6pm"


class ProjectType(Enum):
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    RENOVATION = "Renovation"
    NEW_CONSTRUCTION = "New Construction"


class BudgetRange(Enum):
    UNDER_10K = "Under Rs 10000"
    FROM_10K_TO_25K = "10000-25000"
    FROM_25K_TO_50K = "25000-50000"
    FROM_50K_TO_100K = "50000-100000"
    OVER_100K = "Over Rs 100000"


class LeadStatus(Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    CONVERTED = "Converted"
    CLOSED = "Closed"


@storefront.aggregate
class Lead:
    customer_name = String(required=True, max_length=255)
    email = ValueObject(EmailAddress, required=True)
    mobile_number = String(required=True, max_length=30)
    preferred_date = Date(required=True)
    time_slot = String(required=True, choices=TimeSlot)
    project_type = String(choices=ProjectType)
    budget_range = String(choices=BudgetRange)
    status = String(choices=LeadStatus, default=LeadStatus.NEW.value)
    additional_message = Text()
    created_at = DateTime()

    @classmethod
    def capture(
        cls,
        customer_name: str,
        email: str,
        mobile_number: str,
        preferred_date: date,
        time_slot: str,
        project_type: str | None = None,
        budget_range: str | None = None,
        additional_message: str | None = None,
    ):
        return cls(
            id=object_id(),
            customer_name=customer_name.strip(),
            email=EmailAddress.parse(email),
            mobile_number=mobile_number.strip(),
            preferred_date=preferred_date,
            time_slot=time_slot,
            project_type=project_type or None,
            budget_range=budget_range or None,
            status=LeadStatus.NEW.value,
            additional_message=(additional_message or "").strip() or None,
            created_at=datetime.now(UTC),
        )
