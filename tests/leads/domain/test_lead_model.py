"""Tests for the Lead aggregate and the EmailAddress value object."""

from datetime import date

import pytest
from protean.exceptions import ValidationError
from storefront.leads.lead import Lead, LeadStatus
from storefront.shared.email import EmailAddress


def _capture(**overrides):
    defaults = {
        "customer_name": " Asha Rao ",
        "email": "Asha@Example.com",
        "mobile_number": "9876543210",
        "preferred_date": date(2026, 11, 2),
        "time_slot": "9am-12pm",
    }
    defaults.update(overrides)
    return Lead.capture(**defaults)


class TestEmailAddress:
    @pytest.mark.parametrize("value", ["asha@example.com", "first.last+tag@mail.example.co.in"])
    def test_valid(self, value):
        assert EmailAddress.parse(value).address == value.lower()

    @pytest.mark.parametrize(
        "value",
        ["asha", "asha@", "@example.com", "asha@example", "as ha@example.com", "a..b@example.com", "a@-x.com"],
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc:
            EmailAddress.parse(value)
        assert "email" in exc.value.messages


class TestLeadCapture:
    def test_new_lead(self):
        lead = _capture()
        assert lead.customer_name == "Asha Rao"
        assert lead.email.address == "asha@example.com"
        assert lead.status == LeadStatus.NEW.value
        assert lead.project_type is None
        assert lead.additional_message is None

    def test_optional_enums(self):
        lead = _capture(project_type="Residential", budget_range="25000-50000")
        assert lead.project_type == "Residential"
        assert lead.budget_range == "25000-50000"

    def test_unknown_time_slot_rejected(self):
        with pytest.raises(ValidationError):
            _capture(time_slot="midnight")

    def test_unknown_project_type_rejected(self):
        with pytest.raises(ValidationError):
            _capture(project_type="Boat")

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError):
            _capture(email="not-an-email")
