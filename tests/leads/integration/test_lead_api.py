"""Integration tests for the lead capture endpoint."""


def _lead_body(**overrides):
    body = {
        "customerName": "Asha Rao",
        "email": "asha@example.com",
        "mobileNumber": "9876543210",
        "preferredDate": "2026-11-02",
        "timeSlot": "3pm-6pm",
        "projectType": "Residential",
        "budgetRange": "Under Rs 10000",
        "additionalMessage": "Living room makeover",
    }
    body.update(overrides)
    return body


class TestLeadEndpoint:
    def test_submit(self, client):
        response = client.post("/api/leads", json=_lead_body())

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Consultation request submitted successfully."
        assert body["data"]["customerName"] == "Asha Rao"
        assert body["data"]["preferredDate"] == "2026-11-02"
        assert body["data"]["status"] == "New"

    def test_missing_required(self, client):
        response = client.post("/api/leads", json=_lead_body(timeSlot=None))
        assert response.status_code == 400
        assert response.json()["message"] == "Missing required lead information."

    def test_invalid_email(self, client):
        response = client.post("/api/leads", json=_lead_body(email="asha-at-example"))
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill a valid email address"

    def test_invalid_budget(self, client):
        response = client.post("/api/leads", json=_lead_body(budgetRange="Unlimited"))
        assert response.status_code == 400
