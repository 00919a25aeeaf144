"""Tests for parsing API endpoints."""

import base64

FUTURE_RECEIPT = {
    "name": "Netflix",
    "cost": 15.99,
    "currency": None,
    "renewalDate": "2099-01-15",
    "frequency": "monthly",
    "tags": None,
}


class TestParseText:
    """Test free-text parsing."""

    def test_returns_draft(self, client, fake_ai):
        fake_ai.result = dict(FUTURE_RECEIPT)
        response = client.post("/api/v1/parse/text", json={"text": "Netflix 15.99 a month, next on Jan 15 2099"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Netflix"
        assert data["currency"] == "USD"
        assert data["renewal_date"] == "2099-01-15"
        assert data["tags"] == ""
        assert data["status"] == "active"
        assert data["defaulted_fields"] == ["currency"]

    def test_does_not_save(self, client, fake_ai):
        fake_ai.result = dict(FUTURE_RECEIPT)
        client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert client.get("/api/v1/subscriptions").json()["total"] == 0

    def test_credential_forwarded(self, client, fake_ai):
        fake_ai.result = dict(FUTURE_RECEIPT)
        client.post("/api/v1/parse/text", json={"text": "Netflix", "api_key": "sk-user"})
        assert fake_ai.calls[0][1]["api_key"] == "sk-user"

    def test_missing_field(self, client, fake_ai):
        fake_ai.result = {**FUTURE_RECEIPT, "cost": None}
        response = client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "missing_field"
        assert detail["fields"] == ["cost"]

    def test_bad_value(self, client, fake_ai):
        fake_ai.result = {**FUTURE_RECEIPT, "currency": "GBP"}
        response = client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "field_value_error"

    def test_cost_too_large(self, client, fake_ai):
        fake_ai.result = {**FUTURE_RECEIPT, "cost": 1e12}
        response = client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "field_type_error"
        assert detail["fields"] == ["cost"]

    def test_name_too_long(self, client, fake_ai):
        fake_ai.result = {**FUTURE_RECEIPT, "name": "N" * 201}
        response = client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["name"]

    def test_ai_failure(self, client, fake_ai):
        fake_ai.error = TimeoutError("timed out")
        response = client.post("/api/v1/parse/text", json={"text": "Netflix"})
        assert response.status_code == 502
        assert "manual form" in response.json()["detail"]

    def test_empty_text_rejected(self, client, fake_ai):
        assert client.post("/api/v1/parse/text", json={"text": ""}).status_code == 422
        assert fake_ai.calls == []


class TestParseScreenshot:
    """Test screenshot parsing."""

    def test_returns_draft(self, client, fake_ai):
        fake_ai.result = dict(FUTURE_RECEIPT)
        image = base64.b64encode(b"fake-png-bytes").decode()
        response = client.post(
            "/api/v1/parse/screenshot",
            json={"image_data_url": f"data:image/png;base64,{image}"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Netflix"
        kind, kwargs = fake_ai.calls[0]
        assert kind == "image"
        assert kwargs["image_bytes"] == b"fake-png-bytes"

    def test_invalid_image(self, client, fake_ai):
        response = client.post("/api/v1/parse/screenshot", json={"image_data_url": "%%%"})
        assert response.status_code == 400
        assert fake_ai.calls == []

    def test_missing_name(self, client, fake_ai):
        fake_ai.result = {**FUTURE_RECEIPT, "name": None}
        image = base64.b64encode(b"img").decode()
        response = client.post("/api/v1/parse/screenshot", json={"image_data_url": image})
        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["name"]
