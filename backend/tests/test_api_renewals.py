"""Tests for renewal urgency endpoints."""

from datetime import date

from app.config import settings
from app.models.subscription import Frequency, SubscriptionStatus

REFERENCE = "2024-04-15"


class TestUrgencySummary:
    """Test the tray summary endpoint."""

    def test_empty(self, client):
        data = client.get("/api/v1/renewals/summary", params={"reference_date": REFERENCE}).json()
        assert data["very_urgent_count"] == 0
        assert data["urgent_count"] == 0
        assert data["most_severe_tier"] == "normal"

    def test_counts(self, client, subscription_factory):
        subscription_factory(name="Tomorrow", renewal_date=date(2024, 4, 16))
        subscription_factory(name="Soon", renewal_date=date(2024, 4, 18))
        subscription_factory(name="Yearly", frequency=Frequency.annual, renewal_date=date(2024, 5, 10))
        subscription_factory(
            name="Paused", status=SubscriptionStatus.inactive, renewal_date=date(2024, 4, 15)
        )

        data = client.get("/api/v1/renewals/summary", params={"reference_date": REFERENCE}).json()
        assert data["very_urgent_count"] == 1
        assert data["urgent_count"] == 2
        assert data["normal_count"] == 0
        assert data["most_severe_tier"] == "very_urgent"
        assert data["reference_date"] == REFERENCE

    def test_rolls_over_before_classifying(self, client, subscription_factory):
        """A stale monthly date is counted at its next occurrence, not as overdue."""
        subscription_factory(name="Stale", renewal_date=date(2024, 3, 30))
        data = client.get("/api/v1/renewals/summary", params={"reference_date": REFERENCE}).json()
        assert data["very_urgent_count"] == 0
        assert data["normal_count"] == 1


class TestUpcomingRenewals:
    """Test the upcoming list for the tray menu."""

    def test_limit_and_order(self, client, subscription_factory):
        subscription_factory(name="Beta", renewal_date=date(2024, 4, 20))
        subscription_factory(name="Alpha", renewal_date=date(2024, 4, 20))
        subscription_factory(name="First", renewal_date=date(2024, 4, 16))

        data = client.get(
            "/api/v1/renewals/upcoming",
            params={"reference_date": REFERENCE, "limit": 2}
        ).json()
        assert [r["name"] for r in data["renewals"]] == ["First", "Alpha"]
        assert data["renewals"][0]["days_until"] == 1
        assert data["renewals"][0]["tier"] == "very_urgent"
        assert data["summary"]["very_urgent_count"] == 1

    def test_default_limit(self, client, subscription_factory, monkeypatch):
        monkeypatch.setattr(settings, "upcoming_limit", 3)
        for day in range(16, 22):
            subscription_factory(name=f"Sub {day}", renewal_date=date(2024, 4, day))

        data = client.get("/api/v1/renewals/upcoming", params={"reference_date": REFERENCE}).json()
        assert len(data["renewals"]) == 3
