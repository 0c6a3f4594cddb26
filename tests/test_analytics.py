"""Tests for Pro-only analytics"""

from datetime import datetime
from decimal import Decimal

from app.domain.analytics.service import AnalyticsService
from app.models import Quote

NOW = datetime(2026, 10, 15, 12, 0)  # a Thursday; the week began Sunday Oct 11


def _add_quote(db, user, total, created_at, status="draft", sent=False, approved=False):
    quote = Quote(
        user_id=user.id,
        client_name="Jane Doe",
        total_price=Decimal(total),
        status=status,
        sent_at=created_at if sent else None,
        client_approved=approved,
        client_approved_at=created_at if approved else None,
        created_at=created_at,
    )
    db.add(quote)
    db.commit()
    return quote


class TestAnalyticsGate:
    def test_free_user_needs_upgrade(self, client, make_user, auth_headers):
        response = client.get("/api/analytics", headers=auth_headers(make_user()))

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "UPGRADE_REQUIRED"
        assert body["error"] == "Pro subscription required"

    def test_unauthenticated(self, client):
        assert client.get("/api/analytics").status_code == 401


class TestAnalyticsFigures:
    def test_summary_breakdown_and_trend(self, db, make_user):
        user = make_user(subscription_status="active")
        _add_quote(db, user, "100.00", datetime(2026, 10, 12, 9), "approved", sent=True, approved=True)
        _add_quote(db, user, "200.00", datetime(2026, 10, 2, 9), "sent", sent=True)
        _add_quote(db, user, "50.50", datetime(2026, 8, 20, 9))
        _add_quote(db, user, "49.50", datetime(2026, 3, 1, 9), "completed", sent=True, approved=True)

        result = AnalyticsService(db).get_analytics(user, now=NOW)

        summary = result["summary"]
        assert summary["total_quotes"] == 4
        assert summary["this_month_quotes"] == 2
        assert summary["this_week_quotes"] == 1
        assert summary["total_quoted_value"] == Decimal("400.00")
        assert summary["accepted_value"] == Decimal("149.50")
        assert summary["conversion_rate"] == Decimal("66.7")
        assert summary["avg_quote_value"] == Decimal("100.00")

        breakdown = result["status_breakdown"]
        assert breakdown["approved"] == 1
        assert breakdown["sent"] == 1
        assert breakdown["draft"] == 1
        assert breakdown["completed"] == 1
        assert breakdown["cancelled"] == 0

        trend = result["monthly_trend"]
        assert [point["month"] for point in trend] == [
            "May 26", "Jun 26", "Jul 26", "Aug 26", "Sep 26", "Oct 26"
        ]
        assert trend[-1]["total_quotes"] == 2
        assert trend[-1]["accepted_quotes"] == 1
        assert trend[-1]["revenue"] == Decimal("100.00")
        assert trend[3]["total_quotes"] == 1
        assert trend[3]["revenue"] == Decimal("0.00")

    def test_trend_crosses_year_boundary(self, db, make_user):
        user = make_user(subscription_status="active")
        _add_quote(db, user, "80.00", datetime(2025, 11, 3, 9), "approved", sent=True, approved=True)

        trend = AnalyticsService(db).get_analytics(user, now=datetime(2026, 2, 10))["monthly_trend"]

        assert [point["month"] for point in trend] == [
            "Sep 25", "Oct 25", "Nov 25", "Dec 25", "Jan 26", "Feb 26"
        ]
        assert trend[2]["accepted_quotes"] == 1
        assert trend[2]["revenue"] == Decimal("80.00")

    def test_no_quotes(self, client, make_user, auth_headers):
        response = client.get(
            "/api/analytics", headers=auth_headers(make_user(subscription_status="active"))
        )

        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["totalQuotes"] == 0
        assert body["summary"]["conversionRate"] == "0.0"
        assert body["summary"]["avgQuoteValue"] == "0.00"
        assert len(body["monthlyTrend"]) == 6
        assert "generatedAt" in body

    def test_endpoint_counts_new_quotes(self, client, make_user, auth_headers, create_quote):
        user = make_user(subscription_status="active")
        create_quote(user)
        create_quote(user, totalPrice="150.00")

        body = client.get("/api/analytics", headers=auth_headers(user)).json()

        assert body["summary"]["totalQuotes"] == 2
        assert body["summary"]["totalQuotedValue"] == "300.00"
        assert body["statusBreakdown"]["draft"] == 2
        assert body["monthlyTrend"][-1]["totalQuotes"] == 2
