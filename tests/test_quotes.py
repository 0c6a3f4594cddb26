"""Tests for quote CRUD, quota enforcement and sending"""

from unittest.mock import AsyncMock, patch

from app.email_service import EmailDeliveryError
from app.models import Quote


class TestCreateQuote:
    def test_create_returns_quote_and_allowance(self, client, make_user, auth_headers):
        user = make_user()

        response = client.post(
            "/api/quotes",
            json={"clientName": "Jane Doe", "totalPrice": "120.00"},
            headers=auth_headers(user),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["quote"]["status"] == "draft"
        assert body["quote"]["clientApproved"] is False
        assert body["quote"]["shareToken"]
        assert body["quoteCount"] == 1
        assert body["quotesRemaining"] == 2

    def test_free_limit_blocks_fourth_quote(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        for _ in range(3):
            create_quote(user)

        response = client.post("/api/quotes", json={"clientName": "Four"}, headers=auth_headers(user))

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "UPGRADE_REQUIRED"
        assert body["quoteCount"] == 3
        assert body["limit"] == 3

    def test_pro_user_is_unlimited(self, client, make_user, auth_headers, create_quote):
        user = make_user(subscription_status="active")
        for _ in range(4):
            create_quote(user)

        response = client.post("/api/quotes", json={}, headers=auth_headers(user))

        assert response.status_code == 201
        assert response.json()["quotesRemaining"] == "unlimited"

    def test_money_round_trips_exactly(self, client, make_user, auth_headers):
        user = make_user()
        payload = {
            "basePrice": "149.99",
            "addonTotal": "25.50",
            "discountPercent": "12.50",
            "discountAmount": "21.94",
            "taxRate": "8.25",
            "taxAmount": "12.67",
            "total": "166.22",
            "bathrooms": "2.5",
        }

        created = client.post("/api/quotes", json=payload, headers=auth_headers(user)).json()["quote"]
        fetched = client.get(f"/api/quotes/{created['id']}", headers=auth_headers(user)).json()["quote"]

        assert fetched["basePrice"] == "149.99"
        assert fetched["addonsPrice"] == "25.50"
        assert fetched["discountPercent"] == "12.50"
        assert fetched["taxRate"] == "8.25"
        assert fetched["totalPrice"] == "166.22"
        assert fetched["bathrooms"] == "2.5"

    def test_negative_price_is_invalid_input(self, client, make_user, auth_headers):
        response = client.post(
            "/api/quotes", json={"basePrice": "-5"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_unknown_status_is_invalid_input(self, client, make_user, auth_headers):
        response = client.post(
            "/api/quotes", json={"status": "archived"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = client.post("/api/quotes", json={})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"


class TestQuoteAccess:
    def test_list_is_scoped_to_owner(self, client, make_user, auth_headers, create_quote):
        owner, other = make_user(), make_user()
        create_quote(owner)
        create_quote(owner)
        create_quote(other)

        quotes = client.get("/api/quotes", headers=auth_headers(owner)).json()["quotes"]

        assert len(quotes) == 2

    def test_other_tenants_quote_is_not_found(self, client, make_user, auth_headers, create_quote):
        owner, other = make_user(), make_user()
        quote = create_quote(owner)

        for method in ("get", "put", "delete"):
            kwargs = {"json": {"notes": "x"}} if method == "put" else {}
            response = getattr(client, method)(
                f"/api/quotes/{quote['id']}", headers=auth_headers(other), **kwargs
            )
            assert response.status_code == 404

    def test_update_keeps_omitted_fields(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        quote = create_quote(user, notes="Bring ladder")

        response = client.put(
            f"/api/quotes/{quote['id']}",
            json={"totalPrice": "175.00", "status": "sent"},
            headers=auth_headers(user),
        )

        updated = response.json()["quote"]
        assert updated["totalPrice"] == "175.00"
        assert updated["status"] == "sent"
        assert updated["notes"] == "Bring ladder"
        assert updated["clientName"] == "Jane Doe"

    def test_delete_frees_a_free_slot(self, client, db, make_user, auth_headers, create_quote):
        user = make_user()
        quotes = [create_quote(user) for _ in range(3)]

        response = client.delete(f"/api/quotes/{quotes[0]['id']}", headers=auth_headers(user))

        assert response.status_code == 200
        assert db.query(Quote).filter(Quote.user_id == user.id).count() == 2
        assert client.post("/api/quotes", json={}, headers=auth_headers(user)).status_code == 201

    def test_quote_for_foreign_client_is_rejected(self, client, make_user, auth_headers):
        owner, other = make_user(), make_user()
        foreign = client.post(
            "/api/clients", json={"name": "Theirs"}, headers=auth_headers(other)
        ).json()

        response = client.post(
            "/api/quotes", json={"clientId": foreign["id"]}, headers=auth_headers(owner)
        )

        assert response.status_code == 404


class TestSendQuote:
    def test_send_marks_quote_sent(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        quote = create_quote(user)

        with patch(
            "app.domain.quotes.service.send_quote_email",
            new=AsyncMock(return_value={"id": "email_123"}),
        ) as send:
            response = client.post(f"/api/quotes/{quote['id']}/send", headers=auth_headers(user))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["emailId"] == "email_123"
        assert body["quote"]["status"] == "sent"
        assert body["quote"]["sentAt"] is not None

        kwargs = send.call_args.kwargs
        assert kwargs["to"] == "jane@example.com"
        assert kwargs["share_url"] == f"https://app.example.com/proposal/{quote['shareToken']}"
        assert kwargs["reply_to"] == user.email

    def test_send_without_client_email(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        quote = create_quote(user, clientEmail=None)

        response = client.post(f"/api/quotes/{quote['id']}/send", headers=auth_headers(user))

        assert response.status_code == 400

    def test_failed_email_leaves_status_unchanged(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        quote = create_quote(user)

        with patch(
            "app.domain.quotes.service.send_quote_email",
            new=AsyncMock(side_effect=EmailDeliveryError("provider down")),
        ):
            response = client.post(f"/api/quotes/{quote['id']}/send", headers=auth_headers(user))

        assert response.status_code == 500
        fetched = client.get(f"/api/quotes/{quote['id']}", headers=auth_headers(user)).json()
        assert fetched["quote"]["status"] == "draft"
