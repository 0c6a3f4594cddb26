"""Tests for subscription status, checkout and the Stripe webhook"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
import stripe

from app import config
from app.domain.billing.subscription_sync import SubscriptionSync
from app.email_service import EmailDeliveryError
from app.models import User


def _event(event_type, obj, event_id="evt_1"):
    return {"id": event_id, "type": event_type, "data": {"object": obj}}


@pytest.fixture
def post_webhook(client, sign_stripe_payload):
    def _post(event, signature=None):
        payload = json.dumps(event)
        headers = {
            "Content-Type": "application/json",
            "stripe-signature": signature if signature is not None else sign_stripe_payload(payload),
        }
        return client.post("/api/subscription/webhook", content=payload, headers=headers)

    return _post


class TestSubscriptionSync:
    def test_subscription_update_is_idempotent(self, db, make_user):
        user = make_user(stripe_customer_id="cus_123")
        event = _event(
            "customer.subscription.updated",
            {"id": "sub_1", "customer": "cus_123", "status": "active"},
        )

        first = SubscriptionSync(db).apply(event)
        db.expire_all()
        after_first = (user.subscription_status, user.subscription_id)
        second = SubscriptionSync(db).apply(event)
        db.expire_all()

        assert first.handled and second.handled
        assert (user.subscription_status, user.subscription_id) == after_first == ("active", None)

    def test_stripe_status_is_stored_verbatim(self, db, make_user):
        user = make_user(stripe_customer_id="cus_123")

        SubscriptionSync(db).apply(
            _event("customer.subscription.updated", {"id": "sub_1", "customer": "cus_123", "status": "trialing"})
        )
        db.expire_all()

        assert user.subscription_status == "trialing"

    def test_deleted_subscription_cancels(self, db, make_user):
        user = make_user(
            stripe_customer_id="cus_123", subscription_status="active", subscription_id="sub_1"
        )

        SubscriptionSync(db).apply(
            _event("customer.subscription.deleted", {"id": "sub_1", "customer": "cus_123"})
        )
        db.expire_all()

        assert user.subscription_status == "canceled"
        assert user.subscription_id is None

    def test_failed_invoice_marks_past_due(self, db, make_user):
        user = make_user(stripe_customer_id="cus_123", subscription_status="active")

        SubscriptionSync(db).apply(
            _event("invoice.payment_failed", {"customer": "cus_123", "subscription": "sub_1"})
        )
        db.expire_all()

        assert user.subscription_status == "past_due"

    def test_checkout_links_customer_from_metadata(self, db, make_user):
        user = make_user()

        result = SubscriptionSync(db).apply(
            _event(
                "checkout.session.completed",
                {
                    "customer": "cus_new",
                    "subscription": "sub_9",
                    "amount_total": 2900,
                    "metadata": {"userId": str(user.id)},
                },
            )
        )
        db.expire_all()

        assert result.handled
        assert user.stripe_customer_id == "cus_new"
        assert user.subscription_status == "active"
        assert user.subscription_id == "sub_9"
        assert result.confirmation["to"] == user.email
        assert result.confirmation["amount"] == 29

    def test_unknown_customer_is_ignored(self, db, make_user):
        user = make_user(stripe_customer_id="cus_123")

        result = SubscriptionSync(db).apply(
            _event("customer.subscription.updated", {"id": "sub_1", "customer": "cus_other", "status": "active"})
        )
        db.expire_all()

        assert not result.handled
        assert user.subscription_status == "free"

    def test_unhandled_event_type(self, db):
        result = SubscriptionSync(db).apply(_event("customer.created", {"customer": "cus_123"}))

        assert not result.handled


class TestWebhookEndpoint:
    def test_signed_event_is_applied(self, post_webhook, db, make_user):
        user = make_user(stripe_customer_id="cus_123")

        response = post_webhook(
            _event("customer.subscription.updated", {"id": "sub_1", "customer": "cus_123", "status": "active"})
        )

        assert response.status_code == 200
        assert response.json() == {"received": True}
        db.expire_all()
        assert db.get(User, user.id).subscription_status == "active"

    def test_redelivery_is_harmless(self, post_webhook, db, make_user):
        user = make_user(stripe_customer_id="cus_123")
        event = _event("invoice.payment_failed", {"customer": "cus_123"})

        assert post_webhook(event).status_code == 200
        assert post_webhook(event).status_code == 200
        db.expire_all()
        assert db.get(User, user.id).subscription_status == "past_due"

    def test_bad_signature_is_rejected(self, post_webhook, sign_stripe_payload, db, make_user):
        user = make_user(stripe_customer_id="cus_123")
        event = _event("customer.subscription.deleted", {"id": "sub_1", "customer": "cus_123"})

        response = post_webhook(event, signature=sign_stripe_payload("{}", secret="whsec_wrong"))

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"
        db.expire_all()
        assert db.get(User, user.id).subscription_status == "free"

    def test_missing_signature_is_rejected(self, post_webhook):
        response = post_webhook(_event("customer.created", {}), signature="")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"
        assert "stripe-signature" in response.json()["message"]

    def test_stale_signature_is_rejected(self, post_webhook, sign_stripe_payload):
        event = _event("customer.created", {})
        stale = sign_stripe_payload(json.dumps(event), timestamp=1_000_000)

        response = post_webhook(event, signature=stale)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_missing_secret_is_rejected(self, post_webhook):
        with patch.object(config, "STRIPE_WEBHOOK_SECRET", None):
            response = post_webhook(_event("customer.created", {}), signature="")

        assert response.status_code == 400
        assert response.json()["message"] == "Webhook secret not configured"

    def test_signed_garbage_body_is_rejected(self, client, sign_stripe_payload):
        response = client.post(
            "/api/subscription/webhook",
            content="not json",
            headers={"stripe-signature": sign_stripe_payload("not json")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_unsigned_event_accepted_when_allowed(self, post_webhook, db, make_user):
        user = make_user(stripe_customer_id="cus_123")
        event = _event("invoice.payment_failed", {"customer": "cus_123"})

        with patch.object(config, "STRIPE_WEBHOOK_SECRET", None), patch.object(
            config, "ALLOW_UNSIGNED_WEBHOOKS", True
        ):
            response = post_webhook(event, signature="")

        assert response.status_code == 200
        db.expire_all()
        assert db.get(User, user.id).subscription_status == "past_due"

    def test_checkout_redelivery_survives_email_failure(self, post_webhook, db, make_user):
        user = make_user()
        event = _event(
            "checkout.session.completed",
            {
                "customer": "cus_new",
                "subscription": "sub_1",
                "amount_total": 2900,
                "metadata": {"userId": str(user.id)},
            },
        )
        failing_send = AsyncMock(side_effect=EmailDeliveryError("Resend is down"))

        with patch("app.domain.billing.router.send_payment_confirmation_email", failing_send):
            first = post_webhook(event)
            second = post_webhook(event)

        assert first.status_code == 200
        assert second.status_code == 200
        db.expire_all()
        stored = db.get(User, user.id)
        assert stored.subscription_status == "active"
        assert stored.subscription_id == "sub_1"
        assert stored.stripe_customer_id == "cus_new"
        assert failing_send.await_count == 2

    def test_unhandled_event_is_acknowledged(self, post_webhook):
        response = post_webhook(_event("charge.refunded", {"customer": "cus_123"}))

        assert response.status_code == 200


class TestSubscriptionEndpoints:
    def test_status(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        create_quote(user)

        body = client.get("/api/subscription/status", headers=auth_headers(user)).json()

        assert body == {
            "status": "free",
            "isActive": False,
            "quoteCount": 1,
            "quotesRemaining": 2,
            "canCreateQuote": True,
        }

    def test_checkout_without_stripe_configured(self, client, make_user, auth_headers):
        response = client.post(
            "/api/subscription/create-checkout", json={"plan": "monthly"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 500

    def test_checkout_creates_customer_and_session(self, client, db, make_user, auth_headers):
        user = make_user()
        session = SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.com/c/cs_test_1")

        with patch.object(config, "STRIPE_SECRET_KEY", "sk_test"), patch.object(
            config, "STRIPE_PRICE_MONTHLY", "price_monthly"
        ), patch(
            "app.domain.billing.stripe_service.stripe.Customer.create",
            return_value=SimpleNamespace(id="cus_abc"),
        ), patch(
            "app.domain.billing.stripe_service.stripe.checkout.Session.create",
            return_value=session,
        ) as create_session:
            response = client.post(
                "/api/subscription/create-checkout", json={"plan": "monthly"}, headers=auth_headers(user)
            )

        assert response.status_code == 200
        assert response.json() == {"sessionId": "cs_test_1", "url": session.url}
        assert create_session.call_args.kwargs["customer"] == "cus_abc"
        db.expire_all()
        assert db.get(User, user.id).stripe_customer_id == "cus_abc"

    def test_checkout_stripe_failure(self, client, make_user, auth_headers):
        user = make_user(stripe_customer_id="cus_abc")

        with patch.object(config, "STRIPE_SECRET_KEY", "sk_test"), patch.object(
            config, "STRIPE_PRICE_MONTHLY", "price_monthly"
        ), patch(
            "app.domain.billing.stripe_service.stripe.checkout.Session.create",
            side_effect=stripe.StripeError("card network down"),
        ):
            response = client.post(
                "/api/subscription/create-checkout", json={"plan": "monthly"}, headers=auth_headers(user)
            )

        assert response.status_code == 500

    def test_billing_portal_requires_customer(self, client, make_user, auth_headers):
        with patch.object(config, "STRIPE_SECRET_KEY", "sk_test"):
            response = client.post("/api/subscription/billing-portal", headers=auth_headers(make_user()))

        assert response.status_code == 400
