"""Tests for signup, login and profile"""

from datetime import timedelta

from app.security_utils import create_access_token


class TestRegister:
    def test_register_returns_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Example.com", "password": "s3cret-pass", "businessName": "Fresh Start"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["subscriptionStatus"] == "free"
        assert body["user"]["role"] == "owner"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.json()["businessName"] == "Fresh Start"

    def test_duplicate_email(self, client, make_user):
        user = make_user()

        response = client.post(
            "/api/auth/register", json={"email": user.email, "password": "another-pass"}
        )

        assert response.status_code == 409

    def test_short_password(self, client):
        response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "short"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "password"


class TestLogin:
    def test_login(self, client, make_user):
        user = make_user()

        response = client.post(
            "/api/auth/login", json={"email": user.email.upper(), "password": "password123"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    def test_wrong_password(self, client, make_user):
        response = client.post(
            "/api/auth/login", json={"email": make_user().email, "password": "wrong-password"}
        )

        assert response.status_code == 401


class TestAuthentication:
    def test_missing_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_expired_token(self, client, make_user):
        token = create_access_token(make_user().id, expires_delta=timedelta(minutes=-1))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_profile_update(self, client, make_user, auth_headers):
        user = make_user()

        response = client.put(
            "/api/auth/profile", json={"businessName": "Shine Bros", "phone": "555-0199"}, headers=auth_headers(user)
        )

        assert response.json()["businessName"] == "Shine Bros"
        assert response.json()["name"] == user.name
