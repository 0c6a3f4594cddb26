"""Tests for the client directory"""


class TestClients:
    def test_crud(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())

        created = client.post(
            "/api/clients",
            json={"name": "  Jane Doe ", "email": "Jane@Example.com", "phone": "555-0100"},
            headers=headers,
        )
        assert created.status_code == 201
        client_id = created.json()["id"]
        assert created.json()["name"] == "Jane Doe"
        assert created.json()["email"] == "jane@example.com"

        updated = client.put(
            f"/api/clients/{client_id}", json={"address": "12 Elm St"}, headers=headers
        ).json()
        assert updated["address"] == "12 Elm St"
        assert updated["phone"] == "555-0100"

        assert len(client.get("/api/clients", headers=headers).json()) == 1
        assert client.delete(f"/api/clients/{client_id}", headers=headers).status_code == 200
        assert client.get(f"/api/clients/{client_id}", headers=headers).status_code == 404

    def test_name_is_required(self, client, make_user, auth_headers):
        response = client.post("/api/clients", json={"name": "   "}, headers=auth_headers(make_user()))

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_invalid_email(self, client, make_user, auth_headers):
        response = client.post(
            "/api/clients", json={"name": "Jane", "email": "not-an-email"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 400

    def test_scoped_to_owner(self, client, make_user, auth_headers):
        owner, other = make_user(), make_user()
        created = client.post("/api/clients", json={"name": "Jane"}, headers=auth_headers(owner)).json()

        assert client.get("/api/clients", headers=auth_headers(other)).json() == []
        assert client.get(
            f"/api/clients/{created['id']}", headers=auth_headers(other)
        ).status_code == 404


class TestClientQuotes:
    def test_lists_only_that_clients_quotes(self, client, make_user, auth_headers, create_quote):
        user = make_user()
        headers = auth_headers(user)
        jane = client.post("/api/clients", json={"name": "Jane Doe"}, headers=headers).json()
        bob = client.post("/api/clients", json={"name": "Bob Roe"}, headers=headers).json()
        first = create_quote(user, clientId=jane["id"])
        second = create_quote(user, clientId=jane["id"])
        create_quote(user, clientId=bob["id"])

        response = client.get(f"/api/clients/{jane['id']}/quotes", headers=headers)

        assert response.status_code == 200
        assert {q["id"] for q in response.json()["quotes"]} == {first["id"], second["id"]}

    def test_other_tenants_client_is_not_found(self, client, make_user, auth_headers):
        owner_headers = auth_headers(make_user())
        jane = client.post("/api/clients", json={"name": "Jane Doe"}, headers=owner_headers).json()

        response = client.get(f"/api/clients/{jane['id']}/quotes", headers=auth_headers(make_user()))

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
