"""Tests for checklist templates and quote checklists"""

import pytest

from app.models import QuoteChecklist

ROOMS = [
    {"name": "Kitchen", "tasks": ["Wipe counters", "Clean sink"]},
    {"name": "Bathroom", "tasks": ["Scrub tub"]},
]


@pytest.fixture
def owner(make_user):
    return make_user()


@pytest.fixture
def headers(owner, auth_headers):
    return auth_headers(owner)


class TestTemplates:
    def test_crud(self, client, headers):
        created = client.post(
            "/api/checklist-templates", json={"name": "Standard", "rooms": ROOMS}, headers=headers
        )
        assert created.status_code == 201
        template = created.json()
        assert template["rooms"] == ROOMS
        assert template["isDefault"] is False

        renamed = client.put(
            f"/api/checklist-templates/{template['id']}", json={"name": "Standard clean"}, headers=headers
        ).json()
        assert renamed["name"] == "Standard clean"
        assert renamed["rooms"] == ROOMS

        assert client.delete(
            f"/api/checklist-templates/{template['id']}", headers=headers
        ).status_code == 200
        assert client.get("/api/checklist-templates", headers=headers).json() == []

    def test_single_default(self, client, headers):
        first = client.post(
            "/api/checklist-templates", json={"name": "A", "isDefault": True}, headers=headers
        ).json()
        client.post("/api/checklist-templates", json={"name": "B", "isDefault": True}, headers=headers)

        templates = client.get("/api/checklist-templates", headers=headers).json()

        defaults = [t["name"] for t in templates if t["isDefault"]]
        assert defaults == ["B"]
        assert client.get(
            f"/api/checklist-templates/{first['id']}", headers=headers
        ).json()["isDefault"] is False

    def test_other_tenant_template_not_found(self, client, headers, make_user, auth_headers):
        template = client.post(
            "/api/checklist-templates", json={"name": "Mine"}, headers=headers
        ).json()

        response = client.get(
            f"/api/checklist-templates/{template['id']}", headers=auth_headers(make_user())
        )

        assert response.status_code == 404


class TestQuoteChecklist:
    def test_attach_progress_and_remove(self, client, owner, headers, create_quote):
        quote = create_quote(owner)
        template = client.post(
            "/api/checklist-templates", json={"name": "Standard", "rooms": ROOMS}, headers=headers
        ).json()
        url = f"/api/quotes/{quote['id']}/checklist"

        assert client.get(url, headers=headers).json() == {"checklist": None}

        attached = client.post(url, json={"templateId": template["id"]}, headers=headers).json()
        assert attached["checklist"]["rooms"] == ROOMS
        assert attached["checklist"]["completedTasks"] == []

        progress = client.put(
            url,
            json={"completedTasks": ["Kitchen:Wipe counters", "Kitchen:Wipe counters"]},
            headers=headers,
        ).json()
        assert progress["checklist"]["completedTasks"] == ["Kitchen:Wipe counters"]

        assert client.delete(url, headers=headers).status_code == 200
        assert client.get(url, headers=headers).json() == {"checklist": None}

    def test_reattach_resets_progress(self, client, owner, headers, create_quote):
        quote = create_quote(owner)
        url = f"/api/quotes/{quote['id']}/checklist"
        client.post(url, json={"rooms": ROOMS}, headers=headers)
        client.put(url, json={"completedTasks": ["Bathroom:Scrub tub"]}, headers=headers)

        reattached = client.post(url, json={"rooms": ROOMS[:1]}, headers=headers).json()

        assert reattached["checklist"]["rooms"] == ROOMS[:1]
        assert reattached["checklist"]["completedTasks"] == []

    def test_deleting_template_keeps_snapshot(self, client, owner, headers, create_quote):
        quote = create_quote(owner)
        template = client.post(
            "/api/checklist-templates", json={"name": "Standard", "rooms": ROOMS}, headers=headers
        ).json()
        url = f"/api/quotes/{quote['id']}/checklist"
        client.post(url, json={"templateId": template["id"]}, headers=headers)

        client.delete(f"/api/checklist-templates/{template['id']}", headers=headers)

        checklist = client.get(url, headers=headers).json()["checklist"]
        assert checklist["templateId"] is None
        assert checklist["rooms"] == ROOMS

    def test_attach_requires_rooms_or_template(self, client, owner, headers, create_quote):
        quote = create_quote(owner)

        response = client.post(f"/api/quotes/{quote['id']}/checklist", json={}, headers=headers)

        assert response.status_code == 400

    def test_progress_without_checklist(self, client, owner, headers, create_quote):
        quote = create_quote(owner)

        response = client.put(
            f"/api/quotes/{quote['id']}/checklist", json={"completedTasks": []}, headers=headers
        )

        assert response.status_code == 404

    def test_deleting_quote_removes_checklist(self, client, db, owner, headers, create_quote):
        quote = create_quote(owner)
        client.post(f"/api/quotes/{quote['id']}/checklist", json={"rooms": ROOMS}, headers=headers)

        client.delete(f"/api/quotes/{quote['id']}", headers=headers)

        assert db.query(QuoteChecklist).count() == 0
