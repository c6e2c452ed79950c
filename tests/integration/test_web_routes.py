"""
Integration tests for the server-rendered pages
"""

import re

import pytest

from tests.utils.factories import ReminderFactory
from tests.utils.forms import submit_form

pytestmark = [pytest.mark.integration, pytest.mark.web]


def _created_id(response) -> int:
    match = re.fullmatch(r"/reminder/(\d+)", response.headers["location"])
    assert match, response.headers["location"]
    return int(match.group(1))


class TestHomePage:

    def test_empty_list_renders(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "No reminders yet." in response.text

    def test_lists_reminders(self, client):
        payload = ReminderFactory.create_payload()
        created = client.post("/api/reminders/create", json=payload).json()

        response = client.get("/")
        assert payload["title"] in response.text
        assert f'href="/reminder/{created["id"]}"' in response.text

    def test_reminder_markup_is_escaped(self, client):
        client.post("/api/reminders/create", json=ReminderFactory.create_malicious_payload())

        response = client.get("/")
        assert "<script>alert" not in response.text
        assert "&lt;script&gt;" in response.text


class TestReminderDetail:

    def test_detail_page(self, client, sample_reminder_data):
        created = client.post("/api/reminders/create", json=sample_reminder_data).json()

        response = client.get(f"/reminder/{created['id']}")
        assert response.status_code == 200
        assert sample_reminder_data["title"] in response.text
        assert sample_reminder_data["description"] in response.text

    def test_unknown_id_renders_not_found_page(self, client):
        response = client.get("/reminder/12345")

        assert response.status_code == 404
        assert "text/html" in response.headers["content-type"]
        assert "Reminder 12345 not found" in response.text

    def test_non_integer_id_renders_bad_request_page(self, client):
        response = client.get("/reminder/abc")

        assert response.status_code == 400
        assert "text/html" in response.headers["content-type"]
        assert "Bad request" in response.text


class TestCreateFlow:

    def test_create_form_requires_login(self, client):
        response = client.get("/create", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_create_form_when_logged_in(self, authenticated_client):
        response = authenticated_client.get("/create")

        assert response.status_code == 200
        assert 'name="title"' in response.text
        assert 'name="description"' in response.text
        assert 'name="csrf_token"' in response.text

    def test_post_create_redirects_to_detail(self, authenticated_client, sample_reminder_data):
        response = submit_form(
            authenticated_client, "/create", sample_reminder_data, follow_redirects=False
        )

        assert response.status_code == 302
        reminder_id = _created_id(response)

        fetched = authenticated_client.get(f"/api/reminders/{reminder_id}").json()
        assert fetched["title"] == sample_reminder_data["title"]
        assert fetched["description"] == sample_reminder_data["description"]

    def test_post_create_follow_redirect_renders_detail(self, authenticated_client, sample_reminder_data):
        response = submit_form(authenticated_client, "/create", sample_reminder_data)

        assert response.status_code == 200
        assert sample_reminder_data["description"] in response.text

    @pytest.mark.parametrize("data", [
        {"title": "only title"},
        {"description": "only description"},
        {},
        {"title": "", "description": "blank"},
        {"title": "blank", "description": "   "},
    ])
    def test_post_create_missing_fields_is_bad_request(self, authenticated_client, data):
        response = submit_form(authenticated_client, "/create", data, follow_redirects=False)

        assert response.status_code == 400
        assert "is required" in response.text
        assert authenticated_client.get("/api/reminders").json() == []

    def test_post_create_keeps_entered_values(self, authenticated_client):
        response = submit_form(authenticated_client, "/create", {"title": "Keep me"})
        assert 'value="Keep me"' in response.text


class TestLoginPage:

    def test_login_form_renders(self, client):
        response = client.get("/login")

        assert response.status_code == 200
        assert 'name="username"' in response.text
        assert 'type="password"' in response.text

    def test_login_page_redirects_when_already_logged_in(self, authenticated_client):
        response = authenticated_client.get("/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_successful_login_redirects_home(self, seeded_client):
        response = submit_form(
            seeded_client,
            "/login",
            {"username": "tim", "password": "tim"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert "reminders-session" in response.headers.get("set-cookie", "")

    def test_home_shows_logged_in_user(self, authenticated_client):
        response = authenticated_client.get("/")
        assert "Signed in as tim" in response.text
