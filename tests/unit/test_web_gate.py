"""
Unit tests for the session gate and structured log formatting
"""

import json
import logging
from datetime import timedelta
from unittest.mock import patch

import pytest
from starlette.requests import Request

from reminders.core.exceptions import LoginRequired
from reminders.core.logging_config import StructuredFormatter
from reminders.core.utils.session_store import SessionStore
from reminders.web.utils.auth import SESSION_TOKEN_KEY, get_session_token, has_valid_session, require_user

pytestmark = pytest.mark.unit


def _request(session: dict) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/create", "headers": [], "session": session})


class TestHasValidSession:

    def test_no_token(self, session_store):
        assert has_valid_session(_request({}), session_store) is False

    def test_unknown_token(self, session_store):
        assert has_valid_session(_request({SESSION_TOKEN_KEY: "nope"}), session_store) is False

    def test_live_token(self, session_store, demo_user):
        token = session_store.create(demo_user.id)
        assert has_valid_session(_request({SESSION_TOKEN_KEY: token}), session_store) is True

    def test_predicate_is_idempotent_and_side_effect_free(self, session_store, demo_user):
        token = session_store.create(demo_user.id)
        session = {SESSION_TOKEN_KEY: token}
        request = _request(session)

        results = [has_valid_session(request, session_store) for _ in range(3)]

        assert results == [True, True, True]
        assert session == {SESSION_TOKEN_KEY: token}

    def test_non_string_token_ignored(self):
        assert get_session_token(_request({SESSION_TOKEN_KEY: 123})) is None


class TestRequireUser:

    def test_anonymous_request_is_sent_to_login(self, session_store, auth_service):
        with pytest.raises(LoginRequired):
            require_user(_request({}), store=session_store, auth=auth_service)

    def test_live_session_yields_user(self, session_store, auth_service, demo_user):
        token = session_store.create(demo_user.id)
        user = require_user(_request({SESSION_TOKEN_KEY: token}), store=session_store, auth=auth_service)

        assert user.username == "tim"

    def test_gate_decision_comes_from_predicate(self, session_store, auth_service, demo_user):
        token = session_store.create(demo_user.id)
        with patch("reminders.web.utils.auth.has_valid_session", return_value=False) as predicate:
            with pytest.raises(LoginRequired):
                require_user(_request({SESSION_TOKEN_KEY: token}), store=session_store, auth=auth_service)
        predicate.assert_called_once()

    def test_expired_session_is_sent_to_login(self, db_session, auth_service, demo_user):
        expired_store = SessionStore(db_session, lifetime=timedelta(seconds=-1))
        token = expired_store.create(demo_user.id)

        with pytest.raises(LoginRequired):
            require_user(_request({SESSION_TOKEN_KEY: token}), store=expired_store, auth=auth_service)


class TestStructuredFormatter:

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("reminders.test", logging.INFO, __file__, 1, "hello %s", ("tim",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_json(self):
        entry = json.loads(StructuredFormatter().format(self._record()))

        assert entry["message"] == "hello tim"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "reminders.test"

    def test_redacts_sensitive_extra_fields(self):
        entry = json.loads(StructuredFormatter().format(self._record(password="hunter2", reminder_id=7)))

        assert entry["extra"]["password"] == "[REDACTED]"
        assert entry["extra"]["reminder_id"] == 7

    def test_include_sensitive_keeps_values(self):
        formatter = StructuredFormatter(include_sensitive=True)
        entry = json.loads(formatter.format(self._record(session_token="abc")))

        assert entry["extra"]["session_token"] == "abc"
