"""
Unit tests for the server-side session store
"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from reminders.core.utils.session_store import SessionStore, hash_token, utcnow
from reminders.db.models.session_store import SessionRecord

pytestmark = pytest.mark.unit


class TestSessionStore:

    def test_created_token_resolves_to_user(self, session_store, demo_user):
        token = session_store.create(demo_user.id)
        assert session_store.get_user_id(token) == demo_user.id

    def test_tokens_are_unique(self, session_store, demo_user):
        assert session_store.create(demo_user.id) != session_store.create(demo_user.id)

    def test_token_is_stored_hashed(self, session_store, db_session, demo_user):
        token = session_store.create(demo_user.id)
        keys = db_session.scalars(select(SessionRecord.key)).all()

        assert token not in keys
        assert hash_token(token) in keys

    @pytest.mark.parametrize("token", [None, "", "unknown-token", 12345])
    def test_unknown_or_invalid_token_resolves_to_none(self, session_store, token):
        assert session_store.get_user_id(token) is None

    def test_lookup_is_read_only(self, session_store, db_session, demo_user):
        token = session_store.create(demo_user.id)
        before = db_session.scalars(select(SessionRecord.key)).all()

        for _ in range(3):
            session_store.get_user_id(token)
            session_store.get_user_id("unknown")

        assert db_session.scalars(select(SessionRecord.key)).all() == before

    def test_expired_session_does_not_resolve(self, db_session, demo_user):
        store = SessionStore(db_session, lifetime=timedelta(seconds=-1))
        token = store.create(demo_user.id)
        assert store.get_user_id(token) is None

    def test_delete_invalidates_session(self, session_store, demo_user):
        token = session_store.create(demo_user.id)

        assert session_store.delete(token) is True
        assert session_store.get_user_id(token) is None
        assert session_store.delete(token) is False

    def test_purge_expired_removes_only_expired(self, db_session, demo_user):
        live = SessionStore(db_session, lifetime=timedelta(minutes=5))
        dead = SessionStore(db_session, lifetime=timedelta(seconds=-1))
        live_token = live.create(demo_user.id)
        dead.create(demo_user.id)
        dead.create(demo_user.id)

        assert live.purge_expired() == 2
        assert live.get_user_id(live_token) == demo_user.id

    def test_session_survives_new_store_instance(self, session_factory, demo_user):
        """A fresh DB session (e.g. after a restart) still sees the record"""
        with session_factory() as first:
            token = SessionStore(first).create(demo_user.id)
        with session_factory() as second:
            assert SessionStore(second).get_user_id(token) == demo_user.id

    def test_utcnow_is_naive(self):
        assert utcnow().tzinfo is None
