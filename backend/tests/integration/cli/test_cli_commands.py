"""Tests for the ``flask sessions`` and ``flask users`` command groups."""

from __future__ import annotations

import json

import pytest
from storefront.models.user import User

from tests.factories.user import UserFactory


class TestSessionsCommands:
    def test_count(self, runner, refresh_store):
        refresh_store.add("a")
        refresh_store.add("b")
        result = runner.invoke(args=["sessions", "count"])
        assert result.exit_code == 0
        assert "Active sessions: 2" in result.output

    def test_flush(self, runner, refresh_store):
        refresh_store.add("a")
        result = runner.invoke(args=["sessions", "flush", "--yes"])
        assert result.exit_code == 0
        assert "Revoked 1 session(s)." in result.output
        assert refresh_store.size() == 0

    def test_flush_requires_confirmation(self, runner, refresh_store):
        refresh_store.add("a")
        result = runner.invoke(args=["sessions", "flush"], input="n\n")
        assert result.exit_code != 0
        assert refresh_store.size() == 1

    def test_flush_refused_in_production(self, app, runner, refresh_store, monkeypatch):
        monkeypatch.setitem(app.config, "APP_ENV", "production")
        refresh_store.add("a")
        result = runner.invoke(args=["sessions", "flush", "--yes"])
        assert result.exit_code != 0
        assert "non-production" in result.output
        assert refresh_store.size() == 1


class TestUsersImport:
    @pytest.fixture
    def users_file(self, tmp_path):
        entries = [
            {
                "username": "bob",
                "email": "bob@example.com",
                "password": "bob-password",
                "name": "Bob",
            },
            {
                "username": "root",
                "email": "root@example.com",
                "password": "root-password",
                "name": "Root",
                "role": "admin",
            },
            {"username": "x", "email": "bad", "password": "short", "name": ""},
            {
                "username": "taken",
                "email": "taken@example.com",
                "password": "taken-password",
                "name": "Taken",
            },
        ]
        path = tmp_path / "users.json"
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path

    def test_import_skips_invalid_and_conflicting(self, runner, session, users_file):
        UserFactory(username="taken")
        session.commit()

        result = runner.invoke(args=["users", "import", str(users_file)])

        assert result.exit_code == 0, result.output
        assert "Created 2 user(s), skipped 2." in result.output
        root = session.query(User).filter_by(username="root").one()
        assert root.role == "customer"

    def test_import_keeps_admin_when_allowed(self, runner, session, users_file):
        result = runner.invoke(args=["users", "import", str(users_file), "--allow-admin"])

        assert result.exit_code == 0, result.output
        root = session.query(User).filter_by(username="root").one()
        assert root.role == "admin"

    def test_import_rejects_non_array(self, runner, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps({"username": "bob"}), encoding="utf-8")
        result = runner.invoke(args=["users", "import", str(path)])
        assert result.exit_code != 0
        assert "JSON array" in result.output


class TestUsersSetPassword:
    def test_updates_password(self, runner, session):
        user = UserFactory(username="bob", password="old-password")
        session.commit()

        result = runner.invoke(
            args=["users", "set-password", "bob", "--password", "new-password"]
        )

        assert result.exit_code == 0, result.output
        assert "Password updated for bob." in result.output
        session.refresh(user)
        assert user.verify_password("new-password")

    def test_prompts_with_confirmation(self, runner, session):
        user = UserFactory(username="bob", password="old-password")
        session.commit()

        result = runner.invoke(
            args=["users", "set-password", "bob"], input="new-password\nnew-password\n"
        )

        assert result.exit_code == 0, result.output
        session.refresh(user)
        assert user.verify_password("new-password")

    def test_rejects_short_password(self, runner, session):
        user = UserFactory(username="bob", password="old-password")
        session.commit()

        result = runner.invoke(args=["users", "set-password", "bob", "--password", "short"])

        assert result.exit_code != 0
        session.refresh(user)
        assert user.verify_password("old-password")

    def test_unknown_user(self, runner):
        result = runner.invoke(
            args=["users", "set-password", "nobody", "--password", "new-password"]
        )
        assert result.exit_code != 0
        assert "No user named 'nobody'." in result.output
