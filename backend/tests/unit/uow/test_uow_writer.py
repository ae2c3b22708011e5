"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from storefront.models import User
from storefront.uow import SQLAlchemyUnitOfWork

from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db, session):
        """
        GIVEN a writer UoW
        WHEN a user is added through the repository and the block exits cleanly
        THEN the row is visible afterwards.
        """
        initial = db.session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        assert db.session.query(User).count() == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db, session):
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert db.session.query(User).count() == initial
