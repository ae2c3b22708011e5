import pytest
from storefront.models.user import User
from storefront.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from storefront.uow import SQLAlchemyUnitOfWork as RWuow

from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            user = UserFactory.build()  # not persisted
            uow.session.add(user)
            uow.session.flush()

    def test_allows_reads(self, session):
        with RWuow() as uow:
            uow.users.add(UserFactory.build(username="reader"))

        with ROuow() as uow:
            assert uow.users.get_by_username("reader") is not None

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_removed_on_exit(self, session):
        with ROuow():
            pass
        # Writes work again once the read-only scope is closed
        with RWuow() as uow:
            uow.users.add(UserFactory.build(username="after-ro"))
        assert session.query(User).filter_by(username="after-ro").count() == 1
