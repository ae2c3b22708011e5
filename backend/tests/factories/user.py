"""Factory Boy definition for :class:`storefront.models.user.User`."""

from __future__ import annotations

import factory
from storefront.models.user import User, UserRole

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`storefront.models.user.User` instances.

    Notes
    -----
    - The password is set through the model setter so it is always hashed;
      pass ``password=...`` to choose it.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Faker("name")
    role = UserRole.CUSTOMER.value
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD
