"""Service layer public API.

This package exposes the service-layer building blocks so that callers can
import from :mod:`storefront.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``storefront.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Session lifecycle (from ``storefront.services.auth``)
    * :class:`SessionManager`
    * DTOs: :class:`LoginIn`, :class:`LoginOut`, :class:`RefreshIn`,
      :class:`RefreshOut`, :class:`LogoutIn`, :class:`AuthTokenConfig`

- Registration (from ``storefront.services.registration``)
    * :class:`UserRegistrationService`
    * DTOs: :class:`UserRegistrationIn`, :class:`BulkRegistrationOut`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import UserPublicOut
from .auth.dto import AuthTokenConfig, LoginIn, LoginOut, LogoutIn, RefreshIn, RefreshOut
from .auth.service import SessionManager
from .registration.dto import BulkRegistrationOut, UserRegistrationIn
from .registration.service import UserRegistrationService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "UserPublicOut",
    # Sessions
    "SessionManager",
    "AuthTokenConfig",
    "LoginIn",
    "LoginOut",
    "RefreshIn",
    "RefreshOut",
    "LogoutIn",
    # Registration
    "UserRegistrationService",
    "UserRegistrationIn",
    "BulkRegistrationOut",
]
