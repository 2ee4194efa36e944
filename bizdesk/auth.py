"""
BIZDESK - Auth Context
======================
Holds the signed-in account. Every store asks it for the current user
before touching the backend.
"""

import logging
from typing import Any, Optional

from supabase import AuthError

from .errors import AuthenticationFailed, NotAuthenticated
from .i18n import tr
from .schema import CurrentUser

logger = logging.getLogger("bizdesk.auth")


def user_from_account(account: Any) -> CurrentUser:
    """Map a Supabase auth user onto CurrentUser"""
    metadata = getattr(account, "user_metadata", None) or {}
    return CurrentUser(
        id=str(account.id),
        email=getattr(account, "email", None),
        full_name=metadata.get("full_name"),
    )


class AuthContext:
    """
    Current user identity plus sign-in / sign-out.

    `client` is a Supabase client; it may be None when the context is only
    used to carry an already known user.
    """

    def __init__(self, client: Optional[Any] = None, user: Optional[CurrentUser] = None):
        self.client = client
        self._user = user

    @property
    def user(self) -> Optional[CurrentUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> CurrentUser:
        """Return the current user or raise NotAuthenticated"""
        if self._user is None:
            raise NotAuthenticated(tr("common.unauthenticated"))
        return self._user

    def sign_in(self, email: str, password: str) -> CurrentUser:
        """Sign in with e-mail and password"""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.warning(f"Sign-in rejected for {email}: {e.message}")
            raise AuthenticationFailed(tr("common.sign_in_failed", reason=e.message)) from e

        if response.user is None:
            raise AuthenticationFailed(tr("common.sign_in_failed", reason=email))

        self._user = user_from_account(response.user)
        logger.info(f"Signed in as {self._user.display_name}")
        return self._user

    def sign_out(self) -> None:
        """Drop the session locally and on the backend"""
        if self._user is None:
            return
        try:
            if self.client is not None:
                self.client.auth.sign_out()
        except AuthError as e:
            logger.warning(f"Sign-out failed: {e.message}")
        finally:
            logger.info(f"Signed out {self._user.display_name}")
            self._user = None
