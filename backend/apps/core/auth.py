"""
Authentication context for request lifecycle.

Provides a typed container for authentication state that BearerAuth
populates and endpoints consume.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ninja.errors import HttpError

if TYPE_CHECKING:
    from apps.accounts.models import User


@dataclass
class AuthContext:
    """
    Authentication context attached to requests as ``request.auth``.

    The principal id and the local user record are tracked separately:
    a valid Stytch session may belong to a member that has no ``User``
    row (never provisioned, or already deleted).

    Attributes:
        uid: Stytch member_id of the authenticated principal, or None
        user: The caller's local User record, or None if it does not exist
    """

    uid: str | None = None
    user: "User | None" = None

    @property
    def is_authenticated(self) -> bool:
        """Check if a principal was authenticated for this request."""
        return self.uid is not None

    def require_auth(self) -> "User":
        """
        Get the caller's User or raise.

        Raises:
            HttpError 401: If no principal is authenticated
            HttpError 403: If the principal has no active user profile
        """
        if self.uid is None:
            raise HttpError(401, "Not authenticated")
        if self.user is None or not self.user.is_active:
            raise HttpError(403, "User profile not found or inactive")
        return self.user

    def require_role(self, *roles: str) -> "User":
        """
        Get the caller's User and verify it holds one of ``roles``.

        Raises:
            HttpError 401: If not authenticated
            HttpError 403: If the caller's role is not allowed
        """
        user = self.require_auth()
        if user.role not in roles:
            raise HttpError(403, "Insufficient permissions")
        return user

    def require_admin(self) -> "User":
        """Get the caller's User and verify the admin role, or raise 401/403."""
        user = self.require_auth()
        if not user.is_admin:
            raise HttpError(403, "Admin access required")
        return user
