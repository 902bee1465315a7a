"""
Core security - authentication classes for API.
"""

from django.http import HttpRequest
from ninja.security import HttpBearer
from stytch.core.response_base import StytchError

from apps.core.auth import AuthContext
from apps.core.logging import bind_contextvars, get_logger

logger = get_logger(__name__)


class BearerAuth(HttpBearer):
    """
    Bearer token authentication for API endpoints.

    The token is a Stytch session JWT. A valid session resolves to the
    member_id of the principal, which is also the primary key of the
    local User record.
    """

    def authenticate(self, request: HttpRequest, token: str) -> AuthContext | None:
        """
        Validate the session JWT and build the request's AuthContext.

        Returns None (triggers 401) if the token is missing or invalid.
        """
        if not token:
            return None

        from apps.accounts.models import User
        from apps.accounts.stytch_client import get_stytch_client

        try:
            response = get_stytch_client().sessions.authenticate_jwt(session_jwt=token)
        except StytchError as e:
            logger.info("session_jwt_rejected", reason=e.details.error_message)
            return None

        uid = response.member_session.member_id
        user = User.objects.filter(uid=uid).first()

        bind_contextvars(**{"usr.id": uid})
        return AuthContext(uid=uid, user=user)


def get_auth_context(request: HttpRequest) -> AuthContext:
    """
    Get the AuthContext set by BearerAuth.

    Returns an empty (unauthenticated) context when the endpoint ran
    without authentication.
    """
    auth = getattr(request, "auth", None)
    if isinstance(auth, AuthContext):
        return auth
    return AuthContext()
