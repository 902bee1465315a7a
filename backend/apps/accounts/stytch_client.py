"""
Stytch B2B client wrapper.

Stytch is the identity store: it owns principals (organization members)
and validates session JWTs. The application runs inside a single Stytch
organization configured by STYTCH_ORGANIZATION_ID.
"""

from functools import lru_cache

import stytch
from django.conf import settings


@lru_cache(maxsize=1)
def get_stytch_client() -> stytch.B2BClient:
    """
    Get configured Stytch B2B client (singleton).

    Uses lru_cache to ensure only one client instance is created.
    """
    return stytch.B2BClient(
        project_id=settings.STYTCH_PROJECT_ID,
        secret=settings.STYTCH_SECRET,
    )


def delete_member(member_id: str) -> None:
    """
    Delete a principal from the identity store.

    Raises:
        StytchError: If Stytch rejects the call (e.g. member_not_found)
    """
    get_stytch_client().organizations.members.delete(
        organization_id=settings.STYTCH_ORGANIZATION_ID,
        member_id=member_id,
    )


def create_member(email: str, name: str = "") -> str:
    """
    Create a principal in the identity store.

    Returns:
        The new Stytch member_id

    Raises:
        StytchError: If Stytch rejects the call (e.g. duplicate_email)
    """
    response = get_stytch_client().organizations.members.create(
        organization_id=settings.STYTCH_ORGANIZATION_ID,
        email_address=email,
        name=name or None,
    )
    return response.member.member_id


def revoke_member_sessions(member_id: str) -> None:
    """Revoke every active session of a principal."""
    get_stytch_client().sessions.revoke(member_id=member_id)


def send_password_reset(email: str) -> None:
    """Send a password reset email to a principal."""
    get_stytch_client().passwords.email.reset_start(
        organization_id=settings.STYTCH_ORGANIZATION_ID,
        email_address=email,
    )
