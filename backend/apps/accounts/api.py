"""
User API endpoints.

Handles user management:
- Current user profile
- User listing, creation and updates (admin only)
- Forced logout and password reset (admin only)
- Complete deletion with inspection preservation (admin only)
"""

from ninja import Router
from ninja.errors import HttpError
from stytch.core.response_base import StytchError

from apps.accounts import services
from apps.accounts.deletion import delete_user_complete
from apps.accounts.exceptions import UserDeletionError
from apps.accounts.models import User
from apps.accounts.schemas import (
    CreateUserRequest,
    DeleteUserRequest,
    DeleteUserResponse,
    UpdateUserRequest,
    UserListResponse,
    UserResponse,
)
from apps.core.logging import get_logger
from apps.core.schemas import CodedErrorResponse, ErrorResponse, MessageResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest

logger = get_logger(__name__)

router = Router(tags=["users"])
bearer_auth = BearerAuth()


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        uid=user.uid,
        role=user.role,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        photo_url=user.photo_url,
        is_active=user.is_active,
        is_first_login=user.is_first_login,
        created_at=user.created_at,
    )


def _get_user_or_404(uid: str) -> User:
    user = User.objects.filter(uid=uid).first()
    if user is None:
        raise HttpError(404, "User not found")
    return user


@router.get(
    "/me",
    response={200: UserResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="getCurrentUser",
    summary="Get current user profile",
)
def get_current_user(request: AuthenticatedHttpRequest) -> UserResponse:
    """Get the authenticated caller's profile."""
    return _to_response(get_auth_context(request).require_auth())


@router.get(
    "/",
    response={200: UserListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="listUsers",
    summary="List all users",
)
def list_users(request: AuthenticatedHttpRequest) -> UserListResponse:
    """List all users ordered by username. Admin only."""
    get_auth_context(request).require_admin()

    users = [_to_response(user) for user in services.list_users()]
    return UserListResponse(users=users, count=len(users))


@router.get(
    "/inspectors",
    response={200: UserListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="listInspectors",
    summary="List inspectors and supervisors",
)
def list_inspectors(request: AuthenticatedHttpRequest) -> UserListResponse:
    """List users who can be assigned inspections."""
    get_auth_context(request).require_auth()

    users = [_to_response(user) for user in services.list_inspectors()]
    return UserListResponse(users=users, count=len(users))


@router.post(
    "/",
    response={201: UserResponse, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="createUser",
    summary="Create a user",
)
def create_user(request: AuthenticatedHttpRequest, payload: CreateUserRequest) -> tuple[int, UserResponse]:
    """
    Create a Stytch member and its user profile. Admin only.

    Stytch sends the new member an invitation to set up their login.
    """
    actor = get_auth_context(request).require_admin()

    try:
        user = services.create_user(
            actor,
            email=payload.email,
            username=payload.username,
            role=payload.role,
            first_name=payload.first_name,
            last_name=payload.last_name,
            full_name=payload.full_name,
            is_active=payload.is_active,
        )
    except StytchError as e:
        logger.warning("user_create_failed", error=e.details.error_message)
        raise HttpError(400, f"Failed to create user: {e.details.error_message}") from e

    return 201, _to_response(user)


@router.patch(
    "/{uid}",
    response={200: UserResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="updateUser",
    summary="Update a user",
)
def update_user(request: AuthenticatedHttpRequest, uid: str, payload: UpdateUserRequest) -> UserResponse:
    """Partially update a user's role, names, photo or active flag. Admin only."""
    actor = get_auth_context(request).require_admin()
    user = _get_user_or_404(uid)

    user = services.update_user(actor, user, payload.model_dump(exclude_unset=True))
    return _to_response(user)


@router.post(
    "/{uid}/force-logout",
    response={200: MessageResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse, 502: ErrorResponse},
    auth=bearer_auth,
    operation_id="forceLogout",
    summary="Revoke all sessions of a user",
)
def force_logout(request: AuthenticatedHttpRequest, uid: str) -> MessageResponse:
    """Sign a user out of every device. Admin only."""
    actor = get_auth_context(request).require_admin()
    user = _get_user_or_404(uid)

    try:
        services.force_logout(actor, user)
    except StytchError as e:
        logger.warning("force_logout_failed", uid=uid, error=e.details.error_message)
        raise HttpError(502, "Failed to revoke sessions") from e

    return MessageResponse(message="User sessions revoked")


@router.post(
    "/{uid}/password-reset",
    response={200: MessageResponse, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    operation_id="sendPasswordReset",
    summary="Send a password reset email",
)
def send_password_reset(request: AuthenticatedHttpRequest, uid: str) -> MessageResponse:
    """Email a password reset link to a user. Admin only."""
    actor = get_auth_context(request).require_admin()
    user = _get_user_or_404(uid)

    try:
        services.send_password_reset(actor, user)
    except ValueError as e:
        raise HttpError(400, str(e)) from e
    except StytchError as e:
        logger.warning("password_reset_failed", uid=uid, error=e.details.error_message)
        raise HttpError(400, "Failed to send password reset email") from e

    return MessageResponse(message=f"Password reset sent to {user.email}")


@router.post(
    "/delete-complete",
    response={
        200: DeleteUserResponse,
        400: CodedErrorResponse,
        401: CodedErrorResponse,
        403: CodedErrorResponse,
        404: CodedErrorResponse,
        500: CodedErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="deleteUserComplete",
    summary="Delete a user and preserve their inspections",
)
def delete_user(
    request: AuthenticatedHttpRequest, payload: DeleteUserRequest
) -> DeleteUserResponse | tuple[int, CodedErrorResponse]:
    """
    Delete a user from Stytch and the database. Admin only.

    Inspections written by the user are kept and their inspector is
    marked as deleted; notifications addressed to the user are removed.
    Errors carry their kind in `code`.
    """
    try:
        result = delete_user_complete(get_auth_context(request).uid, payload.uid)
    except UserDeletionError as e:
        return e.status_code, CodedErrorResponse(detail=str(e), code=e.code)

    return DeleteUserResponse(
        success=result.success,
        message=result.message,
        deleted_items=result.deleted_items,
        updated_items=result.updated_items,
    )
