"""
Dropdown taxonomy API endpoints.
"""

from ninja import Router
from ninja.errors import HttpError

from apps.accounts.models import User
from apps.core.schemas import ErrorResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest
from apps.taxonomies import services
from apps.taxonomies.exceptions import UnknownCategoryError
from apps.taxonomies.schemas import AddOptionRequest, CategoryOptionsResponse, DropdownOptionsResponse

router = Router(tags=["settings"])
bearer_auth = BearerAuth()

EDITOR_ROLES = (User.Role.ADMIN, User.Role.SUPERVISOR)


@router.get(
    "/",
    response={200: DropdownOptionsResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    operation_id="getDropdownOptions",
    summary="Get dropdown options",
)
def get_dropdown_options(request: AuthenticatedHttpRequest) -> DropdownOptionsResponse:
    """Get every dropdown category. Defaults are seeded on first use."""
    get_auth_context(request).require_auth()
    return DropdownOptionsResponse(options=services.get_dropdown_options())


@router.post(
    "/{category}",
    response={200: CategoryOptionsResponse, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    operation_id="addDropdownOption",
    summary="Add a dropdown option",
)
def add_option(
    request: AuthenticatedHttpRequest, category: str, payload: AddOptionRequest
) -> CategoryOptionsResponse:
    """Add a value to a category. Admins and supervisors only."""
    get_auth_context(request).require_role(*EDITOR_ROLES)

    try:
        values = services.add_option(category, payload.value.strip())
    except UnknownCategoryError as e:
        raise HttpError(400, str(e)) from e

    return CategoryOptionsResponse(category=category, values=values)


@router.delete(
    "/{category}/{path:value}",
    response={200: CategoryOptionsResponse, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    operation_id="removeDropdownOption",
    summary="Remove a dropdown option",
)
def remove_option(request: AuthenticatedHttpRequest, category: str, value: str) -> CategoryOptionsResponse:
    """Remove a value from a category. Admins and supervisors only."""
    get_auth_context(request).require_role(*EDITOR_ROLES)

    try:
        values = services.remove_option(category, value)
    except UnknownCategoryError as e:
        raise HttpError(400, str(e)) from e

    return CategoryOptionsResponse(category=category, values=values)
