"""
Equipment API endpoints.
"""

from ninja import File, Router
from ninja.errors import HttpError
from ninja.files import UploadedFile

from apps.accounts.models import User
from apps.core.schemas import ErrorResponse, MessageResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest
from apps.equipment import services
from apps.equipment.exceptions import DuplicateTagNumberError
from apps.equipment.models import Equipment
from apps.equipment.schemas import (
    EquipmentCreateRequest,
    EquipmentListResponse,
    EquipmentResponse,
    EquipmentUpdateRequest,
)
from apps.media.services import StorageValidationError

router = Router(tags=["equipment"])
bearer_auth = BearerAuth()


def _to_response(equipment: Equipment) -> EquipmentResponse:
    return EquipmentResponse(
        id=equipment.pk,
        tag_number=equipment.tag_number,
        description=equipment.description,
        equipment_type=equipment.equipment_type,
        function=equipment.function,
        geometry=equipment.geometry,
        construction=equipment.construction,
        service=equipment.service,
        orientation=equipment.orientation,
        status=equipment.status,
        location=equipment.location,
        manufacturer=equipment.manufacturer,
        year_built=equipment.year_built,
        image_url=equipment.image_url,
        created_at=equipment.created_at,
        updated_at=equipment.updated_at,
    )


def _get_equipment_or_404(equipment_id: int) -> Equipment:
    try:
        return Equipment.objects.get(pk=equipment_id)
    except Equipment.DoesNotExist:
        raise HttpError(404, "Equipment not found") from None


@router.get(
    "/",
    response={200: EquipmentListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="listEquipment",
    summary="List equipment",
)
def list_equipment(request: AuthenticatedHttpRequest) -> EquipmentListResponse:
    """List registered equipment, newest first."""
    get_auth_context(request).require_auth()

    equipment = [_to_response(item) for item in services.list_equipment()]
    return EquipmentListResponse(equipment=equipment, count=len(equipment))


@router.get(
    "/{equipment_id}",
    response={200: EquipmentResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="getEquipment",
    summary="Get equipment",
)
def get_equipment(request: AuthenticatedHttpRequest, equipment_id: int) -> EquipmentResponse:
    get_auth_context(request).require_auth()
    return _to_response(_get_equipment_or_404(equipment_id))


@router.post(
    "/",
    response={201: EquipmentResponse, 401: ErrorResponse, 403: ErrorResponse, 409: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="createEquipment",
    summary="Register equipment",
)
def create_equipment(
    request: AuthenticatedHttpRequest, payload: EquipmentCreateRequest
) -> tuple[int, EquipmentResponse]:
    """Register a piece of equipment. Tag numbers are unique."""
    get_auth_context(request).require_auth()

    try:
        equipment = services.create_equipment(payload.model_dump())
    except DuplicateTagNumberError as e:
        raise HttpError(409, str(e)) from e

    return 201, _to_response(equipment)


@router.patch(
    "/{equipment_id}",
    response={
        200: EquipmentResponse,
        401: ErrorResponse,
        403: ErrorResponse,
        404: ErrorResponse,
        409: ErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="updateEquipment",
    summary="Update equipment",
)
def update_equipment(
    request: AuthenticatedHttpRequest, equipment_id: int, payload: EquipmentUpdateRequest
) -> EquipmentResponse:
    get_auth_context(request).require_auth()
    equipment = _get_equipment_or_404(equipment_id)

    try:
        equipment = services.update_equipment(equipment, payload.model_dump(exclude_unset=True))
    except DuplicateTagNumberError as e:
        raise HttpError(409, str(e)) from e

    return _to_response(equipment)


@router.delete(
    "/{equipment_id}",
    response={200: MessageResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    operation_id="deleteEquipment",
    summary="Delete equipment",
)
def delete_equipment(request: AuthenticatedHttpRequest, equipment_id: int) -> MessageResponse:
    """Delete equipment. Admins and supervisors only."""
    get_auth_context(request).require_role(User.Role.ADMIN, User.Role.SUPERVISOR)
    services.delete_equipment(_get_equipment_or_404(equipment_id))
    return MessageResponse(message="Equipment deleted")


@router.post(
    "/{equipment_id}/image",
    response={
        200: EquipmentResponse,
        400: ErrorResponse,
        401: ErrorResponse,
        403: ErrorResponse,
        404: ErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="uploadEquipmentImage",
    summary="Upload an equipment image",
)
def upload_image(
    request: AuthenticatedHttpRequest,
    equipment_id: int,
    file: UploadedFile = File(...),  # noqa: B008
) -> EquipmentResponse:
    """Upload an image for the equipment, replacing any existing one."""
    get_auth_context(request).require_auth()
    equipment = _get_equipment_or_404(equipment_id)

    try:
        equipment = services.set_equipment_image(
            equipment,
            filename=file.name or "image.jpg",
            content=file.read(),
            content_type=file.content_type or "application/octet-stream",
        )
    except StorageValidationError as e:
        raise HttpError(400, str(e)) from e

    return _to_response(equipment)
