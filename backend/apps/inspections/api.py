"""
Inspection API endpoints.
"""

from ninja import File, Form, Router
from ninja.errors import HttpError
from ninja.files import UploadedFile

from apps.accounts.models import User
from apps.core.schemas import ErrorResponse, MessageResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest
from apps.inspections import services
from apps.inspections.exceptions import (
    DeletedInspectorError,
    EquipmentNotFoundError,
    InvalidStatusTransitionError,
    StatusPermissionError,
)
from apps.inspections.models import Inspection, InspectionPhoto, InspectionStatusLog
from apps.inspections.schemas import (
    InspectionCreateRequest,
    InspectionListResponse,
    InspectionPhotoResponse,
    InspectionResponse,
    InspectionUpdateRequest,
    StatusChangeRequest,
    StatusLogEntryResponse,
    StatusLogResponse,
)
from apps.media.services import StorageValidationError

router = Router(tags=["inspections"])
bearer_auth = BearerAuth()


def _photo_response(photo: InspectionPhoto) -> InspectionPhotoResponse:
    return InspectionPhotoResponse(
        id=photo.pk,
        url=photo.url,
        caption=photo.caption,
        content_type=photo.content_type,
        size_bytes=photo.size_bytes,
        width=photo.width,
        height=photo.height,
        created_at=photo.created_at,
    )


def _log_entry(entry: InspectionStatusLog) -> StatusLogEntryResponse:
    return StatusLogEntryResponse(
        old_status=entry.old_status,
        new_status=entry.new_status,
        changed_by=entry.changed_by,
        timestamp=entry.timestamp,
    )


def _to_response(inspection: Inspection) -> InspectionResponse:
    return InspectionResponse(
        id=inspection.pk,
        inspector_name=inspection.inspector_name,
        equipment_id=inspection.equipment_id,
        inspection_date=inspection.inspection_date,
        status=inspection.status,
        findings=inspection.findings,
        recommendations=inspection.recommendations,
        data=inspection.data,
        inspector_deleted=inspection.inspector_deleted,
        inspector_deleted_at=inspection.inspector_deleted_at,
        original_inspector_name=inspection.original_inspector_name,
        original_inspector_id=inspection.original_inspector_id,
        original_inspector_email=inspection.original_inspector_email,
        photos=[_photo_response(photo) for photo in inspection.photos.all()],
        created_at=inspection.created_at,
        updated_at=inspection.updated_at,
    )


def _get_inspection_or_404(inspection_id: int) -> Inspection:
    try:
        return Inspection.objects.get(pk=inspection_id)
    except Inspection.DoesNotExist:
        raise HttpError(404, "Inspection not found") from None


@router.get(
    "/",
    response={200: InspectionListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="listInspections",
    summary="List inspections",
)
def list_inspections(
    request: AuthenticatedHttpRequest,
    inspector_name: str | None = None,
    equipment_id: int | None = None,
    status: str | None = None,
) -> InspectionListResponse:
    """List inspections, newest first, optionally filtered."""
    get_auth_context(request).require_auth()

    inspections = [
        _to_response(inspection)
        for inspection in services.list_inspections(
            inspector_name=inspector_name,
            equipment_id=equipment_id,
            status=status,
        )
    ]
    return InspectionListResponse(inspections=inspections, count=len(inspections))


@router.get(
    "/{inspection_id}",
    response={200: InspectionResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="getInspection",
    summary="Get an inspection",
)
def get_inspection(request: AuthenticatedHttpRequest, inspection_id: int) -> InspectionResponse:
    get_auth_context(request).require_auth()
    return _to_response(_get_inspection_or_404(inspection_id))


@router.post(
    "/",
    response={201: InspectionResponse, 400: ErrorResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="createInspection",
    summary="Record an inspection",
)
def create_inspection(
    request: AuthenticatedHttpRequest, payload: InspectionCreateRequest
) -> tuple[int, InspectionResponse]:
    """Record an inspection. The inspector defaults to the caller."""
    user = get_auth_context(request).require_auth()

    try:
        inspection = services.create_inspection(user, payload.model_dump())
    except (EquipmentNotFoundError, InvalidStatusTransitionError) as e:
        raise HttpError(400, str(e)) from e

    return 201, _to_response(inspection)


@router.patch(
    "/{inspection_id}",
    response={
        200: InspectionResponse,
        400: ErrorResponse,
        401: ErrorResponse,
        403: ErrorResponse,
        404: ErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="updateInspection",
    summary="Update an inspection",
)
def update_inspection(
    request: AuthenticatedHttpRequest, inspection_id: int, payload: InspectionUpdateRequest
) -> InspectionResponse:
    get_auth_context(request).require_auth()
    inspection = _get_inspection_or_404(inspection_id)

    try:
        inspection = services.update_inspection(inspection, payload.model_dump(exclude_unset=True))
    except (EquipmentNotFoundError, DeletedInspectorError) as e:
        raise HttpError(400, str(e)) from e

    return _to_response(inspection)


@router.delete(
    "/{inspection_id}",
    response={200: MessageResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    operation_id="deleteInspection",
    summary="Delete an inspection",
)
def delete_inspection(request: AuthenticatedHttpRequest, inspection_id: int) -> MessageResponse:
    """Delete an inspection and its photos. Admins and supervisors only."""
    get_auth_context(request).require_role(User.Role.ADMIN, User.Role.SUPERVISOR)
    services.delete_inspection(_get_inspection_or_404(inspection_id))
    return MessageResponse(message="Inspection deleted")


@router.post(
    "/{inspection_id}/photos",
    response={
        201: InspectionPhotoResponse,
        400: ErrorResponse,
        401: ErrorResponse,
        403: ErrorResponse,
        404: ErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="addInspectionPhoto",
    summary="Attach a photo to an inspection",
)
def add_photo(
    request: AuthenticatedHttpRequest,
    inspection_id: int,
    file: UploadedFile = File(...),  # noqa: B008
    caption: str = Form(""),  # noqa: B008
) -> tuple[int, InspectionPhotoResponse]:
    get_auth_context(request).require_auth()
    inspection = _get_inspection_or_404(inspection_id)

    try:
        photo = services.add_photo(
            inspection,
            filename=file.name or "photo.jpg",
            content=file.read(),
            content_type=file.content_type or "application/octet-stream",
            caption=caption,
        )
    except StorageValidationError as e:
        raise HttpError(400, str(e)) from e

    return 201, _photo_response(photo)


@router.delete(
    "/{inspection_id}/photos/{photo_id}",
    response={200: MessageResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    operation_id="deleteInspectionPhoto",
    summary="Remove a photo from an inspection",
)
def delete_photo(request: AuthenticatedHttpRequest, inspection_id: int, photo_id: int) -> MessageResponse:
    get_auth_context(request).require_auth()

    photo = InspectionPhoto.objects.filter(pk=photo_id, inspection_id=inspection_id).first()
    if photo is None:
        raise HttpError(404, "Photo not found")

    services.delete_photo(photo)
    return MessageResponse(message="Photo deleted")


@router.post(
    "/{inspection_id}/status",
    response={
        200: InspectionResponse,
        400: ErrorResponse,
        401: ErrorResponse,
        403: ErrorResponse,
        404: ErrorResponse,
    },
    auth=bearer_auth,
    by_alias=True,
    operation_id="changeInspectionStatus",
    summary="Change an inspection's status",
)
def change_status(
    request: AuthenticatedHttpRequest, inspection_id: int, payload: StatusChangeRequest
) -> InspectionResponse:
    """
    Move an inspection through draft, submitted, approved and rejected.

    Only supervisors approve or reject. Approved inspections are final.
    """
    user = get_auth_context(request).require_auth()
    inspection = _get_inspection_or_404(inspection_id)

    try:
        inspection = services.change_status(inspection, payload.status, user)
    except StatusPermissionError as e:
        raise HttpError(403, str(e)) from e
    except InvalidStatusTransitionError as e:
        raise HttpError(400, str(e)) from e

    return _to_response(inspection)


@router.get(
    "/{inspection_id}/status-log",
    response={200: StatusLogResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="getInspectionStatusLog",
    summary="Get an inspection's status history",
)
def get_status_log(request: AuthenticatedHttpRequest, inspection_id: int) -> StatusLogResponse:
    get_auth_context(request).require_auth()
    inspection = _get_inspection_or_404(inspection_id)
    return StatusLogResponse(entries=[_log_entry(entry) for entry in services.status_history(inspection)])
