"""User API routes."""

from fastapi import Query, Request, Response, status

from user_management.core.errors import BadRequestError
from user_management.modules.audit_logs.schemas import AuditLogResponse
from user_management.modules.users import router
from user_management.modules.users.schemas import UserCreate, UserResponse, UserUpdate
from user_management.modules.users.services import UserSvc


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="Returns every user.",
)
async def list_users(service: UserSvc) -> list[UserResponse]:
    """List all users."""
    users = await service.get_all()
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/filter",
    response_model=list[UserResponse],
    summary="Filter users by active status",
    description="Returns users whose active flag matches; all users when the flag is omitted.",
)
async def filter_users(
    service: UserSvc,
    is_active: bool | None = Query(None, alias="isActive", description="Active status"),
) -> list[UserResponse]:
    """Filter users by active status."""
    users = await service.filter_by_active(is_active)
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
)
async def get_user(user_id: int, service: UserSvc) -> UserResponse:
    """Get user by ID."""
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    data: UserCreate,
    service: UserSvc,
    request: Request,
    response: Response,
) -> UserResponse:
    """Create a user and point Location at it."""
    user = await service.create_user(data)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update user",
    description="Replaces the user's fields. The body ID must match the path ID.",
)
async def update_user(user_id: int, data: UserUpdate, service: UserSvc) -> Response:
    """Update user by ID."""
    if data.id != user_id:
        raise BadRequestError(
            "User ID in the path does not match the request body.",
            error_code="id_mismatch",
            details={"path_id": user_id, "body_id": data.id},
        )
    await service.update_user(data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
)
async def delete_user(user_id: int, service: UserSvc) -> Response:
    """Delete user by ID."""
    user = await service.get_user(user_id)
    await service.delete_user(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{user_id}/auditlogs",
    response_model=list[AuditLogResponse],
    summary="Get a user's audit trail",
    description="Returns the user's audit logs, newest first. Logs outlive deleted users.",
)
async def get_user_audit_logs(user_id: int, service: UserSvc) -> list[AuditLogResponse]:
    """List audit logs for a user."""
    logs = await service.get_user_audit_logs(user_id)
    return [AuditLogResponse.model_validate(entry) for entry in logs]
