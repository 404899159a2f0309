"""HTML pages for listing, viewing, adding, editing and deleting users."""

from typing import Annotated, Any

from fastapi import APIRouter, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError

from user_management.core.errors import BadRequestError
from user_management.modules.users.schemas import UserCreate, UserUpdate
from user_management.modules.users.services import UserSvc
from user_management.web.templating import templates
from user_management.web.view_models import (
    AuditLogViewModel,
    UserListItemViewModel,
    UserListViewModel,
    UserViewModel,
    UserWithAuditViewModel,
)


router = APIRouter(prefix="/users", include_in_schema=False)

FORM_FIELDS = ("forename", "surname", "email", "is_active", "date_of_birth")


def form_errors(exc: PydanticValidationError) -> dict[str, str]:
    """Collapse pydantic errors into one message per form field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors


def form_payload(form: dict[str, Any]) -> dict[str, Any]:
    """Turn submitted form values into schema input; a blank date means none."""
    payload = {field: form[field] for field in FORM_FIELDS}
    payload["date_of_birth"] = form["date_of_birth"] or None
    return payload


def render_form(
    request: Request,
    form: dict[str, Any],
    *,
    action: str,
    title: str,
    errors: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "users/form.html",
        {"form": form, "errors": errors or {}, "action": action, "title": title},
        status_code=status_code,
    )


def redirect_to_list() -> RedirectResponse:
    return RedirectResponse("/users", status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_class=HTMLResponse)
async def user_list_page(
    request: Request,
    service: UserSvc,
    is_active: bool | None = Query(None, alias="isActive"),
) -> HTMLResponse:
    """List users, optionally filtered by active status."""
    users = await service.filter_by_active(is_active)
    model = UserListViewModel(
        items=[UserListItemViewModel.model_validate(u) for u in users],
        is_active_filter=is_active,
    )
    return templates.TemplateResponse(request, "users/list.html", {"model": model})


@router.get("/add", response_class=HTMLResponse)
async def user_add_page(request: Request) -> HTMLResponse:
    """Show the empty add-user form."""
    form = UserViewModel().model_dump()
    return render_form(request, form, action="/users/add", title="Add User")


@router.post("/add", response_class=HTMLResponse, response_model=None)
async def user_add_submit(
    request: Request,
    service: UserSvc,
    forename: Annotated[str, Form()] = "",
    surname: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    is_active: Annotated[bool, Form()] = False,
    date_of_birth: Annotated[str, Form()] = "",
) -> HTMLResponse | RedirectResponse:
    """Create a user from the add form."""
    form = {
        "forename": forename,
        "surname": surname,
        "email": email,
        "is_active": is_active,
        "date_of_birth": date_of_birth,
    }
    try:
        data = UserCreate(**form_payload(form))
    except PydanticValidationError as e:
        return render_form(
            request,
            form,
            action="/users/add",
            title="Add User",
            errors=form_errors(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    await service.create_user(data)
    return redirect_to_list()


@router.get("/edit/{user_id}", response_class=HTMLResponse)
async def user_edit_page(request: Request, user_id: int, service: UserSvc) -> HTMLResponse:
    """Show the edit form filled with the stored user."""
    user = await service.get_user(user_id)
    form = UserViewModel.model_validate(user).model_dump()
    return render_form(request, form, action=f"/users/edit/{user_id}", title="Edit User")


@router.post("/edit/{user_id}", response_class=HTMLResponse, response_model=None)
async def user_edit_submit(
    request: Request,
    user_id: int,
    service: UserSvc,
    form_id: Annotated[int, Form(alias="id")],
    forename: Annotated[str, Form()] = "",
    surname: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    is_active: Annotated[bool, Form()] = False,
    date_of_birth: Annotated[str, Form()] = "",
) -> HTMLResponse | RedirectResponse:
    """Apply the edit form to the stored user."""
    if form_id != user_id:
        raise BadRequestError(
            "User ID in the path does not match the submitted form.",
            error_code="id_mismatch",
            details={"path_id": user_id, "form_id": form_id},
        )

    form = {
        "id": form_id,
        "forename": forename,
        "surname": surname,
        "email": email,
        "is_active": is_active,
        "date_of_birth": date_of_birth,
    }
    try:
        data = UserUpdate(id=form_id, **form_payload(form))
    except PydanticValidationError as e:
        return render_form(
            request,
            form,
            action=f"/users/edit/{user_id}",
            title="Edit User",
            errors=form_errors(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    await service.update_user(data)
    return redirect_to_list()


@router.get("/delete/{user_id}", response_class=HTMLResponse)
async def user_delete_page(request: Request, user_id: int, service: UserSvc) -> HTMLResponse:
    """Ask for confirmation before deleting a user."""
    user = await service.get_user(user_id)
    return templates.TemplateResponse(
        request, "users/delete.html", {"user": UserViewModel.model_validate(user)}
    )


@router.post("/delete/{user_id}")
async def user_delete_submit(user_id: int, service: UserSvc) -> RedirectResponse:
    """Delete a user after confirmation."""
    user = await service.get_user(user_id)
    await service.delete_user(user)
    return redirect_to_list()


@router.get("/{user_id}", response_class=HTMLResponse)
async def user_details_page(request: Request, user_id: int, service: UserSvc) -> HTMLResponse:
    """Show a user with their audit trail."""
    user = await service.get_user(user_id)
    logs = await service.get_user_audit_logs(user_id)
    model = UserWithAuditViewModel(
        user=UserViewModel.model_validate(user),
        audit_logs=[AuditLogViewModel.model_validate(entry) for entry in logs],
    )
    return templates.TemplateResponse(request, "users/details.html", {"model": model})
