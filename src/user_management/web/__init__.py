"""Server-rendered HTML front end."""

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from user_management.web import audit_logs, users
from user_management.web.templating import templates


web_router = APIRouter(include_in_schema=False)


@web_router.get("/")
async def home() -> RedirectResponse:
    """Send the site root to the user list."""
    return RedirectResponse("/users", status_code=status.HTTP_303_SEE_OTHER)


web_router.include_router(users.router)
web_router.include_router(audit_logs.router)

__all__ = ["templates", "web_router"]
