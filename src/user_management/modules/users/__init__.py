"""Users module: user CRUD, active-status filtering and audit trail access."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])

# Import routes to register them (must be after router is defined)
from user_management.modules.users import routes  # noqa: F401, E402


# Module metadata
__module__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User management",
    "dependencies": ["audit_logs"],
}
