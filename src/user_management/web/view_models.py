"""View models rendered by the HTML front end."""

import math
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, computed_field


class UserViewModel(BaseModel):
    """A user as shown on the details, edit and delete pages."""

    id: int = 0
    forename: str = ""
    surname: str = ""
    email: str = ""
    is_active: bool = True
    date_of_birth: date | None = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return f"{self.forename} {self.surname}"


class UserListItemViewModel(BaseModel):
    """One row of the user list."""

    id: int
    forename: str
    surname: str
    email: str
    is_active: bool
    date_of_birth: date | None = None

    model_config = ConfigDict(from_attributes=True)


class UserListViewModel(BaseModel):
    """The user list page, with the active filter that produced it."""

    items: list[UserListItemViewModel] = []
    is_active_filter: bool | None = None


class AuditLogViewModel(BaseModel):
    """An audit log entry as shown in tables and on its details page."""

    id: int
    user_id: int
    action_type: str
    timestamp: datetime
    details: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AuditLogListViewModel(BaseModel):
    """A page of audit logs with the filters and paging state that produced it."""

    items: list[AuditLogViewModel] = []
    current_page: int = 1
    page_size: int = 10
    total_items: int = 0
    search_query: str | None = None
    action_type_filter: str | None = None
    sort_descending: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_items / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class UserWithAuditViewModel(BaseModel):
    """The user details page: the user plus their audit trail."""

    user: UserViewModel
    audit_logs: list[AuditLogViewModel] = []
