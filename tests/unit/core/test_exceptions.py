"""Tests for the application exception taxonomy."""

import pytest

from user_management.core import errors
from user_management.core.errors import AppException, BadRequestError, NotFoundError


class TestExceptionTaxonomy:
    """Tests for the exported exceptions."""

    def test_exported_exceptions(self):
        """Test only exceptions the application raises are exported."""
        exported = {
            name
            for name in errors.__all__
            if isinstance(getattr(errors, name), type)
            and issubclass(getattr(errors, name), AppException)
        }

        assert exported == {"AppException", "BadRequestError", "NotFoundError"}

    @pytest.mark.parametrize(
        ("exc_class", "status_code", "error_code"),
        [
            (AppException, 500, "internal_error"),
            (NotFoundError, 404, "not_found"),
            (BadRequestError, 400, "bad_request"),
        ],
    )
    def test_defaults(self, exc_class, status_code, error_code):
        exc = exc_class()

        assert exc.status_code == status_code
        assert exc.error_code == error_code
        assert exc.details == {}

    def test_not_found_details(self):
        exc = NotFoundError("User with ID 7 not found.", resource="user", resource_id="7")

        assert str(exc) == "User with ID 7 not found."
        assert exc.details == {"resource": "user", "resource_id": "7"}

    def test_custom_error_code(self):
        exc = BadRequestError("Mismatch", error_code="id_mismatch", details={"path_id": 1})

        assert exc.error_code == "id_mismatch"
        assert exc.details == {"path_id": 1}
