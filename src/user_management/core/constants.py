"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# User field lengths
MAX_FORENAME_LENGTH = 50
MAX_SURNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 100

# Audit log field lengths
MAX_ACTION_TYPE_LENGTH = 20

# Audit action types
ACTION_CREATE = "Create"
ACTION_UPDATE = "Update"
ACTION_DELETE = "Delete"
ACTION_TYPES = (ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE)

# Date rendering inside audit details
AUDIT_DATE_FORMAT = "%Y-%m-%d"

# Pagination defaults
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps (page - 1) * page_size inside a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE

# Route prefixes
API_PREFIX = "/api"
