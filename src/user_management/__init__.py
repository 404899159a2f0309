"""User management service with an automatic audit trail."""

__version__ = "0.1.0"
