"""Domain exceptions."""

from __future__ import annotations

from uuid import UUID


class SymbiFiError(Exception):
    """Base class for service errors."""


class RecordNotFoundError(SymbiFiError):
    """Raised when a record does not exist or belongs to another tenant."""

    def __init__(self, entity: str, record_id: UUID | str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} '{record_id}' not found")


class InvalidReferenceError(SymbiFiError):
    """Raised when a new row references a project or contractor the tenant does not own."""

    def __init__(self, entity: str, record_id: UUID | str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"Referenced {entity} '{record_id}' does not exist")


class PermissionDeniedError(SymbiFiError):
    """Raised when a non-admin user reaches the super admin surface."""

    def __init__(self, user_id: UUID | str, role: str = "admin"):
        self.user_id = user_id
        self.role = role
        super().__init__(f"User '{user_id}' does not hold the '{role}' role")
