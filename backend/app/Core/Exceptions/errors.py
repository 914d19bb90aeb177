from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for every failure raised by the scheduling engine."""

    code = "domain_error"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    code = "validation_error"
    status_code = 422


class CapacityExceeded(DomainError):
    code = "capacity_exceeded"
    status_code = 409


class SlotTaken(DomainError):
    code = "slot_taken"
    status_code = 409


class InvalidTransition(DomainError):
    code = "invalid_transition"
    status_code = 409


class NotFound(DomainError):
    code = "not_found"
    status_code = 404


class StorageError(DomainError):
    code = "storage_error"
    status_code = 503


class Forbidden(DomainError):
    code = "forbidden"
    status_code = 403
