from __future__ import annotations

class ServiceError(RuntimeError):
    """Base class for service-layer errors."""

class RepoError(ServiceError):
    """Errors from repositories (I/O, serialization)."""

class ValidationError(ServiceError, ValueError):
    """Rejected user input. Nothing was written."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
