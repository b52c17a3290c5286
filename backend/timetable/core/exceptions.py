class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SlotValidationError(AppError):
    """Raised when one or more slots in an edit session have an invalid time range."""
    def __init__(self, message: str, invalid_slots: list[dict]):
        super().__init__(message, status_code=400, details={"invalid_slots": invalid_slots})
        self.invalid_slots = invalid_slots

class SlotStorageError(AppError):
    """Raised when a single call to the slot-storage or academic-year service fails."""
    def __init__(self, message: str, status_code: int | None = None, details: dict = None):
        super().__init__(message, status_code=502, details=details)
        self.remote_status_code = status_code

class SyncBatchError(AppError):
    """Raised when an operation in a save batch fails after earlier ones were applied.

    The batch is not transactional: ``applied`` operations already took effect
    server-side and the remaining ones were never attempted.
    """
    def __init__(self, operation, index: int, applied: int, total: int, cause: Exception):
        message = (
            f"Saving schedule failed at operation {index + 1} of {total} "
            f"({operation.describe()}): {cause}"
        )
        super().__init__(
            message,
            status_code=502,
            details={
                "operation": operation.describe(),
                "index": index,
                "applied": applied,
                "total": total,
            },
        )
        self.operation = operation
        self.index = index
        self.applied = applied
        self.total = total
        self.cause = cause

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
