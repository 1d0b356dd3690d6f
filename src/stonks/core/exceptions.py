"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when a mutation request fails validation (before any write)."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class PersistenceError(AppError):
    """Raised by repositories when a ledger query or write fails."""

    def __init__(self, operation: str, detail: str = ""):
        message = f"Persistence failure during {operation}"
        if detail:
            message = f"{message}: {detail}"
        self.operation = operation
        super().__init__(message, code="PERSISTENCE_ERROR")


class ExternalFetchError(AppError):
    """Raised when a quote or FX provider call fails."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"{source} error: {detail}", code="EXTERNAL_FETCH_ERROR")


class UnknownActionError(AppError):
    """Raised when a mutation request names an action that does not exist."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Invalid action: {action!r}", code="UNKNOWN_ACTION")
