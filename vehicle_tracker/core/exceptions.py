# vehicle_tracker/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # operator-facing detail, never used to tell callers apart
        self.error = error


class ValidationError(AppError):
    def __init__(self, message: str = "Invalid input", *, error: str | None = None) -> None:
        super().__init__(message, status_code=400, error=error)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized", *, error: str | None = None) -> None:
        super().__init__(message, status_code=401, error=error)


class TokenExpiredError(UnauthorizedError):
    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    def __init__(self, message: str = "Invalid token", *, error: str | None = None) -> None:
        super().__init__(message, error=error)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden", *, error: str | None = None) -> None:
        super().__init__(message, status_code=403, error=error)


class InternalError(AppError):
    def __init__(self, message: str = "Internal server error", *, error: str | None = None) -> None:
        super().__init__(message, status_code=500, error=error)


class ConfigurationError(InternalError):
    def __init__(self, message: str = "Server configuration error", *, error: str | None = None) -> None:
        super().__init__(message, error=error)
