# server/core/errors.py

from fastapi import status


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class InvalidToken(Exception):
    """Token is malformed, badly signed or expired."""


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please enter all fields"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is not valid"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    pass
