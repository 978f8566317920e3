from typing import Optional

from fastapi import HTTPException


class AppError(HTTPException):
    """An ``HTTPException`` whose status code is fixed by its subclass."""

    status_code: int = 500
    default_detail: str = 'Internal server error'

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict[str, str]] = None) -> None:
        super().__init__(status_code=type(self).status_code, detail=detail or self.default_detail, headers=headers)


class UnauthorizedError(AppError):
    status_code = 401
    default_detail = 'Unauthorized'

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail, headers={'WWW-Authenticate': 'Bearer'})


class ForbiddenError(AppError):
    status_code = 403
    default_detail = 'Not allowed'


class NotFoundError(AppError):
    status_code = 404
    default_detail = 'Not found'


class ConflictError(AppError):
    status_code = 409
    default_detail = 'Conflict'


class InvalidOperationError(AppError):
    status_code = 400
    default_detail = 'Invalid operation'


class ValidationError(AppError):
    status_code = 400
    default_detail = 'Invalid input'
