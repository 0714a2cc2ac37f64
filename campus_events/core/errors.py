"""
Error taxonomy for service operations.

Every failure carries a human-readable message that is returned verbatim to
the caller; the class only decides the HTTP status.
"""


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class UnauthorizedError(AppError):
    status_code = 403


class ConflictError(AppError):
    status_code = 409


class ValidationFailedError(AppError):
    status_code = 400


class ExpiredError(AppError):
    status_code = 410
