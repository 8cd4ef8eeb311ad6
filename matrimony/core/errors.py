from typing import Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        body = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class InvalidArgument(ServiceError):
    status_code = 400


class Unauthorized(ServiceError):
    status_code = 401


class Forbidden(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409
