"""
Error taxonomy of the service.

Every error a request can end with is a ServiceError carrying the HTTP
status it maps to. The API layer renders them as {"error": "<message>"}.
"""


class ServiceError(RuntimeError):
    status_code = 500

    def __init__(self, message: str = "", headers: dict | None = None):
        super().__init__(message)
        # extra response headers set by interceptors on the way out
        self.headers = dict(headers or {})


class InvalidParameter(ServiceError):
    status_code = 400


class ValidationError(ServiceError):
    status_code = 400


class Unauthenticated(ServiceError):
    status_code = 401

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class Forbidden(ServiceError):
    status_code = 401


class NotFound(ServiceError):
    status_code = 404


class StorageError(ServiceError):
    pass


class PublishError(ServiceError):
    pass


class CacheError(ServiceError):
    pass
