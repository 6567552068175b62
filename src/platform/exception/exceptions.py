class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class InfrastructureError(CustomBaseError):
    """Persistence failed after a decision was made; nothing was committed, the caller should retry."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class SeedDataError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
