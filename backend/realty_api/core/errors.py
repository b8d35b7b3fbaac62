"""Error taxonomy shared by the store, the services and the HTTP layer."""


class RealtyApiError(Exception):
    """Base exception for all realty API errors."""

    status_code = 500


class ReportValidationError(RealtyApiError):
    """Raised when a request parameter is missing or malformed."""

    status_code = 400


class EntityNotFoundError(RealtyApiError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ReferentialIntegrityError(RealtyApiError):
    """Raised when a foreign key reference would be violated."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreUnavailableError(RealtyApiError):
    """Raised when the persistence layer cannot be reached."""

    status_code = 503
