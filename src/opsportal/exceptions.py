"""Error taxonomy shared by all opsportal apps.

Each error carries the HTTP status and machine-readable code the API layer
reports. Services raise them; ``opsportal.http`` turns them into responses.
"""


class PortalError(Exception):
    """Base exception for opsportal errors."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "", details=None):
        self.message = message or self.__class__.__doc__
        self.details = details
        super().__init__(self.message)


class NotFoundError(PortalError):
    """Requested record does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str, identifier=None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class BadRequestError(PortalError):
    """Request violates a business rule."""

    status_code = 400
    code = "BAD_REQUEST"


class ValidationError(PortalError):
    """Validation failed."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, details: list[dict], message: str = "Validation failed"):
        super().__init__(message, details=details)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class ConflictError(PortalError):
    """Request conflicts with the current state of a record."""

    status_code = 409
    code = "CONFLICT"


class InfrastructureError(PortalError):
    """A backing service (database, sequence store) failed."""

    status_code = 500
    code = "INTERNAL_ERROR"
