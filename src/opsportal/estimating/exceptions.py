"""Exceptions for estimating."""

from opsportal.exceptions import BadRequestError, NotFoundError


class EstimateNotFoundError(NotFoundError):
    """Referenced estimate does not exist."""

    def __init__(self, estimate_id=None):
        super().__init__("Estimate", estimate_id)


class EstimateLockedError(BadRequestError):
    """Content edit attempted on an estimate outside draft/sent."""

    def __init__(self, status: str):
        self.status = status
        super().__init__("Cannot edit approved/rejected estimates")


class InvalidTransitionError(BadRequestError):
    """Status change not permitted by the configured transition table."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot transition estimate from '{from_status}' to '{to_status}'"
        )


class EstimateNotConvertibleError(BadRequestError):
    """Conversion attempted on an estimate that is not approved."""

    def __init__(self, status: str):
        self.status = status
        super().__init__("Only approved estimates can be converted to invoices")
