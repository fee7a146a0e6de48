class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnknownEmployee(DomainError):
    """Raised when an employee id does not resolve in the directory."""

    def __init__(self, employee_id: str):
        super().__init__(f"Unknown employee: {employee_id}")
        self.employee_id = employee_id


class RemoteUnavailable(DomainError):
    """Raised by a persistence gateway when the remote side did not persist."""


class OrphanCheckout(DomainError):
    """Check-out with no check-in for the day (strict event mode only)."""


class DuplicateCheckin(DomainError):
    """Second check-in for the same day (strict event mode only)."""


class RemoteRejected(RemoteUnavailable):
    """The remote side answered and refused the change; retrying will not help."""
