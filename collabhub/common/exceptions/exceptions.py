# collabhub/common/exceptions/exceptions.py
# =============================================================================
# Base exceptions for the CollabHub platform
# =============================================================================


class CollabHubException(Exception):
    """Base exception for CollabHub platform"""
    pass


class AuthenticationError(CollabHubException):
    """Raised when authentication fails"""
    pass


class AuthorizationError(CollabHubException):
    """Raised when authorization fails"""
    pass


class ValidationError(CollabHubException):
    """Raised when validation fails"""
    pass


class NotFoundError(CollabHubException):
    """Raised when a resource is not found"""
    pass


# Alias for compatibility
ResourceNotFoundError = NotFoundError


class DomainError(CollabHubException):
    """Raised for domain-specific errors"""
    pass


class InfrastructureError(CollabHubException):
    """Raised for infrastructure errors"""
    pass


class PersistenceFailure(InfrastructureError):
    """Raised when the relational store rejects or fails an operation"""
    pass


class BestEffortSideEffectFailure(CollabHubException):
    """
    Failure of a side effect that must never abort the primary flow
    (mention email, live push). Recorded by the side-effect runner, not raised
    to callers.
    """

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f"Side effect '{name}' failed: {cause!r}")
