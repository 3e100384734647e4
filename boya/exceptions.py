"""Custom exceptions for the Boya course selection tool."""


class BoyaError(Exception):
    """Base class for every failure a run can end with."""


class AuthError(BoyaError):
    """Raised when SSO or program login fails."""


class QueryError(BoyaError):
    """Raised when the course catalog cannot be fetched."""


class SelectError(BoyaError):
    """Raised when a select or drop request fails."""


class RejectedError(SelectError):
    """The service answered, but refused the request."""


class TransportError(SelectError):
    """The request never produced a well-formed answer."""


class ValidationError(BoyaError):
    """Raised for a bad user-supplied course id."""
