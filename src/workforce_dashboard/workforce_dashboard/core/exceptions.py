class DomainError(Exception):
    """Base class for errors a controller can show to the user as-is."""


class ValidationError(DomainError):
    """Bad form/query input, including unknown ids and duplicate attendance marks."""


class AuthenticationError(DomainError):
    """Login failed; the message never says which credential was wrong."""


class AuthorizationError(DomainError):
    """The signed-in role may not perform the action or see the worker."""
