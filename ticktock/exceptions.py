"""Domain exceptions for ticktock."""


class TicktockError(Exception):
    """Base class for ticktock errors."""


class StoreUnavailableError(TicktockError):
    """The session key/value store cannot be used in the current context."""


class AuthenticationError(TicktockError):
    """Credentials were rejected by the identity provider."""


class BaselineError(TicktockError):
    """The baseline dataset could not be loaded."""
