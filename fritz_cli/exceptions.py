"""Exception types raised by the FRITZ!Box client."""


class FritzError(Exception):
    """Base exception for all fritz_cli errors."""


class TransportError(FritzError):
    """The HTTP exchange with the router failed (network, DNS, timeout, HTTP status)."""


class DecodeError(FritzError):
    """The router answered with a body that could not be decoded."""


class AuthError(FritzError):
    """Base class for session-authentication failures."""


class LoginRejectedError(AuthError):
    """The router answered the login with the sentinel session id.

    ``block_time`` is the number of seconds the router refuses further
    login attempts, as reported in its ``BlockTime`` tag.
    """

    def __init__(self, message: str, block_time: int = 0) -> None:
        super().__init__(message)
        self.block_time = block_time


class NotLoggedInError(AuthError):
    """An authenticated request was attempted without a valid session."""


class ConfigError(FritzError):
    """Credentials could not be resolved from flags, environment or config file."""
