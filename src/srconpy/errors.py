class RCONError(Exception):
    """The base class for RCON errors."""


class RCONConnectionError(RCONError, ConnectionError):
    """Raised when the connection to the RCON server could not be
    established or was closed in the middle of an exchange.
    """


class NotConnectedError(RCONError):
    """Raised when an operation requires a connection that has not been made."""


class AuthenticationError(RCONError):
    """Raised when the password given to the RCON server was incorrect."""


class MalformedFrameError(RCONError, ValueError):
    """Raised when the received data cannot be decoded into a packet."""
