"""Exception classes for the Subsonic remote control client."""

from typing import Optional


class SubsonicError(Exception):
    """Base exception for all Subsonic API errors.

    Attributes:
        code: Subsonic error code
        message: Error message from server
    """

    def __init__(self, code: int, message: str):
        """Initialize Subsonic error.

        Args:
            code: Subsonic error code (0, 10, 20, 30, 40, 50, 60, 70)
            message: Human-readable error message
        """
        self.code = code
        self.message = message
        super().__init__(f"Subsonic Error {code}: {message}")


class SubsonicAuthenticationError(SubsonicError):
    """Authentication failed (error codes 40, 41).

    Raised when username/password is incorrect.
    """

    pass


class TokenAuthenticationNotSupportedError(SubsonicError):
    """Token authentication not supported (code 42)."""

    pass


class ClientVersionTooOldError(SubsonicError):
    """Client must upgrade (code 43)."""

    pass


class ServerVersionTooOldError(SubsonicError):
    """Server must upgrade (code 44)."""

    pass


class SubsonicAuthorizationError(SubsonicError):
    """User not authorized for requested action (error code 50).

    Raised when the user lacks jukebox or playlist permissions.
    """

    pass


class SubsonicNotFoundError(SubsonicError):
    """Requested resource not found (error code 70).

    Raised when a playlist or song does not exist.
    """

    pass


class SubsonicVersionError(SubsonicError):
    """API version incompatibility (error codes 20, 30)."""

    pass


class SubsonicParameterError(SubsonicError):
    """Required parameter missing (error code 10)."""

    pass


class SubsonicTrialError(SubsonicError):
    """Trial period expired (error code 60)."""

    pass


class SubsonicParseError(SubsonicError):
    """Response did not have the expected shape.

    Raised by the response parsers when a payload is not an object, a
    required field is absent, or a field has the wrong type.

    Attributes:
        field: Wire name of the offending field, if any
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(0, message)


class ControllerBusyError(SubsonicError):
    """A controller could not use its client.

    Raised when a second controller claims a client that is already bound,
    or when a released controller is used again.
    """

    def __init__(self, message: str):
        super().__init__(0, message)


# Server error codes mapped to exception types
ERROR_CODE_MAP = {
    10: SubsonicParameterError,
    20: SubsonicVersionError,
    30: SubsonicVersionError,
    40: SubsonicAuthenticationError,
    41: SubsonicAuthenticationError,
    42: TokenAuthenticationNotSupportedError,
    43: ClientVersionTooOldError,
    44: ServerVersionTooOldError,
    50: SubsonicAuthorizationError,
    60: SubsonicTrialError,
    70: SubsonicNotFoundError,
}


def error_for_code(code: int, message: str) -> SubsonicError:
    """Build the exception matching a server error code.

    Unknown codes fall back to the generic SubsonicError.
    """
    return ERROR_CODE_MAP.get(code, SubsonicError)(code, message)
