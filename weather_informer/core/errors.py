from typing import Optional


UNEXPECTED_MESSAGE = "An unexpected error occurred."


class WeatherInformerError(Exception):
    """
    Base class for errors surfaced to API clients.

    Each subclass carries:
    - `kind`: stable machine-readable category
    - `status_code`: HTTP status used when the error reaches a router
    - `message`: user-facing text
    """

    kind = "unexpected"
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(WeatherInformerError):
    """Query rejected locally or by the provider as malformed."""

    kind = "invalid-input"
    status_code = 400


class LocationNotFoundError(WeatherInformerError):
    kind = "not-found"
    status_code = 404


class ConfigurationError(WeatherInformerError):
    """Missing or rejected provider credentials."""

    kind = "auth/config-error"
    status_code = 500


class UpstreamError(WeatherInformerError):
    kind = "upstream-error"
    status_code = 502


class NetworkError(WeatherInformerError):
    kind = "network-error"
    status_code = 502


def error_kind(exc: BaseException) -> str:
    if isinstance(exc, WeatherInformerError):
        return exc.kind
    return WeatherInformerError.kind


def to_user_message(exc: BaseException) -> str:
    """
    Return the message shown to users for any raised value.

    Known errors keep their own message; anything else is coerced to a
    generic one so internals never leak.
    """
    if isinstance(exc, WeatherInformerError):
        return exc.message
    return UNEXPECTED_MESSAGE
