from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_REQUEST = "invalid_request"
    ACCESS_DENIED = "access_denied"

    @property
    def status_code(self) -> int:
        match self:
            case ErrorKind.ACCESS_DENIED:
                return 403
            case _:
                return 400


class RegistrationError(Exception):
    """An OAuth 2.0 protocol error raised while handling a registration.

    Carries everything the error response needs: the ``error`` code, a
    human-readable ``error_description``, an optional ``error_uri`` and the
    HTTP status.
    """

    kind: ErrorKind = ErrorKind.INVALID_REQUEST

    def __init__(
        self,
        description: str | None = None,
        *,
        kind: ErrorKind | None = None,
        uri: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(description or "")
        if kind is not None:
            self.kind = kind
        self.description = description
        self.uri = uri
        self.status_code = status_code if status_code is not None else self.kind.status_code

    @property
    def error(self) -> str:
        return str(self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error={self.error!r}, description={self.description!r})"


class InvalidRequestError(RegistrationError):
    kind = ErrorKind.INVALID_REQUEST


class AccessDeniedError(RegistrationError):
    kind = ErrorKind.ACCESS_DENIED


class ConfigurationError(InvalidRequestError):
    pass


class TokenRejectedError(Exception):
    pass
