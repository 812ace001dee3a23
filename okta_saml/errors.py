"""Status codes and exceptions raised by the Okta authentication flow."""

import enum


class StatusCode(enum.Enum):
    """Outcome of a call, independent of the HTTP status that caused it."""

    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    DATA_ERROR = "data-error"
    NET_ERROR = "net-error"
    BAD_RESPONSE = "bad-response"
    CANCELLED = "cancelled"


class OktaError(Exception):
    """Base class for every failure in the authentication flow."""

    status = StatusCode.BAD_RESPONSE

    def __init__(self, message, status=None):
        super().__init__(message)
        if status is not None:
            self.status = status


class DataError(OktaError):
    """Request data could not be built (bad URL, unserialisable payload)."""

    status = StatusCode.DATA_ERROR


class UnauthorizedError(OktaError):
    """Okta rejected the credentials or the state token (HTTP 401/403)."""

    status = StatusCode.UNAUTHORIZED


class NetworkError(OktaError):
    """The request failed in transit or came back with a non-2xx status."""

    status = StatusCode.NET_ERROR


class BadResponseError(OktaError):
    """Okta answered with something we could not read or did not expect."""

    status = StatusCode.BAD_RESPONSE


class FactorRejectedError(BadResponseError):
    """A push challenge was rejected or timed out on the user's device."""

    def __init__(self, factor_result):
        super().__init__(f"Push verification failed: {factor_result}")
        self.factor_result = factor_result


class AuthenticationFailed(BadResponseError):
    """The transaction finished in a status other than SUCCESS."""

    def __init__(self, message, auth_status):
        super().__init__(message)
        self.auth_status = auth_status


class PushCancelledError(OktaError):
    """Push polling was stopped by the caller's cancel event or deadline."""

    status = StatusCode.CANCELLED


class SamlError(OktaError):
    """The SAML assertion could not be fetched or decoded."""
