"""okta-saml: authenticate to Okta (with MFA) and fetch an app's SAML assertion."""

from .authn import authenticate, request_code, verify_push, verify_totp
from .config import Settings, load_settings
from .errors import (
    AuthenticationFailed,
    BadResponseError,
    DataError,
    FactorRejectedError,
    NetworkError,
    OktaError,
    PushCancelledError,
    SamlError,
    StatusCode,
    UnauthorizedError,
)
from .flow import login
from .models import AuthSession, Credentials, Factor, PendingSession, SuccessSession
from .saml import SamlAssertion, extract_saml_payload, fetch_saml_assertion

__version__ = "0.1.0"

__all__ = [
    "AuthSession",
    "AuthenticationFailed",
    "BadResponseError",
    "Credentials",
    "DataError",
    "Factor",
    "FactorRejectedError",
    "NetworkError",
    "OktaError",
    "PendingSession",
    "PushCancelledError",
    "SamlAssertion",
    "SamlError",
    "Settings",
    "StatusCode",
    "SuccessSession",
    "UnauthorizedError",
    "authenticate",
    "extract_saml_payload",
    "fetch_saml_assertion",
    "load_settings",
    "login",
    "request_code",
    "verify_push",
    "verify_totp",
]
