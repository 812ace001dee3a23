"""End-to-end login: password, second factor, SAML assertion."""

import logging

from . import authn, saml
from .errors import AuthenticationFailed, DataError
from .models import PendingSession, SuccessSession

logger = logging.getLogger(__name__)

DELIVERED_CODE_TYPES = ("sms", "call", "email")

STATUS_MESSAGES = {
    "LOCKED_OUT": "Your account is locked out. Please contact your administrator.",
    "PASSWORD_EXPIRED": "Your password has expired. Please reset it in Okta and try again.",
    "MFA_ENROLL": "MFA enrollment is required. Please enroll a factor in Okta first.",
}


def first_factor(factors):
    """Default factor chooser: the only factor, or the first push factor."""
    if not factors:
        raise DataError("Okta offered no second factors")
    for factor in factors:
        if factor.is_push:
            return factor
    return factors[0]


def complete_second_factor(pending, choose_factor, prompt_code, *, settings=None, cancel=None):
    """Run the chosen factor for *pending* and return the resulting session."""
    factor = choose_factor(list(pending.factors))
    if not factor.verify_href:
        raise DataError(f"Factor {factor.label} has no verify link")
    logger.info("Performing secondary authentication using: %s", factor.label)

    if factor.is_push:
        return authn.verify_push(
            factor.verify_href, pending.state_token, settings=settings, cancel=cancel
        )

    if factor.factor_type in DELIVERED_CODE_TYPES:
        logger.info("Requesting %s code", factor.factor_type)
        authn.request_code(factor.verify_href, pending.state_token, settings=settings)

    passcode = prompt_code(factor)
    return authn.verify_totp(factor.verify_href, pending.state_token, passcode, settings=settings)


def login(credentials, *, settings, choose_factor=first_factor, prompt_code=None, cancel=None):
    """Authenticate *credentials* and return the decoded SAML assertion.

    *choose_factor* receives the offered factors and returns one of them;
    *prompt_code* receives the chosen factor and returns the one-time code.
    Any failure raises an OktaError subclass and the attempt must be
    restarted from the beginning.
    """
    if not settings.okta_url or not settings.saml_path:
        raise DataError("Both okta_url and saml_path must be configured")

    session = authn.authenticate(settings.okta_url, credentials, settings=settings)

    if isinstance(session, PendingSession) and session.needs_factor:
        if prompt_code is None:
            prompt_code = _no_code_prompt
        logger.info("MFA verification required")
        session = complete_second_factor(
            session, choose_factor, prompt_code, settings=settings, cancel=cancel
        )

    if not isinstance(session, SuccessSession):
        message = STATUS_MESSAGES.get(
            session.status, f"Authentication failed with unexpected status: {session.status}"
        )
        raise AuthenticationFailed(message, session.status)

    logger.info("Okta authentication successful")
    return saml.fetch_saml_assertion(
        settings.okta_url, settings.saml_path, session, settings=settings
    )


def _no_code_prompt(factor):
    raise DataError(f"A one-time code is required for {factor.label}")
