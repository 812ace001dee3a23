"""Okta primary authentication and second-factor verification."""

import logging
import time
from urllib.parse import urljoin, urlsplit

from .config import Settings
from .errors import (
    BadResponseError,
    DataError,
    FactorRejectedError,
    NetworkError,
    PushCancelledError,
)
from .models import (
    FACTOR_RESULT_WAITING,
    STATUS_MFA_CHALLENGE,
    STATUS_SUCCESS,
    parse_push_challenge,
    parse_session,
)
from .transport import decode_json, post_json

logger = logging.getLogger(__name__)

AUTHN_ENDPOINT = "/api/v1/authn"


def _check_base_url(okta_url):
    try:
        parts = urlsplit(okta_url)
    except ValueError as exc:
        raise DataError(f"Invalid Okta URL {okta_url!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise DataError(f"Okta URL must be absolute: {okta_url!r}")


def authenticate(okta_url, credentials, *, settings=None):
    """Perform primary Okta username/password authentication.

    Returns the AuthSession variant for whatever status Okta answered with;
    a PendingSession still needs a second factor.
    """
    settings = settings or Settings()
    _check_base_url(okta_url)
    url = urljoin(okta_url, AUTHN_ENDPOINT)

    logger.info("Authenticating to %s as %s", okta_url, credentials.username)
    body = post_json(url, credentials.to_payload(), timeout=settings.request_timeout)
    session = parse_session(decode_json(body))
    logger.debug("Primary authentication status: %s", session.status)
    return session


def verify_totp(verify_href, state_token, passcode, *, settings=None):
    """Submit a one-time code for a code-based factor."""
    settings = settings or Settings()
    payload = {"stateToken": state_token, "passCode": passcode}
    body = post_json(verify_href, payload, timeout=settings.request_timeout)
    session = parse_session(decode_json(body))
    logger.debug("Code verification status: %s", session.status)
    return session


def request_code(verify_href, state_token, *, settings=None):
    """Ask Okta to send a one-time code (SMS, voice call, email)."""
    settings = settings or Settings()
    body = post_json(verify_href, {"stateToken": state_token}, timeout=settings.request_timeout)
    return parse_session(decode_json(body))


def verify_push(verify_href, state_token, *, settings=None, cancel=None, timeout=None):
    """Send an Okta Verify push and poll until it is approved.

    *cancel* is an optional threading.Event; setting it stops polling.
    *timeout* bounds the total polling time in seconds (default: the
    settings' poll_timeout, which is unbounded unless configured).
    Raises PushCancelledError when either fires.
    """
    settings = settings or Settings()
    if timeout is None:
        timeout = settings.poll_timeout
    deadline = time.monotonic() + timeout if timeout is not None else None
    payload = {"stateToken": state_token}

    data = decode_json(post_json(verify_href, payload, timeout=settings.request_timeout))
    if data.get("status") == STATUS_SUCCESS:
        return parse_session(data)

    challenge = parse_push_challenge(data)
    if not challenge.poll_href:
        raise BadResponseError("No poll link in push verification response")

    errors_remaining = settings.max_poll_errors
    logger.info("Waiting for MFA response")

    while True:
        _check_cancelled(cancel, deadline)
        try:
            body = post_json(challenge.poll_href, payload, timeout=settings.request_timeout)
        except NetworkError as exc:
            errors_remaining -= 1
            if errors_remaining <= 0:
                logger.error("Too many network errors, aborting push verification")
                raise
            logger.warning("Push poll failed (%s); %d attempts remaining", exc, errors_remaining)
            _wait(settings.poll_interval, cancel, deadline)
            continue

        errors_remaining = settings.max_poll_errors
        data = decode_json(body)
        status = data.get("status", "")

        if status == STATUS_SUCCESS:
            logger.info("Push verification approved")
            return parse_session(data)

        if status != STATUS_MFA_CHALLENGE:
            raise BadResponseError(f"Bad status from Okta API: {status}")

        factor_result = data.get("factorResult") or FACTOR_RESULT_WAITING
        if factor_result != FACTOR_RESULT_WAITING:
            raise FactorRejectedError(factor_result)

        logger.debug("Push still pending")
        _wait(settings.poll_interval, cancel, deadline)


def _check_cancelled(cancel, deadline):
    if cancel is not None and cancel.is_set():
        raise PushCancelledError("Push verification cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise PushCancelledError("Push verification timed out")


def _wait(interval, cancel, deadline):
    if deadline is not None:
        interval = max(0, min(interval, deadline - time.monotonic()))
    if cancel is not None:
        cancel.wait(interval)
    elif interval > 0:
        time.sleep(interval)
    _check_cancelled(cancel, deadline)
