"""SAML assertion retrieval from an Okta app embed link."""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup

from .config import Settings
from .errors import DataError, NetworkError, SamlError, StatusCode
from .models import SuccessSession

logger = logging.getLogger(__name__)

SAML_FIELD = "SAMLResponse"
TOKEN_PARAM = "onetimetoken"


@dataclass(frozen=True)
class SamlAssertion:
    """A decoded SAML assertion and the form it was posted from."""

    encoded: str = field(repr=False)
    raw: bytes = field(repr=False)
    action_url: str | None = None

    @property
    def xml(self) -> str:
        return self.raw.decode("utf-8")


def saml_login_url(okta_url, saml_path, session_token):
    """Resolve *saml_path* against *okta_url* and attach the one-time token."""
    try:
        resolved = urljoin(okta_url, saml_path)
        parts = urlsplit(resolved)
    except ValueError as exc:
        raise DataError(f"Invalid SAML URL {saml_path!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise DataError(f"SAML URL must resolve to an absolute URL: {resolved!r}")
    query = urlencode({TOKEN_PARAM: session_token})
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def fetch_saml_assertion(okta_url, saml_path, session, *, settings=None):
    """Exchange a session token for the app's SAML assertion.

    Uses a fresh requests.Session per call so no cookies leak between
    attempts. Raises SamlError when Okta does not hand back a SAMLResponse.
    """
    if not isinstance(session, SuccessSession):
        raise DataError(f"Cannot fetch SAML assertion for status {session.status!r}")

    settings = settings or Settings()
    url = saml_login_url(okta_url, saml_path, session.session_token)
    logger.debug("GET %s", saml_login_url(okta_url, saml_path, "<redacted>"))

    with requests.Session() as http:
        try:
            resp = http.get(
                url, allow_redirects=True, timeout=settings.request_timeout, stream=True
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Network error ({exc})") from exc

        if resp.status_code >= 300:
            raise SamlError(
                f"Could not get SAML payload ({resp.status_code} {resp.reason})",
                status=StatusCode.NET_ERROR,
            )

        try:
            html = resp.content
        except requests.RequestException as exc:
            raise SamlError(f"Could not read SAML response: {exc}") from exc

    encoded, action_url = extract_saml_form(html)
    assertion = SamlAssertion(
        encoded=encoded,
        raw=decode_saml_payload(encoded),
        action_url=action_url,
    )
    logger.info("Retrieved SAML assertion (%d bytes)", len(assertion.raw))
    return assertion


def extract_saml_form(html):
    """Return (saml_payload, action_url) from the first SAMLResponse input."""
    soup = BeautifulSoup(html, "lxml")
    tag = soup.find("input", attrs={"name": SAML_FIELD})
    if tag is None:
        raise SamlError("No SAML payload found in response from Okta")
    form = tag.find_parent("form")
    action_url = form.get("action") if form is not None else None
    return tag.get("value", ""), action_url or None


def extract_saml_payload(html):
    """Return the SAMLResponse value from an HTML document."""
    payload, _ = extract_saml_form(html)
    return payload


def decode_saml_payload(payload):
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SamlError(f"SAML payload is not valid base64: {exc}") from exc
