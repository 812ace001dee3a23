"""JSON POST helper shared by every /api/v1/authn call.

All protocol calls go through :func:`post_json`, which maps the transport
outcome onto the exceptions in :mod:`okta_saml.errors`.
"""

import json
import logging

import requests

from .errors import BadResponseError, DataError, NetworkError, UnauthorizedError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def post_json(url, payload, *, timeout=30):
    """POST *payload* as JSON to *url* and return the raw response body.

    Raises DataError if the payload cannot be serialised, NetworkError on
    connection failures and non-2xx statuses, UnauthorizedError on 401/403,
    and BadResponseError when the body cannot be read.
    """
    try:
        body = json.dumps(payload)
    except (TypeError, ValueError) as exc:
        raise DataError(f"Could not serialise request body: {exc}") from exc

    logger.debug("POST %s", url)
    try:
        response = requests.post(
            url,
            data=body,
            headers=JSON_HEADERS,
            timeout=timeout,
            stream=True,
        )
    except requests.RequestException as exc:
        raise NetworkError(f"Network error ({exc})") from exc

    with response:
        status = f"{response.status_code} {response.reason or ''}".strip()
        if response.status_code in (401, 403):
            raise UnauthorizedError(f"Unauthorised ({status})")
        if response.status_code >= 300:
            raise NetworkError(f"Network error ({status})")

        try:
            return response.content
        except requests.RequestException as exc:
            raise BadResponseError(f"Could not read response body: {exc}") from exc


def decode_json(body):
    """Decode a response body into a dict, rejecting anything else."""
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise BadResponseError(f"Malformed JSON in response from Okta: {exc}") from exc
    if not isinstance(data, dict):
        raise BadResponseError("Expected a JSON object in response from Okta")
    return data
