import json

import pytest
import requests


def build_response(status_code=200, body=b"", reason="OK"):
    """Return a real requests.Response with a preloaded body."""
    if not isinstance(body, (bytes, str)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp.encoding = "utf-8"
    resp._content = body
    resp._content_consumed = True
    return resp


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def mfa_required_body():
    return {
        "stateToken": "state-123",
        "expiresAt": "2026-10-18T10:00:00.000Z",
        "status": "MFA_REQUIRED",
        "_embedded": {
            "factors": [
                {
                    "id": "ost1",
                    "factorType": "token:software:totp",
                    "provider": "GOOGLE",
                    "_links": {"verify": {"href": "https://corp.okta.com/api/v1/authn/factors/ost1/verify"}},
                },
                {
                    "id": "opf1",
                    "factorType": "push",
                    "provider": "OKTA",
                    "_links": {"verify": {"href": "https://corp.okta.com/api/v1/authn/factors/opf1/verify"}},
                },
            ]
        },
    }


@pytest.fixture
def success_body():
    return {
        "expiresAt": "2026-10-18T10:05:00.000Z",
        "status": "SUCCESS",
        "sessionToken": "session-abc",
    }
