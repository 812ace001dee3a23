"""Tests for models.py — parsing /authn responses into session variants."""

import pytest

from okta_saml.errors import BadResponseError
from okta_saml.models import (
    AuthSession,
    Credentials,
    Factor,
    PendingSession,
    SuccessSession,
    parse_push_challenge,
    parse_session,
    provider_name,
)


class TestParseSession:
    def test_success(self, success_body):
        session = parse_session(success_body)
        assert isinstance(session, SuccessSession)
        assert session.session_token == "session-abc"
        assert session.is_success

    def test_success_without_token_rejected(self):
        with pytest.raises(BadResponseError):
            parse_session({"status": "SUCCESS"})

    def test_mfa_required(self, mfa_required_body):
        session = parse_session(mfa_required_body)
        assert isinstance(session, PendingSession)
        assert session.state_token == "state-123"
        assert session.needs_factor
        assert not session.is_success
        assert [f.factor_type for f in session.factors] == ["token:software:totp", "push"]
        assert session.factors[1].verify_href.endswith("/opf1/verify")
        assert session.factors_of("push") == [session.factors[1]]

    def test_terminal_status_without_tokens(self):
        session = parse_session({"status": "LOCKED_OUT"})
        assert type(session) is AuthSession
        assert session.status == "LOCKED_OUT"

    def test_empty_body(self):
        session = parse_session({})
        assert type(session) is AuthSession
        assert session.status == ""


class TestFactor:
    def test_push(self):
        factor = Factor("push", "OKTA", "https://x/verify")
        assert factor.is_push
        assert not factor.is_code
        assert factor.label == "Okta Verify Push (Okta Verify)"

    def test_totp_google(self):
        factor = Factor("token:software:totp", "GOOGLE", "https://x/verify")
        assert factor.is_code
        assert factor.label == "TOTP Authenticator (Google Authenticator)"

    def test_unknown_type_uses_raw_name(self):
        factor = Factor("u2f", "", "https://x/verify")
        assert factor.label == "u2f"

    def test_from_json_without_links(self):
        factor = Factor.from_json({"factorType": "sms"})
        assert factor.verify_href == ""
        assert factor.provider == ""


def test_provider_name():
    assert provider_name("GOOGLE") == "Google Authenticator"
    assert provider_name("RSA") == "RSA"


def test_credentials_repr_hides_password():
    creds = Credentials("alice", "hunter2")
    assert "hunter2" not in repr(creds)
    assert creds.to_payload() == {"username": "alice", "password": "hunter2"}


def test_push_challenge():
    challenge = parse_push_challenge(
        {"factorResult": "WAITING", "_links": {"next": {"href": "https://x/poll"}}}
    )
    assert challenge.poll_href == "https://x/poll"
    assert challenge.factor_result == "WAITING"


class TestUnexpectedShapes:
    @pytest.mark.parametrize(
        "body",
        [
            {"status": "MFA_REQUIRED", "stateToken": "s", "_embedded": {"factors": {"a": 1}}},
            {"status": "MFA_REQUIRED", "stateToken": "s", "_embedded": {"factors": ["push"]}},
            {"status": "MFA_REQUIRED", "stateToken": "s", "_embedded": [1, 2]},
            {
                "status": "MFA_REQUIRED",
                "stateToken": "s",
                "_embedded": {"factors": [{"_links": {"verify": "https://x"}}]},
            },
            {
                "status": "MFA_REQUIRED",
                "stateToken": "s",
                "_embedded": {"factors": [{"_links": "https://x"}]},
            },
        ],
    )
    def test_session_raises_bad_response(self, body):
        with pytest.raises(BadResponseError, match="Unexpected response shape"):
            parse_session(body)

    @pytest.mark.parametrize(
        "body",
        [
            {"_links": "https://x/poll"},
            {"_links": {"next": "https://x/poll"}},
        ],
    )
    def test_push_challenge_raises_bad_response(self, body):
        with pytest.raises(BadResponseError, match="Unexpected response shape"):
            parse_push_challenge(body)

    def test_null_containers_are_absent(self):
        session = parse_session({"status": "MFA_REQUIRED", "stateToken": "s", "_embedded": None})
        assert isinstance(session, PendingSession)
        assert session.factors == ()
        assert parse_push_challenge({"_links": None}).poll_href == ""
