"""Typed views of the Okta /api/v1/authn transaction."""

from dataclasses import dataclass, field

from .errors import BadResponseError

STATUS_SUCCESS = "SUCCESS"
STATUS_MFA_REQUIRED = "MFA_REQUIRED"
STATUS_MFA_CHALLENGE = "MFA_CHALLENGE"

FACTOR_RESULT_WAITING = "WAITING"

PUSH_FACTOR_TYPES = ("push",)
CODE_FACTOR_TYPES = ("token:software:totp", "token:hotp", "token", "sms", "call", "email")

FACTOR_LABELS = {
    "token:software:totp": "TOTP Authenticator",
    "push": "Okta Verify Push",
    "sms": "SMS",
    "call": "Voice Call",
    "token:hotp": "HOTP Token",
    "email": "Email",
}

PROVIDER_LABELS = {
    "GOOGLE": "Google Authenticator",
    "OKTA": "Okta Verify",
}


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)

    def to_payload(self) -> dict:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class Factor:
    """A second factor Okta offered for this transaction."""

    factor_type: str
    provider: str
    verify_href: str
    factor_id: str = ""

    @property
    def is_push(self) -> bool:
        return self.factor_type in PUSH_FACTOR_TYPES

    @property
    def is_code(self) -> bool:
        return self.factor_type in CODE_FACTOR_TYPES or self.factor_type.startswith("token:")

    @property
    def label(self) -> str:
        label = FACTOR_LABELS.get(self.factor_type, self.factor_type)
        if self.provider:
            label = f"{label} ({provider_name(self.provider)})"
        return label

    @classmethod
    def from_json(cls, data: dict) -> "Factor":
        data = _object(data, "factor")
        links = _object(data.get("_links"), "factor _links")
        verify = _object(links.get("verify"), "_links.verify")
        return cls(
            factor_type=data.get("factorType", ""),
            provider=data.get("provider", ""),
            verify_href=verify.get("href", ""),
            factor_id=data.get("id", ""),
        )


def _object(value, name):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise BadResponseError(f"Unexpected response shape from Okta: {name} is not an object")
    return value


def provider_name(key: str) -> str:
    """Return a display name for an Okta factor provider key."""
    return PROVIDER_LABELS.get(key, key)


@dataclass(frozen=True)
class AuthSession:
    """A transaction in a status that carries neither token (e.g. LOCKED_OUT)."""

    status: str
    expires_at: str

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class PendingSession(AuthSession):
    """A transaction still in progress; the state token drives the next step."""

    state_token: str
    factors: tuple = ()

    @property
    def needs_factor(self) -> bool:
        return self.status in (STATUS_MFA_REQUIRED, STATUS_MFA_CHALLENGE)

    def factors_of(self, *factor_types) -> list:
        return [f for f in self.factors if f.factor_type in factor_types]


@dataclass(frozen=True)
class SuccessSession(AuthSession):
    """A completed transaction; the session token is redeemable for SAML."""

    session_token: str = field(repr=False)

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class PushChallenge:
    poll_href: str
    factor_result: str


def parse_session(data: dict) -> AuthSession:
    """Build the AuthSession variant matching an /authn response body.

    Raises BadResponseError for a SUCCESS response without a session token
    or when nested fields are not the JSON types Okta documents.
    """
    status = data.get("status", "")
    expires_at = data.get("expiresAt", "")

    if status == STATUS_SUCCESS:
        session_token = data.get("sessionToken")
        if not session_token:
            raise BadResponseError("Okta reported SUCCESS without a session token")
        return SuccessSession(status=status, expires_at=expires_at, session_token=session_token)

    state_token = data.get("stateToken")
    if state_token:
        embedded = _object(data.get("_embedded"), "_embedded")
        factors = embedded.get("factors") or []
        if not isinstance(factors, list):
            raise BadResponseError("Unexpected response shape from Okta: _embedded.factors is not a list")
        factors = tuple(Factor.from_json(f) for f in factors)
        return PendingSession(
            status=status,
            expires_at=expires_at,
            state_token=state_token,
            factors=factors,
        )

    return AuthSession(status=status, expires_at=expires_at)


def parse_push_challenge(data: dict) -> PushChallenge:
    links = _object(data.get("_links"), "_links")
    next_link = _object(links.get("next"), "_links.next")
    return PushChallenge(
        poll_href=next_link.get("href", ""),
        factor_result=data.get("factorResult", ""),
    )
