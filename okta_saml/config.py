"""Settings for the authentication flow, read from an INI file."""

import configparser
import os
from dataclasses import dataclass, fields, replace

from .errors import DataError

DEFAULT_CONFIG_PATH = os.path.expanduser("~/.okta-saml")
DEFAULT_SECTION = "default"

REQUEST_TIMEOUT = 30      # seconds per HTTP request
PUSH_POLL_INTERVAL = 5    # seconds between push-approval polls
PUSH_MAX_ERRORS = 6       # consecutive network errors before giving up


@dataclass(frozen=True)
class Settings:
    """Connection and polling settings.

    ``username`` is not read by the login flow itself; callers use it to
    build the Credentials they pass to ``login`` (the password is never
    stored here).
    """

    okta_url: str = ""
    saml_path: str = ""
    username: str = ""
    request_timeout: float = REQUEST_TIMEOUT
    poll_interval: float = PUSH_POLL_INTERVAL
    max_poll_errors: int = PUSH_MAX_ERRORS
    poll_timeout: float | None = None


_CONVERTERS = {
    "request_timeout": float,
    "poll_interval": float,
    "max_poll_errors": int,
    "poll_timeout": float,
}


def normalise_okta_url(okta_url):
    """Add a scheme if missing and drop any trailing slash."""
    okta_url = okta_url.strip()
    if okta_url and not okta_url.startswith("http"):
        okta_url = f"https://{okta_url}"
    return okta_url.rstrip("/")


def load_config(config_path):
    """Load configuration from an INI file."""
    config = configparser.ConfigParser()
    if os.path.exists(config_path):
        config.read(config_path)
    return config


def load_settings(config_path=DEFAULT_CONFIG_PATH, section=DEFAULT_SECTION, **overrides):
    """Return Settings built from *config_path*, with *overrides* taking priority.

    Overrides that are None are ignored so CLI-style "not given" values fall
    back to the file, then to the defaults.
    """
    cfg = load_config(config_path)
    values = {}

    for f in fields(Settings):
        raw = overrides.get(f.name)
        if raw is None and cfg.has_section(section) and cfg.has_option(section, f.name):
            raw = cfg.get(section, f.name)
        if raw is None:
            continue
        convert = _CONVERTERS.get(f.name)
        if convert is not None and isinstance(raw, str):
            try:
                raw = convert(raw)
            except ValueError as exc:
                raise DataError(f"Invalid value for {f.name}: {raw!r}") from exc
        values[f.name] = raw

    settings = Settings(**values)
    if settings.okta_url:
        settings = replace(settings, okta_url=normalise_okta_url(settings.okta_url))
    return settings
