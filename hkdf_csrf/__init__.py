"""
HKDF-bound anti-forgery (CSRF) tokens.

Stateless token issuing and validation: each token binds a random salt,
an expiry timestamp and caller-supplied context to a server secret with
HKDF-SHA256. Tokens are not single-use and may be replayed until they
expire.
"""

from .issuer import TokenIssuer, issue_token
from .validator import TokenValidator, ValidationOutcome, validate_token
from .token import Token
from .config import CsrfConfig, load_config
from .forms import filter_params, repost_form, uri_without_token
from .crypto import (
    constant_time_equal,
    derive_key,
    generate_salt,
    DEFAULT_TTL,
    MIN_SECRET_LENGTH,
    MIN_TTL,
)

__all__ = [
    "TokenIssuer",
    "TokenValidator",
    "ValidationOutcome",
    "Token",
    "CsrfConfig",
    "issue_token",
    "validate_token",
    "load_config",
    "filter_params",
    "repost_form",
    "uri_without_token",
    "constant_time_equal",
    "derive_key",
    "generate_salt",
    "DEFAULT_TTL",
    "MIN_SECRET_LENGTH",
    "MIN_TTL",
]
