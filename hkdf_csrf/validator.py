"""
Token validator for HKDF-bound anti-forgery tokens.

This module handles the receiving side. Checks run in order and stop at
the first failure:
1. Empty token
2. Exactly three delimiter-separated fields
3. No empty field
4. Expiry made of ASCII digits only
5. Recompute the key from (secret, salt, context, expiry)
6. Constant-time comparison with the received key
7. Expiry not in the past

Structural checks run before the HKDF computation. The key comparison
runs before the expiry check, because expiry can only be trusted once
the key covering it has matched.

Every failure is a ValidationOutcome, never an exception. The specific
reason is for internal logs only; clients should see a uniform rejection.
"""

import logging
from enum import Enum
from typing import Any, Callable, Union

from .crypto import (
    EXPIRY_DIGITS,
    TOKEN_DELIMITER,
    constant_time_equal,
    derive_key,
    normalize_context,
    normalize_secret,
    unix_time,
)

logger = logging.getLogger(__name__)


class ValidationOutcome(Enum):
    """Result of token validation."""
    VALID = "valid"
    EMPTY_TOKEN = "empty_token"
    MALFORMED_TOKEN = "malformed_token"
    MALFORMED_EXPIRY = "malformed_expiry"
    KEY_MISMATCH = "key_mismatch"
    EXPIRED = "expired"

    @property
    def ok(self) -> bool:
        """True only for VALID."""
        return self is ValidationOutcome.VALID

    @property
    def message(self) -> str:
        """Log message for this outcome."""
        return _MESSAGES[self]


_MESSAGES = {
    ValidationOutcome.VALID: "OK",
    ValidationOutcome.EMPTY_TOKEN: "No token",
    ValidationOutcome.MALFORMED_TOKEN: "Attack - Invalid token",
    ValidationOutcome.MALFORMED_EXPIRY: "Attack - Invalid expire",
    ValidationOutcome.KEY_MISMATCH: "Attack - Key mismatch",
    ValidationOutcome.EXPIRED: "Expired",
}


class TokenValidator:
    """
    Token validator bound to one server secret.

    Usage:
        validator = TokenValidator(secret)
        outcome = validator.validate(token, "action=/account/delete")

        if not outcome.ok:
            # reject the request, without telling the client why
            ...

    The validator holds no mutable state and can be shared between threads.
    """

    def __init__(
        self,
        secret: Union[str, bytes],
        clock: Callable[[], int] = unix_time
    ):
        """
        Initialize the validator.

        Args:
            secret: Server secret, at least 32 bytes (same as issuer)
            clock: Current UNIX time source

        Raises:
            TypeError, ValueError: secret breaks the contract
        """
        self._secret = normalize_secret(secret)
        self._clock = clock

    def validate(self, token: Any, context: Union[str, bytes] = "") -> ValidationOutcome:
        """
        Validate a received token.

        Args:
            token: Token string as received from the client
            context: Context info the token must be bound to

        Returns:
            ValidationOutcome: VALID or the first failure reason

        Raises:
            TypeError: context is neither str nor bytes (caller bug)
        """
        context_bytes = normalize_context(context)
        outcome = self._check(token, context_bytes)

        if outcome is not ValidationOutcome.VALID:
            logger.warning(
                "csrf token rejected: %s (%s) salt=%r",
                outcome.value, outcome.message, _salt_prefix(token, outcome),
            )
        return outcome

    def _check(self, token: Any, context: bytes) -> ValidationOutcome:
        if token is None or token == "":
            return ValidationOutcome.EMPTY_TOKEN
        if not isinstance(token, str):
            return ValidationOutcome.MALFORMED_TOKEN

        fields = token.split(TOKEN_DELIMITER)
        if len(fields) != 3:
            return ValidationOutcome.MALFORMED_TOKEN

        salt, key, expiry = fields
        if not salt or not key or not expiry:
            return ValidationOutcome.MALFORMED_TOKEN

        if not EXPIRY_DIGITS.issuperset(expiry):
            return ValidationOutcome.MALFORMED_EXPIRY

        # Non-ASCII salts cannot have come from the issuer
        if not salt.isascii():
            return ValidationOutcome.KEY_MISMATCH

        expected = derive_key(self._secret, salt, context, expiry)
        if not constant_time_equal(key, expected):
            return ValidationOutcome.KEY_MISMATCH

        if int(expiry) < int(self._clock()):
            return ValidationOutcome.EXPIRED

        return ValidationOutcome.VALID


_SALT_PARSED = frozenset((
    ValidationOutcome.MALFORMED_EXPIRY,
    ValidationOutcome.KEY_MISMATCH,
    ValidationOutcome.EXPIRED,
))


def _salt_prefix(token: Any, outcome: ValidationOutcome) -> str:
    """First 8 salt characters for log correlation, "" if none was parsed."""
    if outcome not in _SALT_PARSED:
        return ""
    return token.split(TOKEN_DELIMITER, 1)[0][:8]


def validate_token(
    secret: Union[str, bytes],
    token: Any,
    context: Union[str, bytes] = ""
) -> ValidationOutcome:
    """
    Validate a token in one call.

    Args:
        secret: Server secret used at issuance
        token: Token string as received
        context: Context info used at issuance

    Returns:
        ValidationOutcome: VALID or the failure reason
    """
    return TokenValidator(secret).validate(token, context)


# =============================================================================
# DEMONSTRATION
# =============================================================================

if __name__ == "__main__":
    import secrets

    from .issuer import TokenIssuer

    print("=== Token Validator Demo ===\n")

    secret = secrets.token_hex(32)
    issuer = TokenIssuer(secret, ttl=60)
    validator = TokenValidator(secret)

    token = issuer.issue("action=/delete")
    print(f"Token: {token}\n")

    cases = [
        ("valid", token, "action=/delete"),
        ("wrong context", token, "action=/edit"),
        ("empty", "", "action=/delete"),
        ("two fields", "a-b", "action=/delete"),
        ("bad expiry", "aa-bb-xx", "action=/delete"),
    ]
    for label, candidate, context in cases:
        outcome = validator.validate(candidate, context)
        print(f"{label:>14}: {outcome.value}")
