"""
Token issuer for HKDF-bound anti-forgery tokens.

This module handles the issuing side:
- Fresh random salt per token
- Absolute expiry = now + ttl
- Key = HKDF-SHA256(secret, salt, context || NUL || expiry)
- Serialization as salt-key-expiry

Issued tokens carry no secret material and are safe to hand to clients.
They are not single-use: a token can be replayed until it expires, since
nothing about issued tokens is stored.
"""

import logging
import secrets
from typing import Callable, Union

from .crypto import (
    DEFAULT_TTL,
    SALT_LENGTH,
    check_ttl,
    derive_key,
    generate_salt,
    normalize_context,
    normalize_secret,
    unix_time,
)
from .token import Token

logger = logging.getLogger(__name__)


class TokenIssuer:
    """
    Token issuer bound to one server secret and ttl.

    Usage:
        issuer = TokenIssuer(secret, ttl=300)
        token = issuer.issue("action=/account/delete")
        # embed token in the form or URL

    The issuer holds no mutable state and can be shared between threads.
    """

    def __init__(
        self,
        secret: Union[str, bytes],
        ttl: int = DEFAULT_TTL,
        clock: Callable[[], int] = unix_time,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes
    ):
        """
        Initialize the issuer.

        Args:
            secret: Server secret, at least 32 bytes
            ttl: Token lifetime in seconds (>= 15)
            clock: Current UNIX time source
            random_bytes: Random source for salts

        Raises:
            TypeError, ValueError: secret or ttl breaks the contract
        """
        self._secret = normalize_secret(secret)
        self.ttl = check_ttl(ttl)
        self._clock = clock
        self._random_bytes = random_bytes

    def build(self, context: Union[str, bytes] = "") -> Token:
        """
        Build a token object for the given context.

        Args:
            context: Context info bound into the key (form action,
                query parameters, ...). Must be passed again on validation.

        Returns:
            Token: salt, derived key and absolute expiry
        """
        context_bytes = normalize_context(context)

        salt = generate_salt(SALT_LENGTH, self._random_bytes)
        expiry = int(self._clock()) + self.ttl
        key = derive_key(self._secret, salt, context_bytes, expiry)

        logger.debug("issued token salt=%s... expiry=%d", salt[:8], expiry)
        return Token(salt=salt, key=key, expiry=expiry)

    def issue(self, context: Union[str, bytes] = "") -> str:
        """Issue a serialized token ready to embed in a form or URL."""
        return self.build(context).serialize()


def issue_token(
    secret: Union[str, bytes],
    ttl: int = DEFAULT_TTL,
    context: Union[str, bytes] = ""
) -> str:
    """
    Issue a token in one call.

    Args:
        secret: Server secret, at least 32 bytes
        ttl: Token lifetime in seconds (>= 15)
        context: Optional context info

    Returns:
        str: "<salt>-<key>-<expiry>"
    """
    return TokenIssuer(secret, ttl).issue(context)


# =============================================================================
# DEMONSTRATION
# =============================================================================

if __name__ == "__main__":
    print("=== Token Issuer Demo ===\n")

    secret = secrets.token_hex(32)
    issuer = TokenIssuer(secret, ttl=60)

    for context in ("", "action=/delete", "action=/delete"):
        print(f"context={context!r}")
        print(f"   {issuer.issue(context)}")
