"""
Token value object.

Wire format: "<salt-hex>-<derivedkey-hex>-<expiry-decimal>".
The string is opaque to transports; callers URL-encode or HTML-escape it
as the embedding requires.
"""

from dataclasses import dataclass

from .crypto import TOKEN_DELIMITER


@dataclass(frozen=True)
class Token:
    """
    Issued anti-forgery token.

    Attributes:
        salt: Hex-encoded per-token random salt
        key: Hex-encoded HKDF output
        expiry: Absolute UNIX expiry timestamp
    """
    salt: str
    key: str
    expiry: int

    def serialize(self) -> str:
        """Join the fields with the wire delimiter."""
        return TOKEN_DELIMITER.join((self.salt, self.key, str(self.expiry)))

    def __str__(self) -> str:
        return self.serialize()

    def remaining(self, now: int) -> int:
        """Seconds left until expiry at time `now` (negative once expired)."""
        return self.expiry - now
