"""
Cryptographic primitives for HKDF-bound anti-forgery tokens.

This module provides:
- generate_salt: Per-token random salt (hex encoded)
- build_info: HKDF info construction context || NUL || expiry
- derive_key: HKDF-SHA256 derivation of the token key
- constant_time_equal: Side-channel resistant comparison
- normalize_secret / normalize_context: Input contract checks

References:
- RFC 5869: HMAC-based Extract-and-Expand Key Derivation Function (HKDF)
"""

import secrets
import time
from typing import Callable, Union

from cryptography.hazmat.primitives import constant_time, hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

# =============================================================================
# CONFIGURATION
# =============================================================================

MIN_SECRET_LENGTH = 32  # bytes
SALT_LENGTH = 32        # raw random bytes (64 hex characters)
KEY_LENGTH = 32         # HKDF output bytes (64 hex characters)
MIN_TTL = 15            # seconds
DEFAULT_TTL = 300       # seconds

TOKEN_DELIMITER = "-"
EXPIRY_DIGITS = frozenset("0123456789")


# =============================================================================
# INPUT CONTRACT
# =============================================================================

def normalize_secret(secret: Union[str, bytes]) -> bytes:
    """
    Check and encode the server secret.

    Args:
        secret: Server-held secret (str is UTF-8 encoded)

    Returns:
        bytes: Secret key material

    Raises:
        TypeError: secret is neither str nor bytes
        ValueError: secret is shorter than MIN_SECRET_LENGTH bytes
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    elif not isinstance(secret, (bytes, bytearray)):
        raise TypeError(f"secret must be str or bytes (got {type(secret).__name__})")

    if len(secret) < MIN_SECRET_LENGTH:
        raise ValueError(
            f"secret must be at least {MIN_SECRET_LENGTH} bytes (got {len(secret)})"
        )
    return bytes(secret)


def normalize_context(context: Union[str, bytes]) -> bytes:
    """Encode context info (str is UTF-8 encoded, empty is allowed)."""
    if isinstance(context, str):
        return context.encode("utf-8")
    if isinstance(context, (bytes, bytearray)):
        return bytes(context)
    raise TypeError(f"context must be str or bytes (got {type(context).__name__})")


def check_ttl(ttl: int) -> int:
    """
    Check a time-to-live value.

    bool is rejected even though it subclasses int.
    """
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise TypeError(f"ttl must be an int (got {type(ttl).__name__})")
    if ttl < MIN_TTL:
        raise ValueError(f"ttl must be at least {MIN_TTL} seconds (got {ttl})")
    return ttl


# =============================================================================
# KEY DERIVATION
# =============================================================================

def build_info(context: bytes, expiry: Union[int, str]) -> bytes:
    """
    HKDF info parameter: context || NUL || decimal ASCII expiry.

    The NUL separator keeps the context from running into the expiry,
    so ("a1", 2) and ("a", 12) produce different info strings.
    """
    return context + b"\x00" + str(expiry).encode("ascii")


def derive_key(secret: bytes, salt: str, context: bytes, expiry: Union[int, str]) -> str:
    """
    Derive the token key with HKDF-SHA256.

    Args:
        secret: Input key material (normalized server secret)
        salt: Hex-encoded token salt; its ASCII bytes are the HKDF salt
        context: Context info bound into the derivation
        expiry: Absolute UNIX expiry timestamp (int or digit string)

    Returns:
        str: Hex-encoded 32-byte derived key

    Security:
        - expiry is covered by the derivation, so it cannot be edited
          independently of the key
        - the secret is never recoverable from the output

    Reference: RFC 5869
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt.encode("ascii"),
        info=build_info(context, expiry),
    )
    return hkdf.derive(secret).hex()


# =============================================================================
# CONSTANT-TIME COMPARISON
# =============================================================================

def constant_time_equal(a: str, b: str) -> bool:
    """
    Compare two key strings in constant time.

    Delegates to cryptography's bytes_eq, whose running time does not
    depend on where (or whether) the inputs differ.

    Args:
        a: Received key
        b: Recomputed key

    Returns:
        bool: True if a == b
    """
    return constant_time.bytes_eq(a.encode("utf-8"), b.encode("utf-8"))


# =============================================================================
# DEFAULT SOURCES
# =============================================================================

def generate_salt(
    length: int = SALT_LENGTH,
    random_bytes: Callable[[int], bytes] = secrets.token_bytes
) -> str:
    """
    Generate a hex-encoded random salt.

    Args:
        length: Number of raw random bytes
        random_bytes: Random source (default: OS CSPRNG via secrets)

    Returns:
        str: 2 * length hex characters

    Raises:
        RuntimeError: the source returned the wrong number of bytes

    Errors from the source itself propagate; there is no weaker fallback.
    """
    raw = random_bytes(length)
    if len(raw) != length:
        raise RuntimeError(
            f"random source returned {len(raw)} bytes, expected {length}"
        )
    return bytes(raw).hex()


def unix_time() -> int:
    """Current UNIX time in whole seconds."""
    return int(time.time())


# =============================================================================
# DEMONSTRATION
# =============================================================================

if __name__ == "__main__":
    print("=== Cryptographic Primitives Demo ===\n")

    secret = normalize_secret(secrets.token_hex(32))
    salt = generate_salt()
    expiry = unix_time() + DEFAULT_TTL

    print(f"Salt:   {salt}")
    print(f"Expiry: {expiry}")

    key = derive_key(secret, salt, b"action=/delete", expiry)
    print(f"Key:    {key}")

    assert derive_key(secret, salt, b"action=/delete", expiry) == key
    print("   derivation is deterministic")

    assert derive_key(secret, salt, b"action=/edit", expiry) != key
    print("   context changes the key")

    assert derive_key(secret, salt, b"action=/delete", expiry + 1) != key
    print("   expiry changes the key")

    assert constant_time_equal(key, key)
    flipped = key[:-1] + ("1" if key[-1] == "0" else "0")
    assert not constant_time_equal(key, flipped)
    print("   constant-time comparison works")
