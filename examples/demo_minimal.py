#!/usr/bin/env python3
"""
Minimal end-to-end demo of HKDF-bound anti-forgery tokens.

Usage (from repo root):
    pip install .
    python -m examples.demo_minimal
"""

import secrets

from hkdf_csrf import (
    TokenIssuer,
    TokenValidator,
    repost_form,
    uri_without_token,
)


def main():
    secret = secrets.token_hex(32)

    print("\n=== Setup ===")
    print("Secret (hex, truncated):", secret[:16], "...")

    issuer = TokenIssuer(secret, ttl=60)
    validator = TokenValidator(secret)

    context = "POST /account/delete"
    print("\nContext:", context)

    print("\n=== Issue ===")
    token = issuer.issue(context)
    print("Token:", token)

    print("\n=== Validate ===")
    outcome = validator.validate(token, context)
    print("Same context:     ", outcome.value)

    outcome = validator.validate(token, "POST /account/edit")
    print("Other context:    ", outcome.value)

    other = TokenValidator(secrets.token_hex(32))
    print("Other secret:     ", other.validate(token, context).value)

    print("\n=== Replay ===")
    outcome = validator.validate(token, context)
    print("Second use:       ", outcome.value, "(tokens are not single-use)")

    print("\n=== Resend form for a rejected request ===")
    posted = {"id": "7", "note": "<b>bye</b>", "csrftk": "expired-token-1"}
    action = uri_without_token(
        "/account/delete?id=7&csrftk=expired-token-1",
        {"id": "7", "csrftk": "expired-token-1"},
    )
    print("Action:", action)
    print(repost_form(posted, action))


if __name__ == "__main__":
    main()
