"""Tests for hkdf_csrf.issuer."""

import re

import pytest

from hkdf_csrf import (
    Token,
    TokenIssuer,
    TokenValidator,
    ValidationOutcome,
    issue_token,
    validate_token,
)

HEX64 = re.compile(r"[0-9a-f]{64}")


class TestTokenFormat:
    def test_three_fields(self, secret, clock):
        token = TokenIssuer(secret, ttl=60, clock=clock).issue("ctx")

        salt, key, expiry = token.split("-")
        assert HEX64.fullmatch(salt)
        assert HEX64.fullmatch(key)
        assert expiry == str(clock.now + 60)
        assert len(token) > 32

    def test_build_returns_token_object(self, secret, clock):
        token = TokenIssuer(secret, ttl=15, clock=clock).build()

        assert isinstance(token, Token)
        assert token.expiry == clock.now + 15
        assert token.remaining(clock.now) == 15
        assert str(token) == token.serialize()
        assert token.serialize() == f"{token.salt}-{token.key}-{token.expiry}"

    def test_salt_comes_from_random_source(self, secret, clock):
        issuer = TokenIssuer(secret, clock=clock, random_bytes=lambda n: b"\xab" * n)
        assert issuer.build().salt == "ab" * 32

    def test_default_ttl(self, secret, clock):
        assert TokenIssuer(secret, clock=clock).build().expiry == clock.now + 300


class TestIssuance:
    def test_same_instant_gives_distinct_valid_tokens(self, secret, clock):
        issuer = TokenIssuer(secret, ttl=60, clock=clock)
        validator = TokenValidator(secret, clock=clock)

        first = issuer.issue("ctx")
        second = issuer.issue("ctx")

        assert first != second
        assert validator.validate(first, "ctx") is ValidationOutcome.VALID
        assert validator.validate(second, "ctx") is ValidationOutcome.VALID

    def test_bytes_and_str_context_agree(self, secret, clock):
        issuer = TokenIssuer(secret, ttl=60, clock=clock)
        validator = TokenValidator(secret, clock=clock)

        token = issuer.issue("päge=1")
        assert validator.validate(token, "päge=1".encode("utf-8")).ok

    def test_random_source_failure_propagates(self, secret):
        def broken(n):
            raise NotImplementedError("no secure source")

        issuer = TokenIssuer(secret, random_bytes=broken)
        with pytest.raises(NotImplementedError):
            issuer.issue()

    def test_one_call_helpers(self, secret):
        token = issue_token(secret, 30, "form=login")
        assert validate_token(secret, token, "form=login") is ValidationOutcome.VALID


class TestContract:
    def test_short_secret(self):
        with pytest.raises(ValueError):
            TokenIssuer("too short")

    def test_secret_wrong_type(self):
        with pytest.raises(TypeError):
            TokenIssuer(None)

    def test_ttl_below_minimum(self, secret):
        with pytest.raises(ValueError):
            TokenIssuer(secret, ttl=14)

    def test_ttl_must_be_int(self, secret):
        with pytest.raises(TypeError):
            TokenIssuer(secret, ttl=60.0)

    def test_context_wrong_type(self, secret):
        with pytest.raises(TypeError):
            TokenIssuer(secret).issue(42)
