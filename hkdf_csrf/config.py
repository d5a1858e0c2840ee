"""Environment-driven configuration for token issuing and the resend helpers."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple
import os

from .crypto import DEFAULT_TTL
from .forms import DEFAULT_FIELD_NAME, Params, repost_form, uri_without_token
from .issuer import TokenIssuer
from .validator import TokenValidator


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name) or ""
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class CsrfConfig:
    # excluded from repr
    secret: str = field(repr=False)
    ttl: int = DEFAULT_TTL
    field_name: str = DEFAULT_FIELD_NAME
    param_blacklist: Tuple[str, ...] = ()

    @property
    def secret_bytes(self) -> bytes:
        return self.secret.encode("utf-8") if self.secret else b""

    def issuer(self) -> TokenIssuer:
        return TokenIssuer(self.secret_bytes, self.ttl)

    def validator(self) -> TokenValidator:
        return TokenValidator(self.secret_bytes)

    def uri_without_token(self, request_uri: str, query: Params) -> str:
        return uri_without_token(
            request_uri, query, self.field_name, self.param_blacklist
        )

    def repost_form(self, post_params: Params, action: str, **kwargs) -> str:
        return repost_form(
            post_params, action, field_name=self.field_name,
            blacklist=self.param_blacklist, **kwargs
        )


def load_config() -> CsrfConfig:
    return CsrfConfig(
        secret=os.getenv("CSRF_SECRET", ""),
        ttl=_get_int("CSRF_TTL", DEFAULT_TTL),
        field_name=(os.getenv("CSRF_FIELD_NAME") or DEFAULT_FIELD_NAME).strip(),
        param_blacklist=_get_list("CSRF_PARAM_BLACKLIST"),
    )
