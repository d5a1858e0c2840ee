import pytest

from hkdf_csrf.config import CsrfConfig, load_config
from hkdf_csrf import ValidationOutcome


@pytest.fixture
def env(monkeypatch):
    for name in ("CSRF_SECRET", "CSRF_TTL", "CSRF_FIELD_NAME", "CSRF_PARAM_BLACKLIST"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(env):
    cfg = load_config()
    assert cfg.secret == ""
    assert cfg.ttl == 300
    assert cfg.field_name == "csrftk"
    assert cfg.param_blacklist == ()


def test_from_environment(env, secret):
    env.setenv("CSRF_SECRET", secret)
    env.setenv("CSRF_TTL", "60")
    env.setenv("CSRF_FIELD_NAME", "_token")
    env.setenv("CSRF_PARAM_BLACKLIST", "redirect, debug,,")

    cfg = load_config()
    assert cfg.secret_bytes == secret.encode("utf-8")
    assert cfg.ttl == 60
    assert cfg.field_name == "_token"
    assert cfg.param_blacklist == ("redirect", "debug")


def test_bad_ttl_falls_back(env):
    env.setenv("CSRF_TTL", "ten minutes")
    assert load_config().ttl == 300


def test_issuer_and_validator(secret):
    cfg = CsrfConfig(secret=secret, ttl=30)
    token = cfg.issuer().issue("ctx")
    assert cfg.validator().validate(token, "ctx") is ValidationOutcome.VALID


def test_missing_secret_fails_fast(env):
    cfg = load_config()
    with pytest.raises(ValueError):
        cfg.issuer()
    with pytest.raises(ValueError):
        cfg.validator()


def test_ttl_below_minimum_fails_fast(secret):
    with pytest.raises(ValueError):
        CsrfConfig(secret=secret, ttl=5).issuer()


def test_repr_hides_secret(env):
    env.setenv("CSRF_SECRET", "TOPSECRET" * 4)
    cfg = load_config()
    assert "TOPSECRET" not in repr(cfg)
    assert "ttl=300" in repr(cfg)


def test_uri_uses_configured_field_and_blacklist(secret):
    cfg = CsrfConfig(secret=secret, field_name="_token", param_blacklist=("next",))
    uri = cfg.uri_without_token(
        "/edit?id=7", {"id": "7", "_token": "t", "next": "//evil", "csrftk": "x"}
    )
    assert uri == "/edit?id=7&csrftk=x"


def test_repost_form_uses_configured_field_and_blacklist(secret):
    cfg = CsrfConfig(secret=secret, field_name="_token", param_blacklist=("next",))
    html = cfg.repost_form(
        {"id": "7", "_token": "t", "next": "//evil"}, "/edit", css_class="retry"
    )
    assert 'name="id"' in html
    assert "_token" not in html
    assert "evil" not in html
    assert 'class="retry"' in html
