import pytest

SECRET = "s" * 32 + "-server-secret"
OTHER_SECRET = "o" * 32 + "-other-secret"
NOW = 1_700_000_000


class FakeClock:
    """Settable UNIX clock."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def other_secret():
    return OTHER_SECRET
