import base64

import pytest

from components.core.config import get_settings
from components.core.security import create_access_token, verify_credentials, verify_token


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch):
    for name in ("DEMO_EMAIL", "DEMO_PASSWORD", "DEMO_USER_NAME"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_token_is_base64_of_email_and_timestamp() -> None:
    token = create_access_token("finance@solidcam.org", timestamp_ms=1733390000000)

    assert base64.b64decode(token).decode() == "finance@solidcam.org:1733390000000"


def test_verify_token_returns_demo_user() -> None:
    user = verify_token(create_access_token("FINANCE@solidcam.org"))

    assert user is not None
    assert user.name == "Agnès Mbarga"


@pytest.mark.parametrize(
    "token",
    [
        "%%%",
        base64.b64encode(b"finance@solidcam.org").decode(),
        base64.b64encode(b"someone@else.org:123").decode(),
        base64.b64encode(b"finance@solidcam.org:abc").decode(),
    ],
)
def test_verify_token_rejects_foreign_tokens(token: str) -> None:
    assert verify_token(token) is None


def test_verify_credentials() -> None:
    assert verify_credentials(" Finance@SolidCam.org ", "BudgetCare!23")
    assert not verify_credentials("finance@solidcam.org", "budgetcare!23")
    assert not verify_credentials("other@solidcam.org", "BudgetCare!23")
