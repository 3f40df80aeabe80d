import pytest

from seo_toolbox.config import Settings
from seo_toolbox.llm.client import VendorType


def _settings(**overrides):
    # Skip .env so the developer's real keys never leak into assertions
    values = {"GOOGLE_API_KEY": None, "OPENAI_API_KEY": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults():
    settings = _settings()
    assert settings.GEMINI_MODEL == "gemini-2.5-flash"
    assert settings.OPENAI_MODEL == "gpt-4o-mini"
    assert settings.OPENAI_MAX_TOKENS == 4000
    assert settings.DEFAULT_VENDOR == "gemini"
    assert settings.VENDOR_TIMEOUT_SECONDS > 0


def test_credential_for_each_vendor():
    settings = _settings(GOOGLE_API_KEY="g-key", OPENAI_API_KEY="sk-key")
    assert settings.credential_for("gemini") == "g-key"
    assert settings.credential_for(VendorType.OPENAI) == "sk-key"
    assert settings.credential_for("anthropic") is None


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_credentials_count_as_missing(value):
    settings = _settings(GOOGLE_API_KEY=value)
    assert settings.credential_for("gemini") is None
