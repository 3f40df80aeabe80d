import pytest
import os
import random
from unittest.mock import patch
from dotenv import load_dotenv

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def gemini_api_key(_load_env) -> str | None:
    key = os.getenv("GOOGLE_API_KEY")
    if not key or key.strip() == "":
        return None
    return key


class FakeVendor:
    """Stands in for a generation backend. Records prompts; replies with text or raises."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, prompt: str, credential: str) -> str:
        self.calls.append((prompt, credential))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeVendorFactory:
    """Callable with the create_vendor signature that always hands out one FakeVendor."""

    def __init__(self, vendor: FakeVendor):
        self.vendor = vendor
        self.requested = []

    def __call__(self, name, timeout=None):
        self.requested.append((name, timeout))
        return self.vendor


@pytest.fixture
def fake_vendor():
    return FakeVendor()

@pytest.fixture
def make_pipeline():
    """
    Builds a Pipeline wired to a FakeVendor with a seeded RNG.
    Usage: pipe, vendor = make_pipeline(reply="...") or make_pipeline(error=RuntimeError())
    """
    from seo_toolbox.pipeline.run import Pipeline

    def _make(reply: str = "", error: Exception | None = None, seed: int = 7):
        vendor = FakeVendor(reply=reply, error=error)
        factory = FakeVendorFactory(vendor)
        return Pipeline(vendor_factory=factory, rng=random.Random(seed)), vendor

    return _make

@pytest.fixture
def api_settings():
    """
    Gives the cached Settings known credentials for API tests and restores them afterwards.
    """
    from seo_toolbox.config import get_settings
    settings = get_settings()

    original = (settings.GOOGLE_API_KEY, settings.OPENAI_API_KEY, settings.DEFAULT_VENDOR)
    settings.GOOGLE_API_KEY = "test-gemini-key"
    settings.OPENAI_API_KEY = None
    settings.DEFAULT_VENDOR = "gemini"

    yield settings

    settings.GOOGLE_API_KEY, settings.OPENAI_API_KEY, settings.DEFAULT_VENDOR = original

@pytest.fixture
def mock_vendor_factory(fake_vendor):
    """
    Replaces the module-level pipeline's vendor factory so API tests never reach the network.
    """
    from seo_toolbox.pipeline.run import pipeline
    factory = FakeVendorFactory(fake_vendor)
    with patch.object(pipeline, "vendor_factory", factory):
        yield factory
