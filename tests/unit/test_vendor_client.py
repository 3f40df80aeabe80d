from unittest.mock import MagicMock, patch

import pytest

from seo_toolbox.errors import VendorError
from seo_toolbox.llm.client import GeminiVendor, OpenAIVendor, VendorType, create_vendor


@patch("seo_toolbox.llm.client.genai.Client")
def test_gemini_vendor_returns_text(mock_client_cls):
    """
    WHY: The credential travels with each request rather than living in process state.
    HOW: Mock genai.Client and call generate() with a per-request key and a 2.5s timeout.
    EXPECTED: The client is built with that key and a 2500ms timeout; the response text is returned.
    """
    mock_client = mock_client_cls.return_value
    mock_client.models.generate_content.return_value = MagicMock(text='{"ok": true}')

    text = GeminiVendor(model="gemini-2.5-flash", timeout=2.5).generate("prompt", "g-key")

    assert text == '{"ok": true}'
    kwargs = mock_client_cls.call_args.kwargs
    assert kwargs["api_key"] == "g-key"
    assert kwargs["http_options"].timeout == 2500
    mock_client.models.generate_content.assert_called_once_with(model="gemini-2.5-flash", contents="prompt")


@patch("seo_toolbox.llm.client.genai.Client")
def test_gemini_vendor_wraps_sdk_errors(mock_client_cls):
    mock_client_cls.return_value.models.generate_content.side_effect = RuntimeError("403 permission denied")

    with pytest.raises(VendorError) as excinfo:
        GeminiVendor(model="m", timeout=1).generate("prompt", "g-key")

    assert excinfo.value.vendor == "gemini"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@patch("seo_toolbox.llm.client.genai.Client")
def test_gemini_vendor_rejects_empty_text(mock_client_cls):
    mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text="")

    with pytest.raises(VendorError, match="no response text"):
        GeminiVendor(model="m", timeout=1).generate("prompt", "g-key")


@patch("seo_toolbox.llm.client.OpenAI")
def test_openai_vendor_makes_single_attempt(mock_openai_cls):
    """
    WHY: One vendor call per request; SDK-level retries would multiply latency and cost.
    HOW: Mock the OpenAI class and call generate().
    EXPECTED: The client is built with max_retries=0 and the configured timeout; content is returned.
    """
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = "hello"
    mock_openai_cls.return_value.chat.completions.create.return_value = completion

    vendor = OpenAIVendor(model="gpt-4o-mini", timeout=7, max_tokens=123, temperature=0.2)
    assert vendor.generate("prompt", "sk-test") == "hello"

    mock_openai_cls.assert_called_once_with(api_key="sk-test", timeout=7, max_retries=0)
    kwargs = mock_openai_cls.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_tokens"] == 123
    assert kwargs["temperature"] == 0.2
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@patch("seo_toolbox.llm.client.OpenAI")
def test_openai_vendor_without_choices_raises(mock_openai_cls):
    mock_openai_cls.return_value.chat.completions.create.return_value = MagicMock(choices=[])

    with pytest.raises(VendorError):
        OpenAIVendor(model="m", timeout=1).generate("prompt", "sk-test")


@pytest.mark.parametrize("cls", [GeminiVendor, OpenAIVendor])
def test_empty_credential_is_rejected_without_network(cls):
    with patch("seo_toolbox.llm.client.genai.Client") as gemini, patch("seo_toolbox.llm.client.OpenAI") as openai:
        with pytest.raises(VendorError, match="API key is required"):
            cls(model="m", timeout=1).generate("prompt", "")
        gemini.assert_not_called()
        openai.assert_not_called()


def test_create_vendor_selects_backend():
    gemini = create_vendor("gemini", timeout=3)
    assert isinstance(gemini, GeminiVendor)
    assert gemini.timeout == 3

    openai = create_vendor(VendorType.OPENAI)
    assert isinstance(openai, OpenAIVendor)

    with pytest.raises(VendorError, match="unsupported vendor type"):
        create_vendor("anthropic")
