import json
import random

import pytest

from seo_toolbox.errors import ConfigurationError, InputError, VendorError
from seo_toolbox.llm.client import VendorType
from seo_toolbox.tools import get_tool

BACKLINKS = get_tool("backlink-checker")
RANKS = get_tool("rank-tracker")


def _valid_backlink_report():
    ctx = BACKLINKS.build_context("https://example.com")
    return BACKLINKS.fallback(ctx, random.Random(42))


def test_valid_json_in_prose_is_returned_as_generated(make_pipeline):
    """
    WHY: A well-formed answer should reach the caller untouched, even when wrapped in prose.
    HOW: The fake vendor replies with a valid backlink report between two sentences.
    EXPECTED: source is "generated", data equals the vendor's object, exactly one vendor call.
    """
    report = _valid_backlink_report()
    pipe, vendor = make_pipeline(reply=f"Here is the analysis:\n{json.dumps(report)}\nLet me know!")

    result = pipe.run(BACKLINKS, "https://example.com", vendor="gemini", credential="key-123")

    assert result.source == "generated"
    assert result.tool == "backlink-checker"
    assert result.vendor == VendorType.GEMINI
    assert result.data == report
    assert len(vendor.calls) == 1
    prompt, credential = vendor.calls[0]
    assert credential == "key-123"
    assert "https://example.com" in prompt


def test_prose_without_json_falls_back(make_pipeline):
    """
    WHY: Extraction failure must never surface as an error to the caller.
    HOW: The fake vendor replies with prose that only contains a "{domain}" fragment.
    EXPECTED: source is "fallback"; the synthetic report echoes example.com with plausible numbers.
    """
    pipe, vendor = make_pipeline(reply="I checked {domain} and it looks healthy overall.")

    result = pipe.run(BACKLINKS, "https://example.com", vendor="gemini", credential="key-123")

    assert result.source == "fallback"
    assert result.data["domain"] == "example.com"
    assert 10000 <= result.data["total_backlinks"] < 60000
    BACKLINKS.result_model.model_validate(result.data)
    assert len(vendor.calls) == 1


def test_bare_domain_with_refusal_falls_back(make_pipeline):
    """
    WHY: Backlink checks are requested for a bare domain as often as for a URL.
    HOW: Run the backlink tool on "example.com"; the fake vendor refuses with plain text.
    EXPECTED: No input error; a fallback report for example.com with a plausible backlink total.
    """
    pipe, vendor = make_pipeline(reply="I cannot analyze this.")

    result = pipe.run(BACKLINKS, "example.com", vendor="gemini", credential="key-123")

    assert result.source == "fallback"
    assert result.data["domain"] == "example.com"
    assert 10000 <= result.data["total_backlinks"] < 60000
    prompt, _ = vendor.calls[0]
    assert "https://example.com" in prompt


@pytest.mark.parametrize("error", [
    VendorError("gemini", "request failed: 429 quota exceeded"),
    TimeoutError("read timed out"),
    RuntimeError("connection reset"),
])
def test_vendor_failure_falls_back(make_pipeline, error):
    pipe, vendor = make_pipeline(error=error)

    result = pipe.run(BACKLINKS, "https://example.com", vendor="openai", credential="sk-test")

    assert result.source == "fallback"
    assert result.vendor == VendorType.OPENAI
    assert len(vendor.calls) == 1


def test_schema_mismatch_falls_back(make_pipeline):
    pipe, _ = make_pipeline(reply='{"domain": "example.com", "total_backlinks": "lots"}')

    result = pipe.run(BACKLINKS, "https://example.com", vendor="gemini", credential="key-123")

    assert result.source == "fallback"
    BACKLINKS.result_model.model_validate(result.data)


@pytest.mark.parametrize("credential", [None, "", "   "])
def test_missing_credential_fails_before_any_vendor_call(make_pipeline, credential):
    """
    WHY: A missing key is an operator problem; it must be reported, not masked by a fallback.
    HOW: Run with an absent or blank credential.
    EXPECTED: ConfigurationError naming the vendor, and the vendor is never called.
    """
    pipe, vendor = make_pipeline(reply="{}")

    with pytest.raises(ConfigurationError, match="GEMINI API key not configured"):
        pipe.run(BACKLINKS, "https://example.com", vendor="gemini", credential=credential)

    assert vendor.calls == []
    assert pipe.vendor_factory.requested == []


def test_invalid_input_is_rejected_before_credential_check(make_pipeline):
    pipe, vendor = make_pipeline(reply="{}")

    with pytest.raises(InputError):
        pipe.run(BACKLINKS, "not a url", vendor="gemini", credential=None)
    with pytest.raises(InputError):
        pipe.run(RANKS, "example.com", vendor="gemini", credential="key", params={"keywords": []})

    assert vendor.calls == []


def test_unsupported_vendor_is_a_configuration_error(make_pipeline):
    pipe, vendor = make_pipeline(reply="{}")

    with pytest.raises(ConfigurationError):
        pipe.run(BACKLINKS, "https://example.com", vendor="anthropic", credential="key")

    assert vendor.calls == []


def test_timeout_is_passed_to_vendor_factory(make_pipeline):
    pipe, _ = make_pipeline(reply="no json")

    pipe.run(BACKLINKS, "https://example.com", vendor=VendorType.OPENAI, credential="sk", timeout=4.5)

    assert pipe.vendor_factory.requested == [("openai", 4.5)]


def test_fallback_shape_is_stable_across_runs(make_pipeline):
    """
    WHY: Callers parse fallback results with the same code as generated ones.
    HOW: Run the same failing request twice with different seeds.
    EXPECTED: Both results have identical key sets and list lengths; values may differ.
    """
    first_pipe, _ = make_pipeline(error=RuntimeError("down"), seed=1)
    second_pipe, _ = make_pipeline(error=RuntimeError("down"), seed=2)
    params = {"keywords": ["seo tools", "crm software", "email marketing"]}

    first = first_pipe.run(RANKS, "example.com", vendor="gemini", credential="k", params=params).data
    second = second_pipe.run(RANKS, "example.com", vendor="gemini", credential="k", params=params).data

    assert first.keys() == second.keys()
    assert len(first["rankings"]) == len(second["rankings"]) == 3
    assert [r.keys() for r in first["rankings"]] == [r.keys() for r in second["rankings"]]
