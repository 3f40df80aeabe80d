import pytest

from seo_toolbox.pipeline.run import Pipeline
from seo_toolbox.tools import get_tool


def test_keyword_research_against_gemini(allow_integration, gemini_api_key):
    """
    WHY: Verifies the prompt, the real SDK call and extraction work together against the live API.
    HOW: Runs keyword-research for a common keyword with the configured Gemini key.
    EXPECTED: A result that validates against the tool's model. "generated" is expected but a
              fallback is tolerated, since quota or latency are outside the test's control.
    """
    if not allow_integration:
        pytest.skip("Set RUN_INTEGRATION_TESTS=1 to run live vendor tests")
    if not gemini_api_key:
        pytest.skip("GOOGLE_API_KEY is not configured")

    tool = get_tool("keyword-research")
    result = Pipeline().run(tool, "seo tools", vendor="gemini", credential=gemini_api_key, timeout=30)

    tool.result_model.model_validate(result.data)
    assert result.source in ("generated", "fallback")
    print(f"\nSource: {result.source}; primary keyword: {result.data['primary_keyword']['keyword']}")
