import logging

from seo_toolbox.log import ContextLogger, get_logger
from seo_toolbox.tools import get_tool


def test_get_logger_uses_the_package_namespace():
    logger = get_logger("pipeline")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "seo_toolbox.pipeline"


def test_context_logger_prefixes_messages(caplog):
    """
    WHY: Concurrent requests interleave in the log; each line must say which tool and vendor it belongs to.
    HOW: Log through a logger created with tool and vendor context.
    EXPECTED: The record message starts with "[tool=... vendor=...]".
    """
    log = get_logger("unit", tool="ssl-checker", vendor="openai")
    assert isinstance(log, ContextLogger)
    with caplog.at_level(logging.INFO, logger="seo_toolbox"):
        log.info("Analyzing 'example.com'")
    assert caplog.records[-1].getMessage() == "[tool=ssl-checker vendor=openai] Analyzing 'example.com'"
    assert caplog.records[-1].name == "seo_toolbox.unit"


def test_pipeline_fallback_is_logged_with_request_context(make_pipeline, caplog):
    pipe, _ = make_pipeline(reply="I cannot analyze this.")
    with caplog.at_level(logging.INFO, logger="seo_toolbox"):
        pipe.run(get_tool("backlink-checker"), "example.com", vendor="gemini", credential="key-123")
    messages = [r.getMessage() for r in caplog.records if r.name == "seo_toolbox.pipeline"]
    assert messages[0] == "[tool=backlink-checker vendor=gemini] Analyzing 'example.com'"
    assert messages[-1] == "[tool=backlink-checker vendor=gemini] Returning fallback result"
    assert any(r.levelno == logging.WARNING for r in caplog.records if r.name == "seo_toolbox.pipeline")
