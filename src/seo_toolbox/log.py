"""Logging configuration with Rich formatting.

setup_logging() routes the app, uvicorn and SDK loggers through one RichHandler.
get_logger() returns a logger under the seo_toolbox namespace; pass request
context (tool, vendor...) to get an adapter that prefixes every message with it.
"""

import logging
from typing import Optional, Union

from rich.logging import RichHandler
from .config import get_settings

ROOT_LOGGER = "seo_toolbox"

def setup_logging(level: Optional[str] = None):
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)]
    )

    # uvicorn installs its own handlers; send its records through Rich instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    # Vendor SDKs log every HTTP request at INFO
    for name in ("httpx", "openai", "google"):
        logging.getLogger(name).setLevel(logging.WARNING)


class ContextLogger(logging.LoggerAdapter):
    """Prefixes messages with key=value request context, e.g. "[tool=rank-tracker vendor=gemini]"."""

    def process(self, msg, kwargs):
        context = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"[{context}] {msg}", kwargs


def get_logger(name: str, **context) -> Union[logging.Logger, ContextLogger]:
    logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")
    if context:
        return ContextLogger(logger, context)
    return logger
