"""Generation backends behind a single selector.

Each vendor exposes generate(prompt, credential) -> str and makes exactly one
attempt bounded by a timeout. Every backend failure is re-raised as VendorError
so the pipeline can decide whether to fall back.
"""

from enum import Enum
from typing import Optional, Protocol

from google import genai
from google.genai import types as genai_types
from openai import OpenAI

from ..config import get_settings
from ..errors import VendorError
from ..log import get_logger

logger = get_logger("llm.client")


class VendorType(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class Vendor(Protocol):
    name: str

    def generate(self, prompt: str, credential: str) -> str:
        ...


class GeminiVendor:
    name = VendorType.GEMINI.value

    def __init__(self, model: str, timeout: float):
        self.model = model
        self.timeout = timeout

    def generate(self, prompt: str, credential: str) -> str:
        if not credential:
            raise VendorError(self.name, "API key is required")
        try:
            client = genai.Client(
                api_key=credential,
                # HttpOptions.timeout is expressed in milliseconds
                http_options=genai_types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
            response = client.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            raise VendorError(self.name, f"request failed: {e}") from e

        text = response.text
        if not text:
            raise VendorError(self.name, "no response text received")
        return text


class OpenAIVendor:
    name = VendorType.OPENAI.value

    def __init__(self, model: str, timeout: float, max_tokens: int = 4000, temperature: float = 0.7):
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

    def generate(self, prompt: str, credential: str) -> str:
        if not credential:
            raise VendorError(self.name, "API key is required")
        try:
            client = OpenAI(api_key=credential, timeout=self.timeout, max_retries=0)
            completion = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "user", "content": prompt}
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            raise VendorError(self.name, f"request failed: {e}") from e

        text = completion.choices[0].message.content if completion.choices else None
        if not text:
            raise VendorError(self.name, "no response text received")
        return text


def create_vendor(vendor: str, timeout: Optional[float] = None) -> Vendor:
    """Build the backend for a selector value ("gemini" or "openai")."""
    settings = get_settings()
    try:
        kind = VendorType(vendor)
    except ValueError:
        raise VendorError(str(vendor), "unsupported vendor type") from None

    timeout = timeout if timeout is not None else settings.VENDOR_TIMEOUT_SECONDS
    if kind is VendorType.GEMINI:
        return GeminiVendor(model=settings.GEMINI_MODEL, timeout=timeout)
    return OpenAIVendor(
        model=settings.OPENAI_MODEL,
        timeout=timeout,
        max_tokens=settings.OPENAI_MAX_TOKENS,
        temperature=settings.OPENAI_TEMPERATURE,
    )
