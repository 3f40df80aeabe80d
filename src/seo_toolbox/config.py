from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    GOOGLE_API_KEY: Optional[str] = Field(None, description="Gemini API key")
    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API key")
    GEMINI_MODEL: str = "gemini-2.5-flash"
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_MAX_TOKENS: int = 4000
    OPENAI_TEMPERATURE: float = 0.7
    DEFAULT_VENDOR: str = Field("gemini", description="Vendor used when a request does not pick one")
    VENDOR_TIMEOUT_SECONDS: float = Field(10.0, description="Upper bound for a single vendor call")
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def credential_for(self, vendor: str) -> Optional[str]:
        """Return the API key configured for a vendor, or None when it is missing or blank."""
        key = {
            "gemini": self.GOOGLE_API_KEY,
            "openai": self.OPENAI_API_KEY,
        }.get(getattr(vendor, "value", vendor))
        if key is None or not key.strip():
            return None
        return key

@lru_cache()
def get_settings() -> Settings:
    return Settings()
