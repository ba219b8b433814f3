import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ENDPOINT = "https://api.ocr.space/parse/image"
DEMO_API_KEY = "helloworld"


def is_valid_endpoint(url: str) -> bool:
    """Absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class Settings(BaseSettings):
    # OCRSPACE_APIKEY is the name used by older setups
    ocrspace_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ocrspace_api_key", "ocrspace_apikey"),
    )
    # Validated by OcrSpaceClient, not here
    ocrspace_endpoint: str = Field(default=os.getenv("OCRSPACE_ENDPOINT", DEFAULT_ENDPOINT))

    api_timeout: int = Field(default=int(os.getenv("API_TIMEOUT", "180")))
    async_max_workers: int = Field(default=int(os.getenv("ASYNC_MAX_WORKERS", "4")))

    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = Field(default=os.getenv("LOG_FORMAT", "text"))
    log_path: Path = Field(default=Path(os.getenv("LOG_PATH", "./data/logs")))
    log_to_file: bool = Field(default=os.getenv("LOG_TO_FILE", "false").lower() == "true")
    log_max_size_mb: int = Field(default=int(os.getenv("LOG_MAX_SIZE_MB", "100")))
    log_backup_count: int = Field(default=int(os.getenv("LOG_BACKUP_COUNT", "5")))

    @field_validator("api_timeout", "async_max_workers")
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be greater than 0")
        return v

    @field_validator("log_format")
    def validate_log_format(cls, v):
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from environment


settings = Settings()
