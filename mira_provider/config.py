"""Provider settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mira_provider.integrations.mira import (
    DEFAULT_ASSIGNED_SUBNET_MASK,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    AssignmentMode,
    MaskSource,
)


class Settings(BaseSettings):
    """Global settings container."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Left empty by default so a missing value fails when the client is built.
    mira_username: str = ""
    mira_password: str = ""
    terraform_useragent_mira: str = ""

    mira_base_url: str = DEFAULT_BASE_URL
    mira_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    mira_assignment_mode: AssignmentMode = AssignmentMode.BEST_EFFORT
    mira_mask_source: MaskSource = MaskSource.FIXED
    mira_assigned_subnet_mask: str = DEFAULT_ASSIGNED_SUBNET_MASK

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "json"
    log_file_path: str = ""

    @field_validator("mira_username", "mira_password", "terraform_useragent_mira", mode="before")
    @classmethod
    def strip_credentials(cls, value: str) -> str:
        return str(value).strip()

    @field_validator("mira_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        raw = str(value).strip()
        if raw and not raw.endswith("/"):
            return f"{raw}/"
        return raw


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
