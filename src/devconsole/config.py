"""Configuration management for devconsole."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging

KONAMI_CODE: tuple[str, ...] = (
    "ArrowUp",
    "ArrowUp",
    "ArrowDown",
    "ArrowDown",
    "ArrowLeft",
    "ArrowRight",
    "ArrowLeft",
    "ArrowRight",
    "KeyB",
    "KeyA",
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DEVCONSOLE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Activation
    activation_sequence: list[str] = Field(
        default_factory=lambda: list(KONAMI_CODE),
        description="Key codes that open the console while it is closed",
    )
    strict_activation: bool = Field(default=False, description="Reset activation progress on the first wrong key")

    # Recall and matching
    recall_capacity: int = Field(default=50, ge=1, description="Maximum number of recallable input lines")
    suggest_threshold: float = Field(default=0.6, ge=0.0, le=1.0, description="Max distance for did-you-mean hints")
    search_threshold: float = Field(default=0.4, ge=0.0, le=1.0, description="Max distance for the search command")
    search_limit: int = Field(default=10, ge=1, description="Maximum number of search results")

    # Pending questions
    answer_alphabet: str = Field(default="ABCD", description="Letters accepted as answers to a pending question")

    # Persistence
    store_path: Optional[Path] = Field(None, description="JSON file backing the key/value store")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")

    @field_validator("activation_sequence")
    @classmethod
    def _non_empty_sequence(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("activation_sequence must contain at least one key code")
        return value

    @field_validator("answer_alphabet")
    @classmethod
    def _normalize_alphabet(cls, value: str) -> str:
        letters = value.strip().upper()
        if not letters:
            raise ValueError("answer_alphabet must not be empty")
        if len(set(letters)) != len(letters):
            raise ValueError("answer_alphabet must not repeat letters")
        return letters

    def resolve_store_path(self) -> Path:
        if self.store_path is not None:
            return self.store_path.expanduser()
        return Path.home() / ".devconsole" / "store.json"


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Explicit field values that win over the environment

    Returns:
        Settings instance
    """
    # pydantic-settings loads DEVCONSOLE_* variables and the .env file
    settings = Settings(**overrides)  # type: ignore[arg-type]

    configure_logging(level=settings.log_level)

    return settings
