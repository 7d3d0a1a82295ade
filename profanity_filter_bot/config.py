from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PerspectiveSettings(BaseModel):
    api_key: str
    base_url: str = "https://commentanalyzer.googleapis.com/v1alpha1"
    languages: list[str] = Field(default_factory=lambda: ["en"], min_length=1)
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout; httpx defaults apply when unset.",
    )


class GeminiSettings(BaseModel):
    api_key: str
    model: str = "gemini-2.0-flash-001"
    languages: list[str] = Field(default_factory=lambda: ["English", "Tagalog"], min_length=1)


class ModerationSettings(BaseModel):
    toxicity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)


class HealthSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")
    use_json: bool = Field(default=False, description="Use JSON format instead of colored output")


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROFANITY_BOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    discord_token: str = Field(..., description="Discord bot token.")
    perspective: PerspectiveSettings
    gemini: GeminiSettings
    moderation: ModerationSettings = ModerationSettings()
    health: HealthSettings = HealthSettings()
    logging: LoggingSettings = LoggingSettings()
