from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    log_level: str = "INFO"

    default_result: float = 0.0
    description_precision: int | None = Field(default=None, ge=1, le=17)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def resolved_log_level(self) -> str:
        """
        Returns the configured log level upper-cased, falling back to INFO for unknown names.
        """
        level = self.log_level.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            return "INFO"
        return level


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
