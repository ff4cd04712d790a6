import logging
import os
from enum import Enum
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Environment file: ENV_FILE if set, otherwise development.env in the
# working directory. A missing file is fine; real env vars still apply.
ENV_FILE = os.environ.get("ENV_FILE", "development.env")


class SumStrategy(str, Enum):
    """How the transitive sum is computed."""
    QUERY = "query"  # Single recursive CTE in the database
    WALK = "walk"    # Breadth-first walk, one child query per level


class Settings(BaseSettings):
    """
    Runtime configuration.

    Environment variables win over the env file. A variable set to the empty
    string counts as set: LOG_FILE= turns the file log off.
    """
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    database_url: str = "sqlite:///./transactions.db"
    db_pool_size: int = Field(10, ge=1)
    db_max_overflow: int = Field(10, ge=0)
    db_pool_timeout: float = Field(30, gt=0)
    db_echo: bool = False
    transitive_sum_strategy: SumStrategy = SumStrategy.QUERY
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("log_file")
    @classmethod
    def empty_log_file_is_none(cls, value: str | None) -> str | None:
        return value or None


def load_settings(env_file: str | None = None) -> Settings:
    """Build settings from the environment and env_file (default ENV_FILE)."""
    return Settings(_env_file=env_file or ENV_FILE)


settings = load_settings()
