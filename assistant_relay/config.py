import sys
from functools import lru_cache
from pathlib import Path

from loguru import logger as log
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    __version__: str = "0.1.0"

    # Network settings
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    # Remote assistant
    openai_api_key: str = ""
    openai_assistant_id: str = ""
    openai_base_url: str | None = None
    http_timeout: float = 30.0

    # Run polling
    poll_interval_s: float = 1.0
    poll_max_attempts: int = 30

    # Shown to the end user whenever a relay fails
    support_email: str = "support@inspiresolutions.asia"

    # Logging
    log_lvl: str = "INFO"
    log_path: Path = Path("logs/app.log")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_logger(log_path: Path, level: str):
    log.remove()
    log.add(sys.stderr, format="{time} | {level} | {message}", level=level)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        log.warning(f"Cannot create log directory {log_path.parent}, file logging disabled")
        return log
    log.add(
        log_path,
        format="{time} | {level} | {message}",
        level="DEBUG",
        rotation="1 days",
        retention="30 days",
        catch=True,
    )
    return log


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
logger = get_logger(settings.log_path, settings.log_lvl)
