from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TXGRAPH_")

    api_base_url: str = "http://localhost:8080/api"
    request_timeout: float = 10.0
    log_json: bool = False
    log_level: str = "INFO"
    view_config_path: Path = Path("config/views.yaml")


@lru_cache
def get_settings() -> Settings:
    return Settings()
