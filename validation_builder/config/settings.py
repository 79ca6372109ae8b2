# Configuration management

from pydantic_settings import BaseSettings  # type: ignore
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    # Application
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    # Security
    allowed_origins: List[str] = [
        "http://localhost:3000", "http://localhost:5173"]

    # Builder
    default_type_name: str = "MyDto"
    output_indent: int = 2

    # Pattern registry (fetched once at startup)
    pattern_registry_enabled: bool = True
    pattern_registry_url: str = "http://localhost:5000"
    pattern_registry_path: str = "/api/patterns"
    pattern_registry_timeout: float = 5.0  # seconds

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
