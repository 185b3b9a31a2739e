from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://localhost:27017/notekeeper"  # Database name is taken from the URL path
    store_backend: Literal["mongo", "memory"] = "mongo"  # "memory" keeps notes in process, for local runs
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    debug: bool = False
    cors_origins: list[str] = []
    # Fallbacks for list requests that omit page or limit
    pagination_page: int = 0
    pagination_limit: int = 10

    model_config = {
        "env_file": [".env"],
        "env_prefix": "NOTEKEEPER_",
        "extra": "ignore",
    }
