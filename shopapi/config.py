"""Application settings, read from the environment (prefix SHOP_) or a .env file."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHOP_", env_file=".env", extra="ignore")

    data_dir: Path = Path("data")
    products_file: str = "products.json"
    carts_file: str = "carts.json"
    io_timeout: float = 5.0

    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = ["*"]

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def carts_path(self) -> Path:
        return self.data_dir / self.carts_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
