from functools import lru_cache
from typing import List, Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ProductCatalog"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Mongo
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "catalog"
    MONGO_TLS: bool = False                    # Atlas / SRV URIs need True
    MONGO_TIMEOUT_MS: int = 6000
    MONGO_MAX_POOL_SIZE: int = 50
    products_collection: str = "products"
    categories_collection: str = "categories"

    # Listing
    default_page_size: int = 4

    # CORS, comma separated
    ALLOWED_ORIGINS: str = ""

    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cached so every dependency sees the same instance.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,
                _env_file_encoding="utf-8"
    )
