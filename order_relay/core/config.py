from functools import lru_cache
from typing import Annotated, Any, List, Optional
import json
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    API_PREFIX: str = ""
    PROJECT_NAME: str = "Order Relay"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Commerce backend
    COMMERCE_PLATFORM: str = "woocommerce"
    WOO_URL: str = ""
    WOO_CK: str = ""
    WOO_CS: str = ""
    WOO_API_VERSION: str = "wc/v3"
    WOO_QUERY_STRING_AUTH: bool = True
    DEFAULT_TIMEOUT: int = 10  # seconds

    # Page sizes used when listing upstream records
    ORDERS_PAGE_SIZE: int = 50
    PRODUCTS_PAGE_SIZE: int = 100
    CUSTOMER_ORDERS_PAGE_SIZE: int = 100
    CUSTOMER_ORDER_STATUS: str = "any"

    # Push notifications
    PUSH_PROVIDER: str = "expo"
    EXPO_PUSH_URL: str = "https://exp.host/--/api/v2/push/send"
    EXPO_ACCESS_TOKEN: Optional[str] = None
    PUSH_BATCH_SIZE: int = 100
    PUSH_SOUND: str = "default"
    CURRENCY_SYMBOL: str = "₹"

    # Device registry storage
    DEVICE_STORE_BACKEND: str = "file"
    TOKENS_FILE: str = "./tokens.json"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    DEVICE_STORE_REDIS_KEY: str = "order-relay:device-tokens"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @field_validator("PUSH_BATCH_SIZE", "ORDERS_PAGE_SIZE", "PRODUCTS_PAGE_SIZE", "CUSTOMER_ORDERS_PAGE_SIZE")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
