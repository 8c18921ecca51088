# app/config/settings.py

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import ConfigDict, ValidationError
from exceptions.domain_exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # MongoDB Configuration
    MONGO_URI: str  # Required, no default
    MONGO_DB: str = "chat"
    MONGO_COLLECTION: str = "messages"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # CORS - the single frontend origin allowed to call the API and open sockets
    CLIENT_URI: str  # Required, no default

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Application Configuration
    APP_NAME: str = "Chat Relay"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Load settings from the environment (and .env file).

    Raises:
        ConfigurationError: if a required variable (MONGO_URI, CLIENT_URI) is missing
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in error["loc"])
            for error in e.errors()
        ]
        raise ConfigurationError(
            f"Invalid or missing configuration: {', '.join(missing)}",
            missing=missing
        ) from e
