import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This class defines all configuration values used by the application,
    including the storage backend, database connection details, security
    parameters, and the text-generation service credentials.
    Values are loaded from environment variables with fallback defaults.

    Attributes:
        storage_backend (str): Which storage implementation to construct at startup.
            Either "memory" (dict-backed, lost on restart) or "database" (SQLAlchemy).
        database_url_override (str | None): A full SQLAlchemy URL. When set, it takes
            precedence over the individual DB_* components.
        database_url (str): The effective database connection URL.
        secret_key (str): Secret key for signing JWT tokens.
            Must be kept secure and changed in production.
        algorithm (str): Algorithm used for JWT token encoding.
        access_token_expire_minutes (int): Duration in minutes for which access tokens remain valid.
        openai_api_key (str | None): API key for the text-generation service.
        llm_endpoint (str | None): Optional custom OpenAI-compatible endpoint.
        llm_model_name (str): The model used for generation and analysis.

    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    # Storage settings
    storage_backend: Literal["memory", "database"] = Field(
        default="memory",
        validation_alias="STORAGE_BACKEND",
    )

    # Database settings
    database_url_override: str | None = Field(
        default=None,
        validation_alias="DATABASE_URL",
    )
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="resume_builder", validation_alias="DB_NAME")
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: str = Field(default="", validation_alias="DB_PASSWORD")

    @computed_field
    @property
    def database_url(self) -> str:
        """
        Effective database URL.

        Args:
            None: This property does not take any arguments.

        Returns:
            str: The database connection URL.

        Notes:
            1. If DATABASE_URL is set, return it unchanged.
            2. Otherwise build a PostgreSQL URL from the DB_* components.

        """
        if self.database_url_override:
            return self.database_url_override
        return str(
            PostgresDsn.build(
                scheme="postgresql",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                path=self.db_name,
            ),
        )

    # Security settings
    secret_key: str = Field(
        default="your-secret-key-change-in-production",
        validation_alias="SECRET_KEY",
    )
    algorithm: str = Field(default="HS256", validation_alias="ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=120,
        validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Text generation
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    llm_endpoint: str | None = Field(default=None, validation_alias="LLM_ENDPOINT")
    llm_model_name: str = Field(default="gpt-4o", validation_alias="LLM_MODEL_NAME")


@lru_cache
def get_settings() -> Settings:
    """
    Get the global settings instance.

    Args:
        None: This function does not take any arguments.

    Returns:
        Settings: The cached settings instance.

    Raises:
        ValidationError: If environment variables hold invalid values.

    Notes:
        1. Reads configuration from environment variables and the .env file.
        2. Returns a cached instance to avoid repeated parsing of the .env file.
        3. This function performs disk access to read the .env file on first call.

    """
    return Settings()
