from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, PostgresDsn, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=True)


class PgDbSettings(CustomSettings):
    POSTGRES_ENGINE: str = Field(default="postgresql+asyncpg")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: SecretStr = Field(default="postgres")
    POSTGRES_DB: str = Field(default="assistant")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: PostgresDsn | str = Field(default="")

    @model_validator(mode="before")
    def validate_postgres_dsn(cls, data: dict):
        if isinstance(data, dict) and not data.get("DATABASE_URL"):
            _built_uri = PostgresDsn.build(
                scheme=data.get("POSTGRES_ENGINE", "postgresql+asyncpg"),
                username=data.get("POSTGRES_USER", "postgres"),
                password=data.get("POSTGRES_PASSWORD", "postgres"),
                host=data.get("POSTGRES_HOST", "localhost"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=data.get("POSTGRES_DB", "assistant"),
            ).unicode_string()
            data["DATABASE_URL"] = _built_uri
        return data


class AuthSettings(CustomSettings):
    """Session token verification.

    Set via env vars:
    - JWT_SECRET
    - JWT_ALGORITHM
    """

    JWT_SECRET: SecretStr = Field(default="change-me")
    JWT_ALGORITHM: str = Field(default="HS256")


class EncryptionSettings(CustomSettings):
    """Key used to decrypt stored LLM provider secrets.

    ENCRYPTION_KEY must be 64 hex characters (openssl rand -hex 32).
    """

    ENCRYPTION_KEY: SecretStr = Field(default="")


class AssistantSettings(CustomSettings):
    """Completion parameters for assistant replies.

    Set via env vars (optional):
    - ASSISTANT_DEFAULT_MODEL
    - ASSISTANT_TEMPERATURE
    - ASSISTANT_MAX_TOKENS
    - ASSISTANT_HISTORY_LIMIT
    - ASSISTANT_MAX_RETRIES
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="ASSISTANT_",
    )

    DEFAULT_MODEL: str = Field(default="gpt-3.5-turbo")
    TEMPERATURE: float = Field(default=0.7)
    MAX_TOKENS: int = Field(default=1000)
    HISTORY_LIMIT: int = Field(default=20)
    MAX_RETRIES: int = Field(default=1)


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: PgDbSettings = Field(default_factory=PgDbSettings)
    AUTH: AuthSettings = Field(default_factory=AuthSettings)
    ENCRYPTION: EncryptionSettings = Field(default_factory=EncryptionSettings)
    ASSISTANT: AssistantSettings = Field(default_factory=AssistantSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
