import logging

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """
    Configuration settings for the InPokeDex relay.

    Settings are loaded from a .env file and environment variables.
    """

    pokeapi_base_url: str = Field(default="https://pokeapi.co/api/v2", validation_alias="POKEAPI_BASE_URL")
    # Locale tag matched against PokeAPI's names[].language.name
    language: str = Field(default="ko", validation_alias="POKEDEX_LANGUAGE")
    # PokeAPI lists 18 official types first
    type_list_limit: int = Field(default=18, validation_alias="TYPE_LIST_LIMIT")
    upstream_timeout: float = Field(default=5.0, validation_alias="UPSTREAM_TIMEOUT")
    redis_url: str | None = Field(default=None, validation_alias="REDIS_URL")
    cache_ttl: int = Field(default=3600, validation_alias="UPSTREAM_CACHE_TTL")
    port: int = Field(default=4000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    default_limit: int = Field(default=20, validation_alias="PAGE_LIMIT_DEFAULT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("type_list_limit", "upstream_timeout", "cache_ttl", "port", "default_limit", mode="before")
    @classmethod
    def _malformed_number_uses_default(cls, value, info: ValidationInfo):
        field = cls.model_fields[info.field_name]
        try:
            field.annotation(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed {info.field_name}={value!r}, using {field.default}")
            return field.default
        return value

    @field_validator("redis_url", mode="before")
    @classmethod
    def _empty_redis_url_disables_cache(cls, value):
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return str(value).upper()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
