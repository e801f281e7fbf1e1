"""LanStream configuration, loaded from env, .env and config/default.toml."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class Settings(BaseSettings):
    """Application settings: immutable once loaded."""

    app_name: str = "LanStream"
    debug: bool = False
    log_level: str = "INFO"

    # Device identity
    device_name: str = "LanStream"

    # Network
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""  # e.g. "/api"
    cors_origins: list[str] = ["*"]

    # Media
    folder: str = "media"
    stream_chunk_size: int = 64 * 1024  # 64 KB
    scan_skip_unreadable: bool = False  # best-effort scan instead of fail-fast

    uvicorn_workers: int = 1

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="LANSTREAM_",
        toml_file="config/default.toml",
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # env and .env override the TOML file
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["*"]

    @field_validator("folder")
    @classmethod
    def _absolute_folder(cls, value: str) -> str:
        """Media folder is resolved against the working directory."""
        return str(Path(value).expanduser().resolve())

    @field_validator("port")
    @classmethod
    def _valid_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator("stream_chunk_size")
    @classmethod
    def _positive_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("stream_chunk_size must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
