from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from interfacery.domain.models import InferenceConfig
from interfacery.errors import ConfigurationError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


class Settings(BaseSettings):
    """Tool settings. Priority: CLI options > env vars (INTERFACERY_*) > .env > defaults."""

    model_config = SettingsConfigDict(
        env_prefix="INTERFACERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dest_dir: Path = Path("./pkg/handlers")
    route_prefix: str = ""
    default_http_method: str = "GET"
    context_types: list[str] = Field(default_factory=lambda: ["context.Context"])
    error_types: list[str] = Field(default_factory=lambda: ["error"])
    reserved_names: list[str] = Field(default_factory=lambda: ["r", "w", "ctx", "h", "err", "req"])
    ignore_dirs: list[str] = Field(
        default_factory=lambda: ["vendor", ".git", "testdata", "node_modules", ".idea"]
    )
    output_suffix: str = "_handlers.go"
    log_level: str = "INFO"

    @field_validator("default_http_method", mode="before")
    @classmethod
    def validate_default_http_method(cls, v: str) -> str:
        method = str(v).strip().upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"default_http_method must be one of {', '.join(HTTP_METHODS)}")
        return method

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return str(v).strip().upper() or "INFO"

    def inference_config(self, route_prefix: str | None = None) -> InferenceConfig:
        return InferenceConfig(
            route_prefix=self.route_prefix if route_prefix is None else route_prefix,
            default_http_method=self.default_http_method,
            context_types=frozenset(self.context_types),
            error_types=frozenset(self.error_types),
            reserved_names=frozenset(self.reserved_names),
        )


def load_settings(**overrides) -> Settings:
    """Settings(), with validation failures raised as ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"invalid settings: {problems}") from e
