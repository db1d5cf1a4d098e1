"""Runtime settings, read once from the environment."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "RPCENVELOPE_"


class Settings(BaseSettings):
    """Process-wide configuration for the dispatcher and resolver."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="ignore")

    log_level: str = "WARNING"
    error_dedupe_seconds: int = Field(default=60, ge=0)
    max_traceback_chars: int = Field(default=10_000, ge=0)
    # Reject envelopes carrying neither `result` nor `error`.
    strict_envelopes: bool = False

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from `environ`, or from the process environment when None."""
        if environ is None:
            return cls()
        values = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and value.strip()
        }
        # Validate the explicit mapping only, without reading os.environ
        return cls.model_validate(values)

    def configure_logging(self) -> None:
        """Apply `log_level` to the package logger."""
        logging.getLogger("rpcenvelope").setLevel(self.log_level)


settings = Settings()
