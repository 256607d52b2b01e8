from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants as cs
from . import exceptions as ex

load_dotenv()


class AppConfig(BaseSettings):
    """
    (H) All settings are loaded from environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    TRACE_FILE: str | None = None
    PROGRAM_MODEL_FILE: str | None = None
    CLASS_PATH: str | None = None

    TRACE_ENCODING: str = cs.ENCODING_UTF8
    LOG_LEVEL: str = cs.DEFAULT_LOG_LEVEL

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def resolve_trace_file(self, trace_file: str | None) -> Path:
        resolved = trace_file or self.TRACE_FILE
        if not resolved:
            raise ex.TraceFileNotConfiguredError()
        return Path(resolved)

    def resolve_program_model_file(self, program_file: str | None) -> Path:
        resolved = program_file or self.PROGRAM_MODEL_FILE
        if not resolved:
            raise ex.ProgramModelError(ex.PROGRAM_MODEL_NOT_CONFIGURED)
        return Path(resolved)

    def resolve_class_path(self, class_path: str | None) -> Path | None:
        resolved = class_path or self.CLASS_PATH
        return Path(resolved) if resolved else None


settings = AppConfig()
