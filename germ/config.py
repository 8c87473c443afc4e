"""germ — Configuration.

Configuration is loaded from (in order of increasing priority):
    1. Built-in defaults (this file)
    2. User config:   ~/.germ/config.yaml
    3. An explicit config file passed with ``--config``
    4. Environment variables prefixed with GERM_ (nested with ``__``,
       e.g. ``GERM_TIMINGS__SPEED=2``)
    5. Command line options

Settings are read once per run by the CLI and turned into explicit
constructor arguments; nothing below the CLI reads the environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from germ.asciicast.models import DEFAULT_HEIGHT, DEFAULT_WIDTH, Theme
from germ.exceptions import IOFailureError, MalformedDocumentError
from germ.formats.base import DocumentFormat
from germ.sequence.constants import DEFAULT_PROMPT
from germ.sequence.models import TimingConfig, invalid_timing

USER_CONFIG_PATH = Path("~/.germ/config.yaml")


# ---------------------------------------------------------------------------
# Sub-configuration blocks
# ---------------------------------------------------------------------------


class HeaderConfig(BaseModel):
    """Defaults for the asciicast header."""

    width: int = Field(default=DEFAULT_WIDTH, ge=1, description="Terminal columns.")
    height: int = Field(default=DEFAULT_HEIGHT, ge=1, description="Terminal rows.")
    title: str | None = None
    idle_time_limit: Annotated[float, Field(gt=0.0)] | None = Field(
        default=None,
        description="Players compress pauses longer than this many seconds.",
    )
    theme: Theme | None = None


class CaptureConfig(BaseModel):
    timeout: Annotated[float, Field(gt=0.0)] | None = Field(
        default=None,
        description="Seconds before a captured command is killed. None = no limit.",
    )


class LoggingConfig(BaseModel):
    level: Literal["debug", "info", "warning", "error", "critical"] = "warning"
    format: Literal["json", "console"] = "console"
    file: Path | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GERM_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    prompt: str = DEFAULT_PROMPT
    output_format: DocumentFormat = DocumentFormat.ASCIICAST
    stdin: bool = Field(default=False, description="Emit keypress events alongside echoes.")
    timings: TimingConfig = Field(default_factory=TimingConfig)
    header: HeaderConfig = Field(default_factory=HeaderConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats values read from config files (passed as init kwargs).
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Settings":
        """Load settings from the user config, *config_file* and the environment.

        The user config is optional; an explicit *config_file* must exist.
        """
        if config_file is not None and not config_file.exists():
            raise IOFailureError(str(config_file), FileNotFoundError("no such file"))

        data: dict[str, object] = {}
        candidates = [USER_CONFIG_PATH.expanduser()]
        if config_file is not None:
            candidates.append(config_file)

        for path in candidates:
            if path.exists():
                import yaml  # lazy import, only needed when a file exists

                try:
                    with path.open(encoding="utf-8") as f:
                        loaded = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise MalformedDocumentError(str(exc), "config") from exc
                except OSError as exc:
                    raise IOFailureError(str(path), exc) from exc
                if not isinstance(loaded, dict):
                    raise MalformedDocumentError(
                        f"{path} must contain a mapping at the top level", "config"
                    )
                data.update(loaded)

        try:
            return cls(**data)
        except ValidationError as exc:
            timing_error = invalid_timing(exc)
            if timing_error is not None:
                raise timing_error from exc
            raise


# Module-level singleton, replaced by ``Settings.load()`` at CLI startup.
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def override_settings(settings: Settings | None) -> None:
    """Replace the module-level singleton; ``None`` forces a reload. Used in tests."""
    global _settings
    _settings = settings
