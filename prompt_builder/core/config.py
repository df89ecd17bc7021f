"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Template acquisition
    template_source_type: str = Field(
        default="auto",
        description="Template source strategy: 'auto', 'http' or 'local'.",
    )
    template_location: str | None = Field(
        default=None,
        description="Default template URL or path used when a host gives none.",
    )
    template_dir: Path = Field(
        default=Path("./templates"),
        description="Base directory for relative local template paths.",
    )
    allow_outside_template_dir: bool = Field(
        default=False,
        description="Allow local locations that resolve outside template_dir.",
    )
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for HTTP template retrieval.",
    )

    # Builder
    default_title: str = Field(
        default="Template",
        description="Title used when a document has no prompt_name.",
    )
    load_failure_message: str = Field(
        default="Failed to load template",
        description="User-visible message shown when a template cannot be loaded.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("template_source_type")
    @classmethod
    def normalize_source_type(cls, v: str) -> str:
        """Normalize source type to lowercase."""
        return v.strip().lower()

    @field_validator("template_dir")
    @classmethod
    def resolve_template_dir(cls, v: Path) -> Path:
        """Resolve the template directory to an absolute path."""
        return v.expanduser().resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
