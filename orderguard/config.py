"""Configuration Management with Pydantic.

Configuration is optional: every setting has a default. A YAML file can
override the defaults and environment variables override the file.
"""

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

logger = structlog.get_logger(__name__)

TRUE_VALUES = ("true", "1", "yes")


class ScanConfig(BaseModel):
    """Settings for discovering and reading known files.

    Attributes:
        extension: Suffix of the files forming the known set
        encoding: Text encoding used to read file content
    """

    extension: str = Field(
        default=".h",
        description="Suffix of known files, including the leading dot",
        min_length=2,
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to read known files",
        min_length=1,
    )

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Validate that the extension is a single dotted suffix.

        Raises:
            ValueError: If the extension lacks a leading dot or contains a separator
        """
        if not v.startswith(".") or "/" in v or "\\" in v:
            msg = "Extension must start with '.' and contain no path separators"
            raise ValueError(msg)
        return v

    model_config = {"str_strip_whitespace": True}


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render log events as JSON instead of console text
    """

    level: str = Field(
        default="WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=False,
        description="Render log events as JSON",
    )


class OrderGuardConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        scan: Known-file discovery settings
        logging: Logging settings
    """

    scan: ScanConfig = Field(default_factory=ScanConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "OrderGuardConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated OrderGuardConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If the file is empty, not valid YAML or fails validation
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if not config_data:
            msg = "Configuration file is empty"
            raise ValueError(msg)
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls(**cls._apply_env_overrides(config_data))
        logger.info(
            "configuration_loaded",
            extension=config.scan.extension,
            logging_level=config.logging.level,
        )
        return config

    @classmethod
    def from_env(cls) -> "OrderGuardConfig":
        """Build configuration from defaults plus environment overrides."""
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern ORDERGUARD_<SECTION>_<KEY>,
        e.g. ORDERGUARD_SCAN_EXTENSION or ORDERGUARD_LOGGING_LEVEL.

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("scan", "extension"): "ORDERGUARD_SCAN_EXTENSION",
            ("scan", "encoding"): "ORDERGUARD_SCAN_ENCODING",
            ("logging", "level"): "ORDERGUARD_LOGGING_LEVEL",
            ("logging", "json_logs"): "ORDERGUARD_LOGGING_JSON",
        }

        for path, env_var in env_overrides.items():
            value: Any = os.environ.get(env_var)
            if value is None:
                continue

            section, key = path
            current = config_data.get(section) or {}
            config_data[section] = current
            if env_var.endswith("_JSON"):
                value = value.lower() in TRUE_VALUES
            elif env_var.endswith("_LEVEL"):
                value = value.upper()

            current[key] = value
            logger.debug(
                "env_override_applied",
                env_var=env_var,
                config_path=".".join(path),
            )

        return config_data


def load_config(config_path: str | Path | None = None) -> OrderGuardConfig:
    """Load configuration from a file, or from defaults when no path is given."""
    if config_path is None:
        return OrderGuardConfig.from_env()
    return OrderGuardConfig.from_yaml(config_path)


__all__ = [
    "LoggingConfig",
    "OrderGuardConfig",
    "ScanConfig",
    "load_config",
]
