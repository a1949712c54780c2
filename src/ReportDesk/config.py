# ============================================================================
# ReportDesk - Configuration Management
#
# Purpose: Load and manage configuration from YAML and env vars
# Inputs: YAML files, environment variables
# Outputs: Config model with all settings
# Dependencies: pyyaml, pydantic, pathlib
# Usage: config = Config.from_default() or Config.from_yaml("path.yaml")
#
# Changelog:
#   2026-09-02: Initial configuration system (logging, store)
#   2026-09-24: Added RenderingConfig (currency symbol, portfolio row limit,
#               default client engagement position)
# ============================================================================

import os
from pathlib import Path
from typing import Any, Dict, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ReportDesk.errors import ConfigurationError


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StoreConfig(BaseModel):
    """Report store configuration."""

    type: Literal["local_file", "sqlite"] = "local_file"
    output_dir: str = "reports"
    sqlite_path: str = "reports/reportdesk.db"


class RenderingConfig(BaseModel):
    """Options consumed by the text serializer and the instance defaults."""

    currency_symbol: str = "$"
    portfolio_row_limit: int = Field(default=20, ge=1)  # Client engagement portfolio table cap
    default_engagement_position: str = "Head of Client Engagement"


class Config(BaseModel):
    """Root configuration object."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the YAML is malformed or values are invalid
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(yaml_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}", details=str(e)) from e

        if data is None:
            data = {}

        data = cls._apply_env_overrides(data)

        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}", details=str(e)) from e

    @classmethod
    def from_default(cls) -> "Config":
        """
        Load configuration from default config file.

        Returns:
            Config instance
        """
        package_root = Path(__file__).parent.parent.parent
        default_config = package_root / "configs" / "default.yaml"

        if default_config.exists():
            return cls.from_yaml(str(default_config))
        else:
            return cls()

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern:
        REPORTDESK_<SECTION>_<KEY>=value

        Keys may contain underscores (e.g. currency_symbol), so the remainder
        after the section prefix is matched against the actual keys.

        Examples:
            REPORTDESK_STORE_TYPE=sqlite               → data["store"]["type"]
            REPORTDESK_RENDERING_CURRENCY_SYMBOL=L$    → data["rendering"]["currency_symbol"]

        Args:
            data: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        prefix = "REPORTDESK_"
        defaults = cls().model_dump()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            remainder = env_key[len(prefix) :].lower()

            for section, section_defaults in defaults.items():
                section_prefix = section + "_"
                if not remainder.startswith(section_prefix):
                    continue

                key = remainder[len(section_prefix) :]
                if key not in section_defaults:
                    break

                section_data = data.setdefault(section, {})
                if not isinstance(section_data, dict):
                    break
                section_data[key] = cls._parse_env_value(env_value)
                break

        return data

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Parsed value (str, int, float, or bool)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value
