"""contentkpi configuration management.

Configuration is loaded from multiple sources with the following priority
(highest to lowest):
1. Explicit overrides (CLI arguments, keyword arguments)
2. Environment variables (with CONTENTKPI_ prefix)
3. Configuration files (contentkpi.config.yaml)
4. Default values

Example usage:
    from contentkpi.core.settings import get_settings

    settings = get_settings()
    print(settings.page_weight)

Environment variable support:
    CONTENTKPI_LOG_LEVEL=DEBUG
    CONTENTKPI_PAGE_WEIGHT=0.7
    CONTENTKPI_LOGGING__JSON_OUTPUT=true
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ["contentkpi.config.yaml", "contentkpi.config.yml"]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file by searching current directory and parents.

    Args:
        start_dir: Directory to start search from.
            Defaults to current working directory.

    Returns:
        Path to config file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()

    for _ in range(10):
        for filename in CONFIG_FILE_NAMES:
            config_path = search_dir / filename
            if config_path.exists():
                return config_path

        parent = search_dir.parent
        if parent == search_dir:
            break
        search_dir = parent

    return None


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Unreadable or malformed files are logged and treated as empty.
    """
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
            return config if isinstance(config, dict) else {}
    except yaml.YAMLError as e:
        logger.warning("Failed to parse config file %s: %s", config_path, e)
        return {}
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", config_path, e)
        return {}


def _validate_level(v: str) -> str:
    upper_v = v.upper()
    if upper_v not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
    return upper_v


class LoggingSettings(BaseSettings):
    """Logging configuration settings.

    The root level is the top-level log_level; modules overrides it for
    individual loggers, e.g. {"contentkpi.issues": "DEBUG"}.
    """

    json_output: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )
    file: str | None = Field(
        default=None,
        description="Log file path (optional)",
    )
    modules: dict[str, str] = Field(
        default_factory=dict,
        description="Per-logger level overrides, keyed by logger name",
    )

    @field_validator("modules")
    @classmethod
    def validate_module_levels(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate every per-module level."""
        return {module: _validate_level(level) for module, level in v.items()}


class ContentKPISettings(BaseSettings):
    """Main contentkpi configuration settings.

    Example:
        settings = ContentKPISettings(page_weight=0.7)
        print(settings.domain_weight)  # 0.3
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENTKPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    log_level: str = Field(
        default="WARNING",
        description="Application log level",
    )
    page_weight: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Fraction of the combined score attributed to page analysis",
    )
    attention_threshold: float = Field(
        default=60,
        ge=0,
        le=100,
        description="Pages scoring below this need attention",
    )
    attention_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum number of pages listed as needing attention",
    )
    top_threshold: float = Field(
        default=80,
        ge=0,
        le=100,
        description="Pages scoring above this are top performers",
    )
    default_format: Literal["console", "json"] = Field(
        default="console",
        description="Default report format for the CLI",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def domain_weight(self) -> float:
        """Fraction of the combined score attributed to domain analysis."""
        return 1.0 - self.page_weight

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        return _validate_level(v)

    @model_validator(mode="before")
    @classmethod
    def load_from_config_file(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Merge values from a discovered YAML config file under explicit data."""
        if data.get("_skip_file_loading"):
            data.pop("_skip_file_loading", None)
            return data

        config_path = _find_config_file()
        if config_path:
            file_config = _load_yaml_config(config_path)
            if file_config:
                logger.debug("Loaded configuration from %s", config_path)
                merged = {**file_config, **data}

                if isinstance(file_config.get("logging"), dict):
                    explicit = data.get("logging")
                    merged["logging"] = {
                        **file_config["logging"],
                        **(explicit if isinstance(explicit, dict) else {}),
                    }

                return merged

        return data

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        result = self.model_dump()
        result["domain_weight"] = self.domain_weight
        return result


def get_settings(
    config_file: Path | None = None,
    **overrides: Any,
) -> ContentKPISettings:
    """Get a contentkpi settings instance.

    Args:
        config_file: Optional explicit path to configuration file.
        **overrides: Explicit configuration overrides.

    Returns:
        Configured ContentKPISettings instance.
    """
    if config_file and config_file.exists():
        file_config = _load_yaml_config(config_file)
        merged = {**file_config, **overrides, "_skip_file_loading": True}
        return ContentKPISettings(**merged)

    return ContentKPISettings(**overrides)


def generate_json_schema(output_path: Path | None = None) -> dict[str, Any]:
    """Generate JSON Schema for contentkpi configuration files.

    Args:
        output_path: Optional path to write schema file.

    Returns:
        JSON Schema dictionary.
    """
    schema = ContentKPISettings.model_json_schema()

    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["title"] = "contentkpi Configuration Schema"
    schema["description"] = (
        "JSON Schema for contentkpi configuration files (contentkpi.config.yaml)"
    )

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(schema, f, indent=2)
        logger.info("Generated JSON Schema at %s", output_path)

    return schema


def generate_example_config(output_path: Path | None = None) -> str:
    """Generate example configuration file.

    Args:
        output_path: Optional path to write example config file.

    Returns:
        Example configuration as YAML string.
    """
    example = """\
# contentkpi configuration
# Environment variables override these values with the CONTENTKPI_ prefix
# Example: CONTENTKPI_PAGE_WEIGHT=0.7

log_level: WARNING          # DEBUG, INFO, WARNING, ERROR, CRITICAL

# Share of the combined score taken by page analysis.
# The domain analysis share is 1 - page_weight.
page_weight: 0.6

attention_threshold: 60     # Pages below this score need attention
attention_limit: 5          # How many of them to list
top_threshold: 80           # Pages above this score are top performers

default_format: console     # console or json

# logging:
#   json_output: false
#   file: null              # Optional log file path
#   modules:                # Per-logger levels
#     contentkpi.issues: DEBUG
"""

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(example)
        logger.info("Generated example config at %s", output_path)

    return example
