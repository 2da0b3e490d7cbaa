"""Configuration service for managing application settings."""

import json
from pathlib import Path
from urllib.parse import urlparse

import structlog

from ..models import AppConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "miniapps"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or DEFAULT_CONFIG_DIR / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self.get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str | int | float | None] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self.get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self.get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ConfigurationError: If the configuration is invalid
            OSError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                expected="a configuration that passes validation",
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        parsed = urlparse(config.base_url) if isinstance(config.base_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("base_url must be an absolute http(s) URL")

        if not isinstance(config.storage_path, Path):
            errors.append("storage_path must be a Path object")

        if not isinstance(config.timeout, (int, float)) or isinstance(config.timeout, bool) or config.timeout <= 0:
            errors.append("timeout must be a positive number")
        elif config.timeout > 300:
            errors.append("timeout should not exceed 300 seconds")

        if not isinstance(config.max_retries, int) or isinstance(config.max_retries, bool) or config.max_retries < 0:
            errors.append("max_retries must be a non-negative integer")
        elif config.max_retries > 10:
            errors.append("max_retries should not exceed 10")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return ValidationResult(len(errors) == 0, errors)

    def get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig(
            base_url="http://localhost:5173",
            storage_path=DEFAULT_CONFIG_DIR / "storage.json",
            timeout=5.0,
            max_retries=0,
            log_level="INFO",
        )

    def _config_to_dict(self, config: AppConfig) -> dict[str, str | int | float]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "base_url": config.base_url,
            "storage_path": str(config.storage_path),
            "timeout": config.timeout,
            "max_retries": config.max_retries,
            "log_level": config.log_level,
        }

    def _dict_to_config(self, data: dict[str, str | int | float | None]) -> AppConfig:
        """Convert dictionary to AppConfig, defaulting optional settings."""
        defaults = self.get_default_config()

        timeout_raw = data.get("timeout", defaults.timeout)
        max_retries_raw = data.get("max_retries", defaults.max_retries)
        log_level_raw = data.get("log_level", defaults.log_level)

        return AppConfig(
            base_url=str(data["base_url"]),
            storage_path=Path(str(data.get("storage_path", defaults.storage_path))).expanduser(),
            timeout=float(timeout_raw) if isinstance(timeout_raw, (int, float)) else defaults.timeout,
            max_retries=int(max_retries_raw) if isinstance(max_retries_raw, int) else defaults.max_retries,
            log_level=str(log_level_raw).upper() if isinstance(log_level_raw, str) else defaults.log_level,
        )
