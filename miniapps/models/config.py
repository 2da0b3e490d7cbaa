"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    base_url: str  # Static file server hosting the *.json fixtures
    storage_path: Path  # JSON file backing the local key-value store
    timeout: float = 5.0
    max_retries: int = 0  # 0 = a single attempt, failures go straight to fallback
    log_level: str = "INFO"
