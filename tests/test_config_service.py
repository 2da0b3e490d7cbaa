"""Property-based tests for configuration service."""

import json
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, strategies as st

from miniapps.models import AppConfig
from miniapps.services import ConfigurationError, ConfigurationService


valid_base_urls = st.builds(
    lambda scheme, host, port: f"{scheme}://{host}:{port}",
    st.sampled_from(["http", "https"]),
    st.text(min_size=1, max_size=20, alphabet="abcdefghijklmnopqrstuvwxyz"),
    st.integers(min_value=1, max_value=65535),
)

valid_paths = st.builds(
    lambda x: Path.home() / "test" / f"{x}.json",
    st.text(min_size=1, max_size=50, alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd")))
)

valid_config_strategy = st.builds(
    AppConfig,
    base_url=valid_base_urls,
    storage_path=valid_paths,
    timeout=st.floats(min_value=0.1, max_value=300.0, allow_nan=False, allow_infinity=False),
    max_retries=st.integers(min_value=0, max_value=10),
    log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)


@given(valid_config_strategy)
def test_configuration_round_trip(config: AppConfig) -> None:
    """Saving a valid configuration and reloading it preserves all values."""
    with tempfile.TemporaryDirectory() as temp_dir:
        service = ConfigurationService(Path(temp_dir) / "config.json")

        service.save_config(config)

        assert service.load_config() == config


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    service = ConfigurationService(tmp_path / "absent.json")

    config = service.load_config()

    assert config == service.get_default_config()
    assert config.max_retries == 0
    assert service.validate_config(config).is_valid


def test_partial_file_fills_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"base_url": "http://localhost:8000"}), encoding="utf-8")
    service = ConfigurationService(config_path)

    config = service.load_config()

    assert config.base_url == "http://localhost:8000"
    assert config.timeout == 5.0
    assert config.log_level == "INFO"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"timeout": 3}),
        json.dumps({"base_url": "ftp://example.com"}),
        json.dumps({"base_url": "http://localhost", "timeout": -1}),
        json.dumps({"base_url": "http://localhost", "log_level": "LOUD"}),
        json.dumps(["not", "an", "object"]),
    ],
)
def test_invalid_file_uses_defaults(tmp_path: Path, content: str) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(content, encoding="utf-8")
    service = ConfigurationService(config_path)

    assert service.load_config() == service.get_default_config()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"base_url": "localhost:8000"}, "base_url"),
        ({"timeout": 0}, "timeout"),
        ({"timeout": 301.0}, "timeout"),
        ({"max_retries": -1}, "max_retries"),
        ({"max_retries": 11}, "max_retries"),
        ({"log_level": "verbose"}, "log_level"),
    ],
)
def test_validation_errors(tmp_path: Path, overrides: dict[str, object], message: str) -> None:
    service = ConfigurationService(tmp_path / "config.json")
    defaults = service.get_default_config()
    config = AppConfig(**{
        "base_url": defaults.base_url,
        "storage_path": defaults.storage_path,
        "timeout": defaults.timeout,
        "max_retries": defaults.max_retries,
        "log_level": defaults.log_level,
        **overrides,
    })

    result = service.validate_config(config)

    assert not result.is_valid
    assert any(message in error for error in result.errors)

    with pytest.raises(ConfigurationError):
        service.save_config(config)
    assert not (tmp_path / "config.json").exists()
