"""Tests for the configuration manager and schemas."""
import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from dam_dispatch.config import AppConfig, CacheConfig, RetryConfig
from dam_dispatch.config.manager import ConfigurationManager
from dam_dispatch.domain.base.exceptions import ConfigurationError


class TestSchemas:
    """Schema defaults and validation."""

    def test_defaults(self):
        config = AppConfig()
        assert config.cache.enabled is True
        assert config.cache.default_ttl.total_seconds() == 600
        assert config.retry.max_retries == 3
        assert config.dispatch.expose_error_details is False

    def test_development_exposes_error_details(self):
        assert AppConfig(environment="development").dispatch.expose_error_details is True

    def test_invalid_retry_settings(self):
        with pytest.raises(PydanticValidationError):
            RetryConfig(max_retries=-1)
        with pytest.raises(PydanticValidationError):
            RetryConfig(base_delay=10, max_delay=5)

    def test_invalid_cache_ttl(self):
        with pytest.raises(PydanticValidationError):
            CacheConfig(default_ttl_seconds=0)


class TestConfigurationManager:
    """Loading from file and environment."""

    def test_defaults_without_sources(self):
        manager = ConfigurationManager(environ={})
        assert manager.app_config == AppConfig()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"environment": "staging", "cache": {"default_ttl_seconds": 30}}))
        manager = ConfigurationManager(str(path), environ={})
        assert manager.app_config.environment == "staging"
        assert manager.get_typed(CacheConfig).default_ttl_seconds == 30

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"retry": {"max_retries": 1}}))
        manager = ConfigurationManager(
            str(path),
            environ={"DAM_RETRY__MAX_RETRIES": "5", "DAM_CACHE__ENABLED": "false"},
        )
        assert manager.app_config.retry.max_retries == 5
        assert manager.app_config.cache.enabled is False

    def test_config_file_from_environment(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"debug": True}))
        manager = ConfigurationManager(environ={"DAM_CONFIG_FILE": str(path)})
        assert manager.app_config.debug is True

    def test_env_references_are_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DAM_TEST_LOG_DIR", "/tmp/dam")
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging": {"file_path": "${DAM_TEST_LOG_DIR}/app.log"}}))
        manager = ConfigurationManager(str(path), environ={})
        assert manager.app_config.logging.file_path == "/tmp/dam/app.log"

    def test_missing_file(self, tmp_path):
        manager = ConfigurationManager(str(tmp_path / "absent.json"), environ={})
        with pytest.raises(ConfigurationError):
            manager.app_config

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(path), environ={}).app_config

    def test_invalid_values(self):
        manager = ConfigurationManager(environ={"DAM_RETRY__MAX_RETRIES": "-3"})
        with pytest.raises(ConfigurationError):
            manager.app_config
