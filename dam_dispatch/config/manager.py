"""Unified configuration management for the application."""
from __future__ import annotations

import json
import logging
import os
import threading
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dam_dispatch.config.schemas import AppConfig
from dam_dispatch.config.utils.env_expansion import expand_env_vars
from dam_dispatch.domain.base.exceptions import ConfigurationError

T = TypeVar("T", bound=BaseModel)
logger = logging.getLogger(__name__)

ENV_PREFIX = "DAM_"
ENV_NESTING = "__"
CONFIG_FILE_ENV = "DAM_CONFIG_FILE"


class ConfigurationManager:
    """
    Single source of truth for application configuration.

    Sources, lowest precedence first:
    - schema defaults
    - an optional JSON file (``config_file`` or ``$DAM_CONFIG_FILE``)
    - ``DAM_<SECTION>__<KEY>`` environment variables

    String values may reference environment variables as ``$VAR``,
    ``${VAR}`` or ``${VAR:default}``. Configuration is loaded lazily.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize configuration manager with lazy loading."""
        self._environ = environ if environ is not None else os.environ
        self._config_file = config_file or self._environ.get(CONFIG_FILE_ENV)
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data: Dict[str, Any] = {}
        if self._config_file:
            config_data = self.load_from_file(self._config_file)

        config_data = self.apply_environment_overrides(config_data)
        config_data = expand_env_vars(config_data)

        try:
            config = AppConfig.from_dict(config_data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.info(
            f"Configuration loaded (environment={config.environment}, "
            f"file={self._config_file or 'none'})"
        )
        return config

    @staticmethod
    def load_from_file(path: str) -> Dict[str, Any]:
        """Load a JSON configuration file."""
        if not os.path.exists(path):
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        return data

    def apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply ``DAM_<SECTION>__<KEY>`` overrides.

        ``DAM_ENVIRONMENT=development`` sets a top-level key and
        ``DAM_CACHE__DEFAULT_TTL_SECONDS=30`` a nested one. Values are parsed
        as JSON when possible so numbers and booleans keep their types.
        """
        result = json.loads(json.dumps(config_data))
        for name, raw_value in self._environ.items():
            if not name.startswith(ENV_PREFIX) or name == CONFIG_FILE_ENV:
                continue
            path = [part.lower() for part in name[len(ENV_PREFIX):].split(ENV_NESTING) if part]
            if not path:
                continue
            target = result
            for part in path[:-1]:
                node = target.get(part)
                if not isinstance(node, dict):
                    node = {}
                    target[part] = node
                target = node
            target[path[-1]] = self._parse_value(raw_value)
            logger.debug(f"Applied environment override {name}")
        return result

    @staticmethod
    def _parse_value(raw_value: str) -> Any:
        try:
            return json.loads(raw_value)
        except json.JSONDecodeError:
            return raw_value

    def get_typed(self, config_type: Type[T]) -> T:
        """Get a typed configuration section, e.g. ``get_typed(CacheConfig)``."""
        if config_type is AppConfig:
            return self.app_config  # type: ignore[return-value]
        for field_name in AppConfig.model_fields:
            section = getattr(self.app_config, field_name)
            if type(section) is config_type:
                return section
        raise ConfigurationError(f"Unknown configuration section: {config_type.__name__}")
