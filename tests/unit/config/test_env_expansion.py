"""Tests for environment variable expansion utilities."""

import os
from unittest.mock import patch

from dam_dispatch.config.utils.env_expansion import expand_env_vars


class TestEnvironmentVariableExpansion:
    """Test environment variable expansion functionality."""

    def test_expand_simple_env_var(self):
        """Test expansion of simple environment variable."""
        with patch.dict(os.environ, {"DAM_TEST_VAR": "/var/log/dam"}):
            assert expand_env_vars("$DAM_TEST_VAR") == "/var/log/dam"

    def test_expand_braced_env_var_with_subpath(self):
        """Test expansion of braced environment variable with subpath."""
        with patch.dict(os.environ, {"DAM_TEST_VAR": "/var/log/dam"}):
            assert expand_env_vars("${DAM_TEST_VAR}/app.log") == "/var/log/dam/app.log"

    def test_default_used_when_unset(self):
        """Test ${VAR:default} falls back to the default."""
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("${DAM_MISSING:INFO}") == "INFO"

    def test_default_ignored_when_set(self):
        with patch.dict(os.environ, {"DAM_LEVEL": "DEBUG"}):
            assert expand_env_vars("${DAM_LEVEL:INFO}") == "DEBUG"

    def test_expand_nonexistent_env_var(self):
        """Test expansion of non-existent environment variable."""
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("$NONEXISTENT_VAR") == "$NONEXISTENT_VAR"

    def test_expand_nested_values(self):
        """Test expansion inside nested dictionaries and lists."""
        with patch.dict(os.environ, {"DAM_TEST_VAR": "/data"}):
            config = {"logging": {"file_path": "$DAM_TEST_VAR/app.log"}, "paths": ["$DAM_TEST_VAR"]}
            assert expand_env_vars(config) == {
                "logging": {"file_path": "/data/app.log"},
                "paths": ["/data"],
            }

    def test_expand_non_string_values(self):
        """Test that non-string values are returned unchanged."""
        config = {"number": 42, "boolean": True, "none": None}
        assert expand_env_vars(config) == config
