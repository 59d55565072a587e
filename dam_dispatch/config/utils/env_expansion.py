"""Environment variable expansion for configuration values."""
import os
import re
from typing import Any

# ${VAR:default} is handled before os.path.expandvars sees the string
_DEFAULT_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*):([^}]*)\}")


def _expand_string(value: str) -> str:
    def replace(match: "re.Match[str]") -> str:
        return os.environ.get(match.group(1), match.group(2))

    return os.path.expandvars(_DEFAULT_PATTERN.sub(replace, value))


def expand_env_vars(value: Any) -> Any:
    """
    Expand ``$VAR``, ``${VAR}`` and ``${VAR:default}`` references.

    Strings are expanded; dicts and lists are expanded recursively; any other
    value is returned unchanged. Unknown variables without a default are left
    as written.
    """
    if isinstance(value, str):
        return _expand_string(value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value
