#!/usr/bin/env python3
"""
archpost - settings module
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from .checklist.actions import (
    DEFAULT_MANAGER,
    DEFAULT_MANAGER_ALIAS,
    DEFAULT_NOTIFY,
    DEFAULT_NOTIFY_ALIAS,
    AliasConfig,
)
from .utils import get_app_dir

SETTINGS_FILENAME = "settings.yml"
DEFAULT_SCRIPT_HEADER = "# Generated script"
DEFAULT_NAME_FORMAT = "generated-script_%d_%m_%Y_%H%M%S.sh"


# --- Settings Key Definitions ---
# Each key defines: type, default, description and its path in settings.yml
SETTINGS_KEYS: Dict[str, Dict[str, Any]] = {
    "aliases.manager": {
        "type": "string",
        "default": DEFAULT_MANAGER,
        "description": "Package manager invocation prefix (with flags)",
        "path": ["settings", "aliases", "manager"],
    },
    "aliases.manager_alias": {
        "type": "string",
        "default": DEFAULT_MANAGER_ALIAS,
        "description": "Token replaced by the package manager prefix in commands",
        "path": ["settings", "aliases", "manager_alias"],
    },
    "aliases.notify": {
        "type": "string",
        "default": DEFAULT_NOTIFY,
        "description": "Notification command prefix (with flags)",
        "path": ["settings", "aliases", "notify"],
    },
    "aliases.notify_alias": {
        "type": "string",
        "default": DEFAULT_NOTIFY_ALIAS,
        "description": "Token replaced by the notification prefix in commands",
        "path": ["settings", "aliases", "notify_alias"],
    },
    "script.header": {
        "type": "string",
        "default": DEFAULT_SCRIPT_HEADER,
        "description": "First line of generated scripts (empty = no header)",
        "path": ["settings", "script", "header"],
    },
    "script.name_format": {
        "type": "string",
        "default": DEFAULT_NAME_FORMAT,
        "description": "strftime format for generated script file names",
        "path": ["settings", "script", "name_format"],
    },
    "script.shell": {
        "type": "string",
        "default": "bash",
        "description": "Shell used to execute written scripts",
        "path": ["settings", "script", "shell"],
    },
    "fetch.timeout": {
        "type": "number",
        "default": 30,
        "description": "Timeout in seconds when downloading a checklist URL",
        "path": ["settings", "fetch", "timeout"],
    },
}


def expand_env_vars(value: Any, missing_vars: Set[str] = None) -> Any:
    """Expand ${VAR} and ${VAR:-default} references in strings, recursively."""
    if missing_vars is None:
        missing_vars = set()

    if isinstance(value, str):

        def replace_env_var(match):
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                env_value = os.getenv(var_name)
                if env_value is None:
                    missing_vars.add(var_name)
                    return default_value
                return env_value

            env_value = os.getenv(var_expr)
            if env_value is None:
                missing_vars.add(var_expr)
                return f"${{{var_expr}}}"  # keep undefined references as written
            return env_value

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v, missing_vars) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item, missing_vars) for item in value]

    return value


def _text(value: Any, default: str) -> str:
    """String setting; null falls back to the default."""
    return default if value is None else str(value)


def _number(value: Any, default: float) -> Any:
    """Numeric setting; env expansion yields strings, so convert them here.

    Unconvertible values are kept as written for validate_config to report.
    """
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


@dataclass
class ScriptConfig:
    """Generated script settings"""

    header: str = DEFAULT_SCRIPT_HEADER
    name_format: str = DEFAULT_NAME_FORMAT
    shell: str = "bash"


@dataclass
class FetchConfig:
    """Checklist download settings"""

    timeout: float = 30


@dataclass
class Settings:
    """archpost settings"""

    aliases: AliasConfig = field(default_factory=AliasConfig)
    script: ScriptConfig = field(default_factory=ScriptConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """Create Settings from a settings.yml dict; missing keys use defaults"""
        settings_data = data.get("settings") if isinstance(data, dict) else None
        settings_data = settings_data or {}

        alias_data = settings_data.get("aliases") or {}
        aliases = AliasConfig(
            manager=_text(alias_data.get("manager"), DEFAULT_MANAGER),
            manager_alias=_text(alias_data.get("manager_alias"), DEFAULT_MANAGER_ALIAS),
            notify=_text(alias_data.get("notify"), DEFAULT_NOTIFY),
            notify_alias=_text(alias_data.get("notify_alias"), DEFAULT_NOTIFY_ALIAS),
        )

        script_data = settings_data.get("script") or {}
        header = script_data.get("header", DEFAULT_SCRIPT_HEADER)
        script = ScriptConfig(
            header="" if header is None else header,
            name_format=script_data.get("name_format", DEFAULT_NAME_FORMAT),
            shell=script_data.get("shell", "bash"),
        )

        fetch_data = settings_data.get("fetch") or {}
        fetch = FetchConfig(timeout=_number(fetch_data.get("timeout"), 30))

        return cls(aliases=aliases, script=script, fetch=fetch)

    def to_dict(self) -> Dict[str, Any]:
        """Settings as a settings.yml dict"""
        return {
            "settings": {
                "aliases": {
                    "manager": self.aliases.manager,
                    "manager_alias": self.aliases.manager_alias,
                    "notify": self.aliases.notify,
                    "notify_alias": self.aliases.notify_alias,
                },
                "script": {
                    "header": self.script.header,
                    "name_format": self.script.name_format,
                    "shell": self.script.shell,
                },
                "fetch": {"timeout": self.fetch.timeout},
            }
        }


class ConfigManager:
    """Settings file management"""

    def __init__(self, config_path: Optional[str] = None):
        if config_path is None:
            config_path = get_app_dir() / SETTINGS_FILENAME
        self.config_path = Path(config_path)
        self._config = None
        self._missing_env_vars = set()

    def load_config(self) -> Settings:
        """Load settings.yml (with env var expansion); no file means defaults"""
        self._missing_env_vars.clear()

        if not self.config_path.exists():
            self._config = Settings()
            return self._config

        with open(self.config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        expanded_data = expand_env_vars(data, self._missing_env_vars)
        self._config = Settings.from_dict(expanded_data)
        return self._config

    def save_config(self, settings: Optional[Settings] = None) -> Path:
        """Write settings to settings.yml"""
        if settings is not None:
            self._config = settings
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self.config.to_dict(), f, default_flow_style=False, sort_keys=False
            )
        return self.config_path

    @property
    def config(self) -> Settings:
        """Settings object (lazy loaded)"""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def missing_env_vars(self) -> Set[str]:
        """Undefined environment variables referenced by settings.yml"""
        if self._config is None:
            self.load_config()
        return self._missing_env_vars.copy()

    @property
    def aliases(self) -> AliasConfig:
        return self.config.aliases

    def validate_config(self) -> List[str]:
        """Check settings (including undefined env var warnings)"""
        errors = []
        warnings = []

        for var in sorted(self.missing_env_vars):
            warnings.append(f"!Environment variable '{var}' is not defined")

        aliases = self.config.aliases
        if not str(aliases.manager).strip():
            errors.append("✗aliases.manager is empty")
        if not str(aliases.notify).strip():
            warnings.append("!aliases.notify is empty; notification commands do nothing")

        if not aliases.manager_alias or not aliases.notify_alias:
            errors.append("✗Alias tokens must not be empty")
        elif aliases.manager_alias == aliases.notify_alias:
            errors.append(
                f"✗aliases.manager_alias and aliases.notify_alias are both '{aliases.manager_alias}'"
            )
        elif (
            aliases.manager_alias in aliases.notify_alias
            or aliases.notify_alias in aliases.manager_alias
        ):
            warnings.append("!Alias tokens overlap; the longer token is matched first")

        if aliases.manager_alias and aliases.manager_alias in str(aliases.manager):
            warnings.append("!aliases.manager contains its own alias token")

        try:
            timeout = float(self.config.fetch.timeout)
        except (TypeError, ValueError):
            errors.append(f"✗fetch.timeout is not a number: {self.config.fetch.timeout}")
        else:
            if timeout <= 0:
                errors.append("✗fetch.timeout must be positive")

        if not str(self.config.script.name_format).strip():
            errors.append("✗script.name_format is empty")

        if not self.config_path.exists():
            warnings.append(f"iNo settings file at {self.config_path}; using defaults")

        return warnings + errors

    def get_validation_errors(self) -> List[str]:
        """Errors only (warnings and info removed)"""
        return [result for result in self.validate_config() if result.startswith("✗")]
