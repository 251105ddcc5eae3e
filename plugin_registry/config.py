import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from plugin_registry.constants import (
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    DEFAULT_IGNORED_DIRS,
    DEFAULT_ROOT,
)
from plugin_registry.errors import (
    InvalidConfigSchemaError,
    InvalidJsonFormatError,
    MissingConfigFileError,
)
from plugin_registry.registry.models import DuplicatePolicy
from plugin_registry.utils import format_schema_error, read_json


CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "root": {"type": "string", "minLength": 1},
        "duplicate_policy": {
            "type": "string",
            "enum": [policy.value for policy in DuplicatePolicy],
        },
        "ignored_dirs": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
        "list_keys": {
            "type": "array",
            "items": {"type": "string", "pattern": r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$"},
            "uniqueItems": True,
        },
    },
}

_VALIDATOR = Draft202012Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class RegistryConfig:
    root: Path = Path(DEFAULT_ROOT)
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR
    ignored_dirs: tuple[str, ...] = DEFAULT_IGNORED_DIRS
    list_keys: tuple[str, ...] = field(default_factory=tuple)

    def with_overrides(
        self,
        root: Optional[Path] = None,
        duplicate_policy: Optional[DuplicatePolicy] = None,
    ) -> "RegistryConfig":
        changes: dict[str, Any] = {}
        if root is not None:
            changes["root"] = root
        if duplicate_policy is not None:
            changes["duplicate_policy"] = duplicate_policy
        return replace(self, **changes) if changes else self


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / CONFIG_DIRNAME / CONFIG_FILENAME


def config_from_payload(payload: dict[str, Any]) -> RegistryConfig:
    defaults = RegistryConfig()
    return RegistryConfig(
        root=Path(payload["root"]).expanduser() if "root" in payload else defaults.root,
        duplicate_policy=DuplicatePolicy(
            payload.get("duplicate_policy", defaults.duplicate_policy.value)
        ),
        ignored_dirs=tuple(payload.get("ignored_dirs", defaults.ignored_dirs)),
        list_keys=tuple(payload.get("list_keys", defaults.list_keys)),
    )


def load_config(path: Optional[Path] = None) -> RegistryConfig:
    """Load the config file, or defaults when the default file is absent.

    An explicitly given ``path`` must exist.
    """
    explicit = path is not None
    config_path = path if path is not None else default_config_path()
    if not config_path.exists():
        if explicit:
            raise MissingConfigFileError(config_path)
        return RegistryConfig()
    if config_path.stat().st_size == 0:
        return RegistryConfig()

    try:
        payload = read_json(config_path)
    except json.JSONDecodeError as exc:
        raise InvalidJsonFormatError(config_path, str(exc)) from exc

    error = next(iter(_VALIDATOR.iter_errors(payload)), None)
    if error is not None:
        raise InvalidConfigSchemaError(config_path, format_schema_error(error))
    return config_from_payload(payload)
