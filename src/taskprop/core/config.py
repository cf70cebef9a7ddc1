"""Configuration management for taskprop."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .types import (
    Condition,
    ConditionLogic,
    ConditionOperator,
    DirectMapping,
    OperationMapping,
    OperationType,
    RuleSet,
    TaskProperty,
)

_TASK_PROPERTIES = {p.value for p in TaskProperty}
_OPERATIONS = {o.value for o in OperationType}
_OPERATORS = {o.value for o in ConditionOperator}
_LOGICS = {c.value for c in ConditionLogic}

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Main application configuration."""

    vault_path: Path = field(default_factory=Path.cwd)
    glob_patterns: list[str] = field(default_factory=lambda: ["**/*.md"])
    # Folders (relative to the vault) whose documents are never processed
    excluded_folders: list[str] = field(default_factory=list)
    process_on_modify: bool = True
    debounce_delay: float = 1.0  # seconds
    cooldown: float = 0.2  # seconds a document stays locked after processing
    direct_mappings: list[DirectMapping] = field(default_factory=list)
    operation_mappings: list[OperationMapping] = field(default_factory=list)

    def rules(self) -> RuleSet:
        """Snapshot the mapping rules for one processing pass."""
        return RuleSet(
            direct_mappings=tuple(self.direct_mappings),
            operation_mappings=tuple(self.operation_mappings),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Raises:
            ConfigError: If the file is missing, malformed or invalid.
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        config = cls.from_dict(data, base_dir=path.parent)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, TASKPROP_CONFIG, or the environment."""
        if path is None:
            path = os.environ.get("TASKPROP_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "Config":
        """Build a configuration from parsed TOML data.

        Args:
            data: Parsed configuration table.
            base_dir: Directory that a relative ``vault_path`` resolves against.

        Raises:
            ConfigError: If a value has the wrong type or names an unknown
                property, operation, operator or logic.
        """
        config = cls()

        if "vault_path" in data:
            vault = Path(_expect(data, "vault_path", str)).expanduser()
            if not vault.is_absolute() and base_dir is not None:
                vault = base_dir / vault
            config.vault_path = vault
        if "glob_patterns" in data:
            config.glob_patterns = _expect_str_list(data, "glob_patterns")
        if "excluded_folders" in data:
            config.excluded_folders = _expect_str_list(data, "excluded_folders")
        if "process_on_modify" in data:
            config.process_on_modify = _expect(data, "process_on_modify", bool)
        if "debounce_delay" in data:
            config.debounce_delay = float(_expect(data, "debounce_delay", (int, float)))
        if "cooldown" in data:
            config.cooldown = float(_expect(data, "cooldown", (int, float)))

        config.direct_mappings = [
            _parse_direct_mapping(table, index)
            for index, table in enumerate(data.get("direct_mappings", []), start=1)
        ]
        config.operation_mappings = [
            _parse_operation_mapping(table, index)
            for index, table in enumerate(data.get("operation_mappings", []), start=1)
        ]
        return config

    def _apply_env(self) -> None:
        if vault := os.environ.get("TASKPROP_VAULT"):
            self.vault_path = Path(vault).expanduser()

        if delay := os.environ.get("TASKPROP_DEBOUNCE"):
            try:
                self.debounce_delay = float(delay)
            except ValueError as e:
                raise ConfigError(f"TASKPROP_DEBOUNCE must be a number: {delay!r}") from e

        if flag := os.environ.get("TASKPROP_PROCESS_ON_MODIFY"):
            self.process_on_modify = flag.strip().lower() in _TRUE_VALUES


def _expect(table: dict[str, Any], key: str, types: type | tuple[type, ...]) -> Any:
    value = table[key]
    # bool is an int subclass; reject it where a number is expected
    if isinstance(value, bool) and types is not bool:
        raise ConfigError(f"{key!r} must not be a boolean")
    if not isinstance(value, types):
        raise ConfigError(f"{key!r} has invalid value {value!r}")
    return value


def _expect_flag(table: dict[str, Any], key: str) -> bool:
    if key not in table:
        return True
    return _expect(table, key, bool)


def _expect_str_list(table: dict[str, Any], key: str) -> list[str]:
    value = table[key]
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key!r} must be a list of strings")
    return list(value)


def _expect_name(table: dict[str, Any], key: str, allowed: set[str], where: str) -> str:
    if key not in table:
        raise ConfigError(f"{where}: missing {key!r}")
    value = _expect(table, key, str)
    if value not in allowed:
        raise ConfigError(
            f"{where}: unknown {key} {value!r} (expected one of {', '.join(sorted(allowed))})"
        )
    return value


def _expect_key(table: dict[str, Any], where: str) -> str:
    key = table.get("frontmatter_key")
    if not isinstance(key, str) or not key.strip():
        raise ConfigError(f"{where}: 'frontmatter_key' must be a non-empty string")
    return key.strip()


def _parse_direct_mapping(table: dict[str, Any], index: int) -> DirectMapping:
    mapping_id = str(table.get("id") or f"direct-{index}")
    where = f"direct mapping {mapping_id}"
    return DirectMapping(
        task_property=_expect_name(table, "task_property", _TASK_PROPERTIES, where),
        frontmatter_key=_expect_key(table, where),
        overwrite_existing=_expect_flag(table, "overwrite_existing"),
        enabled=_expect_flag(table, "enabled"),
        id=mapping_id,
    )


def _parse_operation_mapping(table: dict[str, Any], index: int) -> OperationMapping:
    mapping_id = str(table.get("id") or f"operation-{index}")
    where = f"operation mapping {mapping_id}"

    logic = ConditionLogic.AND.value
    if "condition_logic" in table:
        logic = _expect_name(table, "condition_logic", _LOGICS, where)

    conditions = tuple(
        Condition(
            property=_expect_name(cond, "property", _TASK_PROPERTIES, where),
            operator=_expect_name(cond, "operator", _OPERATORS, where),
            value=str(cond.get("value", "")),
        )
        for cond in table.get("conditions", [])
    )

    return OperationMapping(
        task_property=_expect_name(table, "task_property", _TASK_PROPERTIES, where),
        operation=_expect_name(table, "operation", _OPERATIONS, where),
        frontmatter_key=_expect_key(table, where),
        overwrite_existing=_expect_flag(table, "overwrite_existing"),
        enabled=_expect_flag(table, "enabled"),
        conditions=conditions,
        condition_logic=logic,
        id=mapping_id,
    )
