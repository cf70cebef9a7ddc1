"""Tests for Config TOML loading, validation and env overrides."""

from pathlib import Path

import pytest

from taskprop.core.config import Config
from taskprop.core.exceptions import ConfigError
from taskprop.core.types import Condition, DirectMapping

FULL_CONFIG = """
vault_path = "notes"
excluded_folders = ["Templates"]
debounce_delay = 2
process_on_modify = false

[[direct_mappings]]
task_property = "priority"
frontmatter_key = "priority"
overwrite_existing = false

[[operation_mappings]]
id = "next"
task_property = "scheduled_date"
operation = "min"
frontmatter_key = "next_scheduled"
condition_logic = "AND"

[[operation_mappings.conditions]]
property = "status"
operator = "not_equals"
value = "x"

[[operation_mappings.conditions]]
property = "due_date"
operator = "is_not_empty"

[[operation_mappings]]
task_property = "status"
operation = "percentage_done"
frontmatter_key = "progress"
enabled = false
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "TASKPROP_CONFIG",
        "TASKPROP_VAULT",
        "TASKPROP_DEBOUNCE",
        "TASKPROP_PROCESS_ON_MODIFY",
    ):
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "taskprop.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestFromFile:
    """Tests for Config.from_file."""

    def test_full_config(self, tmp_path):
        config = Config.from_file(write_config(tmp_path, FULL_CONFIG))

        assert config.vault_path == tmp_path / "notes"
        assert config.excluded_folders == ["Templates"]
        assert config.debounce_delay == 2.0
        assert config.process_on_modify is False
        assert config.direct_mappings == [
            DirectMapping("priority", "priority", overwrite_existing=False, id="direct-1")
        ]

        first, second = config.operation_mappings
        assert first.id == "next"
        assert first.operation == "min"
        assert first.conditions == (
            Condition("status", "not_equals", "x"),
            Condition("due_date", "is_not_empty", ""),
        )
        assert second.id == "operation-2"
        assert second.enabled is False

    def test_defaults(self, tmp_path):
        config = Config.from_file(write_config(tmp_path, ""))
        assert config.glob_patterns == ["**/*.md"]
        assert config.process_on_modify is True
        assert config.debounce_delay == 1.0
        assert config.rules().is_empty

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TASKPROP_VAULT", "/tmp/env-vault")
        monkeypatch.setenv("TASKPROP_DEBOUNCE", "0.5")
        monkeypatch.setenv("TASKPROP_PROCESS_ON_MODIFY", "yes")

        config = Config.from_file(write_config(tmp_path, FULL_CONFIG))

        assert config.vault_path == Path("/tmp/env-vault")
        assert config.debounce_delay == 0.5
        assert config.process_on_modify is True

    def test_bad_env_number(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TASKPROP_DEBOUNCE", "soon")
        with pytest.raises(ConfigError):
            Config.from_file(write_config(tmp_path, ""))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            Config.from_file(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid TOML"):
            Config.from_file(write_config(tmp_path, "vault_path = "))


class TestValidation:
    """Mapping vocabulary validation."""

    @pytest.mark.parametrize(
        "table",
        [
            '[[direct_mappings]]\ntask_property = "assignee"\nfrontmatter_key = "who"',
            '[[direct_mappings]]\ntask_property = "due_date"',
            '[[direct_mappings]]\ntask_property = "due_date"\nfrontmatter_key = "  "',
            '[[operation_mappings]]\ntask_property = "due_date"\noperation = "median"\nfrontmatter_key = "k"',
            '[[operation_mappings]]\ntask_property = "due_date"\noperation = "min"\nfrontmatter_key = "k"\ncondition_logic = "XOR"',
            '[[operation_mappings]]\ntask_property = "due_date"\noperation = "min"\nfrontmatter_key = "k"\n'
            '[[operation_mappings.conditions]]\nproperty = "status"\noperator = "matches"',
        ],
    )
    def test_rejects_unknown_names(self, tmp_path, table):
        with pytest.raises(ConfigError):
            Config.from_file(write_config(tmp_path, table))

    def test_rejects_wrong_types(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.from_file(write_config(tmp_path, "debounce_delay = true"))
        with pytest.raises(ConfigError):
            Config.from_file(write_config(tmp_path, "excluded_folders = [1, 2]"))

    @pytest.mark.parametrize("flag", ["overwrite_existing", "enabled"])
    def test_mapping_flags_must_be_booleans(self, tmp_path, flag):
        """A quoted "false" is rejected rather than read as true."""
        table = (
            f'[[direct_mappings]]\ntask_property = "due_date"\nfrontmatter_key = "due"\n'
            f'{flag} = "false"'
        )
        with pytest.raises(ConfigError):
            Config.from_file(write_config(tmp_path, table))

    def test_mapping_flags_default_true(self, tmp_path):
        table = '[[direct_mappings]]\ntask_property = "due_date"\nfrontmatter_key = "due"\nenabled = false'
        mapping = Config.from_file(write_config(tmp_path, table)).direct_mappings[0]
        assert mapping.enabled is False
        assert mapping.overwrite_existing is True


class TestFromEnvOrFile:
    """Tests for Config.from_env_or_file."""

    def test_uses_taskprop_config(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, 'excluded_folders = ["Archive"]')
        monkeypatch.setenv("TASKPROP_CONFIG", str(path))
        assert Config.from_env_or_file().excluded_folders == ["Archive"]

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TASKPROP_CONFIG", str(tmp_path / "missing.toml"))
        path = write_config(tmp_path, "cooldown = 1")
        assert Config.from_env_or_file(path).cooldown == 1.0

    def test_env_only(self, monkeypatch):
        monkeypatch.setenv("TASKPROP_VAULT", "/srv/vault")
        assert Config.from_env_or_file().vault_path == Path("/srv/vault")


class TestRules:
    """Tests for Config.rules."""

    def test_snapshot_is_independent(self, tmp_path):
        config = Config.from_file(write_config(tmp_path, FULL_CONFIG))
        rules = config.rules()
        config.direct_mappings.clear()
        assert len(rules.direct_mappings) == 1
