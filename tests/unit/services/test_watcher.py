"""Tests for VaultWatcher event routing."""

import pytest

from taskprop.core.types import OperationMapping, RuleSet
from taskprop.services.processor import TaskPropertyProcessor
from taskprop.services.watcher import VaultWatcher
from taskprop.store.frontmatter import FrontmatterWriter, parse_frontmatter


@pytest.fixture
def watcher(vault_store):
    rules = RuleSet(operation_mappings=(OperationMapping("status", "count_open", "open"),))
    processor = TaskPropertyProcessor(
        vault_store, FrontmatterWriter(vault_store), rules, is_included=vault_store.includes
    )
    # Long debounce so scheduled work never fires during the test
    w = VaultWatcher(vault_store, processor, debounce_delay=60, cooldown=60)
    yield w
    w.stop()


class TestOnPathChanged:
    """Tests for on_path_changed."""

    def test_schedules_markdown(self, watcher, vault):
        assert watcher.on_path_changed(vault / "note.md")

    def test_ignores_other_files(self, watcher, vault):
        assert not watcher.on_path_changed(vault / "image.png")
        assert not watcher.on_path_changed(vault / "note.md.tmp")

    def test_ignores_outside_vault(self, watcher, tmp_path):
        assert not watcher.on_path_changed(tmp_path / "elsewhere.md")

    def test_ignores_excluded_folder(self, watcher, vault):
        assert not watcher.on_path_changed(vault / "Templates" / "daily.md")

    def test_ignores_recently_written(self, watcher, vault):
        """Our own write lands in the cooldown and is not reprocessed."""
        (vault / "note.md").write_text("- [ ] one\n", encoding="utf-8")
        watcher.process("note.md")
        assert not watcher.on_path_changed(vault / "note.md")


class TestProcess:
    """Tests for process."""

    def test_updates_document(self, watcher, vault):
        (vault / "note.md").write_text("- [ ] one\n- [x] two\n", encoding="utf-8")
        watcher.process("note.md")
        data = parse_frontmatter((vault / "note.md").read_text(encoding="utf-8")).data
        assert data == {"open": 1}

    def test_failure_is_logged_not_raised(self, watcher):
        """A missing document does not crash the watcher."""
        watcher.process("gone.md")
        assert watcher.guard.is_busy("gone.md")
