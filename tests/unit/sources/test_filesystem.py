"""Tests for FileSystemDocumentStore."""

import pytest

from taskprop.core.exceptions import DocumentError, DocumentNotFoundError
from taskprop.sources.filesystem import FileSystemDocumentStore


class TestFileSystemDocumentStore:
    """Tests for FileSystemDocumentStore."""

    def test_list_documents(self, vault, vault_store):
        (vault / "b.md").write_text("b", encoding="utf-8")
        (vault / "notes").mkdir()
        (vault / "notes" / "a.md").write_text("a", encoding="utf-8")
        (vault / "Templates").mkdir()
        (vault / "Templates" / "t.md").write_text("t", encoding="utf-8")

        assert sorted(vault_store.list_documents()) == ["b.md", "notes/a.md"]

    def test_list_missing_vault(self, tmp_path):
        store = FileSystemDocumentStore(tmp_path / "missing")
        with pytest.raises(DocumentError):
            store.list_documents()

    def test_read(self, vault, vault_store):
        (vault / "a.md").write_text("- [ ] Task ⏫\n", encoding="utf-8")
        assert vault_store.read("a.md") == "- [ ] Task ⏫\n"

    def test_read_missing(self, vault_store):
        with pytest.raises(DocumentNotFoundError):
            vault_store.read("missing.md")

    def test_write_replaces_content(self, vault, vault_store):
        (vault / "a.md").write_text("old", encoding="utf-8")
        vault_store.write("a.md", "new")
        assert (vault / "a.md").read_text(encoding="utf-8") == "new"
        assert not (vault / "a.md.tmp").exists()

    def test_line_endings_preserved(self, vault, vault_store):
        (vault / "a.md").write_bytes(b"- [ ] one\r\n- [x] two\r\n")
        content = vault_store.read("a.md")
        assert "\r\n" in content
        vault_store.write("a.md", content)
        assert (vault / "a.md").read_bytes() == b"- [ ] one\r\n- [x] two\r\n"

    def test_path_escape_rejected(self, vault_store):
        with pytest.raises(DocumentError):
            vault_store.path_for("../outside.md")

    def test_doc_id_for(self, vault, vault_store, tmp_path):
        assert vault_store.doc_id_for(vault / "sub" / "a.md") == "sub/a.md"
        assert vault_store.doc_id_for(tmp_path / "other.md") is None

    def test_includes(self, vault_store):
        assert vault_store.includes("a.md")
        assert not vault_store.includes("Templates/a.md")
        assert not vault_store.includes("image.png")
