"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from taskprop.core.types import Condition, DirectMapping, OperationMapping, RuleSet
from taskprop.sources.filesystem import FileSystemDocumentStore

SAMPLE_DOCUMENT = """---
title: Project plan
---
# Plan

- [ ] Draft ⏳ 2025-04-10
- [x] Research ⏳ 2025-03-28 ✅ 2025-03-28
- [-] Old ⏳ 2025-03-01
"""


@pytest.fixture
def sample_document() -> str:
    """Provide a document with one open, one done and one cancelled task."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def open_tasks_conditions() -> tuple[Condition, ...]:
    """Conditions selecting tasks that are neither done nor cancelled."""
    return (
        Condition("status", "not_equals", "x"),
        Condition("status", "not_equals", "-"),
    )


@pytest.fixture
def sample_rules(open_tasks_conditions) -> RuleSet:
    """Provide a rule set with one direct and two operation mappings."""
    return RuleSet(
        direct_mappings=(DirectMapping("description", "first_task"),),
        operation_mappings=(
            OperationMapping(
                "scheduled_date",
                "min",
                "next_scheduled",
                conditions=open_tasks_conditions,
            ),
            OperationMapping("status", "percentage_done", "progress"),
        ),
    )


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Provide an empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def vault_store(vault: Path) -> FileSystemDocumentStore:
    """Provide a filesystem store over the vault, excluding Templates/."""
    return FileSystemDocumentStore(vault, excluded_folders=["Templates"])
