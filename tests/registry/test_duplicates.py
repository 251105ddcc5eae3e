"""Tests for duplicate name handling."""

from pathlib import Path

import pytest

from plugin_registry.config import RegistryConfig
from plugin_registry.documents.models import DocumentRole
from plugin_registry.errors import DuplicateNameError
from plugin_registry.registry.index import ToolkitRegistry
from plugin_registry.registry.models import DuplicatePolicy, IssueSeverity


@pytest.fixture
def duplicate_skills(tmp_path: Path, write_doc) -> Path:
    root = tmp_path / "plugins"
    skills = root / "dbt-toolkit" / "skills"
    write_doc(
        skills / "a-testing" / "SKILL.md",
        {"name": "dbt-testing", "description": "first"},
    )
    write_doc(
        skills / "b-testing" / "SKILL.md",
        {"name": "dbt-testing", "description": "second"},
    )
    return root


def test_duplicate_is_an_error_by_default(duplicate_skills: Path) -> None:
    registry = ToolkitRegistry.build(duplicate_skills)

    document = registry.lookup("dbt-toolkit", DocumentRole.SKILL, "dbt-testing")
    assert document.description == "first"
    assert len(registry.errors) == 1
    error = registry.errors[0].error
    assert isinstance(error, DuplicateNameError)
    assert error.name == "dbt-testing"
    assert error.previous.parent.name == "a-testing"
    assert registry.warnings == ()


def test_keep_last_records_warning(duplicate_skills: Path, caplog) -> None:
    config = RegistryConfig(duplicate_policy=DuplicatePolicy.KEEP_LAST)
    with caplog.at_level("WARNING", logger="plugin_registry.registry.index"):
        registry = ToolkitRegistry.build(duplicate_skills, config)

    document = registry.lookup("dbt-toolkit", DocumentRole.SKILL, "dbt-testing")
    assert document.description == "second"
    assert registry.errors == ()
    assert len(registry.warnings) == 1
    assert registry.warnings[0].severity is IssueSeverity.WARNING
    assert "Duplicate skill name 'dbt-testing'" in caplog.text


def test_same_name_across_roles_is_allowed(tmp_path: Path, write_doc) -> None:
    root = tmp_path / "plugins"
    kit = root / "gcp-toolkit"
    write_doc(kit / "agents" / "cost.md", {"name": "cost", "description": "agent"})
    write_doc(kit / "skills" / "cost" / "SKILL.md", {"name": "cost", "description": "skill"})
    write_doc(kit / "commands" / "cost.md", {"description": "command"})

    registry = ToolkitRegistry.build(root)

    assert registry.issues == ()
    assert registry.lookup("gcp-toolkit", DocumentRole.AGENT, "cost").description == "agent"
    assert registry.lookup("gcp-toolkit", DocumentRole.SKILL, "cost").description == "skill"


def test_same_name_across_toolkits_is_allowed(tmp_path: Path, write_doc) -> None:
    root = tmp_path / "plugins"
    for toolkit in ("azure-toolkit", "gcp-toolkit"):
        write_doc(
            root / toolkit / "agents" / "cost-optimizer.md",
            {"name": "cost-optimizer", "description": toolkit},
        )
    registry = ToolkitRegistry.build(root)
    assert registry.issues == ()
    assert len(registry) == 2


def test_nested_commands_with_same_stem(tmp_path: Path, write_doc) -> None:
    root = tmp_path / "plugins"
    commands = root / "git-toolkit" / "commands"
    write_doc(commands / "a" / "sync.md", {"description": "first"})
    write_doc(commands / "b" / "sync.md", {"description": "second"})

    registry = ToolkitRegistry.build(root)

    assert len(registry.errors) == 1
    assert registry.lookup("git-toolkit", DocumentRole.COMMAND, "sync").description == "first"


def test_keep_last_keeps_discovery_position(tmp_path: Path, write_doc) -> None:
    root = tmp_path / "plugins"
    skills = root / "dbt-toolkit" / "skills"
    write_doc(skills / "a-testing" / "SKILL.md", {"name": "dbt-testing", "description": "first"})
    write_doc(skills / "b-models" / "SKILL.md", {"name": "dbt-models", "description": "models"})
    write_doc(skills / "c-testing" / "SKILL.md", {"name": "dbt-testing", "description": "second"})

    config = RegistryConfig(duplicate_policy=DuplicatePolicy.KEEP_LAST)
    registry = ToolkitRegistry.build(root, config)

    documents = registry.list_documents("dbt-toolkit", DocumentRole.SKILL)
    assert [doc.name for doc in documents] == ["dbt-testing", "dbt-models"]
    assert documents[0].description == "second"
