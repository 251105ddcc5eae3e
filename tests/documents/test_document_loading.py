"""Tests for loading documents from disk."""

from pathlib import Path

import pytest

from plugin_registry.documents.classifier import load_document
from plugin_registry.documents.models import DocumentRole
from plugin_registry.errors import (
    MalformedFrontMatterError,
    MissingRequiredFieldError,
    UnreadableDocumentError,
)


def test_load_agent(plugins_root: Path) -> None:
    path = plugins_root / "ansible-toolkit" / "agents" / "playbook-architect.md"
    document = load_document(path, plugins_root)
    assert document.toolkit == "ansible-toolkit"
    assert document.role is DocumentRole.AGENT
    assert document.name == "playbook-architect"
    assert document.tools == ("Read", "Write", "Edit")
    assert document.model == "sonnet"
    assert document.relative_path == Path("ansible-toolkit/agents/playbook-architect.md")
    assert "You plan Ansible projects." in document.body


def test_command_is_named_by_filename(plugins_root: Path, write_doc) -> None:
    path = write_doc(
        plugins_root / "ansible-toolkit" / "commands" / "lint.md",
        {"name": "ignored", "description": "Run ansible-lint"},
    )
    document = load_document(path, plugins_root)
    assert document.role is DocumentRole.COMMAND
    assert document.name == "lint"


def test_command_argument_hint(plugins_root: Path) -> None:
    path = plugins_root / "ansible-toolkit" / "commands" / "smart-commit.md"
    document = load_document(path, plugins_root)
    assert document.argument_hint == "[message]"


def test_reference_file_without_front_matter(plugins_root: Path) -> None:
    path = (
        plugins_root
        / "go-toolkit"
        / "skills"
        / "goroutine-patterns"
        / "reference"
        / "channels.md"
    )
    document = load_document(path, plugins_root)
    assert document.role is DocumentRole.SUPPLEMENTARY
    assert len(document.front_matter) == 0
    assert document.body.startswith("# Channels")


def test_malformed_error_carries_path(tmp_path: Path, write_doc) -> None:
    path = write_doc(
        tmp_path / "kit" / "agents" / "broken.md",
        raw="---\nname: broken\ndescription: never closed\n",
    )
    with pytest.raises(MalformedFrontMatterError) as exc_info:
        load_document(path, tmp_path)
    assert exc_info.value.path == path


def test_missing_field_carries_path(tmp_path: Path, write_doc) -> None:
    path = write_doc(tmp_path / "kit" / "skills" / "s" / "SKILL.md", {"name": "s"})
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        load_document(path, tmp_path)
    assert exc_info.value.path == path


def test_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "kit" / "agents" / "binary.md"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(UnreadableDocumentError):
        load_document(path, tmp_path)
