"""Dump a built registry as JSON or YAML."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import yaml

from plugin_registry.documents.models import Document, DocumentRole
from plugin_registry.registry.index import ToolkitRegistry


class ExportFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


def document_to_dict(document: Document, relative: bool = True) -> dict[str, Any]:
    path = document.relative_path if relative else document.path
    return {
        "name": document.name,
        "role": document.role.value,
        "path": str(path),
        "front_matter": document.front_matter.as_dict(),
    }


def registry_to_dict(registry: ToolkitRegistry) -> dict[str, Any]:
    toolkits: dict[str, Any] = {}
    for toolkit in registry.list_toolkits():
        toolkits[toolkit] = {
            role.plural: [
                document_to_dict(doc)
                for doc in registry.list_documents(toolkit, role)
            ]
            for role in DocumentRole
        }
    return {
        "root": str(registry.root),
        "toolkits": toolkits,
        "errors": [issue.as_dict() for issue in registry.errors],
        "warnings": [issue.as_dict() for issue in registry.warnings],
    }


def dump_registry(registry: ToolkitRegistry, fmt: ExportFormat = ExportFormat.JSON) -> str:
    payload = registry_to_dict(registry)
    if ExportFormat(fmt) == ExportFormat.YAML:
        return yaml.safe_dump(payload, default_flow_style=False, sort_keys=False)
    return json.dumps(payload, indent=2, sort_keys=False) + "\n"
