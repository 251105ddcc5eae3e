"""Toolkit -> documents index built from a plugin tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, KeysView, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from plugin_registry.config import RegistryConfig
from plugin_registry.documents.classifier import load_document
from plugin_registry.documents.models import PRIMARY_ROLES, Document, DocumentRole
from plugin_registry.errors import (
    DocumentError,
    DocumentNotFoundError,
    DuplicateNameError,
    RegistryRootError,
    ToolkitNotFoundError,
    UnreadableDirectoryError,
)
from plugin_registry.registry.models import (
    BuildIssue,
    DuplicatePolicy,
    IssueSeverity,
    LoadResult,
)
from plugin_registry.walker import MarkdownTree, toolkit_dirs


logger = logging.getLogger(__name__)


@dataclass
class _ToolkitEntry:
    name: str
    documents: dict[DocumentRole, dict[str, Document]] = field(
        default_factory=lambda: {role: {} for role in DocumentRole}
    )


class ToolkitRegistry:
    """Read-only index of the agents, skills and commands of each toolkit.

    Build one with ``ToolkitRegistry.build(root)``. Files that fail to load
    are kept in ``errors`` and do not stop the rest of the tree from loading.
    """

    def __init__(
        self,
        root: Path,
        toolkits: Mapping[str, Mapping[DocumentRole, Mapping[str, Document]]],
        issues: Iterable[BuildIssue] = (),
    ) -> None:
        self._root = root
        self._toolkits = MappingProxyType(
            {
                name: MappingProxyType(
                    {role: MappingProxyType(dict(docs)) for role, docs in roles.items()}
                )
                for name, roles in toolkits.items()
            }
        )
        self._issues = tuple(issues)

    @classmethod
    def build(
        cls, root: Path, config: Optional[RegistryConfig] = None
    ) -> "ToolkitRegistry":
        config = config or RegistryConfig()
        root = _check_root(root)
        builder = _RegistryBuilder(root=root, config=config)
        return builder.build()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def issues(self) -> tuple[BuildIssue, ...]:
        return self._issues

    @property
    def errors(self) -> tuple[BuildIssue, ...]:
        return tuple(i for i in self._issues if i.severity == IssueSeverity.ERROR)

    @property
    def warnings(self) -> tuple[BuildIssue, ...]:
        return tuple(i for i in self._issues if i.severity == IssueSeverity.WARNING)

    def list_toolkits(self) -> KeysView[str]:
        return self._toolkits.keys()

    def has_toolkit(self, toolkit: str) -> bool:
        return toolkit in self._toolkits

    def _toolkit(self, toolkit: str) -> Mapping[DocumentRole, Mapping[str, Document]]:
        try:
            return self._toolkits[toolkit]
        except KeyError:
            raise ToolkitNotFoundError(toolkit) from None

    def list_documents(self, toolkit: str, role: DocumentRole) -> list[Document]:
        return list(self._toolkit(toolkit)[DocumentRole(role)].values())

    def lookup(self, toolkit: str, role: DocumentRole, name: str) -> Document:
        role = DocumentRole(role)
        entries = self._toolkit(toolkit)
        if not role.is_primary:
            raise DocumentNotFoundError(toolkit, role.value, name)
        try:
            return entries[role][name]
        except KeyError:
            raise DocumentNotFoundError(toolkit, role.value, name) from None

    def documents(self) -> Iterator[Document]:
        for roles in self._toolkits.values():
            for role in PRIMARY_ROLES:
                yield from roles[role].values()

    def counts(self, toolkit: str) -> dict[DocumentRole, int]:
        return {role: len(docs) for role, docs in self._toolkit(toolkit).items()}

    def __len__(self) -> int:
        return sum(1 for _ in self.documents())


def _check_root(root: Path) -> Path:
    if not root.exists():
        raise RegistryRootError(root, "does not exist")
    if not root.is_dir():
        raise RegistryRootError(root, "not a directory")
    try:
        os.listdir(root)
    except OSError as exc:
        raise RegistryRootError(root, exc.strerror or str(exc)) from exc
    return root.resolve()


class _RegistryBuilder:
    def __init__(self, root: Path, config: RegistryConfig) -> None:
        self._root = root
        self._config = config
        self._walk_errors: list[BuildIssue] = []

    def _record_walk_error(self, error: OSError) -> None:
        path = Path(error.filename) if error.filename else self._root
        logger.warning("Cannot list directory %s: %s", path, error.strerror)
        self._walk_errors.append(
            BuildIssue(
                path=path,
                error=UnreadableDirectoryError(path, error.strerror or str(error)),
            )
        )

    def _load(self, path: Path) -> LoadResult:
        try:
            document = load_document(path, self._root, self._config.list_keys)
        except DocumentError as exc:
            logger.warning("Skipping %s: %s", path, exc.message)
            return LoadResult(path=path, error=exc)
        return LoadResult(path=path, document=document)

    def _collect(self) -> list[LoadResult]:
        tree = MarkdownTree(
            self._root,
            ignored_dirs=self._config.ignored_dirs,
            on_error=self._record_walk_error,
        )
        results: list[LoadResult] = []
        for path in tree:
            if path.parent == self._root:
                logger.debug("Ignoring %s outside any toolkit", path)
                continue
            results.append(self._load(path))
        return results

    def _merge(
        self, entry: _ToolkitEntry, document: Document, issues: list[BuildIssue]
    ) -> None:
        role = document.role
        key = str(document.relative_path) if not role.is_primary else document.name
        bucket = entry.documents[role]
        previous = bucket.get(key)
        if previous is None:
            bucket[key] = document
            return

        duplicate = DuplicateNameError(
            path=document.path,
            toolkit=entry.name,
            role=role.value,
            name=key,
            previous=previous.path,
        )
        if self._config.duplicate_policy == DuplicatePolicy.KEEP_LAST:
            logger.warning("%s; keeping %s", duplicate, document.path)
            bucket[key] = document
            issues.append(
                BuildIssue(path=document.path, error=duplicate, severity=IssueSeverity.WARNING)
            )
        else:
            logger.warning("%s; ignoring %s", duplicate, document.path)
            issues.append(BuildIssue(path=document.path, error=duplicate))

    def build(self) -> ToolkitRegistry:
        results = self._collect()

        entries: dict[str, _ToolkitEntry] = {
            path.name: _ToolkitEntry(name=path.name)
            for path in toolkit_dirs(self._root, self._config.ignored_dirs)
        }
        issues: list[BuildIssue] = list(self._walk_errors)
        for result in results:
            if result.error is not None:
                issues.append(BuildIssue(path=result.path, error=result.error))
                continue
            document = result.document
            if document is None:
                continue
            entry = entries.setdefault(document.toolkit, _ToolkitEntry(name=document.toolkit))
            self._merge(entry, document, issues)

        registry = ToolkitRegistry(
            root=self._root,
            toolkits={name: entry.documents for name, entry in entries.items()},
            issues=issues,
        )
        logger.info(
            "Indexed %d documents in %d toolkits from %s (%d errors, %d warnings)",
            len(registry),
            len(entries),
            self._root,
            len(registry.errors),
            len(registry.warnings),
        )
        return registry
