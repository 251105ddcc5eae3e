"""Assign document roles from paths and load documents from disk."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PurePath

from plugin_registry.constants import (
    AGENTS_DIRNAME,
    COMMANDS_DIRNAME,
    DESCRIPTION_KEY,
    MARKDOWN_SUFFIX,
    NAME_KEY,
    REFERENCE_DIRNAMES,
    SKILL_FILENAME,
    SKILLS_DIRNAME,
)
from plugin_registry.documents.models import Document, DocumentRole
from plugin_registry.errors import (
    MalformedFrontMatterError,
    MissingRequiredFieldError,
    UnreadableDocumentError,
)
from plugin_registry.frontmatter.models import FrontMatter, ScalarValue
from plugin_registry.frontmatter.parser import (
    parse_front_matter,
    parse_front_matter_lenient,
)

_ROLE_DIRS: dict[str, DocumentRole] = {
    AGENTS_DIRNAME: DocumentRole.AGENT,
    SKILLS_DIRNAME: DocumentRole.SKILL,
    COMMANDS_DIRNAME: DocumentRole.COMMAND,
}

REQUIRED_FIELDS: dict[DocumentRole, tuple[str, ...]] = {
    DocumentRole.AGENT: (NAME_KEY, DESCRIPTION_KEY),
    DocumentRole.SKILL: (NAME_KEY, DESCRIPTION_KEY),
    DocumentRole.COMMAND: (DESCRIPTION_KEY,),
    DocumentRole.SUPPLEMENTARY: (),
}


def classify_path(relative_path: PurePath) -> DocumentRole:
    path = PurePath(relative_path)
    if path.suffix != MARKDOWN_SUFFIX:
        return DocumentRole.SUPPLEMENTARY

    directories = path.parts[:-1]
    if any(part in REFERENCE_DIRNAMES for part in directories):
        return DocumentRole.SUPPLEMENTARY

    role = next(
        (_ROLE_DIRS[part] for part in directories if part in _ROLE_DIRS), None
    )
    if role is None:
        return DocumentRole.SUPPLEMENTARY
    if role is DocumentRole.SKILL and path.name != SKILL_FILENAME:
        return DocumentRole.SUPPLEMENTARY
    return role


def validate_front_matter(
    role: DocumentRole, front_matter: FrontMatter, path: Path | None = None
) -> None:
    for field in REQUIRED_FIELDS[role]:
        value = front_matter.get(field)
        if not isinstance(value, ScalarValue) or not value.text.strip():
            raise MissingRequiredFieldError(path, role.value, field)


def load_document(
    path: Path, root: Path, list_keys: Iterable[str] = ()
) -> Document:
    """Read, classify and validate one Markdown file under ``root``.

    The first path segment below ``root`` names the toolkit; the role is
    decided from the rest of the path.
    """
    relative = path.relative_to(root)
    toolkit = relative.parts[0] if len(relative.parts) > 1 else ""
    role = classify_path(PurePath(*relative.parts[1:]) if toolkit else relative)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableDocumentError(path, str(exc)) from exc

    try:
        if role.is_primary:
            front_matter, body = parse_front_matter(text, list_keys)
        else:
            front_matter, body = parse_front_matter_lenient(text, list_keys)
    except MalformedFrontMatterError as exc:
        raise exc.with_path(path) from exc

    validate_front_matter(role, front_matter, path)
    return Document(
        path=path,
        relative_path=relative,
        toolkit=toolkit,
        role=role,
        front_matter=front_matter,
        body=body,
    )
