"""Document data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from plugin_registry.constants import (
    ALLOWED_TOOLS_KEY,
    ARGUMENT_HINT_KEY,
    DESCRIPTION_KEY,
    MODEL_KEY,
    NAME_KEY,
    TOOLS_KEY,
)
from plugin_registry.frontmatter.models import FrontMatter


class DocumentRole(str, Enum):
    AGENT = "agent"
    SKILL = "skill"
    COMMAND = "command"
    SUPPLEMENTARY = "supplementary"

    @property
    def is_primary(self) -> bool:
        return self is not DocumentRole.SUPPLEMENTARY

    @property
    def plural(self) -> str:
        if self is DocumentRole.SUPPLEMENTARY:
            return "supplementary"
        return f"{self.value}s"


PRIMARY_ROLES: tuple[DocumentRole, ...] = (
    DocumentRole.AGENT,
    DocumentRole.SKILL,
    DocumentRole.COMMAND,
)


@dataclass(frozen=True)
class Document:
    path: Path
    relative_path: Path
    toolkit: str
    role: DocumentRole
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    body: str = ""

    @property
    def name(self) -> str:
        # commands and supplementary files are identified by filename
        if self.role in (DocumentRole.AGENT, DocumentRole.SKILL):
            return self.front_matter.text(NAME_KEY) or ""
        return self.path.stem

    @property
    def description(self) -> str:
        return self.front_matter.text(DESCRIPTION_KEY) or ""

    @property
    def tools(self) -> tuple[str, ...]:
        return self.front_matter.items_of(TOOLS_KEY)

    @property
    def allowed_tools(self) -> tuple[str, ...]:
        return self.front_matter.items_of(ALLOWED_TOOLS_KEY)

    @property
    def model(self) -> str:
        return self.front_matter.text(MODEL_KEY) or ""

    @property
    def argument_hint(self) -> str:
        return self.front_matter.text(ARGUMENT_HINT_KEY) or ""
