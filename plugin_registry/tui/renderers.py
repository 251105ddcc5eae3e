from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from plugin_registry.documents.models import Document, DocumentRole
from plugin_registry.registry.index import ToolkitRegistry
from plugin_registry.tui.enums import ROLE_STYLE, UIStyle
from plugin_registry.tui.sections import UISection
from plugin_registry.tui.tables import DocumentTable, IssueTable, ToolkitTable
from plugin_registry.utils import compact_home_paths_in_text


class RegistryConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_toolkits(self, registry: ToolkitRegistry) -> None:
        if not registry.list_toolkits():
            self.console.print(
                UISection.note(
                    "toolkits",
                    f"No toolkits found under {escape(compact_home_paths_in_text(str(registry.root)))}.",
                    style=UIStyle.YELLOW.value,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "toolkits",
                ToolkitTable.overview_table(registry),
                style=UIStyle.BLUE.value,
            )
        )
        if registry.issues:
            self.console.print(
                UISection.note(
                    "issues",
                    f"{len(registry.errors)} errors, {len(registry.warnings)} warnings. "
                    "Run `plugin-registry check` for details.",
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_documents(
        self, toolkit: str, documents: list[Document], role: DocumentRole | None = None
    ) -> None:
        title = f"{toolkit} {role.plural}" if role is not None else toolkit
        if not documents:
            self.console.print(
                UISection.note(title, "No documents.", style=UIStyle.DIM.value)
            )
            return

        style = ROLE_STYLE[role] if role is not None else UIStyle.BLUE.value
        self.console.print(
            UISection.wrap(title, DocumentTable.documents_table(documents), style=style)
        )

    def render_document(self, document: Document, show_body: bool = False) -> None:
        self.console.print(
            UISection.wrap(
                document.name,
                DocumentTable.summary_block(document),
                style=ROLE_STYLE[document.role],
            )
        )
        if document.front_matter:
            self.console.print(
                UISection.wrap(
                    "front matter",
                    DocumentTable.front_matter_table(document),
                    style=UIStyle.CYAN.value,
                )
            )
        if show_body:
            self.console.print(
                UISection.wrap("body", Markdown(document.body), style=UIStyle.DIM.value)
            )

    def render_check(self, registry: ToolkitRegistry) -> None:
        self.console.print(
            UISection.wrap(
                "registry check",
                IssueTable.summary_block(registry),
                subtitle=f"{len(registry)} documents",
                style=UIStyle.RED.value if registry.errors else UIStyle.GREEN.value,
            )
        )
        if not registry.issues:
            self.console.print(
                UISection.note("issues", "No issues found.", style=UIStyle.DIM.value)
            )
            return

        self.console.print(
            UISection.wrap(
                "issues",
                IssueTable.issues_table(registry.issues, root=registry.root),
                style=UIStyle.RED.value if registry.errors else UIStyle.YELLOW.value,
            )
        )

    def render_exported(self, path: str, fmt: str) -> None:
        self.console.print(
            UISection.note(
                "export",
                f"Registry written as {fmt}: {escape(compact_home_paths_in_text(path))}",
                style=UIStyle.GREEN.value,
            )
        )
