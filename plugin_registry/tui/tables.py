from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from plugin_registry.documents.models import Document, DocumentRole
from plugin_registry.registry.index import ToolkitRegistry
from plugin_registry.registry.models import BuildIssue
from plugin_registry.tui.enums import ROLE_STYLE, SEVERITY_STYLE, UIStyle
from plugin_registry.utils import compact_home_path


def _styled(text: str, style: str) -> str:
    return f"[{style}]{escape(text)}[/{style}]"


class ToolkitTable:
    @staticmethod
    def overview_table(registry: ToolkitRegistry) -> Table:
        table = Table(
            Column(header="Toolkit", overflow="fold"),
            Column(header="Agents", width=8, justify="right"),
            Column(header="Skills", width=8, justify="right"),
            Column(header="Commands", width=10, justify="right"),
            Column(header="Supplementary", width=14, justify="right"),
            expand=True,
            header_style="bold",
        )
        for toolkit in registry.list_toolkits():
            counts = registry.counts(toolkit)
            table.add_row(
                escape(toolkit),
                str(counts[DocumentRole.AGENT]),
                str(counts[DocumentRole.SKILL]),
                str(counts[DocumentRole.COMMAND]),
                str(counts[DocumentRole.SUPPLEMENTARY]),
            )
        return table


class DocumentTable:
    @staticmethod
    def documents_table(documents: list[Document]) -> Table:
        table = Table(
            Column(header="Name", overflow="fold"),
            Column(header="Role", width=14),
            Column(header="Path", overflow="ellipsis", max_width=48),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for document in documents:
            style = ROLE_STYLE.get(document.role, UIStyle.WHITE.value)
            table.add_row(
                escape(document.name),
                _styled(document.role.value, style),
                escape(str(document.relative_path)),
                escape(document.description),
            )
        return table

    @staticmethod
    def front_matter_table(document: Document) -> Table:
        table = Table(
            Column(header="Key", width=16),
            Column(header="Value", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        unknown = set(document.front_matter.unknown_keys())
        for key, value in document.front_matter.items():
            rendered = escape(value.render())
            if key not in unknown:
                table.add_row(f"[bold]{escape(key)}[/bold]", rendered)
            else:
                table.add_row(_styled(key, UIStyle.DIM.value), rendered)
        return table

    @staticmethod
    def summary_block(document: Document):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Toolkit", escape(document.toolkit))
        table.add_row("Role", _styled(document.role.value, ROLE_STYLE[document.role]))
        table.add_row("Path", escape(compact_home_path(document.path)))
        table.add_row("Body lines", str(len(document.body.splitlines())))
        return table


class IssueTable:
    @staticmethod
    def summary_block(registry: ToolkitRegistry):
        counts = Counter(document.role.value for document in registry.documents())
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Root", escape(compact_home_path(registry.root)))
        table.add_row("Toolkits", str(len(registry.list_toolkits())))
        table.add_row("Documents", "  ".join(chips))
        table.add_row("Errors", str(len(registry.errors)))
        table.add_row("Warnings", str(len(registry.warnings)))
        return table

    @staticmethod
    def issues_table(issues: tuple[BuildIssue, ...], root=None) -> Table:
        table = Table(
            Column(header="Severity", width=9),
            Column(header="Kind", width=26),
            Column(header="Path", overflow="fold", max_width=48),
            Column(header="Message", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for issue in issues:
            path = issue.path
            if root is not None and path.is_relative_to(root):
                path = path.relative_to(root)
            error = issue.error
            message = getattr(error, "message", None) or str(error)
            table.add_row(
                _styled(issue.severity.value, SEVERITY_STYLE[issue.severity]),
                type(error).__name__,
                escape(str(path)),
                escape(message),
            )
        return table
