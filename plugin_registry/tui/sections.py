from typing import Optional

from rich.markup import escape
from rich.panel import Panel

from plugin_registry.tui.enums import UIStyle


class UISection:
    """Titled panels; titles are taken literally, never as rich markup."""

    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(
            body,
            title=escape(title),
            subtitle=escape(subtitle) if subtitle else None,
            border_style=style,
            padding=(0, 1),
        )

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return Panel(body, title=escape(title), border_style=style, padding=(0, 1))
