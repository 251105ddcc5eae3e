from enum import Enum

from plugin_registry.documents.models import DocumentRole
from plugin_registry.registry.models import IssueSeverity


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


ROLE_STYLE = {
    DocumentRole.AGENT: UIStyle.CYAN.value,
    DocumentRole.SKILL: UIStyle.GREEN.value,
    DocumentRole.COMMAND: UIStyle.MAGENTA.value,
    DocumentRole.SUPPLEMENTARY: UIStyle.DIM.value,
}

SEVERITY_STYLE = {
    IssueSeverity.ERROR: UIStyle.RED.value,
    IssueSeverity.WARNING: UIStyle.YELLOW.value,
}
