from plugin_registry.tui.renderers import RegistryConsoleUI

__all__ = ["RegistryConsoleUI"]
