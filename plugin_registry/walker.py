import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Callable, Optional

from plugin_registry.constants import DEFAULT_IGNORED_DIRS, MARKDOWN_SUFFIX


logger = logging.getLogger(__name__)

WalkErrorHandler = Callable[[OSError], None]


class MarkdownTree:
    """Depth-first, sorted sequence of Markdown files below ``root``.

    Every iteration walks the filesystem again, so the same object can be
    iterated any number of times.
    """

    def __init__(
        self,
        root: Path,
        ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
        on_error: Optional[WalkErrorHandler] = None,
    ) -> None:
        self.root = root
        self.ignored_dirs = frozenset(ignored_dirs)
        self.on_error = on_error

    def _prune(self, current: Path, dir_names: list[str]) -> None:
        kept: list[str] = []
        for name in sorted(dir_names):
            if name.startswith(".") or name in self.ignored_dirs:
                logger.debug("Skipping directory %s", current / name)
                continue
            kept.append(name)
        dir_names[:] = kept

    def _handle_error(self, error: OSError) -> None:
        if self.on_error is not None:
            self.on_error(error)
        else:
            logger.warning("Cannot list directory %s: %s", error.filename, error.strerror)

    def __iter__(self) -> Iterator[Path]:
        for root, dir_names, file_names in os.walk(
            str(self.root), topdown=True, onerror=self._handle_error
        ):
            current = Path(root)
            self._prune(current, dir_names)
            for name in sorted(file_names):
                if name.endswith(MARKDOWN_SUFFIX) and not name.startswith("."):
                    yield current / name


def toolkit_dirs(root: Path, ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS) -> list[Path]:
    ignored = frozenset(ignored_dirs)
    return [
        child
        for child in sorted(root.iterdir())
        if child.is_dir() and not child.name.startswith(".") and child.name not in ignored
    ]
