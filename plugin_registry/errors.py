from pathlib import Path
from typing import Optional


class RegistryError(Exception):
    """Base user-facing registry error."""


class RegistryRootError(RegistryError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot scan plugin root ({detail}): {path}")


class RegistryFileError(RegistryError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingConfigFileError(RegistryFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing config file")


class InvalidJsonFormatError(RegistryFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(RegistryFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class DocumentError(RegistryError):
    """A single document could not be indexed."""

    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}" if path is not None else message)


class MalformedFrontMatterError(DocumentError):
    def __init__(
        self, detail: str, path: Optional[Path] = None, line: Optional[int] = None
    ) -> None:
        self.detail = detail
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(path=path, message=f"Malformed front matter ({detail}{where})")

    def with_path(self, path: Path) -> "MalformedFrontMatterError":
        return MalformedFrontMatterError(self.detail, path=path, line=self.line)


class MissingRequiredFieldError(DocumentError):
    def __init__(self, path: Optional[Path], role: str, field: str) -> None:
        self.role = role
        self.field = field
        super().__init__(path=path, message=f"Missing required {role} field '{field}'")


class DuplicateNameError(DocumentError):
    def __init__(
        self, path: Path, toolkit: str, role: str, name: str, previous: Path
    ) -> None:
        self.toolkit = toolkit
        self.role = role
        self.name = name
        self.previous = previous
        super().__init__(
            path=path,
            message=f"Duplicate {role} name '{name}' in {toolkit} (first seen in {previous})",
        )


class UnreadableDocumentError(DocumentError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read document ({detail})")


class UnreadableDirectoryError(DocumentError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot list directory ({detail})")


class NotFoundError(RegistryError):
    """Lookup miss."""


class ToolkitNotFoundError(NotFoundError):
    def __init__(self, toolkit: str) -> None:
        self.toolkit = toolkit
        super().__init__(f"Toolkit not found: {toolkit}")


class DocumentNotFoundError(NotFoundError):
    def __init__(self, toolkit: str, role: str, name: str) -> None:
        self.toolkit = toolkit
        self.role = role
        self.name = name
        super().__init__(f"No {role} named '{name}' in toolkit {toolkit}")
