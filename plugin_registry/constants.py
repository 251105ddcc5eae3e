from typing import Final


AGENTS_DIRNAME: Final[str] = "agents"
SKILLS_DIRNAME: Final[str] = "skills"
COMMANDS_DIRNAME: Final[str] = "commands"
REFERENCE_DIRNAMES: Final[tuple[str, ...]] = ("reference", "references")

SKILL_FILENAME: Final[str] = "SKILL.md"
MARKDOWN_SUFFIX: Final[str] = ".md"

FRONT_MATTER_DELIMITER: Final[str] = "---"

NAME_KEY: Final[str] = "name"
DESCRIPTION_KEY: Final[str] = "description"
TOOLS_KEY: Final[str] = "tools"
ALLOWED_TOOLS_KEY: Final[str] = "allowed-tools"
MODEL_KEY: Final[str] = "model"
ARGUMENT_HINT_KEY: Final[str] = "argument-hint"

RECOGNIZED_KEYS: Final[tuple[str, ...]] = (
    NAME_KEY,
    DESCRIPTION_KEY,
    TOOLS_KEY,
    ALLOWED_TOOLS_KEY,
    MODEL_KEY,
    ARGUMENT_HINT_KEY,
)
LIST_KEYS: Final[tuple[str, ...]] = (TOOLS_KEY, ALLOWED_TOOLS_KEY)

DEFAULT_ROOT: Final[str] = "plugins"
DEFAULT_IGNORED_DIRS: Final[tuple[str, ...]] = (
    "node_modules",
    ".git",
    "__pycache__",
    ".venv",
)

CONFIG_DIRNAME: Final[str] = "plugin-registry"
CONFIG_FILENAME: Final[str] = "config.json"
