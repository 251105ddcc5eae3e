import sys
from pathlib import Path
from typing import Any, Optional, Union

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


FrontMatterInput = dict[str, Union[str, list[str]]]


def render_doc(front_matter: Optional[FrontMatterInput], body: str = "Body.\n") -> str:
    if front_matter is None:
        return body
    lines = ["---"]
    for key, value in front_matter.items():
        rendered = ", ".join(value) if isinstance(value, list) else value
        lines.append(f"{key}: {rendered}")
    lines.append("---")
    lines.append("")
    return "\n".join(lines) + body


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_doc():
    def _write(
        path: Path,
        front_matter: Optional[FrontMatterInput] = None,
        body: str = "Body.\n",
        raw: Optional[str] = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = raw if raw is not None else render_doc(front_matter, body)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def plugins_root(tmp_path: Path, write_doc) -> Path:
    root = tmp_path / "plugins"
    ansible = root / "ansible-toolkit"
    write_doc(
        ansible / "agents" / "playbook-architect.md",
        {
            "name": "playbook-architect",
            "description": "Designs playbook structure, roles, and inventories",
            "tools": ["Read", "Write", "Edit"],
            "model": "sonnet",
        },
        body="# Playbook Architect\n\nYou plan Ansible projects.\n",
    )
    write_doc(
        ansible / "skills" / "ansible-lint-fixes" / "SKILL.md",
        {
            "name": "ansible-lint-fixes",
            "description": "Fix common ansible-lint findings",
            "allowed-tools": ["Bash", "Read"],
        },
    )
    write_doc(
        ansible / "commands" / "smart-commit.md",
        {
            "description": "Create a conventional commit",
            "argument-hint": "[message]",
        },
        body="Commit staged changes with $ARGUMENTS.\n",
    )
    go = root / "go-toolkit"
    write_doc(
        go / "agents" / "go-reviewer.md",
        {"name": "go-reviewer", "description": "Reviews Go code"},
    )
    write_doc(
        go / "skills" / "goroutine-patterns" / "SKILL.md",
        {"name": "goroutine-patterns", "description": "Concurrency idioms"},
    )
    write_doc(
        go / "skills" / "goroutine-patterns" / "reference" / "channels.md",
        body="# Channels\n\nBuffered vs unbuffered.\n",
    )
    return root


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
