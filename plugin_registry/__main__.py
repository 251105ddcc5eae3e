import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from plugin_registry.config import RegistryConfig, load_config
from plugin_registry.documents.models import PRIMARY_ROLES, DocumentRole
from plugin_registry.errors import RegistryError, ToolkitNotFoundError
from plugin_registry.export import ExportFormat, dump_registry
from plugin_registry.registry.index import ToolkitRegistry
from plugin_registry.registry.models import DuplicatePolicy
from plugin_registry.tui import RegistryConsoleUI
from plugin_registry.utils import write_text


ROLE_VALUES = [role.value for role in DocumentRole]


def configure_logging(verbose: bool) -> None:
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _role_argument() -> Callable:
    return click.argument(
        "role", type=click.Choice(ROLE_VALUES, case_sensitive=False)
    )


def _config_from_obj(obj: Dict[str, Any]) -> RegistryConfig:
    try:
        config = load_config(obj.get("config_path"))
    except RegistryError as exc:
        raise click.ClickException(str(exc))
    policy = obj.get("duplicate_policy")
    return config.with_overrides(
        root=obj.get("root"),
        duplicate_policy=DuplicatePolicy(policy) if policy else None,
    )


def _registry_from_obj(obj: Dict[str, Any]) -> ToolkitRegistry:
    config = _config_from_obj(obj)
    try:
        return ToolkitRegistry.build(config.root, config)
    except RegistryError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Plugin tree to scan (default: ./plugins or the config file value).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON config file (default: $XDG_CONFIG_HOME/plugin-registry/config.json).",
)
@click.option(
    "--duplicate-policy",
    type=click.Choice([policy.value for policy in DuplicatePolicy]),
    default=None,
    help="What to do when two documents of one toolkit share a name.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    root: Optional[Path],
    config_path: Optional[Path],
    duplicate_policy: Optional[str],
    verbose: bool,
) -> None:
    """Index agents, skills and commands of plugin toolkits."""
    configure_logging(verbose)
    ctx.obj = {
        "root": root,
        "config_path": config_path,
        "duplicate_policy": duplicate_policy,
    }


@cli.command(help="List toolkits with document counts.")
@click.pass_obj
def toolkits(obj: Dict[str, Any]) -> None:
    ui = RegistryConsoleUI(Console())
    registry = _registry_from_obj(obj)
    ui.render_toolkits(registry)


@cli.command("list", help="List the documents of a toolkit.")
@click.argument("toolkit")
@click.option(
    "--role",
    type=click.Choice(ROLE_VALUES, case_sensitive=False),
    default=None,
    help="Only list documents of this role.",
)
@click.pass_obj
def list_documents(obj: Dict[str, Any], toolkit: str, role: Optional[str]) -> None:
    ui = RegistryConsoleUI(Console())
    registry = _registry_from_obj(obj)
    if not registry.has_toolkit(toolkit):
        raise click.ClickException(str(ToolkitNotFoundError(toolkit)))
    roles = [DocumentRole(role.lower())] if role else list(PRIMARY_ROLES)
    documents = [
        document for item in roles for document in registry.list_documents(toolkit, item)
    ]
    ui.render_documents(toolkit, documents, role=roles[0] if role else None)


@cli.command(help="Show one agent, skill or command.")
@click.argument("toolkit")
@_role_argument()
@click.argument("name")
@click.option("--body", "show_body", is_flag=True, help="Also render the document body.")
@click.pass_obj
def show(
    obj: Dict[str, Any], toolkit: str, role: str, name: str, show_body: bool
) -> None:
    ui = RegistryConsoleUI(Console())
    registry = _registry_from_obj(obj)
    try:
        document = registry.lookup(toolkit, DocumentRole(role.lower()), name)
    except RegistryError as exc:
        raise click.ClickException(str(exc))
    ui.render_document(document, show_body=show_body)


@cli.command(help="Build the registry and report files that failed to load.")
@click.option("--strict", is_flag=True, help="Treat warnings as failures.")
@click.pass_obj
def check(obj: Dict[str, Any], strict: bool) -> None:
    ui = RegistryConsoleUI(Console())
    registry = _registry_from_obj(obj)
    ui.render_check(registry)
    if registry.errors or (strict and registry.warnings):
        raise click.exceptions.Exit(1)


@cli.command(help="Dump the registry as JSON or YAML.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([item.value for item in ExportFormat], case_sensitive=False),
    default=ExportFormat.JSON.value,
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.pass_obj
def export(obj: Dict[str, Any], fmt: str, output: Optional[Path]) -> None:
    registry = _registry_from_obj(obj)
    export_format = ExportFormat(fmt.lower())
    text = dump_registry(registry, export_format)
    if output is None:
        click.echo(text, nl=False)
        return
    write_text(output, text)
    RegistryConsoleUI(Console()).render_exported(str(output), export_format.value)


def main() -> int:
    try:
        # outside standalone mode click returns the exit code of `Exit` instead of raising
        rv = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 2
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
