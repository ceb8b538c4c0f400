"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.console import Console

from addondeploy.catalog.auth import IamAuthenticator
from addondeploy.catalog.client import CatalogClient
from addondeploy.cli.commands import deploy_addon, resolve_version, show_tree
from addondeploy.cli.config import ConfigManager
from addondeploy.exceptions import AddonDeployError
from addondeploy.models.addon import InstallKind
from addondeploy.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="addondeploy",
    help="Addon dependency resolution and project deployment",
    add_completion=False,
)

# Console for rich output
console = Console()


def _create_client(manager: ConfigManager) -> CatalogClient:
    config = manager.config or manager.load()
    authenticator = IamAuthenticator(
        manager.api_key(),
        iam_url=config.catalog.iam_url,
        timeout=config.catalog.timeout,
    )
    return CatalogClient(authenticator, settings=config.catalog, retry=config.retry)


def _run_cli_command(handler: Callable[..., Any], config_dir: Path, **kwargs: Any):
    """Helper to run a CLI command with a catalog client and error handling."""
    try:
        manager = ConfigManager(config_dir)
        config = manager.load()
        setup_logging(config.log_level)
        with _create_client(manager) as client:
            handler(client, manager, **kwargs)
    except AddonDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command("resolve")
def resolve_command(
    catalog_id: str = typer.Argument(..., help="Catalog ID"),
    offering_id: str = typer.Argument(..., help="Offering ID"),
    constraint: str = typer.Argument(..., help="Version constraint, e.g. ^v8.18.0"),
    flavor: str = typer.Option(..., "--flavor", "-f", help="Flavor name"),
    install_kind: InstallKind = typer.Option(
        InstallKind.TERRAFORM, "--install-kind", help="Install kind of the versions to match"
    ),
    config_dir: Path = typer.Option(
        Path("."), "--config-dir", "-c", help="Directory holding config.yaml"
    ),
):
    """Resolve a version constraint to a version locator."""
    _run_cli_command(
        resolve_version,
        config_dir=config_dir,
        catalog_id=catalog_id,
        offering_id=offering_id,
        constraint=constraint,
        flavor=flavor,
        install_kind=install_kind,
    )


@app.command("tree")
def tree_command(
    addon_file: str = typer.Option("addon.yaml", "--addon", "-a", help="Addon definition file"),
    disable: Optional[List[str]] = typer.Option(
        None, "--disable", "-d", help="Create this optional dependency disabled (repeatable)"
    ),
    config_dir: Path = typer.Option(
        Path("."), "--config-dir", "-c", help="Directory holding config.yaml and the addon file"
    ),
):
    """Show the resolved dependency tree of an addon."""
    _run_cli_command(
        show_tree,
        config_dir=config_dir,
        addon_file=addon_file,
        disabled_offerings=frozenset(disable or []),
    )


@app.command("deploy")
def deploy_command(
    project_id: str = typer.Argument(..., help="Target project ID"),
    addon_file: str = typer.Option("addon.yaml", "--addon", "-a", help="Addon definition file"),
    disable: Optional[List[str]] = typer.Option(
        None, "--disable", "-d", help="Create this optional dependency disabled (repeatable)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the deployment request without submitting it"
    ),
    config_dir: Path = typer.Option(
        Path("."), "--config-dir", "-c", help="Directory holding config.yaml and the addon file"
    ),
):
    """Deploy an addon and its enabled dependencies to a project."""
    _run_cli_command(
        deploy_addon,
        config_dir=config_dir,
        project_id=project_id,
        addon_file=addon_file,
        dry_run=dry_run,
        disabled_offerings=frozenset(disable or []),
    )


def main():
    """Main entry point for CLI."""
    app()
