"""Command implementations for CLI."""

from typing import AbstractSet

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.tree import Tree

from addondeploy.catalog.client import CatalogClient
from addondeploy.cli.config import ConfigManager
from addondeploy.deployment.orchestrator import DeploymentOrchestrator
from addondeploy.models.addon import AddonConfig, InstallKind
from addondeploy.resolution.version import VersionLocator


console = Console()


def create_orchestrator(client: CatalogClient, manager: ConfigManager) -> DeploymentOrchestrator:
    """Orchestrator backed by the catalog client and the configured conflict policy."""
    config = manager.config or manager.load()
    return DeploymentOrchestrator(
        client,
        client,
        locator=VersionLocator(client),
        conflict_policy=config.required_conflict_policy,
    )


def resolve_version(
    client: CatalogClient,
    manager: ConfigManager,
    catalog_id: str,
    offering_id: str,
    constraint: str,
    flavor: str,
    install_kind: InstallKind = InstallKind.TERRAFORM,
):
    """Resolve a version constraint and print the match."""
    locator = VersionLocator(client)
    version, version_locator = locator.resolve(catalog_id, offering_id, constraint, flavor, install_kind)

    table = Table(title="Resolved Version")
    table.add_column("Constraint", style="dim")
    table.add_column("Flavor")
    table.add_column("Version", style="green")
    table.add_column("Version Locator", style="cyan")
    table.add_row(constraint, flavor, version, version_locator)
    console.print(table)


def _node_label(node: AddonConfig) -> str:
    if node.is_enabled():
        marker = "[green]●[/green]"
    else:
        marker = "[red]○[/red]"
    label = f"{marker} [cyan]{node.offering_name}[/cyan]"
    if node.offering_flavor:
        label += f" ({node.offering_flavor})"
    if node.resolved_version:
        label += f" [magenta]{node.resolved_version}[/magenta]"
    if node.is_required:
        label += " [yellow]required[/yellow]"
        if node.required_by:
            label += f" [dim]by {', '.join(node.required_by)}[/dim]"
    return label


def render_tree(root: AddonConfig) -> Tree:
    """Build a rich tree of an addon and its dependencies."""
    tree = Tree(_node_label(root))
    stack = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for dependency in node.dependencies:
            stack.append((dependency, branch.add(_node_label(dependency))))
    return tree


def show_tree(
    client: CatalogClient,
    manager: ConfigManager,
    addon_file: str = "addon.yaml",
    disabled_offerings: AbstractSet[str] = frozenset(),
):
    """Resolve the dependency tree of an addon and print it."""
    addon = manager.load_addon(addon_file)
    orchestrator = create_orchestrator(client, manager)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Resolving dependencies of {addon.offering_name}...", total=None)
        orchestrator.resolve(addon, disabled_offerings)
        progress.update(task, completed=True)

    console.print(render_tree(addon))


def deploy_addon(
    client: CatalogClient,
    manager: ConfigManager,
    project_id: str,
    addon_file: str = "addon.yaml",
    dry_run: bool = False,
    disabled_offerings: AbstractSet[str] = frozenset(),
):
    """Deploy an addon with its dependencies, or print the request on a dry run."""
    addon = manager.load_addon(addon_file)
    orchestrator = create_orchestrator(client, manager)

    if dry_run:
        orchestrator.resolve(addon, disabled_offerings)
        entries = orchestrator.build_deployment_request(addon)

        table = Table(title=f"Deployment Request for {project_id}")
        table.add_column("Name", style="cyan")
        table.add_column("Version Locator", style="dim")
        table.add_column("Existing Config")
        for entry in entries:
            table.add_row(entry.name, entry.version_locator, entry.config_id or "")
        console.print(table)
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Deploying {addon.offering_name} to {project_id}...", total=None)
        details = orchestrator.deploy(addon, project_id, disabled_offerings)
        progress.update(task, completed=True)

    if details is None:
        console.print("[yellow]![/yellow] Deployment returned no configs")
        return

    table = Table(title="Deployed Configs")
    table.add_column("Name", style="cyan")
    table.add_column("Config ID", style="green")
    table.add_column("Container Config ID")
    for node in addon.walk():
        if node.config_id or node.container_config_id:
            table.add_row(node.config_name, node.config_id, node.container_config_id)
    console.print(table)

    console.print(f"[green]✓[/green] Deployed {len(details.configs)} configs to project {details.project_id or project_id}")
