"""Deployment of an addon and its dependencies as a single project request."""

import logging
from typing import AbstractSet, Callable, Dict, List, Optional, Set

from addondeploy.catalog.base import ComponentReferenceGetter, DeploymentSubmitter
from addondeploy.models.addon import AddonConfig
from addondeploy.models.config import RequiredConflictPolicy
from addondeploy.models.deployment import CONTAINER_SUFFIX, DeployedAddonsDetails, DeploymentEntry
from addondeploy.resolution.flatten import flatten_dependencies
from addondeploy.resolution.graph import DependencyGraphBuilder
from addondeploy.resolution.version import VersionLocator
from addondeploy.utils.naming import dependency_config_name, random_suffix


logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Resolves an addon tree, deploys it to a project and records the created config IDs."""

    def __init__(
        self,
        reference_getter: ComponentReferenceGetter,
        submitter: DeploymentSubmitter,
        locator: Optional[VersionLocator] = None,
        conflict_policy: RequiredConflictPolicy = RequiredConflictPolicy.ERROR,
        name_suffix: Callable[[], str] = random_suffix,
    ):
        """Initialize deployment orchestrator."""
        self.builder = DependencyGraphBuilder(reference_getter, locator, conflict_policy)
        self.submitter = submitter
        self.name_suffix = name_suffix

    def resolve(
        self,
        root: AddonConfig,
        disabled_offerings: AbstractSet[str] = frozenset(),
    ) -> Set[str]:
        """Expand the dependency tree of ``root`` in place."""
        return self.builder.expand(root, set(), disabled_offerings)

    def build_deployment_request(self, root: AddonConfig) -> List[DeploymentEntry]:
        """Build the flat request for an already resolved tree.

        The root comes first, followed by every enabled unique dependency.
        Config names are assigned to the nodes that do not have one yet.
        """
        if not root.config_name:
            root.config_name = root.default_config_name()
        entries = [DeploymentEntry(version_locator=root.version_locator, name=root.config_name)]

        for dependency in flatten_dependencies(root):
            if not dependency.is_enabled() or dependency.version_locator == root.version_locator:
                continue
            if not dependency.config_name:
                dependency.config_name = dependency_config_name(dependency.offering_name, self.name_suffix())
            entries.append(
                DeploymentEntry(
                    version_locator=dependency.version_locator,
                    name=dependency.config_name,
                    config_id=dependency.existing_config_id or None,
                )
            )
        return entries

    def deploy(
        self,
        root: AddonConfig,
        project_id: str,
        disabled_offerings: AbstractSet[str] = frozenset(),
    ) -> Optional[DeployedAddonsDetails]:
        """Deploy ``root`` and its enabled dependencies to ``project_id``.

        Returns None when the deployment reports no configs. Otherwise the
        created config and container IDs are written back onto the tree.
        """
        self.resolve(root, disabled_offerings)
        entries = self.build_deployment_request(root)
        logger.info(
            f"Deploying {root.config_name} with {len(entries) - 1} dependencies to project {project_id}"
        )

        details = self.submitter.submit_deployment(project_id, entries)
        if not details.configs:
            logger.warning(f"Deployment to project {project_id} returned no configs")
            return None

        correlate_deployment(root, details)
        return details


def correlate_deployment(root: AddonConfig, details: DeployedAddonsDetails):
    """Copy config IDs from a deployment response onto matching tree nodes by name.

    ``"<name> Container"`` entries set the container config of node ``<name>``.
    Entries and nodes without a counterpart are left alone.
    """
    configs: Dict[str, str] = {}
    containers: Dict[str, str] = {}
    for config in details.configs:
        if config.is_container:
            containers[config.base_name] = config.config_id
        else:
            configs[config.name] = config.config_id

    for node in root.walk():
        if not node.config_name:
            continue
        if node.config_name in configs:
            node.config_id = configs[node.config_name]
        if node.config_name in containers:
            node.container_config_id = containers[node.config_name]
            node.container_config_name = node.config_name + CONTAINER_SUFFIX
