"""Dependency graph expansion from catalog component references."""

import logging
from typing import AbstractSet, Dict, List, Optional, Set

from addondeploy.catalog.base import ComponentReferenceGetter
from addondeploy.exceptions import (
    DependencyConflictError,
    ReferenceLookupError,
    ResolutionError,
)
from addondeploy.models.addon import AddonConfig
from addondeploy.models.catalog import OfferingReferenceItem
from addondeploy.models.config import RequiredConflictPolicy
from addondeploy.resolution.version import VersionLocator


logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Expands an addon tree in place from the catalog's declared references.

    Metadata (locator, version, ids, flavor, label) always comes from the
    catalog. Caller decisions are kept: ``enabled`` and ``on_by_default`` are
    only filled in while still unset, and ``inputs`` are never touched. A
    required dependency the caller explicitly disabled is resolved by the
    configured ``RequiredConflictPolicy``.

    Each version locator is expanded at most once per ``visited`` set, which
    makes cycles and diamonds in the catalog terminate. Nodes are never
    removed.
    """

    def __init__(
        self,
        reference_getter: ComponentReferenceGetter,
        locator: Optional[VersionLocator] = None,
        conflict_policy: RequiredConflictPolicy = RequiredConflictPolicy.ERROR,
    ):
        self.reference_getter = reference_getter
        self.locator = locator
        self.conflict_policy = conflict_policy

    def expand(
        self,
        node: AddonConfig,
        visited: Optional[Set[str]] = None,
        disabled_offerings: AbstractSet[str] = frozenset(),
    ) -> Set[str]:
        """Expand ``node`` and everything reachable from it.

        Args:
            node: root of the tree to expand; mutated in place
            visited: locators already expanded; updated in place
            disabled_offerings: offering names that new optional dependencies
                are created disabled for; never modified

        Returns:
            The ``visited`` set.

        Raises:
            ReferenceLookupError: the catalog lookup failed for some locator
            DependencyConflictError: a required dependency was explicitly disabled
                under ``RequiredConflictPolicy.ERROR``
            ResolutionError: a node has neither a locator nor a resolvable constraint
        """
        if visited is None:
            visited = set()
        # Dependencies discovered during this expansion, by locator
        known: Dict[str, AddonConfig] = {}

        stack = [node]
        while stack:
            current = stack.pop()
            children = self._expand_node(current, visited, known, disabled_offerings)
            stack.extend(reversed(children))
        return visited

    def _expand_node(
        self,
        node: AddonConfig,
        visited: Set[str],
        known: Dict[str, AddonConfig],
        disabled_offerings: AbstractSet[str],
    ) -> List[AddonConfig]:
        """Merge one node's references; return the children to expand next."""
        if not node.version_locator:
            self._resolve_locator(node)
        if node.version_locator in visited:
            return []
        visited.add(node.version_locator)

        try:
            references = self.reference_getter.get_component_references(node.version_locator)
        except Exception as e:
            raise ReferenceLookupError(node.version_locator, e) from e

        to_expand: List[AddonConfig] = []
        new_children: List[AddonConfig] = []
        satisfied: Set[str] = set()

        # Required references first; they take precedence over optional ones with the same name
        for item in references.required:
            if not item.matches_default_flavor:
                continue
            satisfied.add(item.name)
            detail = item.offering_reference

            existing = node.find_dependency(item.name)
            if existing is not None:
                self._merge_metadata(existing, item, node)
                if existing.on_by_default is None:
                    existing.on_by_default = detail.on_by_default
                self._mark_required(existing, node)
                known.setdefault(existing.version_locator, existing)
                if existing.is_enabled():
                    to_expand.append(existing)
                continue

            shared = known.get(detail.version_locator)
            if shared is not None:
                self._mark_required(shared, node)
                if shared.is_enabled() and shared.version_locator not in visited:
                    to_expand.append(shared)
                continue
            if detail.version_locator in visited:
                continue

            child = self._new_dependency(item, node)
            child.on_by_default = detail.on_by_default
            self._mark_required(child, node)
            known[child.version_locator] = child
            new_children.append(child)

        for item in references.optional:
            if not item.matches_default_flavor or item.name in satisfied:
                continue
            detail = item.offering_reference

            existing = node.find_dependency(item.name)
            if existing is not None:
                self._merge_metadata(existing, item, node)
                if existing.on_by_default is None:
                    existing.on_by_default = detail.on_by_default
                if existing.enabled is None:
                    existing.enabled = existing.on_by_default
                if existing.is_required is None:
                    existing.is_required = False
                known.setdefault(existing.version_locator, existing)
                if existing.is_enabled():
                    to_expand.append(existing)
                else:
                    logger.debug(f"Not expanding disabled optional dependency {item.name}")
                continue

            # Only optional dependencies the catalog turns on by default are added
            if not detail.on_by_default:
                continue
            if detail.version_locator in known or detail.version_locator in visited:
                continue

            child = self._new_dependency(item, node)
            child.on_by_default = True
            child.enabled = item.name not in disabled_offerings
            child.is_required = False
            known[child.version_locator] = child
            new_children.append(child)

        if new_children:
            logger.debug(
                f"Adding dependencies to {node.offering_name or node.version_locator}: "
                f"{', '.join(c.offering_name for c in new_children)}"
            )
        node.dependencies.extend(new_children)
        to_expand.extend(c for c in new_children if c.is_enabled())
        return to_expand

    def _resolve_locator(self, node: AddonConfig):
        if self.locator is None or not node.version_constraint:
            raise ResolutionError(
                f"Addon '{node.offering_name}' has no version locator",
                context="set version_locator or a version_constraint with catalog and offering ids",
            )
        version, version_locator = self.locator.resolve(
            node.catalog_id,
            node.offering_id,
            node.version_constraint,
            node.offering_flavor,
            node.install_kind,
        )
        node.resolved_version = version
        node.version_locator = version_locator

    @staticmethod
    def _merge_metadata(dependency: AddonConfig, item: OfferingReferenceItem, parent: AddonConfig):
        detail = item.offering_reference
        dependency.version_locator = detail.version_locator
        dependency.resolved_version = detail.version
        dependency.catalog_id = detail.catalog_id
        dependency.offering_id = detail.id
        dependency.offering_flavor = detail.flavor.name
        dependency.offering_label = detail.label
        dependency.prefix = parent.prefix

    @staticmethod
    def _new_dependency(item: OfferingReferenceItem, parent: AddonConfig) -> AddonConfig:
        detail = item.offering_reference
        return AddonConfig(
            prefix=parent.prefix,
            offering_name=detail.name or item.name,
            offering_label=detail.label,
            offering_id=detail.id,
            catalog_id=detail.catalog_id,
            offering_flavor=detail.flavor.name,
            version_locator=detail.version_locator,
            resolved_version=detail.version,
        )

    def _mark_required(self, dependency: AddonConfig, parent: AddonConfig):
        """Record that ``parent`` requires ``dependency`` and settle its enabled flag."""
        dependency.is_required = True
        parent_name = parent.offering_name or parent.version_locator
        if parent_name not in dependency.required_by:
            dependency.required_by.append(parent_name)

        if dependency.enabled is None:
            dependency.enabled = True
            return
        if dependency.enabled:
            return

        if self.conflict_policy == RequiredConflictPolicy.ERROR:
            raise DependencyConflictError(parent_name, dependency.offering_name)
        if self.conflict_policy == RequiredConflictPolicy.FORCE_ENABLE:
            logger.warning(
                f"Force-enabling '{dependency.offering_name}': required by {', '.join(dependency.required_by)}"
            )
            dependency.enabled = True
        else:
            logger.warning(
                f"Keeping required dependency '{dependency.offering_name}' disabled as requested; "
                f"required by {', '.join(dependency.required_by)}"
            )
