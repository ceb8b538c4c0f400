"""Flattening of a resolved addon tree into its unique dependencies."""

from typing import Dict, List

from addondeploy.models.addon import AddonConfig


def flatten_dependencies(root: AddonConfig) -> List[AddonConfig]:
    """Collect every dependency below ``root`` once per version locator.

    The root itself is not included. Nodes are returned in pre-order of first
    appearance and are the tree's own objects, not copies. A locator already
    collected is not walked again, so repeated subtrees are skipped.
    """
    unique: Dict[str, AddonConfig] = {}
    stack = list(reversed(root.dependencies))
    while stack:
        dependency = stack.pop()
        if dependency.version_locator in unique:
            continue
        unique[dependency.version_locator] = dependency
        stack.extend(reversed(dependency.dependencies))
    return list(unique.values())
