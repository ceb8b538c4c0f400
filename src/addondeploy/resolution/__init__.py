"""Version resolution, dependency expansion and flattening."""

from addondeploy.resolution.flatten import flatten_dependencies
from addondeploy.resolution.graph import DependencyGraphBuilder
from addondeploy.resolution.version import VersionLocator, match_version

__all__ = [
    "DependencyGraphBuilder",
    "VersionLocator",
    "flatten_dependencies",
    "match_version",
]
