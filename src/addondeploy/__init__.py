"""
Addondeploy - catalog addon dependency resolution and project deployment.

Resolves an addon offering together with the required and optional
dependencies declared in the catalog, and deploys them to a project as one
request.
"""

__version__ = "1.0.0"
__author__ = "Addondeploy Development Team"

# Re-export key components for easier access
from addondeploy.deployment import DeploymentOrchestrator
from addondeploy.models.addon import AddonConfig
from addondeploy.models.deployment import DeployedAddonsDetails
from addondeploy.resolution import DependencyGraphBuilder, VersionLocator, flatten_dependencies

__all__ = [
    "AddonConfig",
    "DeployedAddonsDetails",
    "DependencyGraphBuilder",
    "DeploymentOrchestrator",
    "VersionLocator",
    "flatten_dependencies",
]
