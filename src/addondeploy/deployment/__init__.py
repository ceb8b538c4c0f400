"""Project deployment of resolved addon trees."""

from addondeploy.deployment.orchestrator import DeploymentOrchestrator, correlate_deployment

__all__ = [
    "DeploymentOrchestrator",
    "correlate_deployment",
]
