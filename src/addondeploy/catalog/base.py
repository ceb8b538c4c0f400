"""Catalog capability interfaces."""

from abc import ABC, abstractmethod
from typing import List

from addondeploy.models.catalog import Offering, OfferingReferenceResponse
from addondeploy.models.deployment import DeployedAddonsDetails, DeploymentEntry


class ComponentReferenceGetter(ABC):
    """Reports the dependencies an offering version declares."""

    @abstractmethod
    def get_component_references(self, version_locator: str) -> OfferingReferenceResponse:
        """Get the required and optional references of a version."""
        pass


class OfferingGetter(ABC):
    """Looks up an offering with its kinds, versions and flavors."""

    @abstractmethod
    def get_offering(self, catalog_id: str, offering_id: str) -> Offering:
        """Get an offering from a catalog."""
        pass


class DeploymentSubmitter(ABC):
    """Submits a flat deployment request to a project."""

    @abstractmethod
    def submit_deployment(self, project_id: str, entries: List[DeploymentEntry]) -> DeployedAddonsDetails:
        """Deploy the given entries to a project."""
        pass
