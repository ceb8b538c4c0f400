"""Pydantic models for addons, catalog data and configuration."""

from addondeploy.models.addon import AddonConfig, InstallKind
from addondeploy.models.catalog import (
    Flavor,
    Offering,
    OfferingKind,
    OfferingReferenceDetail,
    OfferingReferenceItem,
    OfferingReferenceResponse,
    OfferingVersion,
)
from addondeploy.models.config import (
    AddonDeployConfig,
    CatalogConfig,
    RequiredConflictPolicy,
    RetryConfig,
)
from addondeploy.models.deployment import (
    CONTAINER_SUFFIX,
    DeployedAddonsDetails,
    DeployedConfig,
    DeploymentEntry,
)

__all__ = [
    "AddonConfig",
    "InstallKind",
    "Flavor",
    "Offering",
    "OfferingKind",
    "OfferingReferenceDetail",
    "OfferingReferenceItem",
    "OfferingReferenceResponse",
    "OfferingVersion",
    "AddonDeployConfig",
    "CatalogConfig",
    "RequiredConflictPolicy",
    "RetryConfig",
    "CONTAINER_SUFFIX",
    "DeployedAddonsDetails",
    "DeployedConfig",
    "DeploymentEntry",
]
