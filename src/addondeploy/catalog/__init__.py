"""Catalog capabilities and their HTTP implementation."""

from addondeploy.catalog.auth import Authenticator, IamAuthenticator, StaticTokenAuthenticator
from addondeploy.catalog.base import ComponentReferenceGetter, DeploymentSubmitter, OfferingGetter
from addondeploy.catalog.client import CatalogClient

__all__ = [
    "Authenticator",
    "IamAuthenticator",
    "StaticTokenAuthenticator",
    "ComponentReferenceGetter",
    "DeploymentSubmitter",
    "OfferingGetter",
    "CatalogClient",
]
