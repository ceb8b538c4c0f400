"""Shared fixtures: an in-memory catalog of component references."""

from collections import Counter
from typing import Dict, List, Optional

import pytest

from addondeploy.catalog.base import ComponentReferenceGetter, DeploymentSubmitter
from addondeploy.models.catalog import (
    Flavor,
    OfferingReferenceDetail,
    OfferingReferenceItem,
    OfferingReferenceResponse,
)
from addondeploy.models.deployment import DeployedAddonsDetails, DeployedConfig, DeploymentEntry


def make_reference(
    name: str,
    locator: str,
    on_by_default: bool = False,
    flavor: str = "fully-configurable",
    default_flavor: str = "",
    version: str = "v1.0.0",
) -> OfferingReferenceItem:
    """Build a reference item the way the catalog reports it."""
    return OfferingReferenceItem(
        name=name,
        offering_reference=OfferingReferenceDetail(
            id=f"{name}-id",
            catalog_id="catalog-1",
            name=name,
            label=name.title(),
            version=version,
            version_locator=locator,
            flavor=Flavor(name=flavor, label=flavor.title()),
            on_by_default=on_by_default,
            default_flavor=default_flavor,
        ),
    )


class FakeCatalog(ComponentReferenceGetter):
    """Serves component references from a dict and counts lookups per locator."""

    def __init__(self):
        self.references: Dict[str, OfferingReferenceResponse] = {}
        self.calls: Counter = Counter()
        self.failures: Dict[str, Exception] = {}

    def add(
        self,
        locator: str,
        required: Optional[List[OfferingReferenceItem]] = None,
        optional: Optional[List[OfferingReferenceItem]] = None,
    ):
        self.references[locator] = OfferingReferenceResponse(
            required=required or [], optional=optional or []
        )

    def get_component_references(self, version_locator: str) -> OfferingReferenceResponse:
        self.calls[version_locator] += 1
        if version_locator in self.failures:
            raise self.failures[version_locator]
        return self.references.get(version_locator, OfferingReferenceResponse())


class EchoSubmitter(DeploymentSubmitter):
    """Records the request and answers with one config and one container per entry."""

    def __init__(self, containers: bool = True):
        self.containers = containers
        self.requests: List[List[DeploymentEntry]] = []

    def submit_deployment(self, project_id: str, entries: List[DeploymentEntry]) -> DeployedAddonsDetails:
        self.requests.append(list(entries))
        configs = []
        for index, entry in enumerate(entries):
            configs.append(DeployedConfig(name=entry.name, config_id=f"cfg-{index}"))
            if self.containers:
                configs.append(DeployedConfig(name=f"{entry.name} Container", config_id=f"ctr-{index}"))
        return DeployedAddonsDetails(project_id=project_id, configs=configs)


@pytest.fixture
def catalog():
    """Empty fake catalog."""
    return FakeCatalog()


@pytest.fixture
def ref():
    """Factory for catalog reference items."""
    return make_reference


@pytest.fixture
def submitter():
    """Deployment submitter echoing back one config per entry."""
    return EchoSubmitter()


@pytest.fixture
def no_retry_delays(monkeypatch):
    """Keep retry counting without sleeping."""
    monkeypatch.setenv("SKIP_RETRY_DELAYS", "true")
