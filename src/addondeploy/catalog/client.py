"""HTTP client for the catalog management and deployment APIs."""

import json
import logging
import time
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from addondeploy.catalog.auth import Authenticator
from addondeploy.catalog.base import ComponentReferenceGetter, DeploymentSubmitter, OfferingGetter
from addondeploy.exceptions import CatalogAPIError, DeploymentError
from addondeploy.models.catalog import Offering, OfferingReferenceResponse
from addondeploy.models.config import CatalogConfig, RetryConfig
from addondeploy.models.deployment import DeployedAddonsDetails, DeploymentEntry
from addondeploy.utils.retry import retry_call


logger = logging.getLogger(__name__)


def is_transient(error: Exception) -> bool:
    """Rate limiting, server errors and connection problems are worth retrying."""
    if isinstance(error, CatalogAPIError):
        return error.status_code is not None and (
            error.status_code == 429 or error.status_code >= 500
        )
    return isinstance(error, httpx.TransportError)


class CatalogClient(ComponentReferenceGetter, OfferingGetter, DeploymentSubmitter):
    """Catalog client implementing every capability the resolver and deployer need."""

    def __init__(
        self,
        authenticator: Authenticator,
        settings: Optional[CatalogConfig] = None,
        retry: Optional[RetryConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize catalog client."""
        self.settings = settings or CatalogConfig()
        self.retry = retry or RetryConfig()
        self.authenticator = authenticator
        self._client = httpx.Client(
            base_url=self.settings.catalog_url,
            transport=transport,
            timeout=self.settings.timeout,
        )

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def get_component_references(self, version_locator: str) -> OfferingReferenceResponse:
        """Get the component references of a version.

        GET /ui/v1/versions/:version_locator/componentsReferences
        """
        data = self._request(
            "GET",
            f"/ui/v1/versions/{version_locator}/componentsReferences",
            operation=f"GetComponentReferences for '{version_locator}'",
        )
        return self._parse(OfferingReferenceResponse, data, "offering references")

    def get_offering(self, catalog_id: str, offering_id: str) -> Offering:
        """Get an offering with all of its kinds and versions."""
        if not catalog_id:
            raise ValueError("catalog_id cannot be empty")
        if not offering_id:
            raise ValueError("offering_id cannot be empty")

        logger.info(f"Getting offering details: catalogID='{catalog_id}', offeringID='{offering_id}'")
        data = self._request(
            "GET",
            f"/api/v1-beta/catalogs/{catalog_id}/offerings/{offering_id}",
            operation=f"GetOffering catalogID='{catalog_id}', offeringID='{offering_id}'",
        )
        return self._parse(Offering, data, "offering")

    def submit_deployment(self, project_id: str, entries: List[DeploymentEntry]) -> DeployedAddonsDetails:
        """Deploy addons to a project.

        POST /api/v1-beta/deploy/projects/:project_id/container
        """
        payload = [entry.to_payload() for entry in entries]
        logger.debug(f"Deployment request body:\n{json.dumps(payload, indent=2)}")
        try:
            data = self._request(
                "POST",
                f"/api/v1-beta/deploy/projects/{project_id}/container",
                operation=f"DeployAddonToProject for project {project_id}",
                retry=False,
                json=payload,
            )
        except CatalogAPIError as e:
            # Without a status there is no body; keep the transport message
            message = e.message if e.status_code is None else "Deployment request failed"
            raise DeploymentError(message, e.status_code, e.body) from e
        return self._parse(DeployedAddonsDetails, data, "deployment response")

    def _request(self, method: str, path: str, operation: str, retry: bool = True, **kwargs) -> Any:
        """Send an authenticated request, retrying transient failures unless ``retry`` is False."""

        def attempt() -> Any:
            headers = {
                "Authorization": f"Bearer {self.authenticator.get_token()}",
                "Content-Type": "application/json",
            }
            start_time = time.monotonic()
            response = self._client.request(method, path, headers=headers, **kwargs)
            logger.debug(f"{operation} completed in {time.monotonic() - start_time:.2f}s")

            if not response.is_success:
                raise CatalogAPIError(
                    f"API request {operation} failed", response.status_code, response.text
                )
            try:
                return response.json()
            except json.JSONDecodeError as e:
                raise CatalogAPIError(f"Invalid JSON in response to {operation}: {e}") from e

        try:
            if not retry:
                return attempt()
            return retry_call(attempt, self.retry, is_transient, operation_name=operation)
        except httpx.RequestError as e:
            raise CatalogAPIError(f"Connection error during {operation}: {e}") from e

    @staticmethod
    def _parse(model, data: Dict[str, Any], what: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CatalogAPIError(f"Error unmarshaling {what}: {e}") from e
