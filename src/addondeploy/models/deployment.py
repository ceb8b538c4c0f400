"""Deployment request and response models."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Suffix of the infrastructure container config paired with each deployed config
CONTAINER_SUFFIX = " Container"


class DeploymentEntry(BaseModel):
    """One addon in a deployment request."""
    version_locator: str
    name: str
    config_id: Optional[str] = Field(None, description="Existing config to bind instead of creating one")

    def to_payload(self) -> Dict[str, Any]:
        """Request body representation, omitting an unset config id."""
        return self.model_dump(exclude_none=True)


class DeployedConfig(BaseModel):
    """A configuration created or reused by a deployment."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    config_id: str = ""

    @property
    def is_container(self) -> bool:
        return self.name.endswith(CONTAINER_SUFFIX)

    @property
    def base_name(self) -> str:
        """Name of the config this container belongs to."""
        if self.is_container:
            return self.name[: -len(CONTAINER_SUFFIX)]
        return self.name


class DeployedAddonsDetails(BaseModel):
    """Deployment API result."""
    model_config = ConfigDict(extra="ignore")

    project_id: str = ""
    configs: List[DeployedConfig] = Field(default_factory=list)

    @field_validator("configs", mode="before")
    @classmethod
    def null_configs_as_empty(cls, v: Any) -> Any:
        return v or []
