"""Addon tree models."""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class InstallKind(str, Enum):
    """Installable unit type of an offering version."""
    TERRAFORM = "terraform"
    STACK = "stack"


class AddonConfig(BaseModel):
    """An addon to deploy: the root of a deployment or one of its dependencies.

    ``enabled``, ``on_by_default`` and ``is_required`` are tri-state: ``None``
    means neither the caller nor the catalog has decided yet, so an explicit
    ``False`` from the caller can always be told apart from "unset".
    """
    model_config = ConfigDict(extra="ignore")

    # Identity
    offering_id: str = ""
    offering_name: str = ""
    offering_flavor: str = ""
    offering_label: str = ""
    catalog_id: str = ""
    version_locator: str = ""
    resolved_version: str = ""
    version_id: str = ""
    version_constraint: str = Field(default="", description="Constraint resolved when no locator is set")
    install_kind: InstallKind = InstallKind.TERRAFORM

    # Deployment naming
    prefix: str = ""
    config_name: str = ""
    existing_config_id: str = Field(default="", description="Reuse this config instead of creating one")

    # Tri-state flags
    enabled: Optional[bool] = None
    on_by_default: Optional[bool] = None
    is_required: Optional[bool] = None

    inputs: Dict[str, Any] = Field(default_factory=dict)

    # Graph edges
    dependencies: List["AddonConfig"] = Field(default_factory=list)
    required_by: List[str] = Field(default_factory=list)

    # Populated after deployment
    config_id: str = ""
    container_config_id: str = ""
    container_config_name: str = ""

    @classmethod
    def terraform(
        cls,
        prefix: str,
        name: str,
        flavor: str,
        inputs: Optional[Dict[str, Any]] = None,
    ) -> "AddonConfig":
        """Create an enabled root addon installed as a terraform module."""
        return cls._new_root(prefix, name, flavor, InstallKind.TERRAFORM, inputs)

    @classmethod
    def stack(
        cls,
        prefix: str,
        name: str,
        flavor: str,
        inputs: Optional[Dict[str, Any]] = None,
    ) -> "AddonConfig":
        """Create an enabled root addon installed as a stack."""
        return cls._new_root(prefix, name, flavor, InstallKind.STACK, inputs)

    @classmethod
    def _new_root(cls, prefix, name, flavor, install_kind, inputs) -> "AddonConfig":
        return cls(
            prefix=prefix,
            offering_name=name,
            offering_flavor=flavor,
            install_kind=install_kind,
            inputs=inputs or {},
            enabled=True,
            on_by_default=True,
        )

    def is_enabled(self) -> bool:
        """Whether this addon is explicitly enabled."""
        return self.enabled is True

    def default_config_name(self) -> str:
        """Config name used for a root addon."""
        return f"{self.prefix}-{self.offering_name}"

    def find_dependency(self, offering_name: str) -> Optional["AddonConfig"]:
        """Return the first direct dependency with the given offering name."""
        for dependency in self.dependencies:
            if dependency.offering_name == offering_name:
                return dependency
        return None

    def walk(self) -> Iterator["AddonConfig"]:
        """Iterate over this addon and every descendant, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.dependencies))
