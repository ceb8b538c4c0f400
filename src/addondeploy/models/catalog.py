"""Catalog offering and component reference models."""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Flavor(BaseModel):
    """Named variant of an offering."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    label: str = ""
    index: int = 0


class OfferingReferenceDetail(BaseModel):
    """Catalog details of a referenced offering version."""
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    catalog_id: str = ""
    name: str = ""
    label: str = ""
    version: str = ""
    version_locator: str = ""
    flavor: Flavor = Field(default_factory=Flavor)
    on_by_default: bool = False
    default_flavor: str = ""


class OfferingReferenceItem(BaseModel):
    """A named dependency declared by an offering version."""
    model_config = ConfigDict(extra="ignore")

    name: str
    offering_reference: OfferingReferenceDetail = Field(default_factory=OfferingReferenceDetail)

    @property
    def matches_default_flavor(self) -> bool:
        """Whether this reference points at the dependency's default flavor."""
        detail = self.offering_reference
        return not detail.default_flavor or detail.default_flavor == detail.flavor.name


class OfferingReferenceResponse(BaseModel):
    """Required and optional dependencies of an offering version."""
    model_config = ConfigDict(extra="ignore")

    required: List[OfferingReferenceItem] = Field(default_factory=list)
    optional: List[OfferingReferenceItem] = Field(default_factory=list)

    @field_validator("required", "optional", mode="before")
    @classmethod
    def unwrap_offering_references(cls, v: Any) -> Any:
        """Accept the API's ``{"offering_references": [...]}`` wrapper."""
        if v is None:
            return []
        if isinstance(v, dict):
            return v.get("offering_references") or []
        return v


class OfferingVersion(BaseModel):
    """A single published version of an offering flavor."""
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    version: str = ""
    version_locator: str = ""
    catalog_id: str = ""
    offering_id: str = ""
    flavor: Flavor = Field(default_factory=Flavor)


class OfferingKind(BaseModel):
    """Versions of an offering grouped by install kind."""
    model_config = ConfigDict(extra="ignore")

    install_kind: str = ""
    versions: List[OfferingVersion] = Field(default_factory=list)


class Offering(BaseModel):
    """Catalog offering with its kinds and versions."""
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = ""
    label: Optional[str] = None
    kinds: List[OfferingKind] = Field(default_factory=list)
