"""Configuration models."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequiredConflictPolicy(str, Enum):
    """How to treat a catalog-required dependency the caller explicitly disabled."""
    ERROR = "error"
    PRESERVE = "preserve"
    FORCE_ENABLE = "force_enable"


class CatalogConfig(BaseModel):
    """Catalog and IAM endpoint configuration."""
    catalog_url: str = Field(default="https://cm.globalcatalog.cloud.ibm.com")
    iam_url: str = Field(default="https://iam.cloud.ibm.com")
    api_key_env: str = Field(default="TF_VAR_ibmcloud_api_key")
    timeout: float = Field(default=60.0, gt=0)


class RetryConfig(BaseModel):
    """Retry behaviour for transient catalog failures (429 and 5xx)."""
    max_attempts: int = Field(default=10, ge=1)
    initial_delay: float = Field(default=5.0, ge=0)
    max_delay: float = Field(default=120.0, ge=0)
    jitter: bool = Field(default=True)


class AddonDeployConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    log_level: str = Field(default="INFO")
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    required_conflict_policy: RequiredConflictPolicy = Field(default=RequiredConflictPolicy.ERROR)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
