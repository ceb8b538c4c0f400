"""Exception hierarchy for addon resolution and deployment."""

from typing import Optional


class AddonDeployError(Exception):
    """Base exception for all addondeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(AddonDeployError):
    """Raised when settings or addon definitions are invalid or missing."""

    pass


class ResolutionError(AddonDeployError):
    """Raised when an addon cannot be resolved to a deployable version."""

    pass


class NoMatchingVersionError(ResolutionError):
    """Raised when no available version satisfies a constraint."""

    def __init__(self, offering: str, constraint: str):
        self.offering = offering
        self.constraint = constraint
        super().__init__(
            f"Could not find a matching version for dependency {offering}",
            context=f"constraint '{constraint}'",
        )


class VersionNotFoundError(ResolutionError):
    """Raised when a matched version has no locator for the requested flavor."""

    def __init__(self, offering: str, version: str, flavor: str):
        self.offering = offering
        self.version = version
        self.flavor = flavor
        super().__init__(
            f"Version {version} with flavor '{flavor}' not found for offering {offering}"
        )


class ReferenceLookupError(AddonDeployError):
    """Raised when the catalog cannot report the references of a version."""

    def __init__(self, version_locator: str, cause: Exception):
        self.version_locator = version_locator
        self.cause = cause
        super().__init__(
            f"Error getting component references for {version_locator}: {cause}"
        )


class DependencyConflictError(AddonDeployError):
    """Raised when a required dependency was explicitly disabled by the caller."""

    def __init__(self, parent: str, dependency: str):
        self.parent = parent
        self.dependency = dependency
        super().__init__(
            f"Dependency '{dependency}' is required by '{parent}' but was explicitly disabled",
            context="set required_conflict_policy to 'preserve' or 'force_enable' to resolve",
        )


class CatalogAPIError(AddonDeployError):
    """Raised when a catalog API call returns a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            message = f"{message} (status {status_code}): {body}"
        super().__init__(message)


class DeploymentError(CatalogAPIError):
    """Raised when submitting a deployment request fails."""

    pass
