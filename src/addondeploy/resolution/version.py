"""Version constraint matching and version locator resolution."""

import logging
import re
from typing import Callable, List, Optional, Tuple

from semantic_version import SimpleSpec, Version

from addondeploy.catalog.base import OfferingGetter
from addondeploy.exceptions import NoMatchingVersionError, ResolutionError, VersionNotFoundError
from addondeploy.models.addon import InstallKind
from addondeploy.models.catalog import OfferingVersion


logger = logging.getLogger(__name__)

VersionMatcher = Callable[[List[str], str], str]

_V_PREFIX = re.compile(r"(?<![0-9A-Za-z])v(?=\d)")


def parse_version(version: str) -> Optional[Version]:
    """Parse ``1.2.3`` or ``v1.2.3``; None if it is not a semantic version."""
    try:
        return Version(_V_PREFIX.sub("", version.strip()))
    except ValueError:
        return None


def parse_constraint(constraint: str) -> Optional[SimpleSpec]:
    """Parse an exact, ``^``, ``~`` or ``"low,high"`` constraint; None if invalid."""
    expression = _V_PREFIX.sub("", "".join(constraint.split()))
    if not expression:
        return None
    try:
        return SimpleSpec(expression)
    except ValueError:
        return None


def match_version(versions: List[str], constraint: str) -> str:
    """Return the highest version satisfying ``constraint``, as given, or ``""``.

    Examples:
        >>> match_version(["v7.50.1", "8.18.0", "v8.20.2"], "^v8.18.0")
        'v8.20.2'
        >>> match_version(["v7.50.1", "8.18.0", "v8.20.2"], ">=8.15.0,<=8.22.0")
        'v8.20.2'
    """
    spec = parse_constraint(constraint)
    if spec is None:
        logger.debug(f"Unparsable version constraint: '{constraint}'")
        return ""

    candidates = {}
    for raw in versions:
        parsed = parse_version(raw)
        # First spelling wins when "v1.0.0" and "1.0.0" both exist
        if parsed is not None and parsed not in candidates:
            candidates[parsed] = raw

    best = spec.select(candidates.keys())
    return candidates[best] if best is not None else ""


class VersionLocator:
    """Resolves a version constraint and flavor to a concrete version locator."""

    def __init__(self, offering_getter: OfferingGetter, matcher: VersionMatcher = match_version):
        self.offering_getter = offering_getter
        self.matcher = matcher

    def resolve(
        self,
        catalog_id: str,
        offering_id: str,
        version_constraint: str,
        flavor: str,
        install_kind: InstallKind = InstallKind.TERRAFORM,
    ) -> Tuple[str, str]:
        """Return ``(version, version_locator)`` of the best match.

        Raises:
            NoMatchingVersionError: no available version satisfies the constraint
            VersionNotFoundError: the chosen version has no entry for ``flavor``
            ResolutionError: ``catalog_id`` or ``offering_id`` is empty
        """
        if not catalog_id:
            raise ResolutionError(
                "catalog_id cannot be empty when getting offering version locator",
                context=f"offering '{offering_id}', constraint '{version_constraint}'",
            )
        if not offering_id:
            raise ResolutionError(
                "offering_id cannot be empty when getting offering version locator",
                context=f"catalog '{catalog_id}', constraint '{version_constraint}'",
            )

        logger.info(
            f"Getting offering version locator: catalogID='{catalog_id}', offeringID='{offering_id}', "
            f"constraint='{version_constraint}', flavor='{flavor}'"
        )
        offering = self.offering_getter.get_offering(catalog_id, offering_id)
        offering_name = offering.name or offering_id

        available: List[OfferingVersion] = [
            v
            for kind in offering.kinds
            if kind.install_kind == install_kind.value
            for v in kind.versions
        ]

        best = self.matcher([v.version for v in available], version_constraint)
        if not best:
            raise NoMatchingVersionError(offering_name, version_constraint)

        best_parsed = parse_version(best)
        for v in available:
            same_version = v.version == best or (
                best_parsed is not None and parse_version(v.version) == best_parsed
            )
            if same_version and v.flavor.name == flavor and v.version_locator:
                logger.debug(f"Resolved {offering_name} {version_constraint} to {v.version} ({v.version_locator})")
                return v.version, v.version_locator

        raise VersionNotFoundError(offering_name, best, flavor)
