"""Request orchestration: pick the source, map, filter."""

from typing import Optional, Sequence

from loguru import logger

from .config import Mode, PortalConfig
from .core.mapper import map_records
from .core.matcher import filter_applications
from .core.models import Application
from .sources import ApplicationSource, ClusterSource, StaticSource


def select_source(portal_config: PortalConfig) -> ApplicationSource:
    if portal_config.mode is Mode.STATIC:
        return StaticSource(portal_config.config_paths)
    return ClusterSource(in_cluster=portal_config.kube_in_cluster)


def parse_groups_header(value: Optional[str]) -> list[str]:
    """Split the trust header into trimmed group identifiers."""
    if not value:
        return []
    return [group.strip() for group in value.split(",")]


class PortalService:
    """Fetches a fresh snapshot of applications and filters it per caller."""

    def __init__(self, portal_config: PortalConfig, source: Optional[ApplicationSource] = None):
        self.config = portal_config
        self.source = source or select_source(portal_config)

    def caller_groups(self, header_value: Optional[str]) -> list[str]:
        """Caller Context for one request.

        In static mode the header is ignored and the demo groups stand in
        for the logged-in user.
        """
        if self.config.mode is Mode.STATIC:
            logger.debug("Using demo mode groups")
            return list(self.config.demo_groups)

        logger.debug(f"{self.config.groups_header} header value: {header_value!r}")
        groups = parse_groups_header(header_value)
        if not groups:
            logger.warning(f"No groups found in {self.config.groups_header} header")
        else:
            logger.info(f"Parsed groups from header: {groups}")
        return groups

    def fetch_applications(self) -> list[Application]:
        """All enabled applications, unfiltered.

        Raises:
            SourceException: the source could not be listed
        """
        records = self.source.list_records()
        apps = map_records(records, self.source.resolve_url)
        logger.info(f"{self.source.name} source: {len(apps)} apps enabled")
        return apps

    def list_applications(self, caller_groups: Sequence[str]) -> list[Application]:
        apps = self.fetch_applications()
        filtered = filter_applications(apps, caller_groups)
        logger.info(f"Apps response: total={len(apps)} filtered={len(filtered)}")
        return filtered
