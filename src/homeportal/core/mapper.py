"""Translate ingress annotation bags into Application records.

Recognized annotations:
- dashboard.home/enabled: must be exactly "true" for the ingress to be listed
- dashboard.home/title
- dashboard.home/icon: data URI or absolute URL
- dashboard.home/description
- dashboard.home/groups: comma-separated group identifiers
"""

from typing import Callable, Iterable, Mapping, Optional

from loguru import logger

from .models import Application, SourceRecord

ANNOTATION_PREFIX = "dashboard.home/"

ENABLED_ANNOTATION = ANNOTATION_PREFIX + "enabled"
TITLE_ANNOTATION = ANNOTATION_PREFIX + "title"
ICON_ANNOTATION = ANNOTATION_PREFIX + "icon"
DESCRIPTION_ANNOTATION = ANNOTATION_PREFIX + "description"
GROUPS_ANNOTATION = ANNOTATION_PREFIX + "groups"

ENABLED_VALUE = "true"

# Static sources have no routing information
DEMO_URL = "https://example.com"


def split_groups(value: str) -> list[str]:
    """Split a comma-separated group list.

    Entries are kept as written, surrounding whitespace included; the
    matcher normalizes them at comparison time.
    """
    if not value:
        return []
    return value.split(",")


def derive_url(record: SourceRecord) -> str:
    """Build the application URL from the first routing rule of an ingress."""
    if not record.rules:
        return ""
    scheme = "https" if record.tls else "http"
    return f"{scheme}://{record.rules[0].host}"


def map_record(annotations: Mapping[str, str], url: str) -> Optional[Application]:
    """
    Turn one annotation bag into an Application.

    Returns:
        Application, or None when the bag does not carry the enabled flag
    """
    if annotations.get(ENABLED_ANNOTATION) != ENABLED_VALUE:
        return None

    return Application(
        title=annotations.get(TITLE_ANNOTATION, ""),
        icon=annotations.get(ICON_ANNOTATION, ""),
        description=annotations.get(DESCRIPTION_ANNOTATION, ""),
        url=url,
        groups=split_groups(annotations.get(GROUPS_ANNOTATION, "")),
    )


def map_records(
    records: Iterable[SourceRecord],
    url_for: Callable[[SourceRecord], str],
) -> list[Application]:
    """Map records in order, dropping those that are not enabled."""
    apps: list[Application] = []
    for record in records:
        app = map_record(record.annotations, url_for(record))
        if app is None:
            continue
        apps.append(app)
        logger.debug(
            f"Added app: title={app.title} namespace={record.namespace or '-'} groups={app.groups}"
        )
    return apps
