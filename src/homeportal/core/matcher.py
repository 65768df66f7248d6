"""Group-based visibility filter."""

from typing import Iterable, Sequence

from .models import Application


def normalize_group(group: str) -> str:
    return group.strip().casefold()


def is_visible(app_groups: Sequence[str], caller_groups: Sequence[str]) -> bool:
    """
    Decide whether a caller may see an application.

    An empty caller group list means no trust header was presented; every
    application is visible then. Applications without groups are public.
    """
    if not caller_groups or not app_groups:
        return True

    wanted = {normalize_group(group) for group in caller_groups}
    return any(normalize_group(group) in wanted for group in app_groups)


def filter_applications(
    apps: Iterable[Application], caller_groups: Sequence[str]
) -> list[Application]:
    """Keep the applications visible to the caller, preserving their order."""
    return [app for app in apps if is_visible(app.groups, caller_groups)]
