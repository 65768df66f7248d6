"""Capability shared by the cluster and static sources."""

from typing import Protocol, runtime_checkable

from ..core.models import SourceRecord


@runtime_checkable
class ApplicationSource(Protocol):
    """Lists source records and knows how to resolve their URL."""

    name: str

    def list_records(self) -> list[SourceRecord]:
        """Fresh listing, in a stable order for the same backing state."""
        ...

    def resolve_url(self, record: SourceRecord) -> str:
        ...
