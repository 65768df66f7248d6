"""Data models shared by the sources, the mapper and the HTTP layer."""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field


class Application(BaseModel):
    """An application tile shown in the portal."""
    title: str = ""
    icon: str = ""
    url: str = ""
    groups: list[str] = Field(default_factory=list)
    description: str = ""


@dataclass(frozen=True)
class RoutingRule:
    """Host rule of an ingress."""
    host: str = ""


@dataclass(frozen=True)
class SourceRecord:
    """An ingress-like resource reduced to what the mapper needs."""
    annotations: dict[str, str] = field(default_factory=dict)
    rules: tuple[RoutingRule, ...] = ()
    tls: bool = False
    namespace: str = ""
    name: str = ""
