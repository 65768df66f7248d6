"""Static source: ingress annotations declared in a YAML document.

Used in demo mode, where no cluster is available. Document layout:

    groups: "dev, ops"
    ingresses:
      - annotations:
          dashboard.home/enabled: "true"
          dashboard.home/title: Grafana
"""

from pathlib import Path
from typing import Any, Sequence

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.exceptions import MalformedSourceError, SourceException, SourceUnavailableError
from ..core.mapper import DEMO_URL
from ..core.models import SourceRecord

SOURCE_NAME = "static"


def _scalar_to_str(value: Any) -> Any:
    # YAML types unquoted scalars (bool, int, date, null); the document is string-valued
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return value
    return str(value)


class IngressEntry(BaseModel):
    """One declared ingress."""
    annotations: dict[str, str] = Field(default_factory=dict)

    @field_validator("annotations", mode="before")
    @classmethod
    def _coerce_annotations(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): _scalar_to_str(v) for k, v in value.items()}
        return value


class PortalDocument(BaseModel):
    """Top-level layout of the static document."""
    groups: str = ""
    ingresses: list[IngressEntry] = Field(default_factory=list)

    @field_validator("groups", mode="before")
    @classmethod
    def _coerce_groups(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("ingresses", mode="before")
    @classmethod
    def _coerce_ingresses(cls, value: Any) -> Any:
        return [] if value is None else value


def read_document(paths: Sequence[Path]) -> tuple[PortalDocument, Path]:
    """
    Load the first readable document among ``paths``.

    Raises:
        SourceUnavailableError: no path could be read
        MalformedSourceError: the document is not UTF-8 YAML or has the wrong shape
    """
    if not paths:
        raise SourceUnavailableError(SOURCE_NAME, "no document path configured")

    last_error: OSError | None = None
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
            break
        except UnicodeDecodeError as e:
            raise MalformedSourceError(SOURCE_NAME, str(path), "not valid UTF-8") from e
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            last_error = e
    else:
        raise SourceUnavailableError(
            SOURCE_NAME, f"cannot read {', '.join(str(p) for p in paths)}", last_error
        )

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedSourceError(SOURCE_NAME, str(path), f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedSourceError(SOURCE_NAME, str(path), "top level must be a mapping")

    try:
        return PortalDocument.model_validate(data), Path(path)
    except ValidationError as e:
        raise MalformedSourceError(SOURCE_NAME, str(path), str(e)) from e


def load_demo_groups(paths: Sequence[Path]) -> tuple[str, ...]:
    """Read the simulated user's groups from the document, trimmed.

    Returns an empty tuple, which disables filtering, when the document cannot be loaded.
    """
    try:
        document, path = read_document(paths)
    except SourceException as e:
        logger.warning(f"Failed to load demo groups config: {e}")
        return ()

    if not document.groups:
        return ()

    groups = tuple(group.strip() for group in document.groups.split(","))
    logger.info(f"Demo mode enabled with groups: {list(groups)} (from {path})")
    return groups


class StaticSource:
    """Lists the ingresses declared in a local YAML document."""

    name = SOURCE_NAME

    def __init__(self, paths: Sequence[Path]):
        self.paths = tuple(Path(p) for p in paths)

    def list_records(self) -> list[SourceRecord]:
        document, path = read_document(self.paths)
        logger.info(f"Demo mode: loading {len(document.ingresses)} ingress configs from {path}")
        return [SourceRecord(annotations=entry.annotations) for entry in document.ingresses]

    def resolve_url(self, record: SourceRecord) -> str:
        return DEMO_URL
