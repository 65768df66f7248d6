"""Configuration for the homeportal service."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings

from .core.exceptions import ConfigValidationError
from .sources.static import load_demo_groups

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class Settings(BaseSettings):
    """Portal settings, read from the environment."""

    # Serve ingresses from a local YAML document instead of the cluster
    DEMO_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Static document, tried in order
    CONFIG_PATH: str = "/etc/dashboard/config.yaml"
    FALLBACK_CONFIG_PATH: str = "config.yaml"

    # Set by the authenticating proxy
    GROUPS_HEADER: str = "X-Forwarded-Groups"

    # Built web UI
    STATIC_DIR: str = "static"

    # Use the pod service account; false falls back to the local kubeconfig
    KUBE_IN_CLUSTER: bool = True

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _known_log_level(cls, value):
        level = str(value).strip().upper() or "INFO"
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            logger.warning(f"Unknown LOG_LEVEL {value!r}, using INFO")
            return "INFO"
        return level

    class Config:
        env_file = ".env"
        frozen = True

    @property
    def config_paths(self) -> tuple[Path, ...]:
        return (Path(self.CONFIG_PATH), Path(self.FALLBACK_CONFIG_PATH))

    @property
    def debug(self) -> bool:
        return self.LOG_LEVEL in ("TRACE", "DEBUG")


class Mode(str, Enum):
    CLUSTER = "cluster"
    STATIC = "static"


@dataclass(frozen=True)
class PortalConfig:
    """Process-wide configuration, decided once at startup."""
    mode: Mode
    demo_groups: tuple[str, ...] = ()
    groups_header: str = "X-Forwarded-Groups"
    config_paths: tuple[Path, ...] = ()
    kube_in_cluster: bool = True


def build_portal_config(settings: Settings) -> PortalConfig:
    """Resolve the operating mode and, in demo mode, the simulated user's groups."""
    if not settings.GROUPS_HEADER.strip():
        raise ConfigValidationError("GROUPS_HEADER", settings.GROUPS_HEADER, "must not be empty")

    mode = Mode.STATIC if settings.DEMO_MODE else Mode.CLUSTER
    demo_groups: tuple[str, ...] = ()
    if mode is Mode.STATIC:
        demo_groups = load_demo_groups(settings.config_paths)

    logger.info(f"Portal configured (mode={mode.value} debug={settings.debug})")
    return PortalConfig(
        mode=mode,
        demo_groups=demo_groups,
        groups_header=settings.GROUPS_HEADER,
        config_paths=settings.config_paths,
        kube_in_cluster=settings.KUBE_IN_CLUSTER,
    )
