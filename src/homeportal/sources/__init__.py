"""Source adapters that list ingress-like records."""

from .base import ApplicationSource
from .cluster import ClusterSource
from .static import StaticSource, load_demo_groups

__all__ = ["ApplicationSource", "ClusterSource", "StaticSource", "load_demo_groups"]
