"""homeportal - Application portal backend for annotated Kubernetes ingresses."""

__version__ = "0.1.0"
