"""Pytest configuration and shared fixtures."""

from pathlib import Path
from types import SimpleNamespace

import pytest
import yaml
from kubernetes import client

from homeportal.config import Settings


# ============================================================================
# Static Documents
# ============================================================================

@pytest.fixture
def write_document(tmp_path):
    """Factory writing a static portal document and returning its path."""
    def _factory(data, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path
    return _factory


@pytest.fixture
def demo_document():
    """Two ingresses: one enabled for 'dev', one disabled."""
    return {
        "groups": "dev",
        "ingresses": [
            {
                "annotations": {
                    "dashboard.home/enabled": "true",
                    "dashboard.home/title": "Grafana",
                    "dashboard.home/icon": "https://example.com/grafana.svg",
                    "dashboard.home/description": "Dashboards",
                    "dashboard.home/groups": "dev",
                }
            },
            {
                "annotations": {
                    "dashboard.home/enabled": "false",
                    "dashboard.home/title": "Hidden",
                }
            },
        ],
    }


@pytest.fixture
def demo_settings(tmp_path, write_document, demo_document):
    """Settings for demo mode backed by a temporary document."""
    path = write_document(demo_document)
    return Settings(
        DEMO_MODE=True,
        CONFIG_PATH=str(path),
        FALLBACK_CONFIG_PATH=str(tmp_path / "missing.yaml"),
        STATIC_DIR=str(tmp_path / "no-static"),
    )


@pytest.fixture
def cluster_settings(tmp_path):
    """Settings for cluster mode."""
    return Settings(DEMO_MODE=False, STATIC_DIR=str(tmp_path / "no-static"))


# ============================================================================
# Kubernetes
# ============================================================================

def make_ingress(
    annotations=None,
    hosts=(),
    tls_hosts=None,
    namespace: str = "default",
    name: str = "app",
) -> client.V1Ingress:
    """Build a V1Ingress the way the API client returns it."""
    rules = [client.V1IngressRule(host=host) for host in hosts] or None
    tls = [client.V1IngressTLS(hosts=list(tls_hosts))] if tls_hosts is not None else None
    return client.V1Ingress(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, annotations=annotations),
        spec=client.V1IngressSpec(rules=rules, tls=tls),
    )


class StubNetworkingApi:
    """Stands in for NetworkingV1Api."""

    def __init__(self, ingresses=None, error: Exception | None = None):
        self.ingresses = list(ingresses or [])
        self.error = error
        self.calls = 0

    def list_ingress_for_all_namespaces(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return SimpleNamespace(items=self.ingresses)


@pytest.fixture
def ingress_factory():
    return make_ingress


@pytest.fixture
def stub_api():
    """Factory for StubNetworkingApi instances."""
    def _factory(ingresses=None, error: Exception | None = None) -> StubNetworkingApi:
        return StubNetworkingApi(ingresses, error)
    return _factory
