"""Cluster source: lists ingresses from the Kubernetes API."""

from typing import Any, Callable, Optional

import urllib3
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from loguru import logger

from ..core.exceptions import SourceUnavailableError
from ..core.mapper import derive_url
from ..core.models import RoutingRule, SourceRecord


def _networking_api(in_cluster: bool) -> client.NetworkingV1Api:
    if in_cluster:
        config.load_incluster_config()
    else:
        config.load_kube_config()
    return client.NetworkingV1Api()


def ingress_to_record(ingress: Any) -> SourceRecord:
    """Reduce a V1Ingress to a SourceRecord."""
    metadata = ingress.metadata
    spec = ingress.spec
    rules = (spec.rules if spec else None) or []
    return SourceRecord(
        annotations=dict(metadata.annotations or {}),
        rules=tuple(RoutingRule(host=rule.host or "") for rule in rules),
        tls=bool(spec and spec.tls),
        namespace=metadata.namespace or "",
        name=metadata.name or "",
    )


class ClusterSource:
    """
    Lists every ingress in the cluster.

    A new API client is created for each listing. Failures are not retried;
    the caller reports them for the current request only.
    """

    name = "cluster"

    def __init__(
        self,
        in_cluster: bool = True,
        api_factory: Optional[Callable[[], Any]] = None,
    ):
        self.in_cluster = in_cluster
        self._api_factory = api_factory or (lambda: _networking_api(self.in_cluster))

    def list_records(self) -> list[SourceRecord]:
        try:
            api = self._api_factory()
        except (ConfigException, OSError) as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise SourceUnavailableError(self.name, "cannot load cluster credentials", e) from e

        try:
            ingresses = api.list_ingress_for_all_namespaces()
        except ApiException as e:
            logger.error(f"Failed to list ingresses: {e.status} {e.reason}")
            raise SourceUnavailableError(self.name, f"API returned {e.status}", e) from e
        except urllib3.exceptions.HTTPError as e:
            logger.error(f"Failed to reach Kubernetes API: {e}")
            raise SourceUnavailableError(self.name, "API unreachable", e) from e

        records = [ingress_to_record(ingress) for ingress in ingresses.items or []]
        logger.info(f"Kubernetes mode: found {len(records)} total ingresses")
        return records

    def resolve_url(self, record: SourceRecord) -> str:
        return derive_url(record)
