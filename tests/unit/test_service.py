"""Unit tests for request orchestration."""

import pytest

from homeportal.config import Mode, PortalConfig, build_portal_config
from homeportal.core.exceptions import SourceUnavailableError
from homeportal.core.models import SourceRecord
from homeportal.service import PortalService, parse_groups_header, select_source
from homeportal.sources import ApplicationSource, ClusterSource, StaticSource


class ListSource:
    """In-memory source."""

    name = "memory"

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error

    def list_records(self):
        if self.error is not None:
            raise self.error
        return list(self.records)

    def resolve_url(self, record):
        return f"http://{record.name}"


def enabled(name, groups=""):
    annotations = {"dashboard.home/enabled": "true", "dashboard.home/title": name.upper()}
    if groups:
        annotations["dashboard.home/groups"] = groups
    return SourceRecord(annotations=annotations, name=name)


def test_parse_groups_header():
    assert parse_groups_header(None) == []
    assert parse_groups_header("") == []
    assert parse_groups_header("dev, Ops ") == ["dev", "Ops"]


def test_select_source():
    assert isinstance(select_source(PortalConfig(mode=Mode.CLUSTER)), ClusterSource)
    assert isinstance(select_source(PortalConfig(mode=Mode.STATIC)), StaticSource)


def test_sources_satisfy_protocol():
    assert isinstance(ClusterSource(), ApplicationSource)
    assert isinstance(StaticSource([]), ApplicationSource)
    assert isinstance(ListSource(), ApplicationSource)


def test_caller_groups_from_header():
    service = PortalService(PortalConfig(mode=Mode.CLUSTER), ListSource())
    assert service.caller_groups("dev,ops") == ["dev", "ops"]
    assert service.caller_groups(None) == []


def test_static_mode_ignores_header():
    service = PortalService(PortalConfig(mode=Mode.STATIC, demo_groups=("dev",)), ListSource())
    assert service.caller_groups("admins") == ["dev"]


def test_list_applications_filters_and_keeps_order():
    source = ListSource([enabled("a", "dev"), enabled("b", "ops"), enabled("c")])
    service = PortalService(PortalConfig(mode=Mode.CLUSTER), source)

    apps = service.list_applications(["DEV"])

    assert [app.title for app in apps] == ["A", "C"]
    assert apps[0].url == "http://a"


def test_fetch_failure_propagates():
    error = SourceUnavailableError("memory", "down")
    service = PortalService(PortalConfig(mode=Mode.CLUSTER), ListSource(error=error))

    with pytest.raises(SourceUnavailableError):
        service.list_applications([])


def test_static_scenario(demo_settings):
    """One enabled entry for 'dev' and one disabled: only the enabled one is listed."""
    service = PortalService(build_portal_config(demo_settings))

    apps = service.list_applications(service.caller_groups(None))

    assert [app.title for app in apps] == ["Grafana"]
    assert apps[0].groups == ["dev"]
    assert apps[0].url == "https://example.com"
