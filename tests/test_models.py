"""Tests for Render API data models."""

from render_mcp.render.models import DeployStatus, EnvVar, Page, ServiceType


class TestPage:
    def test_to_dict_with_cursor(self):
        page = Page(items=[{"id": "srv-1"}], cursor="abc")
        assert page.to_dict() == {"data": [{"id": "srv-1"}], "cursor": "abc"}

    def test_to_dict_without_cursor(self):
        assert Page(items=[]).to_dict() == {"data": []}

    def test_preserves_upstream_order(self):
        items = [{"id": "b"}, {"id": "a"}, {"id": "c"}]
        assert Page(items=items).to_dict()["data"] == items


class TestEnvVar:
    def test_to_dict(self):
        assert EnvVar("PORT", "8080").to_dict() == {"key": "PORT", "value": "8080"}


class TestEnums:
    def test_service_types(self):
        assert {t.value for t in ServiceType} == {
            "web_service", "static_site", "private_service", "background_worker", "cron_job",
        }

    def test_deploy_statuses(self):
        assert DeployStatus("build_failed") is DeployStatus.BUILD_FAILED
        assert len(DeployStatus) == 8
