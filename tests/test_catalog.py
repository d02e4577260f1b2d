"""Tests for the tool catalog and its advertised schemas."""

import pytest
from pydantic import ValidationError

from render_mcp.render.models import ServicePlan, ServiceType
from render_mcp.tools.catalog import CreateServiceParams, ManageDomainsParams, build_catalog


@pytest.fixture
def catalog():
    return build_catalog()


def _params_schema(schema: dict) -> dict:
    """Resolve the ``params`` property through $defs."""
    ref = schema["properties"]["params"]["$ref"]
    return schema["$defs"][ref.rsplit("/", 1)[-1]]


class TestSchemas:
    def test_catalog_names(self, catalog):
        assert list(catalog) == [
            "list_services", "get_service", "deploy_service", "create_service",
            "delete_service", "get_deploys", "manage_env_vars", "manage_domains",
        ]

    def test_wrapper_forbids_extra_keys(self, catalog):
        schema = catalog["get_service"].input_schema()
        assert schema["additionalProperties"] is False

    def test_get_service_requires_service_id(self, catalog):
        params = _params_schema(catalog["get_service"].input_schema())
        assert params["required"] == ["serviceId"]
        assert params["additionalProperties"] is False
        assert params["properties"]["serviceId"]["type"] == "string"

    def test_create_service_required_fields(self, catalog):
        params = _params_schema(catalog["create_service"].input_schema())
        assert set(params["required"]) == {"type", "name", "ownerId", "repo"}
        for field in ("branch", "envVars", "buildCommand", "startCommand", "publishPath",
                      "plan", "region", "numInstances", "autoDeploy"):
            assert field in params["properties"]

    def test_manage_domains_actions(self, catalog):
        params = _params_schema(catalog["manage_domains"].input_schema())
        assert set(params["properties"]["action"]["enum"]) == {"add", "remove", "list"}
        assert set(params["required"]) == {"serviceId", "action"}

    def test_list_services_has_no_required_params(self, catalog):
        params = _params_schema(catalog["list_services"].input_schema())
        assert "required" not in params


class TestCreateServiceParams:
    def test_to_request_omits_unset_fields(self):
        params = CreateServiceParams.model_validate({
            "type": "background_worker", "name": "jobs", "ownerId": "own-1", "repo": "https://x/y",
        })
        assert params.to_request() == {
            "type": "background_worker", "name": "jobs", "ownerId": "own-1", "repo": "https://x/y",
        }
        assert params.type is ServiceType.BACKGROUND_WORKER

    def test_plan_is_an_enum(self):
        params = CreateServiceParams.model_validate({
            "type": "web_service", "name": "w", "ownerId": "o", "repo": "r", "plan": "pro_plus",
        })
        assert params.plan is ServicePlan.PRO_PLUS
        assert params.to_request()["plan"] == "pro_plus"

    def test_rejects_unknown_plan(self):
        with pytest.raises(ValidationError):
            CreateServiceParams.model_validate({
                "type": "web_service", "name": "w", "ownerId": "o", "repo": "r", "plan": "enterprise",
            })

    def test_rejects_zero_instances(self):
        with pytest.raises(ValidationError):
            CreateServiceParams.model_validate({
                "type": "web_service", "name": "w", "ownerId": "o", "repo": "r", "numInstances": 0,
            })


class TestManageDomainsParams:
    def test_domain_is_optional_at_schema_level(self):
        params = ManageDomainsParams.model_validate({"serviceId": "srv-1", "action": "add"})
        assert params.domain is None
