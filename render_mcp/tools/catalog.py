"""Tool catalog: typed parameter records and the JSON schemas advertised for them.

Every tool takes a single ``params`` object. The pydantic models below are
both the advertised input schema and the one place arguments get validated.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..render.models import EnvVar, ServicePlan, ServiceType
from . import handlers


class ToolParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


P = TypeVar("P", bound=ToolParams)


class ToolArguments(BaseModel, Generic[P]):
    """The ``{"params": {...}}`` wrapper every tool call carries."""

    model_config = ConfigDict(extra="forbid")

    params: P


class EnvVarParam(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str
    value: str

    def to_env_var(self) -> EnvVar:
        return EnvVar(key=self.key, value=self.value)


# ── Parameter records ───────────────────────────────────────────────


class ListServicesParams(ToolParams):
    limit: int | None = Field(
        default=None, description="Number of services to return (default: 20, max: 100)",
    )
    cursor: str | None = Field(default=None, description="Pagination cursor for fetching next page")


class GetServiceParams(ToolParams):
    service_id: str = Field(alias="serviceId", min_length=1, description="The ID of the service to retrieve")


class DeployServiceParams(ToolParams):
    service_id: str = Field(alias="serviceId", min_length=1, description="The ID of the service to deploy")
    clear_cache: bool = Field(
        default=False, alias="clearCache",
        description="Whether to clear cache before deploy (default: false)",
    )


class CreateServiceParams(ToolParams):
    type: ServiceType = Field(description="Type of service to create")
    name: str = Field(min_length=1, description="Name of the service")
    owner_id: str = Field(alias="ownerId", min_length=1, description="ID of the owner (user or team)")
    repo: str = Field(min_length=1, description="URL of the repo to deploy from")
    branch: str | None = Field(default=None, description="Branch to deploy (default: main)")
    env_vars: list[EnvVarParam] | None = Field(
        default=None, alias="envVars", description="Environment variables for the service",
    )
    build_command: str | None = Field(default=None, alias="buildCommand", description="Command to build the service")
    start_command: str | None = Field(
        default=None, alias="startCommand", description="Command to start the service (web services only)",
    )
    publish_path: str | None = Field(
        default=None, alias="publishPath", description="Path to publish (static sites only)",
    )
    plan: ServicePlan | None = Field(default=None, description="Service plan (default: free)")
    region: str | None = Field(default=None, description="Region to deploy to")
    num_instances: int | None = Field(
        default=None, alias="numInstances", ge=1, description="Number of instances (default: 1)",
    )
    auto_deploy: bool | None = Field(
        default=None, alias="autoDeploy", description="Whether to auto-deploy on push (default: true)",
    )
    pull_request_previews_enabled: bool | None = Field(
        default=None, alias="pullRequestPreviewsEnabled",
        description="Whether to create preview environments for pull requests",
    )

    def to_request(self) -> dict[str, Any]:
        """Request body for POST /services, camelCase, unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeleteServiceParams(ToolParams):
    service_id: str = Field(alias="serviceId", min_length=1, description="The ID of the service to delete")


class GetDeploysParams(ToolParams):
    service_id: str = Field(
        alias="serviceId", min_length=1, description="The ID of the service to get deploys for",
    )
    limit: int | None = Field(
        default=None, description="Number of deploys to return (default: 20, max: 100)",
    )
    cursor: str | None = Field(default=None, description="Pagination cursor for fetching next page")


class ManageEnvVarsParams(ToolParams):
    service_id: str = Field(
        alias="serviceId", min_length=1, description="The ID of the service to manage env vars for",
    )
    env_vars: list[EnvVarParam] = Field(
        alias="envVars",
        description="Complete set of environment variables; replaces the existing ones",
    )


class ManageDomainsParams(ToolParams):
    service_id: str = Field(
        alias="serviceId", min_length=1, description="The ID of the service to manage domains for",
    )
    action: Literal["add", "remove", "list"] = Field(description="Action to perform")
    domain: str | None = Field(
        default=None,
        description="Domain name for add, domain ID for remove",
    )


# ── Catalog ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolSpec:
    """One catalog entry: name, description, parameter record and the handler it feeds."""

    name: str
    description: str
    params_model: type[ToolParams]
    handler: Callable[..., str]

    @property
    def arguments_model(self) -> type[ToolArguments]:
        return ToolArguments[self.params_model]

    def input_schema(self) -> dict[str, Any]:
        return self.arguments_model.model_json_schema(by_alias=True)

    def parse(self, arguments: dict[str, Any]) -> ToolParams:
        return self.arguments_model.model_validate(arguments).params


def build_catalog() -> dict[str, ToolSpec]:
    """The fixed tool catalog, in advertised order."""
    specs = [
        ToolSpec("list_services", "List all services in your Render account",
                 ListServicesParams, handlers.list_services),
        ToolSpec("get_service", "Get details of a specific service",
                 GetServiceParams, handlers.get_service),
        ToolSpec("deploy_service", "Deploy a service",
                 DeployServiceParams, handlers.deploy_service),
        ToolSpec("create_service", "Create a new service",
                 CreateServiceParams, handlers.create_service),
        ToolSpec("delete_service", "Delete a service",
                 DeleteServiceParams, handlers.delete_service),
        ToolSpec("get_deploys", "Get deployment history for a service",
                 GetDeploysParams, handlers.get_deploys),
        ToolSpec("manage_env_vars", "Manage environment variables for a service",
                 ManageEnvVarsParams, handlers.manage_env_vars),
        ToolSpec("manage_domains", "Manage custom domains for a service",
                 ManageDomainsParams, handlers.manage_domains),
    ]
    return {spec.name: spec for spec in specs}
