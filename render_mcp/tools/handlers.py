"""Tool handlers: one Render API call per tool, rendered to response text.

Handlers are synchronous and receive pre-validated parameter records; the
dispatcher runs them off the event loop.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import LocalValidationError

if TYPE_CHECKING:
    from ..render.client import RenderClient
    from .catalog import (
        CreateServiceParams,
        DeleteServiceParams,
        DeployServiceParams,
        GetDeploysParams,
        GetServiceParams,
        ListServicesParams,
        ManageDomainsParams,
        ManageEnvVarsParams,
    )

logger = logging.getLogger(__name__)


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2)


def list_services(client: RenderClient, params: ListServicesParams) -> str:
    page = client.list_services(limit=params.limit, cursor=params.cursor)
    return _to_json(page.to_dict())


def get_service(client: RenderClient, params: GetServiceParams) -> str:
    return _to_json(client.get_service(params.service_id))


def deploy_service(client: RenderClient, params: DeployServiceParams) -> str:
    deploy = client.deploy_service(params.service_id, clear_cache=params.clear_cache)
    message = f"Successfully deployed service {params.service_id}."
    if deploy.get("id"):
        message += f" Deployment ID: {deploy['id']}"
    if deploy.get("status"):
        message += f", Status: {deploy['status']}"
    return message


def create_service(client: RenderClient, params: CreateServiceParams) -> str:
    return _to_json(client.create_service(params.to_request()))


def delete_service(client: RenderClient, params: DeleteServiceParams) -> str:
    client.delete_service(params.service_id)
    return f"Service {params.service_id} deleted successfully"


def get_deploys(client: RenderClient, params: GetDeploysParams) -> str:
    page = client.get_deploys(params.service_id, limit=params.limit, cursor=params.cursor)
    return _to_json(page.to_dict())


def manage_env_vars(client: RenderClient, params: ManageEnvVarsParams) -> str:
    env_vars = [ev.to_env_var() for ev in params.env_vars]
    logger.info("Replacing %d env vars", len(env_vars), extra={"service_id": params.service_id})
    return _to_json(client.update_env_vars(params.service_id, env_vars))


def manage_domains(client: RenderClient, params: ManageDomainsParams) -> str:
    if params.action == "list":
        return _to_json(client.list_custom_domains(params.service_id))

    if params.action == "add":
        if not params.domain:
            raise LocalValidationError("Domain name is required for add action")
        return _to_json(client.add_custom_domain(params.service_id, params.domain))

    # remove: `domain` carries the custom domain's ID
    if not params.domain:
        raise LocalValidationError("Domain ID is required for remove action")
    client.remove_custom_domain(params.service_id, params.domain)
    return f"Domain {params.domain} removed successfully from service {params.service_id}"
