"""Railway tool catalogue exposed to MCP clients.

Tool names, descriptions and camelCase parameter names are the public
contract agents see. Each tool maps onto one `WorkspaceRouter` method.
"""

from __future__ import annotations

from typing import Annotated, Any

import orjson
from pydantic import Field, field_validator

from railmux.runtime.routing import tagged_to_dicts

from .base import EmptyParams, RouterTool, ToolMetadata, ToolParams

ProjectId = Annotated[str, Field(alias="projectId", description="The Railway project ID")]
ServiceId = Annotated[str, Field(alias="serviceId", description="The service ID")]
EnvironmentId = Annotated[str, Field(alias="environmentId", description="The environment ID")]
DeploymentId = Annotated[str, Field(alias="deploymentId", description="The deployment ID")]


# ─────────────────────────────────────────────────────────────────────────────
# Parameter schemas
# ─────────────────────────────────────────────────────────────────────────────


class TeamParams(ToolParams):
    team_id: str = Field(..., alias="teamId", description="The team ID")


class ProjectParams(ToolParams):
    project_id: ProjectId


class CreateProjectParams(ToolParams):
    name: str = Field(..., description="Name for the new project")
    description: str | None = Field(default=None, description="Optional project description")


class ServiceParams(ToolParams):
    service_id: ServiceId


class CreateServiceParams(ToolParams):
    project_id: ProjectId
    name: str = Field(..., description="Name for the new service")
    repo: str | None = Field(default=None, description="GitHub repo in 'owner/repo' format (e.g. 'user/my-app')")
    image: str | None = Field(default=None, description="Docker image (e.g. 'redis:7-alpine', 'postgres:16')")


class ListDeploymentsParams(ToolParams):
    project_id: ProjectId
    service_id: ServiceId
    environment_id: EnvironmentId


class DeploymentParams(ToolParams):
    deployment_id: DeploymentId


class ServiceEnvironmentParams(ToolParams):
    service_id: ServiceId
    environment_id: EnvironmentId


class CreateEnvironmentParams(ToolParams):
    project_id: ProjectId
    name: str = Field(..., description="Name for the new environment (e.g. 'staging')")


class EnvironmentParams(ToolParams):
    environment_id: EnvironmentId


class GetVariablesParams(ToolParams):
    project_id: ProjectId
    environment_id: EnvironmentId
    service_id: str | None = Field(
        default=None, alias="serviceId",
        description="The service ID (omit for shared/project-level variables)",
    )


class SetVariablesParams(ToolParams):
    project_id: ProjectId
    environment_id: EnvironmentId
    service_id: ServiceId
    variables: dict[str, Any] = Field(
        ...,
        description='JSON object of key-value pairs, e.g. {"PORT":"3000","NODE_ENV":"production"}',
        json_schema_extra={"type": "string"},
    )

    @field_validator("variables", mode="before")
    @classmethod
    def _parse_json(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return orjson.loads(v)
            except orjson.JSONDecodeError as e:
                raise ValueError(f"variables must be a JSON object string: {e}") from e
        return v


class DeleteVariableParams(ToolParams):
    project_id: ProjectId
    environment_id: EnvironmentId
    service_id: ServiceId
    name: str = Field(..., description="The variable name to delete")


class CustomDomainParams(ToolParams):
    service_id: ServiceId
    environment_id: EnvironmentId
    domain: str = Field(..., description="The custom domain (e.g. 'api.example.com')")


class DeploymentLogsParams(ToolParams):
    deployment_id: DeploymentId
    limit: int = Field(default=100, description="Max number of log lines (default 100)")


class CreateVolumeParams(ToolParams):
    project_id: ProjectId
    environment_id: EnvironmentId
    service_id: str = Field(..., alias="serviceId", description="The service ID to attach the volume to")
    mount_path: str = Field(
        ..., alias="mountPath", description="Mount path inside the container (e.g. '/data')",
    )


class RawGraphQLParams(ToolParams):
    query: str = Field(..., description="The full GraphQL query or mutation string")
    variables: str | None = Field(default=None, description='JSON string of variables (e.g. \'{"id": "abc123"}\')')


# ─────────────────────────────────────────────────────────────────────────────
# Catalogue
# ─────────────────────────────────────────────────────────────────────────────


def _meta(name: str, description: str, category: str) -> ToolMetadata:
    return ToolMetadata(name=name, description=description, category=category)


async def _list_workspaces(router: Any, _: EmptyParams) -> dict[str, Any]:
    return {
        "workspaces": router.labels,
        "identities": tagged_to_dicts(await router.describe_workspaces()),
    }


def build_catalog() -> list[RouterTool[Any]]:
    """All Railway tools, in display order."""
    return [
        # Workspaces / teams
        RouterTool(
            _meta("list_workspaces", "List the configured Railway workspaces and who each token belongs to", "workspaces"),
            EmptyParams, _list_workspaces,
        ),
        RouterTool(
            _meta("list_teams", "List all teams/organizations you belong to, across every workspace", "teams"),
            EmptyParams, lambda r, p: _tagged(r.list_teams()),
        ),
        # Projects
        RouterTool(
            _meta(
                "list_projects",
                "List ALL Railway projects across every configured workspace, grouped by workspace.",
                "projects",
            ),
            EmptyParams, lambda r, p: r.list_all_projects(),
        ),
        RouterTool(
            _meta("list_personal_projects", "List only your personal Railway projects", "projects"),
            EmptyParams, lambda r, p: r.list_personal_projects(),
        ),
        RouterTool(
            _meta("list_team_projects", "List projects for a specific team/organization", "projects"),
            TeamParams, lambda r, p: r.list_team_projects(p.team_id),
        ),
        RouterTool(
            _meta("get_project", "Get details of a specific Railway project", "projects"),
            ProjectParams, lambda r, p: r.get_project(p.project_id),
        ),
        RouterTool(
            _meta("create_project", "Create a new Railway project in the primary workspace", "projects"),
            CreateProjectParams, lambda r, p: r.create_project(p.name, p.description),
        ),
        RouterTool(
            _meta("delete_project", "Delete a Railway project (irreversible!)", "projects"),
            ProjectParams, lambda r, p: r.delete_project(p.project_id),
        ),
        # Services
        RouterTool(
            _meta("list_services", "List all services in a Railway project", "services"),
            ProjectParams, lambda r, p: r.list_services(p.project_id),
        ),
        RouterTool(
            _meta("create_service", "Create a new service in a project (from GitHub repo or Docker image)", "services"),
            CreateServiceParams, lambda r, p: r.create_service(p.project_id, p.name, p.repo, p.image),
        ),
        RouterTool(
            _meta("delete_service", "Delete a service from a project", "services"),
            ServiceParams, lambda r, p: r.delete_service(p.service_id),
        ),
        # Deployments
        RouterTool(
            _meta("list_deployments", "List deployments for a service in an environment", "deployments"),
            ListDeploymentsParams,
            lambda r, p: r.list_deployments(p.project_id, p.service_id, p.environment_id),
        ),
        RouterTool(
            _meta("get_deployment", "Get details of a specific deployment", "deployments"),
            DeploymentParams, lambda r, p: r.get_deployment(p.deployment_id),
        ),
        RouterTool(
            _meta("deploy_service", "Trigger a new deployment for a service", "deployments"),
            ServiceEnvironmentParams, lambda r, p: r.deploy_service(p.service_id, p.environment_id),
        ),
        RouterTool(
            _meta("redeploy_service", "Redeploy the latest deployment of a service", "deployments"),
            ServiceEnvironmentParams, lambda r, p: r.redeploy_service(p.service_id, p.environment_id),
        ),
        RouterTool(
            _meta("restart_deployment", "Restart a specific deployment", "deployments"),
            DeploymentParams, lambda r, p: r.restart_deployment(p.deployment_id),
        ),
        RouterTool(
            _meta("remove_deployment", "Remove/cancel a specific deployment", "deployments"),
            DeploymentParams, lambda r, p: r.remove_deployment(p.deployment_id),
        ),
        # Environments
        RouterTool(
            _meta("list_environments", "List all environments in a project", "environments"),
            ProjectParams, lambda r, p: r.list_environments(p.project_id),
        ),
        RouterTool(
            _meta("create_environment", "Create a new environment in a project", "environments"),
            CreateEnvironmentParams, lambda r, p: r.create_environment(p.project_id, p.name),
        ),
        RouterTool(
            _meta("delete_environment", "Delete an environment from a project", "environments"),
            EnvironmentParams, lambda r, p: r.delete_environment(p.environment_id),
        ),
        # Variables
        RouterTool(
            _meta("get_variables", "Get environment variables for a service", "variables"),
            GetVariablesParams, lambda r, p: r.get_variables(p.project_id, p.environment_id, p.service_id),
        ),
        RouterTool(
            _meta("set_variables", "Set one or more environment variables (upsert)", "variables"),
            SetVariablesParams,
            lambda r, p: r.upsert_variables(p.project_id, p.environment_id, p.service_id, p.variables),
        ),
        RouterTool(
            _meta("delete_variable", "Delete a single environment variable", "variables"),
            DeleteVariableParams,
            lambda r, p: r.delete_variable(p.project_id, p.environment_id, p.service_id, p.name),
        ),
        # Domains
        RouterTool(
            _meta(
                "create_service_domain",
                "Generate a Railway-provided domain (*.up.railway.app) for a service",
                "domains",
            ),
            ServiceEnvironmentParams, lambda r, p: r.create_service_domain(p.service_id, p.environment_id),
        ),
        RouterTool(
            _meta("create_custom_domain", "Attach a custom domain to a service", "domains"),
            CustomDomainParams,
            lambda r, p: r.create_custom_domain(p.service_id, p.environment_id, p.domain),
        ),
        RouterTool(
            _meta("delete_service_domain", "Remove the Railway-provided domain from a service", "domains"),
            ServiceEnvironmentParams, lambda r, p: r.delete_service_domain(p.service_id, p.environment_id),
        ),
        # Logs
        RouterTool(
            _meta("get_deployment_logs", "Get runtime/application logs for a deployment", "logs"),
            DeploymentLogsParams, lambda r, p: r.get_deployment_logs(p.deployment_id, p.limit),
        ),
        RouterTool(
            _meta("get_build_logs", "Get build logs for a deployment", "logs"),
            DeploymentParams, lambda r, p: r.get_build_logs(p.deployment_id),
        ),
        # Volumes
        RouterTool(
            _meta("create_volume", "Create a persistent volume attached to a service", "volumes"),
            CreateVolumeParams,
            lambda r, p: r.create_volume(p.project_id, p.environment_id, p.service_id, p.mount_path),
        ),
        # Escape hatches
        RouterTool(
            _meta(
                "raw_graphql",
                "Execute an arbitrary GraphQL query/mutation against Railway's API using the primary "
                "workspace. Use this for operations not covered by other tools.",
                "graphql",
            ),
            RawGraphQLParams, lambda r, p: r.raw_query(p.query, p.variables),
        ),
        RouterTool(
            _meta(
                "introspect_schema",
                "Fetch the full Railway GraphQL schema. Useful for discovering available operations "
                "beyond the built-in tools.",
                "graphql",
            ),
            EmptyParams, lambda r, p: r.introspect(),
        ),
    ]


async def _tagged(pending: Any) -> list[dict[str, Any]]:
    return tagged_to_dicts(await pending)
