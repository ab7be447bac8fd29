"""Railway GraphQL operation catalogue.

Each function runs one document against one `BackendConnection` and
returns the raw ``data`` object. The router decides which workspace(s)
a function is sent to.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson

from railmux.foundation.errors import ErrorCode, RailwayError

from .graphql import BackendConnection, JsonDict

_PROJECT_FIELDS = """
  id
  name
  description
  createdAt
  updatedAt
  environments { edges { node { id name } } }
  services { edges { node { id name } } }
"""

# ─── Teams ─────────────────────────────────────────────────────

LIST_TEAMS = """
query {
  me {
    teams { edges { node { id name avatar createdAt } } }
  }
}
"""

# ─── Projects ──────────────────────────────────────────────────

LIST_PERSONAL_PROJECTS = f"""
query {{
  me {{
    projects {{ edges {{ node {{ {_PROJECT_FIELDS} }} }} }}
  }}
}}
"""

LIST_TEAM_PROJECTS = f"""
query ($teamId: String!) {{
  team(id: $teamId) {{
    id
    name
    projects {{ edges {{ node {{ {_PROJECT_FIELDS} }} }} }}
  }}
}}
"""

GET_PROJECT = """
query ($id: String!) {
  project(id: $id) {
    id
    name
    description
    createdAt
    updatedAt
    environments { edges { node { id name } } }
    services { edges { node { id name icon } } }
  }
}
"""

CREATE_PROJECT = """
mutation ($input: ProjectCreateInput!) {
  projectCreate(input: $input) { id name }
}
"""

DELETE_PROJECT = """
mutation ($id: String!) {
  projectDelete(id: $id)
}
"""

# ─── Services ──────────────────────────────────────────────────

LIST_SERVICES = """
query ($projectId: String!) {
  project(id: $projectId) {
    services { edges { node { id name icon createdAt updatedAt } } }
  }
}
"""

CREATE_SERVICE = """
mutation ($input: ServiceCreateInput!) {
  serviceCreate(input: $input) { id name }
}
"""

DELETE_SERVICE = """
mutation ($id: String!) {
  serviceDelete(id: $id)
}
"""

# ─── Deployments ───────────────────────────────────────────────

LIST_DEPLOYMENTS = """
query ($input: DeploymentListInput!) {
  deployments(input: $input) {
    edges { node { id status createdAt updatedAt staticUrl meta } }
  }
}
"""

GET_DEPLOYMENT = """
query ($id: String!) {
  deployment(id: $id) { id status createdAt updatedAt staticUrl meta canRedeploy }
}
"""

REDEPLOY_SERVICE = """
mutation ($serviceId: String!, $environmentId: String!) {
  serviceInstanceRedeploy(serviceId: $serviceId, environmentId: $environmentId)
}
"""

DEPLOY_SERVICE = """
mutation ($serviceId: String!, $environmentId: String!) {
  serviceInstanceDeployV2(serviceId: $serviceId, environmentId: $environmentId) { id status }
}
"""

REMOVE_DEPLOYMENT = """
mutation ($id: String!) {
  deploymentRemove(id: $id)
}
"""

RESTART_DEPLOYMENT = """
mutation ($id: String!) {
  deploymentRestart(id: $id)
}
"""

# ─── Environments ──────────────────────────────────────────────

LIST_ENVIRONMENTS = """
query ($projectId: String!) {
  project(id: $projectId) {
    environments { edges { node { id name createdAt updatedAt } } }
  }
}
"""

CREATE_ENVIRONMENT = """
mutation ($input: EnvironmentCreateInput!) {
  environmentCreate(input: $input) { id name }
}
"""

DELETE_ENVIRONMENT = """
mutation ($id: String!) {
  environmentDelete(id: $id)
}
"""

# ─── Variables ─────────────────────────────────────────────────

GET_VARIABLES = """
query ($projectId: String!, $environmentId: String!, $serviceId: String) {
  variables(projectId: $projectId, environmentId: $environmentId, serviceId: $serviceId)
}
"""

UPSERT_VARIABLES = """
mutation ($input: VariableCollectionUpsertInput!) {
  variableCollectionUpsert(input: $input)
}
"""

DELETE_VARIABLE = """
mutation ($input: VariableDeleteInput!) {
  variableDelete(input: $input)
}
"""

# ─── Domains ───────────────────────────────────────────────────

CREATE_SERVICE_DOMAIN = """
mutation ($input: ServiceDomainCreateInput!) {
  serviceDomainCreate(input: $input) { id domain serviceId }
}
"""

CREATE_CUSTOM_DOMAIN = """
mutation ($input: CustomDomainCreateInput!) {
  customDomainCreate(input: $input) {
    id
    domain
    status { dnsRecords { requiredValue currentValue status } }
  }
}
"""

DELETE_SERVICE_DOMAIN = """
mutation ($environmentId: String!, $serviceId: String!) {
  serviceDomainDelete(environmentId: $environmentId, serviceId: $serviceId)
}
"""

# ─── Logs ──────────────────────────────────────────────────────

DEPLOYMENT_LOGS = """
query ($deploymentId: String!, $limit: Int) {
  deploymentLogs(deploymentId: $deploymentId, limit: $limit) { timestamp message severity }
}
"""

BUILD_LOGS = """
query ($deploymentId: String!) {
  buildLogs(deploymentId: $deploymentId) { timestamp message }
}
"""

# ─── Volumes ───────────────────────────────────────────────────

CREATE_VOLUME = """
mutation ($input: VolumeCreateInput!) {
  volumeCreate(input: $input) { id name }
}
"""

# ─── Introspection / identity ──────────────────────────────────

INTROSPECT = """
query {
  __schema {
    queryType { name }
    mutationType { name }
    types {
      name
      kind
      fields {
        name
        description
        args { name type { name kind } }
      }
    }
  }
}
"""

WHOAMI = """
query {
  me {
    name
    email
    teams { edges { node { id name } } }
  }
}
"""


def nodes(connection: Any) -> list[Any]:
    """Flatten a Relay ``{edges: [{node}]}`` connection; missing parts yield []."""
    if not isinstance(connection, dict):
        return []
    return [e["node"] for e in connection.get("edges") or [] if isinstance(e, dict) and "node" in e]


# ─────────────────────────────────────────────────────────────────────────────
# Operations
# ─────────────────────────────────────────────────────────────────────────────


async def list_teams(conn: BackendConnection) -> JsonDict:
    return await conn.execute(LIST_TEAMS)


async def list_personal_projects(conn: BackendConnection) -> JsonDict:
    return await conn.execute(LIST_PERSONAL_PROJECTS)


async def list_team_projects(conn: BackendConnection, team_id: str) -> JsonDict:
    return await conn.execute(LIST_TEAM_PROJECTS, {"teamId": team_id})


async def get_project(conn: BackendConnection, project_id: str) -> JsonDict:
    return await conn.execute(GET_PROJECT, {"id": project_id})


async def create_project(conn: BackendConnection, name: str, description: str | None = None) -> JsonDict:
    return await conn.execute(CREATE_PROJECT, {"input": {"name": name, "description": description}})


async def delete_project(conn: BackendConnection, project_id: str) -> JsonDict:
    return await conn.execute(DELETE_PROJECT, {"id": project_id})


async def list_services(conn: BackendConnection, project_id: str) -> JsonDict:
    return await conn.execute(LIST_SERVICES, {"projectId": project_id})


async def create_service(
    conn: BackendConnection,
    project_id: str,
    name: str,
    *,
    repo: str | None = None,
    image: str | None = None,
) -> JsonDict:
    source = {k: v for k, v in (("repo", repo), ("image", image)) if v}
    return await conn.execute(
        CREATE_SERVICE,
        {"input": {"projectId": project_id, "name": name, "source": source or None}},
    )


async def delete_service(conn: BackendConnection, service_id: str) -> JsonDict:
    return await conn.execute(DELETE_SERVICE, {"id": service_id})


async def list_deployments(
    conn: BackendConnection, project_id: str, service_id: str, environment_id: str,
) -> JsonDict:
    return await conn.execute(
        LIST_DEPLOYMENTS,
        {"input": {"projectId": project_id, "serviceId": service_id, "environmentId": environment_id}},
    )


async def get_deployment(conn: BackendConnection, deployment_id: str) -> JsonDict:
    return await conn.execute(GET_DEPLOYMENT, {"id": deployment_id})


async def redeploy_service(conn: BackendConnection, service_id: str, environment_id: str) -> JsonDict:
    return await conn.execute(REDEPLOY_SERVICE, {"serviceId": service_id, "environmentId": environment_id})


async def deploy_service(conn: BackendConnection, service_id: str, environment_id: str) -> JsonDict:
    return await conn.execute(DEPLOY_SERVICE, {"serviceId": service_id, "environmentId": environment_id})


async def remove_deployment(conn: BackendConnection, deployment_id: str) -> JsonDict:
    return await conn.execute(REMOVE_DEPLOYMENT, {"id": deployment_id})


async def restart_deployment(conn: BackendConnection, deployment_id: str) -> JsonDict:
    return await conn.execute(RESTART_DEPLOYMENT, {"id": deployment_id})


async def list_environments(conn: BackendConnection, project_id: str) -> JsonDict:
    return await conn.execute(LIST_ENVIRONMENTS, {"projectId": project_id})


async def create_environment(conn: BackendConnection, project_id: str, name: str) -> JsonDict:
    return await conn.execute(CREATE_ENVIRONMENT, {"input": {"projectId": project_id, "name": name}})


async def delete_environment(conn: BackendConnection, environment_id: str) -> JsonDict:
    return await conn.execute(DELETE_ENVIRONMENT, {"id": environment_id})


async def get_variables(
    conn: BackendConnection, project_id: str, environment_id: str, service_id: str | None = None,
) -> JsonDict:
    return await conn.execute(
        GET_VARIABLES,
        {"projectId": project_id, "environmentId": environment_id, "serviceId": service_id},
    )


async def upsert_variables(
    conn: BackendConnection,
    project_id: str,
    environment_id: str,
    service_id: str,
    variables: Mapping[str, Any],
) -> JsonDict:
    return await conn.execute(
        UPSERT_VARIABLES,
        {"input": {
            "projectId": project_id,
            "environmentId": environment_id,
            "serviceId": service_id,
            "variables": dict(variables),
        }},
    )


async def delete_variable(
    conn: BackendConnection, project_id: str, environment_id: str, service_id: str, name: str,
) -> JsonDict:
    return await conn.execute(
        DELETE_VARIABLE,
        {"input": {
            "projectId": project_id,
            "environmentId": environment_id,
            "serviceId": service_id,
            "name": name,
        }},
    )


async def create_service_domain(conn: BackendConnection, service_id: str, environment_id: str) -> JsonDict:
    return await conn.execute(
        CREATE_SERVICE_DOMAIN, {"input": {"serviceId": service_id, "environmentId": environment_id}},
    )


async def create_custom_domain(
    conn: BackendConnection, service_id: str, environment_id: str, domain: str,
) -> JsonDict:
    return await conn.execute(
        CREATE_CUSTOM_DOMAIN,
        {"input": {"serviceId": service_id, "environmentId": environment_id, "domain": domain}},
    )


async def delete_service_domain(conn: BackendConnection, service_id: str, environment_id: str) -> JsonDict:
    return await conn.execute(
        DELETE_SERVICE_DOMAIN, {"environmentId": environment_id, "serviceId": service_id},
    )


async def get_deployment_logs(conn: BackendConnection, deployment_id: str, limit: int = 100) -> JsonDict:
    return await conn.execute(DEPLOYMENT_LOGS, {"deploymentId": deployment_id, "limit": limit})


async def get_build_logs(conn: BackendConnection, deployment_id: str) -> JsonDict:
    return await conn.execute(BUILD_LOGS, {"deploymentId": deployment_id})


async def create_volume(
    conn: BackendConnection, project_id: str, environment_id: str, service_id: str, mount_path: str,
) -> JsonDict:
    return await conn.execute(
        CREATE_VOLUME,
        {"input": {
            "projectId": project_id,
            "environmentId": environment_id,
            "serviceId": service_id,
            "mountPath": mount_path,
        }},
    )


async def introspect(conn: BackendConnection) -> JsonDict:
    return await conn.execute(INTROSPECT)


def parse_variables(variables: str | Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Accept GraphQL variables as a JSON object string or a mapping."""
    if variables is None or variables == "":
        return None
    if isinstance(variables, Mapping):
        return dict(variables)
    try:
        parsed = orjson.loads(variables)
    except orjson.JSONDecodeError as e:
        raise RailwayError(f"Invalid variables JSON: {e}", code=ErrorCode.INVALID_PARAMS) from e
    if not isinstance(parsed, dict):
        raise RailwayError("Invalid variables JSON: expected an object", code=ErrorCode.INVALID_PARAMS)
    return parsed


async def raw_query(
    conn: BackendConnection, query: str, variables: str | Mapping[str, Any] | None = None,
) -> JsonDict:
    return await conn.execute(query, parse_variables(variables))


async def whoami(conn: BackendConnection) -> str:
    """Summarise the token's identity as ``"<name> (teams: a, b)"``."""
    data = await conn.execute(WHOAMI)
    me = data.get("me") or {}
    team_names = ", ".join(str(t.get("name")) for t in nodes(me.get("teams")))
    return f"{me.get('name') or 'Unknown'} (teams: {team_names or 'none'})"
