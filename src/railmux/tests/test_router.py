"""Tests for WorkspaceRouter operation wiring."""

from __future__ import annotations

import pytest
from conftest import FakeConnection, make_router

from railmux.client import RailwayClient
from railmux.client import operations as ops
from railmux.foundation.config import HttpSettings, WorkspaceCredential
from railmux.foundation.errors import AggregateFailure, ErrorCode, ProtocolError, RailwayError
from railmux.runtime.routing import Strategy, TaggedResult, WorkspaceRouter, strategy_of

FAN_OUT = {"list_teams", "list_personal_projects_by_workspace", "describe_workspaces"}
SINGLE_TARGET = {"create_project", "introspect", "raw_query"}
FALLBACK = {
    "list_team_projects", "get_project", "delete_project",
    "list_services", "create_service", "delete_service",
    "list_deployments", "get_deployment", "deploy_service", "redeploy_service",
    "restart_deployment", "remove_deployment",
    "list_environments", "create_environment", "delete_environment",
    "get_variables", "upsert_variables", "delete_variable",
    "create_service_domain", "create_custom_domain", "delete_service_domain",
    "get_deployment_logs", "get_build_logs", "create_volume",
}

NOT_AUTHORIZED = ProtocolError("GraphQL errors: Not Authorized")


@pytest.mark.parametrize(
    ("names", "strategy"),
    [(FAN_OUT, Strategy.FAN_OUT), (SINGLE_TARGET, Strategy.SINGLE_TARGET), (FALLBACK, Strategy.FALLBACK)],
)
def test_every_operation_has_its_strategy(names: set[str], strategy: Strategy) -> None:
    for name in names:
        assert strategy_of(getattr(WorkspaceRouter, name)) == strategy, name


def test_router_basics() -> None:
    router = make_router(personal=FakeConnection(), team=FakeConnection())
    assert router.labels == ["personal", "team"]
    assert len(router) == 2
    assert "personal" in repr(router)


def test_duplicate_labels_pass_through() -> None:
    router = make_router(a=FakeConnection())
    twice = WorkspaceRouter(list(router.handles) * 2)
    assert twice.labels == ["a", "a"]


def test_from_credentials_opens_one_client_per_workspace() -> None:
    creds = [WorkspaceCredential(token="t1", label="one"), WorkspaceCredential(token="t2", label="two")]
    router = WorkspaceRouter.from_credentials(creds, settings=HttpSettings())
    assert router.labels == ["one", "two"]
    assert all(isinstance(h.connection, RailwayClient) for h in router.handles)
    assert [h.connection.label for h in router.handles] == ["one", "two"]


@pytest.mark.asyncio
async def test_get_project_falls_back_to_owning_workspace() -> None:
    personal = FakeConnection(error=NOT_AUTHORIZED)
    team = FakeConnection({"project": {"id": "prj_1", "name": "api"}})
    router = make_router(personal=personal, team=team)

    result = await router.get_project("prj_1")

    assert result == {"project": {"id": "prj_1", "name": "api"}}
    assert personal.calls[0][1] == {"id": "prj_1"}
    assert team.calls == [(ops.GET_PROJECT, {"id": "prj_1"})]


@pytest.mark.asyncio
async def test_fallback_failure_surfaces_last_message() -> None:
    router = make_router(
        a=FakeConnection(error=NOT_AUTHORIZED),
        b=FakeConnection(error=ProtocolError("GraphQL errors: Deployment not found")),
    )
    with pytest.raises(AggregateFailure, match="Deployment not found"):
        await router.get_deployment_logs("dep_1")


@pytest.mark.asyncio
async def test_deployment_logs_default_limit() -> None:
    conn = FakeConnection({"deploymentLogs": []})
    await make_router(a=conn).get_deployment_logs("dep_1")
    assert conn.calls[0][1] == {"deploymentId": "dep_1", "limit": 100}


@pytest.mark.asyncio
async def test_create_service_source() -> None:
    conn = FakeConnection({"serviceCreate": {"id": "svc_1"}})
    router = make_router(a=conn)
    await router.create_service("prj_1", "cache", image="redis:7-alpine")
    await router.create_service("prj_1", "empty")
    assert conn.calls[0][1]["input"]["source"] == {"image": "redis:7-alpine"}
    assert conn.calls[1][1]["input"]["source"] is None


@pytest.mark.asyncio
async def test_list_teams_fans_out() -> None:
    a = FakeConnection({"me": {"teams": {"edges": [{"node": {"id": "t1"}}]}}})
    b = FakeConnection(error=NOT_AUTHORIZED)
    c = FakeConnection({"me": {"teams": {"edges": []}}})
    results = await make_router(a=a, b=b, c=c).list_teams()
    assert [r.workspace for r in results] == ["a", "c"]
    assert all(isinstance(r, TaggedResult) for r in results)


@pytest.mark.asyncio
async def test_list_all_projects_groups_by_workspace() -> None:
    def projects(*names: str) -> dict:
        return {"me": {"projects": {"edges": [{"node": {"name": n}} for n in names]}}}

    router = make_router(
        personal=FakeConnection(projects("blog")),
        broken=FakeConnection(error=NOT_AUTHORIZED),
        team=FakeConnection(projects("api", "worker")),
    )
    assert await router.list_all_projects() == {
        "workspaces": [
            {"workspace": "personal", "projects": [{"name": "blog"}]},
            {"workspace": "team", "projects": [{"name": "api"}, {"name": "worker"}]},
        ]
    }


@pytest.mark.asyncio
async def test_list_all_projects_with_no_workspaces() -> None:
    assert await WorkspaceRouter([]).list_all_projects() == {"workspaces": []}


@pytest.mark.asyncio
async def test_create_project_targets_primary_only() -> None:
    primary = FakeConnection(error=ProtocolError("GraphQL errors: quota exceeded"))
    secondary = FakeConnection({"projectCreate": {"id": "prj_2"}})
    router = make_router(primary=primary, secondary=secondary)

    with pytest.raises(ProtocolError, match="quota exceeded"):
        await router.create_project("scratch", "tmp")

    assert primary.calls[0][1] == {"input": {"name": "scratch", "description": "tmp"}}
    assert secondary.calls == []


@pytest.mark.asyncio
async def test_raw_query_parses_variables() -> None:
    conn = FakeConnection({"ok": True})
    router = make_router(a=conn, b=FakeConnection())
    assert await router.raw_query("query($id: String!) { project(id: $id) { id } }", '{"id": "abc"}') == {"ok": True}
    assert conn.calls[0][1] == {"id": "abc"}


@pytest.mark.asyncio
@pytest.mark.parametrize("variables", ["{not json", "[1, 2]"])
async def test_raw_query_rejects_bad_variables(variables: str) -> None:
    conn = FakeConnection({"ok": True})
    with pytest.raises(RailwayError) as info:
        await make_router(a=conn).raw_query("query { me { id } }", variables)
    assert info.value.code == ErrorCode.INVALID_PARAMS
    assert conn.calls == []


@pytest.mark.asyncio
async def test_single_target_without_workspaces() -> None:
    with pytest.raises(AggregateFailure, match="No workspaces configured"):
        await WorkspaceRouter([]).introspect()


@pytest.mark.asyncio
async def test_describe_workspaces() -> None:
    me = {"me": {"name": "Ada", "teams": {"edges": [{"node": {"name": "Acme"}}, {"node": {"name": "Beta"}}]}}}
    results = await make_router(a=FakeConnection(me), b=FakeConnection({"me": {}})).describe_workspaces()
    assert [r.data for r in results] == ["Ada (teams: Acme, Beta)", "Unknown (teams: none)"]


@pytest.mark.asyncio
async def test_router_closes_connections() -> None:
    a, b = FakeConnection(), FakeConnection()
    async with make_router(a=a, b=b):
        pass
    assert a.closed and b.closed
