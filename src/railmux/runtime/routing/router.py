"""Workspace router: one logical Railway API over N workspace tokens.

Every public operation is bound to exactly one dispatch strategy with the
`routed` decorator. The decorated method only builds the per-workspace
closure; the strategy does the rest. Adding a backend operation means
picking a strategy and returning one closure.

Example:
    >>> router = WorkspaceRouter.from_credentials(load_workspaces())
    >>> await router.get_project("prj_123")          # fallback
    >>> await router.list_teams()                    # fan-out, tagged by workspace
    >>> await router.create_project("scratch")       # primary workspace only
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any

import httpx

from railmux.client import BackendConnection, JsonDict, RailwayClient
from railmux.client import operations as ops
from railmux.foundation.config import HttpSettings, WorkspaceCredential

from .strategies import Operation, Strategy, TaggedResult, WorkspaceHandle, from_all, on_primary, try_each

_DISPATCH = {
    Strategy.FALLBACK: try_each,
    Strategy.FAN_OUT: from_all,
    Strategy.SINGLE_TARGET: on_primary,
}


def routed(strategy: Strategy) -> Callable[[Callable[..., Operation[Any]]], Callable[..., Awaitable[Any]]]:
    """Bind a closure-building method to a dispatch strategy."""

    def decorator(build: Callable[..., Operation[Any]]) -> Callable[..., Awaitable[Any]]:
        dispatch = _DISPATCH[strategy]

        @functools.wraps(build)
        async def wrapper(self: WorkspaceRouter, *args: Any, **kwargs: Any) -> Any:
            return await dispatch(self._handles, build(self, *args, **kwargs), name=build.__name__)

        wrapper.strategy = strategy  # type: ignore[attr-defined]
        return wrapper

    return decorator


def strategy_of(method: Callable[..., Any]) -> Strategy | None:
    """Strategy a router method was bound to, if any."""
    return getattr(method, "strategy", None)


class WorkspaceRouter:
    """Routes Railway operations across an ordered, immutable set of workspaces.

    Handle order matters: the first handle is the primary for single-target
    operations and the first one tried on fallback.
    """

    __slots__ = ("_handles",)

    def __init__(self, handles: Iterable[WorkspaceHandle]) -> None:
        self._handles: tuple[WorkspaceHandle, ...] = tuple(handles)

    @classmethod
    def from_credentials(
        cls,
        credentials: Iterable[WorkspaceCredential],
        *,
        settings: HttpSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> WorkspaceRouter:
        """Open one `RailwayClient` per credential, preserving order."""
        return cls(
            WorkspaceHandle(c.label, RailwayClient.from_credential(c, settings=settings, transport=transport))
            for c in credentials
        )

    @classmethod
    def from_connections(cls, connections: Iterable[tuple[str, BackendConnection]]) -> WorkspaceRouter:
        return cls(WorkspaceHandle(label, conn) for label, conn in connections)

    @property
    def handles(self) -> tuple[WorkspaceHandle, ...]:
        return self._handles

    @property
    def labels(self) -> list[str]:
        return [h.label for h in self._handles]

    def __len__(self) -> int:
        return len(self._handles)

    def __repr__(self) -> str:
        return f"WorkspaceRouter(workspaces={self.labels!r})"

    async def aclose(self) -> None:
        """Close every connection that holds resources."""
        for handle in self._handles:
            if (close := getattr(handle.connection, "aclose", None)) is not None:
                await close()

    async def __aenter__(self) -> WorkspaceRouter:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    # ─── Teams ─────────────────────────────────────────────────

    @routed(Strategy.FAN_OUT)
    def list_teams(self) -> Operation[JsonDict]:
        return ops.list_teams

    # ─── Projects ──────────────────────────────────────────────

    @routed(Strategy.FAN_OUT)
    def list_personal_projects_by_workspace(self) -> Operation[JsonDict]:
        return ops.list_personal_projects

    async def list_all_projects(self) -> JsonDict:
        """Personal projects of every workspace, grouped by workspace."""
        results: list[TaggedResult[JsonDict]] = await self.list_personal_projects_by_workspace()
        return {
            "workspaces": [
                {"workspace": r.workspace, "projects": ops.nodes((r.data.get("me") or {}).get("projects"))}
                for r in results
            ]
        }

    list_personal_projects = list_all_projects

    @routed(Strategy.FALLBACK)
    def list_team_projects(self, team_id: str) -> Operation[JsonDict]:
        return lambda c: ops.list_team_projects(c, team_id)

    @routed(Strategy.FALLBACK)
    def get_project(self, project_id: str) -> Operation[JsonDict]:
        return lambda c: ops.get_project(c, project_id)

    @routed(Strategy.SINGLE_TARGET)
    def create_project(self, name: str, description: str | None = None) -> Operation[JsonDict]:
        return lambda c: ops.create_project(c, name, description)

    @routed(Strategy.FALLBACK)
    def delete_project(self, project_id: str) -> Operation[JsonDict]:
        return lambda c: ops.delete_project(c, project_id)

    # ─── Services ──────────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def list_services(self, project_id: str) -> Operation[JsonDict]:
        return lambda c: ops.list_services(c, project_id)

    @routed(Strategy.FALLBACK)
    def create_service(
        self, project_id: str, name: str, repo: str | None = None, image: str | None = None,
    ) -> Operation[JsonDict]:
        return lambda c: ops.create_service(c, project_id, name, repo=repo, image=image)

    @routed(Strategy.FALLBACK)
    def delete_service(self, service_id: str) -> Operation[JsonDict]:
        return lambda c: ops.delete_service(c, service_id)

    # ─── Deployments ───────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def list_deployments(self, project_id: str, service_id: str, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.list_deployments(c, project_id, service_id, environment_id)

    @routed(Strategy.FALLBACK)
    def get_deployment(self, deployment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.get_deployment(c, deployment_id)

    @routed(Strategy.FALLBACK)
    def deploy_service(self, service_id: str, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.deploy_service(c, service_id, environment_id)

    @routed(Strategy.FALLBACK)
    def redeploy_service(self, service_id: str, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.redeploy_service(c, service_id, environment_id)

    @routed(Strategy.FALLBACK)
    def restart_deployment(self, deployment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.restart_deployment(c, deployment_id)

    @routed(Strategy.FALLBACK)
    def remove_deployment(self, deployment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.remove_deployment(c, deployment_id)

    # ─── Environments ──────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def list_environments(self, project_id: str) -> Operation[JsonDict]:
        return lambda c: ops.list_environments(c, project_id)

    @routed(Strategy.FALLBACK)
    def create_environment(self, project_id: str, name: str) -> Operation[JsonDict]:
        return lambda c: ops.create_environment(c, project_id, name)

    @routed(Strategy.FALLBACK)
    def delete_environment(self, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.delete_environment(c, environment_id)

    # ─── Variables ─────────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def get_variables(
        self, project_id: str, environment_id: str, service_id: str | None = None,
    ) -> Operation[JsonDict]:
        return lambda c: ops.get_variables(c, project_id, environment_id, service_id)

    @routed(Strategy.FALLBACK)
    def upsert_variables(
        self, project_id: str, environment_id: str, service_id: str, variables: Mapping[str, Any],
    ) -> Operation[JsonDict]:
        return lambda c: ops.upsert_variables(c, project_id, environment_id, service_id, variables)

    @routed(Strategy.FALLBACK)
    def delete_variable(
        self, project_id: str, environment_id: str, service_id: str, name: str,
    ) -> Operation[JsonDict]:
        return lambda c: ops.delete_variable(c, project_id, environment_id, service_id, name)

    # ─── Domains ───────────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def create_service_domain(self, service_id: str, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.create_service_domain(c, service_id, environment_id)

    @routed(Strategy.FALLBACK)
    def create_custom_domain(self, service_id: str, environment_id: str, domain: str) -> Operation[JsonDict]:
        return lambda c: ops.create_custom_domain(c, service_id, environment_id, domain)

    @routed(Strategy.FALLBACK)
    def delete_service_domain(self, service_id: str, environment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.delete_service_domain(c, service_id, environment_id)

    # ─── Logs ──────────────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def get_deployment_logs(self, deployment_id: str, limit: int = 100) -> Operation[JsonDict]:
        return lambda c: ops.get_deployment_logs(c, deployment_id, limit)

    @routed(Strategy.FALLBACK)
    def get_build_logs(self, deployment_id: str) -> Operation[JsonDict]:
        return lambda c: ops.get_build_logs(c, deployment_id)

    # ─── Volumes ───────────────────────────────────────────────

    @routed(Strategy.FALLBACK)
    def create_volume(
        self, project_id: str, environment_id: str, service_id: str, mount_path: str,
    ) -> Operation[JsonDict]:
        return lambda c: ops.create_volume(c, project_id, environment_id, service_id, mount_path)

    # ─── Schema / passthrough ──────────────────────────────────

    @routed(Strategy.SINGLE_TARGET)
    def introspect(self) -> Operation[JsonDict]:
        return ops.introspect

    @routed(Strategy.SINGLE_TARGET)
    def raw_query(self, query: str, variables: str | Mapping[str, Any] | None = None) -> Operation[JsonDict]:
        return lambda c: ops.raw_query(c, query, variables)

    # ─── Workspaces ────────────────────────────────────────────

    @routed(Strategy.FAN_OUT)
    def describe_workspaces(self) -> Operation[str]:
        return ops.whoami


def tagged_to_dicts(results: Sequence[TaggedResult[Any]]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in results]
