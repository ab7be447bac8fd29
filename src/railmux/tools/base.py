"""Core tool abstractions: ToolMetadata, RouterTool and parameter base model.

A tool is a named, described binding from a typed parameter model to one
`WorkspaceRouter` operation. Tools hold no state; the router is passed in
at call time.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from railmux.runtime.routing import WorkspaceRouter


class ToolMetadata(BaseModel):
    """Metadata describing a tool.

    Attributes:
        name: Unique identifier (snake_case, e.g., "get_project")
        description: What the tool does (shown to the LLM for selection)
        category: Grouping category (e.g., "projects", "deployments")
        enabled: Whether tool is currently active
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$")
    description: str = Field(..., min_length=10)
    category: str = Field(default="general")
    enabled: bool = Field(default=True)


class ToolParams(BaseModel):
    """Base for parameter schemas. Fields are snake_case, exposed as camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class EmptyParams(ToolParams):
    """Parameter schema for tools with no inputs."""


TParams = TypeVar("TParams", bound=BaseModel)

Handler = Callable[["WorkspaceRouter", TParams], Awaitable[Any]]


class RouterTool(Generic[TParams]):
    """A tool that forwards validated parameters to a router operation.

    Example:
        >>> class ProjectParams(ToolParams):
        ...     project_id: str = Field(..., alias="projectId")
        >>> get_project = RouterTool(
        ...     ToolMetadata(name="get_project", description="Get details of a project"),
        ...     ProjectParams,
        ...     lambda router, p: router.get_project(p.project_id),
        ... )
    """

    __slots__ = ("metadata", "params_schema", "_handler")

    def __init__(self, metadata: ToolMetadata, params_schema: type[TParams], handler: Handler[TParams]) -> None:
        self.metadata = metadata
        self.params_schema = params_schema
        self._handler = handler

    def __repr__(self) -> str:
        return f"RouterTool({self.metadata.name!r})"

    async def arun(self, router: WorkspaceRouter, params: TParams) -> Any:
        return await self._handler(router, params)
