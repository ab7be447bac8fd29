"""Bridge between `RouterTool` parameter schemas and MCP tool primitives.

MCP clients see the camelCase aliases of each parameter model. FastMCP
derives its input schema from the handler signature, so the bridge builds
an explicit keyword-only signature from the model fields.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo

if TYPE_CHECKING:
    from railmux.tools import RouterTool


def _exposed_type(info: FieldInfo) -> Any:
    """Type clients send. Fields declared as JSON strings are plain `str` on the wire."""
    extra = info.json_schema_extra
    if isinstance(extra, dict) and extra.get("type") == "string":
        return str if info.is_required() else str | None
    return info.annotation or str


def build_signature(schema: type[BaseModel]) -> inspect.Signature:
    """Keyword-only signature keyed by field aliases."""
    params = []
    for name, info in schema.model_fields.items():
        annotation = Annotated[_exposed_type(info), Field(description=info.description)]
        params.append(inspect.Parameter(
            info.alias or name,
            inspect.Parameter.KEYWORD_ONLY,
            default=inspect.Parameter.empty if info.is_required() else info.default,
            annotation=annotation,
        ))
    return inspect.Signature(params, return_annotation=str)


def tool_to_handler(
    tool: RouterTool[Any],
    invoke: Callable[[str, dict[str, Any]], Awaitable[str]],
) -> Callable[..., Awaitable[str]]:
    """Wrap a tool as an MCP handler that forwards its arguments to `invoke`."""
    name = tool.metadata.name

    async def handler(**kwargs: Any) -> str:
        return await invoke(name, kwargs)

    signature = build_signature(tool.params_schema)
    handler.__name__ = name
    handler.__doc__ = tool.metadata.description
    handler.__signature__ = signature  # type: ignore[attr-defined]
    handler.__annotations__ = {
        p.name: p.annotation for p in signature.parameters.values()
    } | {"return": str}
    return handler


def get_tool_properties(tool: RouterTool[Any]) -> dict[str, dict[str, object]]:
    """Cleaned property definitions, keyed by alias."""
    properties = tool.params_schema.model_json_schema(by_alias=True).get("properties", {})
    return {
        name: {k: v for k, v in prop.items() if k != "title"}
        for name, prop in properties.items()
    }


def get_required_params(tool: RouterTool[Any]) -> list[str]:
    return tool.params_schema.model_json_schema(by_alias=True).get("required", [])
