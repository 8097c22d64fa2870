"""FastMCP server: every registry operation that is not CLI-only becomes a tool."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, cast

import structlog
from mcp.server.fastmcp import FastMCP

from pluginhelp.lib.logging import configure_logging
from pluginhelp.lib.ops import get_all_operations
from pluginhelp.lib.ops.codec import coerce_input_payload, signature_from_dataclass
from pluginhelp.lib.ops.registry import OperationSpec
from pluginhelp.lib.serialization import to_jsonable

logger = structlog.get_logger(__name__)

_REGISTERED_MCP_TOOLS: set[str] = set()
_REGISTERED_MCP_DESCRIPTIONS: dict[str, str] = {}


@asynccontextmanager
async def lifespan(_: FastMCP[Any]) -> AsyncIterator[dict[str, object]]:
    # stdout carries the protocol; logs go to stderr as JSON.
    configure_logging(json_mode=True)
    logger.info("MCP server starting.", tools=sorted(_REGISTERED_MCP_TOOLS))
    yield {"tools": len(_REGISTERED_MCP_TOOLS)}


mcp = FastMCP("pluginhelp", lifespan=lifespan)


def _tool_for(op: OperationSpec[Any, Any]) -> Any:
    async def _call(**arguments: object) -> object:
        request = coerce_input_payload(op.input_type, arguments)
        logger.debug("Tool call.", tool=op.mcp_name)
        return to_jsonable(await op.handler(request))

    _call.__name__ = op.mcp_name
    _call.__doc__ = op.description
    cast("Any", _call).__signature__ = signature_from_dataclass(op.input_type)
    return _call


def _register_tools() -> None:
    for op in get_all_operations():
        if op.cli_only:
            continue
        mcp.tool(name=op.mcp_name, description=op.description)(_tool_for(op))
        _REGISTERED_MCP_TOOLS.add(op.mcp_name)
        _REGISTERED_MCP_DESCRIPTIONS[op.name] = op.description


def get_registered_mcp_tools() -> set[str]:
    """Tool names registered with the server."""

    return set(_REGISTERED_MCP_TOOLS)


def get_registered_mcp_descriptions() -> dict[str, str]:
    """Operation name -> tool description."""

    return dict(_REGISTERED_MCP_DESCRIPTIONS)


def run_server() -> None:
    """Serve tools over stdio until the client disconnects."""

    mcp.run(transport="stdio")


_register_tools()


if __name__ == "__main__":
    run_server()
