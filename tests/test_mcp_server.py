"""MCP stdio server exposes the operations as callable tools."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest
from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client


def _payload(result: Any) -> dict[str, Any]:
    structured = getattr(result, "structuredContent", None)
    if isinstance(structured, dict):
        return structured
    for block in getattr(result, "content", []):
        text = getattr(block, "text", None)
        if isinstance(text, str) and text.strip():
            try:
                payload = json.loads(text)
            except json.JSONDecodeError:
                continue
            if isinstance(payload, dict):
                return payload
    raise AssertionError("Tool result carried no JSON object")


@pytest.mark.asyncio
async def test_tools_listed_and_callable(
    package_root: Path, cli_env: dict[str, str], descriptors_path: Path
) -> None:
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "pluginhelp", "serve"],
        env=cli_env,
        cwd=package_root,
    )

    async with stdio_client(params) as (read_stream, write_stream), ClientSession(
        read_stream, write_stream
    ) as session:
        await session.initialize()

        listed = await session.list_tools()
        names = {tool.name for tool in listed.tools}
        assert {
            "text_reflow",
            "describe_plugin",
            "describe_phase",
            "effective_format",
            "config_show",
        } <= names

        reflowed = await session.call_tool(
            "text_reflow", {"text": "alpha beta gamma", "line_length": 10}
        )
        assert _payload(reflowed)["lines"] == ["alpha beta", "gamma"]

        phase = await session.call_tool(
            "describe_phase", {"descriptors": str(descriptors_path), "phase": "clean"}
        )
        assert _payload(phase)["lines"][1] == "* pre-clean: Not defined"

        failed = await session.call_tool(
            "describe_phase", {"descriptors": str(descriptors_path), "phase": "deploy"}
        )
        assert failed.isError
