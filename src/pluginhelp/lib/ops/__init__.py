"""Operations shared by the CLI and the MCP server."""

from pluginhelp.lib.ops.registry import OperationSpec, get_all_operations, get_operation

__all__ = ["OperationSpec", "get_all_operations", "get_operation"]
