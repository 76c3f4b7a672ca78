"""MCP (Model Context Protocol) server for docseed tools via stdio."""
from __future__ import annotations

import json
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Any, Dict, List, Optional, TextIO

from .config import ensure_dotenv_loaded
from .tools import discover_tools
from .types import ToolDefinition, ToolHandler

# MCP Protocol version
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _get_version() -> str:
    try:
        return pkg_version("docseed")
    except PackageNotFoundError:
        return "0.0.0"


def main() -> None:
    """Run MCP server over stdio."""
    ensure_dotenv_loaded()
    tool_definitions, tool_handlers = discover_tools()
    server = MCPServer(tool_definitions, tool_handlers)
    server.run()


class MCPServer:
    """MCP server implementation using stdio transport.

    Requests are handled one at a time, in arrival order.
    """

    def __init__(self, tool_definitions: List[ToolDefinition], tool_handlers: Dict[str, ToolHandler]):
        self.tool_definitions = tool_definitions
        self.tool_handlers = tool_handlers
        self.initialized = False

    def run(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        """Read JSON-RPC messages line by line and write one response line per request."""
        source = stdin or sys.stdin
        sink = stdout or sys.stdout
        for line in source:
            line = line.strip()
            if not line:
                continue
            try:
                request = json.loads(line)
            except json.JSONDecodeError as e:
                self._write_response(sink, self._error_response(None, PARSE_ERROR, f"Parse error: {e}"))
                continue
            if not isinstance(request, dict):
                self._write_response(sink, self._error_response(None, INVALID_PARAMS, "Request must be a JSON object"))
                continue
            try:
                response = self.handle_request(request)
            except Exception as e:
                response = self._error_response(request.get("id"), INTERNAL_ERROR, f"Internal error: {e}")
            if response is not None:
                self._write_response(sink, response)

    def handle_request(self, request: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Handle a JSON-RPC request."""
        req_id = request.get("id")
        method = request.get("method", "")
        params = request.get("params") or {}

        # Notifications (no id) don't get responses
        is_notification = req_id is None

        if method == "initialize":
            return self._handle_initialize(req_id, params)
        if method in ("initialized", "notifications/initialized"):
            self.initialized = True
            return None
        if method == "tools/list":
            return self._handle_tools_list(req_id)
        if method == "tools/call":
            return self._handle_tools_call(req_id, params)
        if method == "ping":
            return self._result_response(req_id, {})
        if method == "notifications/cancelled":
            # In-flight calls run to completion; nothing to cancel
            return None
        if is_notification:
            return None
        return self._error_response(req_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _handle_initialize(self, req_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._result_response(req_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {},
            },
            "serverInfo": {
                "name": "docseed",
                "version": _get_version(),
            },
        })

    def _handle_tools_list(self, req_id: Any) -> Dict[str, Any]:
        tools = [
            {
                "name": defn["name"],
                "description": defn.get("description", ""),
                "inputSchema": defn.get("parameters", {"type": "object", "properties": {}}),
            }
            for defn in self.tool_definitions
        ]
        return self._result_response(req_id, {"tools": tools})

    def _handle_tools_call(self, req_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        if not tool_name:
            return self._error_response(req_id, INVALID_PARAMS, "Missing tool name")
        if not isinstance(arguments, dict):
            return self._error_response(req_id, INVALID_PARAMS, "Tool arguments must be an object")

        handler = self.tool_handlers.get(tool_name)
        if not handler:
            return self._error_response(req_id, INVALID_PARAMS, f"Unknown tool: {tool_name}")

        try:
            result = handler(arguments)
        except Exception as e:
            return self._tool_content(req_id, f"Error: {e}", True)
        return self._tool_content(req_id, result.get("output", ""), result.get("error", False))

    def _tool_content(self, req_id: Any, text: str, is_error: bool) -> Dict[str, Any]:
        return self._result_response(req_id, {
            "content": [
                {"type": "text", "text": text}
            ],
            "isError": is_error,
        })

    def _result_response(self, req_id: Any, result: Any) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": req_id,
            "result": result,
        }

    def _error_response(self, req_id: Any, code: int, message: str) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": req_id,
            "error": {
                "code": code,
                "message": message,
            },
        }

    def _write_response(self, sink: TextIO, response: Dict[str, Any]) -> None:
        sink.write(json.dumps(response))
        sink.write("\n")
        sink.flush()


if __name__ == "__main__":
    main()
