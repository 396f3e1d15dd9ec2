"""Mock Creator MCP Server - Model Context Protocol interface for editors and agents"""

import json
import logging
from pathlib import Path

from ts_mock_creator.config.plugin import write_plugin_template
from ts_mock_creator.config.project import MockConfig
from ts_mock_creator.core.errors import MockCreatorError, UserCancelled
from ts_mock_creator.core.pipeline import MockPipeline

try:
    from mcp.server import Server
    from mcp.server.stdio import stdio_server
    from mcp.server.models import InitializationOptions
    from mcp.types import Tool, TextContent, ServerCapabilities
    HAS_MCP = True
except ImportError:
    HAS_MCP = False

logger = logging.getLogger(__name__)


class MockServer:
    """Tool dispatcher holding one configuration per project directory"""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self._configs: dict[Path, MockConfig] = {}

    def _config(self, args: dict) -> MockConfig:
        base_dir = Path(args.get("project_dir") or self.base_dir)
        if base_dir not in self._configs:
            self._configs[base_dir] = MockConfig(base_dir)
        return self._configs[base_dir]

    def _source(self, args: dict) -> Path:
        """Path of the file argument, relative paths taken from the project directory"""
        source = Path(args["file"])
        if not source.is_absolute():
            source = self._config(args).base_dir / source
        return source

    def get_tools(self) -> list[dict]:
        """Return list of available MCP tools"""
        project_dir = {
            "type": "string",
            "description": "Project root containing .tsmc/ (defaults to the server's working directory)"
        }
        return [
            {
                "name": "list_declarations",
                "description": "List the type declarations of a TypeScript file that a mock can be generated for",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "file": {"type": "string", "description": "Path to the TypeScript file"},
                        "project_dir": project_dir,
                    },
                    "required": ["file"]
                }
            },
            {
                "name": "generate_mock",
                "description": "Generate the mock file for one type declaration",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "file": {"type": "string", "description": "Path to the TypeScript file"},
                        "type": {"type": "string", "description": "Identifier of the declaration to mock"},
                        "project_dir": project_dir,
                    },
                    "required": ["file"]
                }
            },
            {
                "name": "get_config",
                "description": "Get the current mock creator configuration",
                "inputSchema": {
                    "type": "object",
                    "properties": {"project_dir": project_dir}
                }
            },
            {
                "name": "init_project",
                "description": "Create .tsmc/config.yml and a starter transformer module",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "project_dir": project_dir,
                        "mock_location": {"type": "string", "description": "Mock directory relative to the mocked file path, e.g. ../__mocks__"},
                        "indent": {"type": "string", "enum": ["  ", "    ", "\t"]},
                    }
                }
            },
            {
                "name": "reload_config",
                "description": "Re-read .tsmc/config.yml after it changed",
                "inputSchema": {
                    "type": "object",
                    "properties": {"project_dir": project_dir}
                }
            },
        ]

    def call_tool(self, name: str, arguments: dict) -> dict:
        """Execute a tool and return results"""
        handlers = {
            "list_declarations": self._list_declarations,
            "generate_mock": self._generate_mock,
            "get_config": self._get_config,
            "init_project": self._init_project,
            "reload_config": self._reload_config,
        }
        handler = handlers.get(name)
        if handler is None:
            return {"success": False, "error": f"Unknown tool: {name}"}

        try:
            return handler(arguments)
        except UserCancelled:
            return {"success": True, "cancelled": True}
        except MockCreatorError as e:
            logger.info("Tool %s failed: %s", name, e)
            return {"success": False, "error": str(e), "error_type": type(e).__name__}

    # === Tool handlers ===

    def _list_declarations(self, args: dict) -> dict:
        if not args.get("file"):
            return {"success": False, "error": "file is required"}
        pipeline = MockPipeline.for_project(config=self._config(args))
        return {"success": True, "declarations": pipeline.list_declarations(self._source(args))}

    def _generate_mock(self, args: dict) -> dict:
        if not args.get("file"):
            return {"success": False, "error": "file is required"}
        pipeline = MockPipeline.for_project(config=self._config(args))
        if args.get("type"):
            result = pipeline.generate(self._source(args), args["type"])
        else:
            # Without an explicit type the file must declare exactly one
            result = pipeline.generate_interactive(
                self._source(args), lambda names: names[0] if len(names) == 1 else None
            )
        return result.to_dict()

    def _get_config(self, args: dict) -> dict:
        config = self._config(args)
        if not config.exists():
            return {
                "initialized": False,
                "config": config.values,  # Defaults
                "hint": "Run init_project to create config file"
            }
        return {
            "initialized": True,
            "config": config.values,
            "config_file": str(config.config_file)
        }

    def _init_project(self, args: dict) -> dict:
        config = self._config(args)
        if config.exists():
            return {
                "success": False,
                "error": "Project already initialized",
                "existing_config": config.values,
                "hint": "Use get_config to view current config"
            }

        values = config.init(mock_location=args.get("mock_location"), indent=args.get("indent"))
        plugin_file = config.plugin_file
        write_plugin_template(plugin_file)

        return {
            "success": True,
            "config": values,
            "config_file": str(config.config_file),
            "plugin_file": str(plugin_file)
        }

    def _reload_config(self, args: dict) -> dict:
        return {"success": True, "config": self._config(args).reload()}


# MCP Server setup (when run as main)
def create_mcp_server():
    """Create and configure MCP server"""
    if not HAS_MCP:
        raise ImportError("mcp package is required: pip install mcp")

    server = Server("ts_mock_creator")
    mock_server = MockServer()

    @server.list_tools()
    async def list_tools():
        return [
            Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"]
            )
            for tool in mock_server.get_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict):
        result = mock_server.call_tool(name, arguments)
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def main():
    """Run the MCP server"""
    server = create_mcp_server()
    options = InitializationOptions(
        server_name="ts_mock_creator",
        server_version="0.2.0",
        capabilities=ServerCapabilities(tools={})
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, options)


def main_sync():
    """Synchronous entry point for CLI"""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
