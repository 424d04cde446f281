"""
BrowserStack MCP Server using FastMCP
Supports stdio and SSE transports, both routed through intent analysis so
that only the tools relevant to the current user query are exposed.
"""
import argparse
from dataclasses import replace
import logging
from typing import Optional, Sequence, Tuple

import uvicorn
from mcp.server import Server
from mcp.server.fastmcp import FastMCP
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Mount, Route

from . import __version__
from .client import BrowserStackClient
from .config import SUPPORTED_TRANSPORTS, ServerConfig
from .fnc_tools import create_tool_handlers, register_initial_tools
from .registry import ToolRegistry
from .toggler import ToolToggler
from .tools import ToolExecutor
from .transport import intent_aware_read_stream

logger = logging.getLogger(__name__)

SERVER_NAME = "BrowserStack MCP Server"


def create_app(client: BrowserStackClient) -> Tuple[FastMCP, ToolToggler]:
    """
    Build the FastMCP app with every product tool registered and disabled.

    Returns:
        (app, toggler) where the toggler is bound to the app's tool registry
    """
    registry = register_initial_tools(ToolRegistry(), client)
    executor = ToolExecutor(registry, client)
    handle_list_tools, handle_tool_call = create_tool_handlers(executor)

    app = FastMCP(SERVER_NAME)
    # Low-level handlers so the tool list follows the registry's enabled state
    app._mcp_server.list_tools()(handle_list_tools)
    app._mcp_server.call_tool(validate_input=False)(handle_tool_call)

    return app, ToolToggler(registry)


async def run_stdio(mcp_server: Server, toggler: ToolToggler):
    """Serve over stdin/stdout with intent analysis on inbound messages."""
    async with stdio_server() as (read_stream, write_stream):
        async with intent_aware_read_stream(read_stream, toggler) as intent_read_stream:
            await mcp_server.run(
                intent_read_stream,
                write_stream,
                mcp_server.create_initialization_options(),
            )


def create_starlette_app(mcp_server: Server, toggler: ToolToggler, *, debug: bool = False) -> Starlette:
    """Create a Starlette application for SSE transport."""
    sse = SseServerTransport("/messages/")

    async def handle_sse(request: Request) -> Response:
        async with sse.connect_sse(
                request.scope,
                request.receive,
                request._send,
        ) as (read_stream, write_stream):
            async with intent_aware_read_stream(read_stream, toggler) as intent_read_stream:
                await mcp_server.run(
                    intent_read_stream,
                    write_stream,
                    mcp_server.create_initialization_options(),
                )
        return Response()

    routes = [
        Route("/sse", endpoint=handle_sse),
        Mount("/messages/", app=sse.handle_post_message),
    ]
    return Starlette(debug=debug, routes=routes)


async def run_sse(mcp_server: Server, toggler: ToolToggler, config: ServerConfig):
    starlette_app = create_starlette_app(mcp_server, toggler, debug=config.log_level == "DEBUG")
    uvicorn_config = uvicorn.Config(
        starlette_app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    server = uvicorn.Server(uvicorn_config)
    await server.serve()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=SERVER_NAME)
    parser.add_argument(
        "--transport",
        choices=SUPPORTED_TRANSPORTS,
        help="Transport to serve on (overrides MCP_TRANSPORT)",
    )
    return parser.parse_args(argv)


def load_config(argv: Optional[Sequence[str]] = None) -> ServerConfig:
    """Read configuration from the environment, then apply command line overrides."""
    args = parse_args(argv)
    config = ServerConfig.from_environment()
    if args.transport:
        config = replace(config, transport=args.transport)
    return config


async def main(argv: Optional[Sequence[str]] = None):
    """Main entry point for the server."""
    config = load_config(argv)

    # Logs go to stderr; stdout belongs to the stdio transport
    logging.basicConfig(level=config.log_level)

    logger.info(f"Launching BrowserStack MCP server, version {__version__}")
    if not config.has_credentials:
        logger.warning(
            "BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY not set. "
            "Tools calling the BrowserStack API will fail until they are provided."
        )

    client = BrowserStackClient(config)
    app, toggler = create_app(client)
    logger.info(f"MCP_TRANSPORT: {config.transport}")

    try:
        if config.transport == "sse":
            logger.info(f"Starting MCP server on {config.host}:{config.port}")
            await run_sse(app._mcp_server, toggler, config)
        else:
            logger.info("Starting MCP server on stdin/stdout")
            await run_stdio(app._mcp_server, toggler)
    finally:
        await client.close()
