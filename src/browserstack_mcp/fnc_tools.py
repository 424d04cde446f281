"""
MCP Tool Functions for BrowserStack products

This module maps product categories to their tool registration functions,
builds the startup registry, and provides the list_tools/call_tool handlers
exposed through the MCP server. Only tools enabled by the intent toggler are
listed or callable.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Sequence, Tuple

import mcp.types as types

from .products import (
    ACCESSIBILITY,
    APP_AUTOMATE,
    APP_LIVE,
    AUTOMATE,
    LIVE,
    SDK,
    SELF_HEAL,
    TEST_MANAGEMENT,
)
from .registry import ToolRegistry
from .tools import ToolBase, ToolExecutor
from .tools.accessibility import add_accessibility_tools
from .tools.app_automate import add_app_automate_tools
from .tools.app_live import add_app_live_tools
from .tools.automate import add_automate_tools
from .tools.failure_logs import add_failure_logs_tools
from .tools.live import add_browser_live_tools
from .tools.observability import add_observability_tools
from .tools.sdk import add_sdk_tools
from .tools.self_heal import add_self_heal_tools
from .tools.test_management import add_test_management_tools

logger = logging.getLogger(__name__)

ResponseType = List[types.TextContent | types.ImageContent | types.EmbeddedResource]

RegisterFn = Callable[[Any], List[ToolBase]]

# Product categories and their tool registration functions, in registration order
PRODUCT_TOOLS: Dict[str, Tuple[RegisterFn, ...]] = {
    AUTOMATE: (add_automate_tools, add_failure_logs_tools, add_observability_tools),
    APP_AUTOMATE: (add_app_automate_tools, add_failure_logs_tools),
    LIVE: (add_browser_live_tools,),
    APP_LIVE: (add_app_live_tools,),
    ACCESSIBILITY: (add_accessibility_tools,),
    TEST_MANAGEMENT: (add_test_management_tools,),
    SDK: (add_sdk_tools,),
    SELF_HEAL: (add_self_heal_tools,),
}


def register_initial_tools(
    registry: ToolRegistry,
    client,
    product_tools: Dict[str, Sequence[RegisterFn]] = PRODUCT_TOOLS,
) -> ToolRegistry:
    """
    Build every product's tools, store them in the registry and disable them.

    Args:
        registry: Registry to populate
        client: BrowserStackClient handed to each registration function
        product_tools: Category to registration functions mapping

    Returns:
        The populated registry
    """
    for product_name, add_tools_fns in product_tools.items():
        product_tool_instances: List[ToolBase] = []
        for add_tools_fn in add_tools_fns:
            product_tool_instances.extend(add_tools_fn(client))
        registry.set(product_name, product_tool_instances)
        for tool in product_tool_instances:
            tool.deactivate()

    logger.info(f"Registered tools for {len(registry)} products:")
    for product_name, tools in registry.items():
        logger.info(f"  - {product_name}: {', '.join(tool.name for tool in tools)}")
    return registry


def format_text_response(text: Any) -> ResponseType:
    """Format a text response."""
    return [types.TextContent(type="text", text=str(text))]


def format_error_response(error: str) -> ResponseType:
    """Format an error response."""
    return format_text_response(f"Error: {error}")


def create_tool_handlers(
    executor: ToolExecutor,
) -> Tuple[Callable[[], Awaitable[list[types.Tool]]], Callable[[str, dict | None], Awaitable[ResponseType]]]:
    """
    Create the list_tools and call_tool handlers bound to an executor.

    Returns:
        (handle_list_tools, handle_tool_call)
    """

    async def handle_list_tools() -> list[types.Tool]:
        """List the tools enabled for the most recent user query."""
        mcp_tools = [
            types.Tool(
                name=tool.name,
                description=tool.METADATA.description,
                inputSchema=tool.get_input_schema(),
            )
            for tool in executor.registry.enabled_tools()
        ]
        logger.debug(f"Listing {len(mcp_tools)} enabled tools")
        return mcp_tools

    async def handle_tool_call(name: str, arguments: dict | None) -> ResponseType:
        """Execute an enabled tool and format its result."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        result = await executor.execute_tool(name, arguments or {})
        if result.get("success"):
            output_data = {k: v for k, v in result.items() if k not in ["success", "error"]}
            return format_text_response(output_data)
        return format_error_response(result.get("error") or "Unknown error")

    return handle_list_tools, handle_tool_call
