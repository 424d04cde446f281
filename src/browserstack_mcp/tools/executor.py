"""
Tool Executor - Runs enabled tools from the registry.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import ValidationError

from .base import ToolBase

if TYPE_CHECKING:
    from ..registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolExecutor:
    """
    Executes tools held in a ToolRegistry.

    Only tools that are currently enabled can be executed; the intent
    toggler decides which ones those are.
    """

    def __init__(self, registry: "ToolRegistry", client=None):
        """
        Initialize the tool executor.

        Args:
            registry: Registry holding the product tools
            client: BrowserStackClient passed to tools through the context
        """
        self.registry = registry
        self.client = client

    def load_tool(self, tool_name: str) -> Optional[ToolBase]:
        """
        Find an enabled tool by name.

        Returns:
            Tool instance or None if no enabled tool has that name
        """
        tool = self.registry.find_enabled(tool_name)
        if tool is None:
            logger.warning(f"Tool not found or not enabled: {tool_name}")
        return tool

    async def execute_tool(
        self,
        tool_name: str,
        arguments: Dict[str, Any],
        context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Validate arguments and execute an enabled tool.

        Args:
            tool_name: Name of the tool to execute
            arguments: Tool input arguments
            context: Optional execution context

        Returns:
            Tool output as dictionary
        """
        tool = self.load_tool(tool_name)
        if tool is None:
            return {
                "success": False,
                "error": f"Tool not found or not enabled: {tool_name}"
            }

        exec_context = {"client": self.client}
        exec_context.update(context or {})

        try:
            input_data = tool.InputSchema(**arguments)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for tool {tool_name}: {e}")
            return {
                "success": False,
                "error": f"Invalid arguments for {tool_name}: {e}"
            }

        try:
            output = await tool.execute(input_data, exec_context)
            return output.model_dump()
        except Exception as e:
            logger.error(f"Error executing tool {tool_name}: {e}", exc_info=True)
            return {
                "success": False,
                "error": f"Tool execution error: {str(e)}"
            }
