"""
Tool Registry - product category to tool list mapping.

The registry is populated once at startup, one entry per product category,
and afterwards only the enabled state of the tools it holds changes. It is
an explicit object handed to the toggler and the MCP handlers.

Example Usage:
    registry = ToolRegistry()
    registry.set("automate", add_automate_tools(client))

    toggler = ToolToggler(registry)
    toggler.analyze_intent_and_toggle_tools("run an automate session")

    for tool in registry.enabled_tools():
        ...
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .tools.base import ToggleableTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Ordered registry of tools grouped by product category.

    Insertion order of categories and of tools within a category is kept;
    it is the order in which tools are toggled and logged.
    """

    def __init__(self):
        self._tools: Dict[str, List[ToggleableTool]] = {}

    def get(self, category: str) -> Optional[List[ToggleableTool]]:
        """
        Get the tools registered for a category.

        Returns:
            Ordered list of tools, or None if the category was never registered
        """
        return self._tools.get(category)

    def set(self, category: str, tools: Sequence[ToggleableTool]):
        """
        Register the tools for a category, replacing any previous entry.

        Args:
            category: Product category name
            tools: Tools in registration order
        """
        self._tools[category] = list(tools)
        logger.debug(f"Registered {len(self._tools[category])} tool(s) for category '{category}'")

    def categories(self) -> Iterable[str]:
        """Registered category names in registration order."""
        return list(self._tools.keys())

    def items(self) -> List[Tuple[str, List[ToggleableTool]]]:
        return list(self._tools.items())

    def clear(self):
        """
        Remove every category.

        Only meant for repeatable evaluation such as test harnesses.
        """
        self._tools.clear()
        logger.debug("Tool registry cleared")

    def all_tools(self) -> List[ToggleableTool]:
        """All registered tools, flattened in registry order."""
        return [tool for tools in self._tools.values() for tool in tools]

    def enabled_tools(self) -> List[ToggleableTool]:
        """
        Enabled tools in registry order, first occurrence of a name wins.

        A tool name may be registered under several categories; clients must
        only see it once.
        """
        seen = set()
        enabled = []
        for tool in self.all_tools():
            if tool.enabled and tool.name not in seen:
                seen.add(tool.name)
                enabled.append(tool)
        return enabled

    def find_enabled(self, name: str) -> Optional[ToggleableTool]:
        """Find an enabled tool by name."""
        for tool in self.all_tools():
            if tool.enabled and tool.name == name:
                return tool
        return None

    def __contains__(self, category: str) -> bool:
        return category in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories())

    def __repr__(self) -> str:
        tool_count = sum(len(tools) for tools in self._tools.values())
        return f"ToolRegistry(categories={len(self._tools)}, tools={tool_count})"
