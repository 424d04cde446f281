"""
Intent-driven tool toggling.

Applies classifier output to a ToolRegistry: every registered tool is
deactivated first, then the tools of each detected product are activated.
The reset runs on every call, so no tool stays enabled after a query that no
longer asks for it.
"""

import logging
import threading
from typing import Iterable, Set

from .intent import classify, order_intents
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


def apply_intents(intents: Iterable[str], registry: ToolRegistry):
    """
    Deactivate all tools, then activate the tools of the detected intents.

    Categories with no registered tools are skipped without a log line.
    Exceptions raised by a tool's activate()/deactivate() propagate.

    Args:
        intents: Detected product categories
        registry: Registry whose tools are toggled in place
    """
    for _category, tools in registry.items():
        for tool in tools:
            tool.deactivate()

    for intent in order_intents(intents):
        tools_to_enable = registry.get(intent)
        if not tools_to_enable:
            continue
        for tool in tools_to_enable:
            tool.activate()
            logger.info(f"Enabled tool: {tool.name} for intent '{intent}'")


class ToolToggler:
    """
    Classifies queries and toggles a registry's tools accordingly.

    Calls are serialized with a lock so the deactivate-all/activate-selected
    sequence of one query never interleaves with another's.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self._lock = threading.Lock()

    def apply_intents(self, intents: Iterable[str]):
        """Apply an already detected intent set to the registry."""
        with self._lock:
            apply_intents(intents, self.registry)

    def analyze_intent_and_toggle_tools(self, user_query: str) -> Set[str]:
        """
        Classify a query and enable only the tools it asks for.

        Args:
            user_query: Raw user query text

        Returns:
            The detected intent set
        """
        detected_intents = classify(user_query)
        logger.info(
            f"Detected intents: {', '.join(order_intents(detected_intents))} for query: \"{user_query}\""
        )
        with self._lock:
            apply_intents(detected_intents, self.registry)
        return detected_intents
