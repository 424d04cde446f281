"""
Self-Heal Tool - Enable self-healing locators for flaky Automate runs.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from .sdk import browserstack_config, render_browserstack_yml
from ..products import SELF_HEAL

logger = logging.getLogger(__name__)


class EnableSelfHealInput(ToolInput):
    """Input schema for enable_self_heal tool."""
    session_capabilities: bool = Field(
        default=False,
        description="Return a bstack:options capability snippet instead of browserstack.yml (for suites not using the SDK)"
    )


class EnableSelfHealOutput(ToolOutput):
    """Output schema for enable_self_heal tool."""
    browserstack_yml: str = Field(default="", description="browserstack.yml with self-healing enabled")
    capabilities: Dict[str, Any] = Field(default_factory=dict, description="Capabilities snippet")


class EnableSelfHealTool(ToolBase):
    """Returns the setting that lets Automate repair broken locators at run time."""

    METADATA = ToolMetadata(
        name="enable_self_heal",
        description="Enable BrowserStack self-healing so flaky tests with changed locators recover automatically",
        category=SELF_HEAL,
        tags=["self-heal", "flaky", "locators", "automate"],
        requires_credentials=False,
    )

    class InputSchema(EnableSelfHealInput):
        pass

    class OutputSchema(EnableSelfHealOutput):
        pass

    async def execute(self, input_data: EnableSelfHealInput, context: Optional[Dict[str, Any]] = None) -> EnableSelfHealOutput:
        logger.info(f"Generating self-heal settings (capabilities={input_data.session_capabilities})")
        if input_data.session_capabilities:
            return EnableSelfHealOutput(
                success=True,
                capabilities={"bstack:options": {"selfHeal": True}},
            )

        client = self.get_client(context)
        username = client.username if client is not None else None
        config = browserstack_config(username, extra={"selfHeal": True})
        return EnableSelfHealOutput(success=True, browserstack_yml=render_browserstack_yml(config))


def add_self_heal_tools(client) -> List[ToolBase]:
    tool = EnableSelfHealTool()
    tool.attach_client(client)
    return [tool]
