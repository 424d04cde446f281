"""
Automate Tools - Inspect BrowserStack Automate builds and sessions.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..client import BrowserStackAPIError
from ..products import AUTOMATE

logger = logging.getLogger(__name__)


class ListAutomateBuildsInput(ToolInput):
    """Input schema for list_automate_builds tool."""
    limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum number of builds to return"
    )
    status: Optional[str] = Field(
        default=None,
        description="Filter by build status: 'running', 'done', 'failed', 'timeout'"
    )


class ListAutomateBuildsOutput(ToolOutput):
    """Output schema for list_automate_builds tool."""
    builds: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Builds with hashed_id, name, status and duration"
    )
    count: int = Field(default=0, description="Number of builds returned")


class ListAutomateBuildsTool(ToolBase):
    """
    Lists recent BrowserStack Automate builds for the configured account.
    """

    METADATA = ToolMetadata(
        name="list_automate_builds",
        description="List recent BrowserStack Automate builds with their status",
        category=AUTOMATE,
        tags=["automate", "build", "selenium", "playwright"],
    )

    class InputSchema(ListAutomateBuildsInput):
        pass

    class OutputSchema(ListAutomateBuildsOutput):
        pass

    async def execute(self, input_data: ListAutomateBuildsInput, context: Optional[Dict[str, Any]] = None) -> ListAutomateBuildsOutput:
        client = self.get_client(context)
        if client is None:
            return ListAutomateBuildsOutput(success=False, error="BrowserStack client not initialized")

        params = {"limit": input_data.limit}
        if input_data.status:
            params["status"] = input_data.status

        try:
            data = await client.get_json(client.api("automate/builds.json"), params=params)
        except BrowserStackAPIError as e:
            logger.error(f"Error listing Automate builds: {e}")
            return ListAutomateBuildsOutput(success=False, error=str(e))

        builds = [
            {
                "hashed_id": build.get("hashed_id"),
                "name": build.get("name"),
                "status": build.get("status"),
                "duration": build.get("duration"),
            }
            for build in (entry.get("automation_build", entry) for entry in data or [])
        ]
        return ListAutomateBuildsOutput(success=True, builds=builds, count=len(builds))


class GetAutomateSessionInput(ToolInput):
    """Input schema for get_automate_session tool."""
    session_id: str = Field(..., min_length=1, description="Automate session ID")


class GetAutomateSessionOutput(ToolOutput):
    """Output schema for get_automate_session tool."""
    session: Dict[str, Any] = Field(
        default_factory=dict,
        description="Session details including status, browser, os and dashboard URLs"
    )


class GetAutomateSessionTool(ToolBase):
    """
    Fetches details of one Automate session.

    The result includes the session status, reason, browser/OS combination,
    and links to the public dashboard, video and logs.
    """

    METADATA = ToolMetadata(
        name="get_automate_session",
        description="Get details, status and log links for a BrowserStack Automate session",
        category=AUTOMATE,
        tags=["automate", "session", "debug"],
    )

    class InputSchema(GetAutomateSessionInput):
        pass

    class OutputSchema(GetAutomateSessionOutput):
        pass

    async def execute(self, input_data: GetAutomateSessionInput, context: Optional[Dict[str, Any]] = None) -> GetAutomateSessionOutput:
        client = self.get_client(context)
        if client is None:
            return GetAutomateSessionOutput(success=False, error="BrowserStack client not initialized")

        try:
            data = await client.get_json(client.api(f"automate/sessions/{input_data.session_id}.json"))
        except BrowserStackAPIError as e:
            logger.error(f"Error fetching Automate session {input_data.session_id}: {e}")
            return GetAutomateSessionOutput(success=False, error=str(e))

        return GetAutomateSessionOutput(success=True, session=data.get("automation_session", data))


def add_automate_tools(client) -> List[ToolBase]:
    """Create the Automate tools and attach the shared client."""
    tools = [ListAutomateBuildsTool(), GetAutomateSessionTool()]
    for tool in tools:
        tool.attach_client(client)
    return tools
