"""
App Automate Tools - Inspect BrowserStack App Automate (Appium) builds and sessions.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..client import BrowserStackAPIError
from ..products import APP_AUTOMATE

logger = logging.getLogger(__name__)


class ListAppAutomateBuildsInput(ToolInput):
    """Input schema for list_app_automate_builds tool."""
    limit: int = Field(default=10, ge=1, le=100, description="Maximum number of builds to return")


class ListAppAutomateBuildsOutput(ToolOutput):
    """Output schema for list_app_automate_builds tool."""
    builds: List[Dict[str, Any]] = Field(default_factory=list, description="App Automate builds")
    count: int = Field(default=0, description="Number of builds returned")


class ListAppAutomateBuildsTool(ToolBase):
    """Lists recent App Automate builds."""

    METADATA = ToolMetadata(
        name="list_app_automate_builds",
        description="List recent BrowserStack App Automate builds with their status",
        category=APP_AUTOMATE,
        tags=["app-automate", "appium", "mobile", "build"],
    )

    class InputSchema(ListAppAutomateBuildsInput):
        pass

    class OutputSchema(ListAppAutomateBuildsOutput):
        pass

    async def execute(self, input_data: ListAppAutomateBuildsInput, context: Optional[Dict[str, Any]] = None) -> ListAppAutomateBuildsOutput:
        client = self.get_client(context)
        if client is None:
            return ListAppAutomateBuildsOutput(success=False, error="BrowserStack client not initialized")

        try:
            data = await client.get_json(
                client.app_api("app-automate/builds.json"),
                params={"limit": input_data.limit}
            )
        except BrowserStackAPIError as e:
            logger.error(f"Error listing App Automate builds: {e}")
            return ListAppAutomateBuildsOutput(success=False, error=str(e))

        builds = [
            {
                "hashed_id": build.get("hashed_id"),
                "name": build.get("name"),
                "status": build.get("status"),
                "duration": build.get("duration"),
            }
            for build in (entry.get("automation_build", entry) for entry in data or [])
        ]
        return ListAppAutomateBuildsOutput(success=True, builds=builds, count=len(builds))


class GetAppAutomateSessionInput(ToolInput):
    """Input schema for get_app_automate_session tool."""
    session_id: str = Field(..., min_length=1, description="App Automate session ID")


class GetAppAutomateSessionOutput(ToolOutput):
    """Output schema for get_app_automate_session tool."""
    session: Dict[str, Any] = Field(default_factory=dict, description="Session details")


class GetAppAutomateSessionTool(ToolBase):
    """Fetches details of one App Automate session (device, app, status, logs)."""

    METADATA = ToolMetadata(
        name="get_app_automate_session",
        description="Get details, status and log links for a BrowserStack App Automate session",
        category=APP_AUTOMATE,
        tags=["app-automate", "appium", "session", "debug"],
    )

    class InputSchema(GetAppAutomateSessionInput):
        pass

    class OutputSchema(GetAppAutomateSessionOutput):
        pass

    async def execute(self, input_data: GetAppAutomateSessionInput, context: Optional[Dict[str, Any]] = None) -> GetAppAutomateSessionOutput:
        client = self.get_client(context)
        if client is None:
            return GetAppAutomateSessionOutput(success=False, error="BrowserStack client not initialized")

        try:
            data = await client.get_json(client.app_api(f"app-automate/sessions/{input_data.session_id}.json"))
        except BrowserStackAPIError as e:
            logger.error(f"Error fetching App Automate session {input_data.session_id}: {e}")
            return GetAppAutomateSessionOutput(success=False, error=str(e))

        return GetAppAutomateSessionOutput(success=True, session=data.get("automation_session", data))


def add_app_automate_tools(client) -> List[ToolBase]:
    """Create the App Automate tools and attach the shared client."""
    tools = [ListAppAutomateBuildsTool(), GetAppAutomateSessionTool()]
    for tool in tools:
        tool.attach_client(client)
    return tools
