"""
App Live Tool - Start an interactive session for an uploaded app on a real device.
"""

from typing import Any, Dict, List, Literal, Optional
from urllib.parse import quote, urlencode
from pydantic import Field, field_validator
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..products import APP_LIVE

logger = logging.getLogger(__name__)

APP_LIVE_DASHBOARD_URL = "https://app-live.browserstack.com/dashboard"
APP_URL_PREFIX = "bs://"


class RunAppLiveSessionInput(ToolInput):
    """Input schema for run_app_live_session tool."""
    app_url: str = Field(..., description="Uploaded app identifier, e.g. 'bs://<hashed id>'")
    platform: Literal["android", "ios"] = Field(..., description="Device platform")
    device: str = Field(..., min_length=1, description="Device name, e.g. 'Google Pixel 8' or 'iPhone 15'")
    os_version: str = Field(..., min_length=1, description="OS version, e.g. '14.0' or '17'")

    @field_validator("app_url")
    @classmethod
    def _bs_url(cls, value: str) -> str:
        if not value.startswith(APP_URL_PREFIX) or len(value) == len(APP_URL_PREFIX):
            raise ValueError("app_url must look like 'bs://<hashed id>'")
        return value


class RunAppLiveSessionOutput(ToolOutput):
    """Output schema for run_app_live_session tool."""
    launch_url: str = Field(default="", description="URL that starts the App Live session")


class RunAppLiveSessionTool(ToolBase):
    """
    Builds a launch link for a manual App Live session of an already uploaded app.
    """

    METADATA = ToolMetadata(
        name="run_app_live_session",
        description="Start an interactive BrowserStack App Live session for an uploaded app on a real device",
        category=APP_LIVE,
        tags=["app-live", "mobile", "device", "interactive", "manual"],
        requires_credentials=False,
    )

    class InputSchema(RunAppLiveSessionInput):
        pass

    class OutputSchema(RunAppLiveSessionOutput):
        pass

    async def execute(self, input_data: RunAppLiveSessionInput, context: Optional[Dict[str, Any]] = None) -> RunAppLiveSessionOutput:
        params = {
            "os": input_data.platform,
            "os_version": input_data.os_version,
            "device": input_data.device,
            "app_hashed_id": input_data.app_url[len(APP_URL_PREFIX):],
            "scale_to_fit": "true",
            "speed": "1",
            "start": "true",
        }
        launch_url = f"{APP_LIVE_DASHBOARD_URL}#{urlencode(params, quote_via=quote)}"
        logger.info(f"App Live session link created for {input_data.device} ({input_data.platform} {input_data.os_version})")
        return RunAppLiveSessionOutput(success=True, launch_url=launch_url)


def add_app_live_tools(client) -> List[ToolBase]:
    tool = RunAppLiveSessionTool()
    tool.attach_client(client)
    return [tool]
