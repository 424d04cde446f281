"""
Live Tool - Start an interactive BrowserStack Live browser session.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode, urlparse
from pydantic import Field, field_validator
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..products import LIVE

logger = logging.getLogger(__name__)

LIVE_DASHBOARD_URL = "https://live.browserstack.com/dashboard"


class RunBrowserLiveSessionInput(ToolInput):
    """Input schema for run_browser_live_session tool."""
    desired_url: str = Field(..., description="Public or local URL to open (http or https)")
    os: str = Field(default="Windows", description="Operating system, e.g. 'Windows' or 'OS X'")
    os_version: str = Field(default="11", description="OS version, e.g. '11' or 'Sonoma'")
    browser: str = Field(default="chrome", description="Browser name, e.g. 'chrome', 'firefox', 'safari', 'edge'")
    browser_version: str = Field(default="latest", description="Browser version or 'latest'")

    @field_validator("desired_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("desired_url must be an http(s) URL")
        return value


class RunBrowserLiveSessionOutput(ToolOutput):
    """Output schema for run_browser_live_session tool."""
    launch_url: str = Field(default="", description="URL that starts the Live session in the browser")


def build_live_url(input_data: RunBrowserLiveSessionInput) -> str:
    params = {
        "os": input_data.os,
        "os_version": input_data.os_version,
        "browser": input_data.browser.lower(),
        "browser_version": input_data.browser_version,
        "url": input_data.desired_url,
        "scale_to_fit": "true",
        "speed": "1",
        "start": "true",
    }
    return f"{LIVE_DASHBOARD_URL}#{urlencode(params, quote_via=quote)}"


class RunBrowserLiveSessionTool(ToolBase):
    """
    Builds a launch link for a manual cross-browser session on BrowserStack Live.
    """

    METADATA = ToolMetadata(
        name="run_browser_live_session",
        description="Start an interactive BrowserStack Live session for a URL on a chosen OS and browser",
        category=LIVE,
        tags=["live", "browser", "interactive", "manual"],
        requires_credentials=False,
    )

    class InputSchema(RunBrowserLiveSessionInput):
        pass

    class OutputSchema(RunBrowserLiveSessionOutput):
        pass

    async def execute(self, input_data: RunBrowserLiveSessionInput, context: Optional[Dict[str, Any]] = None) -> RunBrowserLiveSessionOutput:
        launch_url = build_live_url(input_data)
        logger.info(f"Live session link created for {input_data.desired_url} on {input_data.browser}")
        return RunBrowserLiveSessionOutput(success=True, launch_url=launch_url)


def add_browser_live_tools(client) -> List[ToolBase]:
    tool = RunBrowserLiveSessionTool()
    tool.attach_client(client)
    return [tool]
