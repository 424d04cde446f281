"""
Failure Logs Tool - Pull the failing lines out of session logs.

Registered for both Automate and App Automate, so the same tool name
appears in two product categories.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import Field, model_validator
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..client import BrowserStackAPIError
from ..products import APP_AUTOMATE, AUTOMATE

logger = logging.getLogger(__name__)

ERROR_MARKERS = ("error", "exception", "failed", "failure", "timeout", "traceback")


class GetFailureLogsInput(ToolInput):
    """Input schema for get_failure_logs tool."""
    session_id: str = Field(..., min_length=1, description="Session ID to fetch logs for")
    product: Literal["automate", "app-automate"] = Field(
        default="automate",
        description="Product the session belongs to"
    )
    build_id: Optional[str] = Field(
        default=None,
        description="Build ID (required for app-automate sessions)"
    )
    max_lines: int = Field(default=50, ge=1, le=500, description="Maximum failure lines to return")

    @model_validator(mode="after")
    def _require_build_for_app_automate(self):
        if self.product == APP_AUTOMATE and not self.build_id:
            raise ValueError("build_id is required for app-automate sessions")
        return self


class GetFailureLogsOutput(ToolOutput):
    """Output schema for get_failure_logs tool."""
    failure_lines: List[str] = Field(default_factory=list, description="Log lines that look like failures")
    total_lines: int = Field(default=0, description="Total number of lines in the log")
    truncated: bool = Field(default=False, description="Whether failure_lines was cut at max_lines")


def extract_failure_lines(log_text: str, max_lines: int) -> List[str]:
    """Lines mentioning an error marker, in log order."""
    lines = [
        line.strip()
        for line in log_text.splitlines()
        if any(marker in line.lower() for marker in ERROR_MARKERS)
    ]
    return lines[:max_lines + 1]


class GetFailureLogsTool(ToolBase):
    """
    Fetches the text logs of a session and returns only the lines that
    indicate a failure (errors, exceptions, timeouts).

    Automate sessions use the session log endpoint; App Automate sessions
    use the Appium log of the given build/session.
    """

    METADATA = ToolMetadata(
        name="get_failure_logs",
        description="Fetch failure and error lines from an Automate or App Automate session's logs",
        category=AUTOMATE,
        tags=["logs", "debug", "failure", "automate", "app-automate"],
    )

    class InputSchema(GetFailureLogsInput):
        pass

    class OutputSchema(GetFailureLogsOutput):
        pass

    async def execute(self, input_data: GetFailureLogsInput, context: Optional[Dict[str, Any]] = None) -> GetFailureLogsOutput:
        client = self.get_client(context)
        if client is None:
            return GetFailureLogsOutput(success=False, error="BrowserStack client not initialized")

        if input_data.product == APP_AUTOMATE:
            url = client.app_api(
                f"app-automate/builds/{input_data.build_id}/sessions/{input_data.session_id}/appiumlogs"
            )
        else:
            url = client.api(f"automate/sessions/{input_data.session_id}/logs")

        try:
            log_text = await client.get_text(url)
        except BrowserStackAPIError as e:
            logger.error(f"Error fetching logs for session {input_data.session_id}: {e}")
            return GetFailureLogsOutput(success=False, error=str(e))

        lines = extract_failure_lines(log_text, input_data.max_lines)
        truncated = len(lines) > input_data.max_lines
        return GetFailureLogsOutput(
            success=True,
            failure_lines=lines[:input_data.max_lines],
            total_lines=len(log_text.splitlines()),
            truncated=truncated,
        )


def add_failure_logs_tools(client) -> List[ToolBase]:
    tool = GetFailureLogsTool()
    tool.attach_client(client)
    return [tool]
