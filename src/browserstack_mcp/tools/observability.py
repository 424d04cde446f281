"""
Observability Tool - Summarise the outcome of an Automate build.
"""

from collections import Counter
from typing import Any, Dict, List, Optional
from pydantic import Field
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..client import BrowserStackAPIError
from ..products import AUTOMATE

logger = logging.getLogger(__name__)

FAILED_STATUSES = {"failed", "error", "timeout"}


class GetBuildInsightsInput(ToolInput):
    """Input schema for get_build_insights tool."""
    build_id: str = Field(..., min_length=1, description="Automate build hashed ID")


class GetBuildInsightsOutput(ToolOutput):
    """Output schema for get_build_insights tool."""
    total_sessions: int = Field(default=0, description="Number of sessions in the build")
    status_counts: Dict[str, int] = Field(default_factory=dict, description="Session count per status")
    pass_rate: float = Field(default=0.0, description="Share of passed sessions, 0.0 to 1.0")
    failed_sessions: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Failed sessions with name, reason and hashed_id"
    )


class GetBuildInsightsTool(ToolBase):
    """
    Aggregates the sessions of an Automate build into pass/fail statistics.

    Sessions are counted by status; any session whose status is failed,
    error or timeout is listed with its reason so it can be investigated
    with get_failure_logs.
    """

    METADATA = ToolMetadata(
        name="get_build_insights",
        description="Summarise pass/fail statistics and failed sessions for an Automate build",
        category=AUTOMATE,
        tags=["observability", "build", "insights", "automate"],
    )

    class InputSchema(GetBuildInsightsInput):
        pass

    class OutputSchema(GetBuildInsightsOutput):
        pass

    async def execute(self, input_data: GetBuildInsightsInput, context: Optional[Dict[str, Any]] = None) -> GetBuildInsightsOutput:
        client = self.get_client(context)
        if client is None:
            return GetBuildInsightsOutput(success=False, error="BrowserStack client not initialized")

        try:
            data = await client.get_json(client.api(f"automate/builds/{input_data.build_id}/sessions.json"))
        except BrowserStackAPIError as e:
            logger.error(f"Error fetching sessions for build {input_data.build_id}: {e}")
            return GetBuildInsightsOutput(success=False, error=str(e))

        sessions = [entry.get("automation_session", entry) for entry in data or []]
        counts = Counter((session.get("status") or "unknown").lower() for session in sessions)
        failed = [
            {
                "hashed_id": session.get("hashed_id"),
                "name": session.get("name"),
                "reason": session.get("reason"),
            }
            for session in sessions
            if (session.get("status") or "").lower() in FAILED_STATUSES
        ]

        total = len(sessions)
        return GetBuildInsightsOutput(
            success=True,
            total_sessions=total,
            status_counts=dict(counts),
            pass_rate=round(counts.get("passed", 0) / total, 4) if total else 0.0,
            failed_sessions=failed,
        )


def add_observability_tools(client) -> List[ToolBase]:
    tool = GetBuildInsightsTool()
    tool.attach_client(client)
    return [tool]
