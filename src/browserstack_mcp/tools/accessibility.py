"""
Accessibility Tool - Turn on accessibility scanning for SDK-driven test runs.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import Field
import logging

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from .sdk import browserstack_config, render_browserstack_yml
from ..products import ACCESSIBILITY

logger = logging.getLogger(__name__)


class AccessibilitySetupInput(ToolInput):
    """Input schema for accessibility_setup tool."""
    wcag_version: Literal["wcag2a", "wcag2aa", "wcag21a", "wcag21aa"] = Field(
        default="wcag21aa",
        description="WCAG conformance level to test against"
    )
    include_issue_type: List[Literal["bestPractice", "needsReview"]] = Field(
        default_factory=list,
        description="Extra issue categories to report"
    )
    include_tags_in_test_names: List[str] = Field(
        default_factory=list,
        description="Only scan tests whose names contain one of these tags (empty scans all)"
    )


class AccessibilitySetupOutput(ToolOutput):
    """Output schema for accessibility_setup tool."""
    browserstack_yml: str = Field(default="", description="browserstack.yml with accessibility enabled")
    notes: List[str] = Field(default_factory=list, description="Follow-up instructions")


class AccessibilitySetupTool(ToolBase):
    """
    Produces the browserstack.yml settings that enable automated accessibility
    scans on every page visited by an SDK test run.
    """

    METADATA = ToolMetadata(
        name="accessibility_setup",
        description="Enable BrowserStack accessibility (a11y) scanning for automated test runs and return the browserstack.yml settings",
        category=ACCESSIBILITY,
        tags=["accessibility", "a11y", "wcag", "sdk"],
        requires_credentials=False,
    )

    class InputSchema(AccessibilitySetupInput):
        pass

    class OutputSchema(AccessibilitySetupOutput):
        pass

    async def execute(self, input_data: AccessibilitySetupInput, context: Optional[Dict[str, Any]] = None) -> AccessibilitySetupOutput:
        client = self.get_client(context)
        username = client.username if client is not None else None

        options: Dict[str, Any] = {"wcagVersion": input_data.wcag_version}
        if input_data.include_issue_type:
            options["includeIssueType"] = {issue: True for issue in input_data.include_issue_type}
        if input_data.include_tags_in_test_names:
            options["includeTagsInTestingScope"] = input_data.include_tags_in_test_names

        config = browserstack_config(
            username,
            extra={"accessibility": True, "accessibilityOptions": options},
        )

        notes = [
            "Merge these keys into the browserstack.yml at the project root.",
            "Run the suite through the BrowserStack SDK; reports appear in the Accessibility dashboard.",
        ]
        logger.info(f"Generated accessibility settings for {input_data.wcag_version}")
        return AccessibilitySetupOutput(
            success=True,
            browserstack_yml=render_browserstack_yml(config),
            notes=notes,
        )


def add_accessibility_tools(client) -> List[ToolBase]:
    tool = AccessibilitySetupTool()
    tool.attach_client(client)
    return [tool]
