"""Tests for the product tools against a mocked BrowserStack API."""
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import yaml
from pydantic import ValidationError

from browserstack_mcp.client import BrowserStackClient
from browserstack_mcp.config import ServerConfig
from browserstack_mcp.tools.accessibility import AccessibilitySetupTool
from browserstack_mcp.tools.app_automate import GetAppAutomateSessionTool, ListAppAutomateBuildsTool
from browserstack_mcp.tools.app_live import RunAppLiveSessionTool
from browserstack_mcp.tools.automate import GetAutomateSessionTool, ListAutomateBuildsTool
from browserstack_mcp.tools.base import ToolBase
from browserstack_mcp.tools.failure_logs import GetFailureLogsTool, extract_failure_lines
from browserstack_mcp.tools.live import RunBrowserLiveSessionTool
from browserstack_mcp.tools.observability import GetBuildInsightsTool
from browserstack_mcp.tools.sdk import SetupBrowserStackSdkTool
from browserstack_mcp.tools.self_heal import EnableSelfHealTool
from browserstack_mcp.tools.test_management import CreateTestManagementProjectTool, ListTestCasesTool


async def run(tool_class, client, **arguments):
    tool = tool_class()
    tool.attach_client(client)
    return await tool.execute(tool.InputSchema(**arguments))


def fragment_params(launch_url):
    return {key: values[0] for key, values in parse_qs(urlparse(launch_url).fragment).items()}


class TestToolBase:
    def test_tools_start_disabled_and_toggle(self):
        tool = RunBrowserLiveSessionTool()
        assert not tool.enabled
        tool.activate()
        assert tool.enabled
        tool.deactivate()
        assert not tool.enabled

    def test_context_client_used_when_none_attached(self, client):
        tool = ListAutomateBuildsTool()
        assert tool.get_client() is None
        assert tool.get_client({"client": client}) is client

    def test_to_mcp_tool(self):
        description = ListAutomateBuildsTool.to_mcp_tool()
        assert description["name"] == "list_automate_builds"
        assert "limit" in description["inputSchema"]["properties"]

    def test_schemas_and_metadata(self):
        assert GetFailureLogsTool.get_metadata().category == "automate"
        assert "failure_lines" in GetFailureLogsTool.get_output_schema()["properties"]
        assert not RunAppLiveSessionTool.get_metadata().requires_credentials

    def test_every_tool_is_a_toolbase(self):
        for tool_class in (AccessibilitySetupTool, EnableSelfHealTool, ListTestCasesTool):
            assert issubclass(tool_class, ToolBase)


class TestAutomateTools:
    @pytest.mark.asyncio
    async def test_list_builds(self, client, fake_api):
        fake_api.add("GET", "/automate/builds.json", json_body=[
            {"automation_build": {"hashed_id": "b1", "name": "nightly", "status": "done", "duration": 120}},
            {"automation_build": {"hashed_id": "b2", "name": "smoke", "status": "failed", "duration": 30}},
        ])

        output = await run(ListAutomateBuildsTool, client, limit=5, status="done")

        assert output.success
        assert output.count == 2
        assert output.builds[0] == {"hashed_id": "b1", "name": "nightly", "status": "done", "duration": 120}
        request = fake_api.requests[0]
        assert request.url.params["limit"] == "5"
        assert request.url.params["status"] == "done"
        assert request.headers["authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_get_session(self, client, fake_api):
        fake_api.add("GET", "/automate/sessions/s1.json", json_body={
            "automation_session": {"hashed_id": "s1", "status": "passed"}
        })

        output = await run(GetAutomateSessionTool, client, session_id="s1")

        assert output.success
        assert output.session == {"hashed_id": "s1", "status": "passed"}

    @pytest.mark.asyncio
    async def test_api_error_is_reported(self, client, fake_api):
        fake_api.add("GET", "/automate/builds.json", status=401, text="Unauthorized")

        output = await run(ListAutomateBuildsTool, client)

        assert not output.success
        assert "(HTTP 401)" in output.error

    @pytest.mark.asyncio
    async def test_missing_credentials(self, fake_api):
        client = BrowserStackClient(ServerConfig(), transport=httpx.MockTransport(fake_api.handler))

        output = await run(ListAutomateBuildsTool, client)

        assert not output.success
        assert "BROWSERSTACK_USERNAME" in output.error
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_no_client(self):
        tool = GetAutomateSessionTool()
        output = await tool.execute(tool.InputSchema(session_id="s1"))
        assert output.error == "BrowserStack client not initialized"


class TestAppAutomateTools:
    @pytest.mark.asyncio
    async def test_list_builds(self, client, fake_api):
        fake_api.add("GET", "/app-automate/builds.json", json_body=[
            {"automation_build": {"hashed_id": "ab1", "name": "android", "status": "running", "duration": None}},
        ])

        output = await run(ListAppAutomateBuildsTool, client)

        assert output.success
        assert [b["hashed_id"] for b in output.builds] == ["ab1"]
        assert fake_api.requests[0].url.host == "api-cloud.browserstack.com"

    @pytest.mark.asyncio
    async def test_get_session(self, client, fake_api):
        fake_api.add("GET", "/app-automate/sessions/as1.json", json_body={
            "automation_session": {"hashed_id": "as1", "device": "Google Pixel 8"}
        })

        output = await run(GetAppAutomateSessionTool, client, session_id="as1")

        assert output.session["device"] == "Google Pixel 8"


class TestFailureLogsTool:
    LOG = "\n".join([
        "INFO starting session",
        "ERROR element not found: #login",
        "DEBUG retrying",
        "selenium.common.exceptions.TimeoutException: timed out",
        "Test FAILED",
    ])

    def test_extract_failure_lines(self):
        assert extract_failure_lines(self.LOG, 10) == [
            "ERROR element not found: #login",
            "selenium.common.exceptions.TimeoutException: timed out",
            "Test FAILED",
        ]

    @pytest.mark.asyncio
    async def test_automate_logs(self, client, fake_api):
        fake_api.add("GET", "/automate/sessions/s1/logs", text=self.LOG)

        output = await run(GetFailureLogsTool, client, session_id="s1")

        assert output.success
        assert output.total_lines == 5
        assert len(output.failure_lines) == 3
        assert not output.truncated

    @pytest.mark.asyncio
    async def test_truncated(self, client, fake_api):
        fake_api.add("GET", "/automate/sessions/s1/logs", text=self.LOG)

        output = await run(GetFailureLogsTool, client, session_id="s1", max_lines=2)

        assert output.failure_lines == [
            "ERROR element not found: #login",
            "selenium.common.exceptions.TimeoutException: timed out",
        ]
        assert output.truncated

    @pytest.mark.asyncio
    async def test_app_automate_logs(self, client, fake_api):
        fake_api.add("GET", "/app-automate/builds/b1/sessions/s1/appiumlogs", text="Appium error: crash")

        output = await run(GetFailureLogsTool, client, session_id="s1", product="app-automate", build_id="b1")

        assert output.failure_lines == ["Appium error: crash"]

    def test_app_automate_requires_build_id(self):
        with pytest.raises(ValidationError, match="build_id is required"):
            GetFailureLogsTool.InputSchema(session_id="s1", product="app-automate")


class TestBuildInsightsTool:
    @pytest.mark.asyncio
    async def test_summary(self, client, fake_api):
        fake_api.add("GET", "/automate/builds/b1/sessions.json", json_body=[
            {"automation_session": {"hashed_id": "s1", "name": "login", "status": "passed"}},
            {"automation_session": {"hashed_id": "s2", "name": "checkout", "status": "failed", "reason": "assertion"}},
            {"automation_session": {"hashed_id": "s3", "name": "search", "status": "passed"}},
            {"automation_session": {"hashed_id": "s4", "name": "cart", "status": "timeout"}},
        ])

        output = await run(GetBuildInsightsTool, client, build_id="b1")

        assert output.total_sessions == 4
        assert output.status_counts == {"passed": 2, "failed": 1, "timeout": 1}
        assert output.pass_rate == 0.5
        assert [s["hashed_id"] for s in output.failed_sessions] == ["s2", "s4"]
        assert output.failed_sessions[0]["reason"] == "assertion"

    @pytest.mark.asyncio
    async def test_empty_build(self, client, fake_api):
        fake_api.add("GET", "/automate/builds/b1/sessions.json", json_body=[])

        output = await run(GetBuildInsightsTool, client, build_id="b1")

        assert output.success
        assert output.total_sessions == 0
        assert output.pass_rate == 0.0


class TestTestManagementTools:
    @pytest.mark.asyncio
    async def test_create_project(self, client, fake_api):
        fake_api.add("POST", "/api/v2/projects", json_body={
            "success": True,
            "project": {"identifier": "PR-7", "name": "Checkout"},
        })

        output = await run(CreateTestManagementProjectTool, client, name="Checkout", description="Payments")

        assert output.project_id == "PR-7"
        request = fake_api.requests[0]
        assert request.url.host == "test-management.browserstack.com"
        assert b'"name":"Checkout"' in request.content.replace(b" ", b"")

    @pytest.mark.asyncio
    async def test_list_test_cases(self, client, fake_api):
        fake_api.add("GET", "/api/v2/projects/PR-7/test-cases", json_body={
            "test_cases": [
                {"identifier": "TC-1", "title": "Pay by card", "priority": "high", "status": "active"},
            ],
        })

        output = await run(ListTestCasesTool, client, project_id="PR-7", priority="high")

        assert output.count == 1
        assert output.test_cases[0]["title"] == "Pay by card"
        assert fake_api.requests[0].url.params["priority"] == "high"


class TestLiveTools:
    @pytest.mark.asyncio
    async def test_browser_live_url(self, client):
        output = await run(RunBrowserLiveSessionTool, client,
                           desired_url="https://example.com/login?next=/", browser="Firefox")

        assert output.launch_url.startswith("https://live.browserstack.com/dashboard#")
        params = fragment_params(output.launch_url)
        assert params["browser"] == "firefox"
        assert params["url"] == "https://example.com/login?next=/"
        assert params["os"] == "Windows"
        assert params["start"] == "true"

    def test_browser_live_rejects_non_http_urls(self):
        with pytest.raises(ValidationError):
            RunBrowserLiveSessionTool.InputSchema(desired_url="example.com")

    @pytest.mark.asyncio
    async def test_app_live_url(self, client):
        output = await run(RunAppLiveSessionTool, client, app_url="bs://abc123",
                           platform="android", device="Google Pixel 8", os_version="14.0")

        assert output.launch_url.startswith("https://app-live.browserstack.com/dashboard#")
        params = fragment_params(output.launch_url)
        assert params["app_hashed_id"] == "abc123"
        assert params["device"] == "Google Pixel 8"

    @pytest.mark.parametrize("app_url", ["bs://", "https://example.com/app.apk"])
    def test_app_live_rejects_bad_app_url(self, app_url):
        with pytest.raises(ValidationError):
            RunAppLiveSessionTool.InputSchema(app_url=app_url, platform="ios", device="iPhone 15", os_version="17")


class TestConfigurationTools:
    @pytest.mark.asyncio
    async def test_sdk_setup_python(self, client):
        output = await run(SetupBrowserStackSdkTool, client, language="python", test_command="pytest tests/")

        assert output.steps == [
            "python3 -m pip install browserstack-sdk",
            'browserstack-sdk setup --username "alice" --key "YOUR_ACCESS_KEY"',
            "browserstack-sdk pytest tests/",
        ]
        config = yaml.safe_load(output.browserstack_yml)
        assert config["userName"] == "alice"
        assert config["accessKey"] == "YOUR_ACCESS_KEY"
        assert config["browserstackLocal"] is True
        assert [p["browserName"] for p in config["platforms"]] == ["chrome", "safari"]
        assert "secret-key" not in output.browserstack_yml

    @pytest.mark.asyncio
    async def test_sdk_setup_without_client(self):
        tool = SetupBrowserStackSdkTool()
        output = await tool.execute(tool.InputSchema(language="nodejs"))

        assert output.steps[-1] == "npx browserstack-node-sdk npm test"
        assert yaml.safe_load(output.browserstack_yml)["userName"] == "YOUR_USERNAME"

    @pytest.mark.asyncio
    async def test_accessibility_setup(self, client):
        output = await run(AccessibilitySetupTool, client, wcag_version="wcag2aa",
                           include_issue_type=["bestPractice"])

        config = yaml.safe_load(output.browserstack_yml)
        assert config["accessibility"] is True
        assert config["accessibilityOptions"] == {
            "wcagVersion": "wcag2aa",
            "includeIssueType": {"bestPractice": True},
        }
        assert output.notes

    @pytest.mark.asyncio
    async def test_self_heal_yml(self, client):
        output = await run(EnableSelfHealTool, client)
        assert yaml.safe_load(output.browserstack_yml)["selfHeal"] is True

    @pytest.mark.asyncio
    async def test_self_heal_capabilities(self, client):
        output = await run(EnableSelfHealTool, client, session_capabilities=True)
        assert output.capabilities == {"bstack:options": {"selfHeal": True}}
        assert output.browserstack_yml == ""
