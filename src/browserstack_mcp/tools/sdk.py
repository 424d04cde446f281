"""
SDK Tool - Set up the BrowserStack SDK for an existing test suite.

Produces install/run commands and a browserstack.yml for the requested
language. The YAML helpers here are shared with the accessibility and
self-heal tools, which only add their own keys to the same file.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field
import logging
import yaml

from .base import ToolBase, ToolInput, ToolOutput, ToolMetadata
from ..products import SDK

logger = logging.getLogger(__name__)

Language = Literal["python", "nodejs", "java"]

USERNAME_PLACEHOLDER = "YOUR_USERNAME"
ACCESS_KEY_PLACEHOLDER = "YOUR_ACCESS_KEY"

SDK_COMMANDS: Dict[str, Dict[str, str]] = {
    "python": {
        "install": "python3 -m pip install browserstack-sdk",
        "setup": "browserstack-sdk setup --username \"{username}\" --key \"{access_key}\"",
        "run": "browserstack-sdk {test_command}",
        "default_test_command": "pytest",
    },
    "nodejs": {
        "install": "npm i -D browserstack-node-sdk@latest",
        "setup": "npx setup --username \"{username}\" --key \"{access_key}\"",
        "run": "npx browserstack-node-sdk {test_command}",
        "default_test_command": "npm test",
    },
    "java": {
        "install": "Add com.browserstack:browserstack-java-sdk (LATEST) to your pom.xml dependencies",
        "setup": "Create browserstack.yml in the project root with the configuration below",
        "run": "mvn test -P sample-test",
        "default_test_command": "mvn test",
    },
}


class Platform(BaseModel):
    """A browser or device the SDK should fan tests out to."""
    os: Optional[str] = Field(default=None, description="Operating system, e.g. 'Windows'")
    osVersion: Optional[str] = Field(default=None, description="OS version")
    browserName: Optional[str] = Field(default=None, description="Browser name")
    browserVersion: Optional[str] = Field(default=None, description="Browser version")
    deviceName: Optional[str] = Field(default=None, description="Real device name for mobile runs")


DEFAULT_PLATFORMS = [
    Platform(os="Windows", osVersion="11", browserName="chrome", browserVersion="latest"),
    Platform(os="OS X", osVersion="Sonoma", browserName="safari", browserVersion="latest"),
]


def browserstack_config(username: Optional[str], extra: Optional[Dict[str, Any]] = None,
                        platforms: Optional[List[Platform]] = None) -> Dict[str, Any]:
    """Base browserstack.yml settings; credentials are never written in clear."""
    config: Dict[str, Any] = {
        "userName": username or USERNAME_PLACEHOLDER,
        "accessKey": ACCESS_KEY_PLACEHOLDER,
    }
    if platforms:
        config["platforms"] = [p.model_dump(exclude_none=True) for p in platforms]
    config.update(extra or {})
    return config


def render_browserstack_yml(config: Dict[str, Any]) -> str:
    return yaml.safe_dump(config, sort_keys=False, default_flow_style=False)


class SetupBrowserStackSdkInput(ToolInput):
    """Input schema for setup_browserstack_sdk tool."""
    language: Language = Field(..., description="Language of the test suite")
    project_name: str = Field(default="BrowserStack Project", description="projectName in browserstack.yml")
    build_name: str = Field(default="browserstack-build-1", description="buildName in browserstack.yml")
    test_command: Optional[str] = Field(default=None, description="Command that runs the suite today, e.g. 'pytest tests/'")
    platforms: List[Platform] = Field(default_factory=list, description="Platforms to run on (defaults to Chrome/Windows and Safari/macOS)")
    parallels_per_platform: int = Field(default=1, ge=1, le=25, description="Parallel sessions per platform")


class SetupBrowserStackSdkOutput(ToolOutput):
    """Output schema for setup_browserstack_sdk tool."""
    steps: List[str] = Field(default_factory=list, description="Ordered setup commands")
    browserstack_yml: str = Field(default="", description="Contents for browserstack.yml")


class SetupBrowserStackSdkTool(ToolBase):
    """
    Generates the steps needed to run an existing suite through the BrowserStack SDK.

    Credentials are shown as placeholders when the server has no username
    configured; the access key is never echoed back.
    """

    METADATA = ToolMetadata(
        name="setup_browserstack_sdk",
        description="Generate install/run commands and browserstack.yml to run an existing test suite on BrowserStack via the SDK",
        category=SDK,
        tags=["sdk", "setup", "browserstack.yml", "python", "nodejs", "java"],
        requires_credentials=False,
    )

    class InputSchema(SetupBrowserStackSdkInput):
        pass

    class OutputSchema(SetupBrowserStackSdkOutput):
        pass

    async def execute(self, input_data: SetupBrowserStackSdkInput, context: Optional[Dict[str, Any]] = None) -> SetupBrowserStackSdkOutput:
        client = self.get_client(context)
        username = client.username if client is not None else None

        commands = SDK_COMMANDS[input_data.language]
        test_command = input_data.test_command or commands["default_test_command"]
        steps = [
            commands["install"],
            commands["setup"].format(username=username or USERNAME_PLACEHOLDER, access_key=ACCESS_KEY_PLACEHOLDER),
            commands["run"].format(test_command=test_command),
        ]

        config = browserstack_config(
            username,
            extra={
                "projectName": input_data.project_name,
                "buildName": input_data.build_name,
                "parallelsPerPlatform": input_data.parallels_per_platform,
                "browserstackLocal": True,
                "debug": False,
                "networkLogs": False,
            },
            platforms=input_data.platforms or DEFAULT_PLATFORMS,
        )

        logger.info(f"Generated BrowserStack SDK setup for {input_data.language}")
        return SetupBrowserStackSdkOutput(
            success=True,
            steps=steps,
            browserstack_yml=render_browserstack_yml(config),
        )


def add_sdk_tools(client) -> List[ToolBase]:
    tool = SetupBrowserStackSdkTool()
    tool.attach_client(client)
    return [tool]
