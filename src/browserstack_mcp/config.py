# src/browserstack_mcp/config.py
from dataclasses import dataclass, field
from typing import Mapping, Optional
import os

SUPPORTED_TRANSPORTS = ("stdio", "sse")


@dataclass
class ServerConfig:
    """BrowserStack MCP server configuration"""
    # Transport settings
    transport: str = "stdio"
    host: Optional[str] = None
    port: Optional[int] = None

    # BrowserStack credentials
    username: Optional[str] = None
    access_key: Optional[str] = field(default=None, repr=False)

    # REST endpoints
    api_url: str = "https://api.browserstack.com"
    app_api_url: str = "https://api-cloud.browserstack.com"
    test_management_url: str = "https://test-management.browserstack.com"
    timeout: float = 30.0

    log_level: str = "INFO"

    def __post_init__(self):
        self.transport = self.transport.lower()
        if self.transport not in SUPPORTED_TRANSPORTS:
            raise ValueError(
                f"Unsupported MCP transport '{self.transport}', expected one of {', '.join(SUPPORTED_TRANSPORTS)}"
            )
        if self.transport == "sse" and (not self.host or not self.port):
            raise ValueError("MCP_HOST and MCP_PORT are required for the sse transport")
        if self.timeout <= 0:
            raise ValueError("BROWSERSTACK_TIMEOUT must be positive")
        self.log_level = self.log_level.upper()

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.access_key)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ

        port = env.get("MCP_PORT")
        try:
            parsed_port = int(port) if port else None
            timeout = float(env.get("BROWSERSTACK_TIMEOUT", "30"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        return cls(
            transport=env.get("MCP_TRANSPORT", "stdio"),
            host=env.get("MCP_HOST"),
            port=parsed_port,
            username=env.get("BROWSERSTACK_USERNAME"),
            access_key=env.get("BROWSERSTACK_ACCESS_KEY"),
            api_url=env.get("BROWSERSTACK_API_URL", cls.api_url),
            app_api_url=env.get("BROWSERSTACK_APP_API_URL", cls.app_api_url),
            test_management_url=env.get("BROWSERSTACK_TM_API_URL", cls.test_management_url),
            timeout=timeout,
            log_level=env.get("LOG_LEVEL", "INFO"),
        )
