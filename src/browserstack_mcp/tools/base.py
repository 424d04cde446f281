"""
Base classes and types for BrowserStack product tools.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, TypeVar, runtime_checkable
from pydantic import BaseModel, Field


@runtime_checkable
class ToggleableTool(Protocol):
    """The only capabilities the intent toggler relies on."""

    @property
    def name(self) -> str: ...

    @property
    def enabled(self) -> bool: ...

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


class ToolMetadata(BaseModel):
    """Metadata describing a tool."""
    name: str = Field(..., description="Tool name exposed to MCP clients")
    description: str = Field(..., description="Human-readable description of what the tool does")
    category: str = Field(..., description="Product category this tool belongs to (e.g., 'automate', 'live')")
    tags: List[str] = Field(default_factory=list, description="Searchable tags")
    requires_credentials: bool = Field(default=True, description="Whether tool calls the BrowserStack API")
    version: str = Field(default="1.0.0", description="Tool version")


class ToolInput(BaseModel):
    """Base class for tool input schemas."""
    pass


class ToolOutput(BaseModel):
    """Base class for tool output schemas."""
    success: bool = Field(default=True, description="Whether the tool execution was successful")
    error: Optional[str] = Field(default=None, description="Error message if execution failed")


TInput = TypeVar('TInput', bound=ToolInput)
TOutput = TypeVar('TOutput', bound=ToolOutput)


class ToolBase(ABC):
    """
    Base class for all BrowserStack product tools.

    Each tool should:
    1. Define METADATA as a class attribute
    2. Define InputSchema and OutputSchema as nested classes
    3. Implement the execute() method

    Tool instances carry their own enabled state. Tools start disabled and
    are switched on and off by the intent toggler; only enabled tools are
    listed to MCP clients or callable by them.

    The BrowserStack client is attached at registration time via
    attach_client(), falling back to context['client'] at execution time.
    """

    # Each tool must define these
    METADATA: ToolMetadata

    def __init__(self):
        self._client = None
        self._enabled = False

    @property
    def name(self) -> str:
        return self.METADATA.name

    @property
    def category(self) -> str:
        return self.METADATA.category

    @property
    def enabled(self) -> bool:
        return self._enabled

    def activate(self) -> None:
        self._enabled = True

    def deactivate(self) -> None:
        self._enabled = False

    def attach_client(self, client):
        """
        Attach a BrowserStackClient to this tool instance.

        Args:
            client: BrowserStackClient instance shared by all tools
        """
        self._client = client

    def get_client(self, context: Optional[Dict[str, Any]] = None):
        """
        Resolve the client: attached first, then context['client'].

        Returns:
            BrowserStackClient instance or None
        """
        if self._client is not None:
            return self._client
        if context:
            return context.get('client')
        return None

    @abstractmethod
    async def execute(self, input_data: TInput, context: Optional[Dict[str, Any]] = None) -> TOutput:
        """
        Execute the tool with given input and optional context.

        Args:
            input_data: Validated input matching InputSchema
            context: Optional execution context, may carry 'client'

        Returns:
            Output matching OutputSchema
        """
        pass

    @classmethod
    def get_input_schema(cls) -> Dict[str, Any]:
        """Get JSON Schema for tool input."""
        return cls.InputSchema.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> Dict[str, Any]:
        """Get JSON Schema for tool output."""
        return cls.OutputSchema.model_json_schema()

    @classmethod
    def get_metadata(cls) -> ToolMetadata:
        """Get tool metadata."""
        return cls.METADATA

    @classmethod
    def to_mcp_tool(cls) -> Dict[str, Any]:
        """Convert to MCP tool format."""
        return {
            "name": cls.METADATA.name,
            "description": cls.METADATA.description,
            "inputSchema": cls.get_input_schema()
        }

    def __repr__(self) -> str:
        state = "enabled" if self._enabled else "disabled"
        return f"{type(self).__name__}(name='{self.name}', category='{self.category}', {state})"
