"""
User query extraction from inbound MCP messages.

Agents place the user's text in different parts of a request. Each
extractor below handles one known shape and returns the text or None; they
are tried in order and the first non-empty string wins. Nothing here walks
arbitrary structures or stitches partial text together.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)

GENERATE_METHOD = "model/generate"

Extractor = Callable[[Mapping[str, Any]], Optional[str]]


def _non_empty_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def from_prompt(params: Mapping[str, Any]) -> Optional[str]:
    """params.prompt"""
    return _non_empty_string(params.get("prompt"))


def from_last_user_message(params: Mapping[str, Any]) -> Optional[str]:
    """Last params.messages entry with role 'user'; content is a string or {text: ...}."""
    messages = params.get("messages")
    if not isinstance(messages, list) or not messages:
        return None

    for message in reversed(messages):
        if isinstance(message, Mapping) and message.get("role") == "user":
            content = message.get("content")
            if isinstance(content, Mapping):
                return _non_empty_string(content.get("text"))
            return _non_empty_string(content)
    return None


def from_context(params: Mapping[str, Any]) -> Optional[str]:
    """params.context.userQuery"""
    context = params.get("context")
    if not isinstance(context, Mapping):
        return None
    return _non_empty_string(context.get("userQuery"))


EXTRACTORS: Tuple[Extractor, ...] = (
    from_prompt,
    from_last_user_message,
    from_context,
)


def message_to_dict(message: Any) -> Optional[Dict[str, Any]]:
    """
    Normalise an inbound message to a plain dict.

    Accepts dicts, mcp SessionMessage wrappers and JSON-RPC pydantic models
    (including RootModel wrappers such as JSONRPCMessage).
    """
    # SessionMessage carries the JSON-RPC message in .message
    inner = getattr(message, "message", None)
    if isinstance(inner, BaseModel):
        message = inner

    if isinstance(message, BaseModel):
        message = message.model_dump(by_alias=True, exclude_none=True)

    if isinstance(message, Mapping):
        return dict(message)
    return None


def is_generate_request(message: Mapping[str, Any]) -> bool:
    return message.get("method") == GENERATE_METHOD


def extract_user_query(message: Any) -> Optional[str]:
    """
    Extract the user query from an inbound message.

    Args:
        message: dict or mcp message object

    Returns:
        The first non-empty query string found, or None
    """
    data = message_to_dict(message)
    if data is None or not is_generate_request(data):
        return None

    params = data.get("params")
    if not isinstance(params, Mapping):
        return None

    for extractor in EXTRACTORS:
        query = extractor(params)
        if query:
            return query
    return None
