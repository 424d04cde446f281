"""
Intent-aware transport wrapper.

Sits between an MCP transport's read stream and the MCP server. Every
inbound message is inspected for a user query; when one is found the query
is classified and the tool registry toggled before the message is forwarded
unchanged to the server. Intent analysis is best effort: failures are logged
and the message is still delivered.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream

from .query_extraction import extract_user_query, is_generate_request, message_to_dict
from .toggler import ToolToggler

logger = logging.getLogger(__name__)


def handle_inbound_message(message: Any, toggler: ToolToggler):
    """
    Run intent analysis for one inbound message, if it carries a user query.

    Args:
        message: SessionMessage, JSON-RPC model or dict
        toggler: Toggler bound to the server's tool registry
    """
    data = message_to_dict(message)
    if data is None:
        return

    user_query = extract_user_query(data)
    if user_query:
        logger.info(f"Extracted user query for intent analysis: {user_query}")
        try:
            toggler.analyze_intent_and_toggle_tools(user_query)
        except Exception as e:
            logger.error(f"Error during intent analysis: {e}", exc_info=True)
    elif is_generate_request(data):
        logger.debug(
            "No user query found in model/generate message params for intent analysis. "
            "Message structure might be different than expected."
        )


@asynccontextmanager
async def intent_aware_read_stream(
    read_stream: MemoryObjectReceiveStream,
    toggler: ToolToggler,
) -> AsyncIterator[MemoryObjectReceiveStream]:
    """
    Wrap a transport read stream with intent analysis.

    Usage:
        async with stdio_server() as (read_stream, write_stream):
            async with intent_aware_read_stream(read_stream, toggler) as wrapped:
                await server.run(wrapped, write_stream, options)
    """
    forward_send, forward_receive = anyio.create_memory_object_stream(0)

    async def pump():
        async with forward_send:
            async for item in read_stream:
                # Transport errors are forwarded as exceptions; only inspect messages
                if not isinstance(item, Exception):
                    handle_inbound_message(item, toggler)
                try:
                    await forward_send.send(item)
                except (anyio.BrokenResourceError, anyio.ClosedResourceError):
                    logger.debug("MCP server stopped reading; intent pump exiting")
                    return

    async with anyio.create_task_group() as tg:
        tg.start_soon(pump)
        try:
            yield forward_receive
        finally:
            tg.cancel_scope.cancel()
            forward_receive.close()
