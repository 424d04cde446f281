#!/usr/bin/env python3
"""
Manual check of intent-driven tool activation.

This script walks through:
1. Registering every product's tools (all disabled)
2. Routing a few sample queries through the toggler
3. Executing an enabled tool and a disabled one

No BrowserStack credentials are needed; only credential-free tools are executed.

Usage:
    python scripts/test-intent-routing.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from browserstack_mcp.client import BrowserStackClient
from browserstack_mcp.config import ServerConfig
from browserstack_mcp.fnc_tools import register_initial_tools
from browserstack_mcp.registry import ToolRegistry
from browserstack_mcp.toggler import ToolToggler
from browserstack_mcp.tools.executor import ToolExecutor

SAMPLE_QUERIES = [
    "run an automate session",
    "test my mobile app",
    "start a live session",
    "check website accessibility",
    "how do I use the browserstack sdk?",
    "my tests are flaky",
    "hello world",
]


def build():
    client = BrowserStackClient(ServerConfig())
    registry = register_initial_tools(ToolRegistry(), client)
    return registry, ToolToggler(registry), ToolExecutor(registry, client)


def test_registration(registry):
    print("=" * 80)
    print("TEST 1: Registration")
    print("=" * 80)

    for category, tools in registry.items():
        print(f"  - {category}: {', '.join(tool.name for tool in tools)}")

    enabled = registry.enabled_tools()
    if enabled:
        print(f"\n❌ Expected no enabled tools, found {len(enabled)}")
    else:
        print("\n✅ All tools start disabled")


def test_routing(registry, toggler):
    print("\n" + "=" * 80)
    print("TEST 2: Query Routing")
    print("=" * 80)

    for query in SAMPLE_QUERIES:
        intents = toggler.analyze_intent_and_toggle_tools(query)
        names = [tool.name for tool in registry.enabled_tools()]
        print(f"\nQuery: {query!r}")
        print(f"  Intents: {', '.join(sorted(intents)) or '(none)'}")
        print(f"  Enabled: {', '.join(names) or '(none)'}")


async def test_execution(toggler, executor):
    print("\n" + "=" * 80)
    print("TEST 3: Execution")
    print("=" * 80)

    toggler.analyze_intent_and_toggle_tools("open an interactive browser")

    print("\n1. Enabled tool:")
    result = await executor.execute_tool(
        "run_browser_live_session",
        {"desired_url": "https://www.browserstack.com", "browser": "firefox"},
    )
    if result.get("success"):
        print(f"  ✅ {result['launch_url']}")
    else:
        print(f"  ❌ {result.get('error')}")

    print("\n2. Disabled tool:")
    result = await executor.execute_tool("setup_browserstack_sdk", {"language": "python"})
    if result.get("success"):
        print("  ❌ Disabled tool was executed")
    else:
        print(f"  ✅ Refused: {result['error']}")


async def main():
    registry, toggler, executor = build()
    test_registration(registry)
    test_routing(registry, toggler)
    await test_execution(toggler, executor)
    print("\n✅ Done")


if __name__ == "__main__":
    asyncio.run(main())
