#!/usr/bin/env python3
"""
Example usage script for unified search.

Shows the search entry points, the typed dispatcher, the agent tool
descriptor and a research task. Each example only runs the engines whose
API keys are set in the environment (or in a .env file).
"""

import asyncio
import json

from unified_search import (
    EngineDispatcher,
    enabled_engines,
    list_search_tools,
    research_task,
    search,
    setup_logging,
    get_logger,
)

logger = get_logger("example")


async def basic_search_example():
    """Keyword search through Brave."""
    print("🔍 Basic Search Example")
    print("-" * 50)

    result = await search("brave", "python asyncio tutorial", 3)
    if result.startswith("Error"):
        print(f"❌ {result}")
        return

    for index, item in enumerate(json.loads(result), start=1):
        print(f"{index}. {item['title']}")
        print(f"   {item['url']}")


async def typed_outcome_example():
    """Use the dispatcher directly to branch on the error kind."""
    print("\n🧭 Typed Outcome Example")
    print("-" * 50)

    dispatcher = EngineDispatcher()
    for engine in ("google", "unknown-engine"):
        outcome = await dispatcher.dispatch(engine, "latest rust release", 5)
        if outcome.ok:
            print(f"{engine}: {outcome.payload[:200]}")
        else:
            print(f"{engine}: {outcome.error_kind.value} - {outcome.message}")


def tool_descriptor_example():
    """Print the function-calling definition offered to agents."""
    print("\n🛠  Tool Descriptor Example")
    print("-" * 50)

    tools = list_search_tools()
    if not tools:
        print("No engines configured; set BRAVE_API_KEY or an LLM provider key.")
        return
    print(json.dumps(tools[0].to_dict(), indent=2))


async def research_example():
    """Run a multi-round research task."""
    print("\n📚 Research Example")
    print("-" * 50)

    report = await research_task("current state of solid-state batteries", "mini")
    print(report)


async def main():
    setup_logging("WARNING")
    engines = [engine.value for engine in enabled_engines()]
    print(f"Enabled engines: {', '.join(engines) or 'none'}\n")

    try:
        await basic_search_example()
        await typed_outcome_example()
        tool_descriptor_example()
        await research_example()
    except Exception as e:
        logger.error(f"Example failed: {e}")
        print(f"❌ Example failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
