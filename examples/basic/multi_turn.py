#!/usr/bin/env python3
"""Multi-turn conversation example.

This example demonstrates:
- Turns on the same thread share history
- Different threads are isolated
- The caller identity reaches context-aware tools without the model seeing it

Prerequisites:
- Set GEMINI_API_KEY environment variable
"""

from relay_agents import Session
from relay_agents.scenario import build_executor


def main():
    executor = build_executor("google-gla:gemini-2.5-flash")

    # Two callers, two threads
    home = Session.create(executor, "home", user_id="1")
    visitor = Session.create(executor, "visitor", user_id="2")

    result = home.invoke_sync("What's the weather where I am?")
    print(f"Home: {result.get('weather_summary')}")

    result = visitor.invoke_sync("What's the weather where I am?")
    print(f"Visitor: {result.get('weather_summary')}")

    # Follow-up relies on the thread's history
    result = home.invoke_sync("Is that good weather for a sport? Reply with sport only.")
    print(f"Home sport: {result.get('sport')}")

    print(f"\nHome thread: {len(home.history())} messages, {home.usage.total_tokens} tokens")
    print(f"Visitor thread: {len(visitor.history())} messages")


if __name__ == "__main__":
    main()
