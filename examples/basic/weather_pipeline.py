#!/usr/bin/env python3
"""Weather pipeline example.

This example demonstrates:
- Running the three-step weather scenario on one thread
- Observing each step with pipeline hooks
- Reading token usage for the thread

Prerequisites:
- Set GEMINI_API_KEY, or point RELAY_MODEL_BACKEND__BASE_URL at an
  OpenAI-compatible server (e.g. Ollama at http://localhost:11434/v1)
"""

import asyncio

from relay_agents import RelaySettings, setup_logging
from relay_agents.pipeline import PipelineHooks
from relay_agents.scenario import run_scenario


async def main():
    settings = RelaySettings()
    setup_logging(settings.logging)

    def on_step_start(step, prompt):
        print(f"[{step.name}] > {prompt}")

    def on_step_complete(step, turn):
        tools = ", ".join(t.tool_name for t in turn.tool_calls) or "none"
        print(f"[{step.name}] < {turn.get(step.output_field)!r} (tools: {tools})")

    def on_pipeline_error(step, error):
        print(f"[{step.name}] failed: {error}")

    hooks = PipelineHooks(
        on_step_start=on_step_start,
        on_step_complete=on_step_complete,
        on_pipeline_error=on_pipeline_error,
    )

    summary = await run_scenario(settings=settings, hooks=hooks)

    print("\n--- Summary ---")
    print(summary)


if __name__ == "__main__":
    asyncio.run(main())
