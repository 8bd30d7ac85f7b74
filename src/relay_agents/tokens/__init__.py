"""Token usage tracking.

Built into the turn executor:
    >>> result = await executor.invoke("Hello!", thread, ctx)
    >>> print(executor.get_usage().total_tokens)
"""

from relay_agents.tokens.tracker import TokenUsage, UsageRecord, UsageTracker, usage_to_record

__all__ = ["TokenUsage", "UsageRecord", "UsageTracker", "usage_to_record"]
