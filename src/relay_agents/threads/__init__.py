"""Conversation threads and their persisted message history."""

from relay_agents.threads.serialization import dicts_to_model_messages, model_messages_to_dicts
from relay_agents.threads.store import ConversationThread, InMemoryThreadStore, ThreadStore

__all__ = [
    "ConversationThread",
    "InMemoryThreadStore",
    "ThreadStore",
    "dicts_to_model_messages",
    "model_messages_to_dicts",
]
