"""
Fact domain service facade.

Single import point for the operations exposed over REST and MCP.
"""

from core.services.fact_topics import create_topic, update_topic, list_topics
from core.services.fact_records import create_fact, update_fact, list_facts
from core.services.fact_requests import create_request
from core.services.user_fact_state import update_user_fact_state, list_user_fact_state

__all__ = [
    "create_topic",
    "update_topic",
    "list_topics",
    "create_fact",
    "update_fact",
    "list_facts",
    "create_request",
    "update_user_fact_state",
    "list_user_fact_state",
]
