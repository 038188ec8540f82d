"""
In-process notification dispatch for nodegraph.
"""

from nodegraph.events.event_bus import EventBus, Subscription

__all__ = [
    "EventBus",
    "Subscription",
]
